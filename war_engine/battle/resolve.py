"""
Battle resolution — Multi-turn attack between two players.

simulate_battle runs up to MAX_ATTACK_TURNS turns. Each turn:
  1. Attacker OFFENSE and defender DEFENSE strength (militia joins an
     under-garrisoned defender).
  2. Target population and amp factor.
  3. Casualties for both sides and fort damage.
  4. Casualties removed from the unit stacks, lowest level first.
  5. Per-turn experience; the last turn decides WIN/LOSS.
The battle ends early once the attacker has no OFFENSE units left.

Unit stacks and fort hitpoints are changed in place. Gold and experience
are returned in the result and applied by apply_battle_rewards.
"""

import logging

from war_engine.rules_consts import (
    OFFENSE, DEFENSE, CITIZEN, WORKER,
    MIN_ATTACK_TURNS, MAX_ATTACK_TURNS, MILITIA_THRESHOLD,
    RESULT_WIN, RESULT_LOSS,
)
from war_engine.dice import ensure_rng
from war_engine.catalog.catalog_data import get_fortification
from war_engine.state.army_units import (
    count_units, get_defense_proportion,
    get_casualty_pool, distribute_casualties,
)
from war_engine.army.strength import get_combat_strength
from war_engine.battle.casualties import (
    compute_amp_factor, compute_casualties, compute_fort_damage,
    get_target_population,
)
from war_engine.battle.loot import calculate_loot
from war_engine.battle.experience import (
    compute_experience, compute_global_experience_bonus,
)


logger = logging.getLogger(__name__)


def clamp_turns(turns):
    """Clamp requested turns to [MIN_ATTACK_TURNS, MAX_ATTACK_TURNS]."""
    return max(MIN_ATTACK_TURNS, min(MAX_ATTACK_TURNS, int(turns)))


def _merge_losses(ledger, killed):
    for entry in killed:
        key = (entry["type"], entry["level"])
        ledger[key] = ledger.get(key, 0) + entry["quantity"]


def _losses_summary(ledger):
    units = [
        {"type": unit_type, "level": level, "quantity": quantity}
        for (unit_type, level), quantity in sorted(ledger.items())
    ]
    return {"total": sum(ledger.values()), "units": units}


def _defender_pool(defender, under_garrisoned):
    if defender["fort_hitpoints"] <= 0 and under_garrisoned:
        return get_casualty_pool(defender, DEFENSE, CITIZEN, WORKER)
    return get_casualty_pool(defender, DEFENSE)


def simulate_battle(attacker, defender, turns, rng=None):
    """Resolve an attack.

    Args:
        attacker: Attacker player dict. Unit stacks modified in place.
        defender: Defender player dict. Unit stacks and fort_hitpoints
            modified in place.
        turns: Attack turns to spend; clamped to [1, 10].
        rng: random.Random instance. Defaults to an unseeded one.

    Returns:
        BattleResult dict: result, turns_taken, fort_hitpoints,
        fort_damage, losses, turn_log, totals, pillaged_gold, experience.

    Raises:
        FortificationNotFound: If the defender's fort level has no
            catalog entry. Raised before anything is modified.
    """
    get_fortification(defender["fort_level"])
    rng = ensure_rng(rng)
    turns = clamp_turns(turns)

    starting_hitpoints = defender["fort_hitpoints"]
    fort_down_at_start = starting_hitpoints <= 0

    attacker_losses = {}
    defender_losses = {}
    turn_log = []
    totals = {
        "attacker_killing_strength": 0,
        "attacker_defense_strength": 0,
        "defender_killing_strength": 0,
        "defender_defense_strength": 0,
    }
    experience = {"attacker": 0, "defender": 0}
    result = RESULT_LOSS
    turns_taken = 0

    for turn in range(1, turns + 1):
        attack_population = count_units(attacker, OFFENSE)
        if attack_population == 0:
            break
        turns_taken = turn

        proportion = get_defense_proportion(defender)
        under_garrisoned = proportion < MILITIA_THRESHOLD
        attacker_strength = get_combat_strength(attacker, OFFENSE)
        defender_strength = get_combat_strength(
            defender, DEFENSE, include_civilians=under_garrisoned
        )
        target_population = get_target_population(defender)
        amp_factor = compute_amp_factor(target_population)

        turn_xp = compute_experience(attacker, defender, rng)
        result = turn_xp["result"]
        experience["attacker"] += turn_xp["attacker"]
        experience["defender"] += turn_xp["defender"]

        attacker_casualties, defender_casualties = compute_casualties(
            attacker_strength, defender_strength,
            attack_population, target_population,
            amp_factor, proportion, defender["fort_hitpoints"], rng,
        )
        fort_damage = compute_fort_damage(
            attacker_strength["killing_strength"],
            defender_strength["defense_strength"],
            defender["fort_hitpoints"], rng,
        )
        defender["fort_hitpoints"] = max(
            0, defender["fort_hitpoints"] - fort_damage
        )

        attacker_killed = distribute_casualties(
            get_casualty_pool(attacker, OFFENSE), attacker_casualties
        )
        defender_killed = distribute_casualties(
            _defender_pool(defender, under_garrisoned), defender_casualties
        )
        _merge_losses(attacker_losses, attacker_killed)
        _merge_losses(defender_losses, defender_killed)

        for side, strength in (("attacker", attacker_strength),
                               ("defender", defender_strength)):
            for field, value in strength.items():
                totals[f"{side}_{field}"] += value

        turn_log.append({
            "turn": turn,
            "attacker_strength": attacker_strength,
            "defender_strength": defender_strength,
            "amp_factor": amp_factor,
            "attacker_casualties": sum(k["quantity"] for k in attacker_killed),
            "defender_casualties": sum(k["quantity"] for k in defender_killed),
            "fort_damage": fort_damage,
            "fort_hitpoints": defender["fort_hitpoints"],
        })
        logger.debug(
            "Turn %d: attacker KS=%d DS=%d, defender KS=%d DS=%d, "
            "casualties %d/%d, fort damage %d",
            turn,
            attacker_strength["killing_strength"],
            attacker_strength["defense_strength"],
            defender_strength["killing_strength"],
            defender_strength["defense_strength"],
            turn_log[-1]["attacker_casualties"],
            turn_log[-1]["defender_casualties"],
            fort_damage,
        )

    fort_destroyed = starting_hitpoints > 0 and defender["fort_hitpoints"] == 0

    pillaged_gold = 0
    if result == RESULT_WIN:
        pillaged_gold = calculate_loot(attacker, defender, turns_taken, rng,
                                       fort_down=fort_down_at_start)

    attacker_bonus, defender_bonus = compute_global_experience_bonus(
        attacker, defender, result, turns_taken, fort_destroyed
    )
    experience["attacker"] += attacker_bonus
    experience["defender"] += defender_bonus

    logger.info(
        "Battle %s vs %s: %s after %d turns, loot %d",
        attacker.get("id"), defender.get("id"), result, turns_taken,
        pillaged_gold,
    )

    return {
        "result": result,
        "turns_taken": turns_taken,
        "fort_hitpoints": defender["fort_hitpoints"],
        "fort_damage": starting_hitpoints - defender["fort_hitpoints"],
        "losses": {
            "attacker": _losses_summary(attacker_losses),
            "defender": _losses_summary(defender_losses),
        },
        "turn_log": turn_log,
        "totals": totals,
        "pillaged_gold": pillaged_gold,
        "experience": experience,
    }


def apply_battle_rewards(attacker, defender, result):
    """Move pillaged gold and add experience from a BattleResult.

    Args:
        attacker: Attacker player dict. Modified in place.
        defender: Defender player dict. Modified in place.
        result: Dict returned by simulate_battle.
    """
    gold = min(result["pillaged_gold"], defender["gold"])
    defender["gold"] -= gold
    attacker["gold"] += gold
    attacker["experience"] += result["experience"]["attacker"]
    defender["experience"] += result["experience"]["defender"]
