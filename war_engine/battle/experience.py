"""
Battle experience — Per-turn XP and the post-battle global bonus.

Per turn, each side earns:

  base * (0.5 + 0.5 * min(inverse power ratio, XP_POWER_RATIO_CAP)
              + min(specialized unit ratio, XP_UNIT_RATIO_CAP))
       * U(1 - XP_VARIANCE, 1 + XP_VARIANCE)

where base is XP_PER_TURN_WIN for the side that won the scalar
OFFENSE vs DEFENSE comparison and XP_PER_TURN_LOSS otherwise.

After the battle, a global bonus

  (GLOBAL_XP_BASE + |level difference| * GLOBAL_XP_PER_LEVEL
   + GLOBAL_XP_FORT_DESTROYED if the fort fell) * turns / 10

is split GLOBAL_XP_WINNER_SHARE to the winner and the rest to the loser,
and added on top of the per-turn totals. Both awards stack; this is the
observed behaviour of the live game and is kept as-is.
"""

from war_engine.rules_consts import (
    OFFENSE, DEFENSE, RESULT_WIN, RESULT_LOSS,
    XP_PER_TURN_WIN, XP_PER_TURN_LOSS,
    XP_POWER_RATIO_CAP, XP_UNIT_RATIO_CAP, XP_VARIANCE,
    GLOBAL_XP_BASE, GLOBAL_XP_PER_LEVEL, GLOBAL_XP_FORT_DESTROYED,
    GLOBAL_XP_WINNER_SHARE, MAX_ATTACK_TURNS,
)
from war_engine.dice import mt_rand
from war_engine.army.strength import get_stat
from war_engine.state.army_units import count_units, get_population
from war_engine.state.progression import get_level


def _unit_ratio(player, unit_type):
    population = get_population(player)
    if population == 0:
        return 0.0
    return count_units(player, unit_type) / population


def _turn_award(won, inverse_ratio, unit_ratio, rng):
    base = XP_PER_TURN_WIN if won else XP_PER_TURN_LOSS
    blend = (0.5 + 0.5 * min(inverse_ratio, XP_POWER_RATIO_CAP)
             + min(unit_ratio, XP_UNIT_RATIO_CAP))
    variance = mt_rand(rng, 1 - XP_VARIANCE, 1 + XP_VARIANCE)
    return int(round(base * blend * variance))


def compute_experience(attacker, defender, rng):
    """Experience earned by both sides for one battle turn.

    Args:
        attacker: Attacker player dict.
        defender: Defender player dict.
        rng: random.Random instance.

    Returns:
        Dict with result (WIN/LOSS from the attacker's view), attacker
        and defender XP (integers >= 0).
    """
    offense = get_stat(attacker, OFFENSE)
    defense = get_stat(defender, DEFENSE)
    result = RESULT_WIN if offense > defense else RESULT_LOSS
    attacker_won = result == RESULT_WIN

    attacker_xp = _turn_award(
        attacker_won, defense / max(offense, 1),
        _unit_ratio(attacker, OFFENSE), rng,
    )
    defender_xp = _turn_award(
        not attacker_won, offense / max(defense, 1),
        _unit_ratio(defender, DEFENSE), rng,
    )
    return {
        "result": result,
        "attacker": max(0, attacker_xp),
        "defender": max(0, defender_xp),
    }


def compute_global_experience_bonus(attacker, defender, result, turns,
                                    fort_destroyed=False):
    """Post-battle XP bonus split between winner and loser.

    Args:
        attacker: Attacker player dict.
        defender: Defender player dict.
        result: RESULT_WIN or RESULT_LOSS from the attacker's view.
        turns: Turns the battle lasted.
        fort_destroyed: True if the defender's fort fell during the battle.

    Returns:
        Tuple (attacker_bonus, defender_bonus) of integers.
    """
    level_diff = abs(get_level(attacker) - get_level(defender))
    total = GLOBAL_XP_BASE + level_diff * GLOBAL_XP_PER_LEVEL
    if fort_destroyed:
        total += GLOBAL_XP_FORT_DESTROYED
    total = total * turns / MAX_ATTACK_TURNS

    winner_share = int(total * GLOBAL_XP_WINNER_SHARE)
    loser_share = int(total) - winner_share
    if result == RESULT_WIN:
        return winner_share, loser_share
    return loser_share, winner_share
