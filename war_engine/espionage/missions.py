"""
Espionage missions — Intel, infiltration and assassination.

Each mission sends spies of one tier (MISSION_SPY_LEVEL):
  INTEL        level-1 spies, get_spy_strength
  INFILTRATE   level-2 spies, calculate_clandestine_strength
  ASSASSINATE  level-3 spies, calculate_clandestine_strength

Up to SENTRY_RESPONSE_RATIO sentries answer each spy sent, highest level
first. The mission succeeds only when the spies' killing strength is
strictly greater than the responding sentries' defense strength. A request
for fewer than one spy is a failed mission with no losses.

On success the attacker loses a few spies to the sentries' killing
strength (compute_spy_casualties) and collects the payoff. On failure
intel loses every spy sent; infiltration and assassination lose between
FAIL_LOSS_FLOOR and all of them depending on how badly they were
outmatched.

Intel reveals ceil(100 * (KS - DS) / KS) percent of the defender,
capped by INTEL_PERCENT_PER_SPY per surviving spy.

Spy losses, fort damage and assassinated units are applied to the
player dicts in place.
"""

import logging

from war_engine.rules_consts import (
    SPY, SENTRY,
    MISSION_INTEL, MISSION_INFILTRATE, MISSION_ASSASSINATE,
    MISSION_SPY_LEVEL, SENTRY_RESPONSE_RATIO,
    ASSASSINATION_TARGETS, ASSASSINATION_TARGET_UNITS,
    TARGET_CITIZEN_WORKERS,
    INTEL_PERCENT_PER_SPY, MAX_INTEL_PERCENT,
    INFILTRATION_DAMAGE_RANGE, INFILTRATION_RATIO_CAP,
)
from war_engine.dice import ensure_rng, mt_rand
from war_engine.catalog.catalog_data import get_fortification
from war_engine.state.army_units import (
    get_unit_quantity, adjust_unit,
    get_casualty_pool, distribute_casualties,
)
from war_engine.army.strength import (
    get_spy_strength, calculate_clandestine_strength,
    get_combat_strength, get_civilian_strength,
)
from war_engine.espionage.casualties import (
    compute_spy_amp_factor, compute_spy_casualties, compute_failure_losses,
)
from war_engine.espionage.intel_report import build_intel_report


logger = logging.getLogger(__name__)


# ============================================================================
# SHARED ENGAGEMENT
# ============================================================================

def _engage(attacker, defender, mission, spies_sent):
    """Resolve the spy/sentry clash common to every mission.

    Returns:
        Dict with tier, sent, attacker and defender strength dicts and
        success.
    """
    tier = MISSION_SPY_LEVEL[mission]
    owned = get_unit_quantity(attacker, SPY, tier)
    sent = max(0, min(int(spies_sent), owned))

    if mission == MISSION_INTEL:
        attacker_strength = get_spy_strength(attacker, sent)
    else:
        attacker_strength = calculate_clandestine_strength(
            attacker, SPY, sent, unit_level=tier
        )
    defender_strength = calculate_clandestine_strength(
        defender, SENTRY, sent * SENTRY_RESPONSE_RATIO
    )

    success = (sent > 0 and attacker_strength["killing_strength"]
               > defender_strength["defense_strength"])
    logger.debug(
        "%s: %d level-%d spies KS=%d vs sentries DS=%d -> %s",
        mission, sent, tier,
        attacker_strength["killing_strength"],
        defender_strength["defense_strength"],
        "success" if success else "failure",
    )
    return {
        "tier": tier,
        "sent": sent,
        "attacker": attacker_strength,
        "defender": defender_strength,
        "success": success,
    }


def _spies_lost(engagement, mission, rng):
    sent = engagement["sent"]
    if engagement["success"]:
        return compute_spy_casualties(
            engagement["defender"]["killing_strength"],
            engagement["attacker"]["defense_strength"],
            sent, rng,
        )
    if mission == MISSION_INTEL:
        return sent
    return compute_failure_losses(
        sent,
        engagement["attacker"]["killing_strength"],
        engagement["defender"]["defense_strength"],
    )


def _resolve(attacker, defender, mission, spies_sent, rng):
    engagement = _engage(attacker, defender, mission, spies_sent)
    lost = _spies_lost(engagement, mission, rng)
    adjust_unit(attacker, SPY, engagement["tier"], -lost)
    result = {
        "mission": mission,
        "success": engagement["success"],
        "spies_sent": engagement["sent"],
        "spies_lost": lost,
        "attacker_strength": engagement["attacker"]["killing_strength"],
        "defender_strength": engagement["defender"]["defense_strength"],
    }
    return engagement, result


def _log_outcome(attacker, defender, result):
    logger.info(
        "%s %s vs %s: %s, %d of %d spies lost",
        result["mission"], attacker.get("id"), defender.get("id"),
        "success" if result["success"] else "failure",
        result["spies_lost"], result["spies_sent"],
    )


# ============================================================================
# MISSIONS
# ============================================================================

def compute_intel_percentage(attacker_ks, defender_ds, survivors):
    """Share of the defender revealed by a successful intel mission.

    The strength margin (attacker_ks - defender_ds) / attacker_ks as a
    whole percent, rounded up, and at most INTEL_PERCENT_PER_SPY per
    surviving spy.

    Returns:
        Integer in [0, 100].
    """
    if attacker_ks <= 0 or survivors <= 0:
        return 0
    margin = max(0, attacker_ks - defender_ds)
    percent = -(-margin * MAX_INTEL_PERCENT // attacker_ks)
    return min(MAX_INTEL_PERCENT, percent,
               survivors * INTEL_PERCENT_PER_SPY)


def simulate_intel(attacker, defender, spies_sent, rng=None):
    """Send level-1 spies to gather intelligence.

    Args:
        attacker: Attacker player dict. Spy stacks modified in place.
        defender: Defender player dict. Not modified.
        spies_sent: Spies requested; clamped to the level-1 spies owned.
        rng: random.Random instance.

    Returns:
        Dict with mission, success, spies_sent, spies_lost,
        attacker_strength, defender_strength, intel_percentage and
        intelligence_gathered (None on failure).
    """
    rng = ensure_rng(rng)
    engagement, result = _resolve(attacker, defender, MISSION_INTEL,
                                  spies_sent, rng)

    report = None
    percentage = 0
    if engagement["success"]:
        survivors = result["spies_sent"] - result["spies_lost"]
        percentage = compute_intel_percentage(
            result["attacker_strength"], result["defender_strength"],
            survivors,
        )
        report = build_intel_report(defender, percentage)

    result["intel_percentage"] = percentage
    result["intelligence_gathered"] = report
    _log_outcome(attacker, defender, result)
    return result


def compute_infiltration_damage(attacker_ks, defender_ds, spies_sent,
                                fort_hitpoints, rng):
    """Fort damage dealt by a successful infiltration.

    Returns:
        Integer in [0, fort_hitpoints]; at least 1 while the fort stands.
    """
    if fort_hitpoints <= 0 or spies_sent <= 0:
        return 0
    ratio = min(attacker_ks / max(defender_ds, 1), INFILTRATION_RATIO_CAP)
    low, high = INFILTRATION_DAMAGE_RANGE
    damage = round(
        mt_rand(rng, low, high) * compute_spy_amp_factor(spies_sent)
        * ratio * spies_sent
    )
    return min(max(1, damage), fort_hitpoints)


def simulate_infiltration(attacker, defender, spies_sent, rng=None):
    """Send level-2 spies to damage the defender's fortification.

    Returns:
        Dict with the common mission fields plus fort_damage and
        fort_hitpoints (after the mission).

    Raises:
        FortificationNotFound: If the defender's fort level is unknown.
            Raised before anything is modified.
    """
    get_fortification(defender["fort_level"])
    rng = ensure_rng(rng)
    engagement, result = _resolve(attacker, defender, MISSION_INFILTRATE,
                                  spies_sent, rng)

    damage = 0
    if engagement["success"]:
        damage = compute_infiltration_damage(
            result["attacker_strength"], result["defender_strength"],
            result["spies_sent"], defender["fort_hitpoints"], rng,
        )
        defender["fort_hitpoints"] -= damage

    result["fort_damage"] = damage
    result["fort_hitpoints"] = defender["fort_hitpoints"]
    _log_outcome(attacker, defender, result)
    return result


def get_target_strength(defender, target, spies_sent):
    """Strength of the target units engaged by the assassins."""
    if target == TARGET_CITIZEN_WORKERS:
        return get_civilian_strength(defender, spies_sent)
    return get_combat_strength(defender, target, spies_sent=spies_sent)


def simulate_assassination(attacker, defender, spies_sent, target,
                           rng=None):
    """Send level-3 spies to kill defender units.

    Args:
        attacker: Attacker player dict. Spy stacks modified in place.
        defender: Defender player dict. Target stacks modified in place.
        spies_sent: Assassins requested; clamped to level-3 spies owned.
        target: OFFENSE, DEFENSE or CITIZEN_WORKERS.
        rng: random.Random instance.

    Returns:
        Dict with the common mission fields plus target, units_killed
        and killed_units (list of {"type", "level", "quantity"}).

    Raises:
        ValueError: If target is unknown.
    """
    if target not in ASSASSINATION_TARGETS:
        raise ValueError(f"Unknown assassination target: {target}")
    rng = ensure_rng(rng)
    engagement, result = _resolve(attacker, defender, MISSION_ASSASSINATE,
                                  spies_sent, rng)

    killed = []
    if engagement["success"]:
        pool = get_casualty_pool(defender,
                                 *ASSASSINATION_TARGET_UNITS[target])
        available = sum(stack["quantity"] for stack in pool)
        if available > 0:
            target_strength = get_target_strength(
                defender, target, result["spies_sent"]
            )
            kills = compute_spy_casualties(
                result["attacker_strength"],
                target_strength["defense_strength"],
                result["spies_sent"], rng,
            )
            kills = min(max(1, kills), available)
            killed = distribute_casualties(pool, kills)

    result["target"] = target
    result["killed_units"] = killed
    result["units_killed"] = sum(k["quantity"] for k in killed)
    _log_outcome(attacker, defender, result)
    return result
