"""Spy command — Validate and dispatch intel, infiltration and
assassination missions.

Spy missions cost no attack turns. Requirements:
  - A known mission type (and a known target for assassination).
  - The attacker owns the spies of the mission's tier.
  - The attacker's SPY stat is above zero.
  - Attacker and defender are different players.
"""

import logging

from war_engine.rules_consts import (
    SPY,
    MISSION_TYPES, MISSION_INTEL, MISSION_INFILTRATE, MISSION_ASSASSINATE,
    MISSION_SPY_LEVEL, ASSASSINATION_TARGETS,
)
from war_engine.army.strength import get_stat
from war_engine.state.army_units import get_unit_quantity
from war_engine.espionage.missions import (
    simulate_intel, simulate_infiltration, simulate_assassination,
)
from war_engine.commands.common import MissionError


logger = logging.getLogger(__name__)


# ============================================================================
# VALIDATION
# ============================================================================

def validate_spy_mission(attacker, defender, mission, spies_sent,
                         target=None):
    """Check whether a spy mission may be launched.

    Args:
        attacker: Attacker player dict.
        defender: Defender player dict.
        mission: MISSION_INTEL, MISSION_INFILTRATE or MISSION_ASSASSINATE.
        spies_sent: Spies requested.
        target: Assassination target (ASSASSINATE only).

    Returns:
        Tuple of (valid: bool, reason: str or None).
    """
    if mission not in MISSION_TYPES:
        return False, f"Unknown spy mission: {mission}"

    if attacker.get("id") == defender.get("id"):
        return False, "A player cannot spy on themselves"

    if mission == MISSION_ASSASSINATE and target not in ASSASSINATION_TARGETS:
        return False, f"Unknown assassination target: {target}"

    if spies_sent < 1:
        return False, "At least one spy must be sent"

    if get_stat(attacker, SPY) <= 0:
        return False, "Insufficient spy offense"

    tier = MISSION_SPY_LEVEL[mission]
    owned = get_unit_quantity(attacker, SPY, tier)
    if owned < spies_sent:
        if mission == MISSION_ASSASSINATE:
            return False, (
                f"Insufficient assassins: {spies_sent} requested, "
                f"{owned} available"
            )
        return False, (
            f"Insufficient level {tier} spies: {spies_sent} requested, "
            f"{owned} available"
        )

    return True, None


# ============================================================================
# EXECUTION
# ============================================================================

def execute_spy_mission(attacker, defender, mission, spies_sent,
                        target=None, rng=None):
    """Launch a spy mission.

    Args:
        attacker: Attacker player dict. Modified in place.
        defender: Defender player dict. Modified in place.
        mission: Mission type label.
        spies_sent: Spies requested.
        target: Assassination target (ASSASSINATE only).
        rng: random.Random instance.

    Returns:
        Mission result dict.

    Raises:
        MissionError: If validate_spy_mission rejects the mission.
    """
    valid, reason = validate_spy_mission(attacker, defender, mission,
                                         spies_sent, target)
    if not valid:
        logger.warning("%s %s -> %s rejected: %s", mission,
                       attacker.get("id"), defender.get("id"), reason)
        raise MissionError(reason)

    if mission == MISSION_INTEL:
        return simulate_intel(attacker, defender, spies_sent, rng=rng)
    if mission == MISSION_INFILTRATE:
        return simulate_infiltration(attacker, defender, spies_sent, rng=rng)
    return simulate_assassination(attacker, defender, spies_sent, target,
                                  rng=rng)
