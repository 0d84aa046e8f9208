"""Attack command — Validate, resolve and apply a battle.

An attack costs one attack turn per battle turn requested (after
clamping to [MIN_ATTACK_TURNS, MAX_ATTACK_TURNS]).

Requirements:
  - The attacker has the attack turns.
  - The attacker's OFFENSE force has killing strength.
  - The defender is within ATTACK_LEVEL_RANGE levels.
  - Attacker and defender are different players.
"""

import logging

from war_engine.rules_consts import OFFENSE
from war_engine.army.strength import get_combat_strength
from war_engine.battle.resolve import (
    clamp_turns, simulate_battle, apply_battle_rewards,
)
from war_engine.commands.common import (
    MissionError, check_attack_turns, check_level_range, spend_attack_turns,
)


logger = logging.getLogger(__name__)


# ============================================================================
# VALIDATION
# ============================================================================

def validate_attack(attacker, defender, turns):
    """Check whether an attack may be launched.

    Args:
        attacker: Attacker player dict.
        defender: Defender player dict.
        turns: Attack turns requested.

    Returns:
        Tuple of (valid: bool, reason: str or None).
    """
    if attacker.get("id") == defender.get("id"):
        return False, "A player cannot attack themselves"

    valid, reason = check_attack_turns(attacker, clamp_turns(turns))
    if not valid:
        return False, reason

    strength = get_combat_strength(attacker, OFFENSE)
    if strength["killing_strength"] <= 0:
        return False, "Attacker has no offensive strength"

    return check_level_range(attacker, defender)


# ============================================================================
# EXECUTION
# ============================================================================

def execute_attack(attacker, defender, turns, rng=None):
    """Launch an attack and apply its outcome.

    Args:
        attacker: Attacker player dict. Modified in place.
        defender: Defender player dict. Modified in place.
        turns: Attack turns requested.
        rng: random.Random instance.

    Returns:
        BattleResult dict from simulate_battle.

    Raises:
        MissionError: If validate_attack rejects the attack.
        FortificationNotFound: If the defender's fort level is unknown.
    """
    valid, reason = validate_attack(attacker, defender, turns)
    if not valid:
        logger.warning("Attack %s -> %s rejected: %s",
                       attacker.get("id"), defender.get("id"), reason)
        raise MissionError(reason)

    result = simulate_battle(attacker, defender, turns, rng=rng)
    spend_attack_turns(attacker, clamp_turns(turns))
    apply_battle_rewards(attacker, defender, result)
    return result
