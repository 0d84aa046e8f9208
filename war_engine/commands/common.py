"""Common definitions shared across command modules.

Provides the base MissionError exception and the attack-turn helpers
used by the attack and spy modules.
"""

from war_engine.state.progression import get_level, can_attack


class MissionError(Exception):
    """Raised when a mission is ordered against the game rules."""
    pass


def check_attack_turns(player, turns):
    """Check the player has enough attack turns banked.

    Returns:
        (True, None) if valid, (False, reason) if not.
    """
    available = player.get("attack_turns", 0)
    if turns > available:
        return (False,
                f"Needs {turns} attack turns, only {available} available")
    return (True, None)


def check_level_range(attacker, defender):
    """Check the defender is within the attacker's level range.

    Returns:
        (True, None) if valid, (False, reason) if not.
    """
    if not can_attack(attacker, get_level(defender)):
        return (False,
                f"Level {get_level(defender)} target is out of range for "
                f"a level {get_level(attacker)} attacker")
    return (True, None)


def spend_attack_turns(player, turns):
    """Deduct attack turns, never below zero.

    Args:
        player: Player dict. Modified in place.
        turns: Turns to spend.
    """
    player["attack_turns"] = max(0, player.get("attack_turns", 0) - turns)
