"""
Progression module — Levels, attack range and fort health.

Player level is derived from experience via LEVEL_XP_TABLE; it is never
stored on the player dict.
"""

from war_engine.rules_consts import LEVEL_XP_TABLE, ATTACK_LEVEL_RANGE
from war_engine.catalog.catalog_data import find_fortification


def level_from_xp(xp):
    """Highest level whose XP requirement is met.

    Args:
        xp: Total experience points.

    Returns:
        Integer level, at least 1 and at most the table maximum.
    """
    level = 1
    for table_level, required in LEVEL_XP_TABLE:
        if xp < required:
            break
        level = table_level
    return level


def xp_required_for_level(level):
    """Total XP needed to reach a level (0 for unknown levels below 1)."""
    for table_level, required in LEVEL_XP_TABLE:
        if table_level == level:
            return required
    if level < 1:
        return 0
    return int(level ** 2.5 * 1000)


def get_level(player):
    """Current level of a player."""
    return level_from_xp(player.get("experience", 0))


def xp_to_next_level(player):
    """XP still needed for the next level (0 at the maximum level)."""
    level = get_level(player)
    if level >= LEVEL_XP_TABLE[-1][0]:
        return 0
    return xp_required_for_level(level + 1) - player.get("experience", 0)


def can_attack(player, target_level):
    """Check the target is within ATTACK_LEVEL_RANGE of the player's level."""
    level = get_level(player)
    return target_level - ATTACK_LEVEL_RANGE <= level <= \
        target_level + ATTACK_LEVEL_RANGE


def fort_health(player):
    """Current and maximum fort hitpoints.

    Returns:
        Dict with current, max and percentage (floored). All zero when
        the fortification level is unknown.
    """
    fort = find_fortification(player.get("fort_level"))
    if fort is None or fort.hitpoints == 0:
        return {"current": 0, "max": 0, "percentage": 0}
    current = player.get("fort_hitpoints", 0)
    return {
        "current": current,
        "max": fort.hitpoints,
        "percentage": current * 100 // fort.hitpoints,
    }
