"""
Bonus multiplier — The percentage applied on top of a raw army total.

  OFFENSE: race/class OFFENSE + OFFENSE proficiency + OFFENSE structure
  DEFENSE: race/class DEFENSE + DEFENSE proficiency + fortification bonus
  SPY:     race/class INTEL + INTEL proficiency + SPY structure
  SENTRY:  race/class INTEL + INTEL proficiency + SENTRY structure

Unknown fortification or structure levels contribute 0.
"""

from war_engine.rules_consts import (
    OFFENSE, DEFENSE, SPY, SENTRY,
    BONUS_OFFENSE, BONUS_DEFENSE, BONUS_INTEL,
    STRUCTURE_OFFENSE, STRUCTURE_SPY, STRUCTURE_SENTRY,
    STRUCTURE_BONUS_TABLES,
)
from war_engine.catalog.catalog_data import (
    find_fortification, get_race_class_bonus,
)


def race_class_bonus(player, bonus_type):
    """Flat race + class percentage for a bonus type."""
    return get_race_class_bonus(player["race"], player["class"], bonus_type)


def proficiency_bonus(player, bonus_type):
    """Proficiency points allocated to a bonus type."""
    return player.get("bonus_points", {}).get(bonus_type, 0)


def get_structure_level(player, structure):
    """Level of a structure upgrade (0 if never built)."""
    return player.get("structure_upgrades", {}).get(structure, 0)


def structure_bonus(player, structure):
    """Percentage granted by a structure at the player's level."""
    table = STRUCTURE_BONUS_TABLES.get(structure, ())
    level = get_structure_level(player, structure)
    if 0 <= level < len(table):
        return table[level]
    return 0


def fortification_bonus(player):
    """Defense percentage of the player's current fortification."""
    fort = find_fortification(player.get("fort_level"))
    return fort.defense_bonus_percent if fort is not None else 0


def intel_bonus(player):
    """Race/class INTEL plus INTEL proficiency."""
    return (race_class_bonus(player, BONUS_INTEL)
            + proficiency_bonus(player, BONUS_INTEL))


def get_bonus_percent(player, category):
    """Total percentage bonus for a stat category.

    Args:
        player: Player dict.
        category: OFFENSE, DEFENSE, SPY or SENTRY.

    Returns:
        Integer percentage.

    Raises:
        ValueError: If category is not a stat category.
    """
    if category == OFFENSE:
        return (race_class_bonus(player, BONUS_OFFENSE)
                + proficiency_bonus(player, BONUS_OFFENSE)
                + structure_bonus(player, STRUCTURE_OFFENSE))
    if category == DEFENSE:
        return (race_class_bonus(player, BONUS_DEFENSE)
                + proficiency_bonus(player, BONUS_DEFENSE)
                + fortification_bonus(player))
    if category == SPY:
        return intel_bonus(player) + structure_bonus(player, STRUCTURE_SPY)
    if category == SENTRY:
        return intel_bonus(player) + structure_bonus(player, STRUCTURE_SENTRY)
    raise ValueError(f"Unknown stat category: {category}")


def apply_bonus(total, percent):
    """ceil(total * (1 + percent / 100)) in exact integer arithmetic."""
    return -(-total * (100 + percent) // 100)
