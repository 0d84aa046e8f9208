"""
Catalog data module — Static balance records built from rules_consts.

Provides unit, item, battle-upgrade and fortification records plus
lookup helpers. Catalogs are read-only: nothing in the engine mutates
them.

Lookup policy:
  - Unit, item and battle-upgrade lookups return None for an unknown
    entry; strength queries treat that as a zero contribution.
  - Fortification lookups raise FortificationNotFound, since a battle
    against an unknown fortification level is a configuration error.
"""

from war_engine.rules_consts import (
    UNIT_CATALOG, ITEM_CATALOG, BATTLE_UPGRADE_CATALOG,
    FORTIFICATION_CATALOG,
    RACE_CLASS_BONUSES,
)


class CatalogError(Exception):
    """Raised when a catalog reference cannot be resolved."""
    pass


class FortificationNotFound(CatalogError):
    """Raised when a player's fortification level has no catalog entry."""

    def __init__(self, level):
        super().__init__(f"Unknown fortification level: {level}")
        self.level = level


# ============================================================================
# RECORD TYPES
# ============================================================================

class UnitData:
    """Immutable data about one unit type at one level."""
    __slots__ = ("type", "level", "name", "bonus", "killing_strength",
                 "defense_strength", "min_fort_level", "cost")

    def __init__(self, type, level, name, bonus, killing_strength,
                 defense_strength, min_fort_level, cost):
        self.type = type
        self.level = level
        self.name = name
        self.bonus = bonus
        self.killing_strength = killing_strength
        self.defense_strength = defense_strength
        self.min_fort_level = min_fort_level
        self.cost = cost


class ItemData:
    """Immutable data about one item type at one level for one usage."""
    __slots__ = ("usage", "type", "level", "name", "bonus",
                 "killing_strength", "defense_strength", "armory_level",
                 "cost")

    def __init__(self, usage, type, level, name, bonus, killing_strength,
                 defense_strength, armory_level, cost):
        self.usage = usage
        self.type = type
        self.level = level
        self.name = name
        self.bonus = bonus
        self.killing_strength = killing_strength
        self.defense_strength = defense_strength
        self.armory_level = armory_level
        self.cost = cost


class BattleUpgradeData:
    """Immutable data about one squad-wide battle upgrade."""
    __slots__ = ("type", "level", "name", "bonus", "killing_strength",
                 "defense_strength", "units_covered", "min_unit_level",
                 "required_structure_level", "cost")

    def __init__(self, type, level, name, bonus, killing_strength,
                 defense_strength, units_covered, min_unit_level,
                 required_structure_level, cost):
        self.type = type
        self.level = level
        self.name = name
        self.bonus = bonus
        self.killing_strength = killing_strength
        self.defense_strength = defense_strength
        self.units_covered = units_covered
        self.min_unit_level = min_unit_level
        self.required_structure_level = required_structure_level
        self.cost = cost


class FortificationData:
    """Immutable data about one fortification level."""
    __slots__ = ("level", "name", "hitpoints", "defense_bonus_percent",
                 "gold_per_turn", "cost")

    def __init__(self, level, name, hitpoints, defense_bonus_percent,
                 gold_per_turn, cost):
        self.level = level
        self.name = name
        self.hitpoints = hitpoints
        self.defense_bonus_percent = defense_bonus_percent
        self.gold_per_turn = gold_per_turn
        self.cost = cost


# Build the master lookup dictionaries
ALL_UNIT_DATA = {}
for _row in UNIT_CATALOG:
    _unit = UnitData(*_row)
    ALL_UNIT_DATA[(_unit.type, _unit.level)] = _unit

ALL_ITEM_DATA = {}
for _row in ITEM_CATALOG:
    _item = ItemData(*_row)
    ALL_ITEM_DATA[(_item.usage, _item.type, _item.level)] = _item

ALL_BATTLE_UPGRADE_DATA = {}
for _row in BATTLE_UPGRADE_CATALOG:
    _upgrade = BattleUpgradeData(*_row)
    ALL_BATTLE_UPGRADE_DATA[(_upgrade.type, _upgrade.level)] = _upgrade

ALL_FORTIFICATION_DATA = {}
for _row in FORTIFICATION_CATALOG:
    _fort = FortificationData(*_row)
    ALL_FORTIFICATION_DATA[_fort.level] = _fort


# ============================================================================
# QUERY HELPERS
# ============================================================================

def get_unit_data(unit_type, level):
    """Get UnitData for a unit type and level, or None if not catalogued."""
    return ALL_UNIT_DATA.get((unit_type, level))


def get_item_data(usage, item_type, level):
    """Get ItemData for a usage/type/level, or None if not catalogued."""
    return ALL_ITEM_DATA.get((usage, item_type, level))


def get_battle_upgrade_data(upgrade_type, level):
    """Get BattleUpgradeData for a type/level, or None if not catalogued."""
    return ALL_BATTLE_UPGRADE_DATA.get((upgrade_type, level))


def get_fortification(level):
    """Get FortificationData for a fortification level.

    Args:
        level: Fortification level (1-based).

    Returns:
        FortificationData object.

    Raises:
        FortificationNotFound: If the level has no catalog entry.
    """
    fort = ALL_FORTIFICATION_DATA.get(level)
    if fort is None:
        raise FortificationNotFound(level)
    return fort


def find_fortification(level):
    """Get FortificationData for a level, or None if not catalogued."""
    return ALL_FORTIFICATION_DATA.get(level)


def get_race_class_bonus(race, player_class, bonus_type):
    """Sum the flat race and class bonus percentages for a bonus type.

    Args:
        race: Race label.
        player_class: Class label.
        bonus_type: Bonus type label (OFFENSE, DEFENSE, INTEL, ...).

    Returns:
        Integer percentage.
    """
    total = 0
    for owner, kind, amount in RACE_CLASS_BONUSES:
        if kind == bonus_type and owner in (race, player_class):
            total += amount
    return total


def get_available_unit_types(fort_level):
    """List UnitData that can be trained at a fortification level."""
    return [
        unit for unit in ALL_UNIT_DATA.values()
        if unit.min_fort_level <= fort_level
    ]


def get_available_items(usage, armory_level):
    """List ItemData of a usage that can be bought at an armory level."""
    return [
        item for item in ALL_ITEM_DATA.values()
        if item.usage == usage and item.armory_level <= armory_level
    ]
