"""Catalog module — Static unit, item, upgrade and fortification tables."""

from war_engine.catalog.catalog_data import (
    CatalogError,
    FortificationNotFound,
    UnitData,
    ItemData,
    BattleUpgradeData,
    FortificationData,
    get_unit_data,
    get_item_data,
    get_battle_upgrade_data,
    get_fortification,
    find_fortification,
    get_race_class_bonus,
    get_available_unit_types,
    get_available_items,
    ALL_UNIT_DATA,
    ALL_ITEM_DATA,
    ALL_BATTLE_UPGRADE_DATA,
    ALL_FORTIFICATION_DATA,
)

__all__ = [
    "CatalogError",
    "FortificationNotFound",
    "UnitData",
    "ItemData",
    "BattleUpgradeData",
    "FortificationData",
    "get_unit_data",
    "get_item_data",
    "get_battle_upgrade_data",
    "get_fortification",
    "find_fortification",
    "get_race_class_bonus",
    "get_available_unit_types",
    "get_available_items",
    "ALL_UNIT_DATA",
    "ALL_ITEM_DATA",
    "ALL_BATTLE_UPGRADE_DATA",
    "ALL_FORTIFICATION_DATA",
]
