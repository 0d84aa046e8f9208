"""
Equipment allocation — Which unit stacks receive which items and upgrades.

Each pass builds its own coverage ledger and returns an immutable tuple
of allocations; nothing is written back to the player. Callers price the
allocations (bonus, killing or defense strength) separately, so each pass
can be tested on its own.

Item pass, per equipment type independently:
  Items of the type are walked highest level first. Each item level fills
  unit stacks highest level first, up to the units not yet equipped with
  that type. A unit holds at most one item per type, but types stack.

Battle-upgrade pass, one ledger for all upgrade levels:
  Upgrades are walked highest level first. Each covers up to
  quantity * units_covered eligible units (unit level >= min_unit_level)
  that no higher upgrade already covers. Stock is consumed as
  ceil(covered / units_covered).
"""

from collections import namedtuple

from war_engine.rules_consts import ITEM_TYPES
from war_engine.catalog.catalog_data import (
    get_item_data, get_battle_upgrade_data,
)


ItemAllocation = namedtuple(
    "ItemAllocation",
    ["unit_type", "unit_level", "item", "quantity"],
)

UpgradeAllocation = namedtuple(
    "UpgradeAllocation",
    ["unit_type", "unit_level", "upgrade", "units", "stock_used"],
)


def _by_level_desc(entries):
    return sorted(entries, key=lambda e: e["level"], reverse=True)


def allocate_items(unit_stacks, items, usage):
    """Assign owned items of one usage to unit stacks of that usage.

    Args:
        unit_stacks: List of {"type", "level", "quantity"} already capped
            to the units taking part.
        items: The player's item entries (all usages).
        usage: Stat category whose units and items are matched.

    Returns:
        Tuple of ItemAllocation. Items missing from the catalog are
        skipped.
    """
    stacks = _by_level_desc(
        s for s in unit_stacks if s["type"] == usage and s["quantity"] > 0
    )
    if not stacks:
        return ()

    allocations = []
    for item_type in ITEM_TYPES:
        equipped = {}
        owned = [
            i for i in items
            if i["type"] == item_type and i["usage"] == usage
            and i["quantity"] > 0
        ]
        for item in _by_level_desc(owned):
            data = get_item_data(usage, item_type, item["level"])
            if data is None:
                continue
            stock = item["quantity"]
            for stack in stacks:
                if stock <= 0:
                    break
                key = (stack["type"], stack["level"])
                free = stack["quantity"] - equipped.get(key, 0)
                used = min(stock, free)
                if used <= 0:
                    continue
                equipped[key] = equipped.get(key, 0) + used
                stock -= used
                allocations.append(
                    ItemAllocation(stack["type"], stack["level"], data, used)
                )
    return tuple(allocations)


def allocate_battle_upgrades(unit_stacks, upgrades, upgrade_type):
    """Assign squad-wide upgrades of one type to eligible unit stacks.

    Args:
        unit_stacks: List of {"type", "level", "quantity"} already capped
            to the units taking part.
        upgrades: The player's usable battle upgrade entries.
        upgrade_type: Stat category of the upgrades and units.

    Returns:
        Tuple of UpgradeAllocation.
    """
    stacks = _by_level_desc(
        s for s in unit_stacks
        if s["type"] == upgrade_type and s["quantity"] > 0
    )
    if not stacks:
        return ()

    covered = {}
    allocations = []
    owned = [
        u for u in upgrades
        if u["type"] == upgrade_type and u["quantity"] > 0
    ]
    for upgrade in _by_level_desc(owned):
        data = get_battle_upgrade_data(upgrade_type, upgrade["level"])
        if data is None or data.units_covered <= 0:
            continue
        stock = upgrade["quantity"]
        for stack in stacks:
            if stock <= 0:
                break
            if stack["level"] < data.min_unit_level:
                continue
            key = (stack["type"], stack["level"])
            free = stack["quantity"] - covered.get(key, 0)
            units = min(free, stock * data.units_covered)
            if units <= 0:
                continue
            stock_used = -(-units // data.units_covered)
            covered[key] = covered.get(key, 0) + units
            stock -= stock_used
            allocations.append(
                UpgradeAllocation(stack["type"], stack["level"], data,
                                  units, stock_used)
            )
    return tuple(allocations)
