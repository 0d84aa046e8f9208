"""
Army strength — Scalar stats and killing/defense strength figures.

get_stat(player, category):
  1. Owned units of the category, highest level first.
  2. Unit base: catalog bonus * quantity.
  3. Item pass (allocation.allocate_items).
  4. Battle-upgrade pass (allocation.allocate_battle_upgrades), limited to
     upgrades the player's structures allow.
  5. ceil(total * (1 + bonus percent / 100)).

get_combat_strength runs the same passes but sums killing_strength and
defense_strength instead of bonus. Militia (CITIZEN, WORKER, SENTRY, SPY)
joins a defense at catalog values when include_civilians is set and
dedicated DEFENSE units are under MILITIA_THRESHOLD of the population.

Queries never raise on degenerate input: unknown catalog entries count as
zero and an empty army is worth 0. Inputs are never mutated.
"""

from war_engine.rules_consts import (
    CITIZEN, WORKER, OFFENSE, DEFENSE, SPY, SENTRY, WEAPON,
    UNIT_TYPES, STAT_CATEGORIES, MILITIA_UNIT_TYPES, MILITIA_THRESHOLD,
    STRUCTURE_OFFENSE, STRUCTURE_SPY, STRUCTURE_SENTRY,
)
from war_engine.catalog.catalog_data import (
    get_unit_data, get_item_data, get_battle_upgrade_data,
)
from war_engine.state.army_units import get_defense_proportion
from war_engine.army.bonuses import (
    get_bonus_percent, get_structure_level, apply_bonus,
)
from war_engine.army.allocation import (
    allocate_items, allocate_battle_upgrades,
)


KILLING = "killing_strength"
DEFENDING = "defense_strength"

# Structure gating each battle upgrade family
_UPGRADE_STRUCTURE = {
    OFFENSE: STRUCTURE_OFFENSE,
    SPY: STRUCTURE_SPY,
    SENTRY: STRUCTURE_SENTRY,
}


# ============================================================================
# UNIT SELECTION
# ============================================================================

def select_unit_stacks(player, unit_types, spies_sent=None, unit_level=None):
    """Copies of the stacks taking part in a strength query.

    Args:
        player: Player dict. Not modified.
        unit_types: Unit type labels to include.
        spies_sent: If given, at most this many units are taken in total,
            highest level first.
        unit_level: If given, only stacks of this level are taken.

    Returns:
        List of {"type", "level", "quantity"} dicts, highest level first.
    """
    stacks = [
        {"type": u["type"], "level": u["level"], "quantity": u["quantity"]}
        for u in player["units"]
        if u["type"] in unit_types and u["quantity"] > 0
        and (unit_level is None or u["level"] == unit_level)
    ]
    stacks.sort(key=lambda s: s["level"], reverse=True)

    if spies_sent is not None:
        remaining = max(0, int(spies_sent))
        capped = []
        for stack in stacks:
            if remaining <= 0:
                break
            taken = min(stack["quantity"], remaining)
            remaining -= taken
            capped.append(dict(stack, quantity=taken))
        stacks = capped
    return stacks


def get_upgrade_structure_level(player, category):
    """Structure level that gates a battle upgrade family.

    DEFENSE upgrades are gated by the fortification level.
    """
    if category == DEFENSE:
        return player.get("fort_level", 0)
    structure = _UPGRADE_STRUCTURE.get(category)
    if structure is None:
        return 0
    return get_structure_level(player, structure)


def usable_battle_upgrades(player, category):
    """Owned battle upgrades of a category the player's structures allow."""
    level = get_upgrade_structure_level(player, category)
    usable = []
    for upgrade in player.get("battle_upgrades", []):
        if upgrade["type"] != category:
            continue
        data = get_battle_upgrade_data(category, upgrade["level"])
        if data is None or data.required_structure_level > level:
            continue
        usable.append(upgrade)
    return usable


# ============================================================================
# TOTALS
# ============================================================================

def _sum_strength(player, category, stacks, fields):
    """Raw (pre-bonus) totals of catalog fields over units, items, upgrades."""
    totals = dict.fromkeys(fields, 0)

    for stack in stacks:
        data = get_unit_data(stack["type"], stack["level"])
        if data is None:
            continue
        for field in fields:
            totals[field] += getattr(data, field) * stack["quantity"]

    for alloc in allocate_items(stacks, player.get("items", []), category):
        for field in fields:
            totals[field] += getattr(alloc.item, field) * alloc.quantity

    upgrades = usable_battle_upgrades(player, category)
    for alloc in allocate_battle_upgrades(stacks, upgrades, category):
        for field in fields:
            totals[field] += getattr(alloc.upgrade, field) * alloc.units

    return totals


def _bonus_for(player, category):
    # CITIZEN and WORKER have no bonus sources
    if category in STAT_CATEGORIES:
        return get_bonus_percent(player, category)
    return 0


def get_stat(player, category):
    """Scalar stat used for win/loss decisions and display.

    Args:
        player: Player dict. Not modified.
        category: OFFENSE, DEFENSE, SPY or SENTRY.

    Returns:
        Non-negative integer.

    Raises:
        ValueError: If category is not a stat category.
    """
    if category not in STAT_CATEGORIES:
        raise ValueError(f"Unknown stat category: {category}")
    stacks = select_unit_stacks(player, (category,))
    total = _sum_strength(player, category, stacks, ("bonus",))["bonus"]
    return apply_bonus(total, get_bonus_percent(player, category))


def get_combat_strength(player, category, include_civilians=False,
                        spies_sent=None, unit_level=None):
    """Killing and defense strength of a player's force.

    Args:
        player: Player dict. Not modified.
        category: Unit type label whose units fight.
        include_civilians: Let militia join when dedicated defense is
            under MILITIA_THRESHOLD of the population.
        spies_sent: Cap on units counted, highest level first.
        unit_level: Restrict to one unit level.

    Returns:
        Dict with killing_strength and defense_strength (integers >= 0).

    Raises:
        ValueError: If category is not a unit type.
    """
    if category not in UNIT_TYPES:
        raise ValueError(f"Unknown unit category: {category}")

    stacks = select_unit_stacks(player, (category,), spies_sent, unit_level)
    totals = _sum_strength(player, category, stacks, (KILLING, DEFENDING))

    if include_civilians and \
            get_defense_proportion(player) < MILITIA_THRESHOLD:
        militia_types = tuple(t for t in MILITIA_UNIT_TYPES if t != category)
        for stack in select_unit_stacks(player, militia_types):
            data = get_unit_data(stack["type"], stack["level"])
            if data is None:
                continue
            totals[KILLING] += data.killing_strength * stack["quantity"]
            totals[DEFENDING] += data.defense_strength * stack["quantity"]

    percent = _bonus_for(player, category)
    return {
        KILLING: apply_bonus(totals[KILLING], percent),
        DEFENDING: apply_bonus(totals[DEFENDING], percent),
    }


def calculate_clandestine_strength(player, category, spies_sent,
                                   unit_level=None):
    """Strength of the spies or sentries committed to a mission.

    Raises:
        ValueError: If category is not SPY or SENTRY.
    """
    if category not in (SPY, SENTRY):
        raise ValueError(f"Not a clandestine category: {category}")
    return get_combat_strength(player, category, spies_sent=spies_sent,
                               unit_level=unit_level)


def _level_one_strength(player, category, spies_sent):
    stacks = select_unit_stacks(player, (category,), spies_sent,
                                unit_level=1)
    units = sum(s["quantity"] for s in stacks)
    killing = defending = 0

    data = get_unit_data(category, 1)
    if data is not None:
        killing += data.killing_strength * units
        defending += data.defense_strength * units

    weapon = get_item_data(category, WEAPON, 1)
    if weapon is not None:
        owned = sum(
            i["quantity"] for i in player.get("items", [])
            if i["usage"] == category and i["type"] == WEAPON
            and i["level"] == 1
        )
        armed = min(owned, units)
        killing += weapon.killing_strength * armed
        defending += weapon.defense_strength * armed

    percent = get_bonus_percent(player, category)
    return {
        KILLING: apply_bonus(killing, percent),
        DEFENDING: apply_bonus(defending, percent),
    }


def get_spy_strength(player, spies_sent):
    """Level-1 spies and level-1 spy weapons, capped at spies_sent."""
    return _level_one_strength(player, SPY, spies_sent)


def get_sentry_strength(player, spies_sent):
    """Level-1 sentries and level-1 sentry weapons, capped at spies_sent."""
    return _level_one_strength(player, SENTRY, spies_sent)


def get_civilian_strength(player, spies_sent=None):
    """Combined CITIZEN and WORKER strength, capped at spies_sent.

    Civilians carry no equipment and no bonus sources, so this is the
    catalog unit values alone.
    """
    stacks = select_unit_stacks(player, (CITIZEN, WORKER), spies_sent)
    return _sum_strength(player, CITIZEN, stacks, (KILLING, DEFENDING))
