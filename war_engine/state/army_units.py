"""
Army units module — The ONLY way unit stacks change in a player dict.

All unit-count mutations go through adjust_unit or distribute_casualties,
which never leave a quantity below zero. Never edit a stack's quantity
directly from engine code.
"""

from war_engine.rules_consts import (
    CITIZEN, WORKER, OFFENSE, DEFENSE, SPY, SENTRY,
)


def get_unit_stack(player, unit_type, level):
    """Find a player's stack for a unit type and level.

    Returns:
        The stack dict, or None if the player has no such stack.
    """
    for unit in player["units"]:
        if unit["type"] == unit_type and unit["level"] == level:
            return unit
    return None


def get_unit_quantity(player, unit_type, level):
    """Quantity owned of one unit type at one level (0 if none)."""
    stack = get_unit_stack(player, unit_type, level)
    return stack["quantity"] if stack is not None else 0


def count_units(player, *unit_types):
    """Total quantity across all levels of the given unit types."""
    return sum(
        unit["quantity"] for unit in player["units"]
        if unit["type"] in unit_types
    )


def get_unit_totals(player):
    """Totals per unit family.

    Returns:
        Dict with keys citizens, workers, offense, defense, spies,
        sentries, assassins (level-3 spies).
    """
    return {
        "citizens": count_units(player, CITIZEN),
        "workers": count_units(player, WORKER),
        "offense": count_units(player, OFFENSE),
        "defense": count_units(player, DEFENSE),
        "spies": count_units(player, SPY),
        "sentries": count_units(player, SENTRY),
        "assassins": get_unit_quantity(player, SPY, 3),
    }


def get_population(player):
    """Total population: every unit of every type."""
    return sum(unit["quantity"] for unit in player["units"])


def get_army_size(player):
    """Population excluding citizens and workers."""
    return get_population(player) - count_units(player, CITIZEN, WORKER)


def get_defense_proportion(player):
    """Share of the population made of dedicated DEFENSE units.

    Returns:
        Float in [0, 1]; 0 for an empty population.
    """
    population = get_population(player)
    if population == 0:
        return 0.0
    return count_units(player, DEFENSE) / population


def adjust_unit(player, unit_type, level, delta):
    """Add delta to a stack, clamping the result at zero.

    Creates the stack when adding to a type/level the player doesn't own.

    Args:
        player: Player dict. Modified in place.
        unit_type: Unit type label.
        level: Unit level.
        delta: Signed change.

    Returns:
        The actual change applied (negative for removals).
    """
    stack = get_unit_stack(player, unit_type, level)
    if stack is None:
        if delta <= 0:
            return 0
        player["units"].append(
            {"type": unit_type, "level": level, "quantity": delta}
        )
        return delta
    before = stack["quantity"]
    stack["quantity"] = max(0, before + delta)
    return stack["quantity"] - before


def get_casualty_pool(player, *unit_types):
    """Stacks of the given types in casualty order: lowest level first.

    Within a level, stacks keep the order of unit_types.
    """
    order = {unit_type: index for index, unit_type in enumerate(unit_types)}
    stacks = [
        unit for unit in player["units"]
        if unit["type"] in order and unit["quantity"] > 0
    ]
    return sorted(stacks, key=lambda u: (u["level"], order[u["type"]]))


def distribute_casualties(stacks, casualties):
    """Remove casualties from stacks first-fit, never exceeding a stack.

    Args:
        stacks: Ordered list of stack dicts. Modified in place.
        casualties: Number of units to remove.

    Returns:
        List of {"type", "level", "quantity"} for the units removed.
    """
    killed = []
    remaining = max(0, int(casualties))
    for stack in stacks:
        if remaining <= 0:
            break
        taken = min(stack["quantity"], remaining)
        if taken <= 0:
            continue
        stack["quantity"] -= taken
        remaining -= taken
        killed.append(
            {"type": stack["type"], "level": stack["level"],
             "quantity": taken}
        )
    return killed
