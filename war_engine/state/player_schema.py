"""
Player schema module — Player state dictionary.

Builds a normalized player dict from loose input (as handed back by the
persistence layer) and validates it. The engine reads and mutates these
dicts; the caller commits them after a mission.

Player dict keys:
    id, race, class, experience, gold, gold_in_bank, attack_turns,
    fort_level, fort_hitpoints,
    units:            [{"type", "level", "quantity"}]
    items:            [{"type", "level", "usage", "quantity"}]
    battle_upgrades:  [{"type", "level", "quantity"}]
    structure_upgrades: {structure: level}
    bonus_points:     {proficiency type: level}
"""

from war_engine.rules_consts import (
    # Labels
    UNIT_TYPES, ITEM_TYPES, ITEM_USAGES, STAT_CATEGORIES,
    STRUCTURE_TYPES, PROFICIENCY_TYPES,
    RACES, CLASSES,
    HUMAN, FIGHTER,
)
from war_engine.catalog.catalog_data import find_fortification


class PlayerError(Exception):
    """Raised when player input cannot be turned into a valid player."""
    pass


def _to_quantity(value):
    """Coerce a quantity (possibly a numeric string) to a non-negative int."""
    if value is None:
        return 0
    return max(0, int(value))


def _merge_stacks(entries, key_fields, labels):
    """Normalize stack entries, merging duplicates by key.

    Args:
        entries: Iterable of dicts with key_fields and "quantity".
        key_fields: Tuple of field names identifying a stack.
        labels: Dict of field name -> allowed values.

    Returns:
        List of normalized dicts, in first-seen order.

    Raises:
        PlayerError: If a field holds an unknown label.
    """
    merged = {}
    for entry in entries or ():
        for field, allowed in labels.items():
            if entry.get(field) not in allowed:
                raise PlayerError(
                    f"Unknown {field} {entry.get(field)!r} in {entry!r}"
                )
        key = tuple(
            int(entry[f]) if f == "level" else entry[f]
            for f in key_fields
        )
        if key in merged:
            merged[key]["quantity"] += _to_quantity(entry.get("quantity"))
        else:
            stack = dict(zip(key_fields, key))
            stack["quantity"] = _to_quantity(entry.get("quantity"))
            merged[key] = stack
    return list(merged.values())


def build_player(player_id=0, *, race=HUMAN, player_class=FIGHTER,
                 experience=0, gold=0, gold_in_bank=0, attack_turns=0,
                 fort_level=1, fort_hitpoints=None,
                 units=None, items=None, battle_upgrades=None,
                 structure_upgrades=None, bonus_points=None):
    """Create a normalized player dict.

    Quantities are coerced to int and clamped at 0; duplicate stacks are
    merged; missing structure and proficiency entries default to 0.

    Args:
        player_id: Numeric player id.
        race: Race label from rules_consts.
        player_class: Class label from rules_consts.
        experience: Total experience points.
        gold: Gold on hand.
        gold_in_bank: Gold in the bank (visible to intel only).
        attack_turns: Attack turns available.
        fort_level: Fortification level.
        fort_hitpoints: Current fort hitpoints. Defaults to the
            fortification's full hitpoints (0 if the level is unknown).
        units: Iterable of {"type", "level", "quantity"}.
        items: Iterable of {"type", "level", "usage", "quantity"}.
        battle_upgrades: Iterable of {"type", "level", "quantity"}.
        structure_upgrades: Dict of structure -> level.
        bonus_points: Dict of proficiency type -> level.

    Returns:
        Player dict.

    Raises:
        PlayerError: If race, class or any stack label is unknown.
    """
    if race not in RACES:
        raise PlayerError(f"Unknown race: {race}")
    if player_class not in CLASSES:
        raise PlayerError(f"Unknown class: {player_class}")

    if fort_hitpoints is None:
        fort = find_fortification(fort_level)
        fort_hitpoints = fort.hitpoints if fort is not None else 0

    structures = {structure: 0 for structure in STRUCTURE_TYPES}
    for structure, level in (structure_upgrades or {}).items():
        if structure not in structures:
            raise PlayerError(f"Unknown structure: {structure}")
        structures[structure] = _to_quantity(level)

    proficiencies = {kind: 0 for kind in PROFICIENCY_TYPES}
    for kind, level in (bonus_points or {}).items():
        if kind not in proficiencies:
            raise PlayerError(f"Unknown proficiency: {kind}")
        proficiencies[kind] = _to_quantity(level)

    return {
        "id": player_id,
        "race": race,
        "class": player_class,
        "experience": _to_quantity(experience),
        "gold": _to_quantity(gold),
        "gold_in_bank": _to_quantity(gold_in_bank),
        "attack_turns": _to_quantity(attack_turns),
        "fort_level": int(fort_level),
        "fort_hitpoints": _to_quantity(fort_hitpoints),
        "units": _merge_stacks(
            units, ("type", "level"), {"type": UNIT_TYPES},
        ),
        "items": _merge_stacks(
            items, ("type", "level", "usage"),
            {"type": ITEM_TYPES, "usage": ITEM_USAGES},
        ),
        "battle_upgrades": _merge_stacks(
            battle_upgrades, ("type", "level"), {"type": STAT_CATEGORIES},
        ),
        "structure_upgrades": structures,
        "bonus_points": proficiencies,
    }


def validate_player(player):
    """Validate player integrity.

    Checks labels, non-negative quantities, unique stacks and fort
    hitpoints within the fortification's maximum.

    Args:
        player: Player dict.

    Returns:
        List of error strings. Empty list means valid.
    """
    errors = []

    seen = set()
    for unit in player.get("units", []):
        key = (unit.get("type"), unit.get("level"))
        if unit.get("type") not in UNIT_TYPES:
            errors.append(f"Unknown unit type: {unit.get('type')}")
        if key in seen:
            errors.append(f"Duplicate unit stack: {key[0]} level {key[1]}")
        seen.add(key)
        if unit.get("quantity", 0) < 0:
            errors.append(f"Negative quantity for unit {key[0]} "
                          f"level {key[1]}")

    for item in player.get("items", []):
        if item.get("type") not in ITEM_TYPES:
            errors.append(f"Unknown item type: {item.get('type')}")
        if item.get("usage") not in ITEM_USAGES:
            errors.append(f"Unknown item usage: {item.get('usage')}")
        if item.get("quantity", 0) < 0:
            errors.append(f"Negative quantity for item {item.get('type')} "
                          f"level {item.get('level')}")

    for upgrade in player.get("battle_upgrades", []):
        if upgrade.get("type") not in STAT_CATEGORIES:
            errors.append(f"Unknown upgrade type: {upgrade.get('type')}")
        if upgrade.get("quantity", 0) < 0:
            errors.append(f"Negative quantity for upgrade "
                          f"{upgrade.get('type')} level "
                          f"{upgrade.get('level')}")

    fort = find_fortification(player.get("fort_level"))
    hitpoints = player.get("fort_hitpoints", 0)
    if fort is None:
        errors.append(f"Unknown fortification level: "
                      f"{player.get('fort_level')}")
    elif not 0 <= hitpoints <= fort.hitpoints:
        errors.append(f"Fort hitpoints {hitpoints} outside "
                      f"[0, {fort.hitpoints}]")

    if player.get("gold", 0) < 0:
        errors.append("Negative gold")

    return errors
