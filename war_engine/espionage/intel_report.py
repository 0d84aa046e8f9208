"""
Intel report — The partial view of a defender returned by an intel
mission.

Every unit and item quantity, the fort level and fort hitpoints are
scaled to ceil(value * intel_percentage / 100). Banked gold is floored.
"""

from war_engine.rules_consts import MAX_INTEL_PERCENT


def _scaled_up(value, percent):
    return -(-value * percent // MAX_INTEL_PERCENT)


def build_intel_report(defender, intel_percentage):
    """Build the intel view of a defender.

    Args:
        defender: Defender player dict. Not modified.
        intel_percentage: Integer in [0, 100].

    Returns:
        Dict with units, items, fort_level, fort_hitpoints, gold_in_bank.

    Raises:
        ValueError: If intel_percentage is outside [0, 100].
    """
    if not 0 <= intel_percentage <= MAX_INTEL_PERCENT:
        raise ValueError(f"Intel percentage out of range: {intel_percentage}")

    pct = int(intel_percentage)
    return {
        "units": [
            dict(unit, quantity=_scaled_up(unit["quantity"], pct))
            for unit in defender.get("units", [])
        ],
        "items": [
            dict(item, quantity=_scaled_up(item["quantity"], pct))
            for item in defender.get("items", [])
        ],
        "fort_level": _scaled_up(defender.get("fort_level", 0), pct),
        "fort_hitpoints": _scaled_up(defender.get("fort_hitpoints", 0), pct),
        "gold_in_bank": defender.get("gold_in_bank", 0) * pct
        // MAX_INTEL_PERCENT,
    }
