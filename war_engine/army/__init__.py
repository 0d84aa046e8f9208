"""Army module — Bonuses, equipment allocation and strength queries."""

from war_engine.army.bonuses import (
    race_class_bonus,
    proficiency_bonus,
    get_structure_level,
    structure_bonus,
    fortification_bonus,
    intel_bonus,
    get_bonus_percent,
    apply_bonus,
)
from war_engine.army.allocation import (
    ItemAllocation,
    UpgradeAllocation,
    allocate_items,
    allocate_battle_upgrades,
)
from war_engine.army.strength import (
    select_unit_stacks,
    usable_battle_upgrades,
    get_stat,
    get_combat_strength,
    calculate_clandestine_strength,
    get_spy_strength,
    get_sentry_strength,
    get_civilian_strength,
)

__all__ = [
    "race_class_bonus",
    "proficiency_bonus",
    "get_structure_level",
    "structure_bonus",
    "fortification_bonus",
    "intel_bonus",
    "get_bonus_percent",
    "apply_bonus",
    "ItemAllocation",
    "UpgradeAllocation",
    "allocate_items",
    "allocate_battle_upgrades",
    "select_unit_stacks",
    "usable_battle_upgrades",
    "get_stat",
    "get_combat_strength",
    "calculate_clandestine_strength",
    "get_spy_strength",
    "get_sentry_strength",
    "get_civilian_strength",
]
