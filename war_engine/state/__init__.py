"""State module — Player schema, unit stacks and progression."""

from war_engine.state.player_schema import (
    PlayerError, build_player, validate_player,
)
from war_engine.state.army_units import (
    get_unit_stack,
    get_unit_quantity,
    count_units,
    get_unit_totals,
    get_population,
    get_army_size,
    get_defense_proportion,
    adjust_unit,
    get_casualty_pool,
    distribute_casualties,
)
from war_engine.state.progression import (
    level_from_xp,
    xp_required_for_level,
    get_level,
    xp_to_next_level,
    can_attack,
    fort_health,
)

__all__ = [
    "PlayerError",
    "build_player",
    "validate_player",
    "get_unit_stack",
    "get_unit_quantity",
    "count_units",
    "get_unit_totals",
    "get_population",
    "get_army_size",
    "get_defense_proportion",
    "adjust_unit",
    "get_casualty_pool",
    "distribute_casualties",
    "level_from_xp",
    "xp_required_for_level",
    "get_level",
    "xp_to_next_level",
    "can_attack",
    "fort_health",
]
