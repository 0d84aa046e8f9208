"""Battle module — Casualties, loot, experience and battle resolution."""

from war_engine.battle.casualties import (
    compute_amp_factor,
    compute_base_value,
    get_target_population,
    cap_casualties,
    compute_casualties,
    compute_fort_damage,
)
from war_engine.battle.loot import (
    level_difference_factor,
    defender_level_factor,
    turn_factor,
    calculate_loot,
)
from war_engine.battle.experience import (
    compute_experience,
    compute_global_experience_bonus,
)
from war_engine.battle.resolve import (
    clamp_turns,
    simulate_battle,
    apply_battle_rewards,
)

__all__ = [
    "compute_amp_factor",
    "compute_base_value",
    "get_target_population",
    "cap_casualties",
    "compute_casualties",
    "compute_fort_damage",
    "level_difference_factor",
    "defender_level_factor",
    "turn_factor",
    "calculate_loot",
    "compute_experience",
    "compute_global_experience_bonus",
    "clamp_turns",
    "simulate_battle",
    "apply_battle_rewards",
]
