"""Commands module — Validated drivers for attacks and spy missions."""

from war_engine.commands.common import (
    MissionError,
    check_attack_turns,
    check_level_range,
    spend_attack_turns,
)
from war_engine.commands.attack import validate_attack, execute_attack
from war_engine.commands.spy import validate_spy_mission, execute_spy_mission

__all__ = [
    "MissionError",
    "check_attack_turns",
    "check_level_range",
    "spend_attack_turns",
    "validate_attack",
    "execute_attack",
    "validate_spy_mission",
    "execute_spy_mission",
]
