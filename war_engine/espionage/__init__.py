"""Espionage module — Spy casualties, intel reports and spy missions."""

from war_engine.espionage.casualties import (
    compute_spy_amp_factor,
    compute_spy_casualties,
    compute_failure_losses,
)
from war_engine.espionage.intel_report import build_intel_report
from war_engine.espionage.missions import (
    simulate_intel,
    simulate_infiltration,
    simulate_assassination,
    compute_infiltration_damage,
    compute_intel_percentage,
    get_target_strength,
)

__all__ = [
    "compute_spy_amp_factor",
    "compute_spy_casualties",
    "compute_failure_losses",
    "build_intel_report",
    "simulate_intel",
    "simulate_infiltration",
    "simulate_assassination",
    "compute_infiltration_damage",
    "compute_intel_percentage",
    "get_target_strength",
]
