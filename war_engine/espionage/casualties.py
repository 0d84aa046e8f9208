"""
Espionage casualties — Spy amp factor, spy-scale casualties and the
losses taken on a failed mission.

Spy missions move tens of units rather than thousands, so the amp factor
uses much finer population bands and casualties come from a flat
uniform draw instead of the battle base-rate buckets.
"""

import math

from war_engine.rules_consts import (
    SPY_AMP_FACTOR_BASE, SPY_AMP_FACTOR_BREAKPOINTS,
    SPY_BASE_RATE_MAX, SPY_CASUALTY_SCALE, SPY_RATIO_CAP,
    FAIL_LOSS_FLOOR,
)
from war_engine.dice import mt_rand


def compute_spy_amp_factor(target_population):
    """Amp factor for spy-scale populations.

    SPY_AMP_FACTOR_BASE times the factor of the first breakpoint whose
    limit is >= target_population, walked in table order. The widest band
    comes first, so every population up to 10 gets x1.6 and larger ones
    get the bare base; the factor never rises with population.
    """
    for limit, factor in SPY_AMP_FACTOR_BREAKPOINTS:
        if target_population <= limit:
            return SPY_AMP_FACTOR_BASE * factor
    return SPY_AMP_FACTOR_BASE


def compute_spy_casualties(killing_strength, defense_strength, population,
                           rng):
    """Units lost by the side whose defense_strength is being hit.

    Args:
        killing_strength: Strength of the side inflicting losses.
        defense_strength: Strength of the side taking losses.
        population: Units exposed to losses.
        rng: random.Random instance.

    Returns:
        Integer in [0, population].
    """
    if population <= 0 or killing_strength <= 0:
        return 0
    ratio = min(killing_strength / max(defense_strength, 1), SPY_RATIO_CAP)
    rate = mt_rand(rng, 0, SPY_BASE_RATE_MAX) * SPY_CASUALTY_SCALE
    casualties = round(
        rate * compute_spy_amp_factor(population) * ratio * population
    )
    return min(max(0, casualties), population)


def compute_failure_losses(spies_sent, attacker_strength, defender_strength):
    """Spies lost on a failed infiltration or assassination.

    At least FAIL_LOSS_FLOOR of the spies are lost, rising toward all of
    them as the defender's strength dominates.

    Returns:
        Integer in [0, spies_sent].
    """
    if spies_sent <= 0:
        return 0
    if defender_strength <= 0:
        severity = 1.0
    else:
        severity = max(0.0, 1 - attacker_strength / defender_strength)
    share = FAIL_LOSS_FLOOR + (1 - FAIL_LOSS_FLOOR) * severity
    return min(spies_sent, math.ceil(spies_sent * share))
