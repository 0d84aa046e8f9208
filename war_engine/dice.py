"""
Randomness helpers — The ONLY way the engine draws random numbers.

Every mission function takes an injected random.Random so outcomes can be
replayed from a seed. Never call the module-level random functions from
engine code.
"""

import random


def make_rng(seed=None):
    """Create a Random instance for a mission.

    Args:
        seed: Optional seed for deterministic replay.

    Returns:
        random.Random instance.
    """
    return random.Random(seed)


def ensure_rng(rng):
    """Return rng, or a fresh unseeded Random if rng is None."""
    if rng is None:
        return random.Random()
    return rng


def mt_rand(rng, low, high):
    """Draw a uniform float in [low, high].

    Args:
        rng: random.Random instance.
        low: Lower bound.
        high: Upper bound.

    Returns:
        Float between low and high.
    """
    return low + rng.random() * (high - low)
