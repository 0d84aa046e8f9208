"""
Battle loot — Gold pillaged from the defender on a won battle.

  loot = gold * U(0.90, 0.99)
              * U(100 + 10t, 100 + 20t) / 371
              * level difference factor
              * defender level factor
              (* FORT_DOWN_LOOT_MULTIPLIER if the fort was already down)

clamped to [0, defender gold]. Gold may be arbitrarily large, so the
product is taken with Fraction to avoid float rounding on the gold side.
"""

from fractions import Fraction

from war_engine.rules_consts import (
    LOOT_UNIFORM_RANGE,
    LOOT_TURN_BASE, LOOT_TURN_LOW_STEP, LOOT_TURN_HIGH_STEP,
    LOOT_TURN_DIVISOR,
    LOOT_LEVEL_STEP, LOOT_LEVEL_DIFF_MAX, LOOT_LEVEL_FACTOR_MAX,
    DEFENDER_LEVEL_PROTECTION, FULL_EXPOSURE_LEVEL,
    FORT_DOWN_LOOT_MULTIPLIER,
)
from war_engine.dice import mt_rand
from war_engine.state.progression import get_level


def level_difference_factor(attacker_level, defender_level):
    """1 + 5% per level of difference, at most +50%."""
    diff = min(LOOT_LEVEL_DIFF_MAX, abs(defender_level - attacker_level))
    return 1 + min(LOOT_LEVEL_FACTOR_MAX, diff * LOOT_LEVEL_STEP)


def defender_level_factor(defender_level):
    """Sliding protection for low-level defenders.

    Linear from 0.5 at level 1 to 0.75 at level 9, then from 0.75 at
    level 10 to 1.0 at level 15. Full exposure from level 15 up.
    """
    if defender_level >= FULL_EXPOSURE_LEVEL:
        return 1.0
    for first, last, start, end in DEFENDER_LEVEL_PROTECTION:
        if first <= defender_level <= last:
            return start + (end - start) * (defender_level - first) / \
                (last - first)
    return DEFENDER_LEVEL_PROTECTION[0][2]


def turn_factor(turns, rng):
    """Random share of gold scaled by the attack turns spent."""
    low = LOOT_TURN_BASE + LOOT_TURN_LOW_STEP * turns
    high = LOOT_TURN_BASE + LOOT_TURN_HIGH_STEP * turns
    return mt_rand(rng, low, high) / LOOT_TURN_DIVISOR


def calculate_loot(attacker, defender, turns, rng, fort_down=False):
    """Gold the attacker takes from the defender.

    Args:
        attacker: Attacker player dict.
        defender: Defender player dict.
        turns: Turns the battle lasted.
        rng: random.Random instance.
        fort_down: True if the defender's fort hitpoints were 0 when the
            battle began.

    Returns:
        Integer in [0, defender gold].
    """
    gold = max(0, int(defender.get("gold", 0)))
    if gold == 0:
        return 0

    factor = mt_rand(rng, *LOOT_UNIFORM_RANGE)
    factor *= turn_factor(turns, rng)
    factor *= level_difference_factor(get_level(attacker),
                                      get_level(defender))
    factor *= defender_level_factor(get_level(defender))
    if fort_down:
        factor *= FORT_DOWN_LOOT_MULTIPLIER

    loot = int(Fraction(gold) * Fraction(factor))
    return min(max(0, loot), gold)
