"""
Battle casualties — Amp factor, base rates, casualty counts, fort damage.

All draws go through dice.mt_rand with the caller's rng. Functions here
are pure apart from consuming random numbers; callers apply the results.
"""

from war_engine.rules_consts import (
    AMP_FACTOR_BASE, AMP_FACTOR_BREAKPOINTS,
    BASE_RATE_BUCKETS, BASE_RATE_FLOOR,
    FORT_CASUALTY_MULTIPLIER,
    CASUALTY_OVERWHELM_SHARE, CASUALTY_CAP_SHARE,
    UNDERGARRISON_CASUALTY_MULTIPLIER,
    MILITIA_THRESHOLD, CIVILIAN_TARGET_SHARE,
    FORT_DAMAGE_TIERS, FORT_DAMAGE_TOP_TIER,
    CITIZEN, WORKER, DEFENSE,
)
from war_engine.dice import mt_rand
from war_engine.state.army_units import count_units, get_defense_proportion


def compute_amp_factor(target_population):
    """Population-tiered casualty amplification.

    AMP_FACTOR_BASE times the factor of the first breakpoint whose limit
    is >= target_population; the bare base above the last breakpoint.
    """
    for limit, factor in AMP_FACTOR_BREAKPOINTS:
        if target_population <= limit:
            return AMP_FACTOR_BASE * factor
    return AMP_FACTOR_BASE


def compute_base_value(ratio, rng):
    """Random base casualty rate for a strength ratio.

    Args:
        ratio: Killing strength over opposing defense strength.
        rng: random.Random instance.

    Returns:
        Float drawn from the first bucket whose minimum ratio is met.
    """
    for minimum, low, high in BASE_RATE_BUCKETS:
        if ratio >= minimum:
            return mt_rand(rng, low, high)
    low, high = BASE_RATE_FLOOR
    return mt_rand(rng, low, high)


def get_target_population(defender):
    """Population the attacker is fighting through.

    Dedicated DEFENSE units, padded with a share of citizens and workers
    when the defender is under-garrisoned.
    """
    defense_units = count_units(defender, DEFENSE)
    if get_defense_proportion(defender) < MILITIA_THRESHOLD:
        civilians = count_units(defender, CITIZEN, WORKER)
        return max(defense_units,
                   defense_units + CIVILIAN_TARGET_SHARE * civilians)
    return defense_units


def cap_casualties(casualties, population):
    """Cap a raw casualty figure against the owner's population.

    A raw figure above CASUALTY_OVERWHELM_SHARE of the population may
    wipe the population out; anything smaller is held to
    CASUALTY_CAP_SHARE of it.
    """
    if casualties > population * CASUALTY_OVERWHELM_SHARE:
        cap = population
    else:
        cap = population * CASUALTY_CAP_SHARE
    return int(min(casualties, cap))


def compute_casualties(attacker_strength, defender_strength,
                       attacker_population, defender_population,
                       amp_factor, defense_proportion, fort_hitpoints,
                       rng):
    """Casualties for both sides of one battle turn.

    Args:
        attacker_strength: Attacker {"killing_strength", "defense_strength"}.
        defender_strength: Defender {"killing_strength", "defense_strength"}.
        attacker_population: Attacker OFFENSE units.
        defender_population: Defender target population.
        amp_factor: compute_amp_factor of the defender target population.
        defense_proportion: Defender dedicated-defense share.
        fort_hitpoints: Defender fort hitpoints at the start of the turn.
        rng: random.Random instance.

    Returns:
        Tuple (attacker_casualties, defender_casualties), integers >= 0.
    """
    attacker_ks = attacker_strength["killing_strength"]
    attacker_ds = attacker_strength["defense_strength"]
    defender_ks = defender_strength["killing_strength"]
    defender_ds = defender_strength["defense_strength"]

    offense_to_defense = attacker_ks / max(defender_ds, 1)
    counter_attack = defender_ks / max(attacker_ds, 1)

    attacker_base = compute_base_value(counter_attack, rng)
    defender_base = compute_base_value(offense_to_defense, rng)

    fort_multiplier = 1
    if defender_ds == 0 and fort_hitpoints > 0:
        fort_multiplier = FORT_CASUALTY_MULTIPLIER

    attacker_casualties = round(
        attacker_base * amp_factor * counter_attack
        * attacker_population * fort_multiplier
    )
    defender_casualties = round(
        defender_base * amp_factor * offense_to_defense
        * defender_population * fort_multiplier
    )

    attacker_casualties = cap_casualties(attacker_casualties,
                                         attacker_population)
    defender_casualties = cap_casualties(defender_casualties,
                                         defender_population)

    if 0 < defense_proportion <= MILITIA_THRESHOLD:
        defender_casualties = int(
            defender_casualties * UNDERGARRISON_CASUALTY_MULTIPLIER
        )

    return max(0, attacker_casualties), max(0, defender_casualties)


def compute_fort_damage(attacker_ks, defender_ds, fort_hitpoints, rng):
    """Damage dealt to the defender's fort in one turn.

    Returns:
        Integer damage, never more than the fort's remaining hitpoints.
        0 when the fort is already down.
    """
    if fort_hitpoints <= 0:
        return 0
    ratio = attacker_ks / max(defender_ds, 1)
    low, high = FORT_DAMAGE_TOP_TIER
    for limit, tier_low, tier_high in FORT_DAMAGE_TIERS:
        if ratio <= limit:
            low, high = tier_low, tier_high
            break
    damage = round(mt_rand(rng, low, high))
    return min(max(0, damage), fort_hitpoints)
