"""
rules_consts.py — Canonical labels and balance tables for the war engine.

Every string label for unit types, item types, usages, bonus types,
structures, races, classes, mission kinds and outcomes used anywhere in
the engine MUST come from this file. The same goes for every balance
number: catalog rows, amplification breakpoints, base-rate buckets,
casualty caps, loot and experience factors, espionage thresholds.

If a label or a number doesn't exist here, it is wrong.

Organization: constants grouped by category. Catalog rows are raw tuples;
war_engine.catalog.catalog_data turns them into lookup records.
"""

# ============================================================================
# UNIT TYPES
# ============================================================================

CITIZEN = "CITIZEN"
WORKER = "WORKER"
OFFENSE = "OFFENSE"
DEFENSE = "DEFENSE"
SPY = "SPY"
SENTRY = "SENTRY"

UNIT_TYPES = (CITIZEN, WORKER, OFFENSE, DEFENSE, SPY, SENTRY)

# Units that join the militia when a defender is under-garrisoned
MILITIA_UNIT_TYPES = (CITIZEN, WORKER, SENTRY, SPY)

# Stat categories (getStat / getCombatStrength)
STAT_CATEGORIES = (OFFENSE, DEFENSE, SPY, SENTRY)


# ============================================================================
# ITEM TYPES & USAGES
# ============================================================================

WEAPON = "WEAPON"
HELM = "HELM"
BOOTS = "BOOTS"
BRACERS = "BRACERS"
SHIELD = "SHIELD"
ARMOR = "ARMOR"

# Order of the equipment passes
ITEM_TYPES = (WEAPON, HELM, BRACERS, SHIELD, BOOTS, ARMOR)

# Item usage labels are the four stat categories
ITEM_USAGES = STAT_CATEGORIES


# ============================================================================
# BONUS TYPES (race/class table and proficiency points)
# ============================================================================

BONUS_OFFENSE = "OFFENSE"
BONUS_DEFENSE = "DEFENSE"
BONUS_INCOME = "INCOME"
BONUS_INTEL = "INTEL"
BONUS_PRICES = "PRICES"

# Categories a player can spend proficiency points on
PROFICIENCY_TYPES = (
    BONUS_OFFENSE, BONUS_DEFENSE, BONUS_INCOME, BONUS_INTEL, BONUS_PRICES,
)


# ============================================================================
# STRUCTURES
# ============================================================================

STRUCTURE_ARMORY = "ARMORY"
STRUCTURE_OFFENSE = "OFFENSE"
STRUCTURE_SPY = "SPY"
STRUCTURE_SENTRY = "SENTRY"

STRUCTURE_TYPES = (
    STRUCTURE_ARMORY, STRUCTURE_OFFENSE, STRUCTURE_SPY, STRUCTURE_SENTRY,
)

# Percentage bonus by structure level (index = level)
OFFENSE_STRUCTURE_BONUS = (
    0, 5, 10, 15, 20, 25, 30, 35, 40, 45, 50,
    55, 60, 65, 70, 75, 80, 85, 90, 95, 100, 105,
)
SPY_STRUCTURE_BONUS = (
    0, 5, 10, 15, 20, 25, 30, 35, 40, 45, 50,
    55, 60, 65, 70, 75, 80, 85, 90, 95, 100,
)
SENTRY_STRUCTURE_BONUS = (
    0, 5, 10, 15, 20, 25, 30, 35, 40, 45, 50,
    55, 60, 65, 70, 75, 80, 85, 90, 95, 100,
)

STRUCTURE_BONUS_TABLES = {
    STRUCTURE_OFFENSE: OFFENSE_STRUCTURE_BONUS,
    STRUCTURE_SPY: SPY_STRUCTURE_BONUS,
    STRUCTURE_SENTRY: SENTRY_STRUCTURE_BONUS,
}


# ============================================================================
# RACES & CLASSES
# ============================================================================

HUMAN = "HUMAN"
GOBLIN = "GOBLIN"
UNDEAD = "UNDEAD"
ELF = "ELF"

RACES = (HUMAN, GOBLIN, UNDEAD, ELF)

FIGHTER = "FIGHTER"
CLERIC = "CLERIC"
THIEF = "THIEF"
ASSASSIN = "ASSASSIN"

CLASSES = (FIGHTER, CLERIC, THIEF, ASSASSIN)

# (race or class, bonus type, percent)
RACE_CLASS_BONUSES = (
    (HUMAN, BONUS_OFFENSE, 5),
    (GOBLIN, BONUS_DEFENSE, 5),
    (UNDEAD, BONUS_OFFENSE, 5),
    (ELF, BONUS_DEFENSE, 5),
    (FIGHTER, BONUS_OFFENSE, 5),
    (CLERIC, BONUS_DEFENSE, 5),
    (THIEF, BONUS_INCOME, 5),
    (ASSASSIN, BONUS_INTEL, 5),
)


# ============================================================================
# UNIT CATALOG
# ============================================================================

# (type, level, name, bonus, killing, defense, min_fort_level, cost)
UNIT_CATALOG = (
    (CITIZEN, 1, "Citizen", 0, 1, 1, 1, 0),
    (WORKER, 1, "Worker", 0, 1, 2, 1, 2000),
    (OFFENSE, 1, "Infantry", 5, 5, 2, 1, 1500),
    (OFFENSE, 2, "Knight", 15, 15, 6, 6, 5000),
    (OFFENSE, 3, "Berserker", 30, 30, 12, 12, 12000),
    (OFFENSE, 4, "Warlord", 50, 50, 20, 18, 25000),
    (DEFENSE, 1, "Guard", 5, 2, 5, 1, 1500),
    (DEFENSE, 2, "Archer", 15, 6, 15, 6, 5000),
    (DEFENSE, 3, "Elite Archer", 30, 12, 30, 12, 12000),
    (DEFENSE, 4, "Champion", 50, 20, 50, 18, 25000),
    (SPY, 1, "Spy", 5, 5, 2, 1, 2500),
    (SPY, 2, "Infiltrator", 15, 15, 6, 6, 8000),
    (SPY, 3, "Assassin", 30, 30, 12, 12, 20000),
    (SENTRY, 1, "Sentry", 5, 2, 5, 1, 2500),
    (SENTRY, 2, "Sentinel", 15, 6, 15, 6, 8000),
    (SENTRY, 3, "Inquisitor", 30, 12, 30, 12, 20000),
)


# ============================================================================
# ITEM CATALOG
# ============================================================================

# Weapons kill, protective gear absorbs. Sentry weapons are built to
# hold a post, so they absorb like gear.
# (usage, type, level, name, bonus, killing, defense, armory_level, cost)
ITEM_CATALOG = (
    # Offense
    (OFFENSE, WEAPON, 1, "Dagger", 25, 25, 5, 0, 12500),
    (OFFENSE, WEAPON, 2, "Hatchet", 50, 50, 10, 1, 25000),
    (OFFENSE, WEAPON, 3, "Quarterstaff", 100, 100, 20, 2, 50000),
    (OFFENSE, WEAPON, 4, "Mace", 225, 225, 45, 3, 100000),
    (OFFENSE, WEAPON, 5, "Battle Axe", 700, 700, 140, 4, 200000),
    (OFFENSE, WEAPON, 6, "Short Sword", 1000, 1000, 200, 5, 500000),
    (OFFENSE, WEAPON, 7, "Long Sword", 1500, 1500, 300, 6, 750000),
    (OFFENSE, HELM, 1, "Padded Hood", 6, 1, 6, 0, 3000),
    (OFFENSE, HELM, 2, "Leather Hood", 12, 2, 12, 1, 6000),
    (OFFENSE, HELM, 3, "Studded Leather Hood", 25, 5, 25, 2, 12500),
    (OFFENSE, ARMOR, 1, "Padded Armor", 19, 4, 19, 0, 9500),
    (OFFENSE, ARMOR, 2, "Leather Armor", 38, 8, 38, 1, 19000),
    (OFFENSE, ARMOR, 3, "Studded Leather Armor", 75, 15, 75, 2, 37500),
    (OFFENSE, BOOTS, 1, "Padded Boots", 6, 1, 6, 0, 3000),
    (OFFENSE, BOOTS, 2, "Leather Boots", 12, 2, 12, 1, 6000),
    (OFFENSE, BOOTS, 3, "Studded Leather Boots", 25, 5, 25, 2, 12500),
    (OFFENSE, BRACERS, 1, "Padded Bracers", 3, 1, 3, 0, 1500),
    (OFFENSE, BRACERS, 2, "Leather Bracers", 5, 1, 5, 1, 2500),
    (OFFENSE, BRACERS, 3, "Studded Leather Bracers", 10, 2, 10, 2, 5000),
    (OFFENSE, SHIELD, 1, "Small Wooden Shield", 12, 2, 12, 0, 6000),
    (OFFENSE, SHIELD, 2, "Medium Wooden Shield", 25, 5, 25, 1, 12500),
    (OFFENSE, SHIELD, 3, "Large Wooden Shield", 50, 10, 50, 2, 25000),
    # Defense
    (DEFENSE, WEAPON, 1, "Sling", 25, 25, 5, 0, 12500),
    (DEFENSE, WEAPON, 2, "Hatchet", 50, 50, 10, 1, 25000),
    (DEFENSE, WEAPON, 3, "Spear", 100, 100, 20, 2, 50000),
    (DEFENSE, HELM, 1, "Padded Hood", 6, 1, 6, 0, 3000),
    (DEFENSE, HELM, 2, "Leather Hood", 12, 2, 12, 1, 6000),
    (DEFENSE, HELM, 3, "Studded Leather Hood", 25, 5, 25, 2, 12500),
    (DEFENSE, ARMOR, 1, "Padded Armor", 19, 4, 19, 0, 9500),
    (DEFENSE, ARMOR, 2, "Leather Armor", 38, 8, 38, 1, 19000),
    (DEFENSE, ARMOR, 3, "Studded Leather Armor", 75, 15, 75, 2, 37500),
    (DEFENSE, BOOTS, 1, "Padded Boots", 6, 1, 6, 0, 3000),
    (DEFENSE, BOOTS, 2, "Leather Boots", 12, 2, 12, 1, 6000),
    (DEFENSE, BOOTS, 3, "Studded Leather Boots", 25, 5, 25, 2, 12500),
    (DEFENSE, BRACERS, 1, "Padded Bracers", 3, 1, 3, 0, 1500),
    (DEFENSE, BRACERS, 2, "Leather Bracers", 5, 1, 5, 1, 2500),
    (DEFENSE, BRACERS, 3, "Studded Leather Bracers", 10, 2, 10, 2, 5000),
    (DEFENSE, SHIELD, 1, "Small Wooden Shield", 12, 2, 12, 0, 6000),
    (DEFENSE, SHIELD, 2, "Medium Wooden Shield", 25, 5, 25, 1, 12500),
    (DEFENSE, SHIELD, 3, "Large Wooden Shield", 50, 10, 50, 2, 25000),
    # Spy
    (SPY, WEAPON, 1, "Sling", 25, 25, 5, 0, 12500),
    (SPY, WEAPON, 2, "Brass Knuckles", 50, 50, 10, 1, 25000),
    (SPY, WEAPON, 3, "Cudgel", 100, 100, 20, 2, 50000),
    (SPY, WEAPON, 4, "Knife", 225, 225, 45, 3, 100000),
    (SPY, HELM, 1, "Cloth Cap", 6, 1, 6, 0, 3000),
    (SPY, HELM, 2, "Padded Cap", 12, 2, 12, 1, 6000),
    (SPY, HELM, 3, "Leather Cap", 25, 5, 25, 2, 12500),
    (SPY, HELM, 4, "Cloth Hood", 50, 10, 50, 3, 25000),
    (SPY, ARMOR, 1, "Dark Cloth Armor", 19, 4, 19, 0, 9500),
    (SPY, ARMOR, 2, "Padded Cloth Armor", 38, 8, 38, 1, 19000),
    (SPY, ARMOR, 3, "Leather Armor", 75, 15, 75, 2, 37500),
    (SPY, ARMOR, 4, "Padded Leather Armor", 150, 30, 150, 3, 75000),
    (SPY, BOOTS, 1, "Cloth Boots", 6, 1, 6, 0, 3000),
    (SPY, BOOTS, 2, "Padded Boots", 12, 2, 12, 1, 6000),
    (SPY, BOOTS, 3, "Leather Boots", 25, 5, 25, 2, 12500),
    (SPY, BOOTS, 4, "Padded Leather Boots", 50, 10, 50, 3, 25000),
    (SPY, BRACERS, 1, "Cloth Bracers", 3, 1, 3, 0, 1500),
    (SPY, BRACERS, 2, "Padded Bracers", 5, 1, 5, 1, 2500),
    (SPY, BRACERS, 3, "Leather Bracers", 10, 2, 10, 2, 5000),
    (SPY, BRACERS, 4, "Padded Leather Bracers", 20, 4, 20, 3, 10000),
    # Sentry
    (SENTRY, WEAPON, 1, "Sling", 25, 5, 25, 0, 12500),
    (SENTRY, WEAPON, 2, "Dagger", 50, 10, 50, 1, 25000),
    (SENTRY, WEAPON, 3, "Hatchet", 100, 20, 100, 2, 50000),
)


# ============================================================================
# BATTLE UPGRADE CATALOG (squad-wide gear)
# ============================================================================

# (type, level, name, bonus, killing, defense, units_covered,
#  min_unit_level, required_structure_level, cost)
BATTLE_UPGRADE_CATALOG = (
    (OFFENSE, 1, "Steeds", 200, 150, 50, 1, 2, 6, 100000),
    (OFFENSE, 2, "War Elephant", 1000, 750, 250, 1, 2, 6, 5000000),
    (DEFENSE, 1, "Guard Tower", 200, 50, 150, 5, 2, 6, 100000),
    (DEFENSE, 2, "Catapult", 1000, 250, 750, 1, 2, 6, 5000000),
    (SPY, 1, "Disguise Clothes", 200, 50, 150, 1, 2, 6, 100000),
    (SPY, 2, "Informant", 1000, 250, 750, 1, 2, 6, 5000000),
    (SENTRY, 1, "Guard Dog", 200, 50, 150, 1, 2, 6, 100000),
    (SENTRY, 2, "Watch Tower", 1000, 250, 750, 5, 2, 6, 5000000),
)


# ============================================================================
# FORTIFICATIONS
# ============================================================================

# (level, name, hitpoints, defense_bonus_percent, gold_per_turn, cost)
FORTIFICATION_CATALOG = (
    (1, "Manor", 50, 5, 1000, 0),
    (2, "Village", 100, 10, 2000, 50000),
    (3, "Town", 250, 15, 3000, 100000),
    (4, "Outpost", 500, 20, 4000, 250000),
    (5, "Outpost Level 2", 600, 22, 5000, 500000),
    (6, "Outpost Level 3", 700, 25, 6000, 750000),
    (7, "Stronghold", 1000, 30, 7000, 1000000),
    (8, "Stronghold Level 2", 1200, 32, 8000, 1500000),
    (9, "Stronghold Level 3", 1400, 35, 9000, 2000000),
    (10, "Fortress", 2000, 40, 10000, 3000000),
    (11, "Fortress Level 2", 2400, 42, 11000, 4000000),
    (12, "Fortress Level 3", 2800, 45, 12000, 5000000),
    (13, "Citadel", 3500, 50, 13000, 7500000),
    (14, "Citadel Level 2", 4000, 52, 14000, 10000000),
    (15, "Citadel Level 3", 4500, 55, 15000, 12500000),
    (16, "Castle", 6000, 60, 16000, 15000000),
    (17, "Castle Level 2", 7000, 62, 17000, 20000000),
    (18, "Castle Level 3", 8000, 65, 18000, 25000000),
    (19, "Kingdom", 10000, 70, 19000, 37500000),
    (20, "Kingdom Level 2", 12000, 72, 20000, 50000000),
    (21, "Kingdom Level 3", 14000, 75, 21000, 62500000),
    (22, "Empire", 18000, 80, 22000, 75000000),
    (23, "Empire Level 2", 21000, 82, 23000, 100000000),
    (24, "Empire Level 3", 25000, 85, 24000, 125000000),
)


# ============================================================================
# LEVELS & EXPERIENCE
# ============================================================================

MAX_LEVEL = 60

# (level, total xp required); level 1 needs nothing
LEVEL_XP_TABLE = tuple(
    (level, 0 if level == 1 else int(level ** 2.5 * 1000))
    for level in range(1, MAX_LEVEL + 1)
)

# A player may attack targets within this many levels of their own
ATTACK_LEVEL_RANGE = 5


# ============================================================================
# BATTLE: TURNS, POPULATION, CASUALTIES
# ============================================================================

MIN_ATTACK_TURNS = 1
MAX_ATTACK_TURNS = 10

# Below this share of dedicated DEFENSE units the militia is raised,
# civilians pad the target population and defender casualties rise.
MILITIA_THRESHOLD = 0.25
CIVILIAN_TARGET_SHARE = 0.25
UNDERGARRISON_CASUALTY_MULTIPLIER = 1.5

# Amplification factor: base x first matching (limit, factor)
AMP_FACTOR_BASE = 0.4
AMP_FACTOR_BREAKPOINTS = (
    (1000, 1.6),
    (5000, 1.5),
    (10000, 1.35),
    (50000, 1.2),
    (100000, 0.95),
    (150000, 0.75),
)

# Base casualty rate: (minimum ratio, low, high); first match wins
BASE_RATE_BUCKETS = (
    (5, 0.0015, 0.0018),
    (4, 0.00115, 0.0013),
    (3, 0.001, 0.00125),
    (2, 0.0009, 0.00105),
    (1, 0.00085, 0.00095),
    (0.5, 0.0005, 0.0006),
)
BASE_RATE_FLOOR = (0.0004, 0.00045)

# Undefended-but-fortified defender
FORT_CASUALTY_MULTIPLIER = 1.5

# Casualty caps as a share of the owner's population
CASUALTY_OVERWHELM_SHARE = 0.75
CASUALTY_CAP_SHARE = 0.05

# Fort damage: (max KS/DS ratio, low, high); first match wins
FORT_DAMAGE_TIERS = (
    (0.05, 0, 1),
    (0.5, 0, 3),
    (1.3, 3, 8),
)
FORT_DAMAGE_TOP_TIER = (6, 12)


# ============================================================================
# BATTLE: LOOT
# ============================================================================

LOOT_UNIFORM_RANGE = (0.90, 0.99)
LOOT_TURN_BASE = 100
LOOT_TURN_LOW_STEP = 10
LOOT_TURN_HIGH_STEP = 20
LOOT_TURN_DIVISOR = 371

LOOT_LEVEL_STEP = 0.05
LOOT_LEVEL_DIFF_MAX = 5
LOOT_LEVEL_FACTOR_MAX = 0.5

# Low-level defender protection: (first level, last level, start, end)
DEFENDER_LEVEL_PROTECTION = (
    (1, 9, 0.5, 0.75),
    (10, 15, 0.75, 1.0),
)
FULL_EXPOSURE_LEVEL = 15

# Defender whose fort was already down when the battle began
FORT_DOWN_LOOT_MULTIPLIER = 1.05


# ============================================================================
# BATTLE: EXPERIENCE
# ============================================================================

RESULT_WIN = "WIN"
RESULT_LOSS = "LOSS"

XP_PER_TURN_WIN = 120
XP_PER_TURN_LOSS = 60
XP_POWER_RATIO_CAP = 2.0
XP_UNIT_RATIO_CAP = 0.5
XP_VARIANCE = 0.03

GLOBAL_XP_BASE = 1000
GLOBAL_XP_PER_LEVEL = 100
GLOBAL_XP_FORT_DESTROYED = 500
GLOBAL_XP_WINNER_SHARE = 0.75


# ============================================================================
# ESPIONAGE
# ============================================================================

MISSION_INTEL = "INTEL"
MISSION_INFILTRATE = "INFILTRATE"
MISSION_ASSASSINATE = "ASSASSINATE"

MISSION_TYPES = (MISSION_INTEL, MISSION_INFILTRATE, MISSION_ASSASSINATE)

# Which spy tier each mission sends
MISSION_SPY_LEVEL = {
    MISSION_INTEL: 1,
    MISSION_INFILTRATE: 2,
    MISSION_ASSASSINATE: 3,
}

# Assassination targets
TARGET_OFFENSE = OFFENSE
TARGET_DEFENSE = DEFENSE
TARGET_CITIZEN_WORKERS = "CITIZEN_WORKERS"

ASSASSINATION_TARGETS = (TARGET_OFFENSE, TARGET_DEFENSE, TARGET_CITIZEN_WORKERS)

ASSASSINATION_TARGET_UNITS = {
    TARGET_OFFENSE: (OFFENSE,),
    TARGET_DEFENSE: (DEFENSE,),
    TARGET_CITIZEN_WORKERS: (CITIZEN, WORKER),
}

# Spy amplification factor: base x first matching (limit, factor)
SPY_AMP_FACTOR_BASE = 0.4
SPY_AMP_FACTOR_BREAKPOINTS = (
    (10, 1.6),
    (9, 1.5),
    (7, 1.35),
    (5, 1.2),
    (3, 0.95),
    (1, 0.75),
)

# Sentries that answer each spy sent, highest level first
SENTRY_RESPONSE_RATIO = 10

SPY_BASE_RATE_MAX = 0.001
SPY_CASUALTY_SCALE = 1000
SPY_RATIO_CAP = 10

# Share of the spies sent that is lost on a failed mission, before the
# defender's dominance pushes it toward all of them
FAIL_LOSS_FLOOR = 0.5

INTEL_PERCENT_PER_SPY = 10
MAX_INTEL_PERCENT = 100

INFILTRATION_DAMAGE_RANGE = (1, 3)
INFILTRATION_RATIO_CAP = 5
