"""
Tests for the catalog module.

Covers record construction from rules_consts, lookup misses, the
fortification error path and race/class bonus resolution.
"""

import pytest

from war_engine.rules_consts import (
    CITIZEN, WORKER, OFFENSE, DEFENSE, SPY, SENTRY,
    WEAPON, HELM, ARMOR,
    HUMAN, GOBLIN, UNDEAD, ELF, FIGHTER, CLERIC, THIEF, ASSASSIN,
    BONUS_OFFENSE, BONUS_DEFENSE, BONUS_INTEL, BONUS_INCOME,
    UNIT_CATALOG, ITEM_CATALOG, FORTIFICATION_CATALOG,
)
from war_engine.catalog.catalog_data import (
    CatalogError, FortificationNotFound,
    ALL_UNIT_DATA, ALL_ITEM_DATA, ALL_FORTIFICATION_DATA,
    get_unit_data, get_item_data, get_battle_upgrade_data,
    get_fortification, find_fortification,
    get_race_class_bonus, get_available_unit_types, get_available_items,
)


class TestUnitData:

    def test_every_row_is_indexed(self):
        assert len(ALL_UNIT_DATA) == len(UNIT_CATALOG)

    def test_offense_level_one(self):
        unit = get_unit_data(OFFENSE, 1)
        assert unit.bonus == 5
        assert unit.killing_strength == 5
        assert unit.defense_strength == 2

    def test_defense_is_mirror_of_offense(self):
        for level in range(1, 5):
            attack = get_unit_data(OFFENSE, level)
            guard = get_unit_data(DEFENSE, level)
            assert attack.killing_strength == guard.defense_strength
            assert attack.defense_strength == guard.killing_strength

    def test_civilians_have_no_bonus(self):
        assert get_unit_data(CITIZEN, 1).bonus == 0
        assert get_unit_data(WORKER, 1).bonus == 0

    def test_missing_unit_is_none(self):
        assert get_unit_data(SPY, 9) is None
        assert get_unit_data("DRAGON", 1) is None

    def test_records_reject_new_attributes(self):
        unit = get_unit_data(SENTRY, 1)
        with pytest.raises(AttributeError):
            unit.colour = "red"


class TestItemData:

    def test_every_row_is_indexed(self):
        assert len(ALL_ITEM_DATA) == len(ITEM_CATALOG)

    def test_weapons_kill_and_gear_absorbs(self):
        weapon = get_item_data(OFFENSE, WEAPON, 1)
        helm = get_item_data(OFFENSE, HELM, 1)
        assert weapon.killing_strength > weapon.defense_strength
        assert helm.defense_strength > helm.killing_strength

    def test_sentry_weapons_absorb(self):
        weapon = get_item_data(SENTRY, WEAPON, 1)
        assert weapon.defense_strength == weapon.bonus
        assert weapon.killing_strength < weapon.defense_strength

    def test_lookup_is_keyed_by_usage(self):
        assert get_item_data(DEFENSE, ARMOR, 3).usage == DEFENSE
        assert get_item_data(SENTRY, ARMOR, 1) is None


class TestBattleUpgradeData:

    def test_lookup(self):
        upgrade = get_battle_upgrade_data(OFFENSE, 1)
        assert upgrade.units_covered >= 1
        assert upgrade.min_unit_level >= 1

    def test_missing_upgrade_is_none(self):
        assert get_battle_upgrade_data(OFFENSE, 7) is None


class TestFortifications:

    def test_every_level_is_indexed(self):
        assert len(ALL_FORTIFICATION_DATA) == len(FORTIFICATION_CATALOG)
        assert sorted(ALL_FORTIFICATION_DATA) == list(
            range(1, len(FORTIFICATION_CATALOG) + 1)
        )

    def test_hitpoints_and_bonus_grow(self):
        previous = None
        for level in sorted(ALL_FORTIFICATION_DATA):
            fort = get_fortification(level)
            if previous is not None:
                assert fort.hitpoints > previous.hitpoints
                assert fort.defense_bonus_percent > \
                    previous.defense_bonus_percent
            previous = fort

    def test_unknown_level_raises(self):
        with pytest.raises(FortificationNotFound) as excinfo:
            get_fortification(99)
        assert excinfo.value.level == 99

    def test_not_found_is_catalog_error(self):
        with pytest.raises(CatalogError):
            get_fortification(0)

    def test_find_returns_none(self):
        assert find_fortification(99) is None
        assert find_fortification(1).name == "Manor"


class TestRaceClassBonus:

    def test_race_and_class_stack(self):
        assert get_race_class_bonus(HUMAN, FIGHTER, BONUS_OFFENSE) == 10

    def test_only_matching_type_counts(self):
        assert get_race_class_bonus(HUMAN, FIGHTER, BONUS_DEFENSE) == 0
        assert get_race_class_bonus(GOBLIN, CLERIC, BONUS_DEFENSE) == 10

    def test_class_only(self):
        assert get_race_class_bonus(UNDEAD, ASSASSIN, BONUS_INTEL) == 5
        assert get_race_class_bonus(ELF, THIEF, BONUS_INCOME) == 5


class TestAvailableUnitTypes:

    def test_low_fort_only_trains_level_one(self):
        levels = {unit.level for unit in get_available_unit_types(1)}
        assert levels == {1}

    def test_higher_fort_unlocks_levels(self):
        available = {(u.type, u.level) for u in get_available_unit_types(12)}
        assert (OFFENSE, 3) in available
        assert (OFFENSE, 4) not in available


class TestAvailableItems:

    def test_bare_armory_sells_starter_gear(self):
        items = get_available_items(SENTRY, 0)
        assert [(i.type, i.level) for i in items] == [(WEAPON, 1)]

    def test_armory_level_unlocks_items(self):
        levels = {i.level for i in get_available_items(SENTRY, 2)}
        assert levels == {1, 2, 3}

    def test_only_requested_usage(self):
        assert {i.usage for i in get_available_items(SPY, 3)} == {SPY}
        assert len(get_available_items(SPY, 3)) > len(
            get_available_items(SPY, 0)
        )
