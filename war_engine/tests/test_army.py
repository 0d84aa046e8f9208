"""
Tests for the army modules: bonus percentages, equipment allocation and
strength queries.

Expected figures are worked out by hand from the catalog rows in
rules_consts; each test notes the arithmetic.
"""

import copy

import pytest

from war_engine.rules_consts import (
    CITIZEN, WORKER, OFFENSE, DEFENSE, SPY, SENTRY,
    WEAPON, HELM,
    HUMAN, GOBLIN, ELF, FIGHTER, CLERIC, ASSASSIN,
    BONUS_OFFENSE, BONUS_DEFENSE, BONUS_INTEL,
    STRUCTURE_OFFENSE, STRUCTURE_SPY,
    STAT_CATEGORIES,
)
from war_engine.state.player_schema import build_player
from war_engine.army.bonuses import (
    get_bonus_percent, apply_bonus, fortification_bonus, structure_bonus,
)
from war_engine.army.allocation import (
    allocate_items, allocate_battle_upgrades,
)
from war_engine.army.strength import (
    select_unit_stacks, usable_battle_upgrades,
    get_stat, get_combat_strength, calculate_clandestine_strength,
    get_spy_strength, get_sentry_strength, get_civilian_strength,
)


# ============================================================================
# TEST HELPERS
# ============================================================================

def make_player(units=(), items=(), upgrades=(), race=ELF,
                player_class=CLERIC, **kwargs):
    """Build a player from compact tuples.

    ELF/CLERIC carries no OFFENSE or INTEL bonus, so strength figures
    only pick up the bonuses a test asks for.

    Args:
        units: (type, level, quantity) tuples.
        items: (usage, type, level, quantity) tuples.
        upgrades: (type, level, quantity) tuples.
    """
    return build_player(
        1, race=race, player_class=player_class,
        units=[{"type": t, "level": lvl, "quantity": q}
               for t, lvl, q in units],
        items=[{"usage": u, "type": t, "level": lvl, "quantity": q}
               for u, t, lvl, q in items],
        battle_upgrades=[{"type": t, "level": lvl, "quantity": q}
                         for t, lvl, q in upgrades],
        **kwargs,
    )


def stacks(*entries):
    return [{"type": t, "level": lvl, "quantity": q} for t, lvl, q in entries]


# ============================================================================
# BONUSES
# ============================================================================

class TestBonusPercent:

    def test_offense(self):
        # HUMAN 5 + FIGHTER 5 + proficiency 3 + structure level 2 (10)
        player = make_player(race=HUMAN, player_class=FIGHTER,
                             bonus_points={BONUS_OFFENSE: 3},
                             structure_upgrades={STRUCTURE_OFFENSE: 2})
        assert get_bonus_percent(player, OFFENSE) == 23

    def test_defense_uses_fortification(self):
        # GOBLIN 5 + CLERIC 5 + proficiency 2 + Outpost 20
        player = make_player(race=GOBLIN, player_class=CLERIC,
                             bonus_points={BONUS_DEFENSE: 2}, fort_level=4)
        assert get_bonus_percent(player, DEFENSE) == 32

    def test_spy_and_sentry_share_intel(self):
        # ASSASSIN 5 + INTEL proficiency 4; SPY structure 3 (15)
        player = make_player(player_class=ASSASSIN,
                             bonus_points={BONUS_INTEL: 4},
                             structure_upgrades={STRUCTURE_SPY: 3})
        assert get_bonus_percent(player, SPY) == 24
        assert get_bonus_percent(player, SENTRY) == 9

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            get_bonus_percent(make_player(), CITIZEN)

    def test_unknown_levels_contribute_nothing(self):
        player = make_player(structure_upgrades={STRUCTURE_OFFENSE: 99})
        player["fort_level"] = 99
        assert structure_bonus(player, STRUCTURE_OFFENSE) == 0
        assert fortification_bonus(player) == 0


class TestApplyBonus:

    def test_exact(self):
        assert apply_bonus(100, 5) == 105

    def test_rounds_up(self):
        # 101 * 1.05 = 106.05
        assert apply_bonus(101, 5) == 107

    def test_zero_total(self):
        assert apply_bonus(0, 50) == 0

    def test_no_bonus(self):
        assert apply_bonus(7, 0) == 7


# ============================================================================
# ALLOCATION
# ============================================================================

class TestAllocateItems:

    def test_highest_items_to_highest_units(self):
        units = stacks((OFFENSE, 1, 10), (OFFENSE, 2, 4))
        items = [
            {"usage": OFFENSE, "type": WEAPON, "level": 2, "quantity": 3},
            {"usage": OFFENSE, "type": WEAPON, "level": 1, "quantity": 20},
            {"usage": OFFENSE, "type": HELM, "level": 1, "quantity": 5},
            {"usage": DEFENSE, "type": WEAPON, "level": 1, "quantity": 100},
        ]
        allocations = allocate_items(units, items, OFFENSE)
        assert [
            (a.unit_level, a.item.type, a.item.level, a.quantity)
            for a in allocations
        ] == [
            (2, WEAPON, 2, 3),
            (2, WEAPON, 1, 1),
            (1, WEAPON, 1, 10),
            (2, HELM, 1, 4),
            (1, HELM, 1, 1),
        ]

    def test_one_item_per_type_per_unit(self):
        units = stacks((OFFENSE, 1, 5))
        items = [
            {"usage": OFFENSE, "type": WEAPON, "level": 1, "quantity": 50},
        ]
        allocations = allocate_items(units, items, OFFENSE)
        assert sum(a.quantity for a in allocations) == 5

    def test_uncatalogued_items_are_skipped(self):
        units = stacks((OFFENSE, 1, 5))
        items = [
            {"usage": OFFENSE, "type": WEAPON, "level": 99, "quantity": 5},
            {"usage": OFFENSE, "type": WEAPON, "level": 1, "quantity": 5},
        ]
        allocations = allocate_items(units, items, OFFENSE)
        assert [(a.item.level, a.quantity) for a in allocations] == [(1, 5)]

    def test_no_units(self):
        items = [
            {"usage": OFFENSE, "type": WEAPON, "level": 1, "quantity": 5},
        ]
        assert allocate_items([], items, OFFENSE) == ()

    def test_input_is_not_modified(self):
        units = stacks((OFFENSE, 1, 5))
        items = [
            {"usage": OFFENSE, "type": WEAPON, "level": 1, "quantity": 3},
        ]
        before = copy.deepcopy((units, items))
        allocate_items(units, items, OFFENSE)
        assert (units, items) == before


class TestAllocateBattleUpgrades:

    def test_highest_upgrade_first_and_shared_coverage(self):
        # Catapult: 1 unit each, min unit level 2
        # Guard Tower: 5 units each, min unit level 2
        units = stacks((DEFENSE, 1, 10), (DEFENSE, 2, 7), (DEFENSE, 3, 4))
        upgrades = [
            {"type": DEFENSE, "level": 1, "quantity": 2},
            {"type": DEFENSE, "level": 2, "quantity": 2},
        ]
        allocations = allocate_battle_upgrades(units, upgrades, DEFENSE)
        assert [
            (a.unit_level, a.upgrade.level, a.units, a.stock_used)
            for a in allocations
        ] == [
            (3, 2, 2, 2),
            (3, 1, 2, 1),
            (2, 1, 5, 1),
        ]

    def test_coverage_never_exceeds_capacity(self):
        units = stacks((DEFENSE, 2, 1000))
        upgrades = [{"type": DEFENSE, "level": 1, "quantity": 3}]
        allocations = allocate_battle_upgrades(units, upgrades, DEFENSE)
        assert sum(a.units for a in allocations) == 15
        assert sum(a.stock_used for a in allocations) == 3

    def test_low_level_units_not_covered(self):
        units = stacks((OFFENSE, 1, 10))
        upgrades = [{"type": OFFENSE, "level": 1, "quantity": 10}]
        assert allocate_battle_upgrades(units, upgrades, OFFENSE) == ()


# ============================================================================
# STRENGTH
# ============================================================================

class TestSelectUnitStacks:

    def test_cap_takes_highest_level_first(self):
        player = make_player([(SPY, 1, 10), (SPY, 2, 5), (SPY, 3, 2)])
        selected = select_unit_stacks(player, (SPY,), spies_sent=6)
        assert [(s["level"], s["quantity"]) for s in selected] == [
            (3, 2), (2, 4),
        ]

    def test_level_filter(self):
        player = make_player([(SPY, 1, 10), (SPY, 2, 5)])
        selected = select_unit_stacks(player, (SPY,), unit_level=1)
        assert [(s["level"], s["quantity"]) for s in selected] == [(1, 10)]

    def test_returns_copies(self):
        player = make_player([(SPY, 1, 10)])
        selected = select_unit_stacks(player, (SPY,))
        selected[0]["quantity"] = 0
        assert player["units"][0]["quantity"] == 10


class TestUsableBattleUpgrades:

    def test_defense_upgrades_gated_by_fort(self):
        upgrades = [(DEFENSE, 1, 1), (DEFENSE, 2, 1)]
        assert usable_battle_upgrades(
            make_player(upgrades=upgrades, fort_level=5), DEFENSE) == []
        assert len(usable_battle_upgrades(
            make_player(upgrades=upgrades, fort_level=6), DEFENSE)) == 2

    def test_offense_upgrades_gated_by_structure(self):
        player = make_player(upgrades=[(OFFENSE, 1, 1)],
                             structure_upgrades={STRUCTURE_OFFENSE: 6})
        assert len(usable_battle_upgrades(player, OFFENSE)) == 1


class TestGetStat:

    def test_empty_player_is_zero(self):
        player = make_player()
        for category in STAT_CATEGORIES:
            assert get_stat(player, category) == 0

    def test_units_items_and_bonus(self):
        # 10 x 5 + 4 x 25 (Dagger) + 10 x 6 (Padded Hood) = 210; +10%
        player = make_player(
            [(OFFENSE, 1, 10)],
            [(OFFENSE, WEAPON, 1, 4), (OFFENSE, HELM, 1, 10)],
            race=HUMAN, player_class=FIGHTER,
        )
        assert get_stat(player, OFFENSE) == 231

    def test_item_types_are_additive(self):
        # 5 (unit) + 50 (level 2 weapon) + 6 (helm); level 1 weapon idle
        player = make_player(
            [(OFFENSE, 1, 1)],
            [(OFFENSE, WEAPON, 1, 1), (OFFENSE, WEAPON, 2, 1),
             (OFFENSE, HELM, 1, 1)],
        )
        assert get_stat(player, OFFENSE) == 61

    def test_battle_upgrades_need_structure(self):
        units = [(OFFENSE, 2, 3)]
        upgrades = [(OFFENSE, 1, 2)]
        assert get_stat(make_player(units, upgrades=upgrades),
                        OFFENSE) == 45
        # (45 + 2 x 200) x 1.30 = 578.5
        player = make_player(units, upgrades=upgrades,
                             structure_upgrades={STRUCTURE_OFFENSE: 6})
        assert get_stat(player, OFFENSE) == 579

    def test_uncatalogued_units_count_zero(self):
        player = make_player([(OFFENSE, 9, 100)])
        assert get_stat(player, OFFENSE) == 0

    def test_idempotent_and_read_only(self):
        player = make_player(
            [(DEFENSE, 1, 10), (DEFENSE, 2, 3)],
            [(DEFENSE, WEAPON, 1, 7)],
            upgrades=[(DEFENSE, 1, 1)], fort_level=6,
        )
        before = copy.deepcopy(player)
        first = get_stat(player, DEFENSE)
        assert get_stat(player, DEFENSE) == first
        assert player == before

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            get_stat(make_player(), WORKER)


class TestGetCombatStrength:

    def test_killing_and_defense_tracked_apart(self):
        # KS: 10 x 5 + 4 x 25 + 10 x 1 = 160 -> 176
        # DS: 10 x 2 + 4 x 5 + 10 x 6 = 100 -> 110
        player = make_player(
            [(OFFENSE, 1, 10)],
            [(OFFENSE, WEAPON, 1, 4), (OFFENSE, HELM, 1, 10)],
            race=HUMAN, player_class=FIGHTER,
        )
        assert get_combat_strength(player, OFFENSE) == {
            "killing_strength": 176, "defense_strength": 110,
        }

    def test_empty_player_is_zero(self):
        assert get_combat_strength(make_player(), DEFENSE) == {
            "killing_strength": 0, "defense_strength": 0,
        }

    def test_militia_joins_thin_defense(self):
        # Manor gives +5% DEFENSE. Guards alone: KS 20, DS 50.
        # Militia: citizens KS 100 DS 100, workers KS 50 DS 100.
        player = make_player(
            [(DEFENSE, 1, 10), (CITIZEN, 1, 100), (WORKER, 1, 50)],
            race=HUMAN, player_class=FIGHTER,
        )
        assert get_combat_strength(player, DEFENSE) == {
            "killing_strength": 21, "defense_strength": 53,
        }
        assert get_combat_strength(player, DEFENSE,
                                   include_civilians=True) == {
            "killing_strength": 179, "defense_strength": 263,
        }

    def test_militia_stays_home_when_garrisoned(self):
        player = make_player([(DEFENSE, 1, 50), (CITIZEN, 1, 100)])
        assert get_combat_strength(player, DEFENSE, include_civilians=True) \
            == get_combat_strength(player, DEFENSE)

    def test_spies_sent_and_level_filter(self):
        player = make_player([(SPY, 1, 10), (SPY, 2, 5), (SPY, 3, 2)])
        assert get_combat_strength(player, SPY, spies_sent=6) == {
            "killing_strength": 120, "defense_strength": 48,
        }
        assert get_combat_strength(player, SPY, spies_sent=3,
                                   unit_level=2) == {
            "killing_strength": 45, "defense_strength": 18,
        }

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            get_combat_strength(make_player(), "DRAGON")


class TestClandestineStrength:

    def test_wraps_combat_strength(self):
        player = make_player([(SENTRY, 2, 4)])
        assert calculate_clandestine_strength(player, SENTRY, 10) == \
            get_combat_strength(player, SENTRY, spies_sent=10)

    def test_rejects_open_categories(self):
        with pytest.raises(ValueError):
            calculate_clandestine_strength(make_player(), OFFENSE, 1)

    def test_spy_strength_level_one_only(self):
        # 4 spies: KS 20 DS 8; 3 Slings: KS 75 DS 15
        player = make_player(
            [(SPY, 1, 10), (SPY, 2, 5)], [(SPY, WEAPON, 1, 3)],
        )
        assert get_spy_strength(player, 4) == {
            "killing_strength": 95, "defense_strength": 23,
        }

    def test_sentry_strength_caps_weapons_at_units(self):
        # 5 sentries: KS 10 DS 25; 5 of 10 Slings: KS 25 DS 125
        player = make_player(
            [(SENTRY, 1, 5)], [(SENTRY, WEAPON, 1, 10)],
        )
        assert get_sentry_strength(player, 8) == {
            "killing_strength": 35, "defense_strength": 150,
        }

    def test_civilian_strength(self):
        player = make_player([(CITIZEN, 1, 10), (WORKER, 1, 20)])
        assert get_civilian_strength(player) == {
            "killing_strength": 30, "defense_strength": 50,
        }
