"""
Tests for the attack and spy commands: validation reasons, rejection
errors and the attack-turn bookkeeping.
"""

import pytest

from war_engine.rules_consts import (
    CITIZEN, OFFENSE, DEFENSE, SPY,
    MISSION_INTEL, MISSION_INFILTRATE, MISSION_ASSASSINATE,
    TARGET_OFFENSE,
)
from war_engine.dice import make_rng
from war_engine.state.player_schema import build_player
from war_engine.state.progression import xp_required_for_level
from war_engine.commands.common import (
    MissionError, check_attack_turns, check_level_range, spend_attack_turns,
)
from war_engine.commands.attack import validate_attack, execute_attack
from war_engine.commands.spy import validate_spy_mission, execute_spy_mission


# ============================================================================
# TEST HELPERS
# ============================================================================

def make_player(player_id, units=(), **kwargs):
    """Build a player from (type, level, quantity) tuples."""
    return build_player(
        player_id,
        units=[{"type": t, "level": lvl, "quantity": q}
               for t, lvl, q in units],
        **kwargs,
    )


def make_attacker(**kwargs):
    kwargs.setdefault("attack_turns", 20)
    return make_player(1, [(OFFENSE, 4, 2000), (SPY, 1, 50), (SPY, 2, 20),
                           (SPY, 3, 5)], **kwargs)


def make_defender(**kwargs):
    kwargs.setdefault("gold", 100000)
    return make_player(2, [(DEFENSE, 1, 50), (CITIZEN, 1, 500)], **kwargs)


# ============================================================================
# COMMON
# ============================================================================

class TestCommon:

    def test_attack_turns(self):
        player = make_player(1, attack_turns=3)
        assert check_attack_turns(player, 3) == (True, None)
        valid, reason = check_attack_turns(player, 4)
        assert not valid
        assert "attack turns" in reason

    def test_level_range(self):
        attacker = make_player(1)
        assert check_level_range(attacker, make_player(2)) == (True, None)
        far = make_player(2, experience=xp_required_for_level(7))
        valid, reason = check_level_range(attacker, far)
        assert not valid
        assert "out of range" in reason

    def test_spend_never_negative(self):
        player = make_player(1, attack_turns=3)
        spend_attack_turns(player, 2)
        assert player["attack_turns"] == 1
        spend_attack_turns(player, 5)
        assert player["attack_turns"] == 0


# ============================================================================
# ATTACK
# ============================================================================

class TestValidateAttack:

    def test_valid(self):
        assert validate_attack(make_attacker(), make_defender(), 5) == \
            (True, None)

    def test_self_attack(self):
        attacker = make_attacker()
        valid, reason = validate_attack(attacker, attacker, 5)
        assert not valid
        assert "themselves" in reason

    def test_not_enough_turns(self):
        valid, reason = validate_attack(make_attacker(attack_turns=2),
                                        make_defender(), 5)
        assert not valid
        assert "attack turns" in reason

    def test_requested_turns_are_clamped(self):
        assert validate_attack(make_attacker(attack_turns=10),
                               make_defender(), 50) == (True, None)

    def test_no_offense(self):
        attacker = make_player(1, [(DEFENSE, 1, 10)], attack_turns=10)
        valid, reason = validate_attack(attacker, make_defender(), 5)
        assert not valid
        assert reason == "Attacker has no offensive strength"

    def test_out_of_range(self):
        defender = make_defender(experience=xp_required_for_level(10))
        valid, reason = validate_attack(make_attacker(), defender, 5)
        assert not valid
        assert "out of range" in reason


class TestExecuteAttack:

    def test_rejected_attack_raises(self):
        attacker = make_attacker(attack_turns=0)
        defender = make_defender()
        with pytest.raises(MissionError):
            execute_attack(attacker, defender, 5, rng=make_rng(1))
        assert defender["gold"] == 100000

    def test_spends_turns_and_moves_gold(self):
        attacker = make_attacker()
        defender = make_defender()
        result = execute_attack(attacker, defender, 4, rng=make_rng(7))
        assert attacker["attack_turns"] == 16
        assert attacker["gold"] == result["pillaged_gold"]
        assert defender["gold"] == 100000 - result["pillaged_gold"]
        assert attacker["experience"] == result["experience"]["attacker"]
        assert defender["experience"] == result["experience"]["defender"]

    def test_spends_clamped_turns(self):
        attacker = make_attacker()
        execute_attack(attacker, make_defender(), 0, rng=make_rng(7))
        assert attacker["attack_turns"] == 19


# ============================================================================
# SPY
# ============================================================================

class TestValidateSpyMission:

    def test_valid(self):
        assert validate_spy_mission(make_attacker(), make_defender(),
                                    MISSION_INTEL, 10) == (True, None)

    def test_unknown_mission(self):
        valid, reason = validate_spy_mission(make_attacker(),
                                             make_defender(), "SABOTAGE", 1)
        assert not valid
        assert "Unknown spy mission" in reason

    def test_self_target(self):
        attacker = make_attacker()
        valid, reason = validate_spy_mission(attacker, attacker,
                                             MISSION_INTEL, 1)
        assert not valid
        assert "themselves" in reason

    def test_assassination_needs_target(self):
        valid, reason = validate_spy_mission(make_attacker(),
                                             make_defender(),
                                             MISSION_ASSASSINATE, 1)
        assert not valid
        assert "assassination target" in reason

    def test_must_send_a_spy(self):
        valid, reason = validate_spy_mission(make_attacker(),
                                             make_defender(),
                                             MISSION_INTEL, 0)
        assert not valid
        assert "At least one spy" in reason

    def test_no_spy_offense(self):
        attacker = make_player(1, [(OFFENSE, 1, 10)])
        valid, reason = validate_spy_mission(attacker, make_defender(),
                                             MISSION_INTEL, 1)
        assert not valid
        assert reason == "Insufficient spy offense"

    def test_insufficient_assassins(self):
        valid, reason = validate_spy_mission(make_attacker(),
                                             make_defender(),
                                             MISSION_ASSASSINATE, 6,
                                             TARGET_OFFENSE)
        assert not valid
        assert reason.startswith("Insufficient assassins")

    def test_insufficient_tier(self):
        attacker = make_player(3, [(SPY, 1, 50)])
        valid, reason = validate_spy_mission(attacker, make_defender(),
                                             MISSION_INFILTRATE, 1)
        assert not valid
        assert reason.startswith("Insufficient level 2 spies")


class TestExecuteSpyMission:

    def test_rejected_mission_raises(self):
        with pytest.raises(MissionError):
            execute_spy_mission(make_attacker(), make_defender(),
                                MISSION_INTEL, 0, rng=make_rng(1))

    def test_dispatch_and_no_turn_cost(self):
        attacker = make_attacker()
        defender = make_defender()
        for mission, target in ((MISSION_INTEL, None),
                                (MISSION_INFILTRATE, None),
                                (MISSION_ASSASSINATE, TARGET_OFFENSE)):
            result = execute_spy_mission(attacker, defender, mission, 1,
                                         target, rng=make_rng(3))
            assert result["mission"] == mission
        assert attacker["attack_turns"] == 20
