# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""End-to-end coordination scenarios driven tick by tick."""

from __future__ import annotations

import pytest

from horde.comms.envelope import (
    PLAYER_SPOTTED,
    RETREATING,
    RETREATING_POWER_UP_COLLECTED,
    Envelope,
    IntentKind,
)
from horde.simulation.behavior import ChasingPlayer, Covering, UnitKind
from horde.simulation.enemy_state import EnemyState
from horde.simulation.position import Position


@pytest.mark.unit
class TestScenarios:
    def test_spotter_alerts_idle_and_target_chasers(self, spawn, world, post_office):
        world.place_player(Position(4, 2))
        spotter = spawn("a", (2, 2))
        idle = spawn("b", (9, 9))
        chasing_target = spawn("c", (9, 10))
        chasing_target.update_state(EnemyState.CHASING_TARGET)
        attacker = spawn("d", (10, 10))
        attacker.update_state(EnemyState.ATTACKING)

        spotter.tick_once()

        assert spotter.main_unit.kind is UnitKind.CHASING_PLAYER
        expected = [Envelope("a", PLAYER_SPOTTED, "(4, 2)")]
        assert post_office.pending("b") == expected
        assert post_office.pending("c") == expected
        assert post_office.pending("d") == []
        assert post_office.pending("a") == []

    def test_wounded_chaser_retreats_and_calls_for_cover(self, spawn, world, post_office):
        world.place_player(Position(5, 2))
        world.add_power_up(Position(2, 6))
        hurt = spawn("hurt", (2, 2), health=20)
        hurt.replace_main(ChasingPlayer(1.0))
        hurt.update_state(EnemyState.CHASING_PLAYER)
        peer = spawn("peer", (2, 10))

        hurt.tick_once()

        assert hurt.main_unit.kind is UnitKind.RETREATING
        assert hurt.main_unit.target == Position(2, 6)
        assert hurt.state is EnemyState.RETREATING
        assert post_office.pending(peer.agent_id) == [
            Envelope("hurt", RETREATING, "hurt", IntentKind.REQUEST),
        ]

    def test_cover_then_release(self, spawn, world, post_office):
        """A full retreat: call for cover, guard answers, pickup releases the guard."""
        world.place_player(Position(10, 10))
        world.add_power_up(Position(3, 2))
        hurt = spawn("hurt", (2, 2), health=20)
        guard = spawn("guard", (6, 6))

        hurt.tick_once()
        assert hurt.main_unit.kind is UnitKind.RETREATING

        guard.tick_once()
        assert guard.main_unit.kind is UnitKind.COVERING
        assert guard.main_unit.ally_id == "hurt"

        hurt.tick_once()
        assert hurt.main_unit.kind is UnitKind.IDLE

        guard.tick_once()
        assert guard.main_unit.kind is UnitKind.IDLE
        assert guard.state is EnemyState.IDLE

    def test_covering_released_while_ally_alive(self, spawn, world, post_office):
        world.place_player(Position(10, 10))
        spawn("ally", (5, 5), health=30)
        guard = spawn("guard", (5, 8))
        guard.replace_main(Covering(0.5, "ally"))
        guard.update_state(EnemyState.COVERING)
        post_office.send(Envelope("ally", RETREATING_POWER_UP_COLLECTED, "(5, 4)"), ["guard"])

        guard.tick_once()

        assert guard.main_unit.kind is UnitKind.IDLE

    def test_malformed_position_ignored(self, spawn, world, post_office):
        world.place_player(Position(10, 10))
        grunt = spawn("grunt", (2, 2))
        post_office.send(Envelope("peer", PLAYER_SPOTTED, "4,2"), ["grunt"])

        grunt.tick_once()

        assert grunt.main_unit.kind is UnitKind.IDLE
        assert grunt.state is EnemyState.IDLE
