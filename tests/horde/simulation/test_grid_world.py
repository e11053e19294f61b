# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for the in-memory GridWorld reference world."""

from __future__ import annotations

import random
from unittest.mock import patch

import pytest

from horde.simulation.grid_world import (
    BOSS_SPECIAL_CHARGES,
    GridWorld,
    PowerUpType,
    TileType,
)
from horde.simulation.position import Position
from horde.simulation.world import WorldModel


def _make_world() -> GridWorld:
    w = GridWorld(8, 8, rng=random.Random(1))
    w.place_player(Position(4, 4))
    w.add_enemy("grunt", Position(4, 5))
    return w


@pytest.mark.unit
class TestLayout:
    def test_implements_world_model(self):
        assert isinstance(GridWorld(5, 5), WorldModel)

    def test_border_is_wall(self):
        w = GridWorld(5, 4)
        assert w.tile(Position(0, 2)) is TileType.WALL
        assert w.tile(Position(4, 3)) is TileType.WALL
        assert w.is_walkable(Position(2, 2))

    def test_out_of_bounds_not_walkable(self):
        assert not GridWorld(5, 5).is_walkable(Position(-1, 2))

    def test_occupied_cells_not_walkable(self):
        w = _make_world()
        w.add_power_up(Position(2, 2))
        assert not w.is_walkable(Position(4, 4))
        assert not w.is_walkable(Position(4, 5))
        assert not w.is_walkable(Position(2, 2))

    def test_cannot_place_on_occupied_cell(self):
        w = _make_world()
        with pytest.raises(ValueError):
            w.add_enemy("other", Position(4, 4))

    def test_too_small(self):
        with pytest.raises(ValueError):
            GridWorld(2, 5)


@pytest.mark.unit
class TestEntities:
    def test_move_entity(self):
        w = _make_world()
        assert w.move_entity("grunt", Position(3, 5)) is True
        assert w.entity_position("grunt") == Position(3, 5)
        assert w.is_walkable(Position(4, 5))

    def test_move_into_wall_refused(self):
        w = _make_world()
        assert w.move_entity("grunt", Position(4, 7)) is False

    def test_dead_enemy_has_no_position(self):
        w = _make_world()
        w.damage_enemy("grunt", 500)
        assert w.entity_position("grunt") is None
        assert w.entity_by_name("grunt").alive is False

    def test_entity_by_name_snapshot(self):
        w = GridWorld(8, 8)
        w.add_enemy("hurt", Position(2, 2), health=20)
        ref = w.entity_by_name("hurt")
        assert ref.health_pts == 20
        assert ref.max_health_pts == 80
        assert ref.health_ratio == pytest.approx(0.25)

    def test_unknown_entity(self):
        assert GridWorld(5, 5).entity_by_name("nobody") is None

    def test_removed_player(self):
        w = _make_world()
        w.remove_player()
        assert w.player_position() is None
        assert w.player_is_alive() is False


@pytest.mark.unit
class TestCombat:
    def test_melee_hit_when_roll_beats_defense(self):
        w = _make_world()
        with patch.object(w._rng, "randint", return_value=20):
            assert w.melee_attack("grunt") is True
        assert w.player_stats().health == 150 - 12

    def test_melee_miss(self):
        w = _make_world()
        with patch.object(w._rng, "randint", return_value=12):
            assert w.melee_attack("grunt") is False
        assert w.player_stats().health == 150

    def test_melee_requires_adjacency(self):
        w = _make_world()
        w.move_entity("grunt", Position(2, 5))
        assert w.melee_attack("grunt") is False

    def test_special_attack_consumes_charges(self):
        w = GridWorld(8, 8)
        w.place_player(Position(4, 4))
        w.add_enemy("boss", Position(4, 3), boss=True)
        for _ in range(BOSS_SPECIAL_CHARGES):
            assert w.special_attack("boss") is True
        assert w.special_attack("boss") is False
        assert w.player_stats().health == 150 - BOSS_SPECIAL_CHARGES * 30

    def test_standard_enemy_has_no_special(self):
        assert _make_world().special_attack("grunt") is False

    def test_enhance_attributes(self):
        w = GridWorld(8, 8)
        w.add_enemy("boss", Position(2, 2), boss=True)
        w.enhance_attributes("boss")
        boss = w.enemy_stats("boss")
        assert (boss.health, boss.attack, boss.defense) == (300, 45, 45)


@pytest.mark.unit
class TestPowerUps:
    def test_nearest(self):
        w = GridWorld(10, 10)
        w.add_power_up(Position(1, 1))
        w.add_power_up(Position(6, 6))
        assert w.nearest_power_up_position(Position(5, 5)) == Position(6, 6)

    def test_none_left(self):
        assert GridWorld(5, 5).nearest_power_up_position(Position(2, 2)) is None

    def test_enemy_collects_when_adjacent(self):
        w = GridWorld(10, 10)
        w.add_enemy("hurt", Position(3, 3), health=20)
        w.add_power_up(Position(3, 4), PowerUpType.HEALTH)
        assert w.collect_power_up("hurt", Position(3, 4)) is True
        assert w.enemy_stats("hurt").health == 24
        assert w.is_walkable(Position(3, 4))
        assert w.collect_power_up("hurt", Position(3, 4)) is False

    def test_collect_out_of_reach(self):
        w = GridWorld(10, 10)
        w.add_enemy("far", Position(1, 1))
        w.add_power_up(Position(5, 5))
        assert w.collect_power_up("far", Position(5, 5)) is False

    def test_player_collects(self):
        w = GridWorld(10, 10)
        w.place_player(Position(2, 2))
        w.add_power_up(Position(2, 3), PowerUpType.ATTACK)
        assert w.player_collect_power_up(Position(2, 3)) is True
        assert w.player_stats().attack == 18
