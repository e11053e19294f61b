# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""GridWorld — in-memory single-room world for tests and the demo.

One rectangular room of tiles with a wall border, one player, any number
of named enemies and some power-ups.  Every method takes the world lock,
so the agents' timer threads and the move workers can share one instance.

Combat numbers follow the dungeon's tabletop roots: melee is a D20 roll
that hits when it beats the defender's defense, and a hit deals the
attacker's full attack value.
"""

from __future__ import annotations

import enum
import random
import threading
from dataclasses import dataclass

from loguru import logger

from .position import Position
from .world import EnemyRef

# Stat lines: (health, attack, defense)
PLAYER_STATS = (150, 15, 12)
STANDARD_ENEMY_STATS = (80, 12, 12)
BOSS_STATS = (150, 15, 15)
BOSS_SPECIAL_CHARGES = 3

POWER_UP_BOOST = 0.2
# Boss enhancement multipliers applied on top of the current values
BOSS_HEALTH_BOOST = 1.0
BOSS_ATTACK_BOOST = 2.0
BOSS_DEFENSE_BOOST = 2.0

_D20 = 20


class TileType(enum.Enum):
    EMPTY = "."
    WALL = "#"
    PLAYER = "@"
    ENEMY = "E"
    POWERUP = "+"


class PowerUpType(enum.Enum):
    HEALTH = "health"
    ATTACK = "attack"
    DEFENSE = "defense"


@dataclass
class Fighter:
    name: str
    position: Position
    health: int
    max_health: int
    attack: int
    defense: int
    is_boss: bool = False
    special_charges: int = 0

    @property
    def alive(self) -> bool:
        return self.health > 0

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - amount)

    def boost(self, kind: PowerUpType, ratio: float) -> None:
        if kind is PowerUpType.HEALTH:
            self.health += int(self.health * ratio)
        elif kind is PowerUpType.ATTACK:
            self.attack += int(self.attack * ratio)
        else:
            self.defense += int(self.defense * ratio)


class GridWorld:
    """Lock-protected reference ``WorldModel``."""

    def __init__(self, width: int, height: int, rng: random.Random | None = None) -> None:
        if width < 3 or height < 3:
            raise ValueError(f"room too small: {width}x{height}")
        self.width = width
        self.height = height
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._tiles: list[list[TileType]] = [
            [self._border_or_empty(x, y) for y in range(height)] for x in range(width)
        ]
        self._player: Fighter | None = None
        self._enemies: dict[str, Fighter] = {}
        self._power_ups: dict[Position, PowerUpType] = {}

    def _border_or_empty(self, x: int, y: int) -> TileType:
        if x in (0, self.width - 1) or y in (0, self.height - 1):
            return TileType.WALL
        return TileType.EMPTY

    # -- Building the room ---------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def tile(self, pos: Position) -> TileType:
        with self._lock:
            if not self.in_bounds(pos):
                return TileType.WALL
            return self._tiles[pos.x][pos.y]

    def _set_tile(self, pos: Position, tile: TileType) -> None:
        self._tiles[pos.x][pos.y] = tile

    def _place(self, pos: Position, tile: TileType) -> None:
        if not self.in_bounds(pos) or self._tiles[pos.x][pos.y] is not TileType.EMPTY:
            raise ValueError(f"cannot place {tile.name} at {pos}: cell not free")
        self._set_tile(pos, tile)

    def add_wall(self, pos: Position) -> None:
        with self._lock:
            self._place(pos, TileType.WALL)

    def place_player(self, pos: Position, stats: tuple[int, int, int] = PLAYER_STATS) -> None:
        health, attack, defense = stats
        with self._lock:
            if self._player is not None and self._player.alive:
                self._set_tile(self._player.position, TileType.EMPTY)
            self._place(pos, TileType.PLAYER)
            self._player = Fighter("player", pos, health, health, attack, defense)

    def add_enemy(
        self,
        name: str,
        pos: Position,
        boss: bool = False,
        health: int | None = None,
    ) -> None:
        base = BOSS_STATS if boss else STANDARD_ENEMY_STATS
        max_health, attack, defense = base
        with self._lock:
            if name in self._enemies:
                raise ValueError(f"enemy {name!r} already exists")
            self._place(pos, TileType.ENEMY)
            self._enemies[name] = Fighter(
                name, pos,
                health=max_health if health is None else health,
                max_health=max_health,
                attack=attack,
                defense=defense,
                is_boss=boss,
                special_charges=BOSS_SPECIAL_CHARGES if boss else 0,
            )

    def add_power_up(self, pos: Position, kind: PowerUpType = PowerUpType.HEALTH) -> None:
        with self._lock:
            self._place(pos, TileType.POWERUP)
            self._power_ups[pos] = kind

    def enemy_names(self) -> list[str]:
        with self._lock:
            return list(self._enemies)

    def boss_name(self) -> str | None:
        with self._lock:
            for enemy in self._enemies.values():
                if enemy.is_boss:
                    return enemy.name
        return None

    def power_up_positions(self) -> list[Position]:
        with self._lock:
            return list(self._power_ups)

    # -- Direct manipulation (player side, tests) ----------------------------

    def damage_enemy(self, name: str, amount: int) -> None:
        with self._lock:
            enemy = self._enemies[name]
            enemy.take_damage(amount)
            if not enemy.alive:
                self._set_tile(enemy.position, TileType.EMPTY)
                logger.info(f"{name} was slain")

    def damage_player(self, amount: int) -> None:
        with self._lock:
            if self._player is None:
                return
            self._player.take_damage(amount)
            if not self._player.alive:
                self._set_tile(self._player.position, TileType.EMPTY)
                logger.info("Player was slain")

    def remove_player(self) -> None:
        with self._lock:
            if self._player is not None and self._player.alive:
                self._set_tile(self._player.position, TileType.EMPTY)
            self._player = None

    def move_player(self, new_pos: Position) -> bool:
        with self._lock:
            if self._player is None or not self._player.alive:
                return False
            if not self._is_walkable(new_pos):
                return False
            self._set_tile(self._player.position, TileType.EMPTY)
            self._set_tile(new_pos, TileType.PLAYER)
            self._player.position = new_pos
            return True

    def player_collect_power_up(self, pos: Position) -> bool:
        """Let the player pick up the power-up at *pos* if adjacent."""
        with self._lock:
            if self._player is None or not self._player.alive:
                return False
            return self._collect(self._player, pos)

    def player_stats(self) -> Fighter | None:
        with self._lock:
            return self._player

    def enemy_stats(self, name: str) -> Fighter | None:
        with self._lock:
            return self._enemies.get(name)

    # -- WorldModel ----------------------------------------------------------

    def is_walkable(self, pos: Position) -> bool:
        with self._lock:
            return self._is_walkable(pos)

    def _is_walkable(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self._tiles[pos.x][pos.y] is TileType.EMPTY

    def room_dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    def entity_position(self, agent_id: str) -> Position | None:
        with self._lock:
            enemy = self._enemies.get(agent_id)
            if enemy is None or not enemy.alive:
                return None
            return enemy.position

    def player_position(self) -> Position | None:
        with self._lock:
            if self._player is None or not self._player.alive:
                return None
            return self._player.position

    def player_is_alive(self) -> bool:
        with self._lock:
            return self._player is not None and self._player.alive

    def move_entity(self, agent_id: str, new_pos: Position) -> bool:
        with self._lock:
            enemy = self._enemies.get(agent_id)
            if enemy is None or not enemy.alive:
                return False
            if not self._is_walkable(new_pos):
                return False
            self._set_tile(enemy.position, TileType.EMPTY)
            self._set_tile(new_pos, TileType.ENEMY)
            enemy.position = new_pos
            return True

    def nearest_power_up_position(self, from_pos: Position) -> Position | None:
        with self._lock:
            if not self._power_ups:
                return None
            return min(self._power_ups, key=from_pos.distance_to)

    def entity_by_name(self, name: str) -> EnemyRef | None:
        with self._lock:
            enemy = self._enemies.get(name)
            if enemy is None:
                return None
            return EnemyRef(
                name=enemy.name,
                position=enemy.position,
                health_pts=enemy.health,
                max_health_pts=enemy.max_health,
                alive=enemy.alive,
                is_boss=enemy.is_boss,
            )

    def melee_attack(self, agent_id: str) -> bool:
        with self._lock:
            enemy, player = self._engaged(agent_id)
            if enemy is None or player is None:
                return False
            roll = self._rng.randint(1, _D20)
            if roll <= player.defense:
                return False
            self.damage_player(enemy.attack)
            return True

    def special_attack(self, agent_id: str) -> bool:
        with self._lock:
            enemy, player = self._engaged(agent_id)
            if enemy is None or player is None or enemy.special_charges <= 0:
                return False
            enemy.special_charges -= 1
            self.damage_player(enemy.attack * 2)
            return True

    def collect_power_up(self, agent_id: str, pos: Position) -> bool:
        with self._lock:
            enemy = self._enemies.get(agent_id)
            if enemy is None or not enemy.alive:
                return False
            return self._collect(enemy, pos)

    def enhance_attributes(self, agent_id: str) -> None:
        with self._lock:
            enemy = self._enemies.get(agent_id)
            if enemy is None or not enemy.alive:
                return
            enemy.health += int(enemy.health * BOSS_HEALTH_BOOST)
            enemy.attack += int(enemy.attack * BOSS_ATTACK_BOOST)
            enemy.defense += int(enemy.defense * BOSS_DEFENSE_BOOST)
            logger.info(
                f"{agent_id} enhanced: hp={enemy.health} atk={enemy.attack} def={enemy.defense}"
            )

    # -- Internals (caller holds the lock) -----------------------------------

    def _engaged(self, agent_id: str) -> tuple[Fighter | None, Fighter | None]:
        enemy = self._enemies.get(agent_id)
        player = self._player
        if enemy is None or not enemy.alive or player is None or not player.alive:
            return None, None
        if not enemy.position.is_adjacent(player.position):
            return None, None
        return enemy, player

    def _collect(self, collector: Fighter, pos: Position) -> bool:
        kind = self._power_ups.get(pos)
        if kind is None or not collector.position.is_adjacent(pos):
            return False
        del self._power_ups[pos]
        self._set_tile(pos, TileType.EMPTY)
        collector.boost(kind, POWER_UP_BOOST)
        logger.debug(f"{collector.name} collected {kind.value} power-up at {pos}")
        return True

    def render(self) -> str:
        """ASCII snapshot of the room, one row per line."""
        with self._lock:
            return "\n".join(
                "".join(self._tiles[x][y].value for x in range(self.width))
                for y in range(self.height)
            )
