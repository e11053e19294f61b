# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""World-model boundary consumed by the behavior units.

The agents never own the game world.  They read positions, walkability and
liveness through ``WorldModel`` and delegate every mutation (moves, attacks,
power-up collection, boss enhancement) back to it.  ``GridWorld`` in
``grid_world.py`` is the in-memory reference implementation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .position import Position


class EntityKind(enum.Enum):
    PLAYER = "player"
    ENEMY = "enemy"


@dataclass(frozen=True)
class EnemyRef:
    """Read-only snapshot of one enemy entity."""

    name: str
    position: Position
    health_pts: int
    max_health_pts: int
    alive: bool = True
    is_boss: bool = False

    @property
    def health_ratio(self) -> float:
        if self.max_health_pts <= 0:
            return 0.0
        return self.health_pts / self.max_health_pts


@runtime_checkable
class WorldModel(Protocol):
    """Operations the agents consume from the game world."""

    def is_walkable(self, pos: Position) -> bool: ...

    def room_dimensions(self) -> tuple[int, int]: ...

    def entity_position(self, agent_id: str) -> Position | None: ...

    def player_position(self) -> Position | None: ...

    def player_is_alive(self) -> bool: ...

    def move_entity(self, agent_id: str, new_pos: Position) -> bool: ...

    def nearest_power_up_position(self, from_pos: Position) -> Position | None: ...

    def entity_by_name(self, name: str) -> EnemyRef | None: ...

    def melee_attack(self, agent_id: str) -> bool: ...

    def special_attack(self, agent_id: str) -> bool: ...

    def collect_power_up(self, agent_id: str, pos: Position) -> bool: ...

    def enhance_attributes(self, agent_id: str) -> None: ...
