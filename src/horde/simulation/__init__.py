# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Enemy simulation: agents, their behavior units and the world boundary."""

from .agent import EnemyAgent
from .coordinator import HordeCoordinator
from .directory import AgentDirectory, DirectoryEntry
from .enemy_state import EnemyState, Role
from .grid_world import GridWorld, PowerUpType, TileType
from .pathfinding import find_nearest_walkable, next_step
from .position import Position
from .world import EnemyRef, WorldModel

__all__ = [
    "AgentDirectory",
    "DirectoryEntry",
    "EnemyAgent",
    "EnemyRef",
    "EnemyState",
    "GridWorld",
    "HordeCoordinator",
    "Position",
    "PowerUpType",
    "Role",
    "TileType",
    "WorldModel",
    "find_nearest_walkable",
    "next_step",
]
