# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Shared fixtures: a small walled room and an agent factory bound to it."""

from __future__ import annotations

import random

import pytest

from horde.comms.event_bus import EventBus
from horde.comms.mailbox import PostOffice
from horde.simulation.agent import EnemyAgent
from horde.simulation.directory import AgentDirectory
from horde.simulation.enemy_state import Role
from horde.simulation.grid_world import GridWorld
from horde.simulation.position import Position
from horde.simulation.scheduler import MoveDispatcher


@pytest.fixture
def world() -> GridWorld:
    # 12x12 with a wall border: interior cells are 1..10 on both axes
    return GridWorld(12, 12, rng=random.Random(7))


@pytest.fixture
def directory() -> AgentDirectory:
    return AgentDirectory()


@pytest.fixture
def post_office() -> PostOffice:
    return PostOffice()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def events(bus):
    return bus.subscribe()


@pytest.fixture
def spawn(world, directory, post_office, bus, settings, inline_executor):
    """Factory: place an enemy in the world and return its set-up agent."""
    dispatcher = MoveDispatcher(executor=inline_executor)

    def _spawn(
        agent_id: str,
        pos: tuple[int, int],
        *,
        health: int | None = None,
        boss: bool = False,
        boss_id: str | None = None,
        seed: int = 0,
    ) -> EnemyAgent:
        world.add_enemy(agent_id, Position(*pos), boss=boss, health=health)
        agent = EnemyAgent(
            agent_id,
            world,
            directory,
            post_office,
            bus,
            role=Role.BOSS if boss else Role.STANDARD,
            settings=settings,
            dispatcher=dispatcher,
            boss_id=boss_id,
            rng=random.Random(seed),
        )
        agent.setup()
        return agent

    return _spawn
