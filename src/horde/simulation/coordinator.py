# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""HordeCoordinator — wires a world to a set of enemy agents.

The coordinator is not a controller.  It only owns the shared plumbing
(directory, post office, move workers), spawns and tears down agents, and
relays the few notices that originate in the game world itself:

  - the player picking up a power-up, heard by every enemy within
    ``power_up_hearing_range`` of it;
  - deaths, through a life monitor that removes the agent of a dead
    enemy and every agent once the player is dead.

Once started, every decision is made by the agents themselves.
"""

from __future__ import annotations

import random
import threading
from typing import TYPE_CHECKING, Iterable

from loguru import logger

from horde.comms.envelope import POWER_UP_COLLECTED, WORLD_SENDER, Envelope
from horde.comms.event_bus import BOSS_DEFEATED
from horde.comms.mailbox import PostOffice
from horde.config import Settings

from .agent import EnemyAgent
from .directory import AgentDirectory
from .enemy_state import Role
from .scheduler import Executor, MoveDispatcher

if TYPE_CHECKING:
    from horde.comms.event_bus import EventBus

    from .position import Position
    from .world import WorldModel


class HordeCoordinator:
    """Spawns, runs and retires the enemy agents of one world."""

    def __init__(
        self,
        world: WorldModel,
        event_bus: EventBus | None = None,
        settings: Settings | None = None,
        executor: Executor | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.settings = settings or Settings()
        self.directory = AgentDirectory()
        self.post_office = PostOffice()
        self.dispatcher = MoveDispatcher(self.settings.move_workers, executor)
        self._rng = rng or random.Random()

        self._lock = threading.Lock()
        self._agents: dict[str, EnemyAgent] = {}
        self._boss_id: str | None = None
        self._running = False
        self._stop = threading.Event()
        self._monitor: threading.Thread | None = None

    # -- Spawning ------------------------------------------------------------

    @property
    def boss_id(self) -> str | None:
        return self._boss_id

    @property
    def agents(self) -> list[EnemyAgent]:
        with self._lock:
            return list(self._agents.values())

    def agent(self, agent_id: str) -> EnemyAgent | None:
        with self._lock:
            return self._agents.get(agent_id)

    def spawn(self, agent_id: str, role: Role = Role.STANDARD) -> EnemyAgent:
        """Create, set up and (if running) start the agent for *agent_id*.

        Spawn the boss first: standard agents only arm a boss alert when
        a boss is already known.
        """
        with self._lock:
            if agent_id in self._agents:
                raise ValueError(f"agent {agent_id!r} already spawned")
            if role is Role.BOSS:
                self._boss_id = agent_id
            agent = EnemyAgent(
                agent_id,
                self.world,
                self.directory,
                self.post_office,
                self.event_bus,
                role=role,
                settings=self.settings,
                dispatcher=self.dispatcher,
                boss_id=self._boss_id,
                rng=random.Random(self._rng.random()),
            )
            self._agents[agent_id] = agent
            running = self._running
        agent.setup()
        if running:
            agent.start()
        return agent

    def spawn_horde(self, names: Iterable[str], boss: str | None = None) -> list[EnemyAgent]:
        spawned = []
        if boss is not None:
            spawned.append(self.spawn(boss, Role.BOSS))
        for name in names:
            if name != boss:
                spawned.append(self.spawn(name))
        logger.info(f"Spawned {len(spawned)} agents (boss={boss})")
        return spawned

    # -- Running -------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start every agent's timers and the life monitor."""
        with self._lock:
            if self._running:
                return
            self._running = True
            agents = list(self._agents.values())
        self._stop.clear()
        for agent in agents:
            agent.start()
        self._monitor = threading.Thread(
            target=self._monitor_loop, name="horde-life-monitor", daemon=True,
        )
        self._monitor.start()
        logger.info(f"Horde started with {len(agents)} agents")

    def stop(self) -> None:
        """Tear down every agent and release the shared plumbing."""
        with self._lock:
            self._running = False
            agents = list(self._agents.values())
            self._agents.clear()
        self._stop.set()
        if self._monitor is not None:
            self._monitor.join(timeout=2.0)
            self._monitor = None
        for agent in agents:
            agent.teardown("shutdown")
        self.dispatcher.shutdown()
        self.directory.close()
        logger.info("Horde stopped")

    def _monitor_loop(self) -> None:
        while not self._stop.wait(self.settings.behaviour_interval):
            try:
                self.check_lifecycle()
            except Exception:
                logger.exception("Life monitor pass failed")

    def check_lifecycle(self) -> list[str]:
        """Retire agents whose entity died, or all of them once the player died.

        Returns the ids removed on this pass.
        """
        player_alive = self.world.player_is_alive()
        removed: list[str] = []
        for agent in self.agents:
            entity = self.world.entity_by_name(agent.agent_id)
            entity_alive = entity is not None and entity.alive
            if entity_alive and player_alive:
                continue
            reason = "player dead" if not player_alive else "slain"
            with self._lock:
                self._agents.pop(agent.agent_id, None)
            agent.teardown(reason)
            removed.append(agent.agent_id)
            if agent.is_boss and not entity_alive:
                logger.info(f"Boss {agent.agent_id} defeated")
                if self.event_bus is not None:
                    self.event_bus.publish(BOSS_DEFEATED, {"agent_id": agent.agent_id})
        return removed

    # -- World notices -------------------------------------------------------

    def notify_power_up_collected(self, pos: Position) -> list[str]:
        """Tell every enemy within hearing range that the player took *pos*."""
        hearing = self.settings.power_up_hearing_range
        recipients = []
        for agent in self.agents:
            enemy_pos = self.world.entity_position(agent.agent_id)
            if enemy_pos is not None and enemy_pos.in_range(pos, hearing):
                recipients.append(agent.agent_id)
        if recipients:
            notice = Envelope(WORLD_SENDER, POWER_UP_COLLECTED, str(pos))
            self.post_office.send(notice, recipients)
        logger.debug(f"Power-up at {pos} heard by {len(recipients)} enemies")
        return recipients
