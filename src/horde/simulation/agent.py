# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""EnemyAgent — one autonomous enemy: its units, mailbox and world hooks.

An agent owns a small set of installed behavior units.  Exactly one of
them is the *main* unit (Idle, ChasingPlayer, GoingToTarget, Attacking,
Retreating or Covering); the rest are watchdogs that run beside it (the
low-health watch, the reinforcement requester, the boss alert and the
boss response).

Units hold no reference back to the agent.  The agent passes itself into
``unit.tick(agent)`` and into message handlers, and units change the
agent's behavior only through ``install``, ``remove`` and ``replace``.

Transitions are atomic under the agent's lock: ``replace(old, new)``
either removes *old* and installs *new* in one step or, when *old* is no
longer installed (someone else already moved the agent on), does nothing
and returns False.  That is how concurrent transition requests resolve.
"""

from __future__ import annotations

import itertools
import random
import threading
from typing import TYPE_CHECKING

from loguru import logger

from horde.comms.dispatch import broadcast_alert
from horde.comms.envelope import Envelope, IntentKind
from horde.comms.event_bus import (
    AGENT_REMOVED,
    ENEMIES_ALERTED,
    ENEMY_SPEECH,
    ENEMY_STATE_CHANGED,
    ENTITY_MOVED,
    PLAYER_ATTACKED,
    POWER_UP_COLLECTED,
)
from horde.config import Settings
from horde.errors import DirectoryUnavailableError, MailboxClosedError

from .behavior import BossAlert, BossResponse, Idle, LowHealthWatch
from .enemy_state import EnemyState, Role
from .pathfinding import next_step
from .scheduler import MoveDispatcher, UnitTimer

if TYPE_CHECKING:
    from horde.comms.event_bus import EventBus
    from horde.comms.mailbox import PostOffice

    from .behavior.base import BehaviorUnit, UnitKind
    from .directory import AgentDirectory
    from .position import Position
    from .world import EnemyRef, WorldModel


class EnemyAgent:
    """A single enemy agent bound to one world entity of the same name."""

    def __init__(
        self,
        agent_id: str,
        world: WorldModel,
        directory: AgentDirectory,
        post_office: PostOffice,
        event_bus: EventBus | None = None,
        *,
        role: Role = Role.STANDARD,
        settings: Settings | None = None,
        dispatcher: MoveDispatcher | None = None,
        boss_id: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.agent_id = agent_id
        self.role = role
        self.world = world
        self.directory = directory
        self.post_office = post_office
        self.event_bus = event_bus
        self.settings = settings or Settings()
        self.dispatcher = dispatcher or MoveDispatcher(self.settings.move_workers)
        self.boss_id = boss_id
        self.rng = rng or random.Random()
        self.log = logger.bind(agent=agent_id)

        self._lock = threading.RLock()
        self._units: dict[int, BehaviorUnit] = {}
        self._timers: dict[int, UnitTimer] = {}
        self._unit_ids = itertools.count(1)
        self._state = EnemyState.IDLE
        self._running = False
        self._active = False

    def __repr__(self) -> str:
        return f"EnemyAgent({self.agent_id!r}, role={self.role.value}, state={self._state.value})"

    # -- Lifecycle -----------------------------------------------------------

    def setup(self) -> None:
        """Open the mailbox, advertise Idle and install the initial units."""
        self.post_office.open(self.agent_id)
        try:
            self.directory.register(self.agent_id, EnemyState.IDLE, self.role)
        except DirectoryUnavailableError:
            self.log.warning("Directory unavailable, running unadvertised")
        self._state = EnemyState.IDLE
        self._active = True

        self.install(Idle(self.settings.behaviour_interval))
        if self.is_boss:
            self.install(BossResponse(self.settings.behaviour_interval))
        else:
            self.install(LowHealthWatch(self.settings.low_health_interval))
            if self.boss_id is not None:
                self.install(BossAlert(self.settings.boss_alert_delay))
        self.log.info(f"{self.role.value} agent ready")

    def start(self) -> None:
        """Start one timer per installed unit."""
        with self._lock:
            if self._running:
                return
            self._running = True
            for unit in self._units.values():
                self._start_timer(unit)

    def stop(self) -> None:
        """Stop every timer. Units stay installed."""
        with self._lock:
            self._running = False
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.stop(join=True)

    def teardown(self, reason: str = "shutdown") -> None:
        """Stop, drop every unit, deregister and close the mailbox."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            self._units.clear()
        self.stop()
        self.directory.deregister(self.agent_id)
        self.post_office.close(self.agent_id)
        self.log.info(f"Agent removed ({reason})")
        self._publish(AGENT_REMOVED, {"agent_id": self.agent_id, "reason": reason})

    @property
    def active(self) -> bool:
        return self._active

    # -- Unit management -----------------------------------------------------

    @property
    def units(self) -> list[BehaviorUnit]:
        with self._lock:
            return list(self._units.values())

    @property
    def main_unit(self) -> BehaviorUnit | None:
        with self._lock:
            for unit in self._units.values():
                if unit.main:
                    return unit
        return None

    def find_unit(self, kind: UnitKind) -> BehaviorUnit | None:
        with self._lock:
            for unit in self._units.values():
                if unit.kind is kind:
                    return unit
        return None

    def is_installed(self, unit: BehaviorUnit) -> bool:
        with self._lock:
            return unit.unit_id is not None and self._units.get(unit.unit_id) is unit

    def install(self, unit: BehaviorUnit) -> BehaviorUnit:
        with self._lock:
            if not self._active:
                return unit
            unit.unit_id = next(self._unit_ids)
            self._units[unit.unit_id] = unit
            if self._running:
                self._start_timer(unit)
        self.log.debug(f"Installed {unit.name}")
        return unit

    def remove(self, unit: BehaviorUnit) -> bool:
        """Uninstall *unit*. Returns False if it was not installed."""
        with self._lock:
            if not self.is_installed(unit):
                return False
            del self._units[unit.unit_id]
            timer = self._timers.pop(unit.unit_id, None)
        if timer is not None:
            timer.stop()
        self.log.debug(f"Removed {unit.name}")
        return True

    def replace(self, old: BehaviorUnit, new: BehaviorUnit) -> bool:
        """Atomically swap *old* for *new*.

        Dropped (returns False) when *old* is no longer installed.
        """
        with self._lock:
            if not self.remove(old):
                self.log.debug(f"Stale transition {old.name} -> {new.name} dropped")
                return False
            self.install(new)
            return True

    def replace_main(self, new: BehaviorUnit) -> None:
        """Install *new* as the main unit, evicting whatever main unit runs."""
        with self._lock:
            current = self.main_unit
            if current is not None:
                self.remove(current)
            self.install(new)

    def _start_timer(self, unit: BehaviorUnit) -> None:
        timer = UnitTimer(self, unit)
        self._timers[unit.unit_id] = timer
        timer.start()

    # -- Ticking -------------------------------------------------------------

    def run_tick(self, unit: BehaviorUnit) -> None:
        """Tick *unit* once. Ticks of one agent never overlap."""
        with self._lock:
            if not self._active or not self.is_installed(unit):
                return
            try:
                unit.tick(self)
            except Exception:
                self.log.exception(f"{unit.name} tick failed")

    def tick_once(self) -> None:
        """Tick every currently installed unit once, in install order.

        Units installed during this pass wait for the next one.
        """
        for unit in self.units:
            self.run_tick(unit)

    # -- State ---------------------------------------------------------------

    @property
    def state(self) -> EnemyState:
        return self._state

    @property
    def is_boss(self) -> bool:
        return self.role is Role.BOSS

    @property
    def is_retreating(self) -> bool:
        return self._state is EnemyState.RETREATING

    def update_state(self, new_state: EnemyState) -> None:
        """Advertise *new_state*. No-op when it is already advertised."""
        if new_state is self._state:
            return
        old = self._state
        self._state = new_state
        try:
            self.directory.update_state(self.agent_id, new_state)
        except DirectoryUnavailableError:
            self.log.warning(f"Directory unavailable, {new_state.value} not advertised")
        self.log.debug(f"State {old.value} -> {new_state.value}")
        self._publish(ENEMY_STATE_CHANGED, {"agent_id": self.agent_id, "state": new_state.value})

    # -- World reads ---------------------------------------------------------

    @property
    def position(self) -> Position | None:
        return self.world.entity_position(self.agent_id)

    @property
    def player_position(self) -> Position | None:
        return self.world.player_position()

    def player_alive(self) -> bool:
        return self.world.player_is_alive()

    def entity(self) -> EnemyRef | None:
        return self.world.entity_by_name(self.agent_id)

    def player_adjacent(self) -> bool:
        pos, player = self.position, self.player_position
        return pos is not None and player is not None and pos.is_adjacent(player)

    def player_in_range(self) -> bool:
        pos, player = self.position, self.player_position
        return (
            pos is not None
            and player is not None
            and pos.in_range(player, self.settings.detection_range)
        )

    # -- World mutations (dispatched, fire-and-forget) -----------------------

    def pursue(self, target: Position) -> Position | None:
        """Plan one step toward *target* and hand the move to the dispatcher.

        Returns the planned cell, or None when there is nowhere to go.
        """
        current = self.position
        if current is None:
            return None
        step = next_step(current, target, self.world, self.rng)
        if step == current:
            return None
        self.dispatcher.submit(f"move {self.agent_id} -> {step}", self._commit_move, current, step)
        return step

    def _commit_move(self, old: Position, new: Position) -> None:
        if self.world.move_entity(self.agent_id, new):
            self._publish(ENTITY_MOVED, {
                "agent_id": self.agent_id, "old": str(old), "new": str(new), "kind": "enemy",
            })

    def attack(self) -> None:
        """Queue one attack on the player (bosses may roll a special)."""
        self.dispatcher.submit(f"attack by {self.agent_id}", self._commit_attack)

    def _commit_attack(self) -> None:
        special = False
        if self.is_boss and self.rng.random() < self.settings.boss_special_attack_chance:
            special = self.world.special_attack(self.agent_id)
            if special:
                self.speak("Using special attack!")
        hit = special or self.world.melee_attack(self.agent_id)
        if hit:
            self.speak("Attacked you successfully!")
            self._publish(PLAYER_ATTACKED, {"agent_id": self.agent_id, "special": special})
        else:
            self.speak("Missed you!")

    def collect_power_up(self, pos: Position) -> None:
        self.dispatcher.submit(f"pickup by {self.agent_id} at {pos}", self._commit_collect, pos)

    def _commit_collect(self, pos: Position) -> None:
        if self.world.collect_power_up(self.agent_id, pos):
            self._publish(POWER_UP_COLLECTED, {"agent_id": self.agent_id, "position": str(pos)})

    # -- Messaging -----------------------------------------------------------

    def receive(self) -> Envelope | None:
        """Non-blocking poll of this agent's mailbox."""
        try:
            return self.post_office.poll(self.agent_id)
        except MailboxClosedError:
            return None

    def send(self, envelope: Envelope, recipients: list[str]) -> int:
        return self.post_office.send(envelope, recipients)

    def reply(self, envelope: Envelope, label: str) -> None:
        """Acknowledge *envelope* back to its sender."""
        self.send(envelope.reply(self.agent_id, label), [envelope.sender_id])

    def broadcast(
        self,
        label: str,
        target_states: frozenset[EnemyState],
        position: Position | None,
        kind: IntentKind = IntentKind.INFORM,
    ) -> list[str]:
        return broadcast_alert(
            self.directory, self.post_office, self.agent_id, label, target_states, position, kind,
        )

    # -- Presentation --------------------------------------------------------

    def speak(self, text: str) -> None:
        self.log.info(text)
        self._publish(ENEMY_SPEECH, {"agent_id": self.agent_id, "text": text})

    def notify_enemies_alerted(self) -> None:
        self._publish(ENEMIES_ALERTED, {
            "agent_id": self.agent_id,
            "text": f"{self.agent_id} has spotted the player!",
        })

    def _publish(self, event_type: str, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, data)
