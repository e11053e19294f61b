# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""EventBus — thread-safe pub/sub toward the presentation layer.

The agents never call the renderer or the chat bridge directly.  They
publish events here and whoever draws the dungeon (or bridges to a chat
bot) subscribes:

  ============================  =========================================
  event type                    data
  ============================  =========================================
  ``enemy_state_changed``       ``{"agent_id", "state"}``
  ``entity_moved``              ``{"agent_id", "old", "new", "kind"}``
  ``enemy_speech``              ``{"agent_id", "text"}``
  ``enemies_alerted``           ``{"agent_id", "text"}``
  ``player_attacked``           ``{"agent_id", "special"}``
  ``power_up_collected``        ``{"agent_id", "position"}``
  ``agent_removed``             ``{"agent_id", "reason"}``
  ``boss_defeated``             ``{"agent_id"}``
  ============================  =========================================

Positions are published in their ``"(x, y)"`` string form.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass

from loguru import logger

ENEMY_STATE_CHANGED = "enemy_state_changed"
ENTITY_MOVED = "entity_moved"
ENEMY_SPEECH = "enemy_speech"
ENEMIES_ALERTED = "enemies_alerted"
PLAYER_ATTACKED = "player_attacked"
POWER_UP_COLLECTED = "power_up_collected"
AGENT_REMOVED = "agent_removed"
BOSS_DEFEATED = "boss_defeated"

ALL_EVENTS: frozenset[str] = frozenset({
    ENEMY_STATE_CHANGED,
    ENTITY_MOVED,
    ENEMY_SPEECH,
    ENEMIES_ALERTED,
    PLAYER_ATTACKED,
    POWER_UP_COLLECTED,
    AGENT_REMOVED,
    BOSS_DEFEATED,
})


@dataclass(frozen=True)
class _Subscription:
    queue: queue.Queue
    # None means every event type
    event_types: frozenset[str] | None

    def wants(self, event_type: str) -> bool:
        return self.event_types is None or event_type in self.event_types


class EventBus:
    """Fans presentation events out to subscriber queues.

    A subscriber may name the event types it cares about.  Publishing
    never blocks the agent's tick: when a subscriber's queue is full the
    event is lost for that subscriber and counted in ``dropped``.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[_Subscription] = []
        self._maxsize = maxsize
        self.dropped = 0

    def subscribe(self, *event_types: str) -> queue.Queue:
        types = frozenset(event_types) if event_types else None
        sub = _Subscription(queue.Queue(maxsize=self._maxsize), types)
        with self._lock:
            self._subscriptions.append(sub)
        return sub.queue

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            self._subscriptions = [s for s in self._subscriptions if s.queue is not q]

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, event_type: str, data: dict | None = None) -> None:
        msg = {"type": event_type} if data is None else {"type": event_type, "data": data}
        with self._lock:
            targets = [s.queue for s in self._subscriptions if s.wants(event_type)]
        for q in targets:
            try:
                q.put_nowait(msg)
            except queue.Full:
                with self._lock:
                    self.dropped += 1
                logger.debug(f"Subscriber queue full, dropped {event_type}")
