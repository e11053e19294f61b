# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Per-agent mailboxes and the PostOffice that delivers into them.

Delivery is fire-and-forget and at-most-once.  Each mailbox is a FIFO
``queue.Queue`` so envelopes from one sender to one recipient arrive in
send order; nothing is promised across different senders.  Envelopes for
unknown or closed mailboxes are dropped.
"""

from __future__ import annotations

import queue
import threading
from typing import Iterable

from loguru import logger

from horde.errors import MailboxClosedError

from .envelope import Envelope

# Mailbox bound; a flooded agent drops new mail rather than blocking senders
_MAX_MAILBOX_SIZE = 256


class Mailbox:
    """FIFO inbox owned by exactly one agent."""

    def __init__(self, owner_id: str, maxsize: int = _MAX_MAILBOX_SIZE) -> None:
        self.owner_id = owner_id
        self._queue: queue.Queue[Envelope] = queue.Queue(maxsize=maxsize)

    def put(self, envelope: Envelope) -> bool:
        try:
            self._queue.put_nowait(envelope)
            return True
        except queue.Full:
            logger.debug(f"Mailbox {self.owner_id} full, dropping {envelope.label}")
            return False

    def poll(self) -> Envelope | None:
        """Return the oldest envelope, or None immediately when empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __len__(self) -> int:
        return self._queue.qsize()


class PostOffice:
    """Owns every agent's mailbox and routes envelopes to them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._mailboxes: dict[str, Mailbox] = {}

    def open(self, agent_id: str) -> Mailbox:
        """Create (or return the existing) mailbox for *agent_id*."""
        with self._lock:
            box = self._mailboxes.get(agent_id)
            if box is None:
                box = Mailbox(agent_id)
                self._mailboxes[agent_id] = box
            return box

    def close(self, agent_id: str) -> None:
        with self._lock:
            self._mailboxes.pop(agent_id, None)

    def has_mailbox(self, agent_id: str) -> bool:
        with self._lock:
            return agent_id in self._mailboxes

    def send(self, envelope: Envelope, recipients: Iterable[str]) -> int:
        """Enqueue *envelope* into each recipient's mailbox.

        Returns the number of mailboxes that accepted it.
        """
        delivered = 0
        for agent_id in recipients:
            with self._lock:
                box = self._mailboxes.get(agent_id)
            if box is None:
                logger.debug(f"No mailbox for {agent_id}, dropping {envelope.label}")
                continue
            if box.put(envelope):
                delivered += 1
        return delivered

    def poll(self, agent_id: str) -> Envelope | None:
        """Non-blocking receive for *agent_id*.

        Raises:
            MailboxClosedError: if the agent has no open mailbox.
        """
        with self._lock:
            box = self._mailboxes.get(agent_id)
        if box is None:
            raise MailboxClosedError(f"no mailbox for {agent_id}")
        return box.poll()

    def pending(self, agent_id: str) -> list[Envelope]:
        """Drain and return everything waiting for *agent_id* (test/debug helper)."""
        drained: list[Envelope] = []
        with self._lock:
            box = self._mailboxes.get(agent_id)
        if box is None:
            return drained
        while True:
            env = box.poll()
            if env is None:
                return drained
            drained.append(env)
