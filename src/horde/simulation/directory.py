# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""AgentDirectory — shared lookup of agent id -> advertised state and role.

Agents publish their current behavioral state here so that peers can find
"everyone who is idle" or "everyone covering a retreat" without a central
controller.  The directory is shared by all agents and is safe for many
concurrent readers and writers.

Semantics:
  - At most one entry per agent id.  ``register`` is an upsert.
  - ``update_state`` is a no-op when the advertised state is unchanged.
    Otherwise the entry is deregistered and registered again, inside one
    critical section, so a concurrent lookup sees either the old or the new
    entry and never neither.
  - Every (re)registration stamps a fresh, monotonically increasing
    ``version``.  A no-op update leaves the version untouched.
  - Once closed, lookups return an empty list so coordination degrades to
    "nobody answers" instead of raising into the caller.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from horde.errors import DirectoryUnavailableError

from .enemy_state import EnemyState, Role


@dataclass(frozen=True)
class DirectoryEntry:
    agent_id: str
    state: EnemyState
    role: Role = Role.STANDARD
    version: int = 0


class AgentDirectory:
    """Thread-safe registry of advertised agent states."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, DirectoryEntry] = {}
        self._versions = itertools.count(1)
        self._available = True

    @property
    def available(self) -> bool:
        return self._available

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def close(self) -> None:
        """Mark the directory unavailable and drop all entries."""
        with self._lock:
            self._available = False
            self._entries.clear()

    def register(self, agent_id: str, state: EnemyState, role: Role = Role.STANDARD) -> DirectoryEntry:
        """Insert or replace the entry for *agent_id*."""
        with self._lock:
            self._check_available()
            return self._register(agent_id, state, role)

    def deregister(self, agent_id: str) -> bool:
        """Remove *agent_id*. Returns False if it was not registered."""
        with self._lock:
            if not self._available:
                return False
            return self._deregister(agent_id)

    def update_state(self, agent_id: str, new_state: EnemyState) -> bool:
        """Advertise *new_state* for *agent_id*.

        Returns True if the entry changed, False for a no-op (same state or
        unknown agent).
        """
        with self._lock:
            self._check_available()
            current = self._entries.get(agent_id)
            if current is None:
                logger.debug(f"update_state for unregistered agent {agent_id}")
                return False
            if current.state == new_state:
                return False
            self._deregister(agent_id)
            self._register(agent_id, new_state, current.role)
            return True

    def entry(self, agent_id: str) -> DirectoryEntry | None:
        with self._lock:
            return self._entries.get(agent_id)

    def find_by_states(self, states: Iterable[EnemyState]) -> list[DirectoryEntry]:
        """Return all entries whose state is in *states* (order unspecified)."""
        wanted = frozenset(states)
        with self._lock:
            if not self._available:
                logger.warning("Directory unavailable, lookup returns no agents")
                return []
            return [e for e in self._entries.values() if e.state in wanted]

    def find_by_role(self, role: Role) -> list[DirectoryEntry]:
        with self._lock:
            if not self._available:
                return []
            return [e for e in self._entries.values() if e.role is role]

    # -- Internals (caller holds the lock) -----------------------------------

    def _check_available(self) -> None:
        if not self._available:
            raise DirectoryUnavailableError("agent directory is closed")

    def _register(self, agent_id: str, state: EnemyState, role: Role) -> DirectoryEntry:
        entry = DirectoryEntry(agent_id, state, role, next(self._versions))
        self._entries[agent_id] = entry
        return entry

    def _deregister(self, agent_id: str) -> bool:
        return self._entries.pop(agent_id, None) is not None
