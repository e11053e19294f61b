# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tick scheduling and fire-and-forget world mutation.

There is no global tick barrier.  Every installed behavior unit gets its
own ``UnitTimer`` daemon thread that wakes every ``unit.interval`` seconds
and asks the owning agent to tick it.  Removing a unit stops its timer
before the next scheduled tick; a tick already running finishes.

Moves and attacks never run on a timer thread.  ``MoveDispatcher`` hands
them to a small worker pool and does not wait for the result, so an
agent's committed position may lag its state by one tick.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, Protocol

from loguru import logger

if TYPE_CHECKING:
    from .agent import EnemyAgent
    from .behavior.base import BehaviorUnit


class Executor(Protocol):
    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any: ...


class UnitTimer:
    """Periodic driver for one installed behavior unit."""

    def __init__(self, agent: EnemyAgent, unit: BehaviorUnit) -> None:
        self._agent = agent
        self._unit = unit
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            name=f"tick-{agent.agent_id}-{unit.name}",
            daemon=True,
        )

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        self._thread.start()

    def stop(self, join: bool = False, timeout: float = 2.0) -> None:
        self._stop.set()
        if join and self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        while not self._stop.wait(self._unit.interval):
            if not self._agent.is_installed(self._unit):
                break
            self._agent.run_tick(self._unit)


class MoveDispatcher:
    """Fire-and-forget worker pool for moves, attacks and pickups.

    Any object with a ``submit`` method can stand in for the pool (tests
    inject one that runs the job inline).
    """

    def __init__(self, max_workers: int = 4, executor: Executor | None = None) -> None:
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="horde-move",
        )
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> Future | None:
        """Run ``fn(*args)`` on a worker; exceptions are logged, never raised."""
        with self._lock:
            if self._closed:
                logger.debug(f"Dispatcher closed, dropping {description}")
                return None
        try:
            return self._executor.submit(self._guarded, description, fn, *args)
        except RuntimeError:
            # shutdown() landed between the check above and the submit
            logger.debug(f"Dispatcher shut down, dropping {description}")
            return None

    @staticmethod
    def _guarded(description: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except Exception:
            logger.exception(f"Worker job failed: {description}")
            return None

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=wait)  # type: ignore[attr-defined]
