# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Root conftest — quiet loguru, a deterministic executor and event helpers."""

from __future__ import annotations

import os
import queue
from unittest.mock import patch

import pytest
from loguru import logger

from horde.config import Settings


def drain(q: queue.Queue) -> list[dict]:
    """Pull every event currently waiting in *q* without blocking."""
    events: list[dict] = []
    while True:
        try:
            events.append(q.get_nowait())
        except queue.Empty:
            return events


class InlineExecutor:
    """Runs submitted jobs immediately on the calling thread."""

    def __init__(self) -> None:
        self.jobs: list[str] = []

    def submit(self, fn, /, *args, **kwargs):
        self.jobs.append(getattr(fn, "__name__", repr(fn)))
        return fn(*args, **kwargs)


@pytest.fixture(autouse=True)
def _quiet_logs():
    """Route loguru to nowhere except WARNING+ so test output stays readable."""
    logger.remove()
    logger.add(lambda _msg: None, level="WARNING")
    yield
    logger.remove()


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from the caller's environment and .env."""
    with patch.dict(os.environ, {}, clear=True):
        return Settings(_env_file=None)
