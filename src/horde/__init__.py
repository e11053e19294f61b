# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Horde — coordinated enemy agents for a 2D dungeon crawler.

This package contains the per-agent behavior state machine, the shared
agent directory, the mailbox-based coordination protocol, and the one-step
pathfinder.  The game world and the presentation layer are collaborators
reached through ``horde.simulation.world`` and ``horde.comms.event_bus``.
"""

from __future__ import annotations

import sys

from loguru import logger

__version__ = "0.1.0"


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at *level*."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:HH:mm:ss.SSS} | {level: <8} | {extra[agent]} | {message}",
    )
    logger.configure(extra={"agent": "-"})
