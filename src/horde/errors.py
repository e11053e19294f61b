# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Exception types raised by the horde subsystems.

None of these are fatal to the process.  Callers at the handler, timer and
worker boundaries catch them and log; the worst outcome is an agent that
idles until the next world-driven trigger.
"""

from __future__ import annotations


class HordeError(Exception):
    """Base class for all horde errors."""


class PositionFormatError(HordeError, ValueError):
    """A position payload did not match the ``"(x, y)"`` wire shape."""

    def __init__(self, text: object) -> None:
        super().__init__(f"Invalid position format: {text!r}")
        self.text = text


class DirectoryUnavailableError(HordeError):
    """The agent directory was closed or never opened."""


class MailboxClosedError(HordeError):
    """A poll was attempted on a mailbox that no longer exists."""
