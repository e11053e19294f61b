# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Agent-to-agent messaging and agent-to-presentation events."""

from .dispatch import MessageDispatcher, broadcast_alert
from .envelope import Envelope, IntentKind
from .event_bus import EventBus
from .mailbox import Mailbox, PostOffice

__all__ = [
    "Envelope",
    "EventBus",
    "IntentKind",
    "Mailbox",
    "MessageDispatcher",
    "PostOffice",
    "broadcast_alert",
]
