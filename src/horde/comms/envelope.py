# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Envelope — one message exchanged between enemy agents.

An envelope carries an intent label, a payload string and the sender id.
The payload is either a position in ``"(x, y)"`` form or, for
``RETREATING``, the id of the retreating agent so that coverers can look
up whom to protect.

The textual wire form ``"LABEL:payload"`` is kept for compatibility with
tools that log or replay raw message content; the label is everything
before the first ``:``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# -- Intent labels -----------------------------------------------------------

PLAYER_SPOTTED = "PLAYER_SPOTTED"
POWER_UP_COLLECTED = "POWER_UP_COLLECTED"
POWER_UP_SPOTTED = "POWER_UP_SPOTTED"
REINFORCEMENT_REQUEST = "REINFORCEMENT_REQUEST"
RETREATING = "RETREATING"
RETREATING_POWER_UP_COLLECTED = "RETREATING_POWER_UP_COLLECTED"
PLAYER_SURVIVAL_ALERT = "PLAYER_SURVIVAL_ALERT"

# Acknowledgements (sent with AGREE, nobody dispatches on them)
COVERING_RETREAT = "COVERING_RETREAT"
REINFORCING_ALLY = "REINFORCING_ALLY"

# Sender id used for notices that originate in the game world itself
WORLD_SENDER = "world"


class IntentKind(enum.Enum):
    INFORM = "inform"
    REQUEST = "request"
    AGREE = "agree"


@dataclass(frozen=True)
class Envelope:
    sender_id: str
    label: str
    payload: str = ""
    kind: IntentKind = IntentKind.INFORM

    @property
    def content(self) -> str:
        return f"{self.label}:{self.payload}"

    @classmethod
    def from_content(
        cls,
        sender_id: str,
        content: str,
        kind: IntentKind = IntentKind.INFORM,
    ) -> Envelope:
        label, _, payload = content.partition(":")
        return cls(sender_id=sender_id, label=label, payload=payload, kind=kind)

    def reply(self, sender_id: str, label: str, kind: IntentKind = IntentKind.AGREE) -> Envelope:
        """Build an acknowledgement from *sender_id*, addressed to ``self.sender_id``."""
        return Envelope(sender_id=sender_id, label=label, payload="", kind=kind)
