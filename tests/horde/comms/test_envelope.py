# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for Envelope and its "LABEL:payload" content form."""

from __future__ import annotations

import pytest

from horde.comms.envelope import (
    PLAYER_SPOTTED,
    REINFORCING_ALLY,
    RETREATING,
    Envelope,
    IntentKind,
)


@pytest.mark.unit
class TestEnvelope:
    def test_content(self):
        env = Envelope("a", PLAYER_SPOTTED, "(4, 2)")
        assert env.content == "PLAYER_SPOTTED:(4, 2)"
        assert env.kind is IntentKind.INFORM

    def test_from_content_splits_on_first_colon(self):
        env = Envelope.from_content("a", "RETREATING:orc:7", IntentKind.REQUEST)
        assert env.label == RETREATING
        assert env.payload == "orc:7"
        assert env.kind is IntentKind.REQUEST

    def test_from_content_without_payload(self):
        env = Envelope.from_content("a", "PLAYER_SURVIVAL_ALERT")
        assert env.label == "PLAYER_SURVIVAL_ALERT"
        assert env.payload == ""

    def test_reply(self):
        request = Envelope("caller", "REINFORCEMENT_REQUEST", "(1, 1)", IntentKind.REQUEST)
        ack = request.reply("helper", REINFORCING_ALLY)
        assert ack == Envelope("helper", REINFORCING_ALLY, "", IntentKind.AGREE)

    def test_equality_and_immutability(self):
        assert Envelope("a", "X", "1") == Envelope("a", "X", "1")
        with pytest.raises(AttributeError):
            Envelope("a", "X").label = "Y"  # type: ignore[misc]
