# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Idle — stand still, watch for the player and listen to peers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from horde.comms.envelope import (
    PLAYER_SPOTTED,
    POWER_UP_COLLECTED,
    POWER_UP_SPOTTED,
    REINFORCEMENT_REQUEST,
    REINFORCING_ALLY,
    Envelope,
)

from ..enemy_state import SPOTTER_AUDIENCE, EnemyState
from ..position import Position
from .base import BehaviorUnit, UnitKind, go_to_target, register_retreat_handler

if TYPE_CHECKING:
    from ..agent import EnemyAgent


class Idle(BehaviorUnit):
    kind = UnitKind.IDLE

    def register_handlers(self) -> None:
        self.dispatcher.register(PLAYER_SPOTTED, self._on_player_spotted)
        self.dispatcher.register(POWER_UP_COLLECTED, self._on_power_up_collected)
        self.dispatcher.register(POWER_UP_SPOTTED, self._on_power_up_spotted)
        self.dispatcher.register(REINFORCEMENT_REQUEST, self._on_reinforcement_request)
        register_retreat_handler(self)

    def tick(self, agent: EnemyAgent) -> None:
        from .chasing import ChasingPlayer

        if self.quit_if_player_dead(agent):
            return
        agent.update_state(EnemyState.IDLE)

        if agent.player_in_range():
            player = agent.player_position
            agent.speak("Player spotted! Chasing!")
            agent.notify_enemies_alerted()
            agent.broadcast(PLAYER_SPOTTED, SPOTTER_AUDIENCE, player)
            if self.become(agent, ChasingPlayer(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.CHASING_PLAYER)
            return

        self.handle_next_message(agent)

    # -- Handlers ------------------------------------------------------------

    def _on_player_spotted(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        agent.speak(f"{envelope.sender_id} spotted the player, moving in")
        go_to_target(self, agent, EnemyState.CHASING_TARGET, target)

    def _on_power_up_collected(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        agent.speak("Player took a power-up, checking it out")
        if go_to_target(self, agent, EnemyState.CHASING_POWERUP, target):
            agent.broadcast(POWER_UP_SPOTTED, SPOTTER_AUDIENCE, target)

    def _on_power_up_spotted(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        go_to_target(self, agent, EnemyState.CHASING_POWERUP, target)

    def _on_reinforcement_request(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        agent.speak(f"Reinforcing {envelope.sender_id}!")
        agent.reply(envelope, REINFORCING_ALLY)
        go_to_target(self, agent, EnemyState.REINFORCING, target)
