# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""GoingToTarget — walk to a cell someone else reported.

One unit covers three advertised states that differ only in why the cell
matters: ChasingTarget (a peer spotted the player there), ChasingPowerup
(a power-up was taken or seen there) and Reinforcing (a peer under
attack asked for help there).  Newer reports re-target the unit in place.
"""

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
from .base import BehaviorUnit, UnitKind, attack_if_player_near, register_retreat_handler

if TYPE_CHECKING:
    from ..agent import EnemyAgent

TARGET_STATES: frozenset[EnemyState] = frozenset({
    EnemyState.CHASING_TARGET,
    EnemyState.CHASING_POWERUP,
    EnemyState.REINFORCING,
})


class GoingToTarget(BehaviorUnit):
    kind = UnitKind.GOING_TO_TARGET

    def __init__(self, interval: float, state: EnemyState, target: Position) -> None:
        if state not in TARGET_STATES:
            raise ValueError(f"{state.value} is not a going-to-target state")
        self.state = state
        self.target = target
        super().__init__(interval)

    def __repr__(self) -> str:
        return f"GoingToTarget({self.state.value}, {self.target})"

    def register_handlers(self) -> None:
        self.dispatcher.register(POWER_UP_COLLECTED, self._on_power_up_collected)
        self.dispatcher.register(POWER_UP_SPOTTED, self._on_power_up_spotted)
        self.dispatcher.register(REINFORCEMENT_REQUEST, self._on_reinforcement_request)
        register_retreat_handler(self)

    def tick(self, agent: EnemyAgent) -> None:
        from .chasing import ChasingPlayer
        from .idle import Idle

        if self.quit_if_player_dead(agent):
            return
        agent.update_state(self.state)

        if attack_if_player_near(self, agent):
            return

        self.handle_next_message(agent)
        if not agent.is_installed(self):
            return

        pos = agent.position
        if pos is not None and pos == self.target:
            agent.speak("Reached the target.")
            if self.become(agent, Idle(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.IDLE)
            return

        if agent.player_in_range():
            player = agent.player_position
            agent.speak("Player in sight! Chasing!")
            agent.pursue(player)
            agent.broadcast(PLAYER_SPOTTED, SPOTTER_AUDIENCE, player)
            if self.become(agent, ChasingPlayer(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.CHASING_PLAYER)
            return

        agent.pursue(self.target)

    def retarget(self, agent: EnemyAgent, state: EnemyState, target: Position) -> None:
        self.state = state
        self.target = target
        agent.update_state(state)

    # -- Handlers ------------------------------------------------------------

    def _on_power_up_collected(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        self.retarget(agent, EnemyState.CHASING_POWERUP, target)
        agent.broadcast(POWER_UP_SPOTTED, SPOTTER_AUDIENCE, target)

    def _on_power_up_spotted(self, agent: EnemyAgent, envelope: Envelope) -> None:
        self.retarget(agent, EnemyState.CHASING_POWERUP, Position.parse(envelope.payload))

    def _on_reinforcement_request(self, agent: EnemyAgent, envelope: Envelope) -> None:
        target = Position.parse(envelope.payload)
        agent.speak(f"Reinforcing {envelope.sender_id}!")
        agent.reply(envelope, REINFORCING_ALLY)
        self.retarget(agent, EnemyState.REINFORCING, target)
