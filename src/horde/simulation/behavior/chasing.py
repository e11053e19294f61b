# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""ChasingPlayer — step toward the player while it stays in sight."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..enemy_state import EnemyState
from .base import BehaviorUnit, UnitKind, attack_if_player_near, register_retreat_handler

if TYPE_CHECKING:
    from ..agent import EnemyAgent


class ChasingPlayer(BehaviorUnit):
    kind = UnitKind.CHASING_PLAYER

    def register_handlers(self) -> None:
        register_retreat_handler(self)

    def tick(self, agent: EnemyAgent) -> None:
        from .idle import Idle

        if self.quit_if_player_dead(agent):
            return
        agent.update_state(EnemyState.CHASING_PLAYER)

        if attack_if_player_near(self, agent):
            return

        self.handle_next_message(agent)
        if not agent.is_installed(self):
            return

        player = agent.player_position
        if player is None or not agent.player_in_range():
            agent.speak("Lost sight of the player.")
            if self.become(agent, Idle(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.IDLE)
            return

        agent.pursue(player)
