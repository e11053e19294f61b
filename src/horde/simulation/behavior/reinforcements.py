# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""ReinforcementRequester — call for help while locked in melee."""

from __future__ import annotations

from typing import TYPE_CHECKING

from horde.comms.envelope import REINFORCEMENT_REQUEST, IntentKind

from ..enemy_state import REINFORCEMENT_AUDIENCE, EnemyState
from .base import BehaviorUnit, UnitKind

if TYPE_CHECKING:
    from ..agent import EnemyAgent


class ReinforcementRequester(BehaviorUnit):
    kind = UnitKind.REINFORCEMENT_REQUESTER

    def tick(self, agent: EnemyAgent) -> None:
        if self.quit_if_player_dead(agent):
            return
        if agent.state is not EnemyState.ATTACKING:
            agent.remove(self)
            return
        agent.speak("Requesting reinforcements!")
        agent.broadcast(
            REINFORCEMENT_REQUEST,
            REINFORCEMENT_AUDIENCE,
            agent.player_position,
            IntentKind.REQUEST,
        )
