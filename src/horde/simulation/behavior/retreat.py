# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Retreat — the low-health watchdog and the run to the nearest power-up.

``LowHealthWatch`` runs beside whatever main unit is active.  Once the
agent's health ratio drops to the threshold it asks every active peer for
cover, evicts the main unit and installs ``Retreating`` toward the nearest
power-up.  It fires at most once per agent life; while no power-up exists
it keeps watching.

``Retreating`` walks to the power-up, picks it up when adjacent, tells the
coverers the retreat is over and falls back to Idle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from horde.comms.envelope import RETREATING, RETREATING_POWER_UP_COLLECTED, IntentKind

from ..enemy_state import ACTIVE_STATES, COVER_AUDIENCE, EnemyState
from .base import BehaviorUnit, UnitKind

if TYPE_CHECKING:
    from ..agent import EnemyAgent
    from ..position import Position


class LowHealthWatch(BehaviorUnit):
    kind = UnitKind.LOW_HEALTH_WATCH

    def tick(self, agent: EnemyAgent) -> None:
        if agent.is_retreating:
            return
        me = agent.entity()
        if me is None or me.health_ratio > agent.settings.retreat_health_ratio:
            return
        pos = agent.position
        target = agent.world.nearest_power_up_position(pos) if pos is not None else None
        if target is None:
            agent.log.debug("Health low but no power-up to run to")
            return

        agent.update_state(EnemyState.RETREATING)
        agent.speak("Health low! Retreating!")
        agent.broadcast(RETREATING, ACTIVE_STATES, pos, IntentKind.REQUEST)
        agent.replace_main(Retreating(agent.settings.retreat_interval, target))
        agent.remove(self)


class Retreating(BehaviorUnit):
    kind = UnitKind.RETREATING

    def __init__(self, interval: float, target: Position) -> None:
        self.target = target
        super().__init__(interval)

    def __repr__(self) -> str:
        return f"Retreating({self.target})"

    def tick(self, agent: EnemyAgent) -> None:
        from .idle import Idle

        if self.quit_if_player_dead(agent):
            return
        agent.update_state(EnemyState.RETREATING)

        pos = agent.position
        if pos is None:
            return
        if pos.is_adjacent(self.target):
            agent.collect_power_up(self.target)
            agent.speak("Power-up collected, back in the fight!")
            agent.broadcast(RETREATING_POWER_UP_COLLECTED, COVER_AUDIENCE, self.target)
            if self.become(agent, Idle(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.IDLE)
            return

        agent.pursue(self.target)
