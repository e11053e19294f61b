# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Covering — stand between the player and a retreating ally.

The cover cell is one step from the ally toward the player:

    cover = ally - sign(ally - player)

When that cell is blocked the nearest walkable cell around the ally is
used instead.  Covering ends when the ally dies or reports its pickup
(``RETREATING_POWER_UP_COLLECTED``).  If the coverer itself starts
retreating, the retreat watchdog evicts this unit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from horde.comms.envelope import RETREATING_POWER_UP_COLLECTED, Envelope

from ..enemy_state import EnemyState
from ..pathfinding import find_nearest_walkable
from ..position import Position
from .base import BehaviorUnit, UnitKind, drop_escort

if TYPE_CHECKING:
    from ..agent import EnemyAgent


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def cover_position(ally: Position, player: Position) -> Position:
    return ally.translate(-_sign(ally.x - player.x), -_sign(ally.y - player.y))


class Covering(BehaviorUnit):
    kind = UnitKind.COVERING

    def __init__(self, interval: float, ally_id: str) -> None:
        self.ally_id = ally_id
        super().__init__(interval)

    def __repr__(self) -> str:
        return f"Covering({self.ally_id})"

    def register_handlers(self) -> None:
        self.dispatcher.register(RETREATING_POWER_UP_COLLECTED, self._on_ally_recovered)

    def tick(self, agent: EnemyAgent) -> None:
        if self.quit_if_player_dead(agent):
            return
        if agent.is_retreating:
            agent.remove(self)
            return
        agent.update_state(EnemyState.COVERING)

        ally = agent.world.entity_by_name(self.ally_id)
        player = agent.player_position
        if ally is None or not ally.alive or player is None:
            agent.speak(f"{self.ally_id} is gone, standing down.")
            self._stand_down(agent)
            return

        self.handle_next_message(agent)
        if not agent.is_installed(self):
            return

        if agent.player_adjacent():
            self._strike(agent)

        pos = agent.position
        spot = cover_position(ally.position, player)
        if not agent.world.is_walkable(spot) and spot != pos:
            spot = find_nearest_walkable(ally.position, player, agent.world)
        if pos is not None and pos != spot:
            agent.pursue(spot)

    def _strike(self, agent: EnemyAgent) -> None:
        from .attacking import Attacking

        if agent.find_unit(UnitKind.ATTACKING) is None:
            agent.speak("Player is near! Attacking!")
            agent.install(Attacking(agent.settings.attack_interval, escort=True))

    def _stand_down(self, agent: EnemyAgent) -> None:
        from .idle import Idle

        if self.become(agent, Idle(agent.settings.behaviour_interval)):
            agent.update_state(EnemyState.IDLE)
            drop_escort(agent)

    def _on_ally_recovered(self, agent: EnemyAgent, envelope: Envelope) -> None:
        agent.speak(f"{envelope.sender_id} is back on its feet.")
        self._stand_down(agent)
