# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Attacking — strike the adjacent player once per cooldown.

Two flavours share this class.  The ordinary one is a main unit: it
advertises Attacking and resumes the chase once the player steps away.
The escort flavour runs beside Covering: it only strikes, never touches
the advertised state and simply drops out when the player is gone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..enemy_state import EnemyState
from .base import BehaviorUnit, UnitKind, register_retreat_handler

if TYPE_CHECKING:
    from ..agent import EnemyAgent


class Attacking(BehaviorUnit):
    kind = UnitKind.ATTACKING

    def __init__(self, interval: float, escort: bool = False) -> None:
        self.escort = escort
        super().__init__(interval)

    @property
    def main(self) -> bool:
        return not self.escort

    def register_handlers(self) -> None:
        if not self.escort:
            register_retreat_handler(self)

    def tick(self, agent: EnemyAgent) -> None:
        from .chasing import ChasingPlayer

        if self.quit_if_player_dead(agent):
            return
        if agent.is_retreating:
            agent.remove(self)
            return

        covering = self.escort or agent.state is EnemyState.COVERING
        if not covering:
            agent.update_state(EnemyState.ATTACKING)

        if agent.player_adjacent():
            agent.attack()
        elif covering:
            agent.remove(self)
            return
        else:
            agent.speak("Player moved away, chasing!")
            if self.become(agent, ChasingPlayer(agent.settings.behaviour_interval)):
                agent.update_state(EnemyState.CHASING_PLAYER)
            return

        if not self.escort:
            self.handle_next_message(agent)
