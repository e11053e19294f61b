# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Boss coordination: the survival alert and the boss's answer to it.

Every standard agent arms a one-shot ``BossAlert``.  If the player is
still alive when it fires, the boss is told the player has survived too
long.  The boss runs ``BossResponse``, which is the only unit allowed to
read the boss's mailbox; on the first alert it enhances the boss once and
retires.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from horde.comms.envelope import PLAYER_SURVIVAL_ALERT, Envelope, IntentKind

from .base import BehaviorUnit, UnitKind

if TYPE_CHECKING:
    from ..agent import EnemyAgent


class BossAlert(BehaviorUnit):
    kind = UnitKind.BOSS_ALERT

    def tick(self, agent: EnemyAgent) -> None:
        agent.remove(self)
        if not agent.player_alive() or agent.boss_id is None:
            return
        agent.speak("Notifying the boss about the player.")
        alert = Envelope(agent.agent_id, PLAYER_SURVIVAL_ALERT, kind=IntentKind.REQUEST)
        agent.send(alert, [agent.boss_id])


class BossResponse(BehaviorUnit):
    kind = UnitKind.BOSS_RESPONSE

    def register_handlers(self) -> None:
        self.dispatcher.register(PLAYER_SURVIVAL_ALERT, self._on_survival_alert)

    def tick(self, agent: EnemyAgent) -> None:
        if self.quit_if_player_dead(agent):
            return
        self.dispatcher.handle(agent.receive(), agent)

    def _on_survival_alert(self, agent: EnemyAgent, envelope: Envelope) -> None:
        agent.speak("The player has survived long enough. Time to get serious!")
        agent.world.enhance_attributes(agent.agent_id)
        agent.remove(self)
