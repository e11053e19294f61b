# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""BehaviorUnit — the base every tick-driven enemy behavior derives from.

A unit is a tagged variant: ``kind`` says which behavior it is, and the
main kinds (Idle, ChasingPlayer, GoingToTarget, Attacking, Retreating,
Covering) are mutually exclusive on one agent.  Units keep only their own
per-variant data (a target cell, the id of an ally being covered) and get
the agent handed in on every tick and every message.

The transition helpers shared by several units live here too.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from horde.comms.dispatch import MessageDispatcher
from horde.comms.envelope import COVERING_RETREAT, RETREATING, Envelope

from ..enemy_state import EnemyState

if TYPE_CHECKING:
    from ..agent import EnemyAgent
    from ..position import Position


class UnitKind(enum.Enum):
    IDLE = "idle"
    CHASING_PLAYER = "chasing_player"
    GOING_TO_TARGET = "going_to_target"
    ATTACKING = "attacking"
    RETREATING = "retreating"
    COVERING = "covering"
    LOW_HEALTH_WATCH = "low_health_watch"
    REINFORCEMENT_REQUESTER = "reinforcement_requester"
    BOSS_ALERT = "boss_alert"
    BOSS_RESPONSE = "boss_response"


MAIN_KINDS: frozenset[UnitKind] = frozenset({
    UnitKind.IDLE,
    UnitKind.CHASING_PLAYER,
    UnitKind.GOING_TO_TARGET,
    UnitKind.ATTACKING,
    UnitKind.RETREATING,
    UnitKind.COVERING,
})


class BehaviorUnit:
    """One periodic behavior installed on an agent."""

    kind: UnitKind

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self.unit_id: int | None = None
        self.dispatcher = MessageDispatcher()
        self.register_handlers()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.unit_id})"

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def main(self) -> bool:
        return self.kind in MAIN_KINDS

    def register_handlers(self) -> None:
        """Fill ``self.dispatcher``. Units that ignore mail leave it empty."""

    def tick(self, agent: EnemyAgent) -> None:
        raise NotImplementedError

    # -- Helpers -------------------------------------------------------------

    def handle_next_message(self, agent: EnemyAgent) -> None:
        """Poll at most one envelope and dispatch it.

        The boss never reacts to peer chatter; its mail is left for the
        boss-response unit.
        """
        if agent.is_boss:
            return
        self.dispatcher.handle(agent.receive(), agent)

    def become(self, agent: EnemyAgent, new: BehaviorUnit) -> bool:
        return agent.replace(self, new)

    def quit_if_player_dead(self, agent: EnemyAgent) -> bool:
        if agent.player_alive():
            return False
        agent.remove(self)
        return True


# -- Shared transitions ------------------------------------------------------

def drop_escort(agent: EnemyAgent) -> None:
    """Uninstall the escort Attacking that runs beside Covering, if any."""
    for unit in agent.units:
        if unit.kind is UnitKind.ATTACKING and not unit.main:
            agent.remove(unit)


def attack_if_player_near(unit: BehaviorUnit, agent: EnemyAgent) -> bool:
    """Swap *unit* for Attacking when the player is adjacent.

    Non-boss agents also start calling for reinforcements.
    """
    from .attacking import Attacking
    from .reinforcements import ReinforcementRequester

    if not agent.player_adjacent():
        return False
    agent.speak("Player is near! Attacking!")
    if not unit.become(agent, Attacking(agent.settings.attack_interval)):
        return False
    drop_escort(agent)
    if not agent.is_boss and agent.find_unit(UnitKind.REINFORCEMENT_REQUESTER) is None:
        agent.install(ReinforcementRequester(agent.settings.reinforcement_interval))
    return True


def go_to_target(
    unit: BehaviorUnit,
    agent: EnemyAgent,
    state: EnemyState,
    target: Position,
) -> bool:
    from .target import GoingToTarget

    if not unit.become(agent, GoingToTarget(agent.settings.behaviour_interval, state, target)):
        return False
    agent.update_state(state)
    return True


def cover_retreating_ally(unit: BehaviorUnit, agent: EnemyAgent, envelope: Envelope) -> None:
    """Answer a ``RETREATING`` call: acknowledge, then cover the sender."""
    from .covering import Covering

    ally_id = envelope.payload
    agent.speak(f"Covering {ally_id}'s retreat!")
    agent.reply(envelope, COVERING_RETREAT)
    if unit.become(agent, Covering(agent.settings.cover_interval, ally_id)):
        agent.update_state(EnemyState.COVERING)


def register_retreat_handler(unit: BehaviorUnit) -> None:
    unit.dispatcher.register(
        RETREATING, lambda agent, envelope: cover_retreating_ally(unit, agent, envelope),
    )
