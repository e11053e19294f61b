# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Advertised enemy states and agent roles."""

from __future__ import annotations

import enum


class EnemyState(enum.Enum):
    """Behavioral state an agent publishes to the directory.

    Advisory only: the directory may briefly lag the unit actually running.
    """

    IDLE = "IDLE"
    CHASING_PLAYER = "CHASING_PLAYER"
    CHASING_TARGET = "CHASING_TARGET"
    CHASING_POWERUP = "CHASING_POWERUP"
    REINFORCING = "REINFORCING"
    ATTACKING = "ATTACKING"
    RETREATING = "RETREATING"
    COVERING = "COVERING"


class Role(enum.Enum):
    STANDARD = "enemy"
    BOSS = "boss"


# Every state except RETREATING and COVERING: peers that can answer a retreat call
ACTIVE_STATES: frozenset[EnemyState] = frozenset({
    EnemyState.IDLE,
    EnemyState.CHASING_TARGET,
    EnemyState.CHASING_POWERUP,
    EnemyState.CHASING_PLAYER,
    EnemyState.REINFORCING,
    EnemyState.ATTACKING,
})

# Peers that are free to drop what they do and converge on a spotted player
SPOTTER_AUDIENCE: frozenset[EnemyState] = frozenset({
    EnemyState.IDLE,
    EnemyState.CHASING_TARGET,
})

# Peers not yet engaged that can answer a reinforcement request
REINFORCEMENT_AUDIENCE: frozenset[EnemyState] = frozenset({
    EnemyState.IDLE,
    EnemyState.CHASING_TARGET,
    EnemyState.CHASING_POWERUP,
    EnemyState.REINFORCING,
})

COVER_AUDIENCE: frozenset[EnemyState] = frozenset({EnemyState.COVERING})
