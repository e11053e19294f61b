# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tick-driven behavior units installed on enemy agents."""

from .attacking import Attacking
from .base import MAIN_KINDS, BehaviorUnit, UnitKind
from .boss import BossAlert, BossResponse
from .chasing import ChasingPlayer
from .covering import Covering, cover_position
from .idle import Idle
from .reinforcements import ReinforcementRequester
from .retreat import LowHealthWatch, Retreating
from .target import GoingToTarget

__all__ = [
    "MAIN_KINDS",
    "Attacking",
    "BehaviorUnit",
    "BossAlert",
    "BossResponse",
    "ChasingPlayer",
    "Covering",
    "GoingToTarget",
    "Idle",
    "LowHealthWatch",
    "ReinforcementRequester",
    "Retreating",
    "UnitKind",
    "cover_position",
]
