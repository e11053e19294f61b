# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Settings for the horde agents.

All values can be overridden from the environment with the ``HORDE_``
prefix (``HORDE_DETECTION_RANGE=7``) or from a ``.env`` file.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HORDE_",
        env_file=".env",
        extra="ignore",
    )

    # Tick intervals (milliseconds)
    behaviour_tick_ms: int = Field(default=1000, gt=0)
    cover_tick_ms: int = Field(default=500, gt=0)
    retreat_tick_ms: int = Field(default=500, gt=0)
    attack_cooldown_ms: int = Field(default=2000, gt=0)
    reinforcement_interval_ms: int = Field(default=5000, gt=0)
    low_health_check_ms: int = Field(default=1000, gt=0)
    boss_alert_delay_ms: int = Field(default=120_000, ge=0)

    # Tactical constants
    detection_range: int = Field(default=5, ge=1)
    retreat_health_ratio: float = Field(default=0.3, ge=0.0, le=1.0)
    boss_special_attack_chance: float = Field(default=0.2, ge=0.0, le=1.0)
    power_up_hearing_range: int = Field(default=10, ge=0)

    # Runtime
    move_workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"

    @property
    def behaviour_interval(self) -> float:
        return self.behaviour_tick_ms / 1000.0

    @property
    def cover_interval(self) -> float:
        return self.cover_tick_ms / 1000.0

    @property
    def retreat_interval(self) -> float:
        return self.retreat_tick_ms / 1000.0

    @property
    def attack_interval(self) -> float:
        return self.attack_cooldown_ms / 1000.0

    @property
    def reinforcement_interval(self) -> float:
        return self.reinforcement_interval_ms / 1000.0

    @property
    def low_health_interval(self) -> float:
        return self.low_health_check_ms / 1000.0

    @property
    def boss_alert_delay(self) -> float:
        return self.boss_alert_delay_ms / 1000.0
