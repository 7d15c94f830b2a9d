"""Playback configuration and state types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class PlaybackState(str, Enum):
    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackConfig:
    """Groups auto-advance timing configuration.

    ``min_speed``/``max_speed``/``speed_step`` describe the range a speed
    control should offer; the controller itself accepts any positive speed.
    """

    base_interval: float = constants.DEFAULT_BASE_INTERVAL
    default_speed: float = constants.DEFAULT_SPEED
    min_speed: float = constants.MIN_SPEED
    max_speed: float = constants.MAX_SPEED
    speed_step: float = constants.SPEED_STEP

    def __post_init__(self):
        if self.base_interval <= 0:
            raise ValueError(f"base_interval must be positive, got {self.base_interval}")
        if self.default_speed <= 0:
            raise ValueError(f"default_speed must be positive, got {self.default_speed}")
        if self.speed_step <= 0:
            raise ValueError(f"speed_step must be positive, got {self.speed_step}")
        if not 0 < self.min_speed <= self.max_speed:
            raise ValueError(
                f"speed range must satisfy 0 < min <= max, got "
                f"[{self.min_speed}, {self.max_speed}]"
            )

    def speed_choices(self) -> tuple[float, ...]:
        """Speeds from ``min_speed`` to ``max_speed`` in ``speed_step`` increments."""
        choices = []
        speed = self.min_speed
        while speed <= self.max_speed + 1e-9:
            choices.append(round(speed, 6))
            speed += self.speed_step
        return tuple(choices)
