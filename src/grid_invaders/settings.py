"""
Game settings.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from grid_invaders import constants


@dataclass
class GameSettings:
    """
    Tunables for the window and the simulation.

    Defaults come from :mod:`grid_invaders.constants`; anything passed in is
    validated eagerly so a bad value fails at start-up, not mid-game.
    """

    width: int = constants.WINDOW_SIZE[0]
    height: int = constants.WINDOW_SIZE[1]
    title: str = constants.TITLE
    fps: int = constants.FPS
    fire_rate: int = constants.FIRE_RATE
    invader_fire_rate: int = constants.INVADER_FIRE_RATE
    star_count: int = constants.STAR_COUNT
    freeze_delay: float = constants.FREEZE_DELAY
    log_level: str = "INFO"

    def __post_init__(self):
        for name in ("width", "height", "fps", "fire_rate", "invader_fire_rate"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.star_count < 0:
            raise ValueError(f"star_count must be >= 0, got {self.star_count!r}")
        if not math.isfinite(self.freeze_delay) or self.freeze_delay < 0:
            raise ValueError(
                f"freeze_delay must be a finite, non-negative number, "
                f"got {self.freeze_delay!r}"
            )

    @property
    def viewport(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameSettings":
        """
        Build settings from a nested dict.

        Accepts ``{"window": {...}, "simulation": {...}, "log_level": ...}``;
        unknown keys are rejected.

        :param data: Settings data
        :type data: dict

        :return: GameSettings
        :raise ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        flat: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                flat.update(value)
            else:
                flat[key] = value

        unknown = set(flat) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**flat)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "window": {
                "width": data.pop("width"),
                "height": data.pop("height"),
                "title": data.pop("title"),
                "fps": data.pop("fps"),
            },
            "log_level": data.pop("log_level"),
            "simulation": data,
        }
