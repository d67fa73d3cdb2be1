"""
Shared position + velocity primitive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import pygame

Vector2 = pygame.math.Vector2


def ensure_finite(name: str, vector) -> Vector2:
    """
    Copy ``vector`` into a fresh Vector2, rejecting NaN/inf coordinates.

    :raise ValueError: If either component is not finite
    """
    vector = Vector2(vector)
    if not (math.isfinite(vector.x) and math.isfinite(vector.y)):
        raise ValueError(f"{name} must be finite, got ({vector.x}, {vector.y})")
    return vector


@dataclass(eq=False)
class Kinematic:
    """
    Anything that moves by one velocity step per tick.

    Entities compare by identity; collections rely on ``in`` meaning
    "this very object is still alive".
    """

    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)

    def __post_init__(self):
        self.position = ensure_finite("position", self.position)
        self.velocity = ensure_finite("velocity", self.velocity)

    def step(self) -> None:
        """Euler step with a unit tick, there is no delta-time scaling."""
        self.position += self.velocity
