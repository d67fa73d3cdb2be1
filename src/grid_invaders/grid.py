"""
Invader formation.
"""

from __future__ import annotations

import math
import random

from grid_invaders import constants
from grid_invaders.entities import Invader, Sprite
from grid_invaders.kinematics import Vector2, ensure_finite
from grid_invaders.utils import logger


class Grid:  # pylint: disable=too-many-instance-attributes
    """
    Rectangular block of invaders sharing one velocity.

    Sweeps sideways and drops one step each time it touches a canvas edge.
    The ``invaders`` list is the sole owner of its invaders.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        rows: int | None = None,
        cols: int | None = None,
        position=(0.0, 0.0),
        cell_size: float = constants.CELL_SIZE,
        sprite: Sprite | None = None,
    ):  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """
        :param rng: Random source for rows/cols when not given
        :type rng: random.Random | None

        :param rows: Number of rows, random in [2, 7) when omitted
        :type rows: int | None

        :param cols: Number of columns, random in [2, 12) when omitted
        :type cols: int | None

        :param position: Top-left corner of the formation
        :param cell_size: Spacing between invaders
        :param sprite: Invader sprite if already loaded

        :raise ValueError: On non-positive dimensions or non-finite position
        """
        rng = rng or random.Random()
        if rows is None:
            rows = rng.randrange(*constants.GRID_ROWS)
        if cols is None:
            cols = rng.randrange(*constants.GRID_COLS)
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid needs at least 1x1 invaders, got {rows}x{cols}")
        if not math.isfinite(cell_size) or cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size!r}")

        self.rows = rows
        self.cols = cols
        self.position = ensure_finite("position", position)
        self.velocity = Vector2(constants.GRID_SPEED, 0.0)
        self.width = cols * cell_size
        self.height = rows * cell_size

        self.invaders: list[Invader] = []
        for x in range(cols):
            for y in range(rows):
                self.invaders.append(
                    Invader(
                        position=Vector2(
                            self.position.x + x * cell_size,
                            self.position.y + y * cell_size,
                        ),
                        sprite=sprite,
                        grid=self,
                    )
                )
        logger.debug(f"Grid {rows}x{cols} spawned at {tuple(self.position)}")

    def __len__(self) -> int:
        return len(self.invaders)

    @property
    def empty(self) -> bool:
        return not self.invaders

    def update(self, canvas_width: float) -> None:
        """
        Move the formation and bounce off the canvas edges.

        The downward step is a one-shot impulse: ``velocity.y`` is cleared
        every tick and only set again on wall contact.

        :param canvas_width: Width of the playfield
        :type canvas_width: float
        """
        self.position += self.velocity
        self.velocity.y = 0.0

        if self.position.x + self.width >= canvas_width or self.position.x <= 0:
            self.velocity.x = -self.velocity.x
            self.velocity.y = constants.GRID_DROP

    def move_invaders(self) -> None:
        for invader in self.invaders:
            invader.update(self.velocity)

    def remove(self, invader: Invader) -> bool:
        """
        Drop ``invader`` and shrink the bounds to what survives.

        :return: False if the invader was already gone
        """
        if not any(i is invader for i in self.invaders):
            return False
        self.invaders = [i for i in self.invaders if i is not invader]
        invader.grid = None
        if self.invaders:
            self.recompute_bounds()
        return True

    def recompute_bounds(self) -> None:
        """Anchor x and width to the leftmost/rightmost surviving invader."""
        if not self.invaders:
            return
        left = min(i.position.x for i in self.invaders)
        right = max(i.right for i in self.invaders)
        self.position.x = left
        self.width = right - left

    def attach(self, sprite: Sprite) -> None:
        for invader in self.invaders:
            invader.attach(sprite)

    def random_invader(self, rng: random.Random) -> Invader | None:
        shooters = [i for i in self.invaders if i.ready]
        if not shooters:
            return None
        return rng.choice(shooters)
