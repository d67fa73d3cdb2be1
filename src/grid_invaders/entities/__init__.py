"""
Grid Invaders entities
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from grid_invaders import constants
from grid_invaders.kinematics import Kinematic, Vector2

if TYPE_CHECKING:
    from grid_invaders.grid import Grid

Color = tuple[int, int, int]


@dataclass(frozen=True)
class Sprite:
    """
    A loaded image and the on-screen size it is drawn at.
    """

    image: Any
    width: float
    height: float

    @classmethod
    def from_image(cls, image, scale: float = 1.0) -> "Sprite":
        """
        :param image: Anything with ``get_size()`` (a pygame.Surface)
        :param scale: Factor applied to the image's pixel size
        """
        w, h = image.get_size()
        return cls(image=image, width=w * scale, height=h * scale)


@dataclass(eq=False)
class Player(Kinematic):
    """
    Player ship.

    Inert until :meth:`attach` hands it a sprite; before that it has no size
    and neither moves nor collides.
    """

    rotation: float = 0.0
    opacity: float = 1.0
    sprite: Sprite | None = None

    @property
    def ready(self) -> bool:
        return self.sprite is not None

    @property
    def width(self) -> float:
        return self.sprite.width if self.sprite else 0.0

    @property
    def height(self) -> float:
        return self.sprite.height if self.sprite else 0.0

    @property
    def center(self) -> Vector2:
        return Vector2(
            self.position.x + self.width / 2, self.position.y + self.height / 2
        )

    def attach(self, sprite: Sprite, viewport: tuple[float, float]) -> None:
        """
        Make the player ready and park it bottom-center.

        :param sprite: Loaded ship sprite
        :param viewport: Canvas (width, height)
        """
        vw, vh = viewport
        self.sprite = sprite
        self.position = Vector2(
            vw / 2 - sprite.width / 2,
            vh - sprite.height - constants.PLAYER_BOTTOM_MARGIN,
        )

    def steer(self, left: bool, right: bool, canvas_width: float) -> None:
        """Set velocity and tilt from the held direction keys."""
        if left and self.position.x >= 0:
            self.velocity.x = -constants.PLAYER_SPEED
            self.rotation = -constants.PLAYER_TILT
        elif right and self.position.x + self.width <= canvas_width:
            self.velocity.x = constants.PLAYER_SPEED
            self.rotation = constants.PLAYER_TILT
        else:
            self.velocity.x = 0.0
            self.rotation = 0.0

    def update(self) -> None:
        if not self.ready:
            return
        self.step()


@dataclass(eq=False)
class Projectile(Kinematic):
    """
    Player-fired round.
    """

    radius: float = constants.PROJECTILE_RADIUS
    color: Color = constants.PROJECTILE_COLOR

    def update(self) -> None:
        self.step()


@dataclass(eq=False)
class InvaderProjectile(Kinematic):
    """
    Invader-fired bomb.
    """

    width: float = constants.INVADER_PROJECTILE_SIZE[0]
    height: float = constants.INVADER_PROJECTILE_SIZE[1]
    color: Color = constants.INVADER_PROJECTILE_COLOR

    def update(self) -> None:
        self.step()


@dataclass(eq=False)
class Particle(Kinematic):
    """
    Background star (``fades=False``) or explosion fragment (``fades=True``).
    """

    radius: float = 1.0
    color: Color = constants.STAR_COLOR
    opacity: float = 1.0
    fades: bool = False

    @property
    def spent(self) -> bool:
        return self.opacity <= 0

    def below(self, canvas_height: float) -> bool:
        return self.position.y - self.radius >= canvas_height

    def recycle(self, rng: random.Random, canvas_width: float) -> None:
        """Send an off-screen star back to a random spot above the top edge."""
        self.position.x = rng.random() * canvas_width
        self.position.y = -self.radius

    def update(self) -> None:
        self.step()
        if self.fades:
            self.opacity -= constants.FADE_RATE


@dataclass(eq=False)
class Invader(Kinematic):
    """
    Invader entity.

    Moves with its grid's velocity; the grid owns it, ``grid`` is only a
    back-reference.
    """

    sprite: Sprite | None = None
    grid: Grid | None = field(default=None, repr=False)

    @property
    def ready(self) -> bool:
        return self.sprite is not None

    @property
    def width(self) -> float:
        return self.sprite.width if self.sprite else 0.0

    @property
    def height(self) -> float:
        return self.sprite.height if self.sprite else 0.0

    @property
    def right(self) -> float:
        return self.position.x + self.width

    @property
    def center(self) -> Vector2:
        return Vector2(
            self.position.x + self.width / 2, self.position.y + self.height / 2
        )

    def attach(self, sprite: Sprite) -> None:
        self.sprite = sprite

    def update(self, velocity: Vector2) -> None:
        """
        Move by the grid's velocity.

        :param velocity: Shared grid velocity
        :type velocity: Vector2
        """
        if not self.ready:
            return
        self.position += velocity

    def shoot(self) -> InvaderProjectile:
        """Spawn a bomb from the invader's lower center."""
        return InvaderProjectile(
            position=Vector2(
                self.position.x + self.width / 2, self.position.y + self.height
            ),
            velocity=Vector2(0.0, constants.INVADER_PROJECTILE_SPEED),
        )


def make_star(rng: random.Random, viewport: tuple[float, float]) -> Particle:
    vw, vh = viewport
    return Particle(
        position=Vector2(rng.random() * vw, rng.random() * vh),
        velocity=Vector2(0.0, constants.STAR_SPEED),
        radius=rng.random() * constants.STAR_MAX_RADIUS,
        color=constants.STAR_COLOR,
        fades=False,
    )


def make_explosion(
    rng: random.Random,
    center: Vector2,
    color: Color = constants.INVADER_COLOR,
    count: int = constants.EXPLOSION_PARTICLES,
) -> list[Particle]:
    """
    Burst of fading fragments flying out in every direction.

    :param rng: Random source
    :param center: Where the burst starts
    :param color: Fragment color, defaults to the invader tint
    :param count: Number of fragments
    """
    return [
        Particle(
            position=Vector2(center),
            velocity=Vector2((rng.random() - 0.5) * 2, (rng.random() - 0.5) * 2),
            radius=rng.random() * constants.EXPLOSION_MAX_RADIUS,
            color=color,
            fades=True,
        )
        for _ in range(count)
    ]
