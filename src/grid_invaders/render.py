"""
Drawing the world.

The simulation never draws; these drawables read a :class:`World` and issue
primitives to anything implementing :class:`RenderSurface`.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator, Protocol

import pygame

from grid_invaders import constants
from grid_invaders.world import World

Color = tuple[int, int, int]


class RenderSurface(Protocol):
    """
    Minimal 2D drawing capability.
    """

    # pylint: disable=too-many-arguments,too-many-positional-arguments

    def clear(self, color: Color) -> None: ...

    def draw_image(
        self, image, x: float, y: float, w: float, h: float, alpha: float = 1.0
    ) -> None: ...

    def draw_circle(
        self, x: float, y: float, r: float, color: Color, alpha: float = 1.0
    ) -> None: ...

    def draw_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def rotated(self, angle: float, center: tuple[float, float]): ...


class PygameSurface:
    """
    :class:`RenderSurface` over a ``pygame.Surface``.

    pygame cannot rotate the target itself, so inside :meth:`rotated` images
    are rotated about the scope's center before blitting.
    """

    def __init__(self, target: pygame.Surface):
        self.target = target
        self._angle = 0.0
        self._center: tuple[float, float] | None = None

    def clear(self, color: Color) -> None:
        self.target.fill(color)

    def draw_image(self, image, x, y, w, h, alpha=1.0):
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        if alpha <= 0:
            return
        size = (max(1, round(w)), max(1, round(h)))
        if image.get_size() != size:
            image = pygame.transform.smoothscale(image, size)
        if alpha < 1:
            image = image.copy()
            image.set_alpha(round(alpha * 255))

        if self._angle and self._center is not None:
            # canvas angles are clockwise radians, pygame's are counter-clockwise degrees
            image = pygame.transform.rotate(image, -math.degrees(self._angle))
            cx, cy = self._center
            offset = pygame.math.Vector2(x + w / 2 - cx, y + h / 2 - cy).rotate_rad(
                self._angle
            )
            rect = image.get_rect(center=(cx + offset.x, cy + offset.y))
            self.target.blit(image, rect)
            return
        self.target.blit(image, (round(x), round(y)))

    def draw_circle(self, x, y, r, color, alpha=1.0):
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        if alpha <= 0 or r <= 0:
            return
        if alpha >= 1:
            pygame.draw.circle(self.target, color, (x, y), r)
            return
        size = math.ceil(r * 2) + 2
        s = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(s, (*color, round(alpha * 255)), (size / 2, size / 2), r)
        self.target.blit(s, (x - size / 2, y - size / 2))

    def draw_rect(self, x, y, w, h, color):
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        pygame.draw.rect(self.target, color, pygame.Rect(round(x), round(y), round(w), round(h)))

    @contextmanager
    def rotated(self, angle: float, center: tuple[float, float]) -> Iterator[None]:
        saved = self._angle, self._center
        self._angle, self._center = angle, center
        try:
            yield
        finally:
            self._angle, self._center = saved


class Drawable:
    """
    Draws one slice of the world.
    """

    def draw(self, surface: RenderSurface, world: World) -> None:
        raise NotImplementedError("Subclasses must implement this method")


class DrawPlayer(Drawable):
    def draw(self, surface, world):
        player = world.player
        if not player.ready or player.opacity <= 0:
            return
        with surface.rotated(player.rotation, tuple(player.center)):
            surface.draw_image(
                player.sprite.image,
                player.position.x,
                player.position.y,
                player.width,
                player.height,
                alpha=player.opacity,
            )


class DrawParticles(Drawable):
    """
    Stars and explosion fragments.
    """

    def draw(self, surface, world):
        for p in world.particles:
            if p.spent:
                continue
            surface.draw_circle(
                p.position.x, p.position.y, p.radius, p.color, alpha=p.opacity
            )


class DrawInvaderProjectiles(Drawable):
    def draw(self, surface, world):
        for b in world.invader_projectiles:
            surface.draw_rect(b.position.x, b.position.y, b.width, b.height, b.color)


class DrawProjectiles(Drawable):
    def draw(self, surface, world):
        for p in world.projectiles:
            surface.draw_circle(p.position.x, p.position.y, p.radius, p.color)


class DrawGrids(Drawable):
    def draw(self, surface, world):
        for grid in world.grids:
            for invader in grid.invaders:
                if not invader.ready:
                    continue
                surface.draw_image(
                    invader.sprite.image,
                    invader.position.x,
                    invader.position.y,
                    invader.width,
                    invader.height,
                )


DRAW_ORDER: tuple[Drawable, ...] = (
    DrawPlayer(),
    DrawParticles(),
    DrawInvaderProjectiles(),
    DrawProjectiles(),
    DrawGrids(),
)


def render_world(surface: RenderSurface, world: World) -> None:
    """
    Clear to black and draw every live entity.

    :param surface: Where to draw
    :param world: What to draw
    """
    surface.clear(constants.BACKGROUND_COLOR)
    for drawable in DRAW_ORDER:
        drawable.draw(surface, world)
