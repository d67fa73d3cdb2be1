"""
The simulation: every live entity, advanced once per tick.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable

from grid_invaders import constants
from grid_invaders.collision import circle_hits_rect, rects_overlap
from grid_invaders.controls import KeyLatch
from grid_invaders.entities import (
    Invader,
    InvaderProjectile,
    Particle,
    Player,
    Projectile,
    Sprite,
    make_explosion,
    make_star,
)
from grid_invaders.grid import Grid
from grid_invaders.kinematics import Vector2
from grid_invaders.scheduler import Clock, Scheduler, Timer
from grid_invaders.settings import GameSettings
from grid_invaders.utils import logger

ScoreListener = Callable[[int], None]


@dataclass
class Hit:
    """
    A projectile found overlapping an invader during the grid pass.
    """

    grid: Grid
    invader: Invader
    projectile: Projectile


@dataclass
class Removals:
    """
    Entities marked dead during the current tick, compacted at its end.
    """

    entities: set = field(default_factory=set)

    def add(self, entity) -> None:
        self.entities.add(entity)

    def __contains__(self, entity) -> bool:
        return entity in self.entities

    def compact(self, items: list) -> list:
        if not self.entities:
            return items
        return [item for item in items if item not in self.entities]


class World:  # pylint: disable=too-many-instance-attributes
    """
    Space Invaders World

    Owns the player, projectiles, bombs, particles and grids. :meth:`tick`
    advances everything one frame; removals found during a tick are applied
    once the pass is over.

    States are one-way: active -> over (player hit, still animating) ->
    frozen (``active`` false, ticks do nothing).
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        latch: KeyLatch | None = None,
        rng: random.Random | None = None,
        clock: Clock = time.monotonic,
    ):
        """
        :param settings: Game settings, defaults when omitted
        :type settings: GameSettings | None

        :param latch: Key state written by the event pump
        :type latch: KeyLatch | None

        :param rng: Random source for grids, firing and particles
        :type rng: random.Random | None

        :param clock: Seconds clock used for the freeze delay
        """
        self.settings = settings or GameSettings()
        self.latch = latch or KeyLatch()
        self.rng = rng or random.Random()
        self.scheduler = Scheduler(clock=clock)

        self._score_listeners: list[ScoreListener] = []
        self._player_sprite: Sprite | None = None
        self._invader_sprite: Sprite | None = None
        self._freeze_timer: Timer | None = None

        self._init_state()

    def _init_state(self) -> None:
        self.player = Player()
        if self._player_sprite is not None:
            self.player.attach(self._player_sprite, self.viewport)

        self.projectiles: list[Projectile] = []
        self.invader_projectiles: list[InvaderProjectile] = []
        self.grids: list[Grid] = []
        self.particles: list[Particle] = [
            make_star(self.rng, self.viewport)
            for _ in range(self.settings.star_count)
        ]

        self._score = 0
        self.frames = 0
        self.grid_interval = self.rng.randrange(*constants.GRID_FIRST_INTERVAL)
        self.game_over = False
        self.active = True

    @property
    def viewport(self) -> tuple[int, int]:
        return self.settings.viewport

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_over(self) -> bool:
        return self.game_over

    @property
    def is_frozen(self) -> bool:
        return not self.active

    def add_score_listener(self, listener: ScoreListener) -> None:
        """
        Register a callback receiving the new score on every change.

        :param listener: Called with the score
        """
        self._score_listeners.append(listener)

    def _set_score(self, score: int) -> None:
        if score == self._score:
            return
        self._score = score
        for listener in self._score_listeners:
            listener(score)

    def attach_player_sprite(self, sprite: Sprite) -> None:
        """Asset completion: the player becomes ready."""
        logger.debug(f"Player sprite ready ({sprite.width}x{sprite.height})")
        self._player_sprite = sprite
        self.player.attach(sprite, self.viewport)

    def attach_invader_sprite(self, sprite: Sprite) -> None:
        """Asset completion: current and future invaders become ready."""
        logger.debug(f"Invader sprite ready ({sprite.width}x{sprite.height})")
        self._invader_sprite = sprite
        for grid in self.grids:
            grid.attach(sprite)

    def spawn_grid(self, grid: Grid | None = None) -> Grid:
        """
        Add a formation, a random one when ``grid`` is omitted.

        :return: Grid
        """
        if grid is None:
            grid = Grid(rng=self.rng, sprite=self._invader_sprite)
        elif self._invader_sprite is not None:
            for invader in grid.invaders:
                if not invader.ready:
                    invader.attach(self._invader_sprite)
        self.grids.append(grid)
        return grid

    def reset(self) -> None:
        """
        Start over, dropping any pending freeze.
        """
        logger.debug("Resetting world")
        if self._freeze_timer is not None:
            self._freeze_timer.cancel()
            self._freeze_timer = None
        self.scheduler.cancel_all()

        had_score = self._score != 0
        self._init_state()
        if had_score:
            for listener in self._score_listeners:
                listener(0)

    def tick(self) -> None:
        """
        Advance the world one frame.
        """
        if not self.active:
            return
        self.scheduler.run_due()
        if not self.active:
            return

        self._steer_player()
        self.player.update()

        removals = Removals()
        self._update_particles(removals)
        self._update_invader_projectiles(removals)
        self._fire_projectile()
        self._update_projectiles(removals)
        hits = self._update_grids(removals)
        self._resolve_hits(hits, removals)

        self.particles = removals.compact(self.particles)
        self.invader_projectiles = removals.compact(self.invader_projectiles)
        self.projectiles = removals.compact(self.projectiles)
        self.grids = [g for g in self.grids if not g.empty]

        self._spawn_grid_on_interval()
        self.frames += 1

    def _steer_player(self) -> None:
        if self.game_over:
            self.player.steer(False, False, self.viewport[0])
            return
        self.player.steer(
            self.latch.move_left, self.latch.move_right, self.viewport[0]
        )

    def _update_particles(self, removals: Removals) -> None:
        vw, vh = self.viewport
        for particle in self.particles:
            if not particle.fades and particle.below(vh):
                particle.recycle(self.rng, vw)
                continue
            if particle.spent:
                removals.add(particle)
            else:
                particle.update()

    def _update_invader_projectiles(self, removals: Removals) -> None:
        _, vh = self.viewport
        for bomb in self.invader_projectiles:
            if self._bomb_hits_player(bomb):
                removals.add(bomb)
                self._player_hit()
            elif bomb.position.y + bomb.height >= vh:
                removals.add(bomb)
            else:
                bomb.update()

    def _bomb_hits_player(self, bomb: InvaderProjectile) -> bool:
        player = self.player
        if not player.ready or player.opacity <= 0:
            return False
        return rects_overlap(
            bomb.position.x, bomb.position.y, bomb.width, bomb.height,
            player.position.x, player.position.y, player.width, player.height,
        )

    def _player_hit(self) -> None:
        logger.info(f"You lose... final score {self._score}")
        self.player.opacity = 0.0
        self.game_over = True
        self.particles.extend(
            make_explosion(
                self.rng, self.player.center, color=constants.PLAYER_EXPLOSION_COLOR
            )
        )
        self._freeze_timer = self.scheduler.call_later(
            self.settings.freeze_delay, self._freeze, name="freeze"
        )

    def _freeze(self) -> None:
        logger.info("Freezing world")
        self.active = False
        self._freeze_timer = None

    def _fire_projectile(self) -> None:
        player = self.player
        if self.game_over or not player.ready or not self.latch.fire:
            return
        if self.frames % self.settings.fire_rate != 0:
            return
        self.projectiles.append(
            Projectile(
                position=Vector2(
                    player.position.x + player.width / 2, player.position.y
                ),
                velocity=Vector2(0.0, -constants.PROJECTILE_SPEED),
            )
        )

    def _update_projectiles(self, removals: Removals) -> None:
        for projectile in self.projectiles:
            if projectile.position.y + projectile.radius <= 0:
                removals.add(projectile)
            else:
                projectile.update()

    def _update_grids(self, removals: Removals) -> list[Hit]:
        vw, _ = self.viewport
        invaders_fire = self.frames % self.settings.invader_fire_rate == 0
        hits: list[Hit] = []

        for grid in self.grids:
            grid.update(vw)

            if invaders_fire and grid.invaders:
                shooter = grid.random_invader(self.rng)
                if shooter is not None:
                    self.invader_projectiles.append(shooter.shoot())

            grid.move_invaders()
            for invader in grid.invaders:
                if not invader.ready:
                    continue
                for projectile in self.projectiles:
                    if projectile in removals:
                        continue
                    if circle_hits_rect(
                        projectile.position.x,
                        projectile.position.y,
                        projectile.radius,
                        invader.position.x,
                        invader.position.y,
                        invader.width,
                        invader.height,
                    ):
                        hits.append(Hit(grid, invader, projectile))
        return hits

    def _resolve_hits(self, hits: list[Hit], removals: Removals) -> None:
        for hit in hits:
            # a projectile kills once and an invader dies once
            if hit.projectile in removals:
                continue
            if not any(i is hit.invader for i in hit.grid.invaders):
                continue

            center = hit.invader.center
            hit.grid.remove(hit.invader)
            removals.add(hit.projectile)
            self._set_score(self._score + constants.SCORE_PER_INVADER)
            self.particles.extend(make_explosion(self.rng, center))
            logger.debug(f"Hit! score {self._score}")

            if hit.grid.empty:
                logger.debug("Grid cleared")

    def _spawn_grid_on_interval(self) -> None:
        if self.frames % self.grid_interval != 0:
            return
        self.spawn_grid()
        self.grid_interval = self.rng.randrange(*constants.GRID_INTERVAL)
        self.frames = 0
