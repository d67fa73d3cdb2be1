import random

import pygame
import pytest

from grid_invaders import constants
from grid_invaders.entities import InvaderProjectile, Particle, Projectile
from grid_invaders.grid import Grid
from grid_invaders.kinematics import Vector2
from grid_invaders.settings import GameSettings
from grid_invaders.world import World

from conftest import SHIP, SQUARE, press


@pytest.fixture
def ready_world(world):
    world.attach_player_sprite(SHIP)
    world.attach_invader_sprite(SQUARE)
    return world


def bomb_on_player(world):
    player = world.player
    bomb = InvaderProjectile(
        position=(player.position.x + 10, player.position.y + 5),
        velocity=(0, constants.INVADER_PROJECTILE_SPEED),
    )
    world.invader_projectiles.append(bomb)
    return bomb


def test_first_frame_spawns_a_grid(clock):
    world = World(
        settings=GameSettings(star_count=0), rng=random.Random(9), clock=clock
    )
    assert world.frames == 0
    world.tick()
    assert len(world.grids) == 1
    assert world.frames == 1
    assert 500 <= world.grid_interval < 1500


def test_background_stars_are_created():
    world = World(settings=GameSettings(star_count=100), rng=random.Random(2))
    assert len(world.particles) == 100
    assert not any(p.fades for p in world.particles)


def test_single_invader_grid_is_destroyed_end_to_end(ready_world):
    world = ready_world
    scores = []
    world.add_score_listener(scores.append)
    grid = world.spawn_grid(Grid(rows=1, cols=1))
    world.projectiles.append(Projectile(position=(15, 15), velocity=(0, -4)))

    world.tick()

    assert len(grid) == 0
    assert grid not in world.grids
    assert world.projectiles == []
    assert world.score == 10
    assert scores == [10]
    assert len(world.particles) == constants.EXPLOSION_PARTICLES


def test_two_projectiles_on_one_invader_score_once(ready_world):
    world = ready_world
    grid = world.spawn_grid(Grid(rows=1, cols=2))
    target = grid.invaders[0]
    first = Projectile(position=(10, 15), velocity=(0, -4))
    second = Projectile(position=(12, 15), velocity=(0, -4))
    world.projectiles.extend([first, second])

    world.tick()

    assert world.score == 10
    assert len(world.particles) == constants.EXPLOSION_PARTICLES
    assert target not in grid.invaders
    assert len(grid) == 1
    assert world.projectiles == [second]


def test_hit_shrinks_grid_to_survivors(ready_world):
    world = ready_world
    grid = world.spawn_grid(Grid(rows=1, cols=3))
    world.projectiles.append(Projectile(position=(75, 15), velocity=(0, -4)))

    world.tick()

    assert len(grid) == 2
    assert grid.position.x == 1
    assert grid.width == 60


def test_unready_invaders_cannot_be_hit(world):
    grid = world.spawn_grid(Grid(rows=1, cols=1))
    world.projectiles.append(Projectile(position=(15, 15), velocity=(0, -4)))
    world.tick()
    assert len(grid) == 1
    assert world.score == 0


def test_late_invader_sprite_readies_existing_grids(world):
    grid = world.spawn_grid(Grid(rows=1, cols=2))
    assert not any(i.ready for i in grid.invaders)
    world.attach_invader_sprite(SQUARE)
    assert all(i.ready for i in grid.invaders)


def test_player_hit_ends_game_then_freezes(ready_world, clock):
    world = ready_world
    bomb = bomb_on_player(world)

    world.tick()

    assert world.player.opacity == 0
    assert world.game_over and world.is_over
    assert world.active
    assert bomb not in world.invader_projectiles
    assert len(world.particles) == constants.EXPLOSION_PARTICLES

    # still animating until the delay runs out
    clock.advance(1.5)
    before = [Vector2(p.position) for p in world.particles]
    world.tick()
    assert world.active
    assert [p.position for p in world.particles] != before

    clock.advance(0.5)
    world.tick()
    assert not world.active
    assert world.is_frozen

    frames = world.frames
    before = [Vector2(p.position) for p in world.particles]
    world.tick()
    assert [p.position for p in world.particles] == before
    assert world.frames == frames


def test_second_bomb_does_not_rehit_dead_player(ready_world):
    world = ready_world
    bomb_on_player(world)
    world.tick()
    second = bomb_on_player(world)
    world.tick()
    assert second in world.invader_projectiles
    assert len(world.particles) == constants.EXPLOSION_PARTICLES
    assert len(world.scheduler) == 1


def test_bomb_ignores_player_before_sprite_loads(world):
    world.invader_projectiles.append(InvaderProjectile(position=(0, 0)))
    world.tick()
    assert not world.game_over


def test_input_is_ignored_after_game_over(ready_world, latch):
    world = ready_world
    bomb_on_player(world)
    world.tick()

    press(latch, pygame.K_LEFT)
    press(latch, pygame.K_SPACE)
    x = world.player.position.x
    for _ in range(20):
        world.tick()
    assert world.player.position.x == x
    assert world.projectiles == []


def test_fire_held_spawns_every_tenth_frame(ready_world, latch):
    world = ready_world
    press(latch, pygame.K_SPACE)
    for _ in range(20):
        world.tick()

    assert len(world.projectiles) == 2
    player = world.player
    assert all(p.position.x == player.position.x + player.width / 2 for p in world.projectiles)
    assert all(p.velocity == Vector2(0, -constants.PROJECTILE_SPEED) for p in world.projectiles)


def test_fire_waits_for_player_sprite(world, latch):
    press(latch, pygame.K_SPACE)
    world.frames = 10
    world.tick()
    assert world.projectiles == []


def test_arrow_keys_move_and_tilt_player(ready_world, latch):
    world = ready_world
    x = world.player.position.x
    press(latch, pygame.K_LEFT)
    world.tick()
    assert world.player.position.x == x - constants.PLAYER_SPEED
    assert world.player.rotation == -constants.PLAYER_TILT


def test_every_grid_fires_on_the_shared_cadence(ready_world):
    world = ready_world
    world.spawn_grid(Grid(rows=2, cols=2))
    world.spawn_grid(Grid(rows=1, cols=3, position=(300, 100)))
    world.frames = constants.INVADER_FIRE_RATE

    world.tick()

    assert len(world.invader_projectiles) == 2


def test_no_volley_off_cadence(ready_world):
    world = ready_world
    world.spawn_grid(Grid(rows=2, cols=2))
    world.frames = constants.INVADER_FIRE_RATE + 1
    world.tick()
    assert world.invader_projectiles == []


def test_projectile_culled_past_top_edge(world):
    gone = Projectile(position=(100, -4), velocity=(0, -4))
    kept = Projectile(position=(200, 100), velocity=(0, -4))
    world.projectiles.extend([gone, kept])
    world.tick()
    assert world.projectiles == [kept]
    assert kept.position == Vector2(200, 96)


def test_bomb_culled_at_bottom_edge(world):
    gone = InvaderProjectile(position=(100, 576 - 10), velocity=(0, 2))
    kept = InvaderProjectile(position=(200, 100), velocity=(0, 2))
    world.invader_projectiles.extend([gone, kept])
    world.tick()
    assert world.invader_projectiles == [kept]
    assert kept.position == Vector2(200, 102)


def test_spent_particle_is_gone_the_tick_after(world):
    p = Particle(fades=True, opacity=0.004)
    world.particles.append(p)

    world.tick()
    assert p in world.particles
    assert p.spent

    world.tick()
    assert p not in world.particles


def test_star_wraps_to_top_instead_of_dying(world):
    star = Particle(position=(100, 576 + 2), velocity=(0, 0.3), radius=2)
    world.particles.append(star)
    world.tick()
    assert star in world.particles
    assert star.position.y == -2
    assert 0 <= star.position.x < 1024


def test_removal_does_not_skip_neighbours(world):
    stale = [Particle(fades=True, opacity=0) for _ in range(3)]
    live = [Particle(position=(i, 0), velocity=(0, 1), fades=True) for i in range(3)]
    world.particles.extend([stale[0], live[0], stale[1], stale[2], live[1], live[2]])
    world.tick()
    assert world.particles == live
    assert all(p.position.y == 1 for p in live)


def test_reset_cancels_pending_freeze(ready_world, clock):
    world = ready_world
    scores = []
    world.add_score_listener(scores.append)
    world.spawn_grid(Grid(rows=1, cols=1))
    world.projectiles.append(Projectile(position=(15, 15)))
    bomb_on_player(world)
    world.tick()
    assert world.game_over

    world.reset()
    clock.advance(10)
    world.frames = 1
    world.tick()

    assert world.active
    assert not world.game_over
    assert world.player.opacity == 1
    assert world.player.ready
    assert world.score == 0
    assert scores == [10, 0]
