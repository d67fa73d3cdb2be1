# pylint: disable=protected-access
import time

import pygame
import pytest

from grid_invaders.app import GridInvaders
from grid_invaders.settings import GameSettings


@pytest.fixture
def app():
    game = GridInvaders(GameSettings(width=320, height=240, star_count=5))
    yield game
    game.teardown()
    pygame.quit()


def test_frames_run_headless_once_sprites_land(app):
    app.setup()
    deadline = time.monotonic() + 5
    while (app._loader.pending or not app.world.grids) and time.monotonic() < deadline:
        app.handle_events()
        app.handle_game_logic()
        app.draw_stuff()
        time.sleep(0.01)

    assert app.world.player.ready
    assert app.world.grids
    assert all(i.ready for g in app.world.grids for i in g.invaders)


def test_score_board_follows_world(app):
    app.world.add_score_listener(lambda score: None)
    app.world._set_score(30)
    assert app._score_board.score == 30


def test_quit_event_stops_loop(app):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.handle_events()
    assert not app._carry_on
