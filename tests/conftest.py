import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from grid_invaders.controls import KeyLatch  # noqa: E402
from grid_invaders.entities import Sprite  # noqa: E402
from grid_invaders.settings import GameSettings  # noqa: E402
from grid_invaders.world import World  # noqa: E402

SQUARE = Sprite(image=None, width=30, height=30)
SHIP = Sprite(image=None, width=50, height=40)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def press(latch, key):
    latch.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))


def release(latch, key):
    latch.handle_event(pygame.event.Event(pygame.KEYUP, key=key))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def latch():
    return KeyLatch()


@pytest.fixture
def world(clock, latch):
    w = World(
        settings=GameSettings(star_count=0),
        latch=latch,
        rng=random.Random(1234),
        clock=clock,
    )
    # skip the grid spawn and the invader volley that frame 0 triggers
    w.frames = 1
    return w
