import pygame

from grid_invaders.controls import KeyLatch

from conftest import press, release


def test_keys_latch_until_released(latch):
    press(latch, pygame.K_LEFT)
    press(latch, pygame.K_SPACE)
    assert latch.move_left and latch.fire
    assert not latch.move_right

    release(latch, pygame.K_LEFT)
    assert not latch.move_left
    assert latch.fire


def test_other_events_are_not_ours():
    latch = KeyLatch()
    assert not latch.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
    assert not latch.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1))
    assert latch.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT))
    assert latch.move_right


def test_release_all(latch):
    press(latch, pygame.K_RIGHT)
    press(latch, pygame.K_SPACE)
    latch.release_all()
    assert not (latch.move_left or latch.move_right or latch.fire)
