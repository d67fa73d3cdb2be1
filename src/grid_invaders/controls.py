"""
Latched keyboard state.
"""

from __future__ import annotations

import pygame

KEY_MAP = {
    pygame.K_LEFT: "_move_left",
    pygame.K_RIGHT: "_move_right",
    pygame.K_SPACE: "_fire",
}


class KeyLatch:
    """
    Held/released state of the three game keys.

    Written only by :meth:`handle_event` from the event pump and read by the
    world once per tick. The world gets the read-only properties.
    """

    def __init__(self):
        self._move_left = False
        self._move_right = False
        self._fire = False

    @property
    def move_left(self) -> bool:
        return self._move_left

    @property
    def move_right(self) -> bool:
        return self._move_right

    @property
    def fire(self) -> bool:
        return self._fire

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Latch a key event.

        :param event: pygame event
        :type event: pygame.event.Event

        :return: True if the event was one of ours
        """
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False
        attr = KEY_MAP.get(event.key)
        if attr is None:
            return False
        setattr(self, attr, event.type == pygame.KEYDOWN)
        return True

    def release_all(self) -> None:
        self._move_left = self._move_right = self._fire = False

    def __repr__(self) -> str:
        return (
            f"KeyLatch(left={self._move_left}, right={self._move_right}, "
            f"fire={self._fire})"
        )
