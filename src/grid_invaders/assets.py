"""
Background sprite loading.

Images load on a worker thread; finished loads are handed back on the game
thread by :meth:`AssetLoader.poll`, so sprites only ever reach the world
between ticks.
"""

from __future__ import annotations

import queue
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

import pygame

from grid_invaders import constants
from grid_invaders.entities import Sprite
from grid_invaders.utils import load_image, logger

Painter = Callable[[], pygame.Surface]
SpriteCallback = Callable[[Sprite], None]


def paint_player() -> pygame.Surface:
    """Built-in ship: a body with a nose cone, drawn at on-screen size."""
    surface = pygame.Surface((52, 34), pygame.SRCALPHA)
    color = (200, 220, 255)
    pygame.draw.rect(surface, color, pygame.Rect(6, 16, 40, 14))
    pygame.draw.polygon(surface, color, [(26, 0), (14, 18), (38, 18)])
    pygame.draw.rect(surface, (255, 80, 80), pygame.Rect(0, 22, 6, 10))
    pygame.draw.rect(surface, (255, 80, 80), pygame.Rect(46, 22, 6, 10))
    return surface


def paint_invader() -> pygame.Surface:
    surface = pygame.Surface((constants.CELL_SIZE, constants.CELL_SIZE), pygame.SRCALPHA)
    color = constants.INVADER_COLOR
    pygame.draw.rect(surface, color, pygame.Rect(5, 6, 20, 12))
    pygame.draw.rect(surface, (0, 0, 0, 0), pygame.Rect(9, 9, 4, 4))
    pygame.draw.rect(surface, (0, 0, 0, 0), pygame.Rect(17, 9, 4, 4))
    for x in (3, 11, 17, 25):
        pygame.draw.rect(surface, color, pygame.Rect(x, 18, 3, 8))
    return surface


class AssetLoader:
    """
    Loads sprites off the game thread.
    """

    def __init__(self, assets_root: Path | None = None, max_workers: int = 2):
        """
        :param assets_root: Directory holding image files, built-in sprites
            are painted for anything missing
        :type assets_root: Path | None

        :param max_workers: Loader threads
        :type max_workers: int
        """
        self._root = assets_root
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="assets"
        )
        self._done: queue.SimpleQueue = queue.SimpleQueue()
        self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending

    def request(
        self,
        filename: str,
        callback: SpriteCallback,
        scale: float = 1.0,
        painter: Painter | None = None,
    ) -> Future:
        """
        Start loading ``filename``; ``callback`` gets the sprite from a later
        :meth:`poll`.

        :param filename: File name under the assets root
        :param callback: Receives the Sprite on the game thread
        :param scale: Applied to image files, painted sprites are already sized
        :param painter: Fallback when the file is not available

        :return: Future resolving to the Sprite
        """
        logger.debug(f"Loading sprite {filename}")
        future = self._executor.submit(self._load, filename, scale, painter)
        self._pending += 1
        future.add_done_callback(lambda f: self._done.put((callback, f)))
        return future

    def _load(self, filename: str, scale: float, painter: Painter | None) -> Sprite:
        path = self._root / filename if self._root is not None else None
        if path is not None and path.is_file():
            return Sprite.from_image(load_image(path), scale)
        if painter is None:
            raise FileNotFoundError(f"No image for {filename!r} and no painter")
        logger.debug(f"{filename} not found, painting built-in sprite")
        return Sprite.from_image(painter())

    def poll(self) -> int:
        """
        Deliver finished loads.

        :return: Number of callbacks run
        :raise Exception: Whatever the load raised
        """
        delivered = 0
        while True:
            try:
                callback, future = self._done.get_nowait()
            except queue.Empty:
                return delivered
            self._pending -= 1
            sprite = future.result()
            callback(sprite)
            delivered += 1

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
