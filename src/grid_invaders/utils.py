"""
Grid Invaders utils
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pygame

logger = logging.getLogger("grid_invaders")


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure the root handler for the game.

    :param level: Logging level name or number
    :type level: int | str
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(level)


def find_assets_root() -> Path:
    """Return the path to the `assets` directory.

    Works in:
    - dev: repo/assets (when running from source tree)
    - pip install: site-packages/assets
    - PyInstaller onefile: _MEIPASS/assets (if bundled with --add-data)

    :raises FileNotFoundError: If the assets directory cannot be found.
    """
    # pylint: disable=protected-access
    if hasattr(sys, "_MEIPASS"):
        candidate = Path(sys._MEIPASS) / "assets"
        if candidate.is_dir():
            return candidate
    # pylint: enable=protected-access

    here = Path(__file__).resolve()
    for parent in here.parents:
        candidate = parent / "assets"
        if candidate.is_dir():
            return candidate

    raise FileNotFoundError("Could not locate 'assets' directory.")


def load_image(filename: str | Path) -> pygame.Surface:
    """
    Load an image

    :param filename: Name of the file
    :type filename: str | Path

    :return: pygame.Surface
    :raise SystemExit: If pygame cannot decode the file
    """
    try:
        image = pygame.image.load(str(filename))
    except pygame.error as message:
        logger.error(f"Failed to load image {filename}: {message}")
        raise SystemExit(message) from message

    # convert_alpha needs a display mode; loads may finish before one exists
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    return screen
