"""
Overlap tests.

Positions are floats, so these work on plain numbers rather than
``pygame.Rect`` (which truncates to ints).
"""

from __future__ import annotations


def rects_overlap(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
) -> bool:  # pylint: disable=too-many-arguments,too-many-positional-arguments
    """Edges touching counts as overlap."""
    return ax <= bx + bw and ax + aw >= bx and ay <= by + bh and ay + ah >= by


def circle_hits_rect(
    cx: float, cy: float, radius: float,
    x: float, y: float, w: float, h: float,
) -> bool:  # pylint: disable=too-many-arguments,too-many-positional-arguments
    """
    Circle's bounding box against a rectangle.

    :param cx: Circle center x
    :param cy: Circle center y
    :param radius: Circle radius
    :param x: Rectangle left
    :param y: Rectangle top
    :param w: Rectangle width
    :param h: Rectangle height
    """
    return (
        cy - radius <= y + h
        and cx + radius >= x
        and cx - radius <= x + w
        and cy + radius >= y
    )
