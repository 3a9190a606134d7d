"""
Corner and offset arithmetic for a single rectangle.

All coordinates are in the input's native units (millimetres in practice),
with ``y`` growing downward.
"""

from typing import Tuple, Union

from .models import Anchor, Point, Rectangle, ResolvedRoom


def get_corner(rect: Union[Rectangle, ResolvedRoom], corner: Anchor) -> Point:
    """Return one of the four corners of *rect*."""
    x, y = rect.x, rect.y
    if corner is Anchor.TOP_RIGHT:
        return Point(x + rect.width, y)
    if corner is Anchor.BOTTOM_LEFT:
        return Point(x, y + rect.depth)
    if corner is Anchor.BOTTOM_RIGHT:
        return Point(x + rect.width, y + rect.depth)
    return Point(x, y)


def get_anchor_adjustment(anchor: Anchor, width: float, depth: float) -> Point:
    """Vector from the *anchor* corner of a rectangle to its top-left corner."""
    if anchor is Anchor.TOP_RIGHT:
        return Point(-width, 0)
    if anchor is Anchor.BOTTOM_LEFT:
        return Point(0, -depth)
    if anchor is Anchor.BOTTOM_RIGHT:
        return Point(-width, -depth)
    return Point(0, 0)


def calculate_position(
    anchor_point: Point,
    anchor: Anchor,
    width: float,
    depth: float,
    offset: Tuple[float, float] = (0, 0),
) -> Point:
    """
    Top-left corner of a *width* x *depth* rectangle whose *anchor* corner
    sits at *anchor_point* shifted by *offset*.
    """
    adjust = get_anchor_adjustment(anchor, width, depth)
    return Point(
        anchor_point.x + offset[0] + adjust.x,
        anchor_point.y + offset[1] + adjust.y,
    )
