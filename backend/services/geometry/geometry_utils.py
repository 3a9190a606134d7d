"""
Shapely-backed checks for composite rooms.

The outline tracer assumes the rectangles of a room tile without
overlapping; these helpers detect when they do not and give an independent
area measure for traced outlines.
"""

from typing import List, Sequence, Tuple

from shapely.geometry import Polygon, box
from shapely.ops import unary_union

from ..positioning.models import Point, Rectangle


def rectangle_to_polygon(rect: Rectangle) -> Polygon:
    return box(rect.x, rect.y, rect.x + rect.width, rect.y + rect.depth)


def outline_to_polygon(points: Sequence[Point]) -> Polygon:
    """Shapely polygon for a traced outline (empty polygon for < 3 points)."""
    if len(points) < 3:
        return Polygon()
    return Polygon([(p.x, p.y) for p in points])


def detect_overlaps(rectangles: Sequence[Rectangle],
                    tolerance: float = 0.0) -> List[Tuple[int, int]]:
    """
    Return a list of (i, j) index pairs for rectangles that overlap.

    Rectangles sharing only an edge or a corner (zero-area intersection)
    are **not** considered overlapping.

    Parameters
    ----------
    rectangles : list[Rectangle]
        Room and part rectangles to check.
    tolerance : float
        Intersection area that must be exceeded to count as an overlap.
    """
    polygons = [rectangle_to_polygon(r) for r in rectangles]
    overlaps = []
    for i in range(len(polygons)):
        for j in range(i + 1, len(polygons)):
            inter = polygons[i].intersection(polygons[j])
            if inter.area > tolerance:
                overlaps.append((i, j))
    return overlaps


def has_overlaps(rectangles: Sequence[Rectangle], tolerance: float = 0.0) -> bool:
    """Quick check: are there *any* overlapping rectangle pairs?"""
    return len(detect_overlaps(rectangles, tolerance)) > 0


def union_area(rectangles: Sequence[Rectangle]) -> float:
    """Area covered by the rectangles, counting overlaps once."""
    if not rectangles:
        return 0.0
    return unary_union([rectangle_to_polygon(r) for r in rectangles]).area
