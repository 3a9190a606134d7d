"""
Outer boundary of a room built from several rectangles.

Every rectangle contributes its four edges, wound clockwise in screen
coordinates (``y`` grows downward): top left-to-right, right top-to-bottom,
bottom right-to-left, left bottom-to-top. Where two rectangles share a wall
their edges run in opposite directions over the same stretch and cancel.
What survives is chained head-to-tail into closed loops.

Only unions that form a single loop are supported. Disconnected rectangles,
rectangles touching at a single corner and unions with holes all produce
several loops and raise :class:`DisconnectedOutlineError`.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from ..positioning.models import Point, Rectangle

logger = logging.getLogger(__name__)

ScaleFn = Callable[[float], float]


class DisconnectedOutlineError(ValueError):
    """The rectangles do not trace to exactly one closed outline."""

    def __init__(self, loops: List[List[Point]]):
        self.loops = loops
        super().__init__(
            f"Rectangles form {len(loops)} separate outlines; "
            "only a single connected shape without holes is supported"
        )


@dataclass(frozen=True)
class _Segment:
    """A directed wall segment between two points."""

    start: Point
    end: Point

    @property
    def direction(self) -> Tuple[int, int]:
        return (_sign(self.end.x - self.start.x), _sign(self.end.y - self.start.y))


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


# ----------------------------------------------------------------------
# Edge cancellation
# ----------------------------------------------------------------------


def _line_segments(rect: Rectangle) -> Iterable[Tuple[Tuple[bool, float], float, float]]:
    """
    Yield ``((horizontal, fixed_coord), start, end)`` for each wall of
    *rect*, where *start* and *end* run along the line.
    """
    x, y = rect.x, rect.y
    right, bottom = x + rect.width, y + rect.depth
    yield (True, y), x, right
    yield (False, right), y, bottom
    yield (True, bottom), right, x
    yield (False, x), bottom, y


def _cancel_shared_walls(rectangles: Sequence[Rectangle]) -> List[_Segment]:
    lines: Dict[Tuple[bool, float], List[Tuple[float, float, int]]] = {}
    for rect in rectangles:
        for key, start, end in _line_segments(rect):
            if start == end:
                continue
            lo, hi = (start, end) if start < end else (end, start)
            lines.setdefault(key, []).append((lo, hi, _sign(end - start)))

    segments: List[_Segment] = []
    for (horizontal, fixed), spans in lines.items():
        breaks = sorted({v for lo, hi, _ in spans for v in (lo, hi)})
        runs: List[List] = []
        for a, b in zip(breaks, breaks[1:]):
            net = sum(direction for lo, hi, direction in spans if lo <= a and hi >= b)
            if net == 0:
                continue
            direction = 1 if net > 0 else -1
            if runs and runs[-1][1] == a and runs[-1][2] == direction:
                runs[-1][1] = b
            else:
                runs.append([a, b, direction])

        for lo, hi, direction in runs:
            start, end = (lo, hi) if direction > 0 else (hi, lo)
            if horizontal:
                segments.append(_Segment(Point(start, fixed), Point(end, fixed)))
            else:
                segments.append(_Segment(Point(fixed, start), Point(fixed, end)))
    return segments


# ----------------------------------------------------------------------
# Loop stitching
# ----------------------------------------------------------------------


def _turn_rank(incoming: Tuple[int, int], outgoing: Tuple[int, int]) -> int:
    """0 for a right turn, 1 for straight on, 2 for a left turn (y down)."""
    cross = incoming[0] * outgoing[1] - incoming[1] * outgoing[0]
    if cross > 0:
        return 0
    if cross == 0:
        return 1
    return 2


def _stitch_loops(segments: List[_Segment]) -> List[List[Point]]:
    outgoing: Dict[Point, List[_Segment]] = {}
    for segment in segments:
        outgoing.setdefault(segment.start, []).append(segment)

    unused = set(segments)
    loops: List[List[Point]] = []
    while unused:
        first = min(unused, key=lambda s: (s.start.y, s.start.x, s.end.y, s.end.x))
        points = [first.start]
        current = first
        unused.discard(current)
        while current.end != first.start:
            candidates = [s for s in outgoing.get(current.end, ()) if s in unused]
            if not candidates:
                logger.warning("Outline left open at (%s, %s)", current.end.x, current.end.y)
                break
            current = min(candidates, key=lambda s: _turn_rank(current.direction, s.direction))
            unused.discard(current)
            points.append(current.start)
        loops.append(_merge_collinear(points))
    return loops


def _merge_collinear(points: List[Point]) -> List[Point]:
    """Drop vertices that sit in the middle of a straight wall."""
    if len(points) < 3:
        return points
    kept = []
    count = len(points)
    for i, point in enumerate(points):
        prev, nxt = points[i - 1], points[(i + 1) % count]
        if (prev.x == point.x == nxt.x) or (prev.y == point.y == nxt.y):
            continue
        kept.append(point)
    return kept


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------


def trace_outline_loops(rectangles: Sequence[Rectangle]) -> List[List[Point]]:
    """Every closed boundary loop of the union of *rectangles*."""
    if not rectangles:
        return []
    return _stitch_loops(_cancel_shared_walls(rectangles))


def calculate_composite_room_outline(rectangles: Sequence[Rectangle]) -> List[Point]:
    """
    Outer boundary of a composite room.

    Parameters
    ----------
    rectangles : sequence of Rectangle
        The main room followed by its parts. Anything with ``x``, ``y``,
        ``width`` and ``depth`` attributes works.

    Returns
    -------
    list[Point]
        Clockwise vertices starting at the top-most, left-most corner.
        Empty for empty input.

    Raises
    ------
    DisconnectedOutlineError
        When the union does not trace to a single loop.
    """
    loops = trace_outline_loops(rectangles)
    if not loops:
        return []
    if len(loops) > 1:
        raise DisconnectedOutlineError(loops)
    return loops[0]


def _fmt(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def polygon_to_svg_path(points: Sequence[Point], scale: ScaleFn) -> str:
    """SVG path data (``M x y L x y ... Z``) with *scale* applied to every coordinate."""
    if not points:
        return ""
    first, rest = points[0], points[1:]
    commands = [f"M {_fmt(scale(first.x))} {_fmt(scale(first.y))}"]
    commands.extend(f"L {_fmt(scale(p.x))} {_fmt(scale(p.y))}" for p in rest)
    commands.append("Z")
    return " ".join(commands)


def calculate_part_regions(
    main_room: Rectangle, parts: Sequence[Rectangle], scale: ScaleFn
) -> List[str]:
    """One closed path per rectangle (main room first), for selecting parts individually."""
    regions = []
    for rect in [main_room, *parts]:
        corners = [
            Point(rect.x, rect.y),
            Point(rect.x + rect.width, rect.y),
            Point(rect.x + rect.width, rect.y + rect.depth),
            Point(rect.x, rect.y + rect.depth),
        ]
        regions.append(polygon_to_svg_path(corners, scale))
    return regions


@dataclass(frozen=True)
class CompositeBounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
            "width": self.width,
            "depth": self.depth,
        }


def get_composite_bounds(rectangles: Sequence[Rectangle]) -> CompositeBounds:
    """Axis-aligned box around every rectangle."""
    if not rectangles:
        raise ValueError("Cannot compute bounds of zero rectangles")
    return CompositeBounds(
        min_x=min(r.x for r in rectangles),
        min_y=min(r.y for r in rectangles),
        max_x=max(r.x + r.width for r in rectangles),
        max_y=max(r.y + r.depth for r in rectangles),
    )
