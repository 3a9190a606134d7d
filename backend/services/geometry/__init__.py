"""
Geometry for composite rooms.

Outer outline of a room plus its parts, SVG path data, and bounds.
"""

from .bounds import EMPTY_BOUNDS, calculate_floorplan_bounds, calculate_grid_bounds
from .composite_outline import (
    CompositeBounds,
    DisconnectedOutlineError,
    calculate_composite_room_outline,
    calculate_part_regions,
    get_composite_bounds,
    polygon_to_svg_path,
    trace_outline_loops,
)
from .geometry_utils import detect_overlaps, has_overlaps, outline_to_polygon, rectangle_to_polygon, union_area

__all__ = [
    "EMPTY_BOUNDS",
    "calculate_floorplan_bounds",
    "calculate_grid_bounds",
    "CompositeBounds",
    "DisconnectedOutlineError",
    "calculate_composite_room_outline",
    "calculate_part_regions",
    "get_composite_bounds",
    "polygon_to_svg_path",
    "trace_outline_loops",
    "detect_overlaps",
    "has_overlaps",
    "outline_to_polygon",
    "rectangle_to_polygon",
    "union_area",
]
