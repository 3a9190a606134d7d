"""
Drawing-area bounds for a whole floorplan.

The renderer frames every resolved room and part with some padding and
snaps its background grid to whole grid steps.
"""

import math
from typing import Iterable, Mapping, Union

from ..positioning.models import Rectangle, ResolvedRoom
from .composite_outline import CompositeBounds, get_composite_bounds

BOUNDS_PADDING_RATIO = 0.1
EMPTY_BOUNDS = Rectangle(0, 0, 10000, 10000)


def calculate_floorplan_bounds(
    room_map: Union[Mapping[str, ResolvedRoom], Iterable[ResolvedRoom]],
    padding_ratio: float = BOUNDS_PADDING_RATIO,
) -> Rectangle:
    """
    Bounds of every resolved room and part, padded on each side by
    *padding_ratio* of the larger extent. An empty plan gets
    :data:`EMPTY_BOUNDS`.
    """
    entries = list(room_map.values()) if isinstance(room_map, Mapping) else list(room_map)
    if not entries:
        return EMPTY_BOUNDS

    box = get_composite_bounds([entry.rectangle for entry in entries])
    padding = max(box.width, box.depth) * padding_ratio
    return Rectangle(
        box.min_x - padding,
        box.min_y - padding,
        box.width + padding * 2,
        box.depth + padding * 2,
    )


def calculate_grid_bounds(bounds: Rectangle, grid_step: float) -> CompositeBounds:
    """Expand *bounds* outward to the nearest multiples of *grid_step*."""
    if grid_step <= 0:
        raise ValueError(f"grid_step must be positive, got {grid_step}")
    return CompositeBounds(
        min_x=math.floor(bounds.x / grid_step) * grid_step,
        min_y=math.floor(bounds.y / grid_step) * grid_step,
        max_x=math.ceil((bounds.x + bounds.width) / grid_step) * grid_step,
        max_y=math.ceil((bounds.y + bounds.depth) / grid_step) * grid_step,
    )
