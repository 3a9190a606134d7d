"""
Room positioning.

Turns rooms attached to each other's corners into absolute coordinates.
"""

from .calculator import calculate_position, get_anchor_adjustment, get_corner
from .models import (
    PARENT,
    ZERO_POINT,
    Anchor,
    Attachment,
    PartSpec,
    Point,
    Rectangle,
    ResolvedPart,
    ResolvedRoom,
    RoomSpec,
)
from .part_registry import PartRegistry
from .resolver import PositioningResult, PositionResolver, resolve_positions

__all__ = [
    "PARENT",
    "ZERO_POINT",
    "Anchor",
    "Attachment",
    "PartSpec",
    "Point",
    "Rectangle",
    "ResolvedPart",
    "ResolvedRoom",
    "RoomSpec",
    "PartRegistry",
    "calculate_position",
    "get_anchor_adjustment",
    "get_corner",
    "PositioningResult",
    "PositionResolver",
    "resolve_positions",
]
