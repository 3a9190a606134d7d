"""
Floorplan layout assembly.

Resolves room positions, then derives for every room the merged outline
of the room and its parts, its bounding box and per-part click regions.
This is the shape renderers consume: whatever resolved is drawn, and the
errors and warnings are shown next to it.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import config

from .geometry import (
    CompositeBounds,
    DisconnectedOutlineError,
    calculate_composite_room_outline,
    calculate_floorplan_bounds,
    calculate_part_regions,
    detect_overlaps,
    get_composite_bounds,
)
from .positioning import (
    PartRegistry,
    Point,
    PositionResolver,
    Rectangle,
    ResolvedRoom,
    RoomSpec,
)

logger = logging.getLogger(__name__)


def _identity(value: float) -> float:
    return value


@dataclass
class CompositeRoom:
    """A room and its parts, merged into one shape."""

    room_id: str
    rectangles: List[Rectangle]
    outline: List[Point]
    bounds: CompositeBounds
    part_regions: List[str] = field(default_factory=list)

    @property
    def has_parts(self) -> bool:
        return len(self.rectangles) > 1

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "outline": [{"x": p.x, "y": p.y} for p in self.outline],
            "bounds": self.bounds.to_dict(),
            "part_regions": list(self.part_regions),
        }


@dataclass
class FloorplanLayout:
    room_map: Dict[str, ResolvedRoom]
    errors: List[str]
    warnings: List[str]
    part_registry: PartRegistry
    composites: Dict[str, CompositeRoom]
    bounds: Rectangle
    unresolved: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rooms": {key: entry.to_dict() for key, entry in self.room_map.items()},
            "parts": {pid: self.part_registry.get_parent_id(pid) for pid in self.room_map
                      if self.part_registry.is_part(pid)},
            "errors": list(self.errors),
            "unresolved": list(self.unresolved),
            "warnings": list(self.warnings),
            "composites": {key: comp.to_dict() for key, comp in self.composites.items()},
            "bounds": {
                "x": self.bounds.x,
                "y": self.bounds.y,
                "width": self.bounds.width,
                "depth": self.bounds.depth,
            },
        }


def composite_rectangles(room: ResolvedRoom,
                         room_map: Dict[str, ResolvedRoom],
                         registry: PartRegistry) -> List[Rectangle]:
    """The room's own rectangle followed by its resolved parts."""
    rects = [room.rectangle]
    rects.extend(room_map[pid].rectangle for pid in registry.parts_of(room.id))
    return rects


def build_composite_room(room: ResolvedRoom,
                         room_map: Dict[str, ResolvedRoom],
                         registry: PartRegistry,
                         warnings: List[str],
                         scale: Callable[[float], float] = _identity) -> CompositeRoom:
    rects = composite_rectangles(room, room_map, registry)

    overlaps = detect_overlaps(rects)
    if overlaps:
        message = (f'Room "{room.display_name}" has overlapping parts '
                   f'({len(overlaps)} pair(s)); its outline may include interior walls.')
        logger.warning(message)
        warnings.append(message)

    try:
        outline = calculate_composite_room_outline(rects)
    except DisconnectedOutlineError as e:
        message = (f'Room "{room.display_name}" does not form a single connected shape '
                   f'({len(e.loops)} outlines); outline omitted.')
        logger.warning(message)
        warnings.append(message)
        outline = []

    parts = rects[1:]
    regions = calculate_part_regions(rects[0], parts, scale) if parts else []
    return CompositeRoom(
        room_id=room.id,
        rectangles=rects,
        outline=outline,
        bounds=get_composite_bounds(rects),
        part_regions=regions,
    )


def build_floorplan_layout(rooms: Iterable[RoomSpec],
                           pass_budget: Optional[int] = None,
                           padding_ratio: Optional[float] = None) -> FloorplanLayout:
    """
    Resolve *rooms* and build the composite shape of every placed room.

    Never raises for unresolved references or odd geometry; those end up in
    ``errors`` and ``warnings`` respectively.
    """
    result = PositionResolver(pass_budget).resolve(rooms)
    registry = result.part_registry
    warnings: List[str] = []

    composites: Dict[str, CompositeRoom] = {}
    for entry_id, entry in result.room_map.items():
        if registry.is_part(entry_id):
            continue
        composites[entry_id] = build_composite_room(entry, result.room_map, registry, warnings)

    if padding_ratio is None:
        padding_ratio = config.BOUNDS_PADDING
    bounds = calculate_floorplan_bounds(result.room_map, padding_ratio)
    logger.info("Built layout: %d rooms, %d parts, %d errors, %d warnings",
                len(composites), len(registry), len(result.errors), len(warnings))
    return FloorplanLayout(
        room_map=result.room_map,
        errors=result.errors,
        warnings=warnings,
        part_registry=registry,
        composites=composites,
        bounds=bounds,
        unresolved=result.unresolved,
    )
