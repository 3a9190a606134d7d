"""
Absolute positioning of rooms and their parts.

Every room is attached to a corner of another room (or to the virtual zero
point); every part is attached to a corner of its owning room (``parent``)
or of a sibling part. Resolution walks the reference graph one level per
pass: pass *k* places exactly the entries whose target was placed in pass
*k - 1*. Entries still pending once the graph is exhausted, or once the
pass budget runs out, are reported as errors. Nothing here raises for a bad
reference; callers get the resolvable subset plus the error list.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import config

from .calculator import calculate_position, get_corner
from .models import (
    PARENT,
    EntrySpec,
    PartSpec,
    Point,
    Rectangle,
    ResolvedPart,
    ResolvedRoom,
    RoomSpec,
    ZERO_POINT,
)
from .part_registry import PartRegistry

logger = logging.getLogger(__name__)

ORIGIN = Point(0, 0)


@dataclass
class Pending:
    spec: EntrySpec


@dataclass
class Resolved:
    spec: EntrySpec
    point: Point


@dataclass
class PositioningResult:
    """Output of one resolve call. ``room_map`` holds rooms and parts."""

    room_map: Dict[str, ResolvedRoom]
    errors: List[str]
    part_registry: PartRegistry
    passes: int = 0
    unresolved: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _room_error(room: RoomSpec) -> str:
    return (
        f'Room "{room.display_name}" could not be positioned. '
        f'Referenced room "{room.attach_to.target}" not found or circular dependency detected.'
    )


def _part_error(part: PartSpec, room: ResolvedRoom) -> str:
    return (
        f'Part "{part.display_name}" of room "{room.display_name}" could not be positioned. '
        f'Referenced part "{part.attach_to.target}" not found or circular dependency detected.'
    )


def _walk_references(
    entries: Sequence[EntrySpec],
    known: Mapping[str, Rectangle],
    pass_budget: int,
    allow_zero_point: bool,
) -> Tuple[Dict[str, Point], List[EntrySpec], int]:
    """
    Topological walk over *entries*.

    *known* holds rectangles that are already placed and may be referenced
    (the seeded root, or ``parent`` for parts). Returns the placed
    top-left points, the entries left pending (input order) and the number
    of passes used.
    """
    order = {spec.id: index for index, spec in enumerate(entries)}
    state: Dict[str, Union[Pending, Resolved]] = {spec.id: Pending(spec) for spec in entries}
    rects: Dict[str, Rectangle] = dict(known)

    dependents: Dict[str, List[str]] = {}
    for spec in entries:
        dependents.setdefault(spec.attach_to.target, []).append(spec.id)

    def is_ready(spec: EntrySpec) -> bool:
        target = spec.attach_to.target
        if allow_zero_point and target == ZERO_POINT:
            return True
        return target in known

    ready = [spec.id for spec in entries if is_ready(spec)]
    passes = 0

    while ready and passes < pass_budget:
        passes += 1
        placed = []
        for entry_id in sorted(ready, key=order.__getitem__):
            spec = state[entry_id].spec
            attach = spec.attach_to
            if allow_zero_point and attach.target == ZERO_POINT:
                anchor_point = ORIGIN
            else:
                anchor_point = get_corner(rects[attach.target], attach.corner)
            point = calculate_position(anchor_point, spec.anchor, spec.width, spec.depth, spec.offset)
            state[entry_id] = Resolved(spec, point)
            rects[entry_id] = Rectangle(point.x, point.y, spec.width, spec.depth)
            placed.append(entry_id)

        logger.debug("Pass %d placed %d entries: %s", passes, len(placed), placed)
        ready = [
            dep
            for entry_id in placed
            for dep in dependents.get(entry_id, ())
            if isinstance(state[dep], Pending)
        ]

    if ready:
        logger.debug("Pass budget of %d exhausted with %d entries ready", pass_budget, len(ready))

    positions = {key: value.point for key, value in state.items() if isinstance(value, Resolved)}
    pending = [value.spec for value in state.values() if isinstance(value, Pending)]
    return positions, pending, passes


class PositionResolver:
    """
    Resolve absolute coordinates for rooms and their parts.

    Typical use::

        result = PositionResolver().resolve(rooms)
        for error in result.errors:
            ...
        bedroom = result.room_map["bedroom"]
    """

    def __init__(self, pass_budget: Optional[int] = None):
        if pass_budget is None:
            pass_budget = config.PASS_BUDGET
        self.pass_budget = int(pass_budget)

    def resolve(self, rooms: Iterable[RoomSpec]) -> PositioningResult:
        rooms = self._unique(list(rooms))
        room_map: Dict[str, ResolvedRoom] = {}
        errors: List[str] = []
        unresolved: List[str] = []
        registry = PartRegistry()

        root = self._seed_root(rooms)
        known: Dict[str, Rectangle] = {}
        if root is not None:
            known[root.id] = Rectangle(0, 0, root.width, root.depth)
            logger.debug('Room "%s" has no usable attachment, placing it at the origin', root.id)

        room_ids = {room.id for room in rooms}
        pending = [room for room in rooms if room is not root]
        positions, still_pending, passes = _walk_references(
            pending, known, self.pass_budget, allow_zero_point=True
        )

        for room in rooms:
            if room is root:
                room_map[room.id] = ResolvedRoom(room, 0, 0)
            elif room.id in positions:
                point = positions[room.id]
                room_map[room.id] = ResolvedRoom(room, point.x, point.y)

        for room in still_pending:
            message = _room_error(room)
            logger.warning(message)
            errors.append(message)
            unresolved.append(room.id)

        for room in [entry for entry in room_map.values() if entry.parts]:
            part_passes = self._resolve_parts(room, room_map, room_ids, registry, errors, unresolved)
            passes = max(passes, part_passes)

        self._normalize(room_map)

        logger.info(
            "Resolved %d of %d entries in %d passes (%d errors)",
            len(room_map),
            len(rooms) + sum(len(room.parts) for room in rooms),
            passes,
            len(errors),
        )
        return PositioningResult(room_map, errors, registry, passes, unresolved)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _unique(rooms: List[RoomSpec]) -> List[RoomSpec]:
        seen = set()
        unique = []
        for room in rooms:
            if room.id in seen:
                logger.warning('Duplicate room identifier "%s" ignored', room.id)
                continue
            seen.add(room.id)
            unique.append(room)
        return unique

    @staticmethod
    def _seed_root(rooms: List[RoomSpec]) -> Optional[RoomSpec]:
        """The first room, when it does not reference the zero point or another room."""
        if not rooms:
            return None
        first = rooms[0]
        target = first.attach_to.target
        if target == ZERO_POINT:
            return None
        if any(room.id == target for room in rooms[1:]):
            return None
        return first

    def _resolve_parts(
        self,
        room: ResolvedRoom,
        room_map: Dict[str, ResolvedRoom],
        room_ids: Set[str],
        registry: PartRegistry,
        errors: List[str],
        unresolved: List[str],
    ) -> int:
        accepted: List[PartSpec] = []
        seen = set()
        for part in room.parts:
            if part.id in room_ids or part.id in room_map or part.id in seen or part.id == PARENT:
                message = f'Part "{part.id}" of room "{room.display_name}" reuses identifier "{part.id}".'
                logger.warning(message)
                errors.append(message)
                unresolved.append(part.id)
                continue
            seen.add(part.id)
            accepted.append(part)

        positions, still_pending, passes = _walk_references(
            accepted, {PARENT: room.rectangle}, self.pass_budget, allow_zero_point=False
        )

        for part in accepted:
            if part.id in positions:
                point = positions[part.id]
                room_map[part.id] = ResolvedPart(part, point.x, point.y, parent_id=room.id)
                registry.register_part(part.id, room.id)

        for part in still_pending:
            message = _part_error(part, room)
            logger.warning(message)
            errors.append(message)
            unresolved.append(part.id)
        return passes

    @staticmethod
    def _normalize(room_map: Dict[str, ResolvedRoom]) -> None:
        """Shift everything so the top-left of the union sits at (0, 0)."""
        if not room_map:
            return
        min_x = min(entry.x for entry in room_map.values())
        min_y = min(entry.y for entry in room_map.values())
        if min_x == 0 and min_y == 0:
            return
        for entry in room_map.values():
            entry.x -= min_x
            entry.y -= min_y


def resolve_positions(rooms: Iterable[RoomSpec], pass_budget: Optional[int] = None) -> PositioningResult:
    """Resolve *rooms* with a fresh :class:`PositionResolver`."""
    return PositionResolver(pass_budget).resolve(rooms)
