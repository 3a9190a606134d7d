"""Index of parts and the rooms that own them."""

from typing import Dict, FrozenSet, List, Optional


class PartRegistry:
    """
    Maps part identifiers to their owning room.

    Built while parts are resolved; a new registry is produced by every
    resolve call, so nothing carries over between calls.
    """

    def __init__(self):
        self._part_to_parent: Dict[str, str] = {}
        self._parent_to_parts: Dict[str, List[str]] = {}

    def register_part(self, part_id: str, parent_room_id: str) -> None:
        previous = self._part_to_parent.get(part_id)
        if previous is not None:
            self._parent_to_parts[previous].remove(part_id)
        self._part_to_parent[part_id] = parent_room_id
        self._parent_to_parts.setdefault(parent_room_id, []).append(part_id)

    def is_part(self, entry_id: str) -> bool:
        return entry_id in self._part_to_parent

    def get_parent_id(self, entry_id: str) -> Optional[str]:
        """Owning room of *entry_id*, or ``None`` when it is not a part."""
        return self._part_to_parent.get(entry_id)

    def get_room_id_for_drag(self, entry_id: str) -> str:
        """The room that moves when *entry_id* is grabbed."""
        return self._part_to_parent.get(entry_id, entry_id)

    def is_room_or_parent_dragging(self, room_id: str, dragged_id: str) -> bool:
        return room_id == dragged_id or self.get_parent_id(room_id) == dragged_id

    def part_ids(self) -> FrozenSet[str]:
        return frozenset(self._part_to_parent)

    def parts_of(self, room_id: str) -> List[str]:
        """Part identifiers of *room_id* in registration order."""
        return list(self._parent_to_parts.get(room_id, []))

    def clear(self) -> None:
        self._part_to_parent.clear()
        self._parent_to_parts.clear()

    def __contains__(self, entry_id) -> bool:
        return self.is_part(entry_id)

    def __len__(self) -> int:
        return len(self._part_to_parent)

    def __repr__(self) -> str:
        return f"PartRegistry(parts={len(self)})"
