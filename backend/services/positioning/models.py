"""
Data model for room positioning.

Rooms and parts are described by a size, an attachment reference of the
form ``target:corner`` and the corner of the attaching rectangle that is
aligned there. Resolution turns them into absolute top-left coordinates.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


ZERO_POINT = "zeropoint"
PARENT = "parent"


class Anchor(enum.Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    @classmethod
    def parse(cls, value: Union[str, "Anchor"]) -> "Anchor":
        """Accept an ``Anchor`` or its string value (``"top-right"``)."""
        if isinstance(value, Anchor):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown anchor: {value!r}") from None


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle; ``y`` grows downward, ``depth`` is the height."""

    x: float
    y: float
    width: float
    depth: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.depth


@dataclass(frozen=True)
class Attachment:
    """Parsed ``target:corner`` reference."""

    target: str
    corner: Anchor

    @classmethod
    def parse(cls, value: str) -> "Attachment":
        if not isinstance(value, str) or ":" not in value:
            raise ValueError(f"Attachment must look like 'target:corner', got {value!r}")
        target, _, corner = value.rpartition(":")
        if not target:
            raise ValueError(f"Attachment {value!r} has no target")
        return cls(target=target, corner=Anchor.parse(corner))

    @property
    def is_zero_point(self) -> bool:
        return self.target == ZERO_POINT

    @property
    def is_parent(self) -> bool:
        return self.target == PARENT

    def __str__(self) -> str:
        return f"{self.target}:{self.corner.value}"


def _normalize_offset(offset) -> Tuple[float, float]:
    if offset is None:
        return (0, 0)
    dx, dy = offset
    return (dx, dy)


@dataclass(frozen=True)
class PartSpec:
    """A rectangle merged into its owning room.

    ``attach_to`` targets ``parent`` or a sibling part's identifier.
    """

    id: str
    width: float
    depth: float
    attach_to: Attachment
    anchor: Anchor = Anchor.TOP_LEFT
    offset: Tuple[float, float] = (0, 0)
    name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.attach_to, str):
            object.__setattr__(self, "attach_to", Attachment.parse(self.attach_to))
        object.__setattr__(self, "anchor", Anchor.parse(self.anchor))
        object.__setattr__(self, "offset", _normalize_offset(self.offset))

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class RoomSpec:
    """A top-level room, attached to the zero point or another room."""

    id: str
    width: float
    depth: float
    attach_to: Attachment
    anchor: Anchor = Anchor.TOP_LEFT
    offset: Tuple[float, float] = (0, 0)
    parts: Tuple[PartSpec, ...] = field(default_factory=tuple)
    name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.attach_to, str):
            object.__setattr__(self, "attach_to", Attachment.parse(self.attach_to))
        object.__setattr__(self, "anchor", Anchor.parse(self.anchor))
        object.__setattr__(self, "offset", _normalize_offset(self.offset))
        object.__setattr__(self, "parts", tuple(self.parts or ()))

    @property
    def display_name(self) -> str:
        return self.name or self.id


EntrySpec = Union[RoomSpec, PartSpec]


@dataclass
class ResolvedRoom:
    """A room (or part) with its absolute top-left corner."""

    spec: EntrySpec
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.spec.id

    @property
    def width(self) -> float:
        return self.spec.width

    @property
    def depth(self) -> float:
        return self.spec.depth

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def parts(self) -> Tuple[PartSpec, ...]:
        return getattr(self.spec, "parts", ())

    @property
    def rectangle(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.depth)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.display_name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "depth": self.depth,
        }


@dataclass
class ResolvedPart(ResolvedRoom):
    parent_id: str = ""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["parent_id"] = self.parent_id
        return data
