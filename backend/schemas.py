"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from services.positioning import Anchor, Attachment, PartSpec, RoomSpec


def _check_attachment(value: str) -> str:
    Attachment.parse(value)
    return value


def _check_anchor(value: str) -> str:
    Anchor.parse(value)
    return value


# ---------- Rooms ----------
class PartIn(BaseModel):
    id: str
    name: Optional[str] = None
    width: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    attachTo: str = Field(..., description="'parent:<corner>' or '<sibling part id>:<corner>'")
    anchor: str = "top-left"
    offset: tuple[float, float] = (0, 0)

    @field_validator("attachTo")
    @classmethod
    def check_attach_to(cls, v: str) -> str:
        return _check_attachment(v)

    @field_validator("anchor")
    @classmethod
    def check_anchor(cls, v: str) -> str:
        return _check_anchor(v)

    def to_spec(self) -> PartSpec:
        return PartSpec(
            id=self.id,
            name=self.name,
            width=self.width,
            depth=self.depth,
            attach_to=self.attachTo,
            anchor=self.anchor,
            offset=self.offset,
        )


class RoomIn(BaseModel):
    id: str
    name: Optional[str] = None
    width: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    attachTo: str = Field(..., description="'zeropoint:<corner>' or '<room id>:<corner>'")
    anchor: str = "top-left"
    offset: tuple[float, float] = (0, 0)
    parts: list[PartIn] = []

    @field_validator("attachTo")
    @classmethod
    def check_attach_to(cls, v: str) -> str:
        return _check_attachment(v)

    @field_validator("anchor")
    @classmethod
    def check_anchor(cls, v: str) -> str:
        return _check_anchor(v)

    def to_spec(self) -> RoomSpec:
        return RoomSpec(
            id=self.id,
            name=self.name,
            width=self.width,
            depth=self.depth,
            attach_to=self.attachTo,
            anchor=self.anchor,
            offset=self.offset,
            parts=tuple(part.to_spec() for part in self.parts),
        )


# ---------- Layout ----------
class LayoutRequest(BaseModel):
    rooms: list[RoomIn]
    pass_budget: Optional[int] = Field(None, ge=0, le=1000)


class LayoutResponse(BaseModel):
    rooms: dict = {}
    parts: dict = {}
    errors: list[str] = []
    unresolved: list[str] = []
    warnings: list[str] = []
    composites: dict = {}
    bounds: dict = {}
