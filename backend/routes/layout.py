"""
Floorplan layout route.

Resolves room attachments into absolute coordinates and returns the merged
outline of every composite room.
"""

from fastapi import APIRouter

from schemas import LayoutRequest, LayoutResponse
from services.floorplan_layout import build_floorplan_layout

router = APIRouter(prefix="/api/layout", tags=["layout"])


@router.post("/resolve", response_model=LayoutResponse)
async def resolve_layout(req: LayoutRequest):
    """
    Position every room and part.

    Unresolvable rooms do not fail the request: they are left out of
    ``rooms`` and listed in ``errors``.
    """
    layout = build_floorplan_layout(
        [room.to_spec() for room in req.rooms],
        pass_budget=req.pass_budget,
    )
    return LayoutResponse(**layout.to_dict())
