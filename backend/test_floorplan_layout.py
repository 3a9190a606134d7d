"""
Floorplan layout assembly and HTTP route tests.

Run: python test_floorplan_layout.py   (or pytest)
"""

import os
import sys

sys.path.insert(0, os.path.dirname(__file__) or '.')

import pytest
from fastapi.testclient import TestClient

from main import app
from services.floorplan_layout import build_floorplan_layout
from services.positioning import PartSpec, Point, RoomSpec


client = TestClient(app)


def _house():
    return [
        RoomSpec("hall", 2000, 4000, "zeropoint:top-left", name="Hall"),
        RoomSpec(
            "bed", 5000, 4000, "hall:top-right", name="Bedroom",
            parts=(PartSpec("closet", 2000, 1500, "parent:bottom-left"),),
        ),
    ]


# ====================================================================
# build_floorplan_layout
# ====================================================================

def test_layout_composites():
    layout = build_floorplan_layout(_house())
    assert layout.errors == []
    assert layout.warnings == []
    assert set(layout.composites) == {"hall", "bed"}

    hall = layout.composites["hall"]
    assert not hall.has_parts
    assert hall.outline == [Point(0, 0), Point(2000, 0), Point(2000, 4000), Point(0, 4000)]
    assert hall.part_regions == []

    bed = layout.composites["bed"]
    assert bed.has_parts
    assert len(bed.outline) == 6
    assert bed.bounds.width == 5000
    assert bed.bounds.depth == 5500
    assert len(bed.part_regions) == 2


def test_layout_reports_resolution_errors():
    rooms = _house() + [RoomSpec("bath", 1000, 1000, "ghost:top-left")]
    layout = build_floorplan_layout(rooms)
    assert "bath" not in layout.room_map
    assert "bath" not in layout.composites
    assert len(layout.errors) == 1
    assert "ghost" in layout.errors[0]
    assert layout.unresolved == ["bath"]
    assert layout.to_dict()["unresolved"] == ["bath"]


def test_layout_warns_on_disconnected_part():
    rooms = [
        RoomSpec("bed", 5000, 4000, "zeropoint:top-left", parts=(
            PartSpec("shed", 1000, 1000, "parent:top-right", offset=(500, 0)),
        )),
    ]
    layout = build_floorplan_layout(rooms)
    assert layout.errors == []
    assert layout.composites["bed"].outline == []
    assert any("single connected shape" in w for w in layout.warnings)


def test_layout_warns_on_overlapping_parts():
    rooms = [
        RoomSpec("bed", 5000, 4000, "zeropoint:top-left", parts=(
            PartSpec("closet", 2000, 1500, "parent:bottom-left", anchor="bottom-left"),
        )),
    ]
    layout = build_floorplan_layout(rooms)
    assert any("overlapping parts" in w for w in layout.warnings)


def test_layout_to_dict():
    data = build_floorplan_layout(_house()).to_dict()
    assert data["rooms"]["bed"]["x"] == 2000
    assert data["rooms"]["closet"]["parent_id"] == "bed"
    assert data["parts"] == {"closet": "bed"}
    assert data["unresolved"] == []
    assert data["composites"]["bed"]["bounds"]["depth"] == 5500
    assert data["bounds"]["width"] == pytest.approx(7000 + 2 * 700)


def test_empty_layout():
    layout = build_floorplan_layout([])
    assert layout.room_map == {}
    assert layout.composites == {}
    assert layout.bounds.width == 10000


# ====================================================================
# HTTP
# ====================================================================

def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_resolve_endpoint():
    r = client.post("/api/layout/resolve", json={"rooms": [
        {"id": "a", "width": 4000, "depth": 3000, "attachTo": "zeropoint:top-left"},
        {"id": "b", "width": 4000, "depth": 3000, "attachTo": "a:top-right",
         "parts": [{"id": "bay", "width": 1000, "depth": 500,
                    "attachTo": "parent:bottom-left", "offset": [1000, 0]}]},
    ]})
    assert r.status_code == 200
    d = r.json()
    assert d["errors"] == []
    assert (d["rooms"]["a"]["x"], d["rooms"]["a"]["y"]) == (0, 0)
    assert (d["rooms"]["b"]["x"], d["rooms"]["b"]["y"]) == (4000, 0)
    assert (d["rooms"]["bay"]["x"], d["rooms"]["bay"]["y"]) == (5000, 3000)
    assert d["parts"] == {"bay": "b"}
    assert len(d["composites"]["b"]["outline"]) == 8


def test_resolve_endpoint_keeps_partial_results():
    r = client.post("/api/layout/resolve", json={"rooms": [
        {"id": "a", "width": 4000, "depth": 3000, "attachTo": "zeropoint:top-left"},
        {"id": "b", "width": 4000, "depth": 3000, "attachTo": "missing:top-right"},
    ]})
    assert r.status_code == 200
    d = r.json()
    assert list(d["rooms"]) == ["a"]
    assert len(d["errors"]) == 1
    assert '"b"' in d["errors"][0] and '"missing"' in d["errors"][0]
    assert d["unresolved"] == ["b"]


def test_resolve_endpoint_pass_budget():
    rooms = [{"id": "r0", "width": 100, "depth": 100, "attachTo": "zeropoint:top-left"}]
    rooms += [{"id": f"r{i}", "width": 100, "depth": 100, "attachTo": f"r{i - 1}:top-right"}
              for i in range(1, 5)]
    d = client.post("/api/layout/resolve", json={"rooms": rooms, "pass_budget": 2}).json()
    assert sorted(d["rooms"]) == ["r0", "r1"]
    assert len(d["errors"]) == 3
    assert d["unresolved"] == ["r2", "r3", "r4"]


@pytest.mark.parametrize("room", [
    {"id": "a", "width": 0, "depth": 10, "attachTo": "zeropoint:top-left"},
    {"id": "a", "width": 10, "depth": 10, "attachTo": "zeropoint"},
    {"id": "a", "width": 10, "depth": 10, "attachTo": "zeropoint:center"},
    {"id": "a", "width": 10, "depth": 10, "attachTo": "zeropoint:top-left", "anchor": "middle"},
])
def test_resolve_endpoint_rejects_malformed_rooms(room):
    r = client.post("/api/layout/resolve", json={"rooms": [room]})
    assert r.status_code == 422


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
