# tests/test_viewer.py

import logging

import pytest

from canvas_map import Vector2
from canvas_map.package import ChunkIndex, MapConfig, MapPackage
from canvas_map.waypoints import WaypointStore
from viewer import ViewerApp, magnification_to_slider, slider_to_magnification


@pytest.mark.parametrize("magnification, value", [
    (1, -1.0),
    (100, 0.0),
    (800, 1.0),
    (450, 0.5),
])
def test_slider_mapping(magnification, value):
    assert magnification_to_slider(magnification, 1, 800) == pytest.approx(value)
    assert slider_to_magnification(value, 1, 800) == pytest.approx(magnification)


@pytest.fixture
def app(canvas_map, tmp_path):
    # Skips window, HUD and file setup; only the map actions are needed.
    app = ViewerApp.__new__(ViewerApp)
    app.logger = logging.getLogger("viewer")
    app.map = canvas_map
    chunks = ChunkIndex.from_dict({
        "pixelsPerChunk": 4,
        "types": {"Town": "city", "Harbor": "port"},
        "locations": {"10,20": "Town", "50,50": "Harbor"},
    })
    app.package = MapPackage(str(tmp_path), MapConfig(spawn=Vector2(100, 100)), chunks)
    app.waypoints = WaypointStore(str(tmp_path / "waypoints.json"))
    return app


def test_search_centres_on_first_match(app):
    app.search_chunks("  harbor ")

    # Harbor sits at (200, 200) plus the spawn; the 800x600 screen centre is over it.
    assert app.map.screen_to_world(app.map.center()) == Vector2(300, 300)


def test_search_without_match_leaves_position(app):
    app.search_chunks("castle")
    app.search_chunks("   ")
    assert app.map.get_position() == Vector2(0, 0)


def test_remove_nearest_waypoint_uses_pointer(app):
    app.waypoints.add("Home", Vector2(0, 0))
    app.waypoints.add("Camp", Vector2(400, 400))
    # Screen (500, 500) at 100% and position (0, 0) is map (400, 400) after the spawn offset.
    app.map.update_pointer(Vector2(500, 500))

    app.remove_nearest_waypoint()

    assert [name for name, _ in app.waypoints] == ["Home"]
    app.remove_nearest_waypoint()
    app.remove_nearest_waypoint()
    assert len(app.waypoints) == 0
