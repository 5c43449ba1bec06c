# tests/test_waypoints.py

import json

from canvas_map import Vector2
from canvas_map.waypoints import WaypointStore


def test_missing_file_loads_nothing(tmp_path):
    store = WaypointStore(str(tmp_path / "waypoints.json"))
    assert store.load() == 0
    assert len(store) == 0


def test_waypoints_persist_across_instances(tmp_path):
    path = str(tmp_path / "nested" / "waypoints.json")
    store = WaypointStore(path)
    store.add("Home", Vector2(10, -4))
    store.add("Mine", Vector2(300, 25))

    reloaded = WaypointStore(path)
    assert reloaded.load() == 2
    assert reloaded.get("Home") == Vector2(10, -4)
    assert [name for name, _ in reloaded] == ["Home", "Mine"]


def test_remove(tmp_path):
    path = str(tmp_path / "waypoints.json")
    store = WaypointStore(path)
    store.add("Home", Vector2(1, 2))

    assert store.remove("Home")
    assert not store.remove("Home")
    with open(path) as f:
        assert json.load(f) == {}


def test_malformed_entries_are_skipped(tmp_path):
    path = tmp_path / "waypoints.json"
    path.write_text(json.dumps({"Good": {"x": 1, "y": 2}, "Bad": {"x": 1}}))

    store = WaypointStore(str(path))

    assert store.load() == 1
    assert store.get("Bad") is None


def test_get_returns_copy(tmp_path):
    store = WaypointStore(str(tmp_path / "waypoints.json"))
    store.add("Home", Vector2(1, 2))
    store.get("Home").add(100)
    assert store.get("Home") == Vector2(1, 2)


def test_nearest_waypoint(tmp_path):
    store = WaypointStore(str(tmp_path / "waypoints.json"))
    assert store.nearest(Vector2(0, 0)) is None

    store.add("Home", Vector2(0, 0))
    store.add("Camp", Vector2(100, -40))

    assert store.nearest(Vector2(10, 10)) == "Home"
    assert store.nearest(Vector2(90, -30)) == "Camp"
