# tests/test_canvas.py

import pytest

from canvas_map import EventKind, Vector2


def test_zoom_in_defaults_to_screen_center(canvas_map):
    canvas_map.zoom_in()

    assert canvas_map.get_magnification() == 200
    assert canvas_map.get_position() == Vector2(200, 150)


def test_zoom_out_and_set_magnification_default_to_center(canvas_map):
    canvas_map.zoom_out()
    assert canvas_map.get_magnification() == 50
    assert canvas_map.get_position() == Vector2(-400, -300)

    canvas_map.set_magnification(100)
    assert canvas_map.get_position() == Vector2(0, 0)


def test_explicit_anchor_is_respected(canvas_map):
    canvas_map.zoom(2, Vector2(0, 0))
    assert canvas_map.get_position() == Vector2(0, 0)


def test_drag_moves_against_the_pointer_in_world_units(canvas_map):
    canvas_map.set_magnification(200, Vector2(0, 0))

    canvas_map.drag(Vector2(20, 10))

    assert canvas_map.get_position() == Vector2(-10, -5)


def test_drag_goes_through_move_events(canvas_map, bus):
    bus.register(EventKind.MOVE, lambda event: event.cancel())
    canvas_map.drag(Vector2(20, 10))
    assert canvas_map.get_position() == Vector2(0, 0)


def test_pinch_zooms_about_midpoint(canvas_map):
    midpoint = Vector2(100, 100)
    before = canvas_map.screen_to_world(midpoint)

    canvas_map.pinch(1.5, midpoint)

    assert canvas_map.get_magnification() == 150
    after = canvas_map.screen_to_world(midpoint)
    assert (after.x, after.y) == (pytest.approx(before.x), pytest.approx(before.y))


def test_center_on(canvas_map):
    canvas_map.center_on(Vector2(1000, 1000))
    assert canvas_map.get_position() == Vector2(600, 700)
    assert canvas_map.world_to_screen(Vector2(1000, 1000)) == Vector2(400, 300)
