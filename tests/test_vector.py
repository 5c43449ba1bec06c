# tests/test_vector.py

from canvas_map import Vector2


def test_scalar_arithmetic_mutates_and_returns_self():
    v = Vector2(2, 4)
    assert v.add(1) is v
    assert (v.x, v.y) == (3, 5)
    v.subtract(1).multiply(3).divide(2)
    assert (v.x, v.y) == (3.0, 6.0)


def test_vector_arithmetic_is_componentwise():
    v = Vector2(10, 20)
    v.add(Vector2(1, 2)).subtract(Vector2(3, 4)).multiply(Vector2(2, 3)).divide(Vector2(4, 9))
    assert v == Vector2(4.0, 6.0)


def test_clone_is_independent():
    v = Vector2(1, 1)
    copy = v.clone()
    copy.add(5)
    assert v == Vector2(1, 1)
    assert copy == Vector2(6, 6)


def test_from_json_valid():
    assert Vector2.from_json({"x": 3, "y": 4}) == Vector2(3, 4)


def test_from_json_missing_field_is_none():
    assert Vector2.from_json({"x": 3}) is None
    assert Vector2.from_json({"y": 3}) is None
    assert Vector2.from_json(None) is None
    assert Vector2.from_json([3, 4]) is None


def test_to_json_and_unpacking():
    v = Vector2(7, -2)
    assert v.to_json() == {"x": 7, "y": -2}
    x, y = v
    assert (x, y) == (7, -2)


def test_set_and_default():
    assert Vector2() == Vector2(0, 0)
    assert Vector2().set(5, 6) == Vector2(5, 6)
