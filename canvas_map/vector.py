# canvas_map/vector.py

"""
A small mutable 2D vector used for positions, sizes and deltas.

Every arithmetic method works in place and returns the receiver so transforms
can be chained, e.g. ``pos.clone().subtract(delta).divide(scale)``. Call
``clone()`` first when the original must be kept.
"""
from typing import Any, Iterator, Optional, Union

Number = Union[int, float]


class Vector2:
    """Mutable (x, y) pair with componentwise and scalar arithmetic."""

    __slots__ = ("x", "y")

    def __init__(self, x: Number = 0, y: Number = 0):
        self.x = x
        self.y = y

    def set(self, x: Number, y: Number) -> "Vector2":
        self.x = x
        self.y = y
        return self

    def add(self, value: Union[Number, "Vector2"]) -> "Vector2":
        if isinstance(value, Vector2):
            self.x += value.x
            self.y += value.y
        else:
            self.x += value
            self.y += value
        return self

    def subtract(self, value: Union[Number, "Vector2"]) -> "Vector2":
        if isinstance(value, Vector2):
            self.x -= value.x
            self.y -= value.y
        else:
            self.x -= value
            self.y -= value
        return self

    def multiply(self, value: Union[Number, "Vector2"]) -> "Vector2":
        if isinstance(value, Vector2):
            self.x *= value.x
            self.y *= value.y
        else:
            self.x *= value
            self.y *= value
        return self

    def divide(self, value: Union[Number, "Vector2"]) -> "Vector2":
        if isinstance(value, Vector2):
            self.x /= value.x
            self.y /= value.y
        else:
            self.x /= value
            self.y /= value
        return self

    def clone(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def to_json(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_json(cls, data: Any) -> Optional["Vector2"]:
        """
        Builds a vector from a mapping with "x" and "y" keys.

        Returns None when the input is not a mapping or either key is missing,
        leaving the choice of a fallback to the caller.
        """
        if not isinstance(data, dict) or "x" not in data or "y" not in data:
            return None
        return cls(data["x"], data["y"])

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Vector2({self.x!r}, {self.y!r})"
