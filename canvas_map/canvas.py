# canvas_map/canvas.py

"""
The application-facing map: a Viewport whose zoom operations default to the
screen centre, plus the two input primitives (drag and pinch) that input
handlers translate raw pointer events into.
"""
from typing import Optional

from .viewport import Viewport
from .vector import Vector2


class CanvasMap(Viewport):
    """A Viewport with default anchors and drag/pinch helpers."""

    def zoom_in(self, anchor: Optional[Vector2] = None):
        super().zoom_in(self._anchor_or_center(anchor))

    def zoom_out(self, anchor: Optional[Vector2] = None):
        super().zoom_out(self._anchor_or_center(anchor))

    def zoom(self, factor: float, anchor: Optional[Vector2] = None):
        super().zoom(factor, self._anchor_or_center(anchor))

    def set_magnification(self, magnification: float, anchor: Optional[Vector2] = None):
        super().set_magnification(magnification, self._anchor_or_center(anchor))

    def drag(self, delta: Vector2):
        """Pans by a screen-space pointer delta; the content follows the pointer."""
        self.set_position(self.get_position().subtract(delta.clone().divide(self.get_scale())))

    def pinch(self, factor: float, midpoint: Vector2):
        """Zooms by a pinch factor (new finger distance / old) about the gesture midpoint."""
        self.zoom(factor, midpoint)

    def center_on(self, world_point: Vector2):
        """Moves so that `world_point` sits at the centre of the screen."""
        self.set_position(world_point.clone().subtract(self.center().divide(self.get_scale())))

    def _anchor_or_center(self, anchor: Optional[Vector2]) -> Vector2:
        return anchor if anchor is not None else self.center()
