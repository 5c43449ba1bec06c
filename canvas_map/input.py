# canvas_map/input.py

"""
Input layer: turns pygame events into CanvasMap primitives.

No transform math lives here; panning and zooming are done by CanvasMap.
"""
import pygame

from .canvas import CanvasMap
from .vector import Vector2

# Converts MULTIGESTURE's normalised pinch distance into a zoom factor.
PINCH_SENSITIVITY = 4.0


class InputController:
    """Forwards mouse, wheel, resize and pinch events to a CanvasMap."""

    def __init__(self, canvas_map: CanvasMap):
        self.canvas_map = canvas_map

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Applies one event to the map. Returns True if the event was used."""
        if event.type == pygame.MOUSEMOTION:
            return self._on_motion(event)
        if event.type == pygame.MOUSEWHEEL:
            return self._on_wheel(event)
        if event.type == pygame.VIDEORESIZE:
            self.canvas_map.set_size(Vector2(event.w, event.h))
            return True
        if event.type == pygame.MULTIGESTURE:
            return self._on_pinch(event)
        return False

    def _on_motion(self, event) -> bool:
        position = Vector2(*event.pos)
        if self.canvas_map.is_excluded(position):
            return False
        if any(event.buttons):
            previous = self.canvas_map.get_pointer_position()
            self.canvas_map.drag(position.clone().subtract(previous))
        self.canvas_map.update_pointer(position)
        return True

    def _on_wheel(self, event) -> bool:
        # Wheel events carry no position; zoom about the last pointer sample.
        pointer = self.canvas_map.get_pointer_position()
        if event.y == 0 or self.canvas_map.is_excluded(pointer):
            return False
        if event.y > 0:
            self.canvas_map.zoom_in(pointer)
        else:
            self.canvas_map.zoom_out(pointer)
        return True

    def _on_pinch(self, event) -> bool:
        if event.pinched == 0:
            return False
        size = self.canvas_map.get_size()
        # Gesture centre is normalised to [0, 1] across the window.
        midpoint = Vector2(event.x * size.x, event.y * size.y)
        if self.canvas_map.is_excluded(midpoint):
            return False
        self.canvas_map.pinch(max(0.01, 1.0 + event.pinched * PINCH_SENSITIVITY), midpoint)
        return True
