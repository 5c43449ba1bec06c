# canvas_map/__init__.py

# Public API of the canvas map package.

from .vector import Vector2
from .events import (
    EventBus, EventKind, Priority,
    ViewportEvent, CancelableEvent,
    MoveEvent, ResizeEvent, ZoomEvent, SmoothEvent, PointerEvent,
)
from .sections import SectionStore, section_key, section_origin, format_key, parse_key, new_section
from .renderer import Renderer
from .viewport import Viewport, SurfaceError
from .canvas import CanvasMap

__all__ = [
    "Vector2",
    "EventBus", "EventKind", "Priority",
    "ViewportEvent", "CancelableEvent",
    "MoveEvent", "ResizeEvent", "ZoomEvent", "SmoothEvent", "PointerEvent",
    "SectionStore", "section_key", "section_origin", "format_key", "parse_key", "new_section",
    "Renderer",
    "Viewport", "SurfaceError",
    "CanvasMap",
]
