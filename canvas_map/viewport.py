# canvas_map/viewport.py

"""
================================================================================
VIEWPORT
================================================================================
The pan/zoom core. A Viewport owns the world position shown at the screen's
top-left corner, the magnification, the screen size and the smoothing flag,
and redraws its surface through a Renderer whenever one of them changes.

Data Contract:
---------------
- Inputs (on initialization):
    - surface (pygame.Surface): The drawing surface. Must be usable.
    - sections (SectionStore): Section source, read only during render.
    - bus (EventBus): Where move/resize/zoom/smooth/pointer events go.
- Public Methods:
    - set_position / set_size / set_smooth / set_magnification / zoom*:
      each raises a cancelable event, commits if not canceled, then renders.
    - screen_to_world / world_to_screen: coordinate conversion.
- Invariants: min_magnification <= magnification <= max_magnification after
  every committed change. Magnification is an integer percentage; the scale
  used for drawing is magnification / 100.
================================================================================
"""
import logging
import math
from typing import Iterable, List, Optional

import pygame

from . import config as DEFAULTS
from .events import EventBus, MoveEvent, PointerEvent, ResizeEvent, SmoothEvent, ZoomEvent
from .renderer import Renderer
from .sections import SectionStore
from .vector import Vector2


class SurfaceError(RuntimeError):
    """Raised when a viewport is given a drawing surface it cannot draw on."""


def _check_surface(surface) -> pygame.Surface:
    if not isinstance(surface, pygame.Surface):
        raise SurfaceError(f"Expected a pygame.Surface, got {type(surface).__name__}")
    try:
        surface.get_size()
    except pygame.error as e:
        raise SurfaceError(f"Drawing surface is not usable: {e}") from e
    return surface


class Viewport:
    """World-to-screen transform with event-guarded state changes."""

    def __init__(self, surface: pygame.Surface, sections: Optional[SectionStore] = None,
                 bus: Optional[EventBus] = None, excluded: Iterable[pygame.Rect] = (),
                 smooth: bool = DEFAULTS.DEFAULT_SMOOTH,
                 min_magnification: int = DEFAULTS.DEFAULT_MIN_MAGNIFICATION,
                 max_magnification: int = DEFAULTS.DEFAULT_MAX_MAGNIFICATION,
                 size: Optional[Vector2] = None):
        self.logger = logging.getLogger(__name__)
        self.surface = _check_surface(surface)
        self.sections = sections if sections is not None else SectionStore()
        self.bus = bus if bus is not None else EventBus()

        if min_magnification < 1:
            raise ValueError(f"min_magnification must be at least 1, got {min_magnification}")
        if min_magnification > max_magnification:
            raise ValueError(f"min_magnification {min_magnification} exceeds max_magnification {max_magnification}")
        self._min_magnification = min_magnification
        self._max_magnification = max_magnification

        self._position = Vector2()
        self._magnification = DEFAULTS.DEFAULT_MAGNIFICATION
        self._pointer_position = Vector2()
        self._size = Vector2(*self.surface.get_size())
        self._smooth = smooth
        self._excluded: List[pygame.Rect] = [pygame.Rect(rect) for rect in excluded]

        self.renderer = Renderer(self.surface, self.sections, smooth=self._smooth)
        self.set_size(size.clone() if size is not None else Vector2(*self.surface.get_size()))

    # --- Bounds ---
    @property
    def min_magnification(self) -> int:
        return self._min_magnification

    @property
    def max_magnification(self) -> int:
        return self._max_magnification

    # --- Rendering ---
    def render(self):
        return self.renderer.render(self._position, self.get_scale(), self._size)

    # --- Magnification ---
    def zoom_in(self, anchor: Vector2):
        self.zoom(DEFAULTS.ZOOM_IN_FACTOR, anchor)

    def zoom_out(self, anchor: Vector2):
        self.zoom(DEFAULTS.ZOOM_OUT_FACTOR, anchor)

    def zoom(self, factor: float, anchor: Vector2):
        self.set_magnification(self._magnification * factor, anchor)

    def set_magnification(self, magnification: float, anchor: Vector2):
        """
        Changes the magnification (an integer percentage) about a screen anchor.

        The requested value is rounded, then clamped to the bounds. The world
        point under `anchor` stays under it afterwards, unless a move listener
        vetoes the reposition; the new magnification is committed either way.
        """
        # Half-up rounding, so 2.5 becomes 3.
        magnification = int(math.floor(magnification + 0.5))
        if magnification == self._magnification:
            return
        magnification = max(self._min_magnification, min(self._max_magnification, magnification))

        if self.bus.dispatch(ZoomEvent(self, magnification)).is_canceled():
            self.logger.debug(f"Zoom to {magnification}% canceled.")
            return

        old_scale = self.get_scale()
        new_scale = magnification / 100
        amount = new_scale / old_scale
        # Anchor in pre-scale screen units; solves "anchor maps to the same world point".
        anchor = anchor.clone().divide(old_scale)
        self.set_position(anchor.clone().subtract(anchor.clone().divide(amount)).add(self._position))

        self._magnification = magnification
        self.logger.debug(f"Magnification set to {magnification}%.")
        self.render()

    def get_magnification(self) -> int:
        return self._magnification

    def get_scale(self) -> float:
        return self._magnification / 100

    # --- Position ---
    def set_position(self, position: Vector2):
        if self.bus.dispatch(MoveEvent(self, position)).is_canceled():
            self.logger.debug(f"Move to ({position.x:.1f}, {position.y:.1f}) canceled.")
            return
        self._position = position.clone()
        self.render()

    def get_position(self) -> Vector2:
        return self._position.clone()

    # --- Pointer ---
    def update_pointer(self, position: Vector2):
        """Records a pointer sample and reports it to POINTER listeners."""
        self.bus.dispatch(PointerEvent(self, position))
        self._pointer_position = position.clone()

    def get_pointer_position(self) -> Vector2:
        return self._pointer_position.clone()

    # --- Smoothing ---
    def set_smooth(self, smooth: bool):
        if self.bus.dispatch(SmoothEvent(self, smooth)).is_canceled():
            self.logger.debug(f"Smoothing change to {smooth} canceled.")
            return
        self._smooth = smooth
        self.renderer.smooth = smooth
        self.render()

    def get_smooth(self) -> bool:
        return self._smooth

    # --- Size ---
    def set_size(self, size: Vector2):
        if self.bus.dispatch(ResizeEvent(self, size)).is_canceled():
            self.logger.debug(f"Resize to {size.x}x{size.y} canceled.")
            return
        self._size = size.clone()
        self.render()

    def get_size(self) -> Vector2:
        return self._size.clone()

    def center(self) -> Vector2:
        return self._size.clone().divide(2)

    # --- Excluded input regions ---
    def add_excluded(self, region: pygame.Rect):
        self._excluded.append(pygame.Rect(region))

    def get_excluded(self) -> List[pygame.Rect]:
        return self._excluded

    def is_excluded(self, point: Vector2) -> bool:
        return any(region.collidepoint(point.x, point.y) for region in self._excluded)

    # --- Coordinate conversion ---
    def screen_to_world(self, point: Vector2) -> Vector2:
        return point.clone().divide(self.get_scale()).add(self._position)

    def world_to_screen(self, point: Vector2) -> Vector2:
        return point.clone().subtract(self._position).multiply(self.get_scale())
