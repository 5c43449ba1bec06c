# canvas_map/renderer.py

"""
================================================================================
SECTION RENDERER
================================================================================
Repaints a target surface from a SectionStore for one viewport transform.

Data Contract:
---------------
- Inputs (on initialization):
    - surface (pygame.Surface): The visible drawing surface.
    - sections (SectionStore): Where sections are looked up.
- Public Methods:
    - visible_keys(position, scale, size): the candidate grid keys.
    - render(position, scale, size): clears and redraws, returning drawn keys.
- Side Effects: Draws on the target surface only. Never writes to the store.
- Invariants: Only sections overlapping the visible world rectangle are
  looked up. Rendering twice with the same transform gives the same pixels.
================================================================================
"""
import logging
import math
from typing import Iterator, List

import pygame

from . import config as DEFAULTS
from .sections import SectionKey, SectionStore, section_origin
from .vector import Vector2


class Renderer:
    """Draws the visible part of the section grid onto one surface."""

    def __init__(self, surface: pygame.Surface, sections: SectionStore,
                 smooth: bool = DEFAULTS.DEFAULT_SMOOTH, background=DEFAULTS.DEFAULT_BACKGROUND):
        self.surface = surface
        self.sections = sections
        self.smooth = smooth
        self.background = background
        self.logger = logging.getLogger(__name__)

    def visible_keys(self, position: Vector2, scale: float, size: Vector2) -> Iterator[SectionKey]:
        """Yields every grid key overlapping [position, position + size / scale], far edge included."""
        step = self.sections.section_size
        end_x = position.x + size.x / scale
        end_y = position.y + size.y / scale

        x = section_origin(position.x, step)
        while x <= end_x:
            y = section_origin(position.y, step)
            while y <= end_y:
                yield x, y
                y += step
            x += step

    def render(self, position: Vector2, scale: float, size: Vector2) -> List[SectionKey]:
        """Clears the visible rectangle and blits every present section into it."""
        visible = pygame.Rect(0, 0, int(math.ceil(size.x)), int(math.ceil(size.y)))
        self.surface.fill(self.background, visible)

        drawn = []
        for key in self.visible_keys(position, scale, size):
            section = self.sections.get(key)
            if section is None:
                continue
            if self._blit_section(section, key, position, scale, size):
                drawn.append(key)

        self.logger.debug(f"Rendered {len(drawn)} sections at scale {scale:.2f}.")
        return drawn

    def _blit_section(self, section: pygame.Surface, key: SectionKey,
                      position: Vector2, scale: float, size: Vector2) -> bool:
        """Scales only the visible part of a section and blits it in place."""
        section_size = self.sections.section_size
        origin_x, origin_y = key

        # Visible source rectangle in section pixels, expanded outward to whole pixels.
        left = max(0, int(math.floor(position.x - origin_x)))
        top = max(0, int(math.floor(position.y - origin_y)))
        right = min(section_size, int(math.ceil(position.x + size.x / scale - origin_x)))
        bottom = min(section_size, int(math.ceil(position.y + size.y / scale - origin_y)))
        if right <= left or bottom <= top:
            return False

        # Destination edges are rounded separately so neighbouring sections meet without seams.
        dest_left = round((origin_x + left - position.x) * scale)
        dest_top = round((origin_y + top - position.y) * scale)
        dest_width = max(1, round((origin_x + right - position.x) * scale) - dest_left)
        dest_height = max(1, round((origin_y + bottom - position.y) * scale) - dest_top)

        source = section.subsurface(pygame.Rect(left, top, right - left, bottom - top))
        if self.smooth:
            scaled = pygame.transform.smoothscale(source, (dest_width, dest_height))
        else:
            scaled = pygame.transform.scale(source, (dest_width, dest_height))
        self.surface.blit(scaled, (dest_left, dest_top))
        return True
