# canvas_map/sections.py

"""
================================================================================
SECTION STORE
================================================================================
Sparse storage for the square raster sections that make up a map. A section
is a pygame.Surface of exactly section_size x section_size pixels, addressed
by the grid-aligned world coordinate of its top-left corner.

Data Contract:
---------------
- Keys: (x, y) integer tuples, both multiples of section_size. The text form
  "x,y" (format_key / parse_key) is used wherever a key leaves the process,
  e.g. section image filenames.
- Public Methods:
    - get(key) / set(key, section): lookup and insert-or-replace.
    - key_for(x, y): the key of the section containing a world point.
    - paint(x, y, width, height, color): localised fill inside one section.
- Invariants: Sections are never partially sized; a stored section's key is
  always the floor-aligned origin of every world point inside it. The store
  never evicts.
================================================================================
"""
import logging
import math
from typing import Dict, Iterator, Optional, Tuple

import pygame

from . import config as DEFAULTS

SectionKey = Tuple[int, int]


def section_origin(value: float, section_size: int = DEFAULTS.SECTION_SIZE) -> int:
    """Floor-aligns a world coordinate to its section origin (correct for negatives)."""
    return int(math.floor(value / section_size)) * section_size


def section_key(x: float, y: float, section_size: int = DEFAULTS.SECTION_SIZE) -> SectionKey:
    return section_origin(x, section_size), section_origin(y, section_size)


def format_key(key: SectionKey) -> str:
    return f"{key[0]},{key[1]}"


def parse_key(text: str) -> SectionKey:
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Section key must look like '<x>,<y>', got '{text}'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Section key must contain two integers, got '{text}'") from None


def new_section(section_size: int = DEFAULTS.SECTION_SIZE, color=None) -> pygame.Surface:
    """Creates a blank, fully transparent section, optionally filled with a colour."""
    surface = pygame.Surface((section_size, section_size), pygame.SRCALPHA, 32)
    if color is not None:
        surface.fill(pygame.Color(color))
    return surface


class SectionStore:
    """Maps aligned grid keys to section surfaces."""

    def __init__(self, section_size: int = DEFAULTS.SECTION_SIZE):
        if section_size <= 0:
            raise ValueError("section_size must be positive")
        self.section_size = section_size
        self.logger = logging.getLogger(__name__)
        self._sections: Dict[SectionKey, pygame.Surface] = {}

    def key_for(self, x: float, y: float) -> SectionKey:
        return section_key(x, y, self.section_size)

    def get(self, key: SectionKey) -> Optional[pygame.Surface]:
        return self._sections.get(key)

    def set(self, key: SectionKey, section: pygame.Surface):
        x, y = key
        if x % self.section_size or y % self.section_size:
            raise ValueError(f"Key {format_key(key)} is not aligned to section size {self.section_size}")
        if section.get_size() != (self.section_size, self.section_size):
            raise ValueError(
                f"Section for {format_key(key)} is {section.get_width()}x{section.get_height()}, "
                f"expected {self.section_size}x{self.section_size}"
            )
        if section.get_bitsize() < 24:
            # smoothscale only accepts 24 and 32-bit surfaces.
            self.logger.debug(f"Converting {section.get_bitsize()}-bit section {format_key(key)} to 32-bit.")
            converted = new_section(self.section_size)
            converted.blit(section, (0, 0))
            section = converted
        self._sections[(int(x), int(y))] = section

    def paint(self, x: float, y: float, width: float, height: float, color) -> bool:
        """
        Fills a world-space rectangle inside the section containing (x, y).

        The fill is clipped to that one section. Returns False when no section
        exists there.
        """
        key = self.key_for(x, y)
        section = self._sections.get(key)
        if section is None:
            return False
        rect = pygame.Rect(int(x - key[0]), int(y - key[1]), int(width), int(height))
        section.fill(pygame.Color(color), rect.clip(section.get_rect()))
        return True

    def keys(self) -> Iterator[SectionKey]:
        return iter(self._sections.keys())

    def __contains__(self, key) -> bool:
        return key in self._sections

    def __len__(self) -> int:
        return len(self._sections)
