# canvas_map/package.py

"""
================================================================================
MAP PACKAGE
================================================================================
Loads a map package from disk and fills a SectionStore with its content.

Package layout:
    <package>/config.json      map name, colour, size, spawn, flags
    <package>/chunks.json      optional named chunk locations
    <package>/map/<x>,<y>.png  section images (when config "image" is true)

Data Contract:
---------------
- Public Functions:
    - load_package(path): reads config.json and chunks.json.
    - populate_sections(store, config, path): creates the map's sections.
    - paint_chunks(store, index, spawn): marks every chunk in its colour.
- Side Effects: Reads files; writes sections into the given store.
- Invariants: A missing section image never aborts loading; it is logged and
  that grid cell stays empty.
================================================================================
"""
import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pygame

from . import config as DEFAULTS
from .sections import SectionStore, format_key, new_section, parse_key
from .vector import Vector2

logger = logging.getLogger(__name__)


@dataclass
class MapConfig:
    name: str = DEFAULTS.DEFAULT_MAP_NAME
    color: str = DEFAULTS.DEFAULT_MAP_COLOR
    size: Vector2 = field(default_factory=Vector2)
    spawn: Vector2 = field(default_factory=Vector2)
    image: bool = False
    chunks: bool = False
    section_size: int = DEFAULTS.SECTION_SIZE

    @classmethod
    def from_dict(cls, data: dict) -> "MapConfig":
        return cls(
            name=data.get("name", DEFAULTS.DEFAULT_MAP_NAME),
            color=data.get("color", DEFAULTS.DEFAULT_MAP_COLOR),
            size=Vector2.from_json(data.get("size")) or Vector2(),
            spawn=Vector2.from_json(data.get("spawn")) or Vector2(),
            image=bool(data.get("image", False)),
            chunks=bool(data.get("chunks", False)),
            section_size=int(data.get("sectionSize", DEFAULTS.SECTION_SIZE)),
        )

    @classmethod
    def from_file(cls, path: str) -> "MapConfig":
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))


@dataclass
class Chunk:
    name: str
    type: str
    color: str
    location: Vector2


@dataclass
class ChunkIndex:
    """Named chunks keyed by chunk coordinates (not world units)."""
    pixels_per_chunk: int = DEFAULTS.DEFAULT_PIXELS_PER_CHUNK
    locations: Dict[Tuple[int, int], Chunk] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ChunkIndex":
        pixels_per_chunk = data.get("pixelsPerChunk", DEFAULTS.DEFAULT_PIXELS_PER_CHUNK)
        types = data.get("types", {})
        colors = data.get("colors", {})

        locations = {}
        for position, name in data.get("locations", {}).items():
            try:
                cx, cy = parse_key(position)
            except ValueError:
                logger.warning(f"Skipping chunk '{name}' with malformed location '{position}'.")
                continue
            chunk_type = types.get(name)
            color = colors.get(chunk_type) if chunk_type is not None else None
            locations[(cx, cy)] = Chunk(
                name=name,
                type=chunk_type if chunk_type is not None else DEFAULTS.DEFAULT_CHUNK_TYPE,
                color=color if color is not None else DEFAULTS.DEFAULT_CHUNK_COLOR,
                location=Vector2(cx, cy).multiply(pixels_per_chunk),
            )
        return cls(pixels_per_chunk, locations)

    @classmethod
    def from_file(cls, path: str) -> "ChunkIndex":
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def chunk_at(self, x: float, y: float) -> Optional[Chunk]:
        """Returns the chunk covering a map-relative (spawn-adjusted) coordinate."""
        key = (math.floor(x / self.pixels_per_chunk), math.floor(y / self.pixels_per_chunk))
        return self.locations.get(key)

    def search(self, text: str) -> List[Chunk]:
        """Case-insensitive substring match on chunk name or type."""
        needle = text.lower()
        return [
            chunk for chunk in self.locations.values()
            if needle in chunk.name.lower() or needle in chunk.type.lower()
        ]


@dataclass
class MapPackage:
    path: str
    config: MapConfig
    chunks: Optional[ChunkIndex] = None


def load_package(path: str) -> MapPackage:
    """Reads a package's config.json (required) and chunks.json (when enabled)."""
    config_path = os.path.join(path, DEFAULTS.MAP_CONFIG_FILENAME)
    if not os.path.isfile(config_path):
        raise FileNotFoundError(f"Could not find '{DEFAULTS.MAP_CONFIG_FILENAME}' in '{path}'")
    map_config = MapConfig.from_file(config_path)

    chunks = None
    if map_config.chunks:
        chunks_path = os.path.join(path, DEFAULTS.CHUNKS_FILENAME)
        if os.path.isfile(chunks_path):
            chunks = ChunkIndex.from_file(chunks_path)
            logger.info(f"Loaded {len(chunks.locations)} chunk locations.")
        else:
            logger.warning(f"Map '{map_config.name}' enables chunks but '{chunks_path}' is missing.")

    logger.info(f"Loaded map '{map_config.name}' ({map_config.size.x}x{map_config.size.y}).")
    return MapPackage(path=path, config=map_config, chunks=chunks)


def populate_sections(store: SectionStore, map_config: MapConfig, package_path: str) -> int:
    """
    Creates one section per grid cell of the map and stores it.

    In image mode each cell is loaded from map/<x>,<y>.png; otherwise the cell is
    filled with the map colour, clipped to the map's size. Returns the number of
    sections stored.
    """
    size = store.section_size
    image_dir = os.path.join(package_path, DEFAULTS.SECTION_IMAGE_DIR)
    count = 0

    for x in range(0, int(map_config.size.x), size):
        for y in range(0, int(map_config.size.y), size):
            key = (x, y)
            section = new_section(size)
            if map_config.image:
                filepath = os.path.join(image_dir, f"{format_key(key)}.png")
                try:
                    image = pygame.image.load(filepath)
                except (pygame.error, FileNotFoundError):
                    logger.warning(f"Failed to load section image for {format_key(key)} at '{filepath}'")
                    continue
                section.blit(image, (0, 0), pygame.Rect(0, 0, size, size))
            else:
                section.fill(
                    pygame.Color(map_config.color),
                    pygame.Rect(0, 0, int(map_config.size.x) - x, int(map_config.size.y) - y),
                )
            store.set(key, section)
            count += 1

    logger.info(f"Populated {count} sections for map '{map_config.name}'.")
    return count


def paint_chunks(store: SectionStore, index: ChunkIndex, spawn: Vector2) -> int:
    """Fills each chunk's square, offset by the spawn point, in its type colour."""
    painted = 0
    for chunk in index.locations.values():
        location = chunk.location.clone().add(spawn)
        if store.paint(location.x, location.y, index.pixels_per_chunk, index.pixels_per_chunk, chunk.color):
            painted += 1
    logger.debug(f"Painted {painted} of {len(index.locations)} chunks.")
    return painted
