# tests/test_package.py

import json
import os

import pygame
import pytest

from canvas_map import SectionStore, Vector2, new_section
from canvas_map.package import ChunkIndex, MapConfig, load_package, paint_chunks, populate_sections

MAP_COLOR = (17, 51, 34, 255)
CLEAR = (0, 0, 0, 0)


def _write_json(path, data):
    with open(path, 'w') as f:
        json.dump(data, f)


def test_map_config_defaults_for_missing_fields():
    config = MapConfig.from_dict({"size": {"x": 10}})

    assert config.name == "Map"
    assert config.color == "#113322"
    assert config.size == Vector2(0, 0)
    assert config.spawn == Vector2(0, 0)
    assert config.image is False
    assert config.chunks is False
    assert config.section_size == 4096


def test_load_package_requires_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_package(str(tmp_path))


def test_load_package_reads_chunks_when_enabled(tmp_path):
    _write_json(tmp_path / "config.json", {"name": "Test", "chunks": True, "size": {"x": 100, "y": 70}})
    _write_json(tmp_path / "chunks.json", {"pixelsPerChunk": 4, "locations": {"1,2": "Town"}})

    package = load_package(str(tmp_path))

    assert package.config.name == "Test"
    assert package.config.size == Vector2(100, 70)
    assert len(package.chunks.locations) == 1


def test_color_mode_fills_sections_clipped_to_map_size(tmp_path):
    config = MapConfig(size=Vector2(100, 70))
    store = SectionStore(64)

    count = populate_sections(store, config, str(tmp_path))

    assert count == 4
    assert sorted(store.keys()) == [(0, 0), (0, 64), (64, 0), (64, 64)]
    corner = store.get((64, 64))
    assert tuple(corner.get_at((10, 3))) == MAP_COLOR
    assert tuple(corner.get_at((10, 10))) == CLEAR
    assert tuple(corner.get_at((40, 3))) == CLEAR


def test_image_mode_loads_present_images_and_skips_missing(tmp_path):
    os.makedirs(tmp_path / "map")
    pygame.image.save(new_section(64, (200, 10, 10)), str(tmp_path / "map" / "64,0.png"))
    config = MapConfig(size=Vector2(128, 64), image=True)
    store = SectionStore(64)

    count = populate_sections(store, config, str(tmp_path))

    assert count == 1
    assert store.get((0, 0)) is None
    assert tuple(store.get((64, 0)).get_at((5, 5))) == (200, 10, 10, 255)


def test_chunk_index_resolves_types_and_colors():
    index = ChunkIndex.from_dict({
        "pixelsPerChunk": 4,
        "types": {"Town": "city"},
        "colors": {"city": "#FF0000"},
        "locations": {"1,2": "Town", "-3,0": "Ruin", "bad": "Nowhere"},
    })

    town = index.locations[(1, 2)]
    assert (town.type, town.color, town.location) == ("city", "#FF0000", Vector2(4, 8))
    ruin = index.locations[(-3, 0)]
    assert (ruin.type, ruin.color) == ("???", "#FFFFFF")
    assert len(index.locations) == 2


def test_chunk_search_and_lookup():
    index = ChunkIndex.from_dict({
        "pixelsPerChunk": 4,
        "types": {"Town": "city", "Harbor": "port"},
        "locations": {"1,2": "Town", "5,5": "Harbor"},
    })

    assert [chunk.name for chunk in index.search("TOWN")] == ["Town"]
    assert [chunk.name for chunk in index.search("port")] == ["Harbor"]
    assert len(index.search("")) == 2
    assert index.chunk_at(5.5, 11).name == "Town"
    assert index.chunk_at(-1, 0) is None


def test_paint_chunks_offsets_by_spawn():
    store = SectionStore(64)
    store.set((0, 0), new_section(64, MAP_COLOR))
    index = ChunkIndex.from_dict({
        "pixelsPerChunk": 4,
        "types": {"Town": "city"},
        "colors": {"city": "#FF0000"},
        "locations": {"1,2": "Town", "100,100": "Far"},
    })

    painted = paint_chunks(store, index, Vector2(10, 10))

    section = store.get((0, 0))
    assert painted == 1
    assert tuple(section.get_at((14, 18))) == (255, 0, 0, 255)
    assert tuple(section.get_at((17, 21))) == (255, 0, 0, 255)
    assert tuple(section.get_at((18, 18))) == MAP_COLOR
