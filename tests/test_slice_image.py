# tests/test_slice_image.py

import json
import logging
import os

from PIL import Image

from canvas_map import SectionStore
from canvas_map.package import load_package, populate_sections
from slice_image import slice_image


def test_slice_writes_sections_and_config(tmp_path):
    source = Image.new('RGBA', (100, 70), (0, 0, 0, 0))
    source.paste((255, 0, 0, 255), (0, 0, 100, 64))
    source.paste((0, 0, 255, 128), (0, 64, 30, 70))
    image_path = str(tmp_path / "source.png")
    source.save(image_path)
    output = str(tmp_path / "package")

    stats = slice_image(image_path, output, 64, "Test", "#000000", logging.getLogger("test"))

    assert sorted(os.listdir(os.path.join(output, "map"))) == ["0,0.png", "0,64.png", "64,0.png"]
    assert stats == {"palettized": 1, "full": 2, "empty": 1}
    with open(os.path.join(output, "config.json")) as f:
        config = json.load(f)
    assert config["size"] == {"x": 100, "y": 70}
    assert config["image"] is True
    assert config["sectionSize"] == 64


def test_sliced_package_loads_into_sections(tmp_path):
    source = Image.new('RGBA', (128, 64), (0, 200, 0, 255))
    image_path = str(tmp_path / "source.png")
    source.save(image_path)
    output = str(tmp_path / "package")
    slice_image(image_path, output, 64, "Green", "#000000", logging.getLogger("test"))

    package = load_package(output)
    store = SectionStore(package.config.section_size)
    count = populate_sections(store, package.config, package.path)

    assert count == 2
    assert tuple(store.get((64, 0)).get_at((10, 10)))[:3] == (0, 200, 0)
