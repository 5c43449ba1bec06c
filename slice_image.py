# slice_image.py

"""
================================================================================
OFFLINE IMAGE SLICER
================================================================================
This script is a command-line tool for cutting one large image into the square
section images of a map package, so the viewer can load them lazily instead
of holding the whole image as one bitmap.

Output layout:
    <output>/config.json
    <output>/map/<x>,<y>.png

Usage:
    python slice_image.py --image big.png --output maps/world [--section-size 4096]
================================================================================
"""
import argparse
import collections
import json
import logging
import os
import time

import numpy as np
from PIL import Image
from tqdm import tqdm

from canvas_map import config as DEFAULTS
from canvas_map.sections import format_key

# Source images for maps are routinely larger than Pillow's bomb guard.
Image.MAX_IMAGE_PIXELS = None


def save_section(tile: Image.Image, directory: str, key) -> str:
    """
    Saves one section tile. Returns 'empty' (not written), 'palettized' or 'full'.
    """
    pixels = np.asarray(tile)

    # Fully transparent tiles are left out; the viewer skips absent sections.
    if not pixels[..., 3].any():
        return 'empty'

    file_path = os.path.join(directory, f"{format_key(key)}.png")
    colors = tile.getcolors(maxcolors=256)
    if colors is not None and (pixels[..., 3] == 255).all():
        tile.convert('RGB').quantize(colors=len(colors)).save(file_path, optimize=True)
        return 'palettized'

    tile.save(file_path, optimize=True)
    return 'full'


def slice_image(image_path: str, output_dir: str, section_size: int, name: str,
                color: str, logger: logging.Logger) -> dict:
    """Cuts the image into sections and writes the package's config.json."""
    start_time = time.perf_counter()

    logger.info(f"Opening source image '{image_path}'...")
    image = Image.open(image_path).convert('RGBA')
    width, height = image.size
    logger.info(f"Source image is {width}x{height} pixels.")

    section_dir = os.path.join(output_dir, DEFAULTS.SECTION_IMAGE_DIR)
    os.makedirs(section_dir, exist_ok=True)

    keys = [(x, y) for x in range(0, width, section_size) for y in range(0, height, section_size)]
    stats = collections.Counter()
    for x, y in tqdm(keys, desc="Slicing Sections"):
        # Crop boxes past the image edge are padded with transparent pixels.
        tile = image.crop((x, y, x + section_size, y + section_size))
        stats[save_section(tile, section_dir, (x, y))] += 1

    map_config = {
        "name": name,
        "color": color,
        "size": {"x": width, "y": height},
        "spawn": {"x": width // 2, "y": height // 2},
        "image": True,
        "chunks": False,
        "sectionSize": section_size,
    }
    with open(os.path.join(output_dir, DEFAULTS.MAP_CONFIG_FILENAME), 'w') as f:
        json.dump(map_config, f, indent=4)

    end_time = time.perf_counter()
    logger.info(f"Slicing complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(
        f"  - {len(keys)} sections -> {stats['full']} full, {stats['palettized']} palettized, "
        f"{stats['empty']} empty (skipped)"
    )
    logger.info(f"Map package saved to: {output_dir}")
    return dict(stats)


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Slices a large image into a canvas map package.")
    parser.add_argument("--image", type=str, required=True, help="Path to the source image.")
    parser.add_argument("--output", type=str, required=True, help="Directory of the map package to write.")
    parser.add_argument("--section-size", type=int, default=DEFAULTS.SECTION_SIZE,
                        help="Side length of one section in pixels.")
    parser.add_argument("--name", type=str, default=None, help="Map name (defaults to the output folder name).")
    parser.add_argument("--color", type=str, default=DEFAULTS.DEFAULT_MAP_COLOR, help="Map background colour.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("Slicer")

    if not os.path.isfile(args.image):
        logger.critical(f"Source image not found at '{args.image}'.")
    else:
        map_name = args.name or os.path.basename(os.path.normpath(args.output))
        slice_image(args.image, args.output, args.section_size, map_name, args.color, logger)
