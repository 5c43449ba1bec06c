# canvas_map/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the canvas
map. These values are used if they are not explicitly provided by the
application's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC MAP.
Instead, pass the values to the Viewport/CanvasMap constructors or put them in
the viewer's config.json.
================================================================================
"""

# --- Sections ---
# The side length, in world units (and pixels), of one square section surface.
SECTION_SIZE = 4096

# --- Magnification (integer percentages) ---
DEFAULT_MAGNIFICATION = 100
DEFAULT_MIN_MAGNIFICATION = 1
DEFAULT_MAX_MAGNIFICATION = 800

# Factors used by zoom_in / zoom_out.
ZOOM_IN_FACTOR = 2.0
ZOOM_OUT_FACTOR = 0.5

# --- Rendering ---
# Interpolated (smoothscale) blits by default.
DEFAULT_SMOOTH = True
# RGBA fill used to clear the visible surface before sections are blitted.
DEFAULT_BACKGROUND = (0, 0, 0, 0)

# --- Map Packages ---
DEFAULT_MAP_NAME = "Map"
DEFAULT_MAP_COLOR = "#113322"
DEFAULT_CHUNK_TYPE = "???"
DEFAULT_CHUNK_COLOR = "#FFFFFF"
DEFAULT_PIXELS_PER_CHUNK = 1
MAP_CONFIG_FILENAME = "config.json"
CHUNKS_FILENAME = "chunks.json"
SECTION_IMAGE_DIR = "map"

# --- Viewer ---
DEFAULT_SCREEN_WIDTH = 1280
DEFAULT_SCREEN_HEIGHT = 720
DEFAULT_TICK_RATE = 60
DEFAULT_WAYPOINT_FILE = "waypoints.json"
