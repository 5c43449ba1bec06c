# viewer.py

"""
================================================================================
CANVAS MAP VIEWER
================================================================================
Interactive pygame viewer for a map package (see canvas_map/package.py).

Usage:
    python viewer.py [--config config.json] [--map path/to/package]

Controls:
- Pan: drag with any mouse button
- Zoom: mouse wheel (about the pointer), +/- keys (about the centre),
  zoom slider, or pinch on a touchpad
- H: jump to the map's spawn point
- P: drop a waypoint at the pointer
- Delete: remove the waypoint nearest the pointer
- 1-9: jump to the n-th waypoint
- Search box: type a chunk name or type and press Enter to jump to it
- Quit: ESC or close window
================================================================================
"""
import argparse
import json
import logging
import logging.config
import os
import sys

import pygame
import pygame_gui

from canvas_map import config as DEFAULTS
from canvas_map import CanvasMap, EventKind, Priority, SectionStore, Vector2
from canvas_map.input import InputController
from canvas_map.package import load_package, paint_chunks, populate_sections
from canvas_map.waypoints import WaypointStore

# --- HUD Constants ---
HUD_WIDTH = 300
HUD_PADDING = 10
HUD_ELEMENT_HEIGHT = 25
HUD_SLIDER_HEIGHT = 30
HUD_BUTTON_HEIGHT = 30

WAYPOINT_KEYS = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
                 pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9]


def magnification_to_slider(magnification: int, minimum: int, maximum: int) -> float:
    """Maps [min, 100] onto [-1, 0] and [100, max] onto [0, 1]."""
    if magnification < 100:
        return (magnification - minimum) / (100 - minimum) - 1
    return (magnification - 100) / (maximum - 100)


def slider_to_magnification(value: float, minimum: int, maximum: int) -> float:
    if value < 0:
        return (value + 1) * (100 - minimum) + minimum
    return value * (maximum - 100) + 100


class ViewerApp:
    """The main application class for the map viewer."""

    def __init__(self, config_path: str, map_path: str = None):
        self._setup_logging()
        self.logger.info("Viewer starting.")

        self.config = self._load_config(config_path)
        if map_path:
            self.config.setdefault('map', {})['package_path'] = map_path
        self._setup_pygame()

        package_path = self.config.get('map', {}).get('package_path')
        try:
            self.package = load_package(package_path)
        except (FileNotFoundError, TypeError):
            self.logger.critical(f"Map package not found at '{package_path}'. Exiting.")
            sys.exit(1)

        viewport_config = self.config.get('viewport', {})
        self.sections = SectionStore(self.package.config.section_size)
        self.map = CanvasMap(
            self.screen,
            sections=self.sections,
            smooth=viewport_config.get('smooth', DEFAULTS.DEFAULT_SMOOTH),
            min_magnification=viewport_config.get('min_magnification', DEFAULTS.DEFAULT_MIN_MAGNIFICATION),
            max_magnification=viewport_config.get('max_magnification', DEFAULTS.DEFAULT_MAX_MAGNIFICATION),
        )
        self.input = InputController(self.map)

        populate_sections(self.sections, self.package.config, self.package.path)
        if self.package.chunks is not None:
            paint_chunks(self.sections, self.package.chunks, self.package.config.spawn)

        waypoint_path = self.config.get('waypoints', {}).get(
            'path', os.path.join(self.package.path, DEFAULTS.DEFAULT_WAYPOINT_FILE))
        self.waypoints = WaypointStore(waypoint_path)
        self.waypoints.load()

        self._setup_hud()
        self._register_listeners()
        self.to_spawn()

        self.is_running = True

    def _setup_logging(self):
        """Initializes the logging system from a config file."""
        log_config_path = 'logging_config.json'
        log_dir = 'logs'

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        with open(log_config_path, 'rt') as f:
            log_config = json.load(f)

        # Independent of the JSON path so the log always lands in logs/.
        log_config['handlers']['file']['filename'] = os.path.join(log_dir, 'viewer.log')

        logging.config.dictConfig(log_config)
        self.logger = logging.getLogger(__name__)

    def _load_config(self, config_path: str) -> dict:
        """Loads viewer parameters from the config file."""
        self.logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.critical(f"Configuration file not found at {config_path}. Exiting.")
            sys.exit(1)
        except json.JSONDecodeError:
            self.logger.critical(f"Error decoding JSON from {config_path}. Exiting.")
            sys.exit(1)

    def _setup_pygame(self):
        """Initializes Pygame and the display window."""
        pygame.init()
        display_config = self.config.get('display', {})
        width = display_config.get('screen_width', DEFAULTS.DEFAULT_SCREEN_WIDTH)
        height = display_config.get('screen_height', DEFAULTS.DEFAULT_SCREEN_HEIGHT)

        if display_config.get('fullscreen', False):
            self.logger.info("Initializing display in Fullscreen mode.")
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.logger.info(f"Initializing display in Windowed mode ({width}x{height}).")
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption("Canvas Map Viewer")
        self.clock = pygame.time.Clock()
        self.tick_rate = display_config.get('clock_tick_rate', DEFAULTS.DEFAULT_TICK_RATE)
        self.logger.info("Pygame initialized successfully.")

    def _setup_hud(self):
        """Creates the pygame_gui panel and registers it as an excluded input region."""
        width, height = self.screen.get_size()
        self.ui_manager = pygame_gui.UIManager((width, height))

        panel_height = 5 * HUD_PADDING + 3 * HUD_ELEMENT_HEIGHT + HUD_SLIDER_HEIGHT + HUD_BUTTON_HEIGHT
        panel_rect = pygame.Rect(width - HUD_WIDTH - HUD_PADDING, HUD_PADDING, HUD_WIDTH, panel_height)
        self.hud_panel = pygame_gui.elements.UIPanel(relative_rect=panel_rect, manager=self.ui_manager)
        element_width = HUD_WIDTH - 3 * HUD_PADDING
        current_y = HUD_PADDING

        self.coords_label = pygame_gui.elements.UILabel(
            relative_rect=pygame.Rect(HUD_PADDING, current_y, element_width, HUD_ELEMENT_HEIGHT),
            text="0, 0",
            manager=self.ui_manager,
            container=self.hud_panel
        )
        current_y += HUD_ELEMENT_HEIGHT + HUD_PADDING

        self.zoom_label = pygame_gui.elements.UILabel(
            relative_rect=pygame.Rect(HUD_PADDING, current_y, element_width, HUD_ELEMENT_HEIGHT),
            text=f"{self.map.get_magnification()}%",
            manager=self.ui_manager,
            container=self.hud_panel
        )
        current_y += HUD_ELEMENT_HEIGHT

        self.zoom_slider = pygame_gui.elements.UIHorizontalSlider(
            relative_rect=pygame.Rect(HUD_PADDING, current_y, element_width, HUD_SLIDER_HEIGHT),
            start_value=magnification_to_slider(
                self.map.get_magnification(), self.map.min_magnification, self.map.max_magnification),
            value_range=(-1.0, 1.0),
            manager=self.ui_manager,
            container=self.hud_panel
        )
        current_y += HUD_SLIDER_HEIGHT + HUD_PADDING

        self.smooth_button = pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(HUD_PADDING, current_y, element_width, HUD_BUTTON_HEIGHT),
            text=self._smooth_text(self.map.get_smooth()),
            manager=self.ui_manager,
            container=self.hud_panel
        )
        current_y += HUD_BUTTON_HEIGHT + HUD_PADDING

        self.search_entry = pygame_gui.elements.UITextEntryLine(
            relative_rect=pygame.Rect(HUD_PADDING, current_y, element_width, HUD_ELEMENT_HEIGHT),
            manager=self.ui_manager,
            container=self.hud_panel
        )

        self.map.add_excluded(panel_rect)
        self.logger.info("HUD initialized.")

    def _register_listeners(self):
        """Keeps the HUD in sync with the viewport through its event bus."""
        bus = self.map.bus
        # MONITOR: only committed values should reach the HUD, so run after all vetoes.
        bus.register(EventKind.ZOOM, self._on_zoom, Priority.MONITOR)
        bus.register(EventKind.SMOOTH, self._on_smooth, Priority.MONITOR)
        bus.register(EventKind.POINTER, self._on_pointer)

    def _on_zoom(self, event):
        if event.is_canceled():
            return
        self.zoom_label.set_text(f"{event.magnification}%")
        self.zoom_slider.set_current_value(magnification_to_slider(
            event.magnification, self.map.min_magnification, self.map.max_magnification))

    def _on_smooth(self, event):
        if not event.is_canceled():
            self.smooth_button.set_text(self._smooth_text(event.smooth))

    def _on_pointer(self, event):
        x, y = self.pointer_to_map(event.position)
        text = f"{x}, {y}"
        chunks = self.package.chunks
        if chunks is not None:
            chunk = chunks.chunk_at(x, y)
            if chunk is not None:
                text += f"  {chunk.name} ({chunk.type})"
        self.coords_label.set_text(text)

    @staticmethod
    def _smooth_text(smooth: bool) -> str:
        return "Smoothing: on" if smooth else "Smoothing: off"

    def pointer_to_map(self, pointer: Vector2):
        """Screen point -> integer map coordinates relative to the spawn."""
        world = self.map.screen_to_world(pointer).subtract(self.package.config.spawn)
        return int(world.x // 1), int(world.y // 1)

    def to_spawn(self):
        self.map.center_on(self.package.config.spawn)

    def to_waypoint(self, index: int):
        waypoints = list(self.waypoints)
        if index >= len(waypoints):
            return
        name, position = waypoints[index]
        self.logger.info(f"Jumping to waypoint '{name}'.")
        self.map.center_on(position.add(self.package.config.spawn))

    def drop_waypoint(self):
        x, y = self.pointer_to_map(self.map.get_pointer_position())
        name = f"Waypoint {len(self.waypoints) + 1}"
        self.waypoints.add(name, Vector2(x, y))
        self.logger.info(f"Added waypoint '{name}' at ({x}, {y}).")

    def remove_nearest_waypoint(self):
        x, y = self.pointer_to_map(self.map.get_pointer_position())
        name = self.waypoints.nearest(Vector2(x, y))
        if name is None:
            return
        self.waypoints.remove(name)
        self.logger.info(f"Removed waypoint '{name}'.")

    def search_chunks(self, text: str):
        """Centres the map on the first chunk whose name or type matches."""
        chunks = self.package.chunks
        if chunks is None or not text.strip():
            return
        matches = chunks.search(text.strip())
        if not matches:
            self.logger.info(f"No chunk matches '{text}'.")
            return
        chunk = matches[0]
        self.logger.info(f"Found {len(matches)} chunk(s) for '{text}'; jumping to '{chunk.name}'.")
        self.map.center_on(chunk.location.clone().add(self.package.config.spawn))

    def run(self):
        """The main application loop."""
        try:
            while self.is_running:
                time_delta = self.clock.tick(self.tick_rate) / 1000.0
                self._handle_events()
                self.ui_manager.update(time_delta)
                self._draw()
        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
            raise
        finally:
            self.logger.info("Exiting viewer.")
            pygame.quit()

    def _handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
                continue
            if event.type == pygame.VIDEORESIZE:
                self.ui_manager.set_window_resolution((event.w, event.h))
            if self.ui_manager.process_events(event):
                continue

            if event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED and event.ui_element == self.zoom_slider:
                self.map.set_magnification(slider_to_magnification(
                    event.value, self.map.min_magnification, self.map.max_magnification))
            elif event.type == pygame_gui.UI_BUTTON_PRESSED and event.ui_element == self.smooth_button:
                self.map.set_smooth(not self.map.get_smooth())
            elif event.type == pygame_gui.UI_TEXT_ENTRY_FINISHED and event.ui_element == self.search_entry:
                self.search_chunks(event.text)
            elif event.type == pygame.KEYDOWN:
                self._on_key(event.key)
            else:
                self.input.handle_event(event)

    def _on_key(self, key):
        if key == pygame.K_ESCAPE:
            self.logger.info("Event: ESC key pressed. Exiting.")
            self.is_running = False
        elif key == pygame.K_h:
            self.to_spawn()
        elif key == pygame.K_p:
            self.drop_waypoint()
        elif key == pygame.K_DELETE:
            self.remove_nearest_waypoint()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.map.zoom_in()
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.map.zoom_out()
        elif key in WAYPOINT_KEYS:
            self.to_waypoint(WAYPOINT_KEYS.index(key))

    def _draw(self):
        """Redraws the map under the HUD each frame."""
        self.map.render()
        self.ui_manager.draw_ui(self.screen)
        pygame.display.set_caption(
            f"{self.package.config.name} Map | Zoom: {self.map.get_magnification()}%")
        pygame.display.flip()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Pan/zoom viewer for canvas map packages.")
    parser.add_argument("--config", type=str, default="config.json", help="Path to the viewer configuration file.")
    parser.add_argument("--map", type=str, default=None, help="Map package directory (overrides the config).")
    args = parser.parse_args()

    app = ViewerApp(config_path=args.config, map_path=args.map)
    app.run()
