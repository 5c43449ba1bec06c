# canvas_map/waypoints.py

"""Named map positions saved to a JSON file."""
import json
import logging
import os
from typing import Dict, Iterator, Optional, Tuple

from .vector import Vector2


class WaypointStore:
    """
    Keeps named waypoints (map-relative coordinates) and writes them through to
    a JSON file of the form {"name": {"x": .., "y": ..}}.
    """

    def __init__(self, path: str):
        self.path = path
        self.logger = logging.getLogger(__name__)
        self._waypoints: Dict[str, Vector2] = {}

    def load(self) -> int:
        """Reads the file if it exists. Malformed entries are skipped."""
        self._waypoints.clear()
        if not os.path.exists(self.path):
            return 0
        with open(self.path, 'r') as f:
            data = json.load(f)

        for name, value in data.items():
            position = Vector2.from_json(value)
            if position is None:
                self.logger.warning(f"Skipping malformed waypoint '{name}' in '{self.path}'.")
                continue
            self._waypoints[name] = position
        self.logger.info(f"Loaded {len(self._waypoints)} waypoints from '{self.path}'.")
        return len(self._waypoints)

    def add(self, name: str, position: Vector2):
        self._waypoints[name] = position.clone()
        self._save()

    def remove(self, name: str) -> bool:
        if self._waypoints.pop(name, None) is None:
            return False
        self._save()
        return True

    def get(self, name: str) -> Optional[Vector2]:
        position = self._waypoints.get(name)
        return position.clone() if position is not None else None

    def nearest(self, position: Vector2) -> Optional[str]:
        """Name of the waypoint closest to a map-relative position, or None when empty."""
        best_name, best_distance = None, None
        for name, waypoint in self._waypoints.items():
            dx, dy = waypoint.x - position.x, waypoint.y - position.y
            distance = dx * dx + dy * dy
            if best_distance is None or distance < best_distance:
                best_name, best_distance = name, distance
        return best_name

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump({name: position.to_json() for name, position in self._waypoints.items()}, f, indent=2)

    def __iter__(self) -> Iterator[Tuple[str, Vector2]]:
        return iter([(name, position.clone()) for name, position in self._waypoints.items()])

    def __len__(self) -> int:
        return len(self._waypoints)
