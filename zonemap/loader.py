"""
Map loading and saving for JSON-defined zone maps.

This module provides MapLoader for converting JSON map files into runtime
ZoneMap objects and back. A map file declares:
- Map identity (id, name, description)
- An ordered list of zones (bounds, walkable/blocked areas, entities, behaviors)
- Connections between zones (type, direction, exit/entry points)
- Optional global behaviors and renderer hints

Design philosophy:
- Maps are data (JSON), not code - designers can author them without Python
- Required fields are checked up front (clear errors instead of KeyErrors later)
- camelCase and snake_case keys are both accepted, so maps exported from
  JavaScript tooling load unchanged

Map file structure:
```json
{
  "id": "terminal_town",
  "name": "Terminal Town",
  "description": "...",
  "zones": [
    {"id": "town_square", "name": "Central Square", "purpose": "social_hub",
     "bounds": {"x": 0, "y": 0, "width": 40, "height": 30},
     "walkableAreas": [], "blockedAreas": [...], "entities": [...], "behaviors": [...]}
  ],
  "connections": [
    {"fromZoneId": "town_square", "toZoneId": "market", "type": "adjacent",
     "bidirectional": true, "fromPoint": {"x": 39, "y": 15}, "toPoint": {"x": 40, "y": 15}}
  ]
}
```

Usage:
    loader = MapLoader()
    zone_map = loader.load("terminal_town")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .environment import ZoneMap, ZoneMapState


class MapLoader:
    """Load, validate, and save zone maps as JSON files.

    Directory structure:
    - Default: Config.MAPS_DIR ({PROJECT_ROOT}/examples/maps unless ZONEMAP_MAPS_DIR is set)
    - Override via constructor: MapLoader(Path("/custom/maps"))
    - Map files: {map_name}.json (e.g., "terminal_town.json")

    Validation:
    - Required fields: id, name, zones
    - Field types/values are checked by the pydantic definition models
      (pydantic.ValidationError propagates for malformed entries)
    - Semantic checks (dangling connections, unreachable zones) are left to
      ZoneMap.validate() / ZoneEngine.validate_map()
    """

    REQUIRED_FIELDS = ("id", "name", "zones")

    def __init__(self, maps_dir: Optional[Path] = None):
        """Initialize map loader.

        Args:
            maps_dir: Directory containing map files. Defaults to Config.MAPS_DIR
        """
        self.maps_dir = Path(maps_dir) if maps_dir is not None else Config.MAPS_DIR

    def _path_for(self, map_name: str) -> Path:
        return self.maps_dir / f"{map_name}.json"

    def load(self, map_name: str) -> ZoneMap:
        """Load a map by name.

        Args:
            map_name: Name of map (without .json extension)

        Returns:
            Runtime ZoneMap with derived indexes ready to query

        Raises:
            FileNotFoundError: If the map file doesn't exist in maps_dir
            ValueError: If required fields are missing
            pydantic.ValidationError: If a zone/connection definition is malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        map_path = self._path_for(map_name)
        if not map_path.exists():
            raise FileNotFoundError(f"Map '{map_name}' not found at {map_path}")

        data = json.loads(map_path.read_text())
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> ZoneMap:
        """Build a ZoneMap from an already-decoded map definition."""
        self._validate_definition(data)
        state = ZoneMapState.model_validate(data)
        return ZoneMap.from_state(state)

    def _validate_definition(self, data: Dict[str, Any]) -> None:
        """Check required top-level fields.

        Raises:
            ValueError: If required fields are missing or zones is not a list
        """
        if not isinstance(data, dict):
            raise ValueError("Map definition must be a JSON object")

        missing = [field for field in self.REQUIRED_FIELDS if field not in data]
        if missing:
            raise ValueError(f"Map missing required fields: {missing}")

        if not isinstance(data["zones"], list):
            raise ValueError("Map 'zones' must be a list")

    def save(self, zone_map: ZoneMap, map_name: Optional[str] = None) -> Path:
        """Write a map as pretty-printed JSON and return the file path.

        Args:
            zone_map: Map to write
            map_name: File stem; defaults to the map id
        """
        self.maps_dir.mkdir(parents=True, exist_ok=True)
        map_path = self._path_for(map_name or zone_map.id)
        payload = zone_map.to_state().model_dump(mode="json", by_alias=True, exclude_none=True)
        map_path.write_text(json.dumps(payload, indent=2))
        return map_path

    def list_maps(self) -> List[str]:
        """List all available map files.

        Returns:
            List of map names (without .json extension)
        """
        if not self.maps_dir.exists():
            return []

        return sorted(
            f.stem for f in self.maps_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_map_info(self, map_name: str) -> Dict[str, Any]:
        """Get map metadata without building the runtime map.

        Args:
            map_name: Name of map

        Returns:
            Dict with id, name, description, num_zones, num_connections
        """
        data = json.loads(self._path_for(map_name).read_text())

        return {
            "id": data.get("id", map_name),
            "name": data.get("name", map_name),
            "description": data.get("description", "No description"),
            "num_zones": len(data.get("zones", [])),
            "num_connections": len(data.get("connections", [])),
        }


def load_map(map_name: str) -> ZoneMap:
    """Convenience function to load a map from Config.MAPS_DIR.

    Args:
        map_name: Name of map to load

    Returns:
        Runtime ZoneMap
    """
    loader = MapLoader()
    return loader.load(map_name)
