"""Stateless query engine over a ZoneMap."""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Optional

from zonemap.config import Config
from zonemap.environment import Position, PositionLike, Zone, ZoneMap
from zonemap.schemas import MapStatistics, SuggestedZone, ValidationResult

from . import inference, pathfinding, statistics, validation


class ZoneEngine:
    """Pathfinding, validation, tile inference, and statistics for one map.

    The engine only reads the map. Callers must not mutate the map while a
    query is running; there is no locking and no cancellation.
    """

    def __init__(self, zone_map: ZoneMap, *, max_search_nodes: Optional[int] = None):
        """Initialize the engine.

        Args:
            zone_map: Map to query
            max_search_nodes: A* expansion budget per zone segment. Defaults to
                Config.MAX_SEARCH_NODES; 0 or None means unbounded.
        """
        self.map = zone_map
        budget = Config.MAX_SEARCH_NODES if max_search_nodes is None else max_search_nodes
        self.max_search_nodes: Optional[int] = budget or None

    # Pathfinding ---------------------------------------------------------------

    def find_path(self, start: PositionLike, end: PositionLike) -> Optional[List[Position]]:
        return pathfinding.find_path(
            self.map, start, end, max_search_nodes=self.max_search_nodes
        )

    def find_path_in_zone(
        self, start: PositionLike, end: PositionLike, zone: Zone
    ) -> Optional[List[Position]]:
        return pathfinding.find_path_in_zone(
            zone, start, end, max_search_nodes=self.max_search_nodes
        )

    def find_zone_path(self, start_zone_id: str, end_zone_id: str) -> Optional[List[str]]:
        return pathfinding.find_zone_path(self.map, start_zone_id, end_zone_id)

    # Validation ----------------------------------------------------------------

    def validate_map(self) -> ValidationResult:
        return validation.validate_map(self.map)

    def find_unreachable_zones(self) -> List[str]:
        return validation.find_unreachable_zones(self.map)

    # Tile inference ------------------------------------------------------------

    def analyze_tile_map(
        self,
        tiles: inference.TileGrid,
        tile_size: Optional[int] = None,
        *,
        min_region_size: Optional[int] = None,
        region_key: Optional[Callable[[Optional[str]], Hashable]] = None,
    ) -> List[SuggestedZone]:
        return inference.analyze_tile_map(
            tiles,
            tile_size,
            min_region_size=min_region_size,
            region_key=region_key,
        )

    def rasterize(self, tile_size: Optional[int] = None) -> List[List[Dict[str, Any]]]:
        return inference.rasterize_map(self.map, tile_size)

    # Statistics ----------------------------------------------------------------

    def get_map_statistics(self) -> MapStatistics:
        return statistics.compute_map_statistics(self.map)
