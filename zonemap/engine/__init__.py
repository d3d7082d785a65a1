"""Zone engine: pathfinding, validation, tile inference, and statistics."""

from .inference import (
    TILE_PURPOSES,
    analyze_tile_map,
    merge_adjacent_suggestions,
    rasterize_map,
)
from .pathfinding import (
    ZoneGraphInconsistencyError,
    find_path,
    find_path_in_zone,
    find_zone_path,
    stitch_zone_path,
)
from .statistics import compute_map_statistics
from .validation import find_unreachable_zones, validate_map
from .zone_engine import ZoneEngine

__all__ = [
    "ZoneEngine",
    "ZoneGraphInconsistencyError",
    "find_path",
    "find_path_in_zone",
    "find_zone_path",
    "stitch_zone_path",
    "validate_map",
    "find_unreachable_zones",
    "analyze_tile_map",
    "merge_adjacent_suggestions",
    "rasterize_map",
    "TILE_PURPOSES",
    "compute_map_statistics",
]
