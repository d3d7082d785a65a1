"""
zonemap - zone-based spatial reasoning for tile-free game maps.

A map is an ordered set of purpose-tagged rectangular zones joined by
explicit connections. The ZoneEngine answers pathfinding, validation,
tile-inference, and statistics queries over such a map; MapAI wraps those
answers in natural language.

Synchronous and single-threaded. No global state beyond Config.
"""

__version__ = "0.1.0"

# Map model
from .environment import (
    BasicValidationResult,
    ConnectionRequirement,
    ConnectionType,
    EntityType,
    MapBehavior,
    Position,
    Rectangle,
    Zone,
    ZoneBehavior,
    ZoneConnection,
    ZoneEntity,
    ZoneEnvironment,
    ZoneMap,
    ZoneMapState,
    ZonePurpose,
    ZoneState,
    as_position,
)

# Engine
from .engine import (
    TILE_PURPOSES,
    ZoneEngine,
    ZoneGraphInconsistencyError,
    analyze_tile_map,
    rasterize_map,
)

# Result schemas
from .schemas import (
    Feature,
    InteractionType,
    MapStatistics,
    MovementOption,
    PathResult,
    SuggestedZone,
    ValidationErrorType,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)

# Query facade and loading helpers
from .map_ai import MapAI
from .loader import MapLoader, load_map
from .config import Config

__all__ = [
    # Map model
    "BasicValidationResult",
    "ConnectionRequirement",
    "ConnectionType",
    "EntityType",
    "MapBehavior",
    "Position",
    "Rectangle",
    "Zone",
    "ZoneBehavior",
    "ZoneConnection",
    "ZoneEntity",
    "ZoneEnvironment",
    "ZoneMap",
    "ZoneMapState",
    "ZonePurpose",
    "ZoneState",
    "as_position",
    # Engine
    "ZoneEngine",
    "ZoneGraphInconsistencyError",
    "analyze_tile_map",
    "rasterize_map",
    "TILE_PURPOSES",
    # Result schemas
    "Feature",
    "InteractionType",
    "MapStatistics",
    "MovementOption",
    "PathResult",
    "SuggestedZone",
    "ValidationErrorType",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    # Facade / loading
    "MapAI",
    "MapLoader",
    "load_map",
    "Config",
]
