"""Zone and map containers for zonemap."""

from .schemas import (
    ConnectionRequirement,
    ConnectionType,
    EntityType,
    MapBehavior,
    MapModel,
    Position,
    PositionLike,
    Rectangle,
    ZoneBehavior,
    ZoneConnection,
    ZoneEntity,
    ZoneEnvironment,
    ZoneMapState,
    ZonePurpose,
    ZoneState,
    as_position,
)
from .zone import Zone
from .zone_map import BasicValidationResult, ZoneMap

__all__ = [
    "ConnectionRequirement",
    "ConnectionType",
    "EntityType",
    "MapBehavior",
    "MapModel",
    "Position",
    "PositionLike",
    "Rectangle",
    "ZoneBehavior",
    "ZoneConnection",
    "ZoneEntity",
    "ZoneEnvironment",
    "ZoneMapState",
    "ZonePurpose",
    "ZoneState",
    "as_position",
    "Zone",
    "ZoneMap",
    "BasicValidationResult",
]
