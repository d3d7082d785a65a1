"""Pydantic schemas for zone map definitions.

These models describe authored map data (positions, rectangles, zones,
connections, behaviors). They mirror the runtime dataclasses in ``zone.py``
and ``zone_map.py`` but stay serializable so map files can be loaded from and
written back to JSON. Hand-authored files may use camelCase keys
(``walkableAreas``, ``fromZoneId``); both spellings are accepted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MapModel(BaseModel):
    """Base model accepting both snake_case field names and camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Enumerations
# ============================================================================


class ZonePurpose(str, Enum):
    """Functional role of a zone."""

    SOCIAL_HUB = "social_hub"
    COMBAT_AREA = "combat_area"
    TRANSITION = "transition"
    SAFE_ZONE = "safe_zone"
    PUZZLE_AREA = "puzzle_area"
    BOSS_ARENA = "boss_arena"
    SECRET_AREA = "secret_area"
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    NATURAL = "natural"


class EntityType(str, Enum):
    NPC = "npc"
    ENEMY = "enemy"
    ITEM = "item"
    STRUCTURE = "structure"
    INTERACTION_POINT = "interaction_point"


class ConnectionType(str, Enum):
    ADJACENT = "adjacent"
    PORTAL = "portal"
    STAIRS = "stairs"
    DOOR = "door"


# ============================================================================
# Geometry
# ============================================================================


class Position(MapModel):
    """Integer grid position. Frozen so positions can be hashed and compared."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


PositionLike = Union[Position, Sequence[int], Mapping[str, int]]


def as_position(value: PositionLike) -> Position:
    """Normalize a Position, an ``(x, y)`` pair, or an ``{"x", "y"}`` mapping."""

    if isinstance(value, Position):
        return value
    if isinstance(value, Mapping):
        return Position(x=int(value["x"]), y=int(value["y"]))
    x, y = value
    return Position(x=int(x), y=int(y))


class Rectangle(MapModel):
    """Axis-aligned rectangle with half-open containment.

    A point ``(px, py)`` is inside iff ``x <= px < x + width`` and
    ``y <= py < y + height``; zero-sized rectangles contain nothing.
    """

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains_xy(self, px: int, py: int) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def contains(self, position: PositionLike) -> bool:
        pos = as_position(position)
        return self.contains_xy(pos.x, pos.y)

    def overlaps(self, other: "Rectangle") -> bool:
        """True when the two rectangles share a region of positive area."""
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )

    def is_adjacent(self, other: "Rectangle") -> bool:
        """True when an edge is shared and the perpendicular extents overlap.

        Rectangles that only touch at a corner are not adjacent.
        """
        touching_x = self.right == other.x or other.right == self.x
        touching_y = self.bottom == other.y or other.bottom == self.y
        overlap_x = self.x < other.right and other.x < self.right
        overlap_y = self.y < other.bottom and other.y < self.bottom
        return (touching_x and overlap_y) or (touching_y and overlap_x)

    def union(self, other: "Rectangle") -> "Rectangle":
        min_x = min(self.x, other.x)
        min_y = min(self.y, other.y)
        max_x = max(self.right, other.right)
        max_y = max(self.bottom, other.bottom)
        return Rectangle(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


# ============================================================================
# Zone contents
# ============================================================================


class ZoneEntity(MapModel):
    """Something placed in a zone. ``position`` is relative to the zone origin."""

    type: EntityType
    id: str
    position: Position
    behavior: Optional[Dict[str, Any]] = Field(
        None,
        description="Opaque behavior config (e.g. {'type': 'shopkeeper', 'shopId': ...})",
    )


class ZoneBehavior(MapModel):
    """Trigger/action pair attached to a zone. Opaque to the engine."""

    type: str
    trigger: Dict[str, Any] = Field(default_factory=dict, description="Must carry a 'type' key")
    action: Dict[str, Any] = Field(default_factory=dict)


class ZoneEnvironment(MapModel):
    type: str = Field(..., description="indoor | outdoor | underground")
    lighting: Optional[str] = Field(None, description="bright | dim | dark")
    weather: Optional[bool] = None


class ZoneState(MapModel):
    """Serializable zone definition."""

    id: str
    name: str
    purpose: ZonePurpose
    bounds: Rectangle
    walkable_areas: List[Rectangle] = Field(
        default_factory=list,
        description="Walkable rectangles; empty means the whole zone is walkable",
    )
    blocked_areas: List[Rectangle] = Field(
        default_factory=list,
        description="Rectangles carved out of the walkable areas",
    )
    entities: List[ZoneEntity] = Field(default_factory=list)
    behaviors: List[ZoneBehavior] = Field(default_factory=list)
    environment: Optional[ZoneEnvironment] = None


# ============================================================================
# Connections and maps
# ============================================================================


class ConnectionRequirement(MapModel):
    type: str = Field(..., description="key | quest | level | custom")
    value: Union[int, str]


class ZoneConnection(MapModel):
    """Directed link between two zones.

    Stored once per authored connection. Bidirectional connections are expanded
    into a reverse entry in the map's adjacency index, never in the stored list.
    """

    from_zone_id: str
    to_zone_id: str
    type: ConnectionType
    bidirectional: bool
    from_point: Position = Field(..., description="Exit point, inside the 'from' zone")
    to_point: Position = Field(..., description="Entry point, inside the 'to' zone")
    requirements: List[ConnectionRequirement] = Field(default_factory=list)

    def reversed(self) -> "ZoneConnection":
        return self.model_copy(
            update={
                "from_zone_id": self.to_zone_id,
                "to_zone_id": self.from_zone_id,
                "from_point": self.to_point,
                "to_point": self.from_point,
            }
        )


class MapBehavior(MapModel):
    type: str = Field(..., description="time_based | weather | faction | quest_state")
    config: Dict[str, Any] = Field(default_factory=dict)


class ZoneMapState(MapModel):
    """Serializable map definition: an ordered zone list plus connections.

    Zone order is significant: when bounds overlap, the earlier zone owns the
    overlapping positions.
    """

    id: str
    name: str
    description: str = ""
    zones: List[ZoneState] = Field(default_factory=list)
    connections: List[ZoneConnection] = Field(default_factory=list)
    behaviors: List[MapBehavior] = Field(default_factory=list)
    render_hints: Optional[Dict[str, Any]] = Field(
        None, description="Renderer hints (tileSize, theme, layers); ignored by the engine",
    )
