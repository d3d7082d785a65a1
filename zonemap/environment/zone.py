"""Runtime zone container.

A zone is a purpose-tagged rectangle with its own walkability rules and the
entities placed in it. Lookups fail soft: missing entities come back as
``None``/``False``/empty lists rather than raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .schemas import (
    EntityType,
    Position,
    PositionLike,
    Rectangle,
    ZoneBehavior,
    ZoneEntity,
    ZoneEnvironment,
    ZonePurpose,
    ZoneState,
    as_position,
)


@dataclass
class Zone:
    """A rectangular area of the map.

    ``walkable_areas`` defaults to ``[bounds]`` when constructed empty;
    ``walkable_defaulted`` remembers that the authored list was empty so
    validation can flag it and ``to_state`` can round-trip it.
    """

    id: str
    name: str
    purpose: ZonePurpose
    bounds: Rectangle
    walkable_areas: List[Rectangle] = field(default_factory=list)
    blocked_areas: List[Rectangle] = field(default_factory=list)
    entities: List[ZoneEntity] = field(default_factory=list)
    behaviors: List[ZoneBehavior] = field(default_factory=list)
    environment: Optional[ZoneEnvironment] = None
    walkable_defaulted: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.purpose = ZonePurpose(self.purpose)
        if not self.walkable_areas:
            self.walkable_areas = [self.bounds]
            self.walkable_defaulted = True

    # Walkability ---------------------------------------------------------------

    def walkable_at(self, x: int, y: int) -> bool:
        """Coordinate form of ``is_walkable`` used by the search loops."""
        if not self.bounds.contains_xy(x, y):
            return False
        for blocked in self.blocked_areas:
            if blocked.contains_xy(x, y):
                return False
        return any(area.contains_xy(x, y) for area in self.walkable_areas)

    def is_walkable(self, position: PositionLike) -> bool:
        pos = as_position(position)
        return self.walkable_at(pos.x, pos.y)

    def is_in_bounds(self, position: PositionLike) -> bool:
        return self.bounds.contains(position)

    def get_walkable_positions(self) -> List[Position]:
        """Enumerate every walkable position in the zone.

        O(area). Meant for small zones and offline tooling, not per-frame queries.
        """
        positions: List[Position] = []
        seen = set()
        for area in self.walkable_areas:
            for x in range(area.x, area.right):
                for y in range(area.y, area.bottom):
                    if (x, y) in seen or not self.walkable_at(x, y):
                        continue
                    seen.add((x, y))
                    positions.append(Position(x=x, y=y))
        return positions

    # Entities ------------------------------------------------------------------

    def get_entities_by_type(self, entity_type: EntityType | str) -> List[ZoneEntity]:
        return [entity for entity in self.entities if entity.type == entity_type]

    def get_entity(self, entity_id: str) -> Optional[ZoneEntity]:
        return next((entity for entity in self.entities if entity.id == entity_id), None)

    def add_entity(self, entity: ZoneEntity) -> None:
        self.entities.append(entity)

    def remove_entity(self, entity_id: str) -> bool:
        for index, entity in enumerate(self.entities):
            if entity.id == entity_id:
                del self.entities[index]
                return True
        return False

    def update_entity_position(self, entity_id: str, position: PositionLike) -> bool:
        entity = self.get_entity(entity_id)
        if entity is None:
            return False
        entity.position = as_position(position)
        return True

    def absolute_position(self, entity: ZoneEntity) -> Position:
        """Convert an entity's zone-relative position to map coordinates."""
        return Position(x=self.bounds.x + entity.position.x, y=self.bounds.y + entity.position.y)

    # Misc queries --------------------------------------------------------------

    def get_behaviors_by_trigger(self, trigger_type: str) -> List[ZoneBehavior]:
        return [b for b in self.behaviors if b.trigger.get("type") == trigger_type]

    def has_purpose(self, purpose: ZonePurpose | str) -> bool:
        return self.purpose == purpose

    def distance_from_center(self, position: PositionLike) -> float:
        pos = as_position(position)
        cx, cy = self.bounds.center
        return math.hypot(pos.x - cx, pos.y - cy)

    def describe(self) -> str:
        """One-sentence summary, e.g. 'Market is a commercial zone (outdoor). Contains 3 entities'."""
        npc_count = len(self.get_entities_by_type(EntityType.NPC))
        enemy_count = len(self.get_entities_by_type(EntityType.ENEMY))

        description = f"{self.name} is a {self.purpose.value.replace('_', ' ')} zone"
        if self.environment:
            description += f" ({self.environment.type}"
            if self.environment.lighting:
                description += f", {self.environment.lighting} lighting"
            description += ")"
        if self.entities:
            description += f". Contains {len(self.entities)} entities"
            if npc_count:
                description += f" including {npc_count} NPCs"
            if enemy_count:
                description += f" and {enemy_count} enemies"
        return description

    # Serialization -------------------------------------------------------------

    @classmethod
    def from_state(cls, state: ZoneState) -> "Zone":
        return cls(
            id=state.id,
            name=state.name,
            purpose=state.purpose,
            bounds=state.bounds,
            walkable_areas=list(state.walkable_areas),
            blocked_areas=list(state.blocked_areas),
            entities=[entity.model_copy(deep=True) for entity in state.entities],
            behaviors=[behavior.model_copy(deep=True) for behavior in state.behaviors],
            environment=state.environment,
        )

    def to_state(self) -> ZoneState:
        return ZoneState(
            id=self.id,
            name=self.name,
            purpose=self.purpose,
            bounds=self.bounds,
            walkable_areas=[] if self.walkable_defaulted else list(self.walkable_areas),
            blocked_areas=list(self.blocked_areas),
            entities=[entity.model_copy(deep=True) for entity in self.entities],
            behaviors=[behavior.model_copy(deep=True) for behavior in self.behaviors],
            environment=self.environment,
        )
