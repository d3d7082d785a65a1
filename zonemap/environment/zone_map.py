"""Zone map container.

Owns the ordered zone list and the stored connection list, plus two derived
indexes: a ``zone_id -> Zone`` lookup and a ``zone_id -> [ZoneConnection]``
adjacency index that also holds the synthesized reverse edges of
bidirectional connections. The indexes are dropped on every add/remove and
rebuilt lazily on the next query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .schemas import (
    EntityType,
    MapBehavior,
    PositionLike,
    ZoneConnection,
    ZoneEntity,
    ZoneMapState,
    ZonePurpose,
    as_position,
)
from .zone import Zone


class BasicValidationResult(BaseModel):
    """Outcome of the cheap construction-time check (``ZoneMap.validate``)."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)


@dataclass
class ZoneMap:
    """A map made of zones joined by explicit connections.

    Mutate zones/connections through ``add_zone``/``remove_zone``/
    ``add_connection``/``remove_connection`` so the derived indexes stay in step.
    Queries must not run while the map is being mutated.
    """

    id: str
    name: str
    description: str = ""
    zones: List[Zone] = field(default_factory=list)
    connections: List[ZoneConnection] = field(default_factory=list)
    behaviors: List[MapBehavior] = field(default_factory=list)
    render_hints: Optional[Dict[str, Any]] = None
    _zone_lookup: Optional[Dict[str, Zone]] = field(default=None, init=False, repr=False, compare=False)
    _adjacency: Optional[Dict[str, List[ZoneConnection]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    # Derived indexes -----------------------------------------------------------

    def invalidate_indexes(self) -> None:
        self._zone_lookup = None
        self._adjacency = None

    @property
    def zone_lookup(self) -> Dict[str, Zone]:
        if self._zone_lookup is None:
            lookup: Dict[str, Zone] = {}
            for zone in self.zones:
                # Duplicate ids resolve to the first declared zone
                lookup.setdefault(zone.id, zone)
            self._zone_lookup = lookup
        return self._zone_lookup

    @property
    def adjacency(self) -> Dict[str, List[ZoneConnection]]:
        if self._adjacency is None:
            adjacency: Dict[str, List[ZoneConnection]] = {}
            for connection in self.connections:
                adjacency.setdefault(connection.from_zone_id, []).append(connection)
                if connection.bidirectional:
                    adjacency.setdefault(connection.to_zone_id, []).append(connection.reversed())
            self._adjacency = adjacency
        return self._adjacency

    # Zone lookups --------------------------------------------------------------

    def get_zone(self, zone_id: str) -> Optional[Zone]:
        return self.zone_lookup.get(zone_id)

    def get_zone_at_position(self, position: PositionLike) -> Optional[Zone]:
        """Return the first zone, in declaration order, whose bounds contain ``position``."""
        pos = as_position(position)
        for zone in self.zones:
            if zone.bounds.contains_xy(pos.x, pos.y):
                return zone
        return None

    def is_walkable(self, position: PositionLike) -> bool:
        zone = self.get_zone_at_position(position)
        return zone.is_walkable(position) if zone else False

    def get_zones_by_purpose(self, purpose: ZonePurpose | str) -> List[Zone]:
        return [zone for zone in self.zones if zone.has_purpose(purpose)]

    # Connectivity --------------------------------------------------------------

    def get_connections_from(self, zone_id: str) -> List[ZoneConnection]:
        """Directed adjacency entries leaving ``zone_id`` (reverse edges included)."""
        return list(self.adjacency.get(zone_id, []))

    def get_connected_zones(self, zone_id: str) -> List[Zone]:
        connected: List[Zone] = []
        for connection in self.adjacency.get(zone_id, []):
            target = self.get_zone(connection.to_zone_id)
            # Entries pointing at removed or misspelled zones are skipped
            if target is not None:
                connected.append(target)
        return connected

    def get_connection(self, from_zone_id: str, to_zone_id: str) -> Optional[ZoneConnection]:
        for connection in self.adjacency.get(from_zone_id, []):
            if connection.to_zone_id == to_zone_id:
                return connection
        return None

    def are_zones_connected(self, from_zone_id: str, to_zone_id: str) -> bool:
        return self.get_connection(from_zone_id, to_zone_id) is not None

    # Mutation ------------------------------------------------------------------

    def add_zone(self, zone: Zone) -> None:
        self.zones.append(zone)
        self.invalidate_indexes()

    def remove_zone(self, zone_id: str) -> bool:
        """Remove the first zone with ``zone_id`` and every connection touching that id."""
        for index, zone in enumerate(self.zones):
            if zone.id == zone_id:
                del self.zones[index]
                self.connections = [
                    conn
                    for conn in self.connections
                    if conn.from_zone_id != zone_id and conn.to_zone_id != zone_id
                ]
                self.invalidate_indexes()
                return True
        return False

    def add_connection(self, connection: ZoneConnection) -> None:
        self.connections.append(connection)
        self.invalidate_indexes()

    def remove_connection(self, connection: ZoneConnection) -> bool:
        for index, existing in enumerate(self.connections):
            if existing == connection:
                del self.connections[index]
                self.invalidate_indexes()
                return True
        return False

    # Entities and behaviors ----------------------------------------------------

    def get_entities_by_type(self, entity_type: EntityType | str) -> List[Tuple[Zone, ZoneEntity]]:
        return [
            (zone, entity)
            for zone in self.zones
            for entity in zone.get_entities_by_type(entity_type)
        ]

    def find_entity(self, entity_id: str) -> Optional[Tuple[Zone, ZoneEntity]]:
        for zone in self.zones:
            entity = zone.get_entity(entity_id)
            if entity is not None:
                return zone, entity
        return None

    def get_behaviors_by_type(self, behavior_type: str) -> List[MapBehavior]:
        return [behavior for behavior in self.behaviors if behavior.type == behavior_type]

    # Summaries -----------------------------------------------------------------

    def describe(self) -> str:
        npc_count = len(self.get_entities_by_type(EntityType.NPC))
        enemy_count = len(self.get_entities_by_type(EntityType.ENEMY))

        purpose_counts: Dict[ZonePurpose, int] = {}
        for zone in self.zones:
            purpose_counts[zone.purpose] = purpose_counts.get(zone.purpose, 0) + 1
        purpose_summary = ", ".join(
            f"{count} {purpose.value.replace('_', ' ')}" for purpose, count in purpose_counts.items()
        )

        lines = [
            f"{self.name}: {self.description}",
            f"Contains {len(self.zones)} zones with {len(self.connections)} connections.",
            f"Population: {npc_count} NPCs, {enemy_count} enemies.",
            f"Zone types: {purpose_summary}",
        ]
        return "\n".join(lines)

    def validate(self) -> BasicValidationResult:
        """Cheap structural check intended for construction time.

        Reports duplicate zone ids, connections naming unknown zones, and zones
        that cannot be reached from the first declared zone. The engine's
        ``validate_map`` is the richer counterpart and treats unreachable zones
        as warnings instead.
        """
        errors: List[str] = []

        seen = set()
        for zone in self.zones:
            if zone.id in seen:
                errors.append(f"Duplicate zone ID: {zone.id}")
            seen.add(zone.id)

        for index, conn in enumerate(self.connections):
            if conn.from_zone_id not in self.zone_lookup:
                errors.append(f"Connection {index}: Invalid fromZoneId: {conn.from_zone_id}")
            if conn.to_zone_id not in self.zone_lookup:
                errors.append(f"Connection {index}: Invalid toZoneId: {conn.to_zone_id}")

        if len(self.zones) > 1:
            reachable = {self.zones[0].id}
            stack = [self.zones[0].id]
            while stack:
                zone_id = stack.pop()
                for conn in self.adjacency.get(zone_id, []):
                    if conn.to_zone_id not in reachable:
                        reachable.add(conn.to_zone_id)
                        stack.append(conn.to_zone_id)
            for zone in self.zones:
                if zone.id not in reachable:
                    errors.append(f"Zone {zone.id} ({zone.name}) is not reachable from other zones")

        return BasicValidationResult(is_valid=not errors, errors=errors)

    # Serialization -------------------------------------------------------------

    @classmethod
    def from_state(cls, state: ZoneMapState) -> "ZoneMap":
        return cls(
            id=state.id,
            name=state.name,
            description=state.description,
            zones=[Zone.from_state(zone_state) for zone_state in state.zones],
            connections=[conn.model_copy(deep=True) for conn in state.connections],
            behaviors=[behavior.model_copy(deep=True) for behavior in state.behaviors],
            render_hints=dict(state.render_hints) if state.render_hints is not None else None,
        )

    def to_state(self) -> ZoneMapState:
        return ZoneMapState(
            id=self.id,
            name=self.name,
            description=self.description,
            zones=[zone.to_state() for zone in self.zones],
            connections=[conn.model_copy(deep=True) for conn in self.connections],
            behaviors=[behavior.model_copy(deep=True) for behavior in self.behaviors],
            render_hints=dict(self.render_hints) if self.render_hints is not None else None,
        )
