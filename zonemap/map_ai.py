"""
Natural-language query facade over a zone map.

MapAI turns map and engine answers into text an agent (or a player-facing
UI) can consume: location descriptions, movement options, nearby features,
turn-by-turn directions, action suggestions, and keyword search. It holds no
algorithms of its own; everything spatial is delegated to ZoneMap and
ZoneEngine.

Usage:
    engine = ZoneEngine(zone_map)
    ai = MapAI(zone_map, engine)
    print(ai.describe_location((120, 130)))
"""

import math
from typing import Dict, List, Optional, Tuple

from .config import Config
from .engine import ZoneEngine
from .environment import (
    EntityType,
    Position,
    PositionLike,
    Zone,
    ZoneEntity,
    ZoneMap,
    ZonePurpose,
    as_position,
)
from .schemas import Feature, InteractionType, MovementOption, PathResult

SECONDS_PER_STEP = 0.5
TRANSITION_RADIUS = 5
# Beyond this radius, features from other zones are included too
CROSS_ZONE_RADIUS = 20

# Ordered so that the first walkable option reads naturally (cardinals first)
_DIRECTIONS: List[Tuple[str, int, int]] = [
    ("north", 0, -1),
    ("south", 0, 1),
    ("east", 1, 0),
    ("west", -1, 0),
    ("northeast", 1, -1),
    ("northwest", -1, -1),
    ("southeast", 1, 1),
    ("southwest", -1, 1),
]
_STEP_NAMES: Dict[Tuple[int, int], str] = {(dx, dy): name for name, dx, dy in _DIRECTIONS}

_PURPOSE_DESCRIPTIONS: Dict[ZonePurpose, str] = {
    ZonePurpose.SOCIAL_HUB: "This is a bustling area where people gather.",
    ZonePurpose.COMBAT_AREA: "Danger lurks here - stay alert!",
    ZonePurpose.TRANSITION: "This area connects to other regions.",
    ZonePurpose.SAFE_ZONE: "You feel safe here. A good place to rest.",
    ZonePurpose.PUZZLE_AREA: "Something here requires clever thinking.",
    ZonePurpose.BOSS_ARENA: "A powerful foe awaits in this arena.",
    ZonePurpose.SECRET_AREA: "You've discovered a hidden area!",
    ZonePurpose.RESIDENTIAL: "People make their homes here.",
    ZonePurpose.COMMERCIAL: "Merchants and shops line this area.",
    ZonePurpose.INDUSTRIAL: "The sounds of work and crafting fill the air.",
    ZonePurpose.NATURAL: "Nature dominates this untamed area.",
}

_PURPOSE_SUGGESTIONS: Dict[ZonePurpose, List[str]] = {
    ZonePurpose.SAFE_ZONE: ["Rest and recover health", "Save your game"],
    ZonePurpose.COMMERCIAL: ["Look for shops and merchants"],
    ZonePurpose.COMBAT_AREA: ["Prepare for battle", "Check equipment"],
    ZonePurpose.PUZZLE_AREA: ["Look for clues", "Examine the environment"],
}

_BEHAVIOR_LABELS: Dict[str, str] = {
    "shopkeeper": "merchant",
    "guard": "guard",
    "quest_giver": "has quest",
}


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def general_direction(from_xy: Tuple[float, float], to_xy: Tuple[float, float]) -> str:
    """Dominant-axis compass direction ('east', 'north', ...) or 'here'."""
    dx = to_xy[0] - from_xy[0]
    dy = to_xy[1] - from_xy[1]
    if abs(dx) > abs(dy):
        return "east" if dx > 0 else "west"
    if dy != 0:
        return "south" if dy > 0 else "north"
    return "here"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class MapAI:
    """Describe, search, and give directions on a zone map."""

    def __init__(self, zone_map: ZoneMap, engine: Optional[ZoneEngine] = None):
        self.map = zone_map
        self.engine = engine or ZoneEngine(zone_map)

    # Descriptions ---------------------------------------------------------------

    def describe_location(self, position: PositionLike) -> str:
        pos = as_position(position)
        zone = self.map.get_zone_at_position(pos)
        if zone is None:
            return "You are outside the known map boundaries. Nothing but void here."

        description = f"You are in {zone.name}."
        purpose_text = _PURPOSE_DESCRIPTIONS.get(zone.purpose)
        if purpose_text:
            description += f" {purpose_text}"

        if zone.environment:
            description += f" This is an {zone.environment.type} area"
            if zone.environment.lighting:
                description += f" with {zone.environment.lighting} lighting"
            description += "."

        nearby = self._nearby_entities(pos, zone, Config.NEARBY_RADIUS)
        if nearby:
            description += "\n\nNearby:"
            for entity, distance in nearby:
                description += f"\n- {self._describe_entity(entity)} ({distance} steps away)"

        exits = self.map.get_connected_zones(zone.id)
        if exits:
            description += "\n\nExits:"
            for connected in exits:
                direction = general_direction(zone.bounds.center, connected.bounds.center)
                description += f"\n- {direction} to {connected.name}"

        return description

    # Movement -------------------------------------------------------------------

    def get_movement_options(self, position: PositionLike) -> List[MovementOption]:
        """Walkable single steps from ``position`` plus nearby zone transitions."""
        pos = as_position(position)
        current_zone = self.map.get_zone_at_position(pos)
        if current_zone is None:
            return []

        options: List[MovementOption] = []
        for name, dx, dy in _DIRECTIONS:
            target = Position(x=pos.x + dx, y=pos.y + dy)
            if not self.map.is_walkable(target):
                continue
            target_zone = self.map.get_zone_at_position(target)
            description = "Clear path"
            if target_zone is not None and target_zone.id != current_zone.id:
                description = f"Leads to {target_zone.name}"
            options.append(MovementOption(direction=name, position=target, description=description))

        for connection in self.map.get_connections_from(current_zone.id):
            target_zone = self.map.get_zone(connection.to_zone_id)
            if target_zone is None:
                continue
            if manhattan_distance(pos, connection.from_point) < TRANSITION_RADIUS:
                options.append(
                    MovementOption(
                        direction=f"{connection.type.value} to {target_zone.name}",
                        position=connection.from_point,
                        description=f"{connection.type.value} connection to {target_zone.name}",
                    )
                )

        return options

    def find_path(self, start: PositionLike, end: PositionLike) -> PathResult:
        """Turn-by-turn directions between two positions.

        Consecutive steps in the same direction collapse into one instruction;
        zone changes name the connection type used.
        """
        path = self.engine.find_path(start, end)
        if not path:
            return PathResult(
                found=False,
                steps=["No path found between these locations."],
                distance=-1,
                estimated_time=-1,
            )

        steps: List[str] = []
        run_direction: Optional[str] = None
        run_length = 0

        def flush_run() -> None:
            if run_direction is None:
                return
            verb = "Head" if not steps else "Continue"
            unit = "step" if run_length == 1 else "steps"
            steps.append(f"{verb} {run_direction} for {run_length} {unit}")

        for current, following in zip(path, path[1:]):
            current_zone = self.map.get_zone_at_position(current)
            next_zone = self.map.get_zone_at_position(following)
            if current_zone and next_zone and current_zone.id != next_zone.id:
                flush_run()
                run_direction, run_length = None, 0
                connection = self.map.get_connection(current_zone.id, next_zone.id)
                kind = connection.type.value if connection else "passage"
                steps.append(f"Take the {kind} from {current_zone.name} to {next_zone.name}")
                continue

            direction = _STEP_NAMES.get(
                (_sign(following.x - current.x), _sign(following.y - current.y)), "here"
            )
            if direction == run_direction:
                run_length += 1
            else:
                flush_run()
                run_direction, run_length = direction, 1
        flush_run()

        final_zone = self.map.get_zone_at_position(end)
        if final_zone is not None:
            steps.append(f"Arrive at your destination in {final_zone.name}")

        distance = len(path) - 1
        return PathResult(
            found=True,
            steps=steps,
            distance=distance,
            estimated_time=math.ceil(distance * SECONDS_PER_STEP),
            path=path,
        )

    # Features -------------------------------------------------------------------

    def find_nearby_features(self, position: PositionLike, radius: Optional[int] = None) -> List[Feature]:
        """Entities within ``radius`` (Manhattan), nearest first.

        Entities of other zones are considered once the radius exceeds
        CROSS_ZONE_RADIUS and the other zone's center is within range.
        """
        pos = as_position(position)
        radius = Config.NEARBY_RADIUS if radius is None else radius
        current_zone = self.map.get_zone_at_position(pos)
        if current_zone is None:
            return []

        features: List[Feature] = []
        for entity, distance in self._nearby_entities(pos, current_zone, radius):
            features.append(self._feature(current_zone, entity, distance))

        if radius > CROSS_ZONE_RADIUS:
            for zone in self.map.zones:
                if zone is current_zone:
                    continue
                cx, cy = zone.bounds.center
                if abs(pos.x - cx) + abs(pos.y - cy) > radius:
                    continue
                for entity, distance in self._nearby_entities(pos, zone, radius):
                    feature = self._feature(zone, entity, distance)
                    feature.description = f"{feature.description} in {zone.name}"
                    features.append(feature)

        features.sort(key=lambda feature: feature.distance)
        return features

    def suggest_actions(self, position: PositionLike) -> List[str]:
        pos = as_position(position)
        zone = self.map.get_zone_at_position(pos)
        if zone is None:
            return ["Move to a valid location on the map"]

        suggestions: List[str] = []
        movements = self.get_movement_options(pos)
        if movements:
            suggestions.append(f"Move {movements[0].direction}")

        for feature in self.find_nearby_features(pos, TRANSITION_RADIUS):
            if feature.type == InteractionType.NPC:
                suggestions.append(f"Talk to {feature.description}")
            elif feature.type == InteractionType.SHOP:
                suggestions.append(f"Browse shop at {feature.description}")
            elif feature.type == InteractionType.CHEST:
                suggestions.append(f"Open {feature.description}")
            elif feature.type == InteractionType.DOOR:
                suggestions.append(f"Enter through {feature.description}")
            elif feature.type == InteractionType.PORTAL:
                suggestions.append(f"Use {feature.description}")
            elif feature.type == InteractionType.PICKUP:
                suggestions.append(f"Pick up {feature.description}")

        suggestions.extend(_PURPOSE_SUGGESTIONS.get(zone.purpose, []))
        return suggestions

    def search_locations(self, query: str) -> List[Zone]:
        """Zones whose name or purpose contains ``query`` (case-insensitive).

        'shop'/'merchant' also match commercial zones; 'safe'/'rest' match
        safe zones.
        """
        needle = query.lower()
        results: List[Zone] = [
            zone
            for zone in self.map.zones
            if needle in zone.name.lower() or needle in zone.purpose.value
        ]

        extra_purposes: List[ZonePurpose] = []
        if "shop" in needle or "merchant" in needle:
            extra_purposes.append(ZonePurpose.COMMERCIAL)
        if "safe" in needle or "rest" in needle:
            extra_purposes.append(ZonePurpose.SAFE_ZONE)
        for purpose in extra_purposes:
            for zone in self.map.get_zones_by_purpose(purpose):
                if all(zone is not existing for existing in results):
                    results.append(zone)

        return results

    # Helpers --------------------------------------------------------------------

    def _nearby_entities(self, pos: Position, zone: Zone, radius: int) -> List[Tuple[ZoneEntity, int]]:
        nearby = []
        for entity in zone.entities:
            distance = manhattan_distance(pos, zone.absolute_position(entity))
            if distance <= radius:
                nearby.append((entity, distance))
        nearby.sort(key=lambda item: item[1])
        return nearby

    def _feature(self, zone: Zone, entity: ZoneEntity, distance: int) -> Feature:
        keywords = [entity.type.value, entity.id]
        behavior_type = (entity.behavior or {}).get("type")
        if behavior_type:
            keywords.append(str(behavior_type))
        return Feature(
            type=self._interaction_type(entity),
            position=zone.absolute_position(entity),
            distance=distance,
            description=self._describe_entity(entity),
            keywords=keywords,
        )

    @staticmethod
    def _interaction_type(entity: ZoneEntity) -> InteractionType:
        behavior_type = (entity.behavior or {}).get("type")
        if entity.type == EntityType.NPC:
            return InteractionType.SHOP if behavior_type == "shopkeeper" else InteractionType.NPC
        if entity.type == EntityType.ITEM:
            return InteractionType.CHEST if behavior_type == "chest" else InteractionType.PICKUP
        if entity.type == EntityType.INTERACTION_POINT:
            return InteractionType.TRIGGER
        if entity.type == EntityType.STRUCTURE:
            if behavior_type == "door":
                return InteractionType.DOOR
            if behavior_type == "portal":
                return InteractionType.PORTAL
            if behavior_type == "sign":
                return InteractionType.SIGN
        return InteractionType.NONE

    @staticmethod
    def _describe_entity(entity: ZoneEntity) -> str:
        description = entity.id.replace("_", " ")
        label = _BEHAVIOR_LABELS.get((entity.behavior or {}).get("type", ""))
        if label:
            description += f" ({label})"
        return description
