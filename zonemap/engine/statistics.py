"""Aggregate counts over a zone map."""

from __future__ import annotations

from typing import Dict

from zonemap.environment import ZoneMap
from zonemap.schemas import MapStatistics


def compute_map_statistics(zone_map: ZoneMap) -> MapStatistics:
    """Count zones by purpose, connections, and entities by type. Pure; mutates nothing."""

    zones_by_purpose: Dict[str, int] = {}
    entities_by_type: Dict[str, int] = {}
    total_entities = 0

    for zone in zone_map.zones:
        purpose = zone.purpose.value
        zones_by_purpose[purpose] = zones_by_purpose.get(purpose, 0) + 1
        total_entities += len(zone.entities)
        for entity in zone.entities:
            entity_type = entity.type.value
            entities_by_type[entity_type] = entities_by_type.get(entity_type, 0) + 1

    total_zones = len(zone_map.zones)
    total_connections = len(zone_map.connections)
    return MapStatistics(
        total_zones=total_zones,
        zones_by_purpose=zones_by_purpose,
        total_connections=total_connections,
        average_connections=total_connections / total_zones if total_zones else 0.0,
        total_entities=total_entities,
        entities_by_type=entities_by_type,
    )
