"""Tests for aggregate map statistics."""

import pytest

from zonemap import ZoneEngine
from zonemap.environment import (
    ConnectionType,
    EntityType,
    Position,
    Rectangle,
    Zone,
    ZoneConnection,
    ZoneEntity,
    ZoneMap,
    ZonePurpose,
)


def test_statistics_count_zones_connections_and_entities():
    zone_map = ZoneMap(
        id="stats",
        name="Stats",
        zones=[
            Zone(
                id="a",
                name="A",
                purpose=ZonePurpose.COMMERCIAL,
                bounds=Rectangle(x=0, y=0, width=10, height=10),
                entities=[
                    ZoneEntity(type=EntityType.NPC, id="vendor", position=Position(x=1, y=1)),
                    ZoneEntity(type=EntityType.ITEM, id="coin", position=Position(x=2, y=2)),
                ],
            ),
            Zone(
                id="b",
                name="B",
                purpose=ZonePurpose.COMMERCIAL,
                bounds=Rectangle(x=10, y=0, width=10, height=10),
                entities=[ZoneEntity(type=EntityType.NPC, id="porter", position=Position(x=1, y=1))],
            ),
            Zone(
                id="c",
                name="C",
                purpose=ZonePurpose.NATURAL,
                bounds=Rectangle(x=20, y=0, width=10, height=10),
            ),
        ],
        connections=[
            ZoneConnection(
                from_zone_id="a",
                to_zone_id="b",
                type=ConnectionType.ADJACENT,
                bidirectional=True,
                from_point=Position(x=9, y=5),
                to_point=Position(x=10, y=5),
            ),
        ],
    )

    stats = ZoneEngine(zone_map).get_map_statistics()

    assert stats.total_zones == 3
    assert stats.zones_by_purpose == {"commercial": 2, "natural": 1}
    # Stored connections only; the synthesized reverse edge is not counted
    assert stats.total_connections == 1
    assert stats.average_connections == pytest.approx(1 / 3)
    assert stats.total_entities == 3
    assert stats.entities_by_type == {"npc": 2, "item": 1}


def test_statistics_for_empty_map():
    stats = ZoneEngine(ZoneMap(id="empty", name="Empty")).get_map_statistics()

    assert stats.total_zones == 0
    assert stats.average_connections == 0.0
    assert stats.zones_by_purpose == {}
    assert stats.entities_by_type == {}
