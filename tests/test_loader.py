"""Tests for JSON map loading via MapLoader."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from zonemap import MapLoader, ZoneEngine
from zonemap.environment import ConnectionType, ZonePurpose

EXAMPLE_MAPS = Path(__file__).resolve().parent.parent / "examples" / "maps"


def test_loader_parses_example_map():
    loader = MapLoader(maps_dir=EXAMPLE_MAPS)
    zone_map = loader.load("terminal_town")

    assert zone_map.id == "terminal_town"
    assert [zone.id for zone in zone_map.zones][:2] == ["town_square", "market_district"]
    assert zone_map.get_zone("market_district").purpose == ZonePurpose.COMMERCIAL
    assert zone_map.get_zone("town_square").walkable_defaulted is True

    door = zone_map.get_connection("residential_row", "debug_grove")
    assert door.type == ConnectionType.DOOR
    assert door.requirements[0].value == "lost_key"
    assert zone_map.render_hints["tileSize"] == 16

    result = ZoneEngine(zone_map).validate_map()
    assert result.is_valid, [issue.message for issue in result.errors]


def test_example_map_path_crosses_three_zones():
    zone_map = MapLoader(maps_dir=EXAMPLE_MAPS).load("terminal_town")
    engine = ZoneEngine(zone_map)

    assert engine.find_zone_path("town_square", "debug_grove") == [
        "town_square",
        "residential_row",
        "debug_grove",
    ]
    path = engine.find_path((5, 5), (40, 27))
    assert path is not None
    assert all(zone_map.is_walkable(position) for position in path)


def test_list_and_info(tmp_path):
    loader = MapLoader(maps_dir=EXAMPLE_MAPS)
    assert "terminal_town" in loader.list_maps()

    info = loader.get_map_info("terminal_town")
    assert info["name"] == "Terminal Town"
    assert info["num_zones"] == 4
    assert info["num_connections"] == 4

    (tmp_path / "_draft.json").write_text("{}")
    assert MapLoader(maps_dir=tmp_path).list_maps() == []
    assert MapLoader(maps_dir=tmp_path / "missing").list_maps() == []


def test_save_round_trip(tmp_path):
    original = MapLoader(maps_dir=EXAMPLE_MAPS).load("terminal_town")
    loader = MapLoader(maps_dir=tmp_path)

    path = loader.save(original, "copy")
    payload = json.loads(path.read_text())
    assert payload["zones"][0]["walkableAreas"] == []
    assert "fromZoneId" in payload["connections"][0]

    reloaded = loader.load("copy")
    assert [zone.id for zone in reloaded.zones] == [zone.id for zone in original.zones]
    assert reloaded.connections == original.connections
    assert reloaded.to_state() == original.to_state()


def test_missing_map_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        MapLoader(maps_dir=tmp_path).load("nowhere")


def test_parse_rejects_incomplete_definitions():
    loader = MapLoader()

    with pytest.raises(ValueError, match="missing required fields"):
        loader.parse({"id": "x", "zones": []})
    with pytest.raises(ValueError, match="must be a list"):
        loader.parse({"id": "x", "name": "X", "zones": {}})
    with pytest.raises(ValueError, match="JSON object"):
        loader.parse([])
    with pytest.raises(ValidationError):
        loader.parse(
            {
                "id": "x",
                "name": "X",
                "zones": [{"id": "z", "name": "Z", "purpose": "lava_lake", "bounds": {"x": 0, "y": 0, "width": 1, "height": 1}}],
            }
        )
