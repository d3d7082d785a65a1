"""Tests for tile-grid zone inference and map rasterization."""

from types import SimpleNamespace

from zonemap.engine import TILE_PURPOSES, ZoneEngine, analyze_tile_map, merge_adjacent_suggestions, rasterize_map
from zonemap.environment import Rectangle, Zone, ZoneMap, ZonePurpose
from zonemap.schemas import SuggestedZone


def _grid(rows):
    """Build a tile grid from strings; each character maps to a tile type."""
    legend = {"g": "grass", "s": "stone", "w": "wood", "b": "brick", "~": "water", "?": "lava"}
    return [[{"type": legend[char]} for char in row] for row in rows]


def test_tile_purpose_table():
    assert TILE_PURPOSES["grass"] == ZonePurpose.NATURAL
    assert TILE_PURPOSES["stone"] == ZonePurpose.RESIDENTIAL
    assert TILE_PURPOSES["wood"] == ZonePurpose.COMMERCIAL
    assert TILE_PURPOSES["water"] == ZonePurpose.NATURAL
    assert TILE_PURPOSES["sand"] == ZonePurpose.NATURAL
    assert TILE_PURPOSES["brick"] == ZonePurpose.INDUSTRIAL


def test_uniform_grid_becomes_one_zone_in_pixel_space():
    tiles = _grid(["ssss"] * 4)

    suggestions = analyze_tile_map(tiles, tile_size=16)

    assert len(suggestions) == 1
    suggestion = suggestions[0]
    assert suggestion.bounds == Rectangle(x=0, y=0, width=64, height=64)
    assert suggestion.suggested_purpose == ZonePurpose.RESIDENTIAL
    assert suggestion.confidence == 0.7
    assert suggestion.cell_count == 16


def test_small_regions_are_dropped_as_noise():
    # 9 wood tiles sit inside 16 grass tiles: wood is below the threshold
    tiles = _grid(
        [
            "gggggg",
            "gwwwgg",
            "gwwwgg",
            "gwwwgg",
        ]
    )

    suggestions = analyze_tile_map(tiles, tile_size=1)
    assert [s.suggested_purpose for s in suggestions] == [ZonePurpose.NATURAL]
    assert suggestions[0].cell_count == 15


def test_region_of_exactly_minimum_size_is_kept():
    tiles = _grid(["wwwww", "wwwww"])
    suggestions = analyze_tile_map(tiles, tile_size=1)
    assert len(suggestions) == 1
    assert suggestions[0].suggested_purpose == ZonePurpose.COMMERCIAL


def test_unknown_tile_types_become_transition():
    tiles = _grid(["?????"] * 2)
    suggestions = analyze_tile_map(tiles, tile_size=8)
    assert suggestions[0].suggested_purpose == ZonePurpose.TRANSITION


def test_distinct_purposes_stay_separate():
    tiles = _grid(
        [
            "sssssbbbbb",
            "sssssbbbbb",
        ]
    )

    suggestions = analyze_tile_map(tiles, tile_size=10)
    purposes = [s.suggested_purpose for s in suggestions]

    assert purposes == [ZonePurpose.RESIDENTIAL, ZonePurpose.INDUSTRIAL]
    assert suggestions[0].bounds == Rectangle(x=0, y=0, width=50, height=20)
    assert suggestions[1].bounds == Rectangle(x=50, y=0, width=50, height=20)


def test_same_purpose_neighbours_merge():
    # Grass and water are both natural: two regions fold into one suggestion
    tiles = _grid(
        [
            "ggggg~~~~~",
            "ggggg~~~~~",
        ]
    )

    suggestions = analyze_tile_map(tiles, tile_size=1)

    assert len(suggestions) == 1
    assert suggestions[0].bounds == Rectangle(x=0, y=0, width=10, height=2)
    assert suggestions[0].cell_count == 20


def test_region_key_groups_mixed_tiles_by_dominant_type():
    tiles = _grid(
        [
            "ggggg",
            "gg~gg",
            "ggggg",
        ]
    )

    # Grouping on purpose puts water and grass in one region
    suggestions = analyze_tile_map(tiles, tile_size=1, region_key=TILE_PURPOSES.get)
    assert len(suggestions) == 1
    assert suggestions[0].cell_count == 15
    assert suggestions[0].suggested_purpose == ZonePurpose.NATURAL


def test_analysis_is_idempotent_and_accepts_any_tile_shape():
    rows = ["ssssss", "ssssss"]
    dict_tiles = _grid(rows)
    str_tiles = [["stone"] * 6 for _ in rows]
    obj_tiles = [[SimpleNamespace(type="stone") for _ in range(6)] for _ in rows]

    first = analyze_tile_map(dict_tiles, tile_size=4)
    assert analyze_tile_map(dict_tiles, tile_size=4) == first
    assert analyze_tile_map(str_tiles, tile_size=4) == first
    assert analyze_tile_map(obj_tiles, tile_size=4) == first


def test_empty_and_ragged_grids():
    assert analyze_tile_map([], tile_size=16) == []

    ragged = [["grass"] * 6, ["grass"] * 4, ["grass"] * 2]
    suggestions = analyze_tile_map(ragged, tile_size=1)
    assert len(suggestions) == 1
    assert suggestions[0].cell_count == 12
    assert suggestions[0].bounds == Rectangle(x=0, y=0, width=6, height=3)


def test_merge_runs_until_stable():
    def suggestion(x, confidence):
        return SuggestedZone(
            bounds=Rectangle(x=x, y=0, width=10, height=10),
            suggested_purpose=ZonePurpose.NATURAL,
            confidence=confidence,
            cell_count=1,
        )

    # A and C only touch once B has been folded into one of them
    merged = merge_adjacent_suggestions([suggestion(0, 0.5), suggestion(20, 0.6), suggestion(10, 0.9)])

    assert len(merged) == 1
    assert merged[0].bounds == Rectangle(x=0, y=0, width=30, height=10)
    assert merged[0].confidence == 0.9
    assert merged[0].cell_count == 3


def test_corner_contact_does_not_merge():
    first = SuggestedZone(
        bounds=Rectangle(x=0, y=0, width=10, height=10),
        suggested_purpose=ZonePurpose.NATURAL,
        confidence=0.7,
    )
    second = first.model_copy(update={"bounds": Rectangle(x=10, y=10, width=10, height=10)})

    assert len(merge_adjacent_suggestions([first, second])) == 2


def test_rasterize_map_samples_walkability():
    zone_map = ZoneMap(
        id="raster",
        name="Raster",
        zones=[
            Zone(
                id="room",
                name="Room",
                purpose=ZonePurpose.SAFE_ZONE,
                bounds=Rectangle(x=0, y=0, width=32, height=16),
                blocked_areas=[Rectangle(x=16, y=0, width=16, height=16)],
            )
        ],
    )

    grid = rasterize_map(zone_map, tile_size=16)
    assert grid == [
        [{"type": "floor", "walkable": True}, {"type": "wall", "walkable": False}],
    ]
    assert ZoneEngine(zone_map).rasterize(16) == grid
    assert rasterize_map(ZoneMap(id="empty", name="Empty")) == []


def test_engine_analyze_tile_map_uses_config_defaults():
    tiles = _grid(["bbbbb", "bbbbb"])
    engine = ZoneEngine(ZoneMap(id="m", name="M"))

    suggestions = engine.analyze_tile_map(tiles)
    assert suggestions[0].bounds.width == 5 * 16
    assert suggestions[0].suggested_purpose == ZonePurpose.INDUSTRIAL
