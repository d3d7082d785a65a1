"""Tests for the runtime Zone container and geometry models."""

import pytest
from pydantic import ValidationError

from zonemap.environment import (
    EntityType,
    Position,
    Rectangle,
    Zone,
    ZoneEntity,
    ZoneEnvironment,
    ZonePurpose,
    ZoneState,
    as_position,
)


def _market_zone() -> Zone:
    return Zone(
        id="market",
        name="Market",
        purpose=ZonePurpose.COMMERCIAL,
        bounds=Rectangle(x=10, y=10, width=10, height=10),
        walkable_areas=[Rectangle(x=10, y=10, width=10, height=10)],
        blocked_areas=[Rectangle(x=12, y=12, width=2, height=2)],
        entities=[
            ZoneEntity(
                type=EntityType.NPC,
                id="merchant",
                position=Position(x=5, y=5),
                behavior={"type": "shopkeeper"},
            ),
            ZoneEntity(type=EntityType.ITEM, id="crate", position=Position(x=1, y=1)),
        ],
        environment=ZoneEnvironment(type="outdoor", lighting="bright"),
    )


def test_rectangle_half_open_containment():
    rect = Rectangle(x=0, y=0, width=10, height=5)
    assert rect.contains((0, 0))
    assert rect.contains((9, 4))
    assert not rect.contains((10, 4))
    assert not rect.contains((9, 5))
    assert not rect.contains((-1, 0))

    empty = Rectangle(x=3, y=3, width=0, height=4)
    assert not empty.contains((3, 3))


def test_rectangle_rejects_negative_size():
    with pytest.raises(ValidationError):
        Rectangle(x=0, y=0, width=-1, height=2)


def test_rectangle_overlap_and_adjacency():
    left = Rectangle(x=0, y=0, width=10, height=10)
    right = Rectangle(x=10, y=0, width=5, height=10)
    corner = Rectangle(x=10, y=10, width=5, height=5)
    inside = Rectangle(x=2, y=2, width=2, height=2)

    assert not left.overlaps(right)  # shared edge only
    assert left.overlaps(inside)
    assert left.is_adjacent(right)
    assert right.is_adjacent(left)
    assert not left.is_adjacent(corner)  # corner contact only

    union = left.union(right)
    assert (union.x, union.y, union.width, union.height) == (0, 0, 15, 10)


def test_as_position_accepts_several_shapes():
    expected = Position(x=3, y=4)
    assert as_position((3, 4)) == expected
    assert as_position([3, 4]) == expected
    assert as_position({"x": 3, "y": 4}) == expected
    assert as_position(expected) is expected


def test_walkability_requires_bounds_walkable_and_not_blocked():
    zone = _market_zone()

    assert zone.is_walkable((10, 10))
    assert not zone.is_walkable((12, 12))  # blocked area wins
    assert not zone.is_walkable((13, 13))
    assert zone.is_walkable((14, 14))
    assert not zone.is_walkable((20, 10))  # outside bounds

    # A walkable area spilling past the bounds does not extend the zone
    zone.walkable_areas.append(Rectangle(x=18, y=10, width=10, height=2))
    assert not zone.is_walkable((22, 10))


def test_empty_walkable_areas_default_to_bounds():
    zone = Zone(
        id="plaza",
        name="Plaza",
        purpose="social_hub",
        bounds=Rectangle(x=0, y=0, width=3, height=2),
    )

    assert zone.purpose is ZonePurpose.SOCIAL_HUB
    assert zone.walkable_defaulted is True
    assert zone.walkable_areas == [zone.bounds]
    assert zone.is_walkable((2, 1))

    # Round-trips as an empty list so the authored intent survives a save
    assert zone.to_state().walkable_areas == []


def test_get_walkable_positions_skips_blocked_and_duplicates():
    zone = Zone(
        id="hall",
        name="Hall",
        purpose=ZonePurpose.TRANSITION,
        bounds=Rectangle(x=0, y=0, width=3, height=3),
        walkable_areas=[
            Rectangle(x=0, y=0, width=3, height=3),
            Rectangle(x=1, y=1, width=2, height=2),  # fully overlaps the first
        ],
        blocked_areas=[Rectangle(x=1, y=1, width=1, height=1)],
    )

    positions = zone.get_walkable_positions()
    assert len(positions) == 8
    assert len(set(positions)) == 8
    assert Position(x=1, y=1) not in positions
    assert all(zone.is_walkable(pos) for pos in positions)


def test_entity_queries_and_mutation():
    zone = _market_zone()

    npcs = zone.get_entities_by_type(EntityType.NPC)
    assert [entity.id for entity in npcs] == ["merchant"]
    assert zone.get_entities_by_type("item")[0].id == "crate"
    assert zone.get_entity("missing") is None

    zone.add_entity(ZoneEntity(type="enemy", id="rat", position={"x": 2, "y": 2}))
    assert zone.get_entity("rat").type is EntityType.ENEMY

    assert zone.update_entity_position("rat", (4, 4)) is True
    assert zone.get_entity("rat").position == Position(x=4, y=4)
    assert zone.update_entity_position("ghost", (0, 0)) is False

    assert zone.remove_entity("rat") is True
    assert zone.remove_entity("rat") is False
    assert zone.get_entity("rat") is None


def test_entity_positions_are_relative_to_zone_origin():
    zone = _market_zone()
    merchant = zone.get_entity("merchant")
    assert zone.absolute_position(merchant) == Position(x=15, y=15)


def test_zone_describe_and_purpose():
    zone = _market_zone()

    assert zone.has_purpose(ZonePurpose.COMMERCIAL)
    assert zone.has_purpose("commercial")
    assert not zone.has_purpose(ZonePurpose.NATURAL)

    description = zone.describe()
    assert description.startswith("Market is a commercial zone (outdoor, bright lighting)")
    assert "Contains 2 entities including 1 NPCs" in description


def test_distance_from_center():
    zone = _market_zone()
    assert zone.distance_from_center((15, 15)) == 0
    assert zone.distance_from_center((18, 19)) == pytest.approx(5.0)


def test_zone_state_accepts_camel_case_keys():
    state = ZoneState.model_validate(
        {
            "id": "yard",
            "name": "Yard",
            "purpose": "natural",
            "bounds": {"x": 0, "y": 0, "width": 4, "height": 4},
            "walkableAreas": [{"x": 0, "y": 0, "width": 2, "height": 4}],
            "blockedAreas": [],
        }
    )
    zone = Zone.from_state(state)

    assert zone.walkable_defaulted is False
    assert zone.is_walkable((1, 3))
    assert not zone.is_walkable((3, 3))
    assert zone.to_state().walkable_areas == state.walkable_areas


def test_zone_behaviors_by_trigger():
    state = ZoneState(
        id="arena",
        name="Arena",
        purpose=ZonePurpose.COMBAT_AREA,
        bounds=Rectangle(x=0, y=0, width=5, height=5),
        behaviors=[
            {"type": "spawn", "trigger": {"type": "player_enter"}, "action": {"type": "spawn_enemies"}},
            {"type": "ambient", "trigger": {"type": "time_period"}, "action": {}},
        ],
    )
    zone = Zone.from_state(state)

    matches = zone.get_behaviors_by_trigger("player_enter")
    assert [behavior.type for behavior in matches] == ["spawn"]
    assert zone.get_behaviors_by_trigger("unknown") == []
