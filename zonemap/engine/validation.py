"""Structural, referential, and connectivity validation for zone maps."""

from __future__ import annotations

from typing import List

from zonemap.environment import ZoneMap
from zonemap.logging_utils import LOG_TAG_ENGINE, trace
from zonemap.schemas import (
    ValidationErrorType,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)

from .pathfinding import reachable_zone_ids


def _error(kind: ValidationErrorType, location: str, message: str, fix: str | None = None) -> ValidationIssue:
    return ValidationIssue(
        type=kind,
        location=location,
        message=message,
        severity=ValidationSeverity.ERROR,
        suggested_fix=fix,
    )


def _warning(kind: ValidationErrorType, location: str, message: str, fix: str | None = None) -> ValidationIssue:
    return ValidationIssue(
        type=kind,
        location=location,
        message=message,
        severity=ValidationSeverity.WARNING,
        suggested_fix=fix,
    )


def find_unreachable_zones(zone_map: ZoneMap) -> List[str]:
    """Ids of zones that cannot be reached from the first declared zone.

    Returned in declaration order, each id once. Maps with fewer than two
    zones have nothing to reach.
    """

    if len(zone_map.zones) <= 1:
        return []

    start_id = zone_map.zones[0].id
    reachable = reachable_zone_ids(zone_map, start_id)
    unreachable: List[str] = []
    for zone in zone_map.zones:
        if zone.id not in reachable and zone.id not in unreachable:
            unreachable.append(zone.id)
    return unreachable


def validate_map(zone_map: ZoneMap) -> ValidationResult:
    """Run every map check and collect the findings.

    Checks, in order:
    1. Duplicate zone ids (error)
    2. Per zone: walkable areas left empty by the author (warning), overlapping
       blocked areas (warning, one per pair), entities placed outside the
       zone bounds (error)
    3. Zones whose bounds overlap an earlier zone (warning); the earlier zone
       owns the shared positions
    4. Per connection: unknown from/to zone ids (reference error), from/to
       points outside their zone bounds (error)
    5. Zones unreachable from zone 0 (pathfinding warning)

    ``is_valid`` is True whenever there are no errors.
    """

    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    seen_ids = set()
    for zone in zone_map.zones:
        if zone.id in seen_ids:
            errors.append(
                _error(
                    ValidationErrorType.STRUCTURAL,
                    f"Zone: {zone.id}",
                    f"Duplicate zone ID: {zone.id}",
                )
            )
        seen_ids.add(zone.id)

    for zone in zone_map.zones:
        location = f"Zone: {zone.id}"

        if zone.walkable_defaulted:
            warnings.append(
                _warning(
                    ValidationErrorType.STRUCTURAL,
                    location,
                    "Zone has no explicitly defined walkable areas",
                    "Add walkableAreas or the entire zone will be walkable",
                )
            )

        blocked = zone.blocked_areas
        for i in range(len(blocked)):
            for j in range(i + 1, len(blocked)):
                if blocked[i].overlaps(blocked[j]):
                    warnings.append(
                        _warning(
                            ValidationErrorType.STRUCTURAL,
                            location,
                            f"Overlapping blocked areas detected (#{i} and #{j})",
                        )
                    )

        for entity in zone.entities:
            if not zone.is_in_bounds(zone.absolute_position(entity)):
                errors.append(
                    _error(
                        ValidationErrorType.STRUCTURAL,
                        f"Zone: {zone.id}, Entity: {entity.id}",
                        "Entity position is outside zone bounds",
                        "Entity positions are relative to the zone origin",
                    )
                )

    zones = zone_map.zones
    for i in range(len(zones)):
        for j in range(i + 1, len(zones)):
            if zones[i].bounds.overlaps(zones[j].bounds):
                warnings.append(
                    _warning(
                        ValidationErrorType.STRUCTURAL,
                        f"Zone: {zones[j].id}",
                        f"Zone bounds overlap earlier zone {zones[i].id}; "
                        f"{zones[i].id} owns the shared positions",
                    )
                )

    for index, conn in enumerate(zone_map.connections):
        location = f"Connection {index}"
        from_zone = zone_map.get_zone(conn.from_zone_id)
        to_zone = zone_map.get_zone(conn.to_zone_id)

        if from_zone is None:
            errors.append(
                _error(
                    ValidationErrorType.REFERENCE,
                    location,
                    f"Invalid fromZoneId: {conn.from_zone_id}",
                )
            )
        if to_zone is None:
            errors.append(
                _error(
                    ValidationErrorType.REFERENCE,
                    location,
                    f"Invalid toZoneId: {conn.to_zone_id}",
                )
            )

        if from_zone is not None and not from_zone.is_in_bounds(conn.from_point):
            errors.append(
                _error(
                    ValidationErrorType.STRUCTURAL,
                    location,
                    "Connection fromPoint is outside source zone",
                )
            )
        if to_zone is not None and not to_zone.is_in_bounds(conn.to_point):
            errors.append(
                _error(
                    ValidationErrorType.STRUCTURAL,
                    location,
                    "Connection toPoint is outside target zone",
                )
            )

    for zone_id in find_unreachable_zones(zone_map):
        warnings.append(
            _warning(
                ValidationErrorType.PATHFINDING,
                f"Zone: {zone_id}",
                "Zone is not reachable from other zones",
                "Add connections to this zone",
            )
        )

    trace(
        f"  {LOG_TAG_ENGINE} [ZoneEngine] Validated {zone_map.id}: "
        f"{len(errors)} errors, {len(warnings)} warnings"
    )
    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
