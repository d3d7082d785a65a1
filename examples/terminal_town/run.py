"""Terminal Town walkthrough: load a zone map, validate it, and query it.

    uv run python examples/terminal_town/run.py
    uv run python examples/terminal_town/run.py --from 5,5 --to 45,15

Set ZONEMAP_VERBOSE=1 to see engine trace lines (zone routes, search budget
warnings, validation summaries).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Tuple

from zonemap import MapAI, MapLoader, ZoneEngine
from zonemap.config import Config
from zonemap.logging_utils import (
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
    LOG_TAG_WARNING,
    log_error,
    log_info,
    log_success,
    log_warning,
)

MAPS_DIR = Path(__file__).resolve().parent.parent / "maps"


def parse_point(raw: str) -> Tuple[int, int]:
    x, y = raw.split(",")
    return int(x), int(y)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--map", default="terminal_town", help="Map name in examples/maps")
    parser.add_argument("--from", dest="start", type=parse_point, default=(5, 5))
    parser.add_argument("--to", dest="end", type=parse_point, default=(40, 27))
    args = parser.parse_args()

    Config.validate()
    log_info(f"{LOG_TAG_INFO} {Config.display()}")

    loader = MapLoader(MAPS_DIR)
    zone_map = loader.load(args.map)
    log_info(f"{LOG_TAG_INFO} {zone_map.describe()}")

    engine = ZoneEngine(zone_map)
    result = engine.validate_map()
    for issue in result.errors:
        log_error(f"{LOG_TAG_ERROR} {issue.location}: {issue.message}")
    for issue in result.warnings:
        log_warning(f"{LOG_TAG_WARNING} {issue.location}: {issue.message}")
    if not result.is_valid:
        return
    log_success(f"{LOG_TAG_SUCCESS} Map {zone_map.id} is valid")

    stats = engine.get_map_statistics()
    log_info(
        f"{LOG_TAG_INFO} {stats.total_zones} zones, {stats.total_connections} connections, "
        f"{stats.total_entities} entities"
    )

    ai = MapAI(zone_map, engine)
    print()
    print(ai.describe_location(args.start))
    print()
    for action in ai.suggest_actions(args.start):
        print(f"  * {action}")

    directions = ai.find_path(args.start, args.end)
    print()
    if not directions.found:
        log_warning(f"{LOG_TAG_WARNING} {directions.steps[0]}")
        return
    for number, step in enumerate(directions.steps, start=1):
        print(f"  {number}. {step}")
    log_success(
        f"{LOG_TAG_SUCCESS} {directions.distance} steps, about {directions.estimated_time}s"
    )


if __name__ == "__main__":
    main()
