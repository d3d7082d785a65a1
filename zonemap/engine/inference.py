"""Bootstrap zone suggestions from a legacy tile grid, and the reverse.

``analyze_tile_map`` groups 4-connected runs of the same tile type into
regions, drops tiny regions as noise, and proposes one rectangular zone per
region, merging same-purpose neighbours. ``rasterize_map`` goes the other way
and samples a zone map into a coarse walkable/blocked tile grid.

Both are O(grid area) batch operations; never call them per frame.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Mapping
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Set, Tuple

from zonemap.config import Config
from zonemap.environment import Rectangle, ZoneMap, ZonePurpose
from zonemap.logging_utils import LOG_TAG_ENGINE, trace
from zonemap.schemas import SuggestedZone

Cell = Tuple[int, int]
TileGrid = Sequence[Sequence[Any]]

TILE_PURPOSES: Dict[str, ZonePurpose] = {
    "grass": ZonePurpose.NATURAL,
    "stone": ZonePurpose.RESIDENTIAL,
    "wood": ZonePurpose.COMMERCIAL,
    "water": ZonePurpose.NATURAL,
    "sand": ZonePurpose.NATURAL,
    "brick": ZonePurpose.INDUSTRIAL,
}


def tile_type(cell: Any) -> Optional[str]:
    """Read a tile's type from a ``{"type": ...}`` mapping, a ``.type`` attribute, or a bare string."""
    if isinstance(cell, str):
        return cell
    if isinstance(cell, Mapping):
        return cell.get("type")
    return getattr(cell, "type", None)


def suggest_purpose(type_name: Optional[str]) -> ZonePurpose:
    return TILE_PURPOSES.get(type_name, ZonePurpose.TRANSITION) if type_name else ZonePurpose.TRANSITION


def _in_grid(tiles: TileGrid, x: int, y: int) -> bool:
    # Rows may be ragged
    return 0 <= y < len(tiles) and 0 <= x < len(tiles[y])


def flood_fill_region(
    tiles: TileGrid,
    start_x: int,
    start_y: int,
    visited: Set[Cell],
    region_key: Callable[[Optional[str]], Hashable],
) -> List[Cell]:
    """Collect the 4-connected cells sharing the seed cell's region key.

    Iterative (explicit stack) so large regions cannot hit the recursion
    limit. ``visited`` is shared across the whole scan; every cell lands in
    exactly one region.
    """

    target = region_key(tile_type(tiles[start_y][start_x]))
    region: List[Cell] = []
    stack: List[Cell] = [(start_x, start_y)]

    while stack:
        x, y = stack.pop()
        if (x, y) in visited or not _in_grid(tiles, x, y):
            continue
        if region_key(tile_type(tiles[y][x])) != target:
            continue
        visited.add((x, y))
        region.append((x, y))
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))

    return region


def region_bounds(cells: List[Cell], tile_size: int) -> Rectangle:
    """Pixel-space bounding box of a set of tile cells."""
    xs = [x for x, _ in cells]
    ys = [y for _, y in cells]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return Rectangle(
        x=min_x * tile_size,
        y=min_y * tile_size,
        width=(max_x - min_x + 1) * tile_size,
        height=(max_y - min_y + 1) * tile_size,
    )


def dominant_tile_type(tiles: TileGrid, cells: List[Cell]) -> Optional[str]:
    """Most frequent tile type in the region; first seen wins a tie."""
    counts = Counter(tile_type(tiles[y][x]) for x, y in cells)
    return counts.most_common(1)[0][0]


def merge_adjacent_suggestions(suggestions: List[SuggestedZone]) -> List[SuggestedZone]:
    """Fold same-purpose, edge-adjacent suggestions into their union box.

    Repeats until no pair merges, so a chain A-B-C collapses fully even when A
    and C only become adjacent after B has been absorbed. Merged suggestions
    keep the highest confidence and the summed cell count.
    """

    merged = list(suggestions)
    changed = True
    while changed:
        changed = False
        result: List[SuggestedZone] = []
        used: Set[int] = set()
        for i, current in enumerate(merged):
            if i in used:
                continue
            used.add(i)
            for j in range(i + 1, len(merged)):
                if j in used:
                    continue
                other = merged[j]
                if (
                    other.suggested_purpose == current.suggested_purpose
                    and current.bounds.is_adjacent(other.bounds)
                ):
                    current = current.model_copy(
                        update={
                            "bounds": current.bounds.union(other.bounds),
                            "confidence": max(current.confidence, other.confidence),
                            "cell_count": current.cell_count + other.cell_count,
                            "detected_entities": list(
                                dict.fromkeys(current.detected_entities + other.detected_entities)
                            ),
                        }
                    )
                    used.add(j)
                    changed = True
            result.append(current)
        merged = result
    return merged


def analyze_tile_map(
    tiles: TileGrid,
    tile_size: Optional[int] = None,
    *,
    min_region_size: Optional[int] = None,
    confidence: Optional[float] = None,
    region_key: Optional[Callable[[Optional[str]], Hashable]] = None,
) -> List[SuggestedZone]:
    """Suggest zones for a 2D tile grid (``tiles[y][x]``).

    Args:
        tiles: Rows of cells; each cell is a mapping with a ``type`` key, an
            object with a ``type`` attribute, or a bare type string
        tile_size: Pixel size of a tile (defaults to Config.DEFAULT_TILE_SIZE)
        min_region_size: Regions with fewer cells are dropped as noise
            (defaults to Config.MIN_REGION_SIZE, i.e. 10)
        confidence: Confidence given to each raw suggestion
            (defaults to Config.SUGGESTION_CONFIDENCE, i.e. 0.7)
        region_key: Maps a tile type to the value flood fill groups on.
            Defaults to the type itself, which keeps every region single-type.
            A coarser key (e.g. ``TILE_PURPOSES.get``) yields mixed regions whose
            purpose comes from their dominant tile type.

    Returns:
        Suggestions in scan order (row-major by seed cell), after merging
    """

    tile_size = tile_size or Config.DEFAULT_TILE_SIZE
    min_region_size = min_region_size if min_region_size is not None else Config.MIN_REGION_SIZE
    confidence = confidence if confidence is not None else Config.SUGGESTION_CONFIDENCE
    key = region_key or (lambda type_name: type_name)

    suggestions: List[SuggestedZone] = []
    visited: Set[Cell] = set()

    for y, row in enumerate(tiles):
        for x in range(len(row)):
            if (x, y) in visited:
                continue
            region = flood_fill_region(tiles, x, y, visited, key)
            if len(region) < min_region_size:
                continue
            suggestions.append(
                SuggestedZone(
                    bounds=region_bounds(region, tile_size),
                    suggested_purpose=suggest_purpose(dominant_tile_type(tiles, region)),
                    confidence=confidence,
                    cell_count=len(region),
                )
            )

    merged = merge_adjacent_suggestions(suggestions)
    trace(
        f"  {LOG_TAG_ENGINE} [ZoneEngine] Tile analysis: {len(suggestions)} regions, "
        f"{len(merged)} suggestions after merge"
    )
    return merged


def rasterize_map(zone_map: ZoneMap, tile_size: Optional[int] = None) -> List[List[Dict[str, Any]]]:
    """Sample a zone map into a tile grid covering the union of zone bounds.

    Each tile is walkable when its top-left pixel is walkable on the map.
    Cells come back as ``{"type": "floor" | "wall", "walkable": bool}``.
    """

    tile_size = tile_size or Config.DEFAULT_TILE_SIZE
    if not zone_map.zones:
        return []

    min_x = min(zone.bounds.x for zone in zone_map.zones)
    min_y = min(zone.bounds.y for zone in zone_map.zones)
    max_x = max(zone.bounds.right for zone in zone_map.zones)
    max_y = max(zone.bounds.bottom for zone in zone_map.zones)

    columns = math.ceil((max_x - min_x) / tile_size)
    rows = math.ceil((max_y - min_y) / tile_size)

    grid: List[List[Dict[str, Any]]] = []
    for row in range(rows):
        cells: List[Dict[str, Any]] = []
        for col in range(columns):
            walkable = zone_map.is_walkable((min_x + col * tile_size, min_y + row * tile_size))
            cells.append({"type": "floor" if walkable else "wall", "walkable": walkable})
        grid.append(cells)
    return grid
