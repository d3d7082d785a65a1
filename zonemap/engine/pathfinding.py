"""Intra-zone A*, zone-graph BFS, and cross-zone path stitching."""

from __future__ import annotations

import heapq
from collections import deque
from itertools import count
from typing import Dict, List, Optional, Set, Tuple

from zonemap.environment import Position, PositionLike, Zone, ZoneMap, as_position
from zonemap.logging_utils import LOG_TAG_ENGINE, LOG_TAG_WARNING, Color, trace

Cell = Tuple[int, int]

# N, E, S, W, NE, SE, SW, NW. Every step costs 1, diagonal or not.
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = (
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
    (1, -1),
    (1, 1),
    (-1, 1),
    (-1, -1),
)


class ZoneGraphInconsistencyError(Exception):
    """Raised when the zone graph and the connection records disagree.

    BFS reported a hop between two zones but no connection record backs it.
    This signals corrupt map data, not an unreachable destination.
    """

    def __init__(self, *, from_zone_id: str, to_zone_id: str) -> None:
        self.from_zone_id = from_zone_id
        self.to_zone_id = to_zone_id
        message = (
            f"Zone graph lists {from_zone_id} -> {to_zone_id} as adjacent "
            "but no connection record links them.\n\n"
            "Remediation tips:\n"
            "  - Run ZoneEngine.validate_map() to find dangling connections\n"
            "  - Rebuild the map through add_zone/add_connection instead of editing lists in place"
        )
        super().__init__(message)


def chebyshev_distance(a: Cell, b: Cell) -> int:
    """Exact step count between two cells on an open 8-connected unit-cost grid."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def _reconstruct(parents: Dict[Cell, Optional[Cell]], goal: Cell) -> List[Position]:
    path: List[Position] = []
    cell: Optional[Cell] = goal
    while cell is not None:
        path.append(Position(x=cell[0], y=cell[1]))
        cell = parents[cell]
    path.reverse()
    return path


def find_path_in_zone(
    zone: Zone,
    start: PositionLike,
    goal: PositionLike,
    *,
    max_search_nodes: Optional[int] = None,
) -> Optional[List[Position]]:
    """Return positions from start to goal (inclusive) inside ``zone`` using A*.

    Moves in 8 directions at unit cost and may cut diagonally between two
    blocked orthogonal cells. The open set is a heap keyed on
    ``(f, h, sequence)``: among equal ``f`` the node nearer the goal wins, then
    insertion order (FIFO). Returns None when
    either end is not walkable, no path exists, or ``max_search_nodes``
    expansions are used up before reaching the goal.
    """

    start_pos = as_position(start)
    goal_pos = as_position(goal)
    if not zone.is_walkable(start_pos) or not zone.is_walkable(goal_pos):
        return None

    start_cell = start_pos.as_tuple()
    goal_cell = goal_pos.as_tuple()

    # Sequence numbers make remaining ties FIFO and keep heap entries comparable
    sequence = count()
    start_h = chebyshev_distance(start_cell, goal_cell)
    open_heap: List[Tuple[int, int, int, Cell]] = [(start_h, start_h, next(sequence), start_cell)]
    g_scores: Dict[Cell, int] = {start_cell: 0}
    parents: Dict[Cell, Optional[Cell]] = {start_cell: None}
    closed: Set[Cell] = set()
    expanded = 0

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)
        # A cell can sit in the heap several times after its g improved; only the
        # first (cheapest) pop counts
        if current in closed:
            continue
        if current == goal_cell:
            return _reconstruct(parents, current)

        if max_search_nodes and expanded >= max_search_nodes:
            trace(
                f"  {LOG_TAG_WARNING} [ZoneEngine] Search budget of {max_search_nodes} nodes "
                f"exhausted in zone {zone.id}",
                Color.YELLOW,
            )
            return None
        expanded += 1
        closed.add(current)

        cx, cy = current
        next_g = g_scores[current] + 1
        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = (cx + dx, cy + dy)
            if neighbor in closed or not zone.walkable_at(*neighbor):
                continue
            if next_g < g_scores.get(neighbor, next_g + 1):
                g_scores[neighbor] = next_g
                parents[neighbor] = current
                h_score = chebyshev_distance(neighbor, goal_cell)
                heapq.heappush(open_heap, (next_g + h_score, h_score, next(sequence), neighbor))

    # Open set exhausted - goal walled off from start
    return None


def find_zone_path(zone_map: ZoneMap, start_id: str, goal_id: str) -> Optional[List[str]]:
    """Return zone ids from start to goal with the fewest hops, via BFS.

    The zone graph is unweighted, so this minimizes zone transitions, not
    walking distance. Returns None when the zones are disconnected.
    """

    if start_id == goal_id:
        return [start_id]
    visited = {start_id}
    queue: deque[Tuple[str, List[str]]] = deque([(start_id, [start_id])])

    while queue:
        zone_id, path = queue.popleft()
        for neighbor in zone_map.get_connected_zones(zone_id):
            if neighbor.id in visited:
                continue
            # Mark on enqueue so a zone is never queued twice
            visited.add(neighbor.id)
            new_path = path + [neighbor.id]
            if neighbor.id == goal_id:
                return new_path
            queue.append((neighbor.id, new_path))
    return None


def reachable_zone_ids(zone_map: ZoneMap, start_id: str) -> Set[str]:
    """Every zone id reachable from ``start_id`` (inclusive) over the adjacency index."""

    reachable = {start_id}
    queue: deque[str] = deque([start_id])
    while queue:
        zone_id = queue.popleft()
        for neighbor in zone_map.get_connected_zones(zone_id):
            if neighbor.id not in reachable:
                reachable.add(neighbor.id)
                queue.append(neighbor.id)
    return reachable


def _append_segment(path: List[Position], segment: List[Position]) -> None:
    # Consecutive segments may share an endpoint; keep a single copy
    if path and segment and segment[0] == path[-1]:
        segment = segment[1:]
    path.extend(segment)


def stitch_zone_path(
    zone_map: ZoneMap,
    start: PositionLike,
    goal: PositionLike,
    zone_path: List[str],
    *,
    max_search_nodes: Optional[int] = None,
) -> Optional[List[Position]]:
    """Join per-zone A* segments along ``zone_path`` into one position path.

    Within each zone the walker heads for the connection's exit point, then
    resumes from the connection's entry point in the next zone. Any failed
    segment fails the whole path; there is no partial result.

    Raises:
        ZoneGraphInconsistencyError: a hop in ``zone_path`` has no backing
            connection or names an unknown zone
    """

    full_path: List[Position] = []
    current: Position = as_position(start)

    for from_id, to_id in zip(zone_path, zone_path[1:]):
        zone = zone_map.get_zone(from_id)
        connection = zone_map.get_connection(from_id, to_id)
        if zone is None or connection is None or zone_map.get_zone(to_id) is None:
            raise ZoneGraphInconsistencyError(from_zone_id=from_id, to_zone_id=to_id)

        segment = find_path_in_zone(
            zone, current, connection.from_point, max_search_nodes=max_search_nodes
        )
        if segment is None:
            trace(
                f"  {LOG_TAG_WARNING} [ZoneEngine] No route to exit {connection.from_point.as_tuple()} "
                f"in zone {from_id}",
                Color.YELLOW,
            )
            return None
        _append_segment(full_path, segment)
        current = connection.to_point

    last_zone = zone_map.get_zone(zone_path[-1])
    if last_zone is None:
        raise ZoneGraphInconsistencyError(
            from_zone_id=zone_path[-2] if len(zone_path) > 1 else zone_path[-1],
            to_zone_id=zone_path[-1],
        )
    segment = find_path_in_zone(last_zone, current, goal, max_search_nodes=max_search_nodes)
    if segment is None:
        return None
    _append_segment(full_path, segment)
    return full_path


def find_path(
    zone_map: ZoneMap,
    start: PositionLike,
    goal: PositionLike,
    *,
    max_search_nodes: Optional[int] = None,
) -> Optional[List[Position]]:
    """Return a walkable position path between any two map positions.

    Same zone: A* directly. Different zones: BFS over the zone graph, then
    stitch A* segments through each connection. None when either position
    lies outside every zone, is not walkable, or cannot be reached.
    """

    start_pos = as_position(start)
    goal_pos = as_position(goal)

    start_zone = zone_map.get_zone_at_position(start_pos)
    goal_zone = zone_map.get_zone_at_position(goal_pos)
    if start_zone is None or goal_zone is None:
        return None
    if not start_zone.is_walkable(start_pos) or not goal_zone.is_walkable(goal_pos):
        return None

    if start_zone.id == goal_zone.id:
        return find_path_in_zone(start_zone, start_pos, goal_pos, max_search_nodes=max_search_nodes)

    zone_path = find_zone_path(zone_map, start_zone.id, goal_zone.id)
    if zone_path is None:
        trace(
            f"  {LOG_TAG_ENGINE} [ZoneEngine] No zone route from {start_zone.id} to {goal_zone.id}"
        )
        return None

    trace(f"  {LOG_TAG_ENGINE} [ZoneEngine] Zone route: {' -> '.join(zone_path)}")
    return stitch_zone_path(
        zone_map, start_pos, goal_pos, zone_path, max_search_nodes=max_search_nodes
    )
