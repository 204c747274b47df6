"""GridPathfinder - budgeted multi-room A* over world tiles."""
from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING, Optional

from tick_nav.cost_matrix import CostMatrix
from tick_nav.types import (
    MAX_TILE_COST,
    ROOM_SIZE,
    Goal,
    RoomPosition,
    SearchOpts,
    SearchResult,
)
from tick_nav.world import Terrain, parse_room_name, room_name

if TYPE_CHECKING:
    from tick_nav.world import WorldMap

logger = logging.getLogger(__name__)

GlobalCoord = tuple[int, int]

_DIRS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

# Room cache sentinels: not enterable, or enterable with terrain costs only.
_BLOCKED = object()
_NO_MATRIX = object()


def to_global(pos: RoomPosition) -> GlobalCoord:
    rx, ry = parse_room_name(pos.room_name)
    return rx * ROOM_SIZE + pos.x, ry * ROOM_SIZE + pos.y


def from_global(coord: GlobalCoord) -> RoomPosition:
    gx, gy = coord
    return RoomPosition(
        gx % ROOM_SIZE, gy % ROOM_SIZE, room_name(gx // ROOM_SIZE, gy // ROOM_SIZE)
    )


class GridPathfinder:
    """Searches the world's tiles as one continuous 8-connected grid.

    Rooms are loaded lazily: the room callback runs the first time the
    search touches a room, and its answer is reused for the rest of the
    search.
    """

    def __init__(self, world: WorldMap) -> None:
        self._world = world

    def search(
        self, origin: RoomPosition, goals: list[Goal], opts: SearchOpts
    ) -> SearchResult:
        if not goals:
            return SearchResult(incomplete=True)

        targets = [(to_global(g.pos), g.range) for g in goals]
        rooms: dict[str, object] = {}

        def load_room(name: str) -> object:
            if name in rooms:
                return rooms[name]
            opened = sum(1 for e in rooms.values() if e is not _BLOCKED)
            entry: object = _NO_MATRIX
            if not self._world.has_room(name) or opened >= opts.max_rooms:
                entry = _BLOCKED
            elif opts.room_callback is not None:
                result = opts.room_callback(name)
                if result is False:
                    entry = _BLOCKED
                elif isinstance(result, CostMatrix):
                    entry = result
            rooms[name] = entry
            return entry

        def tile_cost(coord: GlobalCoord) -> Optional[float]:
            gx, gy = coord
            name = room_name(gx // ROOM_SIZE, gy // ROOM_SIZE)
            entry = load_room(name)
            if entry is _BLOCKED:
                return None
            x, y = gx % ROOM_SIZE, gy % ROOM_SIZE
            if isinstance(entry, CostMatrix):
                value = entry.get(x, y)
                if value >= MAX_TILE_COST:
                    return None
                if value > 0:
                    return float(value)
            terrain = self._world.room(name).terrain(x, y)
            if terrain is Terrain.WALL:
                return None
            if terrain is Terrain.SWAMP:
                return opts.swamp_cost
            return opts.plain_cost

        def distance(coord: GlobalCoord) -> int:
            return min(
                max(0, max(abs(coord[0] - t[0]), abs(coord[1] - t[1])) - r)
                for t, r in targets
            )

        start = to_global(origin)
        load_room(origin.room_name)
        open_set: list[tuple[float, int, GlobalCoord]] = [(0.0, 0, start)]
        came_from: dict[GlobalCoord, GlobalCoord] = {}
        g_score: dict[GlobalCoord, float] = {start: 0.0}
        counter = 1
        ops = 0

        closed: set[GlobalCoord] = set()
        best = start
        best_h = distance(start)

        while open_set and ops < opts.max_ops:
            _, _, current = heapq.heappop(open_set)
            if current in closed:
                continue
            closed.add(current)
            ops += 1

            h = distance(current)
            if h < best_h or (h == best_h and g_score[current] < g_score[best]):
                best, best_h = current, h
            if h == 0:
                return self._result(came_from, g_score, current, ops, False)

            for dx, dy in _DIRS:
                neighbor = (current[0] + dx, current[1] + dy)
                if neighbor in closed:
                    continue
                step_cost = tile_cost(neighbor)
                if step_cost is None:
                    continue
                tentative = g_score[current] + step_cost
                if tentative < g_score.get(neighbor, float("inf")):
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative
                    f = tentative + distance(neighbor) * opts.heuristic_weight
                    heapq.heappush(open_set, (f, counter, neighbor))
                    counter += 1

        return self._result(came_from, g_score, best, ops, True)

    def _result(
        self,
        came_from: dict[GlobalCoord, GlobalCoord],
        g_score: dict[GlobalCoord, float],
        end: GlobalCoord,
        ops: int,
        incomplete: bool,
    ) -> SearchResult:
        cost = g_score[end]
        path: list[RoomPosition] = []
        current = end
        while current in came_from:
            path.append(from_global(current))
            current = came_from[current]
        path.reverse()
        logger.debug(
            "search finished: ops=%d cost=%s steps=%d incomplete=%s",
            ops, cost, len(path), incomplete,
        )
        return SearchResult(path=path, ops=ops, cost=cost, incomplete=incomplete)
