"""Room-level routing: shortest room sequences and route pre-selection."""
from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING, Iterable, cast

from tick_nav.config import DEFAULT_MOVE_OPTS, MoveOpts, merge_opts
from tick_nav.world import is_highway

if TYPE_CHECKING:
    from tick_nav.types import RouteFinder
    from tick_nav.world import WorldMap

logger = logging.getLogger(__name__)


def find_route(
    world: WorldMap,
    from_room: str,
    to_room: str,
    opts: MoveOpts | None = None,
) -> list[str] | None:
    """Cheapest sequence of rooms from *from_room* to *to_room*, both included.

    Entering a highway room costs ``highway_room_cost``, any other room
    ``default_room_cost``. Rooms in ``avoid_rooms`` are skipped unless they
    are the destination. Routes spanning more than ``max_rooms`` rooms are
    not considered. Returns None if the destination cannot be reached.
    """
    opts = merge_opts(DEFAULT_MOVE_OPTS, opts)
    max_rooms = cast(int, opts.max_rooms)
    if from_room == to_room:
        return [from_room]

    avoid = set(opts.avoid_rooms or ())
    open_set: list[tuple[float, int, str]] = [(0.0, 0, from_room)]
    came_from: dict[str, str] = {}
    g_score: dict[str, float] = {from_room: 0.0}
    depth: dict[str, int] = {from_room: 1}
    counter = 1

    closed: set[str] = set()

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        closed.add(current)
        if current == to_room:
            route: list[str] = [current]
            while current in came_from:
                current = came_from[current]
                route.append(current)
            route.reverse()
            return route
        if depth[current] >= max_rooms:
            continue

        for neighbor in world.describe_exits(current).values():
            if neighbor in avoid and neighbor != to_room:
                continue
            step_cost = (
                opts.highway_room_cost if is_highway(neighbor) else opts.default_room_cost
            )
            tentative = g_score[current] + step_cost
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                depth[neighbor] = depth[current] + 1
                heapq.heappush(open_set, (tentative, counter, neighbor))
                counter += 1

    return None


def select_route(
    origin_room: str,
    target_rooms: Iterable[str],
    opts: MoveOpts,
    route_finder: RouteFinder,
) -> list[str] | None:
    """Pick the shortest room route from *origin_room* to any target room.

    Returns None when the origin is itself a target room (no restriction is
    needed) or when no target room can be routed to. Ties keep the route
    found first, in the order *target_rooms* is given.
    """
    rooms = list(dict.fromkeys(target_rooms))
    if origin_room in rooms:
        return None

    best: list[str] | None = None
    for room in rooms:
        route = route_finder(origin_room, room, opts)
        if route and (best is None or len(route) < len(best)):
            best = route

    if best is None:
        logger.debug("no route from %s to any of %s", origin_room, rooms)
    else:
        logger.debug("route from %s: %s", origin_room, best)
    return best
