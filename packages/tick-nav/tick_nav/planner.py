"""generate_path - single entry point for planning one move."""
from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Sequence, Union, cast

from tick_nav.body import terrain_costs
from tick_nav.config import DEFAULT_MOVE_OPTS, MoveOpts, merge_opts
from tick_nav.cost_matrix import CostMatrix, mutate_cost_matrix
from tick_nav.route import find_route, select_route
from tick_nav.search import GridPathfinder
from tick_nav.types import Goal, PathNotFound, SearchOpts

if TYPE_CHECKING:
    from tick_nav.types import MoveTarget, Pathfinder, RoomPosition, RouteFinder
    from tick_nav.world import WorldMap

logger = logging.getLogger(__name__)


def generate_path(
    world: WorldMap,
    origin: RoomPosition,
    targets: Sequence[MoveTarget],
    opts: MoveOpts | None = None,
    *,
    pathfinder: Pathfinder | None = None,
    route_finder: RouteFinder | None = None,
) -> list[RoomPosition]:
    """Plan the cheapest path from *origin* to the nearest of *targets*.

    Options merge as defaults < *opts* < terrain costs derived from
    ``opts.body``. When no target shares the origin's room, the search is
    restricted to the rooms of the shortest room route, and the op budget
    grows with the route length.

    Returns the path from the first step to the goal, origin excluded.
    Raises ``PathNotFound`` if the path is empty or did not reach a target.
    """
    actual = merge_opts(DEFAULT_MOVE_OPTS, opts)
    if opts is not None and opts.body is not None:
        derived = terrain_costs(opts.body, actual.terrain_costs())
        actual = actual.with_terrain_costs(derived)

    if pathfinder is None:
        pathfinder = GridPathfinder(world)
    if route_finder is None:
        route_finder = functools.partial(find_route, world)

    rooms: list[str] | None = None
    if not any(t.pos.room_name == origin.room_name for t in targets):
        target_rooms = [t.pos.room_name for t in targets]
        rooms = select_route(origin.room_name, target_rooms, actual, route_finder)

    max_ops = min(
        cast(int, actual.max_ops),
        cast(int, actual.max_ops_per_room) * max(1, len(rooms) if rooms else 1),
    )
    logger.debug(
        "planning %s -> %d target(s): max_ops=%d rooms=%s",
        origin, len(targets), max_ops, rooms,
    )

    def room_callback(room_name: str) -> Union[CostMatrix, bool]:
        if rooms is not None and room_name not in rooms:
            return False
        cm = actual.room_callback(room_name) if actual.room_callback else None
        if cm is False:
            return False
        cloned = cm.clone() if isinstance(cm, CostMatrix) else CostMatrix()
        return mutate_cost_matrix(cloned, room_name, actual, world)

    result = pathfinder.search(
        origin,
        [Goal(t.pos, t.range) for t in targets],
        SearchOpts(
            max_ops=max_ops,
            room_callback=room_callback,
            plain_cost=cast(float, actual.plain_cost),
            swamp_cost=cast(float, actual.swamp_cost),
            max_rooms=cast(int, actual.max_rooms),
            heuristic_weight=cast(float, actual.heuristic_weight),
        ),
    )
    if not result.path or result.incomplete:
        raise PathNotFound(
            result,
            f"No path from {origin} to {len(targets)} target(s) "
            f"(ops={result.ops}, incomplete={result.incomplete})",
        )
    return result.path
