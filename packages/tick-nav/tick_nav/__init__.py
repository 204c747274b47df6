"""tick-nav - Multi-room path planning for tile worlds."""
from __future__ import annotations

from tick_nav.body import CARRY_CAPACITY, fatigue_ratio, gcd, terrain_costs
from tick_nav.config import DEFAULT_MOVE_OPTS, MoveOpts, merge_opts
from tick_nav.cost_matrix import CostMatrix, mutate_cost_matrix
from tick_nav.planner import generate_path
from tick_nav.route import find_route, select_route
from tick_nav.search import GridPathfinder
from tick_nav.types import (
    AgentBody,
    BodyPart,
    Goal,
    MAX_BODY_SIZE,
    MoveTarget,
    PartType,
    PathNotFound,
    Pathfinder,
    RoomPosition,
    SearchOpts,
    SearchResult,
    TerrainCosts,
)
from tick_nav.world import (
    Room,
    StructureKind,
    Terrain,
    WorldMap,
    is_highway,
    parse_room_name,
    room_name,
)

__all__ = [
    "AgentBody",
    "BodyPart",
    "CARRY_CAPACITY",
    "CostMatrix",
    "DEFAULT_MOVE_OPTS",
    "Goal",
    "GridPathfinder",
    "MAX_BODY_SIZE",
    "MoveOpts",
    "MoveTarget",
    "PartType",
    "PathNotFound",
    "Pathfinder",
    "Room",
    "RoomPosition",
    "SearchOpts",
    "SearchResult",
    "StructureKind",
    "Terrain",
    "TerrainCosts",
    "WorldMap",
    "fatigue_ratio",
    "find_route",
    "gcd",
    "generate_path",
    "is_highway",
    "merge_opts",
    "mutate_cost_matrix",
    "parse_room_name",
    "room_name",
    "select_route",
    "terrain_costs",
]
