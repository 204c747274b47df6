"""Movement options and their layered merge."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from tick_nav.types import AgentBody, RoomCallback, RoomPosition, TerrainCosts


@dataclass(frozen=True)
class MoveOpts:
    """Immutable movement options. None on any field means "not set".

    Attributes:
        max_ops: Upper bound on pathfinder node expansions for one call.
        max_ops_per_room: Budget granted per room of the selected route.
        road_cost: Cost of a road tile.
        plain_cost: Cost of a plain tile.
        swamp_cost: Cost of a swamp tile.
        max_rooms: Most rooms a route or search may span.
        heuristic_weight: A* heuristic multiplier (>= 1 trades optimality
            for speed).
        avoid_obstacles: Treat obstacle structures as impassable.
        avoid_agents: Treat tiles occupied by agents as impassable.
        avoid_rooms: Rooms the route search must not pass through.
        avoid_tiles: Extra tiles to mark impassable.
        default_room_cost: Route cost of entering an ordinary room.
        highway_room_cost: Route cost of entering a highway room.
        room_callback: Caller-supplied per-room cost overlay.
        body: When set, terrain costs are derived from it.
    """

    max_ops: Optional[int] = None
    max_ops_per_room: Optional[int] = None
    road_cost: Optional[float] = None
    plain_cost: Optional[float] = None
    swamp_cost: Optional[float] = None
    max_rooms: Optional[int] = None
    heuristic_weight: Optional[float] = None
    avoid_obstacles: Optional[bool] = None
    avoid_agents: Optional[bool] = None
    avoid_rooms: Optional[tuple[str, ...]] = None
    avoid_tiles: Optional[tuple[RoomPosition, ...]] = None
    default_room_cost: Optional[float] = None
    highway_room_cost: Optional[float] = None
    room_callback: Optional[RoomCallback] = None
    body: Optional[AgentBody] = None

    def __post_init__(self) -> None:
        for name in ("max_ops", "max_ops_per_room", "max_rooms"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        for name in ("road_cost", "plain_cost", "swamp_cost"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if self.heuristic_weight is not None and self.heuristic_weight < 1:
            raise ValueError(
                f"heuristic_weight must be >= 1, got {self.heuristic_weight}"
            )

    def terrain_costs(self) -> TerrainCosts:
        """The road/plain/swamp triple. All three fields must be set."""
        if self.road_cost is None or self.plain_cost is None or self.swamp_cost is None:
            raise ValueError("terrain costs are not fully set")
        return TerrainCosts(
            road=self.road_cost, plain=self.plain_cost, swamp=self.swamp_cost
        )

    def with_terrain_costs(self, costs: TerrainCosts) -> MoveOpts:
        return dataclasses.replace(
            self, road_cost=costs.road, plain_cost=costs.plain, swamp_cost=costs.swamp
        )


DEFAULT_MOVE_OPTS = MoveOpts(
    max_ops=100_000,
    max_ops_per_room=2000,
    road_cost=1,
    plain_cost=2,
    swamp_cost=10,
    max_rooms=16,
    heuristic_weight=1.2,
    avoid_obstacles=True,
    avoid_agents=False,
    avoid_rooms=(),
    avoid_tiles=(),
    default_room_cost=2,
    highway_room_cost=1,
)


def merge_opts(*layers: MoveOpts | None) -> MoveOpts:
    """Merge option layers, lowest precedence first.

    Each set (non-None) field of a later layer replaces the earlier value.
    ``None`` layers are skipped.
    """
    changes: dict[str, object] = {}
    for layer in layers:
        if layer is None:
            continue
        for f in dataclasses.fields(layer):
            value = getattr(layer, f.name)
            if value is not None:
                changes[f.name] = value
    return MoveOpts(**changes)  # type: ignore[arg-type]
