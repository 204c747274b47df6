"""CostMatrix - per-room tile cost overlay."""
from __future__ import annotations

from typing import TYPE_CHECKING

from tick_nav.types import MAX_TILE_COST, ROOM_SIZE
from tick_nav.world import WALKABLE_STRUCTURES, StructureKind

if TYPE_CHECKING:
    from tick_nav.config import MoveOpts
    from tick_nav.world import WorldMap


class CostMatrix:
    """50x50 tile costs for one room.

    0 means "use the terrain cost", 255 means impassable, anything else
    replaces the terrain cost for that tile.
    """

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            self._bits = bytearray(ROOM_SIZE * ROOM_SIZE)
        else:
            if len(data) != ROOM_SIZE * ROOM_SIZE:
                raise ValueError(
                    f"CostMatrix data must be {ROOM_SIZE * ROOM_SIZE} bytes, "
                    f"got {len(data)}"
                )
            self._bits = bytearray(data)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE):
            raise ValueError(
                f"({x}, {y}) out of bounds for {ROOM_SIZE}x{ROOM_SIZE} matrix"
            )
        return x * ROOM_SIZE + y

    def get(self, x: int, y: int) -> int:
        return self._bits[self._index(x, y)]

    def set(self, x: int, y: int, cost: int) -> None:
        if not (0 <= cost <= MAX_TILE_COST):
            raise ValueError(f"cost must be in [0, {MAX_TILE_COST}], got {cost}")
        self._bits[self._index(x, y)] = cost

    def clone(self) -> CostMatrix:
        return CostMatrix(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CostMatrix):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]


def mutate_cost_matrix(
    cm: CostMatrix, room_name: str, opts: MoveOpts, world: WorldMap
) -> CostMatrix:
    """Apply movement options for *room_name* to *cm* in place and return it."""
    room = world.room(room_name) if world.has_room(room_name) else None
    if room is not None:
        if opts.avoid_agents:
            for x, y in room.agents():
                cm.set(x, y, MAX_TILE_COST)
        for (x, y), kind in room.structures():
            if kind not in WALKABLE_STRUCTURES:
                if opts.avoid_obstacles:
                    cm.set(x, y, MAX_TILE_COST)
            elif kind is StructureKind.ROAD and opts.road_cost is not None:
                # Roads never override an existing cost.
                if cm.get(x, y) == 0:
                    cm.set(x, y, _tile_cost(opts.road_cost))
    for pos in opts.avoid_tiles or ():
        if pos.room_name == room_name:
            cm.set(pos.x, pos.y, MAX_TILE_COST)
    return cm


def _tile_cost(cost: float) -> int:
    return max(1, min(MAX_TILE_COST, round(cost)))
