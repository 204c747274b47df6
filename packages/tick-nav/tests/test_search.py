"""
Test suite for the multi-room grid search.

Tests cover:
- Straight paths and path structure (origin excluded, goal last)
- Goal ranges
- Walls, swamps and cost matrix overrides
- Crossing room borders
- Room callbacks (blocking, called once per room)
- Op and room budgets
"""
from __future__ import annotations

from tick_nav import (
    CostMatrix,
    Goal,
    GridPathfinder,
    RoomPosition,
    SearchOpts,
    Terrain,
    WorldMap,
)
from tick_nav.search import from_global, to_global


def chebyshev(a: RoomPosition, b: RoomPosition) -> int:
    ax, ay = to_global(a)
    bx, by = to_global(b)
    return max(abs(ax - bx), abs(ay - by))


def single_room() -> WorldMap:
    world = WorldMap()
    world.add_room("E0S0")
    return world


def pos(x: int, y: int, room: str = "E0S0") -> RoomPosition:
    return RoomPosition(x, y, room)


class TestGlobalCoords:
    def test_round_trip(self) -> None:
        for p in (pos(0, 0), pos(49, 49, "W3N1"), pos(25, 7, "E2N4")):
            assert from_global(to_global(p)) == p

    def test_adjacent_rooms_are_contiguous(self) -> None:
        a = to_global(pos(49, 10, "W1N1"))
        b = to_global(pos(0, 10, "W0N1"))
        assert b[0] - a[0] == 1


class TestSearchBasics:
    def test_straight_path(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(5, 5), [Goal(pos(10, 5))], SearchOpts(max_ops=2000)
        )
        assert not result.incomplete
        assert len(result.path) == 5
        assert result.path[-1] == pos(10, 5)
        assert pos(5, 5) not in result.path
        assert result.cost == 10

    def test_steps_are_adjacent(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(2, 3), [Goal(pos(30, 40))], SearchOpts(max_ops=5000)
        )
        steps = [pos(2, 3)] + result.path
        for a, b in zip(steps, steps[1:]):
            assert chebyshev(a, b) == 1

    def test_goal_range(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(5, 5), [Goal(pos(10, 5), range=2)], SearchOpts(max_ops=2000)
        )
        assert not result.incomplete
        assert len(result.path) == 3
        assert chebyshev(result.path[-1], pos(10, 5)) == 2

    def test_already_in_range(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(5, 5), [Goal(pos(6, 6), range=1)], SearchOpts(max_ops=2000)
        )
        assert result.path == []
        assert not result.incomplete

    def test_nearest_of_several_goals(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(10, 10),
            [Goal(pos(40, 40)), Goal(pos(13, 10))],
            SearchOpts(max_ops=2000),
        )
        assert result.path[-1] == pos(13, 10)

    def test_no_goals(self) -> None:
        result = GridPathfinder(single_room()).search(pos(1, 1), [], SearchOpts(max_ops=10))
        assert result.incomplete
        assert result.path == []


class TestTerrain:
    def test_wall_blocks(self) -> None:
        world = single_room()
        world.room("E0S0").fill_terrain((7, 0), (7, 49), Terrain.WALL)
        result = GridPathfinder(world).search(
            pos(5, 5), [Goal(pos(10, 5))], SearchOpts(max_ops=5000)
        )
        assert result.incomplete
        # Partial path heads for the closest reachable tile.
        assert result.path[-1].x == 6

    def test_swamp_detour(self) -> None:
        world = single_room()
        world.room("E0S0").fill_terrain((7, 3), (7, 7), Terrain.SWAMP)
        result = GridPathfinder(world).search(
            pos(5, 5), [Goal(pos(9, 5))], SearchOpts(max_ops=5000, heuristic_weight=1)
        )
        assert not result.incomplete
        assert all(world.terrain_at(p) is not Terrain.SWAMP for p in result.path)

    def test_swamp_cost_used(self) -> None:
        world = single_room()
        world.room("E0S0").fill_terrain((0, 0), (49, 49), Terrain.SWAMP)
        result = GridPathfinder(world).search(
            pos(5, 5), [Goal(pos(8, 5))], SearchOpts(max_ops=2000, swamp_cost=7)
        )
        assert result.cost == 21


class TestCostMatrix:
    def test_matrix_blocks_tile(self) -> None:
        cm = CostMatrix()
        for y in range(50):
            cm.set(7, y, 255)
        result = GridPathfinder(single_room()).search(
            pos(5, 5),
            [Goal(pos(10, 5))],
            SearchOpts(max_ops=5000, room_callback=lambda name: cm),
        )
        assert result.incomplete

    def test_matrix_overrides_terrain(self) -> None:
        world = single_room()
        world.room("E0S0").fill_terrain((0, 0), (49, 49), Terrain.SWAMP)
        cm = CostMatrix()
        for x in range(50):
            cm.set(x, 5, 1)
        result = GridPathfinder(world).search(
            pos(5, 5),
            [Goal(pos(9, 5))],
            SearchOpts(max_ops=2000, room_callback=lambda name: cm),
        )
        assert result.cost == 4

    def test_matrix_passes_walls(self) -> None:
        world = single_room()
        world.room("E0S0").set_terrain(6, 5, Terrain.WALL)
        cm = CostMatrix()
        cm.set(6, 5, 1)
        result = GridPathfinder(world).search(
            pos(5, 5),
            [Goal(pos(6, 5))],
            SearchOpts(max_ops=100, room_callback=lambda name: cm),
        )
        assert result.path == [pos(6, 5)]


class TestRooms:
    def two_rooms(self) -> WorldMap:
        world = WorldMap()
        world.add_room("E0S0")
        world.add_room("E1S0")
        return world

    def test_crosses_border(self) -> None:
        result = GridPathfinder(self.two_rooms()).search(
            pos(48, 25), [Goal(pos(1, 25, "E1S0"))], SearchOpts(max_ops=2000)
        )
        assert not result.incomplete
        assert len(result.path) == 3
        assert result.path[-1] == pos(1, 25, "E1S0")
        assert {p.room_name for p in result.path} == {"E0S0", "E1S0"}

    def test_unknown_room_impassable(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(49, 25), [Goal(pos(0, 25, "E1S0"))], SearchOpts(max_ops=5000)
        )
        assert result.incomplete

    def test_blocked_room(self) -> None:
        def callback(name: str) -> bool | None:
            return False if name == "E1S0" else None

        result = GridPathfinder(self.two_rooms()).search(
            pos(48, 25),
            [Goal(pos(1, 25, "E1S0"))],
            SearchOpts(max_ops=5000, room_callback=callback),
        )
        assert result.incomplete

    def test_callback_once_per_room(self) -> None:
        calls: list[str] = []

        def callback(name: str) -> None:
            calls.append(name)

        GridPathfinder(self.two_rooms()).search(
            pos(40, 25),
            [Goal(pos(10, 25, "E1S0"))],
            SearchOpts(max_ops=5000, room_callback=callback),
        )
        assert sorted(calls) == ["E0S0", "E1S0"]

    def test_max_rooms(self) -> None:
        result = GridPathfinder(self.two_rooms()).search(
            pos(48, 25),
            [Goal(pos(1, 25, "E1S0"))],
            SearchOpts(max_ops=5000, max_rooms=1),
        )
        assert result.incomplete


class TestBudget:
    def test_op_budget(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(0, 0), [Goal(pos(49, 49))], SearchOpts(max_ops=1)
        )
        assert result.incomplete
        assert result.ops == 1

    def test_ops_reported(self) -> None:
        result = GridPathfinder(single_room()).search(
            pos(5, 5), [Goal(pos(10, 5))], SearchOpts(max_ops=2000)
        )
        assert 0 < result.ops <= 2000
