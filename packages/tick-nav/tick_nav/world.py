"""WorldMap - rooms, their terrain, structures and occupants."""
from __future__ import annotations

import enum

from tick_nav.types import ROOM_NAME_PATTERN, ROOM_SIZE, RoomPosition

Coord = tuple[int, int]

# Exit direction -> room offset.
EXIT_OFFSETS: dict[str, tuple[int, int]] = {
    "top": (0, -1),
    "right": (1, 0),
    "bottom": (0, 1),
    "left": (-1, 0),
}


class Terrain(enum.Enum):
    PLAIN = "plain"
    SWAMP = "swamp"
    WALL = "wall"


class StructureKind(enum.Enum):
    ROAD = "road"
    RAMPART = "rampart"
    CONTAINER = "container"
    WALL = "constructed_wall"
    SPAWN = "spawn"
    EXTENSION = "extension"
    TOWER = "tower"
    STORAGE = "storage"


# Structures agents can walk over; everything else blocks.
WALKABLE_STRUCTURES = frozenset(
    {StructureKind.ROAD, StructureKind.RAMPART, StructureKind.CONTAINER}
)


def parse_room_name(name: str) -> tuple[int, int]:
    """World coordinates of a room. ``E0S0`` is (0, 0), ``W0N0`` is (-1, -1)."""
    match = ROOM_NAME_PATTERN.match(name)
    if match is None:
        raise ValueError(f"Invalid room name: '{name}'")
    we, xs, ns, ys = match.groups()
    x = int(xs) if we == "E" else -int(xs) - 1
    y = int(ys) if ns == "S" else -int(ys) - 1
    return x, y


def room_name(x: int, y: int) -> str:
    """Inverse of :func:`parse_room_name`."""
    we = f"E{x}" if x >= 0 else f"W{-x - 1}"
    ns = f"S{y}" if y >= 0 else f"N{-y - 1}"
    return we + ns


def is_highway(name: str) -> bool:
    match = ROOM_NAME_PATTERN.match(name)
    if match is None:
        raise ValueError(f"Invalid room name: '{name}'")
    return int(match.group(2)) % 10 == 0 or int(match.group(4)) % 10 == 0


class Room:
    """Tiles of one room.

    Terrain is sparse: unset tiles are plain. Structures and agents are
    keyed by in-room coordinate.
    """

    def __init__(self, name: str) -> None:
        parse_room_name(name)
        self._name = name
        self._terrain: dict[Coord, Terrain] = {}
        self._structures: dict[Coord, set[StructureKind]] = {}
        self._agents: set[Coord] = set()

    @property
    def name(self) -> str:
        return self._name

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE):
            raise ValueError(
                f"({x}, {y}) out of bounds for {ROOM_SIZE}x{ROOM_SIZE} room"
            )

    # --- Terrain ---

    def set_terrain(self, x: int, y: int, terrain: Terrain) -> None:
        self._check_bounds(x, y)
        if terrain is Terrain.PLAIN:
            self._terrain.pop((x, y), None)
        else:
            self._terrain[(x, y)] = terrain

    def fill_terrain(
        self, corner1: Coord, corner2: Coord, terrain: Terrain
    ) -> None:
        """Fill a rectangle (inclusive) with a terrain type."""
        x1, y1 = min(corner1[0], corner2[0]), min(corner1[1], corner2[1])
        x2, y2 = max(corner1[0], corner2[0]), max(corner1[1], corner2[1])
        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                self.set_terrain(x, y, terrain)

    def terrain(self, x: int, y: int) -> Terrain:
        return self._terrain.get((x, y), Terrain.PLAIN)

    # --- Structures ---

    def add_structure(self, x: int, y: int, kind: StructureKind) -> None:
        self._check_bounds(x, y)
        self._structures.setdefault((x, y), set()).add(kind)

    def remove_structure(self, x: int, y: int, kind: StructureKind) -> None:
        kinds = self._structures.get((x, y))
        if kinds is not None:
            kinds.discard(kind)
            if not kinds:
                del self._structures[(x, y)]

    def structures(self) -> list[tuple[Coord, StructureKind]]:
        return [
            (coord, kind)
            for coord, kinds in self._structures.items()
            for kind in kinds
        ]

    def structures_at(self, x: int, y: int) -> frozenset[StructureKind]:
        return frozenset(self._structures.get((x, y), ()))

    # --- Agents ---

    def place_agent(self, x: int, y: int) -> None:
        self._check_bounds(x, y)
        self._agents.add((x, y))

    def remove_agent(self, x: int, y: int) -> None:
        self._agents.discard((x, y))

    def agents(self) -> frozenset[Coord]:
        return frozenset(self._agents)


class WorldMap:
    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    def add_room(self, name: str) -> Room:
        """Create (or return the existing) room named *name*."""
        room = self._rooms.get(name)
        if room is None:
            room = Room(name)
            self._rooms[name] = room
        return room

    def room(self, name: str) -> Room:
        room = self._rooms.get(name)
        if room is None:
            raise KeyError(f"Room {name} is not in the world")
        return room

    def has_room(self, name: str) -> bool:
        return name in self._rooms

    def describe_exits(self, name: str) -> dict[str, str]:
        """Neighbouring rooms reachable from *name*, keyed by exit direction."""
        rx, ry = parse_room_name(name)
        exits: dict[str, str] = {}
        for direction, (dx, dy) in EXIT_OFFSETS.items():
            neighbor = room_name(rx + dx, ry + dy)
            if neighbor in self._rooms:
                exits[direction] = neighbor
        return exits

    def terrain_at(self, pos: RoomPosition) -> Terrain:
        room = self._rooms.get(pos.room_name)
        if room is None:
            return Terrain.WALL
        return room.terrain(pos.x, pos.y)
