"""Shared value types, errors and protocols for tick-nav."""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Union

if TYPE_CHECKING:
    from tick_nav.config import MoveOpts
    from tick_nav.cost_matrix import CostMatrix

ROOM_SIZE = 50

# Longest body an agent can have; keeps derived terrain costs under 255.
MAX_BODY_SIZE = 50

ROOM_NAME_PATTERN = re.compile(r"^([WE])(\d+)([NS])(\d+)$")

# Highest value a cost matrix tile can hold; also means "impassable".
MAX_TILE_COST = 255

# Return False to exclude a room from the search, a CostMatrix to overlay
# its tiles, or None to use plain terrain.
RoomCallback = Callable[[str], Union["CostMatrix", bool, None]]


@dataclass(frozen=True)
class RoomPosition:
    x: int
    y: int
    room_name: str

    def __post_init__(self) -> None:
        if not (0 <= self.x < ROOM_SIZE and 0 <= self.y < ROOM_SIZE):
            raise ValueError(
                f"({self.x}, {self.y}) out of bounds for {ROOM_SIZE}x{ROOM_SIZE} room"
            )
        if not self.room_name:
            raise ValueError("room_name must be non-empty")
        if ROOM_NAME_PATTERN.match(self.room_name) is None:
            raise ValueError(f"Invalid room name: '{self.room_name}'")


@dataclass(frozen=True)
class MoveTarget:
    """A position to reach, within ``range`` tiles (Chebyshev)."""

    pos: RoomPosition
    range: int = 0

    def __post_init__(self) -> None:
        if self.range < 0:
            raise ValueError(f"range must be >= 0, got {self.range}")


class PartType(enum.Enum):
    MOVE = "move"
    CARRY = "carry"
    OTHER = "other"


@dataclass(frozen=True)
class BodyPart:
    """One segment of an agent body.

    Attributes:
        type: What the part does for movement.
        hits: Remaining hit points; parts at 0 or below are destroyed.
        boost: Multiplier applied to the part. Move power for MOVE parts,
            capacity for CARRY parts. None means unboosted.
    """

    type: PartType
    hits: int = 100
    boost: Optional[float] = None

    def __post_init__(self) -> None:
        if self.boost is not None and self.boost < 0:
            raise ValueError(f"boost must be >= 0, got {self.boost}")
        # Move boosts only ever speed a part up; 0 disables it.
        if self.type is PartType.MOVE and self.boost is not None and 0 < self.boost < 1:
            raise ValueError(f"MOVE boost must be 0 or >= 1, got {self.boost}")


@dataclass(frozen=True)
class AgentBody:
    """Parts in stored order plus how much cargo is currently carried."""

    parts: tuple[BodyPart, ...] = ()
    used_capacity: int = 0

    def __post_init__(self) -> None:
        if len(self.parts) > MAX_BODY_SIZE:
            raise ValueError(
                f"body has {len(self.parts)} parts, at most {MAX_BODY_SIZE} allowed"
            )
        if self.used_capacity < 0:
            raise ValueError(
                f"used_capacity must be >= 0, got {self.used_capacity}"
            )


@dataclass(frozen=True)
class TerrainCosts:
    road: float
    plain: float
    swamp: float

    def __post_init__(self) -> None:
        for name in ("road", "plain", "swamp"):
            value = getattr(self, name)
            if not (0 < value < MAX_TILE_COST):
                raise ValueError(
                    f"{name} cost must be in (0, {MAX_TILE_COST}), got {value}"
                )


@dataclass(frozen=True)
class Goal:
    pos: RoomPosition
    range: int = 0


@dataclass(frozen=True)
class SearchOpts:
    """Options handed from the planner to a pathfinder.

    Attributes:
        max_ops: Node expansions allowed before giving up.
        room_callback: Queried at most once per room the search enters.
        plain_cost: Cost of a plain tile with no matrix override.
        swamp_cost: Cost of a swamp tile with no matrix override.
        max_rooms: Number of rooms the search may open.
        heuristic_weight: Multiplier on the distance heuristic.
    """

    max_ops: int
    room_callback: Optional[RoomCallback] = None
    plain_cost: float = 2
    swamp_cost: float = 10
    max_rooms: int = 16
    heuristic_weight: float = 1.2


@dataclass(frozen=True)
class SearchResult:
    path: list[RoomPosition] = field(default_factory=list)
    ops: int = 0
    cost: float = 0.0
    incomplete: bool = False


class PathNotFound(Exception):
    """Raised when no complete path to any target was found within budget."""

    def __init__(self, result: SearchResult, message: str) -> None:
        self.result = result
        super().__init__(message)


class Pathfinder(Protocol):
    def search(
        self, origin: RoomPosition, goals: list[Goal], opts: SearchOpts
    ) -> SearchResult: ...


RouteFinder = Callable[[str, str, "MoveOpts"], Optional[list[str]]]
