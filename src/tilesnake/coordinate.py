"""Grid coordinates, movement directions and keyboard input codes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilesnake._morton import deinterleave, interleave

if TYPE_CHECKING:
    from tilesnake.bounding import BoundingPolicy
    from tilesnake.grid import Grid

# Coordinate components are 16-bit unsigned integers.
SMALL_NAT_MAX = 0xFFFF
_MODULUS = SMALL_NAT_MAX + 1


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so North decreases it.
    """

    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def turn_left(self) -> Direction:
        return _LEFT_TURNS[self]

    def turn_right(self) -> Direction:
        return self.opposite().turn_left()


_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_LEFT_TURNS: dict[Direction, Direction] = {
    Direction.NORTH: Direction.WEST,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
    Direction.WEST: Direction.SOUTH,
}

# Browser key codes for the arrow keys.
_KEY_DIRECTIONS: dict[int, Direction] = {
    37: Direction.WEST,
    38: Direction.NORTH,
    39: Direction.EAST,
    40: Direction.SOUTH,
}


@dataclass(frozen=True)
class Key:
    """A raw key code as written into the command cell by the host.

    The default code ``0`` means "no key pressed".
    """

    code: int = 0

    @classmethod
    def none(cls) -> Key:
        return cls(0)

    @property
    def direction(self) -> Direction | None:
        return _KEY_DIRECTIONS.get(self.code)

    def is_direction_key(self) -> bool:
        return self.direction is not None

    def to_command(self) -> Direction | None:
        """Convert into the command understood by direction-driven models."""
        return self.direction


@dataclass(frozen=True)
class Coordinate:
    """A tile position ``(x, y)`` with 16-bit unsigned components.

    Coordinates are only partially ordered: ``a <= b`` holds when ``a`` is
    not greater than ``b`` on either axis. Two coordinates that differ in
    opposite directions on the two axes are incomparable, and every ordering
    operator returns ``False`` for them.
    """

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.x <= SMALL_NAT_MAX and 0 <= self.y <= SMALL_NAT_MAX):
            raise ValueError(
                f"Coordinate components must lie in [0, {SMALL_NAT_MAX}], "
                f"got ({self.x}, {self.y})."
            )

    @classmethod
    def from_ints(cls, x: int, y: int) -> Coordinate:
        """Build a coordinate, truncating each component to 16 bits."""
        return cls(x % _MODULUS, y % _MODULUS)

    @classmethod
    def decode(cls, index: int) -> Coordinate:
        """Inverse of :meth:`encode`."""
        if not 0 <= index < _MODULUS * _MODULUS:
            raise ValueError(f"Index {index} is outside the coordinate space.")
        x, y = deinterleave(index)
        return cls(x, y)

    def encode(self) -> int:
        """Return the dense storage index of this coordinate."""
        return interleave(self.x, self.y)

    def move_towards(self, direction: Direction) -> TentativeCoordinate:
        """Step one tile towards *direction* without any bounds check.

        Components wrap around at the 16-bit boundary, so stepping West
        from ``x == 0`` yields ``x == 65535``.
        """
        dx, dy = direction.value
        return TentativeCoordinate((self.x + dx) % _MODULUS, (self.y + dy) % _MODULUS)

    def partial_cmp(self, other: Coordinate) -> int | None:
        """Compare under the partial order.

        Returns ``-1``, ``0`` or ``1``, or ``None`` when the coordinates are
        incomparable.
        """
        cx = (self.x > other.x) - (self.x < other.x)
        cy = (self.y > other.y) - (self.y < other.y)
        if cx == 0:
            return cy
        if cy == 0 or cx == cy:
            return cx
        return None

    def __lt__(self, other: Coordinate) -> bool:
        return self.partial_cmp(other) == -1

    def __le__(self, other: Coordinate) -> bool:
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: Coordinate) -> bool:
        return self.partial_cmp(other) == 1

    def __ge__(self, other: Coordinate) -> bool:
        return self.partial_cmp(other) in (0, 1)

    def to_list(self) -> list[int]:
        return [self.x, self.y]


class TentativeCoordinate:
    """Result of an unchecked move, pending resolution by a bounding policy.

    The wrapped value is deliberately private: the only way to turn it into
    a :class:`Coordinate` is through :meth:`inside` or one of the two
    resolution primitives used by the policies.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x: int, y: int) -> None:
        self._x = x
        self._y = y

    def __repr__(self) -> str:
        return f"TentativeCoordinate({self._x}, {self._y})"

    def clip_inside(self, width: int, height: int) -> Coordinate | None:
        """Return the coordinate if it already lies inside ``width × height``."""
        if self._x < width and self._y < height:
            return Coordinate(self._x, self._y)
        return None

    def wrap_inside(self, width: int, height: int) -> Coordinate:
        """Reduce both components into ``width × height`` (toroidal wrap)."""
        if width <= 0 or height <= 0:
            raise ValueError("Bounds must be positive to wrap a coordinate.")
        return Coordinate(
            (self._x + width) % _MODULUS % width,
            (self._y + height) % _MODULUS % height,
        )

    def inside(self, policy: type[BoundingPolicy], grid: Grid) -> Coordinate | None:
        """Resolve against *grid* with the bounding *policy* chosen by the caller."""
        return policy.resolve(self, grid.width, grid.height)
