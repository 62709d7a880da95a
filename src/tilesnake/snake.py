"""Snake representation and movement logic."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from tilesnake.coordinate import Coordinate, Direction

if TYPE_CHECKING:
    from tilesnake.bounding import BoundingPolicy
    from tilesnake.grid import Grid


class Snake:
    """A snake represented as an ordered deque of coordinates.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        head: Coordinate,
        direction: Direction = Direction.EAST,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Coordinate] = deque()
        for i in range(length):
            x = head.x - dx * i
            y = head.y - dy * i
            if x < 0 or y < 0:
                raise ValueError(
                    f"A snake of length {length} does not fit behind {head}."
                )
            self.body.append(Coordinate(x, y))
        self.direction = direction

    @property
    def head(self) -> Coordinate:
        return self.body[0]

    @property
    def tail(self) -> Coordinate:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def set_direction(self, new_direction: Direction) -> None:
        """Change direction, ignoring 180° reversals."""
        if new_direction.opposite() != self.direction:
            self.direction = new_direction

    def next_head(
        self, policy: type[BoundingPolicy], grid: Grid,
    ) -> Coordinate | None:
        """Compute the next head position under *policy* without moving."""
        return self.head.move_towards(self.direction).inside(policy, grid)

    def advance(self, new_head: Coordinate, grow: bool = False) -> Coordinate | None:
        """Move the head onto *new_head*.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [seg.to_list() for seg in self.body],
            "direction": self.direction.name.lower(),
        }
