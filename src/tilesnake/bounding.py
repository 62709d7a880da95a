"""Policies that resolve a tentative coordinate against grid bounds.

A call site picks its policy by passing the class itself, e.g.
``head.move_towards(d).inside(Wrapping, grid)``. The policy is fixed when
the call site is written (or once at construction time via
:func:`policy_for`), never re-selected per tick.
"""

from __future__ import annotations

import abc
import enum

from tilesnake.coordinate import Coordinate, TentativeCoordinate


class WallMode(enum.Enum):
    """Defines behavior when a snake reaches the grid boundary."""

    DEATH = "death"
    WRAP = "wrap"


class BoundingPolicy(abc.ABC):
    """Narrow interface shared by :class:`Wrapping` and :class:`Clipping`."""

    @staticmethod
    @abc.abstractmethod
    def resolve(
        tentative: TentativeCoordinate, width: int, height: int,
    ) -> Coordinate | None:
        """Return a definite coordinate, or ``None`` if the move is rejected."""


class Wrapping(BoundingPolicy):
    """Toroidal topology: leaving one edge re-enters at the opposite one."""

    @staticmethod
    def resolve(
        tentative: TentativeCoordinate, width: int, height: int,
    ) -> Coordinate:
        return tentative.wrap_inside(width, height)


class Clipping(BoundingPolicy):
    """Hard walls: anything outside the rectangle resolves to ``None``."""

    @staticmethod
    def resolve(
        tentative: TentativeCoordinate, width: int, height: int,
    ) -> Coordinate | None:
        return tentative.clip_inside(width, height)


_POLICIES: dict[WallMode, type[BoundingPolicy]] = {
    WallMode.WRAP: Wrapping,
    WallMode.DEATH: Clipping,
}


def policy_for(mode: WallMode | str) -> type[BoundingPolicy]:
    """Map a configured wall mode to its bounding policy class."""
    return _POLICIES[WallMode(mode)]
