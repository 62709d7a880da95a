"""Dense tile grid stored in Morton (Z-order) layout."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Iterator

import numpy as np

from tilesnake._morton import deinterleave, interleave
from tilesnake.coordinate import SMALL_NAT_MAX, Coordinate, Direction

logger = logging.getLogger(__name__)

# Every cell state fits in a single byte of backing storage.
CELL_DTYPE = np.uint8


class OutOfBoundsError(IndexError):
    """Raised when writing to a coordinate outside the grid rectangle."""


class CellState(enum.IntEnum):
    """Integer codes stored in the grid array.

    Snake segments carry the direction they point in, one code per
    direction. ``OUT_OF_BOUNDS`` marks storage slots that exist only
    because of gaps in the Morton index.
    """

    EMPTY = 0
    FOOD = 1
    OUT_OF_BOUNDS = 2
    SNAKE_NORTH = 4
    SNAKE_SOUTH = 5
    SNAKE_EAST = 6
    SNAKE_WEST = 7

    @classmethod
    def snake(cls, direction: Direction) -> CellState:
        """Return the snake segment state pointing towards *direction*."""
        return _SNAKE_STATES[direction]

    @property
    def is_empty(self) -> bool:
        return self is CellState.EMPTY

    @property
    def is_snake(self) -> bool:
        return self in _SNAKE_DIRECTIONS

    @property
    def direction(self) -> Direction | None:
        """Direction of a snake segment, ``None`` for any other state."""
        return _SNAKE_DIRECTIONS.get(self)


_SNAKE_STATES: dict[Direction, CellState] = {
    Direction.NORTH: CellState.SNAKE_NORTH,
    Direction.SOUTH: CellState.SNAKE_SOUTH,
    Direction.EAST: CellState.SNAKE_EAST,
    Direction.WEST: CellState.SNAKE_WEST,
}
_SNAKE_DIRECTIONS: dict[CellState, Direction] = {
    state: direction for direction, state in _SNAKE_STATES.items()
}


def _outside_mask(size: int, width: int, height: int) -> np.ndarray:
    """Boolean mask of storage slots decoding outside ``width × height``."""
    xs, ys = deinterleave(np.arange(size, dtype=np.int64))
    return (xs >= width) | (ys >= height)


class Grid:
    """NumPy-backed tile grid addressed through a Morton index.

    ``cells`` is a flat ``uint8`` array covering every index up to the
    encoding of ``(width - 1, height - 1)``. Slots inside the rectangle are
    never ``OUT_OF_BOUNDS``; slots outside it always are. Use
    :meth:`empty` or :meth:`from_entries` to build a grid.
    """

    def __init__(self, cells: np.ndarray, width: int, height: int) -> None:
        expected = interleave(width - 1, height - 1) + 1
        if cells.shape != (expected,):
            raise ValueError(
                f"Backing array of shape {cells.shape} does not cover a "
                f"{width}x{height} grid (expected {expected} slots)."
            )
        self.cells = cells
        self.width = width
        self.height = height
        self._row_major: np.ndarray | None = None

    @classmethod
    def empty(cls, width: int = 20, height: int = 20) -> Grid:
        """Create a grid with every in-rectangle cell empty.

        Dimensions below 1 are raised to 1.
        """
        width = max(1, width)
        height = max(1, height)
        if width > SMALL_NAT_MAX or height > SMALL_NAT_MAX:
            raise ValueError(f"Grid dimensions must not exceed {SMALL_NAT_MAX}.")
        size = interleave(width - 1, height - 1) + 1
        cells = np.where(
            _outside_mask(size, width, height),
            CellState.OUT_OF_BOUNDS.value,
            CellState.EMPTY.value,
        ).astype(CELL_DTYPE)
        return cls(cells, width, height)

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[Coordinate, CellState]]) -> Grid:
        """Build a grid from a sparse sequence of ``(coordinate, state)`` pairs.

        The rectangle is inferred from the largest ``x`` and ``y`` seen.
        Storage grows on demand; slots created during growth start empty and
        are re-marked ``OUT_OF_BOUNDS`` in a final pass if they fall outside
        the inferred rectangle. Duplicate coordinates keep the last state.
        """
        cells = np.full(1, CellState.EMPTY.value, dtype=CELL_DTYPE)
        x_max = 0
        y_max = 0
        for coord, state in entries:
            state = CellState(state)
            if state is CellState.OUT_OF_BOUNDS:
                raise ValueError(f"Cannot place OUT_OF_BOUNDS at {coord}.")
            x_max = max(x_max, coord.x)
            y_max = max(y_max, coord.y)
            needed = interleave(x_max, y_max) + 1
            if needed > cells.size:
                grown = np.full(needed, CellState.EMPTY.value, dtype=CELL_DTYPE)
                grown[:cells.size] = cells
                cells = grown
            cells[coord.encode()] = state.value

        width = x_max + 1
        height = y_max + 1
        cells[_outside_mask(cells.size, width, height)] = CellState.OUT_OF_BOUNDS.value
        logger.debug("Built %dx%d grid from sparse entries.", width, height)
        return cls(cells, width, height)

    def in_bounds(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies within the grid rectangle."""
        return coord.x < self.width and coord.y < self.height

    def random_coordinate(self, rng: np.random.Generator) -> Coordinate:
        """Sample a uniformly random in-rectangle coordinate from *rng*."""
        x = int(rng.integers(0, self.width))
        y = int(rng.integers(0, self.height))
        return Coordinate(x, y)

    def clear(self) -> None:
        """Reset all in-rectangle cells to empty without reallocating."""
        self.cells[self.cells != CellState.OUT_OF_BOUNDS.value] = CellState.EMPTY.value

    def __getitem__(self, coord: Coordinate) -> CellState:
        if not self.in_bounds(coord):
            return CellState.OUT_OF_BOUNDS
        return CellState(int(self.cells[coord.encode()]))

    def __setitem__(self, coord: Coordinate, state: CellState) -> None:
        if not self.in_bounds(coord):
            raise OutOfBoundsError(
                f"Cannot write {coord} outside the {self.width}x{self.height} grid."
            )
        if state == CellState.OUT_OF_BOUNDS:
            raise ValueError("OUT_OF_BOUNDS cannot be written inside the grid.")
        self.cells[coord.encode()] = int(state)

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every in-rectangle coordinate, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def _row_major_indices(self) -> np.ndarray:
        """``(height, width)`` array of storage indices, computed once."""
        if self._row_major is None:
            xs = np.arange(self.width, dtype=np.int64)
            ys = np.arange(self.height, dtype=np.int64)
            self._row_major = interleave(xs[np.newaxis, :], ys[:, np.newaxis])
        return self._row_major

    def to_array(self) -> np.ndarray:
        """Return a ``(height, width)`` copy of the cell states."""
        return self.cells[self._row_major_indices()]

    def empty_coordinates(self) -> list[Coordinate]:
        """Return all empty coordinates in row-major order."""
        ys, xs = np.nonzero(self.to_array() == CellState.EMPTY.value)
        return [Coordinate(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def count(self, state: CellState) -> int:
        """Count the storage slots holding *state*."""
        return int(np.count_nonzero(self.cells == int(state)))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary (rows of cell codes)."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": self.to_array().tolist(),
        }
