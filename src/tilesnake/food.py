"""Food placement logic."""

from __future__ import annotations

import logging

import numpy as np

from tilesnake.coordinate import Coordinate
from tilesnake.grid import CellState, Grid

logger = logging.getLogger(__name__)

# Random probes tried before scanning the whole grid for an empty cell.
_RANDOM_ATTEMPTS = 8


class FoodSpawner:
    """Manages food placement on the grid.

    Uses an injected NumPy generator for deterministic, reproducible
    placement.
    """

    def __init__(
        self,
        grid: Grid,
        max_food: int = 1,
        rng: np.random.Generator | None = None,
    ) -> None:
        if max_food < 1:
            raise ValueError("max_food must be at least 1.")
        self.grid = grid
        self.max_food = max_food
        self.rng = rng if rng is not None else np.random.default_rng()
        self.positions: list[Coordinate] = []

    def spawn(self, count: int = 1) -> list[Coordinate]:
        """Spawn up to *count* food items on empty cells.

        Returns the list of newly spawned positions.
        """
        needed = min(count, self.max_food - len(self.positions))
        spawned: list[Coordinate] = []
        for _ in range(max(0, needed)):
            pos = self._pick_empty()
            if pos is None:
                logger.warning("No empty cells available for food spawning.")
                break
            self.grid[pos] = CellState.FOOD
            self.positions.append(pos)
            spawned.append(pos)
        return spawned

    def _pick_empty(self) -> Coordinate | None:
        for _ in range(_RANDOM_ATTEMPTS):
            pos = self.grid.random_coordinate(self.rng)
            if self.grid[pos].is_empty:
                return pos
        empty = self.grid.empty_coordinates()
        if not empty:
            return None
        return empty[int(self.rng.integers(0, len(empty)))]

    def consume(self, coord: Coordinate) -> bool:
        """Forget the food at *coord* without touching the grid cell.

        Returns True if there was food there.
        """
        if coord in self.positions:
            self.positions.remove(coord)
            return True
        return False

    def remove(self, coord: Coordinate) -> bool:
        """Remove food at *coord* and empty its cell. Returns True if removed."""
        if self.consume(coord):
            self.grid[coord] = CellState.EMPTY
            return True
        return False

    def reset(self) -> None:
        self.positions.clear()

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "positions": [p.to_list() for p in self.positions],
            "max_food": self.max_food,
        }
