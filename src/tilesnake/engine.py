"""Snake game model and tile renderer built on the simulation core."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from tilesnake.bounding import BoundingPolicy
from tilesnake.config import GameConfig
from tilesnake.coordinate import Coordinate, Direction
from tilesnake.food import FoodSpawner
from tilesnake.grid import CellState, Grid
from tilesnake.model import GameOver, Model, ModelPhase
from tilesnake.render import Color, DrawGrid, Renderer, UnitInterval
from tilesnake.snake import Snake

logger = logging.getLogger(__name__)

_FOOD_RADIUS = UnitInterval(0.6)


class WallCollision(GameOver):
    """The snake ran into a wall."""


class SelfCollision(GameOver):
    """The snake ran into its own body."""


@dataclass(frozen=True)
class SnakeUpdate:
    """What changed on the board during one tick.

    ``setup`` carries ``(width, height)`` when the drawing surface must be
    (re)allocated, which happens on the first update of every game.
    """

    head: Coordinate | None = None
    direction: Direction = Direction.EAST
    vacated: Coordinate | None = None
    vacated_direction: Direction | None = None
    food: tuple[Coordinate, ...] = ()
    setup: tuple[int, int] | None = None
    crashed: bool = False
    score: int = 0


class SnakeModel(Model):
    """Single-snake game logic.

    The model owns the grid, snake, and food spawner. Commands are
    :class:`Direction` values. The bounding policy decides whether the
    snake wraps around the edges or dies against them; it is fixed at
    construction.

    A crash is reported twice: :meth:`step` first returns an update with
    ``crashed=True`` so the renderer can show it, and the following call
    raises :class:`WallCollision` or :class:`SelfCollision`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        policy: type[BoundingPolicy] | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.policy = policy if policy is not None else cfg.policy
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid.empty(cfg.grid_width, cfg.grid_height)
        self.food = FoodSpawner(self.grid, max_food=cfg.max_food, rng=self.rng)
        self.snake: Snake | None = None

        self.phase = ModelPhase.UNINITIALIZED
        self.score = 0
        self.tick = 0
        self.high_score = 0
        self.games_played = 0
        self._crash: GameOver | None = None

    def initialize(self) -> Iterator[SnakeUpdate]:
        """Reset the board and lazily yield the updates that draw it."""
        self.grid.clear()
        self.food.reset()
        head = Coordinate(self.grid.width // 2, self.grid.height // 2)
        self.snake = Snake(head, Direction.EAST, length=self.config.initial_snake_length)
        for seg in self.snake.body:
            self.grid[seg] = CellState.snake(self.snake.direction)
        spawned = self.food.spawn(self.config.max_food)

        self.score = 0
        self.tick = 0
        self._crash = None
        self.phase = ModelPhase.RUNNING
        return self._initial_updates(list(reversed(self.snake.body)), spawned)

    def _initial_updates(
        self, segments: list[Coordinate], food: list[Coordinate],
    ) -> Iterator[SnakeUpdate]:
        setup: tuple[int, int] | None = (self.grid.width, self.grid.height)
        for seg in segments:
            yield SnakeUpdate(head=seg, direction=self.snake.direction, setup=setup)
            setup = None
        for pos in food:
            yield SnakeUpdate(food=(pos,))

    def step(self, command: Direction | None) -> SnakeUpdate:
        """Advance the game by one tick."""
        if self._crash is not None:
            self.phase = ModelPhase.TERMINATED
            raise self._crash
        if self.phase is not ModelPhase.RUNNING:
            raise RuntimeError("step() called before initialize().")

        if command is not None:
            self.snake.set_direction(command)
        direction = self.snake.direction

        target = self.snake.next_head(self.policy, self.grid)
        if target is None:
            return self._crash_with(WallCollision(
                f"Hit the wall at tick {self.tick} with score {self.score}."
            ))

        cell = self.grid[target]
        # The tail moves away this tick, so stepping onto it is allowed.
        if cell.is_snake and target != self.snake.tail:
            return self._crash_with(SelfCollision(
                f"Bit itself at tick {self.tick} with score {self.score}."
            ))

        grow = cell is CellState.FOOD
        tail_direction = self.grid[self.snake.tail].direction
        vacated = self.snake.advance(target, grow=grow)
        if vacated is not None and vacated != target:
            self.grid[vacated] = CellState.EMPTY
        self.grid[target] = CellState.snake(direction)

        food: tuple[Coordinate, ...] = ()
        if grow:
            self.food.consume(target)
            self.score += 1
            food = tuple(self.food.spawn(1))

        self.tick += 1
        return SnakeUpdate(
            head=target,
            direction=direction,
            vacated=vacated,
            vacated_direction=tail_direction if vacated is not None else None,
            food=food,
            score=self.score,
        )

    def tear_down(self) -> None:
        """Record the finished game and drop the snake."""
        if self.phase is ModelPhase.UNINITIALIZED:
            return
        self.games_played += 1
        self.high_score = max(self.high_score, self.score)
        logger.info(
            "Game %d finished at tick %d with score %d.",
            self.games_played, self.tick, self.score,
        )
        self.snake = None
        self._crash = None
        self.phase = ModelPhase.UNINITIALIZED

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "game_over": self._crash is not None,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict() if self.snake is not None else None,
            "food": self.food.to_dict(),
        }

    def _crash_with(self, exc: GameOver) -> SnakeUpdate:
        self._crash = exc
        self.tick += 1
        logger.info("Snake crashed: %s", exc)
        return SnakeUpdate(direction=self.snake.direction, crashed=True, score=self.score)


class TileRenderer(Renderer):
    """Draws a :class:`SnakeUpdate` on a :class:`DrawGrid` surface.

    The new head grows into its tile and the vacated tail shrinks out of
    its tile over :attr:`frames` increments.
    """

    tile_size = 16
    frames = 4

    def __init__(self, update: SnakeUpdate) -> None:
        self.update = update
        self._frame = 0

    @classmethod
    def create(cls, update: SnakeUpdate, env: DrawGrid) -> TileRenderer:
        return cls(update)

    @classmethod
    def configured(cls, tile_size: int, frames: int) -> type[TileRenderer]:
        """Return a renderer class with the given tile size and frame count."""

        class ConfiguredTileRenderer(cls):
            pass

        ConfiguredTileRenderer.tile_size = tile_size
        ConfiguredTileRenderer.frames = frames
        return ConfiguredTileRenderer

    def render(self, env: DrawGrid) -> bool:
        update = self.update
        if self._frame == 0:
            self._draw_static(env)
        self._frame += 1

        if update.crashed:
            if self._frame == 1:
                env.show_game_over()
            return self._frame < self.frames
        if update.head is None and update.vacated is None:
            return False

        progress = UnitInterval.clamped(self._frame / self.frames)
        if update.vacated is not None:
            env.clear_tile(
                update.vacated.x, update.vacated.y,
                update.vacated_direction or update.direction, progress,
            )
        if update.head is not None:
            previous = env.set_fill_color(Color.GREEN)
            env.fill_tile(update.head.x, update.head.y, update.direction, progress)
            env.set_fill_color(previous)
        return self._frame < self.frames

    def _draw_static(self, env: DrawGrid) -> None:
        update = self.update
        if update.setup is not None:
            width, height = update.setup
            env.setup(self.tile_size, width, height)
            env.clear()
        if update.food:
            previous = env.set_fill_color(Color.RED)
            for pos in update.food:
                env.circle(pos.x, pos.y, _FOOD_RADIUS)
            env.set_fill_color(previous)
