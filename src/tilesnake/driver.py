"""Cooperative game driver composing a model, an environment and a renderer."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterator
from typing import Any

from tilesnake.coordinate import Key
from tilesnake.model import GameOver, Model, ModelPhase
from tilesnake.render import Renderer, RenderTask

logger = logging.getLogger(__name__)


class DriverPhase(enum.Enum):
    """Cursor recording where the driver resumes on the next tick."""

    START = "start"
    INITIAL = "initial"
    INITIAL_RENDER = "initial_render"
    STEP = "step"
    STEP_RENDER = "step_render"
    TEAR_DOWN = "tear_down"


class CommandCell:
    """Single-slot, last-write-wins cell shared by the host and the driver.

    The host overwrites the value whenever input arrives; the driver reads
    whatever is current once per step. Nothing is queued, so a value
    overwritten before the next read is lost.
    """

    __slots__ = ("default", "_value")

    def __init__(self, default: Any = None) -> None:
        self.default = default
        self._value = default

    def set(self, value: Any) -> None:
        self._value = value

    def get(self) -> Any:
        return self._value

    def reset(self) -> None:
        self._value = self.default


def to_command(value: Any) -> Any | None:
    """Default conversion of a cell value into a model command."""
    if value is None:
        return None
    return value.to_command()


class GameDriver:
    """Restartable, infinite control flow driven one suspension at a time.

    Every call to :meth:`resume` runs until the next suspension point and
    returns the phase the driver will continue from. The driver suspends
    whenever a renderer reports that more work remains, and once after
    every ``tear_down()``. A renderer that finishes in a single call costs
    no tick; the driver moves straight on to the next update.

    One cycle:

    1. ``model.initialize()``; render each initial update to completion.
    2. Read the command cell, convert it, call ``model.step``. Render the
       returned update, or leave the loop on :class:`GameOver`.
    3. ``model.tear_down()``, then start again at 1.

    A renderer that never reports completion stalls the driver; there is
    no timeout. A model that never ends and whose updates all render in a
    single call never suspends either.
    """

    def __init__(
        self,
        model: Model,
        env: Any,
        renderer_cls: type[Renderer],
        cell: CommandCell | None = None,
        convert: Callable[[Any], Any | None] = to_command,
    ) -> None:
        self.model = model
        self.env = env
        self.renderer_cls = renderer_cls
        self.cell = cell if cell is not None else CommandCell()
        self.convert = convert

        self.phase = DriverPhase.START
        self.model_phase = ModelPhase.UNINITIALIZED
        self.cycle = 0
        self.steps = 0
        self.frames = 0
        self.last_game_over: GameOver | None = None
        self._initial: Iterator[Any] | None = None
        self._task: RenderTask | None = None

    def __iter__(self) -> GameDriver:
        return self

    def __next__(self) -> DriverPhase:
        return self.resume()

    def resume(self) -> DriverPhase:
        """Advance to the next suspension point."""
        while True:
            if self.phase is DriverPhase.START:
                self.cycle += 1
                logger.info("Starting game cycle %d.", self.cycle)
                self._initial = iter(self.model.initialize())
                self.model_phase = ModelPhase.RUNNING
                self.phase = DriverPhase.INITIAL

            elif self.phase is DriverPhase.INITIAL:
                update = next(self._initial, _EXHAUSTED)
                if update is _EXHAUSTED:
                    self._initial = None
                    self.phase = DriverPhase.STEP
                else:
                    self._begin_render(update)
                    self.phase = DriverPhase.INITIAL_RENDER

            elif self.phase is DriverPhase.INITIAL_RENDER:
                if self._render_increment():
                    return self.phase
                self.phase = DriverPhase.INITIAL

            elif self.phase is DriverPhase.STEP:
                command = self.convert(self.cell.get())
                try:
                    update = self.model.step(command)
                except GameOver as exc:
                    logger.info(
                        "Game over in cycle %d after %d steps: %s",
                        self.cycle, self.steps, exc,
                    )
                    self.last_game_over = exc
                    self.model_phase = ModelPhase.TERMINATED
                    self.phase = DriverPhase.TEAR_DOWN
                    continue
                self.steps += 1
                logger.debug("Step %d with command %r.", self.steps, command)
                self._begin_render(update)
                self.phase = DriverPhase.STEP_RENDER

            elif self.phase is DriverPhase.STEP_RENDER:
                if self._render_increment():
                    return self.phase
                self.phase = DriverPhase.STEP

            elif self.phase is DriverPhase.TEAR_DOWN:
                self.model.tear_down()
                self.model_phase = ModelPhase.UNINITIALIZED
                self.phase = DriverPhase.START
                return self.phase

    def run(self, ticks: int) -> None:
        """Resume the driver *ticks* times."""
        for _ in range(ticks):
            self.resume()

    def _begin_render(self, update: Any) -> None:
        renderer = self.renderer_cls.create(update, self.env)
        self._task = RenderTask(renderer, self.env)

    def _render_increment(self) -> bool:
        more = self._task.resume()
        self.frames += 1
        if not more:
            self._task = None
        return more


_EXHAUSTED = object()


def make_game(
    model: Model,
    env: Any,
    renderer_cls: type[Renderer],
    default: Any = None,
) -> tuple[CommandCell, GameDriver]:
    """Wire a model, environment and renderer into a driver.

    Returns the command cell the host writes input into, and the driver.
    The cell starts out holding *default* (a released :class:`Key` unless
    given).
    """
    cell = CommandCell(default if default is not None else Key.none())
    return cell, GameDriver(model, env, renderer_cls, cell)
