"""Simulation model contract and two trivial models."""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

logger = logging.getLogger(__name__)


class GameOver(Exception):
    """Raised by :meth:`Model.step` when the game has ended.

    Models report every failure that ends a game as a subclass of this
    exception; the driver treats all of them as plain termination.
    """


class ModelPhase(enum.Enum):
    """Lifecycle of a model within one driver cycle."""

    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    TERMINATED = "terminated"


class Model(abc.ABC):
    """Pure state-transition logic driven by :class:`~tilesnake.driver.GameDriver`.

    One cycle is ``initialize()``, any number of ``step()`` calls until one
    raises :class:`GameOver`, then ``tear_down()``. The driver starts a new
    cycle on the same instance afterwards.
    """

    @abc.abstractmethod
    def initialize(self) -> Iterable[Any]:
        """Prepare a new game and return its initial updates.

        The returned iterable may be lazy; the driver renders each update
        before the first :meth:`step`.
        """

    @abc.abstractmethod
    def step(self, command: Any | None) -> Any:
        """Advance by one tick with the latest command, or ``None``.

        Returns the next update. Raises :class:`GameOver` (or a subclass)
        once the game has ended; the model must not be stepped again until
        the next :meth:`initialize`.
        """

    @abc.abstractmethod
    def tear_down(self) -> None:
        """Release per-game resources. Safe to call more than once."""


class EmptyModel(Model):
    """A model with no initial updates that ends on its first step."""

    def initialize(self) -> Iterator[Any]:
        return iter(())

    def step(self, command: Any | None) -> Any:
        raise GameOver("Empty model has nothing to play.")

    def tear_down(self) -> None:
        pass


class ReplayModel(Model):
    """Replays a fixed list of updates, ignoring commands.

    Each cycle starts again from the first update.
    """

    def __init__(self, updates: Sequence[Any]) -> None:
        self.updates = list(updates)
        self.index = 0

    def initialize(self) -> Iterator[Any]:
        self.index = 0
        return iter(())

    def step(self, command: Any | None) -> Any:
        if self.index >= len(self.updates):
            raise GameOver(f"Replay finished after {len(self.updates)} updates.")
        update = self.updates[self.index]
        self.index += 1
        return update

    def tear_down(self) -> None:
        logger.debug("Replay torn down at update %d.", self.index)
