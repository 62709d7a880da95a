"""Render contract consumed by the driver and the drawing surface protocol."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any, Protocol

from tilesnake.coordinate import Direction


class RendererExhaustedError(RuntimeError):
    """Raised when a renderer is resumed after it reported completion."""


class Renderer(abc.ABC):
    """Paints exactly one update, possibly across several increments."""

    @classmethod
    @abc.abstractmethod
    def create(cls, update: Any, env: Any) -> Renderer:
        """Build a renderer responsible for *update*."""

    @abc.abstractmethod
    def render(self, env: Any) -> bool:
        """Perform one increment of drawing work.

        Returns ``True`` while more work remains and ``False`` once done.
        """


class RenderTask:
    """Drives a renderer one increment per :meth:`resume` call."""

    __slots__ = ("renderer", "env", "done", "increments")

    def __init__(self, renderer: Renderer, env: Any) -> None:
        self.renderer = renderer
        self.env = env
        self.done = False
        self.increments = 0

    def resume(self) -> bool:
        """Run one increment; return ``True`` if the renderer needs more."""
        if self.done:
            raise RendererExhaustedError(
                f"{type(self.renderer).__name__} already reported completion."
            )
        more = bool(self.renderer.render(self.env))
        self.increments += 1
        if not more:
            self.done = True
        return more


class Color(enum.Enum):
    """Fill colors with their RGB components."""

    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)
    GREEN = (46, 160, 67)
    RED = (218, 54, 51)


@dataclass(frozen=True)
class UnitInterval:
    """A fraction in ``[0, 1]`` used for partial tiles and circle radii."""

    value: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"UnitInterval must lie in [0, 1], got {self.value}.")

    @classmethod
    def clamped(cls, value: float) -> UnitInterval:
        return cls(min(1.0, max(0.0, value)))

    def scale(self, length: float) -> float:
        return self.value * length


class DrawGrid(Protocol):
    """Drawing capability of a tile surface, as used by concrete renderers."""

    def setup(self, tile_size: int, width: int, height: int) -> None: ...
    def clear(self) -> None: ...
    def set_fill_color(self, color: Color) -> Color: ...
    def fill_tile(self, x: int, y: int, direction: Direction, size: UnitInterval) -> None: ...
    def clear_tile(self, x: int, y: int, direction: Direction, size: UnitInterval) -> None: ...
    def circle(self, x: int, y: int, radius: UnitInterval) -> None: ...
    def show_game_over(self) -> None: ...


def partial_tile(
    tile_size: float,
    x: int,
    y: int,
    direction: Direction,
    size: UnitInterval,
) -> tuple[float, float, float, float]:
    """Pixel rectangle ``(x, y, w, h)`` of a tile filled up to *size*.

    The filled part starts at the edge opposite *direction* and grows
    towards it, so a segment moving East fills from its western edge.
    """
    x0 = x * tile_size
    y0 = y * tile_size
    long = tile_size
    short = size.scale(tile_size)

    if direction is Direction.EAST:
        return x0, y0, short, long
    if direction is Direction.WEST:
        return x0 + long - short, y0, short, long
    if direction is Direction.SOUTH:
        return x0, y0, long, short
    return x0, y0 + long - short, long, short
