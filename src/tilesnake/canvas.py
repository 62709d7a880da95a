"""In-memory drawing surface backed by a NumPy pixel array."""

from __future__ import annotations

import logging

import numpy as np

from tilesnake.coordinate import Direction
from tilesnake.render import Color, UnitInterval, partial_tile

logger = logging.getLogger(__name__)

GAME_OVER_CAPTION = "Game Over"
_BACKGROUND = Color.WHITE

_TEXT_SYMBOLS: dict[tuple[int, int, int], str] = {
    _BACKGROUND.value: ".",
    Color.GREEN.value: "#",
    Color.RED.value: "*",
}


class Canvas:
    """A :class:`~tilesnake.render.DrawGrid` surface for headless runs.

    ``pixels`` has shape ``(height * tile_size, width * tile_size, 3)``.
    Text cannot be rasterized here; :meth:`show_game_over` records the
    caption and where it would be drawn instead.
    """

    def __init__(self) -> None:
        self.tile_size = 16
        self.width = 0
        self.height = 0
        self.color = Color.BLACK
        self.pixels = np.zeros((0, 0, 3), dtype=np.uint8)
        self.caption: str | None = None
        self.caption_position: tuple[float, float] | None = None

    def setup(self, tile_size: int, width: int, height: int) -> None:
        """(Re)allocate the surface for ``width × height`` tiles."""
        self.tile_size = tile_size
        self.width = width
        self.height = height
        self.pixels = np.empty((height * tile_size, width * tile_size, 3), dtype=np.uint8)
        self.pixels[:] = _BACKGROUND.value
        logger.debug("Canvas set up for %dx%d tiles of %dpx.", width, height, tile_size)

    def clear(self) -> None:
        self.pixels[:] = _BACKGROUND.value
        self.caption = None
        self.caption_position = None

    def set_fill_color(self, color: Color) -> Color:
        """Set the fill color and return the previous one."""
        previous = self.color
        self.color = color
        return previous

    def _paint(self, rect: tuple[float, float, float, float], rgb: tuple[int, int, int]) -> None:
        x, y, w, h = rect
        x0, y0 = int(round(x)), int(round(y))
        x1, y1 = int(round(x + w)), int(round(y + h))
        self.pixels[y0:y1, x0:x1] = rgb

    def fill_tile(self, x: int, y: int, direction: Direction, size: UnitInterval) -> None:
        self._paint(partial_tile(self.tile_size, x, y, direction, size), self.color.value)

    def clear_tile(self, x: int, y: int, direction: Direction, size: UnitInterval) -> None:
        self._paint(partial_tile(self.tile_size, x, y, direction, size), _BACKGROUND.value)

    def circle(self, x: int, y: int, radius: UnitInterval) -> None:
        """Fill a circle centred in tile ``(x, y)``."""
        ts = self.tile_size
        r_full = ts / 2.0
        r = radius.scale(r_full)
        rows, cols = np.ogrid[0:ts, 0:ts]
        mask = (rows + 0.5 - r_full) ** 2 + (cols + 0.5 - r_full) ** 2 <= r * r
        tile = self.pixels[y * ts:(y + 1) * ts, x * ts:(x + 1) * ts]
        tile[mask] = self.color.value

    def show_game_over(self) -> None:
        # Same offsets a 36px serif caption needs to look centred.
        px_height, px_width = self.pixels.shape[:2]
        self.caption = GAME_OVER_CAPTION
        self.caption_position = (px_width / 2.0 - 120.0, px_height / 2.0 - 24.0)

    def tile_color(self, x: int, y: int) -> tuple[int, int, int]:
        """RGB value at the centre of tile ``(x, y)``."""
        half = self.tile_size // 2
        pixel = self.pixels[y * self.tile_size + half, x * self.tile_size + half]
        return tuple(int(c) for c in pixel)

    def to_text(self) -> str:
        """Render tile centres as text, one character per tile."""
        lines = []
        for y in range(self.height):
            lines.append("".join(
                _TEXT_SYMBOLS.get(self.tile_color(x, y), "?") for x in range(self.width)
            ))
        if self.caption is not None:
            lines.append(self.caption)
        return "\n".join(lines)
