"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from tilesnake.bounding import BoundingPolicy, WallMode, policy_for
from tilesnake.coordinate import SMALL_NAT_MAX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Settings for one snake game and its renderer.

    Supports JSON serialization for reproducible runs.
    """

    # Grid
    grid_width: int = 20
    grid_height: int = 20
    wall_mode: str = "death"

    # Rules
    initial_snake_length: int = 3
    max_food: int = 1
    seed: int | None = None

    # Rendering
    tile_size: int = 16
    render_frames: int = 4

    def __post_init__(self) -> None:
        if not (1 <= self.grid_width <= SMALL_NAT_MAX
                and 1 <= self.grid_height <= SMALL_NAT_MAX):
            raise ValueError(
                f"grid_width and grid_height must lie in [1, {SMALL_NAT_MAX}]."
            )
        WallMode(self.wall_mode)
        if self.initial_snake_length < 1:
            raise ValueError("initial_snake_length must be at least 1.")
        if self.initial_snake_length - 1 > self.grid_width // 2:
            raise ValueError(
                "initial_snake_length does not fit the configured grid; "
                "increase grid_width or reduce the length."
            )
        if self.max_food < 1:
            raise ValueError("max_food must be at least 1.")
        if self.tile_size < 1:
            raise ValueError("tile_size must be at least 1.")
        # Every move has to suspend the driver at least once.
        if self.render_frames < 2:
            raise ValueError("render_frames must be at least 2.")

    @property
    def policy(self) -> type[BoundingPolicy]:
        """Bounding policy matching :attr:`wall_mode`."""
        return policy_for(self.wall_mode)

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **overrides) -> GameConfig:
        """Return a copy with *overrides* applied (``None`` values ignored)."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**d)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
