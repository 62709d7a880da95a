"""Command-line launcher for headless tilesnake runs."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilesnake.config import GameConfig

logger = logging.getLogger(__name__)

# Arrow key codes fed into the command cell by ``run --random-keys``.
_ARROW_CODES = (37, 38, 39, 40)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; flags override its values.",
    )
    parser.add_argument("--grid-width", type=int, default=None)
    parser.add_argument("--grid-height", type=int, default=None)
    parser.add_argument(
        "--wall-mode", type=str, default=None, choices=["death", "wrap"],
    )
    parser.add_argument("--snake-length", type=int, default=None)
    parser.add_argument("--max-food", type=int, default=None)
    parser.add_argument("--tile-size", type=int, default=None)
    parser.add_argument("--render-frames", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilesnake",
        description="Headless runs of the tilesnake simulation core.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Drive a snake game for a number of ticks.")
    _add_config_flags(run_p)
    run_p.add_argument("--ticks", type=int, default=1_000)
    run_p.add_argument(
        "--keys", type=str, default="",
        help="Comma-separated key codes pressed in turn, e.g. '38,37,40'.",
    )
    run_p.add_argument(
        "--random-keys", action="store_true",
        help="Press a random arrow key instead of a scripted one.",
    )
    run_p.add_argument(
        "--key-interval", type=int, default=8,
        help="Ticks between two key presses.",
    )
    run_p.add_argument(
        "--show", action="store_true",
        help="Print the final board as text.",
    )

    # --- config ---
    config_p = sub.add_parser("config", help="Write a config file.")
    config_p.add_argument("output", help="Path of the JSON file to write.")
    _add_config_flags(config_p)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    from tilesnake.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()
    return config.replace(
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        wall_mode=args.wall_mode,
        initial_snake_length=args.snake_length,
        max_food=args.max_food,
        tile_size=args.tile_size,
        render_frames=args.render_frames,
        seed=args.seed,
    )


def _parse_keys(raw: str) -> list[int]:
    return [int(code) for code in raw.split(",") if code.strip()]


def _run_game(args: argparse.Namespace) -> int:
    import numpy as np

    from tilesnake.canvas import Canvas
    from tilesnake.coordinate import Key
    from tilesnake.driver import make_game
    from tilesnake.engine import SnakeModel, TileRenderer

    if args.key_interval < 1:
        raise SystemExit("--key-interval must be at least 1.")
    config = _load_config(args)
    model = SnakeModel(config)
    canvas = Canvas()
    renderer_cls = TileRenderer.configured(config.tile_size, config.render_frames)
    cell, driver = make_game(model, canvas, renderer_cls)

    script = _parse_keys(args.keys)
    key_rng = np.random.default_rng(config.seed)
    presses = 0
    for tick in range(args.ticks):
        if tick % args.key_interval == 0:
            if args.random_keys:
                cell.set(Key(int(key_rng.choice(_ARROW_CODES))))
            elif script:
                cell.set(Key(script[presses % len(script)]))
            presses += 1
        driver.resume()

    best = max(model.high_score, model.score)
    print(  # noqa: T201
        f"ticks={args.ticks} cycles={driver.cycle} steps={driver.steps} "
        f"frames={driver.frames} games={model.games_played} best_score={best}"
    )
    if args.show:
        print(canvas.to_text())  # noqa: T201
    return 0


def _write_config(args: argparse.Namespace) -> int:
    config = _load_config(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``tilesnake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_game,
        "config": _write_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
