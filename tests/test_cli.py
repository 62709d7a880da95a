"""Tests for the command-line launcher."""

from tilesnake.cli import _build_parser, _parse_keys, main
from tilesnake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_run_defaults(self):
        args = _build_parser().parse_args(["run"])
        assert args.command == "run"
        assert args.ticks == 1_000
        assert args.config is None
        assert not args.random_keys

    def test_run_with_flags(self):
        args = _build_parser().parse_args([
            "run", "--ticks", "50", "--grid-width", "12",
            "--wall-mode", "wrap", "--keys", "38,37",
        ])
        assert args.ticks == 50
        assert args.grid_width == 12
        assert args.wall_mode == "wrap"
        assert _parse_keys(args.keys) == [38, 37]

    def test_parse_keys_empty(self):
        assert _parse_keys("") == []


class TestCLIRun:
    def test_scripted_run(self, capsys):
        result = main([
            "run", "--ticks", "200", "--grid-width", "10", "--grid-height", "10",
            "--seed", "1", "--keys", "38,37,40,39", "--key-interval", "5", "--show",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "ticks=200" in out
        assert "cycles=" in out

    def test_random_keys_wrap(self, capsys):
        result = main([
            "run", "--ticks", "100", "--wall-mode", "wrap",
            "--random-keys", "--seed", "3",
        ])
        assert result == 0
        assert "best_score=" in capsys.readouterr().out

    def test_run_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "game.json"
        GameConfig(grid_width=8, grid_height=8, seed=2).save(path)
        assert main(["run", "--config", str(path), "--ticks", "30"]) == 0
        assert "ticks=30" in capsys.readouterr().out


class TestCLIConfig:
    def test_writes_config(self, tmp_path):
        path = tmp_path / "out.json"
        assert main(["config", str(path), "--grid-width", "11", "--wall-mode", "wrap"]) == 0
        loaded = GameConfig.load(path)
        assert loaded.grid_width == 11
        assert loaded.wall_mode == "wrap"
