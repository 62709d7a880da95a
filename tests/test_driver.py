"""Tests for the cooperative game driver and the model/render contracts."""

import pytest

from tilesnake.coordinate import Direction, Key
from tilesnake.driver import CommandCell, DriverPhase, GameDriver, make_game, to_command
from tilesnake.model import EmptyModel, GameOver, Model, ModelPhase, ReplayModel
from tilesnake.render import Renderer, RendererExhaustedError, RenderTask


class RecordingRenderer(Renderer):
    """Needs ``update[1]`` increments; records each one into the env list."""

    def __init__(self, update):
        self.name, self.remaining = update

    @classmethod
    def create(cls, update, env):
        env.append(("create", update[0]))
        return cls(update)

    def render(self, env):
        self.remaining -= 1
        env.append(("render", self.name))
        return self.remaining > 0


class CountingModel(Model):
    """Yields fixed initial updates, then scripted steps, then ends."""

    def __init__(self, initial=(), steps=()):
        self.initial = list(initial)
        self.steps = list(steps)
        self.commands = []
        self.initialized = 0
        self.torn_down = 0
        self._index = 0

    def initialize(self):
        self.initialized += 1
        self._index = 0
        return iter(self.initial)

    def step(self, command):
        self.commands.append(command)
        if self._index >= len(self.steps):
            raise GameOver("script finished")
        update = self.steps[self._index]
        self._index += 1
        return update

    def tear_down(self):
        self.torn_down += 1


class ClosingModel(CountingModel):
    """A model whose initial updates are produced lazily."""

    def initialize(self):
        self.initialized += 1
        self._index = 0
        return self._lazy()

    def _lazy(self):
        for update in self.initial:
            yield update


class TestCommandCell:
    def test_last_write_wins(self):
        cell = CommandCell(Key.none())
        cell.set(Key(37))
        cell.set(Key(40))
        assert cell.get() == Key(40)

    def test_reset(self):
        cell = CommandCell(Key.none())
        cell.set(Key(38))
        cell.reset()
        assert cell.get() == Key.none()

    def test_to_command(self):
        assert to_command(None) is None
        assert to_command(Key.none()) is None
        assert to_command(Key(39)) == Direction.EAST


class TestRenderTask:
    def test_runs_until_done(self):
        env = []
        task = RenderTask(RecordingRenderer(("a", 3)), env)
        assert task.resume()
        assert task.resume()
        assert not task.resume()
        assert task.done
        assert task.increments == 3

    def test_exhausted_renderer_cannot_resume(self):
        task = RenderTask(RecordingRenderer(("a", 1)), [])
        assert not task.resume()
        with pytest.raises(RendererExhaustedError):
            task.resume()


class TestDriverTermination:
    def test_always_game_over_tears_down_once_per_cycle(self):
        env = []
        model = CountingModel()
        driver = GameDriver(model, env, RecordingRenderer)
        for cycle in range(1, 4):
            assert driver.resume() is DriverPhase.START
            assert model.torn_down == cycle
            assert model.initialized == cycle
        assert env == []
        assert driver.steps == 0
        assert driver.frames == 0
        assert isinstance(driver.last_game_over, GameOver)

    def test_empty_model(self):
        env = []
        driver = GameDriver(EmptyModel(), env, RecordingRenderer)
        driver.run(5)
        assert driver.cycle == 5
        assert env == []


class TestDriverOrdering:
    def test_initial_then_steps_then_restart(self):
        env = []
        model = CountingModel(initial=[("i1", 1), ("i2", 2)], steps=[("s1", 2)])
        driver = GameDriver(model, env, RecordingRenderer)

        # i1 finishes in one call, so the first tick runs on into i2.
        assert driver.resume() is DriverPhase.INITIAL_RENDER
        assert env == [
            ("create", "i1"), ("render", "i1"),
            ("create", "i2"), ("render", "i2"),
        ]
        assert driver.resume() is DriverPhase.STEP_RENDER
        assert driver.steps == 1
        # Next step ends the game and tears down within the same tick.
        assert driver.resume() is DriverPhase.START
        assert model.torn_down == 1
        assert env == [
            ("create", "i1"), ("render", "i1"),
            ("create", "i2"), ("render", "i2"), ("render", "i2"),
            ("create", "s1"), ("render", "s1"), ("render", "s1"),
        ]
        assert driver.frames == 5

        # The whole cycle starts over.
        driver.resume()
        assert model.initialized == 2
        assert env[-4:] == [
            ("create", "i1"), ("render", "i1"),
            ("create", "i2"), ("render", "i2"),
        ]

    def test_suspends_only_while_work_remains(self):
        env = []
        model = CountingModel(initial=[("a", 1), ("b", 2)], steps=[("s1", 2)])
        driver = GameDriver(model, env, RecordingRenderer)

        driver.resume()
        assert [e[1] for e in env if e[0] == "render"] == ["a", "b"]
        driver.resume()
        assert [e[1] for e in env if e[0] == "render"] == ["a", "b", "b", "s1"]
        assert model.commands == [None]

    def test_single_call_renders_cost_no_tick(self):
        env = []
        model = CountingModel(initial=[("a", 1)], steps=[("s1", 1), ("s2", 1)])
        driver = GameDriver(model, env, RecordingRenderer)
        assert driver.resume() is DriverPhase.START
        assert [e[1] for e in env if e[0] == "render"] == ["a", "s1", "s2"]
        assert driver.steps == 2
        assert model.torn_down == 1

    def test_lazy_initial_updates(self):
        env = []
        model = ClosingModel(initial=[("a", 1), ("b", 1)])
        driver = GameDriver(model, env, RecordingRenderer)
        driver.resume()
        assert [e for e in env if e[0] == "render"] == [("render", "a"), ("render", "b")]
        assert model.torn_down == 1

    def test_model_phase_tracking(self):
        model = CountingModel(steps=[("s", 2)])
        driver = GameDriver(model, [], RecordingRenderer)
        assert driver.model_phase is ModelPhase.UNINITIALIZED
        driver.resume()
        assert driver.model_phase is ModelPhase.RUNNING
        driver.resume()
        assert driver.model_phase is ModelPhase.UNINITIALIZED
        assert model.torn_down == 1

    def test_iterator_protocol(self):
        driver = GameDriver(EmptyModel(), [], RecordingRenderer)
        phases = [next(driver) for _ in range(3)]
        assert phases == [DriverPhase.START] * 3
        assert iter(driver) is driver


class TestDriverCommands:
    def test_reads_latest_value_once_per_step(self):
        steps = [("s1", 2), ("s2", 2), ("s3", 2)]
        model = CountingModel(steps=steps)
        cell, driver = make_game(model, [], RecordingRenderer)

        cell.set(Key(37))
        cell.set(Key(38))
        driver.resume()
        driver.resume()
        cell.set(Key(65))
        driver.resume()
        driver.resume()
        assert model.commands == [
            Direction.NORTH, Direction.NORTH, None, None,
        ]

    def test_make_game_default_key(self):
        cell, driver = make_game(EmptyModel(), [], RecordingRenderer)
        assert cell.get() == Key.none()
        assert driver.cell is cell

    def test_custom_conversion(self):
        model = CountingModel(steps=[("s", 2)])
        cell = CommandCell("left")
        driver = GameDriver(
            model, [], RecordingRenderer, cell,
            convert=lambda raw: {"left": Direction.WEST}.get(raw),
        )
        driver.resume()
        assert model.commands == [Direction.WEST]


class TestReplayModel:
    def test_replays_then_ends(self):
        env = []
        driver = GameDriver(ReplayModel([("a", 1), ("b", 1)]), env, RecordingRenderer)
        driver.resume()
        assert [e for e in env if e[0] == "render"] == [("render", "a"), ("render", "b")]
        assert driver.cycle == 1
        assert driver.phase is DriverPhase.START

    def test_restarts_from_first_update(self):
        model = ReplayModel(["x"])
        list(model.initialize())
        assert model.step(None) == "x"
        with pytest.raises(GameOver):
            model.step(None)
        model.tear_down()
        model.initialize()
        assert model.step(Direction.EAST) == "x"
