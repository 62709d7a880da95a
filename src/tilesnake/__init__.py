"""tilesnake: tile-grid simulation core."""

from tilesnake.bounding import BoundingPolicy, Clipping, WallMode, Wrapping, policy_for
from tilesnake.config import GameConfig
from tilesnake.coordinate import Coordinate, Direction, Key, TentativeCoordinate
from tilesnake.driver import CommandCell, DriverPhase, GameDriver, make_game
from tilesnake.engine import SnakeModel, SnakeUpdate, TileRenderer
from tilesnake.grid import CellState, Grid, OutOfBoundsError
from tilesnake.model import EmptyModel, GameOver, Model, ModelPhase, ReplayModel
from tilesnake.render import Renderer, RendererExhaustedError, RenderTask

__all__ = [
    "BoundingPolicy",
    "CellState",
    "Clipping",
    "CommandCell",
    "Coordinate",
    "Direction",
    "DriverPhase",
    "EmptyModel",
    "GameConfig",
    "GameDriver",
    "GameOver",
    "Grid",
    "Key",
    "Model",
    "ModelPhase",
    "OutOfBoundsError",
    "RenderTask",
    "Renderer",
    "RendererExhaustedError",
    "ReplayModel",
    "SnakeModel",
    "SnakeUpdate",
    "TentativeCoordinate",
    "TileRenderer",
    "WallMode",
    "Wrapping",
    "make_game",
    "policy_for",
]
