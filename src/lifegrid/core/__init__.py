"""Core cellular automata logic."""

from .cell import Cell
from .grid import Grid
from .game import GameOfLife
from .server import GridServer, ServerStoppedError
from .patterns import Pattern, PatternLibrary
from .config import SimulationConfig

__all__ = [
    "Cell",
    "Grid",
    "GameOfLife",
    "GridServer",
    "ServerStoppedError",
    "Pattern",
    "PatternLibrary",
    "SimulationConfig",
]
