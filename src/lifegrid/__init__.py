"""Conway's Game of Life evolution engine."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.grid import Grid
from .core.game import GameOfLife
from .core.server import GridServer, ServerStoppedError
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Grid", "GameOfLife", "GridServer", "ServerStoppedError", "Pattern", "PatternLibrary"]
