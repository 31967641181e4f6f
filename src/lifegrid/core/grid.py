"""Grid data structure for Conway's Game of Life."""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell, DEFAULT_CELL_WIDTH

Coordinate = Tuple[int, int]

_NEIGHBOR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]

_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class Grid:
    """An immutable rectangular field of cells.

    Every coordinate with ``0 <= x < width`` and ``0 <= y < height`` maps to
    exactly one Cell. Neighbors outside the rectangle are treated as
    permanently dead; edges do not wrap.
    """

    def __init__(
        self,
        width: int,
        height: int,
        live_coordinates: Iterable[Coordinate] = (),
        cell_width: int = DEFAULT_CELL_WIDTH,
    ) -> None:
        """Initialize a new grid.

        Args:
            width: Number of columns
            height: Number of rows
            live_coordinates: (x, y) pairs of initially living cells;
                pairs outside the grid are ignored
            cell_width: Rendering size of each cell
        """
        live = set(live_coordinates)
        cells = {}
        for x in range(width):
            for y in range(height):
                cells[(x, y)] = Cell(x, y, (x, y) in live, cell_width)

        self._width = width
        self._height = height
        self._cell_width = cell_width
        self._cells = cells

    @classmethod
    def _from_cells(cls, width: int, height: int, cells: Dict[Coordinate, Cell], cell_width: int) -> "Grid":
        grid = cls.__new__(cls)
        grid._width = width
        grid._height = height
        grid._cell_width = cell_width
        grid._cells = cells
        return grid

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        probability: float = 0.1,
        seed: Optional[int] = None,
        cell_width: int = DEFAULT_CELL_WIDTH,
    ) -> "Grid":
        """Create a randomly populated grid.

        Args:
            width: Number of columns
            height: Number of rows
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for reproducible grids
            cell_width: Rendering size of each cell

        Returns:
            New Grid instance
        """
        rng = np.random.default_rng(seed)
        mask = rng.random((max(width, 0), max(height, 0))) < probability
        live = zip(*np.nonzero(mask))
        return cls(width, height, ((int(x), int(y)) for x, y in live), cell_width)

    @classmethod
    def from_list(cls, data: list, cell_width: int = DEFAULT_CELL_WIDTH) -> "Grid":
        """Create a grid from a nested list indexed ``[x][y]``.

        Args:
            data: 2D list with cell states (non-zero means alive)
            cell_width: Rendering size of each cell

        Raises:
            ValueError: If rows have different lengths
        """
        arr = np.array(data, dtype=np.int8)
        if arr.ndim != 2:
            raise ValueError(f"Expected 2D data, got shape {arr.shape}")

        width, height = arr.shape
        live = zip(*np.nonzero(arr))
        return cls(width, height, ((int(x), int(y)) for x, y in live), cell_width)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def cell_width(self) -> int:
        return self._cell_width

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def cells(self) -> Mapping[Coordinate, Cell]:
        """Read-only mapping from (x, y) to Cell."""
        return MappingProxyType(self._cells)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return sum(1 for cell in self._cells.values() if cell.alive)

    @property
    def live_coordinates(self) -> FrozenSet[Coordinate]:
        """Coordinates of all living cells."""
        return frozenset(coord for coord, cell in self._cells.items() if cell.alive)

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the cell at a coordinate.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        try:
            return self._cells[(x, y)]
        except KeyError:
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds") from None

    def neighbor_count(self, cell: Cell) -> int:
        """Count living neighbors of a cell.

        Args:
            cell: Cell whose 8-neighborhood is inspected

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dx, dy in _NEIGHBOR_OFFSETS:
            neighbor = self._cells.get((cell.x + dx, cell.y + dy))
            if neighbor is not None and neighbor.alive:
                count += 1
        return count

    def to_array(self) -> np.ndarray:
        """Cell states as an int8 array indexed ``[x, y]``."""
        arr = np.zeros((max(self._width, 0), max(self._height, 0)), dtype=np.int8)
        for (x, y), cell in self._cells.items():
            if cell.alive:
                arr[x, y] = 1
        return arr

    def to_list(self) -> list:
        """Convert grid to nested list for serialization.

        Returns:
            2D list representation of the grid indexed ``[x][y]``
        """
        return self.to_array().tolist()

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch convolution.

        Returns:
            2D array with neighbor counts for each cell, indexed ``[x, y]``
        """
        cells = self.to_array()
        if cells.size == 0:
            return cells

        # Grid uses (width, height) but PyTorch expects (height, width), so transpose
        torch_input = torch.from_numpy(cells.T.astype(np.float32)).unsqueeze(0).unsqueeze(0)

        # Zero padding keeps the border permanently dead
        neighbors = F.conv2d(torch_input, _KERNEL, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8).T

    def evolve(self) -> "Grid":
        """Compute the next generation.

        Every neighbor count is taken from this grid before any cell is
        replaced, so all cells update simultaneously.

        Returns:
            New Grid with the same dimensions
        """
        counts = self.count_all_neighbors()
        cells = {(x, y): cell.transition(int(counts[x, y])) for (x, y), cell in self._cells.items()}
        return Grid._from_cells(self._width, self._height, cells, self._cell_width)

    def render(self) -> str:
        """Render the grid as an SVG document, cells in row-major order."""
        width = max(self._width, 0) * self._cell_width
        height = max(self._height, 0) * self._cell_width
        parts = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">']
        for y in range(self._height):
            for x in range(self._width):
                parts.append(self._cells[(x, y)].render())
        parts.append("</svg>")
        return "".join(parts)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        live = self.live_coordinates
        if not live:
            return None

        xs, ys = zip(*live)
        return (min(xs), min(ys), max(xs), max(ys))

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and self.live_coordinates == other.live_coordinates

    def __hash__(self) -> int:
        return hash((self.shape, self.live_coordinates))

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        result = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                row.append("*" if self._cells[(x, y)].alive else ".")
            result.append("".join(row))
        return "\n".join(result)
