"""Tests for the Grid class."""

import numpy as np
import pytest
from lifegrid.core.cell import Cell
from lifegrid.core.grid import Grid


def full_rectangle(width, height):
    return {(x, y) for x in range(width) for y in range(height)}


def reference_evolve(grid):
    """Evolve using explicit per-cell lookups against a frozen snapshot."""
    snapshot = dict(grid.cells)
    live = set()
    for (x, y), cell in snapshot.items():
        count = 0
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if (dx, dy) == (0, 0):
                    continue
                neighbor = snapshot.get((x + dx, y + dy))
                if neighbor is not None and neighbor.alive:
                    count += 1
        if count == 3 or (count == 2 and cell.alive):
            live.add((x, y))
    return live


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.shape == (10, 20)
        assert grid.population == 0
        assert set(grid.cells) == full_rectangle(10, 20)

    def test_live_coordinates(self):
        """Cells are alive exactly when listed."""
        grid = Grid(5, 5, {(1, 1), (2, 3)})
        assert grid.get_cell(1, 1).alive
        assert grid.get_cell(2, 3).alive
        assert not grid.get_cell(0, 0).alive
        assert grid.live_coordinates == {(1, 1), (2, 3)}
        assert grid.population == 2

    def test_out_of_range_live_coordinates_ignored(self):
        """Live coordinates outside the rectangle never match a cell."""
        grid = Grid(3, 3, [(-1, 0), (3, 3), (1, 1), (1, 1)])
        assert grid.live_coordinates == {(1, 1)}
        assert set(grid.cells) == full_rectangle(3, 3)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-2, 3), (0, 0)])
    def test_non_positive_dimensions_give_empty_grid(self, width, height):
        """Non-positive dimensions produce an empty mapping, not an error."""
        grid = Grid(width, height, {(0, 0)})
        assert len(grid.cells) == 0
        assert grid.population == 0
        assert len(grid.evolve().cells) == 0
        assert grid.count_all_neighbors().size == 0

    def test_cells_read_only(self):
        """The cell mapping cannot be modified."""
        grid = Grid(2, 2)
        with pytest.raises(TypeError):
            grid.cells[(0, 0)] = Cell(0, 0, True)

    def test_get_cell_out_of_bounds(self):
        """Out-of-bounds lookups raise IndexError."""
        grid = Grid(3, 3)
        with pytest.raises(IndexError):
            grid.get_cell(-1, 0)
        with pytest.raises(IndexError):
            grid.get_cell(0, 3)

    def test_neighbor_count(self):
        """Test neighbor counting for individual cells."""
        grid = Grid(5, 5, {(1, 1), (1, 2), (2, 1)})

        assert grid.neighbor_count(grid.get_cell(0, 0)) == 1
        assert grid.neighbor_count(grid.get_cell(2, 2)) == 3
        assert grid.neighbor_count(grid.get_cell(1, 1)) == 2  # Cell itself doesn't count
        assert grid.neighbor_count(grid.get_cell(3, 3)) == 0

    def test_neighbor_count_does_not_wrap(self):
        """Opposite corners are not neighbors."""
        grid = Grid(3, 3, {(0, 0), (2, 2)})
        assert grid.neighbor_count(grid.get_cell(0, 0)) == 0
        assert grid.neighbor_count(grid.get_cell(2, 2)) == 0

    def test_corner_has_at_most_three_neighbors(self):
        """Out-of-bounds neighbors are permanently dead."""
        grid = Grid(3, 3, full_rectangle(3, 3))
        assert grid.neighbor_count(grid.get_cell(0, 0)) == 3
        assert grid.neighbor_count(grid.get_cell(1, 0)) == 5
        assert grid.neighbor_count(grid.get_cell(1, 1)) == 8

    def test_count_all_neighbors(self):
        """Test vectorized neighbor counting."""
        grid = Grid(5, 5, {(2, 1), (2, 2), (2, 3)})

        counts = grid.count_all_neighbors()

        assert counts.shape == (5, 5)
        assert counts[2, 2] == 2
        assert counts[1, 2] == 3
        assert counts[3, 2] == 3
        assert counts[0, 0] == 0

    def test_count_all_neighbors_matches_lookup(self):
        """Vectorized and per-cell counts agree everywhere, including edges."""
        grid = Grid.random(7, 4, 0.5, seed=3)
        counts = grid.count_all_neighbors()

        for (x, y), cell in grid.cells.items():
            assert counts[x, y] == grid.neighbor_count(cell)

    def test_single_cell_grid_dies(self):
        """A 1x1 grid's only cell has no neighbors."""
        for alive in ([(0, 0)], []):
            grid = Grid(1, 1, alive)
            assert grid.neighbor_count(grid.get_cell(0, 0)) == 0
            assert grid.evolve().population == 0

    def test_blinker(self):
        """Blinker oscillates with period 2."""
        grid = Grid(5, 5, {(1, 2), (2, 2), (3, 2)})

        first = grid.evolve()
        assert first.live_coordinates == {(2, 1), (2, 2), (2, 3)}

        second = first.evolve()
        assert second.live_coordinates == {(1, 2), (2, 2), (3, 2)}
        assert second == grid

    def test_simultaneous_update(self):
        """Evolution matches a reference that snapshots state first."""
        grid = Grid(3, 3, {(0, 1), (1, 1), (2, 1)})
        assert grid.evolve().live_coordinates == reference_evolve(grid)
        assert grid.evolve().live_coordinates == {(1, 0), (1, 1), (1, 2)}

    def test_simultaneous_update_random(self):
        """Random grids evolve like the snapshot reference."""
        for seed in range(5):
            grid = Grid.random(9, 6, 0.4, seed=seed)
            for _ in range(3):
                expected = reference_evolve(grid)
                grid = grid.evolve()
                assert grid.live_coordinates == expected

    def test_evolve_preserves_coverage(self):
        """Every generation covers exactly the full rectangle."""
        grid = Grid.random(6, 4, 0.5, seed=1, cell_width=3)
        for _ in range(5):
            grid = grid.evolve()
            assert set(grid.cells) == full_rectangle(6, 4)
            assert grid.shape == (6, 4)
            assert grid.cell_width == 3
            assert all(cell.width == 3 for cell in grid.cells.values())

    def test_evolve_does_not_mutate(self):
        """Evolving returns a new grid and leaves the original alone."""
        grid = Grid(5, 5, {(1, 2), (2, 2), (3, 2)})
        before = dict(grid.cells)

        new_grid = grid.evolve()

        assert new_grid is not grid
        assert dict(grid.cells) == before

    def test_empty_grid_stays_empty(self):
        """An all-dead grid stays all-dead."""
        grid = Grid(8, 5)
        for _ in range(10):
            grid = grid.evolve()
            assert grid.population == 0

    def test_random(self):
        """Test random population."""
        assert Grid.random(10, 10, 0.0).population == 0
        assert Grid.random(10, 10, 1.0).population == 100
        assert 30 <= Grid.random(10, 10, 0.5, seed=0).population <= 70
        assert Grid.random(10, 10, 0.5, seed=4) == Grid.random(10, 10, 0.5, seed=4)

    def test_to_array_and_list(self):
        """Test serialization to arrays and lists."""
        grid = Grid(3, 2, {(0, 0), (2, 1)})

        arr = grid.to_array()
        assert arr.shape == (3, 2)
        assert arr.dtype == np.int8
        assert arr[0, 0] == 1
        assert arr[2, 1] == 1
        assert arr.sum() == 2

        data = grid.to_list()
        assert data == [[1, 0], [0, 0], [0, 1]]
        assert Grid.from_list(data) == grid

    def test_from_list_invalid(self):
        """Ragged or flat data is rejected."""
        with pytest.raises(ValueError):
            Grid.from_list([1, 0, 1])

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        assert Grid(10, 10).get_bounding_box() is None
        assert Grid(10, 10, {(5, 3)}).get_bounding_box() == (5, 3, 5, 3)
        assert Grid(10, 10, {(5, 3), (2, 1), (7, 8)}).get_bounding_box() == (2, 1, 7, 8)

    def test_equality(self):
        """Test grid equality comparison."""
        assert Grid(3, 3) == Grid(3, 3)
        assert Grid(3, 3, {(1, 1)}) == Grid(3, 3, {(1, 1)})
        assert Grid(3, 3, {(1, 1)}) != Grid(3, 3, {(1, 1), (2, 2)})
        assert Grid(3, 3) != Grid(4, 4)
        assert Grid(3, 3) != "not a grid"
        assert hash(Grid(3, 3, {(1, 1)})) == hash(Grid(3, 3, {(1, 1)}))

    def test_string_representation(self):
        """Test string representation."""
        assert str(Grid(3, 3)) == "...\n...\n..."
        assert str(Grid(3, 3, {(0, 0), (1, 1), (2, 2)})) == "*..\n.*.\n..*"

    def test_render(self):
        """Rendering concatenates cells in row-major order."""
        grid = Grid(2, 2, {(1, 0)}, cell_width=4)
        svg = grid.render()

        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="8" height="8">')
        assert svg.endswith("</svg>")

        expected = [grid.get_cell(x, y).render() for y in range(2) for x in range(2)]
        assert "".join(expected) in svg
        assert svg == Grid(2, 2, {(1, 0)}, cell_width=4).render()
