"""Tests for the Cell class."""

import dataclasses

import pytest
from lifegrid.core.cell import Cell, DEFAULT_CELL_WIDTH


class TestCell:
    """Test cases for the Cell class."""

    def test_initialization(self):
        """Test cell defaults."""
        cell = Cell(3, 4)
        assert cell.x == 3
        assert cell.y == 4
        assert cell.alive is False
        assert cell.width == DEFAULT_CELL_WIDTH

    def test_negative_coordinates_allowed(self):
        """Cells do not validate coordinates."""
        cell = Cell(-1, -5, True)
        assert (cell.x, cell.y) == (-1, -5)

    def test_immutable(self):
        """Cells cannot be modified in place."""
        cell = Cell(0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.alive = True

    @pytest.mark.parametrize("count", [0, 1])
    @pytest.mark.parametrize("alive", [True, False])
    def test_underpopulation(self, alive, count):
        """Fewer than two neighbors always leaves the cell dead."""
        assert Cell(1, 1, alive).transition(count).alive is False

    @pytest.mark.parametrize("alive", [True, False])
    def test_two_neighbors_unchanged(self, alive):
        """Exactly two neighbors keeps the current state."""
        assert Cell(1, 1, alive).transition(2).alive is alive

    @pytest.mark.parametrize("alive", [True, False])
    def test_three_neighbors_alive(self, alive):
        """Exactly three neighbors means alive."""
        assert Cell(1, 1, alive).transition(3).alive is True

    @pytest.mark.parametrize("count", [4, 5, 6, 7, 8])
    @pytest.mark.parametrize("alive", [True, False])
    def test_overpopulation(self, alive, count):
        """More than three neighbors always leaves the cell dead."""
        assert Cell(1, 1, alive).transition(count).alive is False

    def test_out_of_range_count(self):
        """Counts outside 0-8 fall into the overpopulation band."""
        assert Cell(0, 0, True).transition(42).alive is False

    def test_transition_keeps_identity_fields(self):
        """Transition replaces the cell without moving or resizing it."""
        cell = Cell(7, 9, False, width=4)
        new_cell = cell.transition(3)

        assert new_cell is not cell
        assert (new_cell.x, new_cell.y, new_cell.width) == (7, 9, 4)
        assert cell.alive is False  # Original untouched

    def test_render(self):
        """Rendering depends on position, width and state."""
        alive = Cell(2, 3, True, width=5).render()
        dead = Cell(2, 3, False, width=5).render()

        assert alive.startswith("<rect")
        assert 'x="10"' in alive
        assert 'y="15"' in alive
        assert 'width="5"' in alive
        assert 'fill="black"' in alive
        assert 'fill="white"' in dead
        assert Cell(2, 3, True, width=5).render() == alive
