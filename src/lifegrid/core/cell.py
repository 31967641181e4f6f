"""Single cell of a Game of Life grid."""

from dataclasses import dataclass, replace

DEFAULT_CELL_WIDTH = 10


@dataclass(frozen=True)
class Cell:
    """An immutable automaton unit.

    A cell never changes in place. Each generation replaces it with a new
    Cell carrying the same coordinates and width and a recomputed ``alive``.
    """

    x: int
    y: int
    alive: bool = False
    width: int = DEFAULT_CELL_WIDTH

    def transition(self, neighbor_count: int) -> "Cell":
        """Compute this cell's next state.

        Args:
            neighbor_count: Number of living neighbors

        Returns:
            New Cell with the same coordinates and the next ``alive`` value
        """
        if neighbor_count < 2:
            alive = False
        elif neighbor_count == 2:
            alive = self.alive
        elif neighbor_count == 3:
            alive = True
        else:
            alive = False

        return replace(self, alive=alive)

    def render(self) -> str:
        """Render the cell as an SVG rectangle."""
        fill = "black" if self.alive else "white"
        return (
            f'<rect x="{self.x * self.width}" y="{self.y * self.width}" '
            f'width="{self.width}" height="{self.width}" '
            f'fill="{fill}" stroke="#cccccc"/>'
        )
