"""Synchronous Game of Life driver."""

from typing import Deque, Dict, FrozenSet, Optional, Tuple
from collections import deque
import logging
import numpy as np

from .grid import Coordinate, Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Owns the current Grid value and replaces it with its successor on every
    step. Previous generations are not retained, only their fingerprints for
    cycle detection.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The starting generation
        """
        self._grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._seen_states: Dict[FrozenSet[Coordinate], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def grid(self) -> Grid:
        """The current generation."""
        return self._grid

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self._grid = self._grid.evolve()
        self._generation += 1
        self._update_population_history()

    def render(self) -> str:
        """Render the current generation."""
        return self._grid.render()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before (cycle detection)."""
        if self._cycle_detected:
            return

        current_state = self._grid.live_coordinates

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                "Cycle of length %d detected at generation %d",
                self._cycle_length,
                self._generation,
            )
            return

        self._seen_states[current_state] = self._generation

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Reset the simulation.

        Args:
            grid: Optional new starting generation; an empty grid of the
                same size is used when omitted
        """
        if grid is None:
            grid = Grid(self._grid.width, self._grid.height, cell_width=self._grid.cell_width)

        self._grid = grid
        self._generation = 0
        self._population_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def save_state(self) -> Dict:
        """Save complete game state for serialization.

        Returns:
            Dictionary containing all game state
        """
        return {
            "generation": self._generation,
            "grid_data": self._grid.to_list(),
            "grid_width": self._grid.width,
            "grid_height": self._grid.height,
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

    def load_state(self, state: Dict) -> None:
        """Load complete game state from serialization.

        Args:
            state: Dictionary containing game state

        Raises:
            ValueError: If state is incompatible with current grid
        """
        if state["grid_width"] != self._grid.width or state["grid_height"] != self._grid.height:
            raise ValueError(
                f"Grid size mismatch: saved {state['grid_width']}x"
                f"{state['grid_height']} vs current {self._grid.width}x"
                f"{self._grid.height}"
            )

        grid = Grid.from_list(state["grid_data"], cell_width=self._grid.cell_width)
        if grid.shape != self._grid.shape:
            raise ValueError(f"Data shape {grid.shape} doesn't match grid {self._grid.shape}")

        self._grid = grid
        self._generation = state["generation"]
        self._population_history = deque(state["population_history"], maxlen=100)
        self._cycle_detected = state["cycle_detected"]
        self._cycle_length = state["cycle_length"]
        self._cycle_start_generation = state["cycle_start_generation"]

        # Seen states are not serialized
        self._seen_states.clear()

    def get_statistics(self) -> Dict:
        """Get comprehensive simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self._grid.get_bounding_box()
        area = self._grid.width * self._grid.height

        stats = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self._grid.shape,
            "population_density": self.population / area if area > 0 else 0.0,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
