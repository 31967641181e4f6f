"""Run configuration for Game of Life simulations."""

from dataclasses import dataclass
from typing import List, Optional

from .cell import DEFAULT_CELL_WIDTH
from .grid import Grid
from .patterns import PatternLibrary

DRIVERS = ("sync", "server")


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 50
    height: int = 50
    population_rate: float = 0.1
    pattern: Optional[str] = None
    pattern_x: Optional[int] = None
    pattern_y: Optional[int] = None
    generations: int = 10
    until_stable: bool = False
    max_generations: int = 10000
    driver: str = "sync"
    cell_width: int = DEFAULT_CELL_WIDTH
    seed: Optional[int] = None

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of error messages, empty when the configuration is valid
        """
        errors = []

        if self.width <= 0:
            errors.append("Width must be positive")

        if self.height <= 0:
            errors.append("Height must be positive")

        if not 0.0 <= self.population_rate <= 1.0:
            errors.append("Population rate must be between 0.0 and 1.0")

        if self.generations < 0:
            errors.append("Generations must be non-negative")

        if self.max_generations <= 0:
            errors.append("Max generations must be positive")

        if self.pattern_x is not None and self.pattern_x < 0:
            errors.append("Pattern X offset must be non-negative")

        if self.pattern_y is not None and self.pattern_y < 0:
            errors.append("Pattern Y offset must be non-negative")

        if self.driver not in DRIVERS:
            errors.append(f"Driver must be one of: {', '.join(DRIVERS)}")

        if self.until_stable and self.driver != "sync":
            errors.append("--until-stable requires the sync driver")

        if self.cell_width <= 0:
            errors.append("Cell width must be positive")

        return errors

    def build_grid(self, library: PatternLibrary) -> Grid:
        """Create the initial grid.

        Places the configured pattern, centered unless an offset is given,
        or populates the grid randomly when no pattern is set.

        Raises:
            ValueError: If the pattern is not in the library
        """
        if self.pattern is None:
            return Grid.random(self.width, self.height, self.population_rate, self.seed, self.cell_width)

        pattern = library.get_pattern(self.pattern)
        if pattern is None:
            raise ValueError(f"Pattern '{self.pattern}' not found")

        pattern = pattern.normalize()
        pattern_width, pattern_height = pattern.get_size()
        offset_x = self.pattern_x
        if offset_x is None:
            offset_x = max(0, (self.width - pattern_width) // 2)
        offset_y = self.pattern_y
        if offset_y is None:
            offset_y = max(0, (self.height - pattern_height) // 2)

        return pattern.to_grid(self.width, self.height, offset_x, offset_y, self.cell_width)
