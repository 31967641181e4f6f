"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.config import DRIVERS, SimulationConfig
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.server import GridServer


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self, pattern_dir: Optional[str] = None):
        """Initialize CLI interface.

        Args:
            pattern_dir: Optional directory of saved JSON patterns to load
        """
        self.pattern_library = PatternLibrary(pattern_dir)
        if pattern_dir is not None:
            self.pattern_library.load_all_patterns()

    def run_simulation(
        self, config: SimulationConfig, verbose: bool = False, show_grid: bool = False
    ) -> Tuple[int, str, dict, Grid]:
        """Run a Game of Life simulation.

        Args:
            config: Simulation parameters
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (final_generation, finish_reason, statistics, final_grid)

        Raises:
            ValueError: If the configured pattern does not exist
        """
        grid = config.build_grid(self.pattern_library)
        initial_population = grid.population

        if verbose:
            print(f"Initializing {config.width}x{config.height} grid")
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(grid))

        start_time = time.time()

        if config.driver == "server":
            final_generation, reason, stats, grid = self._run_server(grid, config)
        else:
            final_generation, reason, stats, grid = self._run_sync(grid, config)

        duration = time.time() - start_time

        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population
        stats["driver"] = config.driver

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(grid))

        return final_generation, reason, stats, grid

    def _run_sync(self, grid: Grid, config: SimulationConfig) -> Tuple[int, str, dict, Grid]:
        game = GameOfLife(grid)

        if config.until_stable:
            final_generation, reason = game.run_until_stable(config.max_generations)
        else:
            for _ in range(config.generations):
                game.step()
            final_generation, reason = game.generation, "generations"

        return final_generation, reason, game.get_statistics(), game.grid

    def _run_server(self, grid: Grid, config: SimulationConfig) -> Tuple[int, str, dict, Grid]:
        with GridServer(grid) as server:
            for _ in range(config.generations):
                server.advance()
            final_grid = server.snapshot()
            final_generation = server.generation

        # Statistics come from a fresh driver over the server's final grid
        stats = GameOfLife(final_grid).get_statistics()
        stats["generation"] = final_generation
        return final_generation, "generations", stats, final_grid

    def _format_grid(self, grid: Grid, max_size: int = 50) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life simulations from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a random 50x50 grid for 10 generations
  lifegrid-cli --width 50 --height 50 --population 0.1

  # Evolve a blinker twice and show the grid
  lifegrid-cli -W 5 -H 5 --pattern Blinker -n 2 --show-grid

  # Drive the grid through the command server and save an SVG
  lifegrid-cli --pattern Glider -n 8 --driver server --svg glider.svg

  # Run the R-pentomino until it cycles or dies out
  lifegrid-cli --pattern "R-pentomino" --until-stable --verbose

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=50, help="Grid width (default: 50)")

    parser.add_argument("-H", "--height", type=int, default=50, help="Grid height (default: 50)")

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.1,
        help="Initial random population rate 0.0-1.0 (default: 0.1)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for reproducible populations")

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Load a specific pattern instead of random population",
    )

    parser.add_argument("--pattern-x", type=int, help="X offset for pattern placement (default: centered)")

    parser.add_argument("--pattern-y", type=int, help="Y offset for pattern placement (default: centered)")

    parser.add_argument("--pattern-dir", type=str, help="Directory of saved JSON patterns to load")

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        default=10,
        help="Number of generations to advance (default: 10)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Run until a cycle or extinction instead of a fixed number of generations",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=10000,
        help="Maximum generations with --until-stable (default: 10000)",
    )

    parser.add_argument(
        "--driver",
        choices=DRIVERS,
        default="sync",
        help="Step the grid directly (sync) or through the command server (default: sync)",
    )

    # Output configuration
    parser.add_argument("--cell-width", type=int, default=10, help="Cell size in SVG output (default: 10)")

    parser.add_argument("--svg", type=str, help="Write the final grid as SVG to this path")

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states (small grids only)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from parsed arguments."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        population_rate=args.population,
        pattern=args.pattern,
        pattern_x=args.pattern_x,
        pattern_y=args.pattern_y,
        generations=args.generations,
        until_stable=args.until_stable,
        max_generations=args.max_generations,
        driver=args.driver,
        cell_width=args.cell_width,
        seed=args.seed,
    )


def validate_args(config: SimulationConfig) -> bool:
    """Validate a configuration built from command-line arguments.

    Returns:
        True if arguments are valid
    """
    errors = config.validate()

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from GameOfLife.run_until_stable, or
            'generations' for a fixed-length run
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "generations":
        return f"Requested generations completed ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Driver: {stats['driver']}")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(
                f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]"
            )
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats["duration_seconds"],
                stats["generations_per_second"],
            )
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    cli = CLIGameOfLife(args.pattern_dir)

    if args.list_patterns:
        cli.list_patterns()
        return 0

    config = config_from_args(args)
    if not validate_args(config):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    try:
        final_generation, reason, stats, grid = cli.run_simulation(
            config, verbose=args.verbose, show_grid=args.show_grid
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted")
        return 1

    print_results(final_generation, reason, stats, args.verbose)

    if args.svg:
        svg_path = Path(args.svg)
        svg_path.write_text(grid.render())
        print(f"SVG written to {svg_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
