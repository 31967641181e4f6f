#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import GameOfLife, GridServer, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    # Synchronous driver
    game = GameOfLife(glider.to_grid(12, 12, offset_x=2, offset_y=2))

    print("Initial state:")
    print(game.grid)
    print(f"Population: {game.population}")
    print()

    for _ in range(4):
        game.step()
        print(f"Generation {game.generation}:")
        print(game.grid)
        print(f"Population: {game.population}")
        print()

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")

    # The same evolution through the command server
    with GridServer(glider.to_grid(12, 12, offset_x=2, offset_y=2)) as server:
        for _ in range(4):
            server.advance()
        final = server.snapshot()

    print()
    print(f"Server agrees with the synchronous driver: {final == game.grid}")
    print(f"SVG rendering: {len(final.render())} characters")


if __name__ == "__main__":
    main()
