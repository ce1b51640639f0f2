#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from pathlib import Path

from lifegrid import Grid, GameOfLife


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Create a grid and load the glider into its center
    grid = Grid(12)
    grid.load_pattern_from_file(str(Path(__file__).parent / "patterns" / "glider.txt"))

    game = GameOfLife(grid)

    print("Initial state:")
    print(game.grid)
    print(f"Population: {game.population}")
    print()

    # Run simulation for 8 generations
    for _ in range(8):
        game.step()
        print(f"Generation {game.generation}:")
        print(game.grid)
        print(f"Population: {game.population}")
        print()

    print(f"Population history: {game.population_history}")


if __name__ == "__main__":
    main()
