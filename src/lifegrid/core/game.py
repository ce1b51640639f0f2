"""Conway's Game of Life simulation runner."""

import sys
from enum import Enum
from typing import Callable, List, Optional, TextIO

from .grid import Grid


class PrintMode(Enum):
    """Which grid snapshots a simulation run writes out."""

    ALL = "all"
    FINAL = "final"
    NONE = "none"


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Each step replaces ``grid`` with the grid's next generation; earlier
    grids are never modified.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The starting grid
        """
        self.grid = grid
        self._generation = 0
        self._population_history: List[int] = []

        # Track initial population
        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """Population after every generation, starting with the initial one."""
        return list(self._population_history)

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self.grid = self.grid.next_generation()

        self._generation += 1
        self._update_population_history()

    def run(self, iterations: int, on_generation: Optional[Callable[[int, Grid], None]] = None) -> Grid:
        """Advance the simulation a fixed number of generations.

        Args:
            iterations: Number of generations to run
            on_generation: Called with (generation, grid) after every step

        Returns:
            The grid after the last step
        """
        for _ in range(iterations):
            self.step()
            if on_generation is not None:
                on_generation(self._generation, self.grid)

        return self.grid

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)


def run_simulation(
    print_mode: PrintMode,
    size: int,
    iterations: int,
    pattern_file: str,
    out: Optional[TextIO] = None,
) -> Grid:
    """Load a pattern, run it and write the requested snapshots.

    Args:
        print_mode: Which snapshots to write
        size: Grid size, at least 1
        iterations: Number of generations, at least 0
        pattern_file: Path to the pattern file
        out: Stream for the snapshots (defaults to stdout)

    Returns:
        The final grid

    Raises:
        OSError: If the pattern file cannot be read
        PatternTooLargeError: If the pattern does not fit in the grid
    """
    out = out if out is not None else sys.stdout
    print_mode = PrintMode(print_mode)

    grid = Grid(size)
    grid.load_pattern_from_file(pattern_file)

    if print_mode is PrintMode.ALL:
        print(f"Initial state:\n{grid}", file=out)

    def show_generation(generation: int, current: Grid) -> None:
        print(f"Generation {generation}:\n{current}", file=out)

    game = GameOfLife(grid)
    final = game.run(iterations, show_generation if print_mode is PrintMode.ALL else None)

    if print_mode is PrintMode.FINAL:
        print(f"Final state after {iterations} generations:\n{final}", file=out)

    return final
