"""Grid engine for Conway's Game of Life."""

from typing import Iterable
import numpy as np
import torch
import torch.nn.functional as F

from .patterns import ALIVE_CHAR, DEAD_CHAR, Pattern


# Set single-threaded, one small convolution per generation
torch.set_num_threads(1)

NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class Grid:
    """A fixed-size square grid of cells with hard edges.

    Cells live in a flat, row-major boolean buffer: the cell at
    ``(row, col)`` is stored at index ``row * size + col``. Neighbors that
    fall outside the grid are always dead; nothing wraps around.
    """

    def __init__(self, size: int) -> None:
        """Initialize an all-dead grid.

        Args:
            size: Width and height of the grid. Callers must pass ``size >= 1``.
        """
        self._size = size
        self._cells = np.zeros(size * size, dtype=bool)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from rendered rows such as ``["..O", ".O.", "O.."]``.

        Args:
            rows: Square block of text rows using the alive/dead markers

        Returns:
            New Grid instance

        Raises:
            ValueError: If the rows do not form a square
        """
        rows = list(rows)
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError(f"Rows do not form a {size}x{size} square")

        grid = cls(size)
        for row, line in enumerate(rows):
            for col, char in enumerate(line):
                grid.set(row, col, char == ALIVE_CHAR)
        return grid

    @property
    def size(self) -> int:
        """Width and height of the grid."""
        return self._size

    @property
    def cells(self) -> np.ndarray:
        """Get the flat row-major cell buffer."""
        return self._cells

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self._size}x{self._size} grid")
        return row * self._size + col

    def get(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Args:
            row: Row index
            col: Column index

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are outside the grid
        """
        return bool(self._cells[self._index(row, col)])

    def set(self, row: int, col: int, value: bool) -> None:
        """Set the state of a cell.

        Args:
            row: Row index
            col: Column index
            value: Whether the cell should be alive

        Raises:
            IndexError: If coordinates are outside the grid
        """
        self._cells[self._index(row, col)] = bool(value)

    def count_live_neighbors(self, row: int, col: int) -> int:
        """Count living neighbors of a cell.

        Args:
            row: Row index
            col: Column index

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dr in [-1, 0, 1]:
            for dc in [-1, 0, 1]:
                if dr == 0 and dc == 0:
                    continue

                nr, nc = row + dr, col + dc

                if 0 <= nr < self._size and 0 <= nc < self._size:
                    count += int(self._cells[nr * self._size + nc])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using PyTorch-accelerated convolution.

        Returns:
            Array of shape (size, size) with neighbor counts, indexed [row, col]
        """
        snapshot = torch.from_numpy(self._cells.reshape(self._size, self._size).astype(np.float32))

        # Zero padding keeps the edges hard
        neighbors = F.conv2d(snapshot.unsqueeze(0).unsqueeze(0), NEIGHBOR_KERNEL, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8)

    def next_generation(self) -> "Grid":
        """Compute the next generation as a new grid.

        Every cell is updated from the same snapshot of this grid, which is
        left untouched:

        - Live cell with 2-3 neighbors survives
        - Dead cell with exactly 3 neighbors becomes alive
        - All other cells die or stay dead

        Returns:
            New Grid of the same size
        """
        neighbor_counts = self.count_all_neighbors()
        alive = self._cells.reshape(self._size, self._size)

        survive_mask = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))
        birth_mask = ~alive & (neighbor_counts == 3)

        following = Grid(self._size)
        following._cells[:] = (survive_mask | birth_mask).ravel()
        return following

    def load_pattern_from_file(self, pattern_file: str) -> None:
        """Load a pattern file and write it centered into this grid.

        Args:
            pattern_file: Path to a text pattern file

        Raises:
            OSError: If the file cannot be opened or read
            PatternTooLargeError: If the pattern does not fit in the grid
        """
        pattern = Pattern.from_file(pattern_file)
        pattern.center_on_grid(self)

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        duplicate = Grid(self._size)
        duplicate._cells[:] = self._cells
        return duplicate

    def render(self) -> str:
        """Render the grid as text, one newline-terminated line per row."""
        lines = []
        for row in range(self._size):
            start = row * self._size
            line = "".join(ALIVE_CHAR if cell else DEAD_CHAR for cell in self._cells[start:start + self._size])
            lines.append(line + "\n")
        return "".join(lines)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self._size == other._size and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation showing living cells as 'O' and dead as '.'."""
        return self.render()
