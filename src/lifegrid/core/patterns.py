"""Plain-text pattern files and centered placement into a grid."""

from typing import TYPE_CHECKING, Iterable, List, Tuple

if TYPE_CHECKING:
    from .grid import Grid


ALIVE_CHAR = "O"
DEAD_CHAR = "."
COMMENT_CHAR = "!"


class PatternTooLargeError(ValueError):
    """Raised when a pattern does not fit inside the target grid."""


class Pattern:
    """A block of cells read from a plaintext pattern file.

    Rows may differ in length; missing positions in a short row count as
    dead inside the pattern's bounding box.
    """

    def __init__(self, rows: List[List[bool]], name: str = "") -> None:
        """Initialize a pattern.

        Args:
            rows: Rows of cell states, True for alive
            name: Optional pattern name
        """
        self.rows = rows
        self.name = name

    @classmethod
    def from_lines(cls, lines: Iterable[str], name: str = "") -> "Pattern":
        """Parse pattern text.

        Lines starting with ``!`` are comments and are skipped. In every other
        line, ``O`` marks a living cell and any other character a dead one.

        Args:
            lines: Text lines, with or without line terminators
            name: Optional pattern name

        Returns:
            New Pattern instance
        """
        rows = []
        for line in lines:
            line = line.rstrip("\r\n")
            if line.startswith(COMMENT_CHAR):
                continue
            rows.append([char == ALIVE_CHAR for char in line])

        return cls(rows, name)

    @classmethod
    def from_file(cls, pattern_file: str) -> "Pattern":
        """Read a pattern file.

        Args:
            pattern_file: Path to the pattern file

        Returns:
            New Pattern instance named after the file

        Raises:
            OSError: If the file cannot be opened, read or decoded as UTF-8
        """
        try:
            with open(pattern_file, "r", encoding="utf-8") as f:
                return cls.from_lines(f, name=str(pattern_file))
        except UnicodeDecodeError as e:
            raise OSError(f"Cannot decode pattern file {pattern_file}: {e}") from e

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Length of the longest row."""
        return max((len(row) for row in self.rows), default=0)

    @property
    def population(self) -> int:
        """Number of living cells in the pattern."""
        return sum(sum(row) for row in self.rows)

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size.

        Returns:
            Tuple of (height, width)
        """
        return (self.height, self.width)

    def centered_offset(self, grid_size: int) -> Tuple[int, int]:
        """Top-left position that centers this pattern in a square grid.

        Args:
            grid_size: Size of the target grid

        Returns:
            Tuple of (start_row, start_col), rounded down
        """
        return ((grid_size - self.height) // 2, (grid_size - self.width) // 2)

    def apply_to_grid(self, grid: "Grid", start_row: int = 0, start_col: int = 0) -> None:
        """Write this pattern into a grid.

        Every position in the pattern is written, dead cells included; grid
        cells outside the pattern keep their state.

        Args:
            grid: Target grid
            start_row: Row of the pattern's top-left cell
            start_col: Column of the pattern's top-left cell

        Raises:
            PatternTooLargeError: If the pattern is larger than the grid
            IndexError: If the pattern would extend past the grid edge
        """
        if self.height > grid.size or self.width > grid.size:
            raise PatternTooLargeError(
                f"Pattern {self.height}x{self.width} does not fit in {grid.size}x{grid.size} grid"
            )

        if (
            start_row < 0
            or start_col < 0
            or start_row + self.height > grid.size
            or start_col + self.width > grid.size
        ):
            raise IndexError(
                f"Pattern {self.height}x{self.width} at ({start_row}, {start_col}) "
                f"extends past the edge of {grid.size}x{grid.size} grid"
            )

        for i, row in enumerate(self.rows):
            for j, cell in enumerate(row):
                grid.set(start_row + i, start_col + j, cell)

    def center_on_grid(self, grid: "Grid") -> Tuple[int, int]:
        """Write this pattern into the middle of a grid.

        Args:
            grid: Target grid

        Returns:
            Tuple of (start_row, start_col) where the pattern was placed

        Raises:
            PatternTooLargeError: If the pattern is larger than the grid
        """
        start_row, start_col = self.centered_offset(grid.size)
        self.apply_to_grid(grid, start_row, start_col)
        return (start_row, start_col)
