"""Cellular automata package with Conway's Game of Life implementation."""

__version__ = "0.1.0"

from .core.grid import Grid
from .core.game import GameOfLife, PrintMode, run_simulation
from .core.patterns import Pattern, PatternTooLargeError

__all__ = ["Grid", "GameOfLife", "PrintMode", "run_simulation", "Pattern", "PatternTooLargeError"]
