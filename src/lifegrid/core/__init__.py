"""Core cellular automata logic."""

from .grid import Grid
from .game import GameOfLife, PrintMode, run_simulation
from .patterns import Pattern, PatternTooLargeError

__all__ = ["Grid", "GameOfLife", "PrintMode", "run_simulation", "Pattern", "PatternTooLargeError"]
