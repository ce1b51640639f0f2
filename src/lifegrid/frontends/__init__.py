"""Frontend interfaces for cellular automata."""

from . import cli, verify

__all__ = ["cli", "verify"]
