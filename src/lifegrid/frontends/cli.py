"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import List, Optional

from ..core.game import PrintMode, run_simulation
from ..core.patterns import PatternTooLargeError


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifegrid-cli",
        description="Run Conway's Game of Life on a fixed-size grid from a pattern file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show every generation of a blinker on a 5x5 grid
  lifegrid-cli all 5 2 patterns/blinker.txt

  # Show only the state after 100 generations
  lifegrid-cli final 40 100 patterns/glider.txt

  # Run without output, reporting timing on stderr
  lifegrid-cli none 200 1000 patterns/r-pentomino.txt --verbose
        """,
    )

    parser.add_argument(
        "print_mode",
        choices=[mode.value for mode in PrintMode],
        help="Which generations to print: all, final or none",
    )

    parser.add_argument("size", type=int, help="Width and height of the square grid")

    parser.add_argument("iterations", type=int, help="Number of generations to simulate")

    parser.add_argument(
        "pattern_file",
        type=str,
        help="Plaintext pattern file ('O' alive, '!' starts a comment line)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and timing information to stderr",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.size <= 0:
        errors.append("Size must be positive")

    if args.iterations < 0:
        errors.append("Iterations must be non-negative")

    if errors:
        print("Error: Invalid arguments:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not validate_args(args):
        return 1

    if args.verbose:
        print(f"Initializing {args.size}x{args.size} grid", file=sys.stderr)
        print(f"Loading pattern from {args.pattern_file}", file=sys.stderr)

    try:
        start_time = time.time()

        final_grid = run_simulation(
            print_mode=PrintMode(args.print_mode),
            size=args.size,
            iterations=args.iterations,
            pattern_file=args.pattern_file,
        )

        duration = time.time() - start_time

        if args.verbose:
            speed = args.iterations / duration if duration > 0 else 0
            print(
                f"Simulation completed after {args.iterations} generations "
                f"(final population: {final_grid.population}, "
                f"duration: {duration:.3f}s, speed: {speed:.0f} gen/s)",
                file=sys.stderr,
            )

        return 0

    except (OSError, PatternTooLargeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
