"""Check that several commands produce identical output.

The first command is the reference; every other command is run in turn and
its stdout, stderr and exit code are compared against it.
"""

import argparse
import difflib
import subprocess
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO


@dataclass
class CommandOutput:
    """Captured result of one command."""

    stdout: str
    stderr: str
    exit_code: int


def run_command(cmd: str) -> CommandOutput:
    """Run a command and capture its output.

    Args:
        cmd: Command line, split on whitespace (no shell quoting)

    Returns:
        Captured stdout, stderr and exit code; undecodable bytes become U+FFFD

    Raises:
        ValueError: If the command is empty
        OSError: If the program cannot be started
    """
    parts = cmd.split()
    if not parts:
        raise ValueError("Empty command")

    result = subprocess.run(parts, capture_output=True, encoding="utf-8", errors="replace")
    return CommandOutput(stdout=result.stdout, stderr=result.stderr, exit_code=result.returncode)


def _unified_diff(expected: str, actual: str) -> str:
    diff = difflib.unified_diff(
        expected.splitlines(keepends=True),
        actual.splitlines(keepends=True),
        fromfile="expected",
        tofile="actual",
    )
    return "".join(diff)


def compare_outputs(expected: CommandOutput, actual: CommandOutput, out: Optional[TextIO] = None) -> bool:
    """Report the differences between two command results.

    Args:
        expected: Reference result
        actual: Result to check
        out: Stream for the report (defaults to stdout)

    Returns:
        True if stdout, stderr and exit code all match
    """
    out = out if out is not None else sys.stdout
    has_differences = False

    if expected.stdout != actual.stdout:
        print(f"Stdout differences:\n{_unified_diff(expected.stdout, actual.stdout)}", file=out)
        has_differences = True

    if expected.stderr != actual.stderr:
        print(f"Stderr differences:\n{_unified_diff(expected.stderr, actual.stderr)}", file=out)
        has_differences = True

    if expected.exit_code != actual.exit_code:
        print("Exit code differences:", file=out)
        print(f"Expected: {expected.exit_code}", file=out)
        print(f"Got: {actual.exit_code}", file=out)
        has_differences = True

    return not has_differences


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifegrid-verify",
        description="Run commands and check that each one matches the output of the first",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare two runs of the simulator
  lifegrid-verify "lifegrid-cli final 5 1 patterns/blinker.txt" "./other-life final 5 1 patterns/blinker.txt"
        """,
    )

    parser.add_argument("commands", nargs="+", help="Commands to run; the first is the reference")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the verifier.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 if all commands match, 1 otherwise)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    print(f"Checking command: {args.commands[0]}")
    try:
        expected = run_command(args.commands[0])
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    all_match = True

    for cmd in args.commands[1:]:
        print(f"Checking command: {cmd}")
        try:
            actual = run_command(cmd)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            all_match = False
            continue

        if not compare_outputs(expected, actual):
            all_match = False

    return 0 if all_match else 1


if __name__ == "__main__":
    sys.exit(main())
