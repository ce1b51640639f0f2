"""Tests for the output verification utility."""

import io
import subprocess
import sys
from unittest.mock import patch

import pytest

from lifegrid.frontends.verify import CommandOutput, compare_outputs, run_command, main


def completed(stdout="", stderr="", returncode=0):
    """Build a fake subprocess result."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRunCommand:
    """Test running commands."""

    def test_splits_on_whitespace(self):
        """Test the command line is split into program and arguments."""
        with patch("lifegrid.frontends.verify.subprocess.run", return_value=completed("ok\n")) as mock_run:
            result = run_command("lifegrid-cli  final 5 1   blinker.txt")

        assert mock_run.call_args[0][0] == ["lifegrid-cli", "final", "5", "1", "blinker.txt"]
        assert result == CommandOutput(stdout="ok\n", stderr="", exit_code=0)

    @pytest.mark.skipif(" " in sys.executable, reason="interpreter path contains spaces")
    def test_real_command(self):
        """Test output and exit code of a real process are captured."""
        result = run_command(f"{sys.executable} -c exit(3)")

        assert result.exit_code == 3
        assert result.stdout == ""

    @pytest.mark.skipif(" " in sys.executable, reason="interpreter path contains spaces")
    def test_invalid_utf8_output(self, tmp_path):
        """Test undecodable output bytes are replaced instead of failing."""
        script = tmp_path / "emit.py"
        script.write_text("import sys\nsys.stdout.buffer.write(b\"ab\\xff\\n\")\nsys.stderr.buffer.write(b\"\\xfe\")\n")

        result = run_command(f"{sys.executable} {script}")

        assert result.exit_code == 0
        assert result.stdout == "ab\ufffd\n"
        assert result.stderr == "\ufffd"

    def test_decoding_is_lossy(self):
        """Test output is decoded as UTF-8 with replacement."""
        with patch("lifegrid.frontends.verify.subprocess.run", return_value=completed()) as mock_run:
            run_command("prog")

        assert mock_run.call_args[1]["encoding"] == "utf-8"
        assert mock_run.call_args[1]["errors"] == "replace"

    def test_empty_command(self):
        """Test an empty command is rejected."""
        with pytest.raises(ValueError):
            run_command("   ")

    def test_unknown_program(self):
        """Test a program that does not exist raises an OS error."""
        with pytest.raises(OSError):
            run_command("lifegrid-no-such-program-here")


class TestCompareOutputs:
    """Test comparing command results."""

    def test_identical(self):
        """Test identical results match and print nothing."""
        out = io.StringIO()
        result = CommandOutput("a\nb\n", "", 0)

        assert compare_outputs(result, CommandOutput("a\nb\n", "", 0), out=out) is True
        assert out.getvalue() == ""

    def test_stdout_difference(self):
        """Test stdout differences are shown as a unified diff."""
        out = io.StringIO()

        matched = compare_outputs(CommandOutput("a\nb\n", "", 0), CommandOutput("a\nc\n", "", 0), out=out)

        report = out.getvalue()
        assert matched is False
        assert report.startswith("Stdout differences:\n")
        assert "-b\n" in report
        assert "+c\n" in report
        assert "Stderr differences" not in report

    def test_stderr_difference(self):
        """Test stderr differences are reported separately."""
        out = io.StringIO()

        matched = compare_outputs(CommandOutput("", "x\n", 1), CommandOutput("", "y\n", 1), out=out)

        assert matched is False
        assert "Stderr differences:" in out.getvalue()

    def test_exit_code_difference(self):
        """Test exit code differences show both codes."""
        out = io.StringIO()

        matched = compare_outputs(CommandOutput("", "", 0), CommandOutput("", "", 1), out=out)

        assert matched is False
        assert out.getvalue() == "Exit code differences:\nExpected: 0\nGot: 1\n"


class TestMain:
    """Test the verifier entry point."""

    def test_all_match(self, capsys):
        """Test matching commands give exit code 0."""
        with patch("lifegrid.frontends.verify.subprocess.run", return_value=completed("same\n")):
            assert main(["first cmd", "second cmd", "third cmd"]) == 0

        out = capsys.readouterr().out
        assert out == (
            "Checking command: first cmd\n"
            "Checking command: second cmd\n"
            "Checking command: third cmd\n"
        )

    def test_mismatch(self, capsys):
        """Test any mismatch gives exit code 1."""
        results = [completed("same\n"), completed("same\n"), completed("other\n")]
        with patch("lifegrid.frontends.verify.subprocess.run", side_effect=results):
            assert main(["first", "second", "third"]) == 1

        assert "Stdout differences:" in capsys.readouterr().out

    def test_single_command(self):
        """Test a lone reference command trivially matches."""
        with patch("lifegrid.frontends.verify.subprocess.run", return_value=completed("x\n", returncode=4)):
            assert main(["only"]) == 0

    def test_no_commands(self):
        """Test at least one command is required."""
        with pytest.raises(SystemExit):
            main([])

    def test_reference_cannot_start(self, capsys):
        """Test a reference command that fails to start gives exit code 1."""
        with patch("lifegrid.frontends.verify.subprocess.run", side_effect=FileNotFoundError("nope")):
            assert main(["missing", "other"]) == 1
        assert "Error: nope" in capsys.readouterr().err

    def test_later_command_cannot_start(self, capsys):
        """Test a later command that fails to start counts as a mismatch."""
        with patch(
            "lifegrid.frontends.verify.subprocess.run",
            side_effect=[completed("ok\n"), FileNotFoundError("nope"), completed("ok\n")],
        ):
            assert main(["ref", "missing", "fine"]) == 1

        assert "Checking command: fine" in capsys.readouterr().out
