"""
Tests for tplink - Linker Command-Line Tool
===========================================

These tests run the tplink command through click's CliRunner and check
its output and exit codes.
"""

from pathlib import Path

from click.testing import CliRunner

from twopass import __version__
from twopass.cli.tplink import main


INPUT_1 = """\
1 xy 2
2 z xy
5 R 1004  I 5678  E 2000  R 8002  E 7001
0
1 z
6 R 8001  E 1000  E 1000  E 3000  R 1002  A 1010
0
1 z
2 R 5001  E 4000
1 z 2
2 xy z
3 A 8000  E 1001  E 2000
"""


# =============================================================================
# Basic Invocation
# =============================================================================

class TestInvocation:
    """Tests for help, version and argument handling."""

    def test_help(self):
        """Should describe the command."""
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Link object modules" in result.output
        assert "--memory-size" in result.output

    def test_help_marks_options_optional(self):
        """Should say that only the input file is required."""
        result = CliRunner().invoke(main, ["--help"])
        help_text = " ".join(result.output.split())
        assert "Only INPUT_FILE is required." in help_text

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_argument(self):
        """Should exit 2 when no input file is given."""
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 2

    def test_nonexistent_file(self):
        result = CliRunner().invoke(main, ["no-such-file.txt"])
        assert result.exit_code == 2

    def test_invalid_memory_size(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text(INPUT_1)
            result = runner.invoke(main, ["-m", "0", "in.txt"])
            assert result.exit_code == 2


# =============================================================================
# Linking
# =============================================================================

class TestLinking:
    """Tests for the report produced by a link."""

    def test_report_to_stdout(self):
        """Should print the symbol table and memory map."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text(INPUT_1)
            result = runner.invoke(main, ["in.txt"])

            assert result.exit_code == 0, f"Link failed: {result.output}"
            assert "Symbol Table\nxy=2\nz=15\n" in result.output
            assert "0:  1004\n" in result.output
            assert "15: 2002\n" in result.output

    def test_report_to_file(self):
        """Should write the report to the -o file instead of stdout."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text(INPUT_1)
            result = runner.invoke(main, ["in.txt", "-o", "in.out"])

            assert result.exit_code == 0
            assert "Symbol Table" not in result.output
            assert Path("in.out").read_text().startswith("Symbol Table\nxy=2\n")

    def test_diagnostics_still_exit_zero(self):
        """Should treat link errors as part of the report."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text("0 0 1 A 1700\n")
            result = runner.invoke(main, ["in.txt"])

            assert result.exit_code == 0
            assert "0:  1000 Error: Absolute address exceeds machine size; zero used." in result.output

    def test_truncated_input_links_last_module(self):
        """Should link what was read when the input stops mid-section."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text("1 A 0  0  2 R 1000\n")
            result = runner.invoke(main, ["in.txt"])

            assert result.exit_code == 0, f"Link failed: {result.output}"
            assert "Symbol Table\nA=0\n" in result.output
            assert "Memory Map\n0:  1000\n" in result.output

    def test_memory_size_option(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text("0 0 2 A 1009 A 1010\n")
            result = runner.invoke(main, ["-m", "10", "in.txt"])

            assert result.exit_code == 0
            assert "0:  1009\n" in result.output
            assert "1:  1000 Error:" in result.output

    def test_memory_size_from_environment(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text("0 0 1 A 1009\n")
            result = runner.invoke(main, ["in.txt"], env={"TWOPASS_MEMORY_SIZE": "5"})

            assert result.exit_code == 0
            assert "0:  1000 Error:" in result.output

    def test_verbose_summary(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("in.txt").write_text(INPUT_1)
            result = runner.invoke(main, ["-v", "in.txt"])

            assert result.exit_code == 0
            assert "Linked 4 modules into 16 words (0 errors, 0 warnings)" in result.output


# =============================================================================
# Fatal Errors
# =============================================================================

class TestFatalErrors:
    """Tests for input that cannot be linked at all."""

    def test_malformed_input(self):
        """Should exit 1 with the location of the problem."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.txt").write_text("1 xy zz\n")
            result = runner.invoke(main, ["bad.txt"])

            assert result.exit_code == 1
            assert "Link error: bad.txt:1:6: error:" in result.output

    def test_directory_argument(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("subdir").mkdir()
            result = runner.invoke(main, ["subdir"])
            assert result.exit_code == 2
