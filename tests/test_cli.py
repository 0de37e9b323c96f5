"""Tests for CLI."""

import json
import os
import subprocess
import sys
from pathlib import Path


def run_cli(*args, stdin=None):
    """Run CLI and return output."""
    result = subprocess.run(
        [sys.executable, "-m", "snap_eligibility.cli", *args],
        capture_output=True,
        text=True,
        input=stdin,
        env={**os.environ, "PYTHONPATH": "src"},
        cwd=Path(__file__).parent.parent,
    )
    return result


class TestCLI:
    """Tests for command-line interface."""

    def test_help(self):
        """--help shows usage."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "snap-eligibility" in result.stdout
        assert "calculate" in result.stdout

    def test_version(self):
        """--version shows version."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert "0.2.0" in result.stdout

    def test_no_command_shows_help(self):
        """No command shows help and exits 1."""
        result = run_cli()
        assert result.returncode == 1

    def test_calculate(self):
        """calculate prints a whole-dollar report."""
        result = run_cli("calculate", "--earned", "1000", "--shelter", "400")
        assert result.returncode == 0
        assert "Adjusted income:" in result.stdout
        assert "Benefit allotment:      $151" in result.stdout

    def test_calculate_json(self):
        """calculate --json prints the display figures."""
        result = run_cli(
            "calculate", "--household-size", "2", "--senior",
            "--earned", "500", "--unearned", "900",
            "--deduction", "50", "--medical", "200", "--shelter", "700",
            "--json",
        )
        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["benefit_allotment"] == 352
        assert data["automatically_eligible"] is True

    def test_calculate_ineligible(self):
        """An ineligible household is told so."""
        result = run_cli("calculate", "--household-size", "3", "--unearned", "3200")
        assert result.returncode == 0
        assert "not eligible" in result.stdout
        assert "Benefit allotment" not in result.stdout

    def test_calculate_invalid_input(self):
        """Invalid entries print each offending field and exit 1."""
        result = run_cli("calculate", "--earned", "abc", "--earned", "-1")
        assert result.returncode == 1
        assert "Error: earned_income[0]: Value must be a number." in result.stderr
        assert "Error: earned_income[1]: Value cannot be negative." in result.stderr

    def test_params(self):
        """params prints the active table."""
        result = run_cli("params")
        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["MaximumBenefit"]["Additional"] == 144

    def test_params_file(self, tmp_path):
        """--params swaps the table."""
        table = json.loads(run_cli("params").stdout)
        table["MaximumBenefit"]["1"] = 200
        path = tmp_path / "table.json"
        path.write_text(json.dumps(table))
        result = run_cli("--params", str(path), "calculate", "--earned", "1000", "--shelter", "400")
        assert "Benefit allotment:      $159" in result.stdout

    def test_params_missing(self, tmp_path):
        """A missing table is an error."""
        result = run_cli("--params", str(tmp_path / "none.json"), "params")
        assert result.returncode == 1
        assert "not found" in result.stderr

    def test_interview(self):
        """interview walks every step from stdin."""
        answers = "1\nn\nn\nn\n1000\n\n\n\n400\n\n"
        result = run_cli("interview", stdin=answers)
        assert result.returncode == 0
        assert "below the limit of $1,860" in result.stdout
        assert "Benefit allotment:      $151" in result.stdout

    def test_interview_reprompts_after_error(self):
        """A rejected answer is reported and asked again."""
        answers = "0\nn\nn\nn\n1\nn\nn\nn\n1000\n\n\n\n400\n\n"
        result = run_cli("interview", stdin=answers)
        assert result.returncode == 0
        assert "Error: household_size: Value cannot be negative or zero." in result.stdout
        assert "$151" in result.stdout

    def test_interview_ineligible(self):
        """An ineligible household ends at the income test."""
        answers = "3\nn\nn\nn\n\n3200\n\n"
        result = run_cli("interview", stdin=answers)
        assert result.returncode == 0
        assert "not eligible" in result.stdout

    def test_interview_eof(self):
        """Running out of input aborts."""
        result = run_cli("interview", stdin="1\n")
        assert result.returncode == 1
        assert "Aborted" in result.stderr
