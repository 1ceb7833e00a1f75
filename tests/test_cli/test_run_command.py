"""CLI tests for run, validate and version commands."""

import pytest
import json
from click.testing import CliRunner

from stackeval import __version__
from stackeval.cli import main as cli_main


@pytest.fixture
def runner():
    """CLI runner."""
    return CliRunner()


@pytest.fixture
def write_program(tmp_path):
    """Write a program document to a temporary file."""
    def _write(document, name="program.json"):
        path = tmp_path / name
        with open(path, "w") as f:
            json.dump(document, f)
        return str(path)
    return _write


class TestRunCommand:
    """Tests for the run CLI command."""

    def test_run_missing_program(self, runner):
        """Test run with missing program argument."""
        result = runner.invoke(cli_main, ["run"])
        assert result.exit_code != 0

    def test_run_program_not_found(self, runner):
        """Test run with non-existent program file."""
        result = runner.invoke(cli_main, ["run", "/nonexistent/program.json"])
        assert result.exit_code != 0

    def test_run_invalid_json(self, runner, tmp_path):
        """Test run with invalid JSON file."""
        path = tmp_path / "invalid.json"
        path.write_text("not valid json")
        result = runner.invoke(cli_main, ["run", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_run_invalid_program(self, runner, write_program):
        """Test run with a document that fails the schema."""
        path = write_program([{"op": "JUMP"}])
        result = runner.invoke(cli_main, ["run", path])
        assert result.exit_code == 1
        assert "Invalid program" in result.output

    def test_run_prints_result(self, runner, program_file):
        """Test run prints the value on success."""
        result = runner.invoke(cli_main, ["run", program_file])
        assert result.exit_code == 0
        assert result.output.strip() == "4"

    def test_run_json_output(self, runner, program_file):
        """Test run with JSON output flag."""
        result = runner.invoke(cli_main, ["run", program_file, "--json-output"])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["success"] == True
        assert output["value"] == 4
        assert output["program_id"] == "hw-001"
        assert output["bindings"] == {"x": 1, "y": 2}

    def test_run_evaluation_error(self, runner, write_program):
        """Test run exits 1 and reports the error kind."""
        path = write_program([{"op": "LOAD_VAL", "value": 5}, {"op": "ADD"}])
        result = runner.invoke(cli_main, ["run", path])
        assert result.exit_code == 1
        assert "INSUFFICIENT_OPERANDS" in result.output
        assert "expecting 2 operands" in result.output

    def test_run_evaluation_error_json(self, runner, write_program):
        """Test JSON output on failure."""
        path = write_program([])
        result = runner.invoke(cli_main, ["run", path, "-j"])
        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] == False
        assert output["error"]["kind"] == "EMPTY_RESULT"

    def test_run_integer_overflow(self, runner, write_program):
        """Test a result beyond 32 signed bits is a clean error, not a crash."""
        path = write_program([
            {"op": "LOAD_VAL", "value": 1},
            {"op": "WRITE_VAR", "name": "x"},
            {"op": "LOAD_VAL", "value": 5000},
            {"op": "LOOP"},
            {"op": "READ_VAR", "name": "x"},
            {"op": "LOAD_VAL", "value": 10},
            {"op": "MULTIPLY"},
            {"op": "WRITE_VAR", "name": "x"},
            {"op": "END_LOOP"},
            {"op": "READ_VAR", "name": "x"},
        ])
        result = runner.invoke(cli_main, ["run", path])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Error: INTEGER_OVERFLOW" in result.output

    def test_run_integer_overflow_json(self, runner, write_program):
        """Test JSON output reports the overflow."""
        path = write_program([
            {"op": "LOAD_VAL", "value": 2147483647},
            {"op": "LOAD_VAL", "value": 1},
            {"op": "ADD"},
        ])
        result = runner.invoke(cli_main, ["run", path, "-j"])
        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] == False
        assert output["error"]["kind"] == "INTEGER_OVERFLOW"
        assert output["error"]["index"] == 2

    def test_run_max_steps(self, runner, write_program, loop_program_json):
        """Test --max-steps stops the loop."""
        path = write_program(loop_program_json)
        result = runner.invoke(cli_main, ["run", path, "--max-steps", "10"])
        assert result.exit_code == 1
        assert "STEP_LIMIT_EXCEEDED" in result.output

    def test_run_listing(self, runner, write_program, loop_program_json):
        """Test --listing prints the program before the result."""
        path = write_program(loop_program_json)
        result = runner.invoke(cli_main, ["run", path, "--listing"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "0  LOAD_VAL 0"
        assert lines[-1] == "30"


class TestValidateCommand:
    """Tests for the validate CLI command."""

    def test_validate_valid(self, runner, program_file):
        """Test validating a valid program."""
        result = runner.invoke(cli_main, ["validate", program_file])
        assert result.exit_code == 0
        assert "Program valid" in result.output

    def test_validate_json_output(self, runner, program_file):
        """Test validate with JSON output."""
        result = runner.invoke(cli_main, ["validate", program_file, "-j"])
        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["valid"] == True
        assert output["instruction_count"] == 9

    def test_validate_invalid(self, runner, write_program):
        """Test validating an unterminated loop."""
        path = write_program([{"op": "LOAD_VAL", "value": 1}, {"op": "LOOP"}])
        result = runner.invoke(cli_main, ["validate", path])
        assert result.exit_code == 1
        assert "no following END_LOOP" in result.output


class TestVersionCommand:
    """Tests for the version CLI command."""

    def test_version(self, runner):
        """Test version output."""
        result = runner.invoke(cli_main, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
