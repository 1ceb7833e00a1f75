"""Test fixtures for the stackeval test suite."""
import pytest
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stackeval.bytecode import ByteCode, ADD, MULTIPLY, LOOP, END_LOOP
from stackeval.runtime.state import RuntimeState
from stackeval.runtime.interpreter import Interpreter


@pytest.fixture
def interpreter() -> Interpreter:
    """Fresh interpreter."""
    return Interpreter()


@pytest.fixture
def empty_runtime_state() -> RuntimeState:
    """Empty runtime state for testing."""
    return RuntimeState()


@pytest.fixture
def example_program() -> List[ByteCode]:
    """x = 1; y = 2; return (x + 1) * y"""
    return [
        ByteCode.load_val(1),
        ByteCode.write_var("x"),
        ByteCode.load_val(2),
        ByteCode.write_var("y"),
        ByteCode.read_var("x"),
        ByteCode.load_val(1),
        ADD,
        ByteCode.read_var("y"),
        MULTIPLY,
    ]


@pytest.fixture
def loop_program() -> List[ByteCode]:
    """x = 0; loop 5 { x = x + 5 }; return x"""
    return [
        ByteCode.load_val(0),
        ByteCode.write_var("x"),
        ByteCode.load_val(5),
        LOOP,
        ByteCode.read_var("x"),
        ByteCode.load_val(5),
        ADD,
        ByteCode.write_var("x"),
        END_LOOP,
        ByteCode.read_var("x"),
    ]


@pytest.fixture
def example_program_json() -> List[Dict[str, Any]]:
    """JSON request shape of example_program."""
    return [
        {"op": "LOAD_VAL", "value": 1},
        {"op": "WRITE_VAR", "name": "x"},
        {"op": "LOAD_VAL", "value": 2},
        {"op": "WRITE_VAR", "name": "y"},
        {"op": "READ_VAR", "name": "x"},
        {"op": "LOAD_VAL", "value": 1},
        {"op": "ADD"},
        {"op": "READ_VAR", "name": "y"},
        {"op": "MULTIPLY"},
    ]


@pytest.fixture
def loop_program_json() -> List[Dict[str, Any]]:
    """JSON request shape of loop_program."""
    return [
        {"op": "LOAD_VAL", "value": 0},
        {"op": "WRITE_VAR", "name": "x"},
        {"op": "LOAD_VAL", "value": 5},
        {"op": "LOOP"},
        {"op": "READ_VAR", "name": "x"},
        {"op": "LOAD_VAL", "value": 5},
        {"op": "ADD"},
        {"op": "WRITE_VAR", "name": "x"},
        {"op": "END_LOOP"},
        {"op": "READ_VAR", "name": "x"},
    ]


@pytest.fixture
def runaway_program_json() -> List[Dict[str, Any]]:
    """Loop with a repeat count far beyond any step budget."""
    return [
        {"op": "LOAD_VAL", "value": 10 ** 9},
        {"op": "LOOP"},
        {"op": "LOAD_VAL", "value": 1},
        {"op": "WRITE_VAR", "name": "x"},
        {"op": "END_LOOP"},
        {"op": "READ_VAR", "name": "x"},
    ]


@pytest.fixture
def program_file(tmp_path, example_program_json):
    """Write example_program_json to a temporary file."""
    path = tmp_path / "program.json"
    with open(path, "w") as f:
        json.dump({"program_id": "hw-001", "instructions": example_program_json}, f)
    return str(path)
