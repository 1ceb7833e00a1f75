"""
Stackeval Program Loading

Converts the JSON request shape used by the web service and the CLI into
ByteCode sequences. A document is either a bare array of instruction objects
or an object with an "instructions" array and an optional "program_id":

    [{"op": "LOAD_VAL", "value": 1}, {"op": "WRITE_VAR", "name": "x"}, ...]

Documents are checked against schemas/program.schema.json before conversion.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from stackeval.bytecode import ByteCode, Opcode


class ProgramFormatError(ValueError):
    """A program document does not match the instruction schema."""

    def __init__(self, message: str, path: Optional[List[Any]] = None):
        self.path = path or []
        location = "/".join(str(p) for p in self.path)
        super().__init__(f"{location}: {message}" if location else message)


@dataclass
class Program:
    """A loaded program."""
    instructions: List[ByteCode] = field(default_factory=list)
    program_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program_id": self.program_id,
            "instructions": program_to_json(self.instructions),
        }


def get_schema_path() -> Path:
    """Get the path to the program schema."""
    return Path(__file__).parent / "schemas" / "program.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    with open(get_schema_path(), "r") as f:
        return json.load(f)


def validate_document(document: Any) -> None:
    """
    Validate a program document against the schema.

    Raises:
        ProgramFormatError: With the most relevant schema violation
    """
    validator = Draft7Validator(load_schema())
    error = best_match(validator.iter_errors(document))
    if error is not None:
        raise ProgramFormatError(error.message, list(error.absolute_path))


def instruction_from_dict(data: Dict[str, Any]) -> ByteCode:
    """Build one ByteCode from its JSON object."""
    try:
        opcode = Opcode(data["op"])
    except (KeyError, ValueError, TypeError):
        raise ProgramFormatError(f"Unknown instruction: {data!r}") from None

    if opcode == Opcode.LOAD_VAL:
        value = data.get("value")
        # JSON numbers like 3.0 are integral
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return ByteCode.load_val(value)
    if opcode.takes_name:
        return ByteCode(opcode, data.get("name"))
    return ByteCode(opcode)


def program_from_json(document: Union[List[Any], Dict[str, Any]]) -> Program:
    """
    Convert a parsed JSON document into a Program.

    Raises:
        ProgramFormatError: If the document does not match the schema
    """
    validate_document(document)

    if isinstance(document, dict):
        items = document["instructions"]
        program_id = document.get("program_id")
    else:
        items = document
        program_id = None

    instructions = []
    for position, item in enumerate(items):
        try:
            instructions.append(instruction_from_dict(item))
        except (TypeError, ValueError) as e:
            raise ProgramFormatError(str(e), [position])
    return Program(instructions=instructions, program_id=program_id)


def program_to_json(instructions: List[ByteCode]) -> List[Dict[str, Any]]:
    return [instruction.to_dict() for instruction in instructions]


def load_program(path: Union[str, Path]) -> Program:
    """
    Load a program from a JSON file.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
        ProgramFormatError: If the document does not match the schema
    """
    with open(path) as f:
        document = json.load(f)
    return program_from_json(document)


def format_listing(instructions: List[ByteCode]) -> str:
    """Assembly-style listing, one numbered instruction per line."""
    width = len(str(max(len(instructions) - 1, 0)))
    return "\n".join(
        f"{index:>{width}}  {instruction}" for index, instruction in enumerate(instructions)
    )
