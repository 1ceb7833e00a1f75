"""
Static program validation.

Checks a program's loop structure and variable usage without executing it.
Errors are malformations that fail on every run; warnings flag constructs
that fail or misbehave only on some runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Set

from stackeval.bytecode import ByteCode, Opcode
from stackeval.runtime.evaluator import find_loop_end


@dataclass
class ValidationReport:
    valid: bool
    instruction_count: int = 0
    loop_count: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "instruction_count": self.instruction_count,
            "loop_count": self.loop_count,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def validate_program(instructions: Sequence[ByteCode]) -> ValidationReport:
    """Validate a program's structure."""
    errors: List[str] = []
    warnings: List[str] = []

    if not instructions:
        errors.append("Program is empty: no return value")

    closing_ends: Set[int] = set()
    loop_count = 0
    for index, instruction in enumerate(instructions):
        if instruction.opcode != Opcode.LOOP:
            continue
        loop_count += 1
        end = find_loop_end(instructions, index + 1, len(instructions))
        if end is None:
            errors.append(f"LOOP at {index} has no following END_LOOP")
            continue
        closing_ends.add(end)
        for inner in range(index + 1, end):
            if instructions[inner].opcode == Opcode.LOOP:
                warnings.append(
                    f"LOOP at {inner} is nested in the loop at {index}; "
                    f"the END_LOOP at {end} closes the outer loop"
                )

    for index, instruction in enumerate(instructions):
        if instruction.opcode == Opcode.END_LOOP and index not in closing_ends:
            warnings.append(f"END_LOOP at {index} does not close any LOOP")

    written: Set[str] = set()
    for index, instruction in enumerate(instructions):
        if instruction.opcode == Opcode.WRITE_VAR:
            written.add(instruction.operand)
        elif instruction.opcode == Opcode.READ_VAR and instruction.operand not in written:
            warnings.append(f"READ_VAR at {index} reads {instruction.operand!r} before any WRITE_VAR")

    return ValidationReport(
        valid=len(errors) == 0,
        instruction_count=len(instructions),
        loop_count=loop_count,
        errors=errors,
        warnings=warnings,
    )
