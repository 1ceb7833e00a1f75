"""
Stackeval Instruction Set

A program is a flat sequence of ByteCode values. Loop bodies are delimited by
LOOP / END_LOOP markers inside the same sequence, never nested as a
sub-structure.

Key classes:
- Opcode: The closed set of ten opcodes
- ByteCode: Immutable instruction (opcode plus optional operand)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class Opcode(Enum):
    LOAD_VAL = "LOAD_VAL"
    WRITE_VAR = "WRITE_VAR"
    READ_VAR = "READ_VAR"
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"
    LOOP = "LOOP"
    END_LOOP = "END_LOOP"

    @property
    def is_binary(self) -> bool:
        return self in BINARY_OPCODES

    @property
    def takes_name(self) -> bool:
        return self in (Opcode.WRITE_VAR, Opcode.READ_VAR)


# Values are signed 32-bit integers.
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


BINARY_OPCODES = frozenset({
    Opcode.ADD,
    Opcode.SUBTRACT,
    Opcode.MULTIPLY,
    Opcode.DIVIDE,
    Opcode.MODULO,
})


@dataclass(frozen=True)
class ByteCode:
    """
    One instruction of the bytecode language.

    Operand rules:
    - LOAD_VAL: signed 32-bit integer literal
    - WRITE_VAR / READ_VAR: non-empty variable name
    - everything else: no operand
    """
    opcode: Opcode
    operand: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.opcode, Opcode):
            raise TypeError(f"opcode must be an Opcode, got {self.opcode!r}")

        if self.opcode == Opcode.LOAD_VAL:
            # bool is an int subclass but never a valid literal
            if isinstance(self.operand, bool) or not isinstance(self.operand, int):
                raise TypeError(f"LOAD_VAL expects an integer literal, got {self.operand!r}")
            if not INT32_MIN <= self.operand <= INT32_MAX:
                raise ValueError(f"LOAD_VAL literal {self.operand} is outside the 32-bit signed range")
        elif self.opcode.takes_name:
            if not isinstance(self.operand, str):
                raise TypeError(f"{self.opcode.value} expects a variable name, got {self.operand!r}")
            if not self.operand:
                raise ValueError(f"{self.opcode.value} expects a non-empty variable name")
        elif self.operand is not None:
            raise ValueError(f"{self.opcode.value} takes no operand, got {self.operand!r}")

    @classmethod
    def load_val(cls, number: int) -> "ByteCode":
        """Push a literal onto the number stack."""
        return cls(Opcode.LOAD_VAL, number)

    @classmethod
    def write_var(cls, name: str) -> "ByteCode":
        """Bind the top of the number stack to a variable."""
        return cls(Opcode.WRITE_VAR, name)

    @classmethod
    def read_var(cls, name: str) -> "ByteCode":
        """Push the value bound to a variable."""
        return cls(Opcode.READ_VAR, name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"op": self.opcode.value}
        if self.opcode == Opcode.LOAD_VAL:
            data["value"] = self.operand
        elif self.opcode.takes_name:
            data["name"] = self.operand
        return data

    def __str__(self) -> str:
        if self.opcode == Opcode.LOAD_VAL:
            return f"{self.opcode.value} {self.operand}"
        if self.opcode.takes_name:
            return f"{self.opcode.value} {self.operand!r}"
        return self.opcode.value


ADD = ByteCode(Opcode.ADD)
SUBTRACT = ByteCode(Opcode.SUBTRACT)
MULTIPLY = ByteCode(Opcode.MULTIPLY)
DIVIDE = ByteCode(Opcode.DIVIDE)
MODULO = ByteCode(Opcode.MODULO)
LOOP = ByteCode(Opcode.LOOP)
END_LOOP = ByteCode(Opcode.END_LOOP)
