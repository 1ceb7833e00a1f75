"""
Stackeval - safe evaluation of flat stack bytecode

A minimal interpreter for untrusted numeric expressions and simple loops.

Exports:
- ByteCode / Opcode: The instruction set
- Interpreter: evaluate(instructions) -> int
- Executor: Structured execution for embedding services
- EvalError and its subclasses: The error taxonomy
"""

from stackeval.bytecode import (
    ByteCode,
    Opcode,
    ADD,
    SUBTRACT,
    MULTIPLY,
    DIVIDE,
    MODULO,
    LOOP,
    END_LOOP,
)
from stackeval.errors import (
    EvalError,
    EmptyResult,
    MissingValueForBinding,
    UnknownVariable,
    MissingLoopCount,
    UnterminatedLoop,
    InsufficientOperands,
    DivisionByZero,
    IntegerOverflow,
    StepLimitExceeded,
)
from stackeval.runtime import (
    Interpreter,
    Executor,
    ExecutionConfig,
    ExecutionResult,
)

__version__ = "1.0.0"

__all__ = [
    "ByteCode",
    "Opcode",
    "ADD",
    "SUBTRACT",
    "MULTIPLY",
    "DIVIDE",
    "MODULO",
    "LOOP",
    "END_LOOP",
    "EvalError",
    "EmptyResult",
    "MissingValueForBinding",
    "UnknownVariable",
    "MissingLoopCount",
    "UnterminatedLoop",
    "InsufficientOperands",
    "DivisionByZero",
    "IntegerOverflow",
    "StepLimitExceeded",
    "Interpreter",
    "Executor",
    "ExecutionConfig",
    "ExecutionResult",
]
