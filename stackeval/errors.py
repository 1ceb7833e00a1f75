"""
Stackeval Error Taxonomy

Every malformed-program case the evaluator can observe maps to exactly one
EvalError subclass. Each carries a fixed message; str(err) is that message.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from stackeval.bytecode import ByteCode


class EvalError(Exception):
    """Base class for evaluation failures."""
    kind: str = "EVAL_ERROR"
    message: str = "Evaluation failed."

    def __init__(self, index: Optional[int] = None,
                 instruction: Optional["ByteCode"] = None):
        self.index = index
        self.instruction = instruction
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "index": self.index,
        }


class EmptyResult(EvalError):
    kind = "EMPTY_RESULT"
    message = "Incorrectly formatted expression: no return value."


class MissingValueForBinding(EvalError):
    kind = "MISSING_VALUE_FOR_BINDING"
    message = "Trying to bind variable without value."


class UnknownVariable(EvalError):
    kind = "UNKNOWN_VARIABLE"
    message = "Trying to read variable that does not exist."


class MissingLoopCount(EvalError):
    kind = "MISSING_LOOP_COUNT"
    message = "A number is required to use Loop."


class UnterminatedLoop(EvalError):
    kind = "UNTERMINATED_LOOP"
    message = "There is no EndLoop instruction associated to the previous Loop."


class InsufficientOperands(EvalError):
    kind = "INSUFFICIENT_OPERANDS"
    message = "Incorrectly formatted expression: expecting 2 operands."


class DivisionByZero(EvalError):
    kind = "DIVISION_BY_ZERO"
    message = "Division or modulo by zero."


class IntegerOverflow(EvalError):
    kind = "INTEGER_OVERFLOW"
    message = "Integer overflow: result outside the 32-bit signed range."


class StepLimitExceeded(EvalError):
    kind = "STEP_LIMIT_EXCEEDED"
    message = "Execution step limit exceeded."


ERROR_KINDS = {
    cls.kind: cls
    for cls in (
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
}
