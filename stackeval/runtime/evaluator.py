"""
Stackeval Instruction Evaluator

Walks a flat instruction sequence left to right and dispatches each
instruction against a RuntimeState:
- LOAD_VAL / READ_VAR: push
- WRITE_VAR: pop and bind
- ADD / SUBTRACT / MULTIPLY / DIVIDE / MODULO: pop two, push one; a result
  outside the 32-bit signed range raises IntegerOverflow
- LOOP: pop a repeat count and re-walk the body up to the nearest END_LOOP
- END_LOOP: no-op when reached directly

The first failing instruction raises an EvalError; nothing is rolled back.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

from stackeval.bytecode import INT32_MAX, INT32_MIN, ByteCode, Opcode
from stackeval.errors import (
    DivisionByZero,
    InsufficientOperands,
    IntegerOverflow,
    MissingLoopCount,
    MissingValueForBinding,
    StepLimitExceeded,
    UnknownVariable,
    UnterminatedLoop,
)
from stackeval.runtime.state import RuntimeState

logger = logging.getLogger(__name__)


def _truncated_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _truncated_mod(left: int, right: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return left - right * _truncated_div(left, right)


BINARY_OPERATIONS: Dict[Opcode, Callable[[int, int], int]] = {
    Opcode.ADD: lambda left, right: left + right,
    Opcode.SUBTRACT: lambda left, right: left - right,
    Opcode.MULTIPLY: lambda left, right: left * right,
    Opcode.DIVIDE: _truncated_div,
    Opcode.MODULO: _truncated_mod,
}


def find_loop_end(instructions: Sequence[ByteCode], start: int, stop: int) -> Optional[int]:
    """
    Index of the first END_LOOP in instructions[start:stop], or None.

    Depth is not counted: the nearest terminator closes the loop.
    """
    for index in range(start, stop):
        if instructions[index].opcode == Opcode.END_LOOP:
            return index
    return None


class InstructionEvaluator:
    """
    Evaluates instruction sequences against a shared RuntimeState.

    max_steps bounds the number of dispatched instructions, loop re-runs
    included. None means unbounded.
    """

    def __init__(self, state: RuntimeState, max_steps: Optional[int] = None):
        self.state = state
        self.max_steps = max_steps

    def run(self, instructions: Sequence[ByteCode]) -> None:
        """Evaluate a whole program."""
        self._evaluate_range(instructions, 0, len(instructions))

    def _evaluate_range(self, instructions: Sequence[ByteCode], start: int, stop: int) -> None:
        index = start
        while index < stop:
            instruction = instructions[index]
            self._count_step(index, instruction)
            opcode = instruction.opcode

            if opcode == Opcode.LOAD_VAL:
                self.state.push(instruction.operand)
            elif opcode == Opcode.WRITE_VAR:
                self._bind_variable(index, instruction)
            elif opcode == Opcode.READ_VAR:
                self._read_variable(index, instruction)
            elif opcode == Opcode.LOOP:
                index = self._repeat(instructions, index, stop)
                continue
            elif opcode == Opcode.END_LOOP:
                pass
            else:
                self._binary_operation(index, instruction)
            index += 1

    def _count_step(self, index: int, instruction: ByteCode) -> None:
        self.state.steps += 1
        if self.max_steps is not None and self.state.steps > self.max_steps:
            raise StepLimitExceeded(index, instruction)

    def _bind_variable(self, index: int, instruction: ByteCode) -> None:
        value = self.state.pop()
        if value is None:
            raise MissingValueForBinding(index, instruction)
        self.state.environment.bind(instruction.operand, value)

    def _read_variable(self, index: int, instruction: ByteCode) -> None:
        value = self.state.environment.get(instruction.operand)
        if value is None:
            raise UnknownVariable(index, instruction)
        self.state.push(value)

    def _repeat(self, instructions: Sequence[ByteCode], index: int, stop: int) -> int:
        """
        Run the body of the LOOP at index and return where the walk resumes.

        A positive count runs the body that many times and resumes right after
        the LOOP, so the body is walked once more in line. A count of zero or
        less skips past the matching END_LOOP.
        """
        instruction = instructions[index]
        count = self.state.pop()
        if count is None:
            raise MissingLoopCount(index, instruction)

        end = find_loop_end(instructions, index + 1, stop)
        if end is None:
            raise UnterminatedLoop(index, instruction)

        if count <= 0:
            logger.debug("Skipping loop at %d (count=%d)", index, count)
            return end + 1

        logger.debug("Entering loop at %d: body %d..%d, count=%d", index, index + 1, end, count)
        for _ in range(count):
            self._evaluate_range(instructions, index + 1, end)
        return index + 1

    def _binary_operation(self, index: int, instruction: ByteCode) -> None:
        first_operand = self.state.pop()
        second_operand = self.state.pop()
        if first_operand is None or second_operand is None:
            raise InsufficientOperands(index, instruction)

        if instruction.opcode in (Opcode.DIVIDE, Opcode.MODULO) and first_operand == 0:
            raise DivisionByZero(index, instruction)

        operation = BINARY_OPERATIONS[instruction.opcode]
        result = operation(second_operand, first_operand)
        # INT32_MIN / -1 lands here too
        if not INT32_MIN <= result <= INT32_MAX:
            raise IntegerOverflow(index, instruction)
        self.state.push(result)
