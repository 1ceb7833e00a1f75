"""
Stackeval Interpreter

Public entry point of the evaluator:

    interpreter = Interpreter()
    interpreter.evaluate([ByteCode.load_val(1), ByteCode.load_val(2), ADD])  # 3

One interpreter owns one RuntimeState. Variable bindings persist across
evaluate() calls on the same instance; the number stack does not. Instances
are not safe to share between concurrent callers.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from stackeval.bytecode import ByteCode
from stackeval.errors import EmptyResult
from stackeval.runtime.evaluator import InstructionEvaluator
from stackeval.runtime.state import RuntimeState


class Interpreter:
    """Evaluates bytecode programs to a single integer."""

    def __init__(self, state: RuntimeState = None, max_steps: Optional[int] = None):
        self.state = state or RuntimeState()
        self.evaluator = InstructionEvaluator(self.state, max_steps=max_steps)

    def evaluate(self, instructions: Iterable[ByteCode]) -> int:
        """
        Evaluate a program and return the top of the resulting stack.

        Args:
            instructions: Ordered, flat instruction sequence

        Returns:
            The value popped from the top of the number stack. Values below
            it are discarded.

        Raises:
            EvalError: On the first malformed instruction, or EmptyResult when
                the program leaves nothing on the stack
        """
        program = list(instructions)
        self.state.begin_call()
        self.evaluator.run(program)

        result = self.state.pop()
        if result is None:
            raise EmptyResult()
        return result

    @property
    def bindings(self) -> Dict[str, int]:
        return self.state.environment.snapshot()

    @property
    def steps(self) -> int:
        """Instructions dispatched by the last evaluate() call."""
        return self.state.steps

    def reset(self) -> None:
        """Forget all bindings."""
        self.state.reset()
