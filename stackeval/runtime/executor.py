"""
Stackeval Program Executor

Wraps the Interpreter for embedding services: evaluation errors become a
structured ExecutionResult instead of propagating, every run is timed and
identified by a program digest, and an optional step budget stops runaway
loops.

Key classes:
- ExecutionConfig: Configuration for execution
- ExecutionResult: Result of one program execution
- Executor: Execution engine
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from stackeval.bytecode import ByteCode
from stackeval.errors import EvalError
from stackeval.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)


@dataclass
class ExecutionConfig:
    """Configuration for program execution."""
    max_steps: Optional[int] = None
    reuse_bindings: bool = False
    include_bindings: bool = True


@dataclass
class ExecutionResult:
    """Result of program execution."""
    success: bool
    value: Optional[int] = None
    error: Optional[Dict[str, Any]] = None
    steps: int = 0
    bindings: Dict[str, int] = field(default_factory=dict)
    execution_time_ms: float = 0.0
    program_digest: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "value": self.value,
            "error": self.error,
            "steps": self.steps,
            "bindings": self.bindings,
            "execution_time_ms": self.execution_time_ms,
            "program_digest": self.program_digest,
        }


def compute_program_digest(instructions: List[ByteCode]) -> str:
    """Digest of the canonical JSON listing of a program."""
    payload = [instruction.to_dict() for instruction in instructions]
    canon = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(canon.encode("utf-8")).hexdigest()


class Executor:
    """
    Runs programs and reports the outcome as an ExecutionResult.

    With reuse_bindings the executor keeps one Interpreter, so variables
    written by one program are visible to the next. Otherwise each program
    starts from empty bindings.
    """

    def __init__(self, config: ExecutionConfig = None):
        self.config = config or ExecutionConfig()
        self._interpreter: Optional[Interpreter] = None

    def _get_interpreter(self) -> Interpreter:
        if self.config.reuse_bindings and self._interpreter is not None:
            return self._interpreter
        interpreter = Interpreter(max_steps=self.config.max_steps)
        if self.config.reuse_bindings:
            self._interpreter = interpreter
        return interpreter

    def execute(self, instructions: Iterable[ByteCode]) -> ExecutionResult:
        """
        Execute a program.

        Args:
            instructions: Ordered, flat instruction sequence

        Returns:
            ExecutionResult; success is False when the program raised an
            EvalError
        """
        start = time.perf_counter()
        program = list(instructions)
        digest = compute_program_digest(program)
        logger.debug("Executing program %s (%d instructions)", digest, len(program))

        interpreter = self._get_interpreter()
        result = ExecutionResult(success=False, program_digest=digest)

        try:
            result.value = interpreter.evaluate(program)
            result.success = True
        except EvalError as e:
            result.error = e.to_dict()
            logger.info("Program %s failed at instruction %s: %s", digest, e.index, e)

        result.steps = interpreter.steps
        if self.config.include_bindings:
            result.bindings = interpreter.bindings
        result.execution_time_ms = (time.perf_counter() - start) * 1000

        if result.success:
            logger.info("Program %s returned %d in %d steps", digest, result.value, result.steps)
        return result
