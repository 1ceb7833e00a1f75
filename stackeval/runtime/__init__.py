"""
Stackeval Runtime Engine

This module provides the evaluation engine for bytecode programs:
- Interpreter: Public evaluate() entry point
- InstructionEvaluator: Instruction dispatch and loop scanning
- RuntimeState: Number stack and step counter
- Environment: Variable bindings
- Executor: Structured execution with step budget and digests
"""

from stackeval.runtime.executor import Executor, ExecutionResult, ExecutionConfig
from stackeval.runtime.evaluator import InstructionEvaluator
from stackeval.runtime.interpreter import Interpreter
from stackeval.runtime.state import RuntimeState
from stackeval.runtime.environment import Environment

__all__ = [
    "Executor",
    "ExecutionResult",
    "ExecutionConfig",
    "InstructionEvaluator",
    "Interpreter",
    "RuntimeState",
    "Environment",
]
