"""
Stackeval Runtime State

RuntimeState tracks everything an evaluation mutates:
- the number stack (last-in-first-out, signed integers)
- the variable environment
- the count of dispatched instructions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from stackeval.runtime.environment import Environment


@dataclass
class RuntimeState:
    """
    Mutable state of an interpreter.

    The number stack and step counter belong to one evaluation call; the
    environment outlives calls for as long as the owning interpreter does.
    """
    number_stack: List[int] = field(default_factory=list)
    environment: Environment = field(default_factory=Environment)
    steps: int = 0

    def push(self, value: int) -> None:
        self.number_stack.append(value)

    def pop(self) -> Optional[int]:
        """Pop the top of the stack, or None when it is empty."""
        if not self.number_stack:
            return None
        return self.number_stack.pop()

    def peek(self) -> Optional[int]:
        return self.number_stack[-1] if self.number_stack else None

    @property
    def depth(self) -> int:
        return len(self.number_stack)

    def begin_call(self) -> None:
        """Discard stack residue and step count left by a previous call."""
        self.number_stack.clear()
        self.steps = 0

    def reset(self) -> None:
        """Reset state, bindings included."""
        self.begin_call()
        self.environment.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number_stack": list(self.number_stack),
            "bindings": self.environment.snapshot(),
            "steps": self.steps,
        }
