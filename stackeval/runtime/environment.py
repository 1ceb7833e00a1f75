"""
Stackeval Runtime Environment

Environment is the flat variable namespace of an evaluation: one mapping from
name to the most recently written integer. There is no scoping, loop bodies
read and write the same bindings as the enclosing program.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional


class Environment:
    """Variable bindings shared by every instruction of an evaluation."""

    def __init__(self, bindings: Optional[Dict[str, int]] = None):
        self._bindings: Dict[str, int] = dict(bindings or {})

    def bind(self, name: str, value: int) -> None:
        """Bind name to value, overwriting any earlier binding."""
        self._bindings[name] = value

    def get(self, name: str) -> Optional[int]:
        """Get the value bound to name, or None when unbound."""
        return self._bindings.get(name)

    def clear(self) -> None:
        self._bindings.clear()

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current bindings."""
        return dict(self._bindings)

    def restore(self, snapshot: Dict[str, int]) -> None:
        """Replace all bindings with a snapshot."""
        self._bindings = dict(snapshot)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __repr__(self) -> str:
        return f"Environment({self._bindings!r})"
