"""Conditional Stack Evaluator.

Tracks open ``${<name>}`` blocks for one render pass. Output is suppressed
from the first false block until that block closes; blocks nested inside a
suppressed block are still tracked so that balance is checked everywhere.
"""

from __future__ import annotations

from collections.abc import Callable

from wtpl.exceptions import UnbalancedConditionalError


class ConditionStack:
    """Open condition names plus the depth at which suppression started.

    Args:
        lookup: Returns the truth value of a condition name. Only consulted
            while output is not already suppressed.
    """

    def __init__(self, lookup: Callable[[str], bool]):
        self._lookup = lookup
        self._names: list[str] = []
        self._offsets: list[int] = []
        self.suppression_depth = 0

    @property
    def depth(self) -> int:
        return len(self._names)

    @property
    def suppressed(self) -> bool:
        return self.suppression_depth > 0

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def open(self, name: str, offset: int = 0) -> None:
        self._names.append(name)
        self._offsets.append(offset)
        if not self.suppressed and not self._lookup(name):
            self.suppression_depth = self.depth

    def close(self, name: str, offset: int = 0) -> None:
        if not self._names:
            raise UnbalancedConditionalError(
                f"closing block '{name}' without an open block", offset, name
            )
        if self._names[-1] != name:
            raise UnbalancedConditionalError(
                f"closing block '{name}' does not match open block '{self._names[-1]}'",
                offset,
                name,
            )

        depth = self.depth
        self._names.pop()
        self._offsets.pop()
        if depth <= self.suppression_depth:
            self.suppression_depth = 0

    def finish(self) -> None:
        """Fail if any block is still open at the end of the text."""
        if self._names:
            raise UnbalancedConditionalError(
                f"block '{self._names[-1]}' is never closed",
                self._offsets[-1],
                self._names[-1],
            )
