"""Token types produced while scanning template text."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple, Union

import msgspec


class Span(msgspec.Struct, frozen=True):
    """Offsets of a token in the template text (end is exclusive)."""

    start: int
    end: int


class Argument(msgspec.Struct, frozen=True):
    """A single placeholder argument.

    `key` is empty for positional arguments, e.g. the part after the colon
    in ``${tr:greeting}``.
    """

    key: str
    value: str


def positional(args: Sequence[Argument]) -> list[str]:
    """Values of the arguments that have no key, in order."""
    return [arg.value for arg in args if not arg.key]


class PlaceholderKind(str, Enum):
    VARIABLE = "variable"
    FUNCTION = "function"
    CONDITIONAL_OPEN = "open"
    CONDITIONAL_CLOSE = "close"


class Literal(msgspec.Struct, frozen=True):
    """Text copied verbatim to the output."""

    text: str
    span: Span


class RawPlaceholder(msgspec.Struct, frozen=True):
    """An unclassified ``${...}`` occurrence; `inner` excludes the delimiters."""

    inner: str
    span: Span


class Placeholder(msgspec.Struct, frozen=True):
    """A classified ``${...}`` occurrence."""

    kind: PlaceholderKind
    name: str
    span: Span
    args: Tuple[Argument, ...] = ()

    def get(self, key: str) -> str | None:
        """Value of the first argument named `key`, if any."""
        for arg in self.args:
            if arg.key == key:
                return arg.value
        return None

    @property
    def positional(self) -> list[str]:
        return positional(self.args)


Token = Union[Literal, Placeholder]
