"""Scanner - splits template text into literal runs and ${...} spans.

Rules:
- ``$${`` is an escape and yields the literal text ``${``
- ``${`` opens a placeholder that ends at the first ``}`` outside a quoted
  argument value
- everything else, including a lone ``$``, is literal
"""

from __future__ import annotations

from typing import Iterator, Union

from wtpl.engine.nodes import Literal, RawPlaceholder, Span
from wtpl.exceptions import MalformedPlaceholderError

ESCAPE = "$${"
OPEN = "${"
CLOSE = "}"
QUOTES = "'\""


class Scanner:
    """Walks template text left to right, yielding tokens lazily."""

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[Union[Literal, RawPlaceholder]]:
        return self.tokens()

    def tokens(self) -> Iterator[Union[Literal, RawPlaceholder]]:
        text = self.text
        pos = 0
        literal_start = 0

        while True:
            dollar = text.find("$", pos)
            if dollar == -1:
                break

            if text.startswith(ESCAPE, dollar):
                if dollar > literal_start:
                    yield self._literal(literal_start, dollar)
                yield Literal(OPEN, Span(dollar, dollar + len(ESCAPE)))
                pos = literal_start = dollar + len(ESCAPE)
            elif text.startswith(OPEN, dollar):
                if dollar > literal_start:
                    yield self._literal(literal_start, dollar)
                close = self.find_close(dollar)
                yield RawPlaceholder(
                    inner=text[dollar + len(OPEN) : close],
                    span=Span(dollar, close + 1),
                )
                pos = literal_start = close + 1
            else:
                pos = dollar + 1

        if literal_start < len(text):
            yield self._literal(literal_start, len(text))

    def find_close(self, start: int) -> int:
        """Return the offset of the `}` closing the placeholder opened at `start`.

        Quotes only delimit values once the head token (the name) has ended,
        so a name like ``don't`` does not open a quoted value.
        """
        text = self.text
        in_head = True
        quote = ""
        quote_at = -1

        for i in range(start + len(OPEN), len(text)):
            c = text[i]
            if quote:
                if c == quote:
                    quote = ""
            elif c == CLOSE:
                return i
            elif c.isspace():
                in_head = False
            elif c in QUOTES and not in_head:
                quote = c
                quote_at = i

        if quote:
            raise MalformedPlaceholderError("unterminated quoted argument", quote_at)
        raise MalformedPlaceholderError("unterminated placeholder", start)

    def _literal(self, start: int, end: int) -> Literal:
        return Literal(self.text[start:end], Span(start, end))


def scan(text: str) -> Iterator[Union[Literal, RawPlaceholder]]:
    """Convenience wrapper around `Scanner.tokens`."""
    return Scanner(text).tokens()
