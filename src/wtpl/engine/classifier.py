"""Placeholder Classifier - turns raw ${...} spans into typed placeholders."""

from __future__ import annotations

from typing import Iterator

from wtpl.engine.arguments import parse_arguments
from wtpl.engine.conditions import ConditionStack
from wtpl.engine.nodes import (
    Argument,
    Literal,
    Placeholder,
    PlaceholderKind,
    RawPlaceholder,
    Token,
)
from wtpl.engine.scanner import OPEN, Scanner
from wtpl.exceptions import MalformedPlaceholderError


def split_head(inner: str) -> tuple[str, int]:
    """Return the head token of `inner` and the index where it ends."""
    for i, c in enumerate(inner):
        if c.isspace():
            return inner[:i], i
    return inner, len(inner)


def classify(raw: RawPlaceholder) -> Placeholder:
    """Classify a raw placeholder.

    Rules, in order:
        ``<name>``    conditional open
        ``</name>``   conditional close
        ``fun:arg``   function call, `arg` becomes the first positional argument
        ``name``      variable

    Raises:
        MalformedPlaceholderError: If the name is empty, or an argument is
            malformed.
    """
    head, head_end = split_head(raw.inner)
    rest_offset = raw.span.start + len(OPEN) + head_end
    args = parse_arguments(raw.inner[head_end:], rest_offset)

    if head.startswith("<") and head.endswith(">") and not head.startswith("</"):
        kind = PlaceholderKind.CONDITIONAL_OPEN
        name = head[1:-1]
    elif head.startswith("</") and head.endswith(">") and len(head) >= 3:
        kind = PlaceholderKind.CONDITIONAL_CLOSE
        name = head[2:-1]
    elif ":" in head:
        kind = PlaceholderKind.FUNCTION
        name, first = head.split(":", 1)
        args = (Argument("", first),) + args
    else:
        kind = PlaceholderKind.VARIABLE
        name = head

    if not name:
        raise MalformedPlaceholderError("empty placeholder name", raw.span.start)

    return Placeholder(kind=kind, name=name, span=raw.span, args=args)


def parse(text: str) -> Iterator[Token]:
    """Tokenize and classify `text` lazily.

    Errors surface when the offending token is reached, so a caller that
    stops early never sees errors further on.
    """
    for token in Scanner(text):
        if isinstance(token, Literal):
            yield token
        else:
            yield classify(token)


def validate(text: str) -> list[Placeholder]:
    """Parse the whole of `text` and check conditional balance.

    Nothing is resolved. Returns every placeholder in order.

    Raises:
        TemplateSyntaxError: On the first malformed placeholder or unbalanced
            conditional block.
    """
    stack = ConditionStack(lambda name: True)
    placeholders: list[Placeholder] = []

    for token in parse(text):
        if isinstance(token, Literal):
            continue
        placeholders.append(token)
        if token.kind is PlaceholderKind.CONDITIONAL_OPEN:
            stack.open(token.name, token.span.start)
        elif token.kind is PlaceholderKind.CONDITIONAL_CLOSE:
            stack.close(token.name, token.span.start)

    stack.finish()
    return placeholders
