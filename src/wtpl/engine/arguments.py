"""Argument Parser - decodes the argument list following a placeholder name.

Accepted token forms, separated by whitespace:
    key="value"   key='value'   key=bare   "value"   'value'   bare

Quotes only delimit; there is no escaping, so a quote character cannot
appear inside a value quoted with the same character.
"""

from __future__ import annotations

from typing import Tuple

from wtpl.engine.nodes import Argument
from wtpl.exceptions import MalformedPlaceholderError

QUOTES = "'\""


def parse_arguments(text: str, offset: int = 0) -> Tuple[Argument, ...]:
    """Parse `text` into an ordered tuple of arguments.

    Args:
        text: The part of a placeholder after its head token.
        offset: Offset of `text` in the template, used in error reports.

    Returns:
        Tuple of Argument; positional arguments have an empty key.

    Raises:
        MalformedPlaceholderError: On an unterminated quote or a token that
            cannot be split into key and value.
    """
    args: list[Argument] = []
    n = len(text)
    i = 0

    while True:
        while i < n and text[i].isspace():
            i += 1
        if i >= n:
            break

        j = i
        while j < n and not text[j].isspace() and text[j] != "=" and text[j] not in QUOTES:
            j += 1
        key = text[i:j]

        if j < n and text[j] == "=":
            if not key:
                raise MalformedPlaceholderError("missing argument name", offset + j)
            j += 1
            if j < n and text[j] in QUOTES:
                value, j = _read_quoted(text, j, offset)
            else:
                start = j
                while j < n and not text[j].isspace():
                    if text[j] in QUOTES:
                        raise MalformedPlaceholderError("unexpected quote", offset + j)
                    j += 1
                value = text[start:j]
            args.append(Argument(key, value))
        elif j < n and text[j] in QUOTES:
            if key:
                raise MalformedPlaceholderError("unexpected quote", offset + j)
            value, j = _read_quoted(text, j, offset)
            args.append(Argument("", value))
        else:
            args.append(Argument("", key))

        if j < n and not text[j].isspace():
            raise MalformedPlaceholderError(
                "expected whitespace after argument", offset + j
            )
        i = j

    return tuple(args)


def _read_quoted(text: str, at: int, offset: int) -> tuple[str, int]:
    """Read the quoted value starting at `at`; return (value, index after it)."""
    quote = text[at]
    end = text.find(quote, at + 1)
    if end == -1:
        raise MalformedPlaceholderError("unterminated quoted argument", offset + at)
    return text[at + 1 : end], end + 1
