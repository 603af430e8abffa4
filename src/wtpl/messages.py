"""Localized message bundle consulted by the `tr` and `block` functions.

Messages are loaded from YAML. Nested mappings are flattened into dotted
keys:

    nav:
      home: Home        ->  "nav.home": "Home"
    greeting: Hello {1} ->  "greeting": "Hello {1}"

Positional placeholders ``{1}``, ``{2}``... are replaced by arguments.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from wtpl.exceptions import ConfigError

log = logging.getLogger(__name__)

ARG_PATTERN = re.compile(r"\{(\d+)\}")


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    result: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            result.update(_flatten(value, f"{full_key}."))
        else:
            result[full_key] = "" if value is None else str(value)
    return result


def substitute(text: str, args: Sequence[str]) -> str:
    """Replace ``{n}`` (1-based) with ``args[n-1]``; unknown indices are kept."""

    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if 1 <= index <= len(args):
            return args[index - 1]
        return match.group(0)

    return ARG_PATTERN.sub(replace, text)


class MessageBundle:
    """Key to message mapping. Later `use` calls override earlier ones."""

    def __init__(self, messages: Mapping[str, Any] | None = None):
        self._messages: dict[str, str] = _flatten(messages or {})

    def __contains__(self, key: str) -> bool:
        return key in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def get(self, key: str) -> str | None:
        return self._messages.get(key)

    def format(self, key: str, args: Sequence[str] = ()) -> str | None:
        """Look up `key` and substitute positional arguments, or None."""
        text = self._messages.get(key)
        if text is None:
            return None
        return substitute(text, args)

    def update(self, messages: Mapping[str, Any]) -> None:
        self._messages.update(_flatten(messages))

    def use(self, path: str | Path) -> None:
        """Merge messages from a YAML file."""
        p = Path(path)
        if not p.exists():
            raise ConfigError(str(p), "message file not found")

        try:
            with open(p) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(str(p), f"invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(str(p), "message file must contain a mapping")

        self.update(data)
        log.debug("Loaded %d messages from %s", len(data), p)

    @classmethod
    def load(cls, path: str | Path) -> "MessageBundle":
        bundle = cls()
        bundle.use(path)
        return bundle
