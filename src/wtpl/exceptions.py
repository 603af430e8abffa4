"""wtpl Exceptions

Parse-level errors abort a render. Resolution misses (unbound variables,
unknown functions) are never raised.
"""

from __future__ import annotations


class TemplateError(Exception):
    """Base exception for all wtpl errors."""

    pass


class TemplateSyntaxError(TemplateError):
    """Raised when template text cannot be parsed.

    Carries the offset into the template text where the problem was found.
    """

    def __init__(self, reason: str, offset: int):
        self.reason = reason
        self.offset = offset
        super().__init__(f"{reason} at offset {offset}")


class MalformedPlaceholderError(TemplateSyntaxError):
    """Raised for an unterminated ${, an unterminated quote or an empty name."""

    pass


class UnbalancedConditionalError(TemplateSyntaxError):
    """Raised when a conditional block is mismatched or left open."""

    def __init__(self, reason: str, offset: int, name: str | None = None):
        self.name = name
        super().__init__(reason, offset)


class RenderLimitError(TemplateError):
    """Raised when a render exceeds the configured depth or output size."""

    def __init__(self, limit: str, value: int):
        self.limit = limit
        self.value = value
        super().__init__(f"Render limit exceeded: {limit}={value}")


class ConfigError(TemplateError):
    """Raised when a configuration file is invalid."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
