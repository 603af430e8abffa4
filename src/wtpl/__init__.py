"""wtpl - widget template substitution engine"""

from wtpl._version import __version__

# Re-export from engine
from wtpl.engine import (
    Argument,
    MappingContext,
    Placeholder,
    PlaceholderKind,
    Renderer,
    ResolutionContext,
    parse,
    validate,
)

# Re-export from exceptions
from wtpl.exceptions import (
    ConfigError,
    MalformedPlaceholderError,
    RenderLimitError,
    TemplateError,
    TemplateSyntaxError,
    UnbalancedConditionalError,
)
from wtpl.fragment import Fragment, Text, TextFormat
from wtpl.functions import BUILTIN_FUNCTIONS, register_builtins
from wtpl.messages import MessageBundle
from wtpl.template import Template

__all__ = [
    "__version__",
    # template
    "Template",
    "Fragment",
    "Text",
    "TextFormat",
    "MessageBundle",
    "BUILTIN_FUNCTIONS",
    "register_builtins",
    # engine
    "Argument",
    "MappingContext",
    "Placeholder",
    "PlaceholderKind",
    "Renderer",
    "ResolutionContext",
    "parse",
    "validate",
    # exceptions
    "ConfigError",
    "MalformedPlaceholderError",
    "RenderLimitError",
    "TemplateError",
    "TemplateSyntaxError",
    "UnbalancedConditionalError",
]
