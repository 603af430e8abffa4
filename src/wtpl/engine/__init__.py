"""Template engine core: scanning, classification, conditionals, rendering."""

from wtpl.engine.arguments import parse_arguments
from wtpl.engine.classifier import classify, parse, validate
from wtpl.engine.conditions import ConditionStack
from wtpl.engine.context import MappingContext, ResolutionContext
from wtpl.engine.nodes import (
    Argument,
    Literal,
    Placeholder,
    PlaceholderKind,
    RawPlaceholder,
    Span,
)
from wtpl.engine.renderer import DEFAULT_MAX_DEPTH, Renderer, TemplateFunction
from wtpl.engine.scanner import Scanner, scan

__all__ = [
    # Scanning and parsing
    "Scanner",
    "scan",
    "parse_arguments",
    "classify",
    "parse",
    "validate",
    # Evaluation
    "ConditionStack",
    "Renderer",
    "TemplateFunction",
    "DEFAULT_MAX_DEPTH",
    # Context
    "ResolutionContext",
    "MappingContext",
    # Nodes
    "Argument",
    "Literal",
    "Placeholder",
    "PlaceholderKind",
    "RawPlaceholder",
    "Span",
]
