"""Renderer - drives one left-to-right render pass.

Literal runs are copied, placeholders are resolved through a
ResolutionContext and a function table, and conditional markers go to the
ConditionStack. Placeholders inside a suppressed block are parsed but never
resolved, so functions with side effects do not run there.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any, Mapping, Sequence

from wtpl.engine.classifier import parse
from wtpl.engine.conditions import ConditionStack
from wtpl.engine.context import ResolutionContext
from wtpl.engine.nodes import Argument, Literal, Placeholder, PlaceholderKind
from wtpl.exceptions import RenderLimitError

log = logging.getLogger(__name__)

TemplateFunction = Callable[[Any, Sequence[Argument]], "str | None"]

DEFAULT_MAX_DEPTH = 32

# Nested renders (a bound template, the block function) share this counter.
_depth: ContextVar[int] = ContextVar("wtpl_render_depth", default=0)


class _Output:
    """Append-only output buffer with an optional size cap."""

    def __init__(self, max_size: int | None):
        self.parts: list[str] = []
        self.size = 0
        self.max_size = max_size

    def write(self, text: str) -> None:
        if not text:
            return
        self.size += len(text)
        if self.max_size is not None and self.size > self.max_size:
            raise RenderLimitError("max_output", self.max_size)
        self.parts.append(text)

    def getvalue(self) -> str:
        return "".join(self.parts)


class Renderer:
    """Renders template text against a resolution context.

    Args:
        max_depth: Maximum number of nested renders.
        max_output: Maximum length of one render's output, or None.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, max_output: int | None = None):
        self.max_depth = max_depth
        self.max_output = max_output

    def render(
        self,
        text: str,
        context: ResolutionContext,
        functions: Mapping[str, TemplateFunction] | None = None,
        owner: Any = None,
    ) -> str:
        """Render `text` and return the output.

        Args:
            text: Template text.
            context: Resolves strings, widgets, conditions and unknown functions.
            functions: Function table consulted before `context.resolve_function`.
            owner: Passed as first argument to every table function.

        Raises:
            TemplateSyntaxError: On malformed placeholders or unbalanced blocks.
            RenderLimitError: When a render limit is exceeded.
        """
        depth = _depth.get() + 1
        if depth > self.max_depth:
            raise RenderLimitError("max_depth", self.max_depth)

        token = _depth.set(depth)
        try:
            log.debug("Rendering %d characters at depth %d", len(text), depth)
            return self._render(text, context, functions or {}, owner)
        finally:
            _depth.reset(token)

    def _render(
        self,
        text: str,
        context: ResolutionContext,
        functions: Mapping[str, TemplateFunction],
        owner: Any,
    ) -> str:
        out = _Output(self.max_output)
        stack = ConditionStack(context.condition_value)

        for node in parse(text):
            if isinstance(node, Literal):
                if not stack.suppressed:
                    out.write(node.text)
            elif node.kind is PlaceholderKind.CONDITIONAL_OPEN:
                stack.open(node.name, node.span.start)
            elif node.kind is PlaceholderKind.CONDITIONAL_CLOSE:
                stack.close(node.name, node.span.start)
            elif stack.suppressed:
                continue
            elif node.kind is PlaceholderKind.FUNCTION:
                self._call_function(node, context, functions, owner, out)
            else:
                self._resolve_variable(node, context, out)

        stack.finish()
        return out.getvalue()

    def _resolve_variable(
        self, node: Placeholder, context: ResolutionContext, out: _Output
    ) -> None:
        value = context.resolve_string(node.name, node.args)
        if value is not None:
            out.write(value)
            return

        fragment = context.resolve_widget(node.name)
        if fragment is not None:
            for arg in node.args:
                if arg.key == "class":
                    for style_class in arg.value.split():
                        fragment.add_style_class(style_class)
            out.write(fragment.to_markup())
            return

        log.debug("Unresolved variable '%s' at offset %d", node.name, node.span.start)
        out.write(context.handle_unresolved_variable(node.name, node.args))

    def _call_function(
        self,
        node: Placeholder,
        context: ResolutionContext,
        functions: Mapping[str, TemplateFunction],
        owner: Any,
        out: _Output,
    ) -> None:
        fn = functions.get(node.name)
        if fn is not None:
            result = fn(owner, node.args)
        else:
            result = context.resolve_function(node.name, node.args)

        if result is None:
            log.debug("Dropped call to function '%s' at offset %d", node.name, node.span.start)
            return
        out.write(result)
