"""Template - a fragment rendered from template text with bound values.

Usage:
    t = Template("<h1>${title}</h1>${<admin>}${panel}${</admin>}")
    t.bind_string("title", "Dashboard")
    t.bind_widget("panel", Text("secret"))
    t.set_condition("admin", True)
    t.render()

Bindings share a single namespace: binding a string under a name replaces a
widget bound under the same name, and vice versa.
"""

from __future__ import annotations

from typing import Sequence

from wtpl.engine.context import ResolutionContext
from wtpl.engine.nodes import Argument
from wtpl.engine.renderer import Renderer, TemplateFunction
from wtpl.fragment import Fragment, TextFormat, format_text
from wtpl.messages import MessageBundle


class Template(Fragment, ResolutionContext):
    """Owner of template text, bindings, conditions and a function table.

    Args:
        text: Template text.
        messages: Bundle used by the `tr` and `block` functions.
        renderer: Renderer to use; carries the render limits.
        id: Fragment id, generated when omitted.
    """

    tag = "div"

    def __init__(
        self,
        text: str = "",
        messages: MessageBundle | None = None,
        renderer: Renderer | None = None,
        id: str | None = None,
    ):
        super().__init__(id=id)
        self._text = text
        self.messages = messages or MessageBundle()
        self.renderer = renderer or Renderer()
        self._strings: dict[str, str] = {}
        self._widgets: dict[str, Fragment] = {}
        self._conditions: dict[str, bool] = {}
        self._functions: dict[str, TemplateFunction] = {}

    # -- template text ---------------------------------------------------

    @property
    def template_text(self) -> str:
        return self._text

    def set_template_text(self, text: str) -> None:
        self._text = text

    # -- bindings ----------------------------------------------------------

    def bind_string(
        self, name: str, value: str, text_format: TextFormat = TextFormat.XHTML
    ) -> None:
        """Bind `value` to `name`, escaping it when `text_format` is PLAIN."""
        self._widgets.pop(name, None)
        self._strings[name] = format_text(value, text_format)

    def bind_int(self, name: str, value: int) -> None:
        self.bind_string(name, str(value))

    def bind_empty(self, name: str) -> None:
        self.bind_string(name, "")

    def bind_widget(self, name: str, widget: Fragment | None) -> None:
        """Bind a fragment to `name`; None binds an empty string instead."""
        if widget is None:
            self.bind_empty(name)
            return
        self._strings.pop(name, None)
        self._widgets[name] = widget

    def take_widget(self, name: str) -> Fragment | None:
        """Remove and return the fragment bound to `name`."""
        return self._widgets.pop(name, None)

    def has_binding(self, name: str) -> bool:
        return name in self._strings or name in self._widgets

    def resolve_string_value(self, name: str) -> str:
        """The string bound to `name`, or an empty string."""
        return self._strings.get(name, "")

    @property
    def widgets(self) -> dict[str, Fragment]:
        return dict(self._widgets)

    # -- conditions --------------------------------------------------------

    def set_condition(self, name: str, value: bool) -> None:
        self._conditions[name] = bool(value)

    def condition_value(self, name: str) -> bool:
        return self._conditions.get(name, False)

    @property
    def conditions(self) -> dict[str, bool]:
        return dict(self._conditions)

    # -- functions ---------------------------------------------------------

    def add_function(self, name: str, fn: TemplateFunction) -> None:
        self._functions[name] = fn

    def remove_function(self, name: str) -> None:
        self._functions.pop(name, None)

    @property
    def functions(self) -> dict[str, TemplateFunction]:
        return dict(self._functions)

    # -- lifecycle ---------------------------------------------------------

    def clear(self) -> None:
        """Drop all bindings and condition values; functions are kept."""
        self._strings.clear()
        self._widgets.clear()
        self._conditions.clear()

    # -- resolution context ------------------------------------------------

    def resolve_string(self, name: str, args: Sequence[Argument]) -> str | None:
        return self._strings.get(name)

    def resolve_widget(self, name: str) -> Fragment | None:
        return self._widgets.get(name)

    # -- rendering ---------------------------------------------------------

    def render(self, context: ResolutionContext | None = None) -> str:
        """Render the template text.

        Args:
            context: Overrides this template as resolution context.
        """
        return self.render_text(self._text, context)

    def render_text(self, text: str, context: ResolutionContext | None = None) -> str:
        """Render arbitrary template text with this template's state."""
        return self.renderer.render(
            text, context or self, functions=self._functions, owner=self
        )

    def render_content(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Template(id={self.id!r}, bindings={len(self._strings) + len(self._widgets)})"
