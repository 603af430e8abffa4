"""Resolution context - the lookups a render pass consults.

Every hook has a default, so a subclass only overrides what it provides.
`Template` is the usual context; `MappingContext` serves plain dictionaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Sequence

from wtpl.engine.nodes import Argument

if TYPE_CHECKING:
    from wtpl.fragment import Fragment


class ResolutionContext:
    """Capability set used by the renderer to resolve placeholders."""

    def resolve_string(self, name: str, args: Sequence[Argument]) -> str | None:
        """Return the string bound to `name`, or None."""
        return None

    def resolve_widget(self, name: str) -> "Fragment | None":
        """Return the fragment bound to `name`, or None."""
        return None

    def resolve_function(self, name: str, args: Sequence[Argument]) -> str | None:
        """Last chance for a function missing from the function table."""
        return None

    def condition_value(self, name: str) -> bool:
        return False

    def handle_unresolved_variable(self, name: str, args: Sequence[Argument]) -> str:
        return f"??{name}??"


class MappingContext(ResolutionContext):
    """Context backed by plain mappings."""

    def __init__(
        self,
        strings: Mapping[str, str] | None = None,
        widgets: "Mapping[str, Fragment] | None" = None,
        conditions: Mapping[str, bool] | None = None,
    ):
        self.strings = dict(strings or {})
        self.widgets = dict(widgets or {})
        self.conditions = dict(conditions or {})

    def resolve_string(self, name: str, args: Sequence[Argument]) -> str | None:
        return self.strings.get(name)

    def resolve_widget(self, name: str) -> "Fragment | None":
        return self.widgets.get(name)

    def condition_value(self, name: str) -> bool:
        return self.conditions.get(name, False)
