"""Built-in template functions.

A template function receives the owning Template and the placeholder
arguments, and returns text or None when it cannot handle the call:

    ${tr:greeting}            localized message "greeting"
    ${tr:welcome user}        "{1}" in the message replaced by "user"
    ${id:panel}               unique id of the fragment bound to "panel"
    ${block:row one two}      message "row", arguments substituted, rendered
                              as template text

None of these are registered implicitly; use `register_builtins`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from wtpl.engine.nodes import Argument, positional
from wtpl.engine.renderer import TemplateFunction

if TYPE_CHECKING:
    from wtpl.template import Template

log = logging.getLogger(__name__)


def tr(template: "Template", args: Sequence[Argument]) -> str | None:
    values = positional(args)
    if not values:
        log.debug("tr: expects at least one argument")
        return None

    key, rest = values[0], values[1:]
    text = template.messages.format(key, rest)
    if text is None:
        return f"??{key}??"
    return text


def id_(template: "Template", args: Sequence[Argument]) -> str | None:
    values = positional(args)
    if not values:
        log.debug("id: expects one argument")
        return None

    widget = template.resolve_widget(values[0])
    if widget is None:
        return None
    return widget.id


def block(template: "Template", args: Sequence[Argument]) -> str | None:
    values = positional(args)
    if not values:
        log.debug("block: expects at least one argument")
        return None

    key, rest = values[0], values[1:]
    text = template.messages.format(key, rest)
    if text is None:
        log.debug("block: no message '%s'", key)
        return None
    return template.render_text(text)


BUILTIN_FUNCTIONS: dict[str, TemplateFunction] = {
    "tr": tr,
    "id": id_,
    "block": block,
}


def register_builtins(template: "Template") -> None:
    """Add `tr`, `id` and `block` to the template's function table."""
    for name, fn in BUILTIN_FUNCTIONS.items():
        template.add_function(name, fn)
