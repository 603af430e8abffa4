"""Renderable fragments that can be bound into a template.

A fragment owns a unique id and a set of style classes, and knows how to
produce its own markup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from markupsafe import escape
from uuid_extensions import uuid7


class TextFormat(str, Enum):
    """How bound text is inserted into markup."""

    XHTML = "xhtml"  # inserted as-is
    PLAIN = "plain"  # HTML-escaped


def format_text(text: str, text_format: TextFormat) -> str:
    if text_format is TextFormat.PLAIN:
        return str(escape(text))
    return text


def new_id() -> str:
    """Unique id usable as an HTML id attribute."""
    return f"w{uuid7().hex}"


class Fragment(ABC):
    """Base class for renderable fragments."""

    tag = "span"

    def __init__(self, id: str | None = None, style_classes: tuple[str, ...] = ()):
        self.id = id or new_id()
        self._style_classes: list[str] = []
        for style_class in style_classes:
            self.add_style_class(style_class)

    @property
    def style_classes(self) -> tuple[str, ...]:
        return tuple(self._style_classes)

    def add_style_class(self, style_class: str) -> None:
        """Add a style class; adding one that is already present is a no-op."""
        if style_class not in self._style_classes:
            self._style_classes.append(style_class)

    def remove_style_class(self, style_class: str) -> None:
        if style_class in self._style_classes:
            self._style_classes.remove(style_class)

    def has_style_class(self, style_class: str) -> bool:
        return style_class in self._style_classes

    @abstractmethod
    def render_content(self) -> str:
        """Markup placed inside the fragment's element."""
        pass

    def to_markup(self) -> str:
        attrs = f' id="{escape(self.id)}"'
        if self._style_classes:
            attrs += f' class="{escape(" ".join(self._style_classes))}"'
        return f"<{self.tag}{attrs}>{self.render_content()}</{self.tag}>"


class Text(Fragment):
    """A run of text wrapped in an element (``<span>`` by default)."""

    def __init__(
        self,
        text: str = "",
        text_format: TextFormat = TextFormat.PLAIN,
        tag: str = "span",
        id: str | None = None,
        style_classes: tuple[str, ...] = (),
    ):
        super().__init__(id=id, style_classes=style_classes)
        self.text = text
        self.text_format = text_format
        self.tag = tag

    def render_content(self) -> str:
        return format_text(self.text, self.text_format)

    def __repr__(self) -> str:
        return f"Text({self.text!r}, id={self.id!r})"
