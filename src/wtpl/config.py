"""Configuration parsing for wtpl render jobs.

A render job is a YAML file:
- template / text: template file (relative to the config) or inline text
- strings / plain / empty: string bindings (XHTML, escaped, empty)
- conditions: condition values
- widgets: fragments bound by name, tagged with `kind: text` (default) or
  `kind: template` (a nested template spec)
- messages / message_files: localized strings for tr and block
- builtins: register tr, id and block
- limits: render depth and output size caps
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, Discriminator, Field, Tag, ValidationError, model_validator

from wtpl.engine.renderer import DEFAULT_MAX_DEPTH, Renderer
from wtpl.exceptions import ConfigError
from wtpl.fragment import Text, TextFormat
from wtpl.functions import register_builtins
from wtpl.messages import MessageBundle
from wtpl.template import Template

log = logging.getLogger(__name__)


class LimitsConfig(BaseModel):
    """Defensive render limits."""

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    max_output: int | None = Field(default=None, ge=0)


class TextWidgetConfig(BaseModel):
    """A text fragment."""

    kind: Literal["text"] = "text"
    text: str
    format: TextFormat = TextFormat.PLAIN
    tag: str = "span"
    id: str | None = None
    classes: list[str] = Field(default_factory=list)


def widget_kind(value: Any) -> str:
    """Widget kind of a raw mapping or model; untagged widgets are text."""
    if isinstance(value, dict):
        return value.get("kind", "text")
    return getattr(value, "kind", "text")


class TemplateSpec(BaseModel):
    """Template text plus everything bound into it."""

    kind: Literal["template"] = "template"
    template: str | None = Field(default=None, description="Template file path")
    text: str | None = Field(default=None, description="Inline template text")
    id: str | None = None
    strings: dict[str, Any] = Field(default_factory=dict)
    plain: dict[str, Any] = Field(default_factory=dict)
    empty: list[str] = Field(default_factory=list)
    conditions: dict[str, bool] = Field(default_factory=dict)
    widgets: dict[
        str,
        Annotated[
            Union[
                Annotated[TextWidgetConfig, Tag("text")],
                Annotated["TemplateSpec", Tag("template")],
            ],
            Discriminator(widget_kind),
        ],
    ] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_source(self) -> "TemplateSpec":
        if self.template is not None and self.text is not None:
            raise ValueError("specify either 'template' or 'text', not both")
        return self

    def load_text(self, base_dir: Path) -> str:
        """Return the template text, reading the template file if needed."""
        if self.text is not None:
            return self.text
        if self.template is None:
            return ""

        path = Path(self.template)
        if not path.is_absolute():
            path = base_dir / path
        if not path.exists():
            raise ConfigError(str(path), "template file not found")
        return path.read_text(encoding="utf-8")


TemplateSpec.model_rebuild()


class WtplConfig(TemplateSpec):
    """Top-level render job configuration."""

    messages: dict[str, Any] = Field(default_factory=dict)
    message_files: list[str] = Field(default_factory=list)
    builtins: bool = True
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @classmethod
    def load(cls, path: Path) -> "WtplConfig":
        """Load config from a YAML file."""
        if not path.exists():
            raise ConfigError(str(path), "config file not found")

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(str(path), f"invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(str(path), "config must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(path), str(e)) from e

    def build_messages(self, base_dir: Path) -> MessageBundle:
        bundle = MessageBundle()
        for name in self.message_files:
            path = Path(name)
            bundle.use(path if path.is_absolute() else base_dir / path)
        bundle.update(self.messages)
        return bundle


def build_template(
    spec: TemplateSpec,
    base_dir: Path,
    messages: MessageBundle | None = None,
    renderer: Renderer | None = None,
    builtins: bool = True,
) -> Template:
    """Build a Template (and nested widgets) from a spec.

    Nested templates share the message bundle and renderer of their parent.
    """
    template = Template(
        spec.load_text(base_dir), messages=messages, renderer=renderer, id=spec.id
    )
    if builtins:
        register_builtins(template)

    for name, value in spec.strings.items():
        template.bind_string(name, str(value))
    for name, value in spec.plain.items():
        template.bind_string(name, str(value), TextFormat.PLAIN)
    for name in spec.empty:
        template.bind_empty(name)
    for name, value in spec.conditions.items():
        template.set_condition(name, value)

    for name, widget in spec.widgets.items():
        if isinstance(widget, TextWidgetConfig):
            template.bind_widget(
                name,
                Text(
                    widget.text,
                    text_format=widget.format,
                    tag=widget.tag,
                    id=widget.id,
                    style_classes=tuple(widget.classes),
                ),
            )
        else:
            template.bind_widget(
                name,
                build_template(
                    widget,
                    base_dir,
                    messages=template.messages,
                    renderer=template.renderer,
                    builtins=builtins,
                ),
            )

    log.debug(
        "Built template %s with %d strings and %d widgets",
        template.id,
        len(spec.strings) + len(spec.plain) + len(spec.empty),
        len(spec.widgets),
    )
    return template


def load_template(path: Path) -> Template:
    """Load a render job config and build its root template."""
    config = WtplConfig.load(path)
    base_dir = path.parent
    renderer = Renderer(
        max_depth=config.limits.max_depth, max_output=config.limits.max_output
    )
    return build_template(
        config,
        base_dir,
        messages=config.build_messages(base_dir),
        renderer=renderer,
        builtins=config.builtins,
    )
