"""Tests for the renderer (resolution dispatcher)."""

import pytest

from wtpl.engine.context import MappingContext, ResolutionContext
from wtpl.engine.renderer import Renderer
from wtpl.exceptions import (
    MalformedPlaceholderError,
    RenderLimitError,
    UnbalancedConditionalError,
)
from wtpl.fragment import Text


def render(text, context=None, functions=None, owner=None, **kwargs):
    return Renderer(**kwargs).render(text, context or MappingContext(), functions, owner)


@pytest.mark.parametrize(
    "text",
    ["", "plain text", "<b>{braces}</b>", "$ and $$ and $x", "multi\nline\n"],
)
def test_text_without_placeholders_is_unchanged(text):
    assert render(text) == text


@pytest.mark.parametrize(
    "text,expected",
    [
        ("$${x}", "${x}"),
        ("a $${b} c", "a ${b} c"),
        ("$${<a>}", "${<a>}"),
        ("$${", "${"),
    ],
)
def test_escaped_open_delimiter(text, expected):
    assert render(text) == expected


def test_bound_string_is_inserted():
    ctx = MappingContext(strings={"v": "value"})
    assert render("[${v}]", ctx) == "[value]"


def test_unbound_variable_marker():
    assert render("${missing}") == "??missing??"


def test_custom_unresolved_handler():
    class Blank(ResolutionContext):
        def handle_unresolved_variable(self, name, args):
            return ""

    assert render("a${missing}b", Blank()) == "ab"


def test_string_binding_wins_over_widget():
    ctx = MappingContext(strings={"v": "s"}, widgets={"v": Text("w", id="t")})
    assert render("${v}", ctx) == "s"


def test_widget_markup_and_class_arguments():
    widget = Text("hi", id="t")
    ctx = MappingContext(widgets={"v": widget})
    out = render("""${v class="a b" other='x'}""", ctx)
    assert out == '<span id="t" class="a b">hi</span>'
    assert widget.style_classes == ("a", "b")


def test_class_arguments_ignored_for_strings():
    ctx = MappingContext(strings={"v": "s"})
    assert render('${v class="a"}', ctx) == "s"


def test_function_from_table():
    calls = []

    def shout(owner, args):
        calls.append((owner, args))
        return args[0].value.upper()

    out = render("${shout:hey}", functions={"shout": shout}, owner="me")
    assert out == "HEY"
    assert calls[0][0] == "me"


def test_function_hook_used_when_not_in_table():
    class Hooked(ResolutionContext):
        def resolve_function(self, name, args):
            return f"<{name}>"

    assert render("${fmt:x}", Hooked()) == "<fmt>"


def test_unknown_function_renders_nothing():
    assert render("a${nope:x}b") == "ab"


def test_function_returning_none_renders_nothing():
    assert render("a${f:x}b", functions={"f": lambda owner, args: None}) == "ab"


def test_conditional_blocks():
    ctx = MappingContext(conditions={"yes": True, "no": False})
    assert render("${<yes>}X${</yes>}", ctx) == "X"
    assert render("${<no>}X${</no>}", ctx) == ""
    assert render("a${<no>}b${</no>}c", ctx) == "ac"


def test_suppressed_region_does_not_resolve_placeholders():
    calls = []

    class Counting(MappingContext):
        def resolve_string(self, name, args):
            calls.append(name)
            return super().resolve_string(name, args)

    def effect(owner, args):
        calls.append("effect")
        return "!"

    ctx = Counting(conditions={"off": False})
    out = render("${<off>}${v}${fx:1}${</off>}${w}", ctx, functions={"fx": effect})
    assert out == "??w??"
    assert calls == ["w"]


def test_suppressed_region_still_checks_balance():
    ctx = MappingContext(conditions={"off": False})
    with pytest.raises(UnbalancedConditionalError):
        render("${<off>}${<x>}${</off>}${</x>}", ctx)


def test_unclosed_block_is_fatal():
    ctx = MappingContext(conditions={"on": True})
    with pytest.raises(UnbalancedConditionalError):
        render("${<on>}text", ctx)


def test_malformed_placeholder_is_fatal():
    with pytest.raises(MalformedPlaceholderError):
        render("fine ${v a='x}")


def test_render_is_deterministic():
    widget = Text("w", id="t")
    ctx = MappingContext(strings={"s": "S"}, widgets={"w": widget}, conditions={"c": True})
    text = '${<c>}${s}${w class="x"}${</c>}${missing}'
    assert render(text, ctx) == render(text, ctx)


def test_max_output():
    with pytest.raises(RenderLimitError) as exc_info:
        render("hello world", max_output=5)
    assert exc_info.value.limit == "max_output"


def test_max_depth_stops_recursive_fragments():
    class Loop(Text):
        def render_content(self):
            return renderer.render("${loop}", ctx)

    renderer = Renderer(max_depth=4)
    ctx = MappingContext()
    ctx.widgets["loop"] = Loop(id="l")

    with pytest.raises(RenderLimitError) as exc_info:
        renderer.render("${loop}", ctx)
    assert exc_info.value.limit == "max_depth"

    # the depth counter is reset after the failure
    assert renderer.render("ok", ctx) == "ok"
