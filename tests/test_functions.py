"""Tests for the built-in template functions."""

from wtpl import MessageBundle, Template, Text, register_builtins
from wtpl.functions import BUILTIN_FUNCTIONS


def make(text, **messages):
    t = Template(text, messages=MessageBundle(messages))
    register_builtins(t)
    return t


def test_builtins_are_not_registered_implicitly():
    t = Template("a${tr:greeting}b", messages=MessageBundle({"greeting": "Hello"}))
    assert t.render() == "ab"


def test_register_builtins():
    t = Template()
    register_builtins(t)
    assert set(t.functions) == set(BUILTIN_FUNCTIONS) == {"tr", "id", "block"}


def test_tr():
    assert make("${tr:greeting}", greeting="Hello").render() == "Hello"


def test_tr_positional_arguments():
    t = make("${tr:welcome Ada 3}", welcome="Hi {1}, you have {2} messages")
    assert t.render() == "Hi Ada, you have 3 messages"


def test_tr_missing_key():
    assert make("${tr:nope}").render() == "??nope??"


def test_tr_nested_key():
    t = Template("${tr:nav.home}", messages=MessageBundle({"nav": {"home": "Home"}}))
    register_builtins(t)
    assert t.render() == "Home"


def test_id():
    t = make('<label for="${id:field}">x</label>${field}')
    t.bind_widget("field", Text("v", id="f1"))
    assert t.render() == '<label for="f1">x</label><span id="f1">v</span>'


def test_id_of_unbound_widget_renders_nothing():
    assert make("[${id:nothing}]").render() == "[]"


def test_block_renders_message_as_template():
    t = make(
        "${block:row first second}",
        row="<tr><td>{1}</td><td>{2}</td><td>${cell}</td></tr>",
    )
    t.bind_string("cell", "C")
    assert t.render() == "<tr><td>first</td><td>second</td><td>C</td></tr>"


def test_block_sees_conditions():
    t = make("${block:b}", b="${<c>}shown${</c>}")
    t.set_condition("c", True)
    assert t.render() == "shown"


def test_block_with_missing_message_renders_nothing():
    assert make("a${block:missing}b").render() == "ab"


def test_tr_ignores_keyed_arguments():
    t = make('${tr:welcome class="x" Ada}', welcome="Hi {1}")
    assert t.render() == "Hi Ada"
