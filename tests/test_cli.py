"""Tests for the wtpl command line."""

import yaml
from typer.testing import CliRunner

from wtpl._version import __version__
from wtpl.cli.main import app
from wtpl.cli.utils import line_col, parse_condition

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"wtpl {__version__}" in result.output


def test_render_template_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<h1>${title}</h1>${<admin>}admin${</admin>}${<beta>}beta${</beta>}")

    result = runner.invoke(
        app,
        ["render", str(page), "-s", "title=Home", "-c", "admin", "-c", "beta=false"],
    )
    assert result.exit_code == 0, result.output
    assert result.output == "<h1>Home</h1>admin"


def test_render_plain_and_messages(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("${user} ${tr:hello}")
    messages = tmp_path / "m.yaml"
    messages.write_text("hello: Hi\n")

    result = runner.invoke(
        app, ["render", str(page), "--plain", "user=<x>", "-m", str(messages)]
    )
    assert result.exit_code == 0, result.output
    assert result.output == "&lt;x&gt; Hi"


def test_render_yaml_job_to_file(tmp_path):
    job = tmp_path / "job.yaml"
    job.write_text(yaml.safe_dump({"text": "Hello ${name}", "strings": {"name": "you"}}))
    out = tmp_path / "out" / "page.html"

    result = runner.invoke(app, ["render", str(job), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text() == "Hello you"


def test_render_syntax_error(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("${<a>}${</b>}")

    result = runner.invoke(app, ["render", str(page)])
    assert result.exit_code == 1
    assert "does not match" in result.output


def test_render_missing_file(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "none.html")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_render_bad_assignment(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("x")
    result = runner.invoke(app, ["render", str(page), "-s", "novalue"])
    assert result.exit_code == 1
    assert "name=value" in result.output


def test_scan_lists_placeholders(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("${<a>}\n${title}${</a>}")

    result = runner.invoke(app, ["scan", str(page)])
    assert result.exit_code == 0, result.output
    assert "title" in result.output
    for kind in ("open", "variable", "close"):
        assert kind in result.output
    assert "3 placeholder(s), syntax OK" in result.output


def test_scan_reports_position(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("line one\n  ${unterminated")

    result = runner.invoke(app, ["scan", str(page)])
    assert result.exit_code == 1
    assert ":2:3: unterminated placeholder" in result.output


def test_line_col():
    text = "ab\ncd\nef"
    assert line_col(text, 0) == (1, 1)
    assert line_col(text, 4) == (2, 2)
    assert line_col(text, 6) == (3, 1)


def test_parse_condition():
    assert parse_condition("a") == ("a", True)
    assert parse_condition("a=no") == ("a", False)
    assert parse_condition("a=ON") == ("a", True)


def test_render_undecodable_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_bytes(b"\xff\xfe${title}")

    result = runner.invoke(app, ["render", str(page)])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_render_directory(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path)])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_scan_undecodable_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_bytes(b"\xff\xfe${title}")

    result = runner.invoke(app, ["scan", str(page)])
    assert result.exit_code == 1
    assert "Cannot read" in result.output
