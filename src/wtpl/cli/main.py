"""wtpl CLI Main Entry Point

Usage:
    wtpl render page.html -s title=Home -c admin    # render a template file
    wtpl render job.yaml -o out.html                 # render a YAML render job
    wtpl scan page.html                              # list placeholders, check syntax
    wtpl --version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from wtpl._version import __version__
from wtpl.cli.utils import (
    console,
    exit_with_error,
    line_col,
    parse_assignment,
    parse_condition,
    setup_logging,
)
from wtpl.config import load_template
from wtpl.engine.classifier import validate
from wtpl.exceptions import TemplateError, TemplateSyntaxError
from wtpl.fragment import TextFormat
from wtpl.functions import register_builtins
from wtpl.template import Template

log = logging.getLogger(__name__)

app = typer.Typer(help="Render ${...} templates with variables, functions and conditional blocks.")


def is_yaml_file(path: Path) -> bool:
    """Check if path looks like a YAML render job."""
    return path.suffix in (".yaml", ".yml")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wtpl {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Render ${...} templates with variables, functions and conditional blocks."""


def _syntax_error(error: TemplateSyntaxError, text: str, source: Path) -> None:
    line, column = line_col(text, error.offset)
    exit_with_error(f"{source}:{line}:{column}: {error.reason}")


@app.command()
def render(
    source: Path = typer.Argument(..., help="Template file or YAML render job."),
    strings: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Bind a string: name=value (inserted as-is)."
    ),
    plain: Optional[List[str]] = typer.Option(
        None, "--plain", help="Bind an escaped string: name=value."
    ),
    conditions: Optional[List[str]] = typer.Option(
        None, "-c", "--condition", help="Set a condition: name or name=false."
    ),
    messages: Optional[List[Path]] = typer.Option(
        None, "-m", "--messages", help="YAML message file for tr/block."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write output to file instead of stdout."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render a template file or a YAML render job."""
    setup_logging(verbose)

    if not source.exists():
        exit_with_error(f"File not found: {source}")

    try:
        if is_yaml_file(source):
            template = load_template(source)
        else:
            template = Template(source.read_text(encoding="utf-8"))
            register_builtins(template)

        for path in messages or []:
            template.messages.use(path)
        for item in strings or []:
            name, value = parse_assignment(item)
            template.bind_string(name, value)
        for item in plain or []:
            name, value = parse_assignment(item)
            template.bind_string(name, value, TextFormat.PLAIN)
        for item in conditions or []:
            name, flag = parse_condition(item)
            template.set_condition(name, flag)

        result = template.render()
    except TemplateError as e:
        exit_with_error(f"{source}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        exit_with_error(f"Cannot read {source}: {e}")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        log.info("Wrote %d characters to %s", len(result), output)
    else:
        typer.echo(result, nl=False)


@app.command()
def scan(
    source: Path = typer.Argument(..., help="Template file."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """List the placeholders of a template and check its syntax."""
    setup_logging(verbose)

    if not source.exists():
        exit_with_error(f"File not found: {source}")

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        exit_with_error(f"Cannot read {source}: {e}")

    try:
        placeholders = validate(text)
    except TemplateSyntaxError as e:
        _syntax_error(e, text, source)

    table = Table(title=str(source))
    table.add_column("Line:Col", justify="right")
    table.add_column("Kind")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")

    for ph in placeholders:
        line, column = line_col(text, ph.span.start)
        args = " ".join(f"{a.key}={a.value!r}" if a.key else repr(a.value) for a in ph.args)
        table.add_row(f"{line}:{column}", ph.kind.value, ph.name, args)

    console.print(table)
    console.print(f"{len(placeholders)} placeholder(s), syntax OK")
