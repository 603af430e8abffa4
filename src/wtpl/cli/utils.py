"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the wtpl CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (WTPL_DEBUG=1): DEBUG level - unresolved variables, dropped calls
    """
    debug = bool(os.environ.get("WTPL_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("wtpl")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=exit_code)


def parse_assignment(value: str) -> tuple[str, str]:
    """Split "name=value" into its parts."""
    name, sep, rest = value.partition("=")
    if not sep or not name:
        exit_with_error(f"Expected name=value, got '{value}'")
    return name, rest


def parse_condition(value: str) -> tuple[str, bool]:
    """Parse "name" (true) or "name=<bool>"."""
    name, sep, rest = value.partition("=")
    if not name:
        exit_with_error(f"Invalid condition '{value}'")
    if not sep:
        return name, True

    flag = rest.strip().lower()
    if flag in TRUE_VALUES:
        return name, True
    if flag in FALSE_VALUES:
        return name, False
    exit_with_error(f"Invalid boolean '{rest}' for condition '{name}'")


def line_col(text: str, offset: int) -> tuple[int, int]:
    """1-based line and column of `offset` in `text`."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column
