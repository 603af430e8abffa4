"""wtpl command line interface."""

from wtpl.cli.main import app

__all__ = ["app"]
