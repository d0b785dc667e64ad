"""The ``toggl`` command-line client."""

from .cli import app

__all__ = ["app"]
