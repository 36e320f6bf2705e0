"""Command-line interface for smartkissan."""

from .app import app

__all__ = ["app"]
