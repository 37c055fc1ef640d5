"""Command-line interface for web-processor."""

from web_processor.cli.main import app, main

__all__ = ["app", "main"]
