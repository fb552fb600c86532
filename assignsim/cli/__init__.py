"""Command-line interface for the simulation engine."""

from assignsim.cli.main import app, main

__all__ = ["app", "main"]
