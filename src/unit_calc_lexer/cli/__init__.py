"""Command-line interface module for the unit-aware calculator lexer."""

from .main import main

__all__ = ["main"]
