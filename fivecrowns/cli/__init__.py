"""Command-line interface for the Five Crowns meld engine."""

from .main import app, main

__all__ = ["app", "main"]
