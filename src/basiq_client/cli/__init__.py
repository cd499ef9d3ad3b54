"""Basiq client CLI package.

This package provides a command-line interface over the Basiq client for
obtaining tokens and managing users, connections and accounts.
"""

from .main import app, main

__all__ = ["app", "main"]
