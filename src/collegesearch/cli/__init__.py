"""
Command-line interface implementation.

This module provides the command-line interface for collegesearch:
- ``find`` to rank records against a query
- ``suggest`` for autocomplete
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
