"""
CLI module for fieldsettings.

Provides the command-line interface using Click.
"""

from fieldsettings.cli.main import cli, main

__all__ = ["main", "cli"]
