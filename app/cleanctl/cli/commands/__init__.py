"""CLI commands for cleanctl.

This package contains all subcommand implementations.
"""

from cleanctl.cli.commands import clean, plan

__all__ = ["clean", "plan"]
