"""Subcommand modules for cmdlint.

Provides register_commands() which uses deferred imports to keep
``cmdlint --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cmdlint.commands.check import check
    from cmdlint.commands.rules import rules

    cli.add_command(check)
    cli.add_command(rules)
