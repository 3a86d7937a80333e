"""Subcommand modules for reqbind.

Provides register_commands() which uses deferred imports to keep
``reqbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from reqbind.commands.coerce import coerce_cmd
    from reqbind.commands.describe import describe
    from reqbind.commands.layouts import layouts
    from reqbind.commands.parse import parse

    cli.add_command(parse)
    cli.add_command(layouts)
    cli.add_command(coerce_cmd)
    cli.add_command(describe)
