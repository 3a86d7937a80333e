"""Command: show the binding table of a record class."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqbind.commands._base import ReqCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


@click.command(
    cls=ReqCommand,
    examples="""\
  reqbind describe myapp.requests:UpdateUser
  reqbind -v describe myapp.requests:Search""",
)
@click.argument("target", metavar="MODULE:CLASS")
@click.pass_obj
def describe(app: AppContext, target: str) -> None:
    """Show which request source feeds each field of a record class."""
    app.emit(app.inspect.describe_record(target))
