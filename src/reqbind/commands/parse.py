"""Command: parse a binding directive."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqbind.commands._base import ReqCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


@click.command(
    cls=ReqCommand,
    examples="""\
  reqbind parse url-param=id
  reqbind parse 'url-query=since,layout=DateTime'
  reqbind --json parse request-body""",
)
@click.argument("directive")
@click.pass_obj
def parse(app: AppContext, directive: str) -> None:
    """Parse DIRECTIVE and show its kind, source, and metadata."""
    app.emit(app.inspect.parse_directive(directive))
