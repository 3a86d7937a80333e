"""Command: list the named timestamp layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqbind.commands._base import ReqCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


@click.command(cls=ReqCommand, examples="  reqbind layouts\n  reqbind -v layouts")
@click.pass_obj
def layouts(app: AppContext) -> None:
    """List timestamp layouts usable as ``layout=<name>`` metadata."""
    app.emit(app.inspect.list_layouts())
