"""Command: coerce a value the way a bound field would."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqbind.commands._base import ReqCommand
from reqbind.domain.types import TYPE_NAMES

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


@click.command(
    "coerce",
    cls=ReqCommand,
    examples="""\
  reqbind coerce uint8 200
  reqbind coerce bool true
  reqbind coerce datetime '2024-05-01 10:00:00' --layout DateTime""",
)
@click.argument("type_name", metavar="TYPE", type=click.Choice(sorted(TYPE_NAMES)))
@click.argument("value")
@click.option("--layout", default=None, help="Timestamp layout name for datetime.")
@click.pass_obj
def coerce_cmd(app: AppContext, type_name: str, value: str, layout: str | None) -> None:
    """Coerce VALUE into TYPE and show the result."""
    app.emit(app.inspect.coerce_value(type_name, value, layout=layout))
