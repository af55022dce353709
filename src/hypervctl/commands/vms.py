"""Command: list virtual machines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hypervctl.commands._base import HvCommand

if TYPE_CHECKING:
    from hypervctl.commands._context import AppContext


@click.command(
    cls=HvCommand,
    examples="""\
  hypervctl vms
  hypervctl --json vms""",
)
@click.pass_obj
def vms(app: AppContext) -> None:
    """List the virtual machines on this host."""
    app.emit(app.service.list_vms())
