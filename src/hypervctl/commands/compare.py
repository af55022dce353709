"""Command: check a VM definition for incompatibilities with this host."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hypervctl.commands._base import HvCommand

if TYPE_CHECKING:
    from hypervctl.commands._context import AppContext


@click.command(
    cls=HvCommand,
    examples="""\
  hypervctl compare ./web01.vmcx
  hypervctl --json compare ./web01.vmcx""",
)
@click.argument("path")
@click.pass_obj
def compare(app: AppContext, path: str) -> None:
    """Report why the VM defined by PATH cannot be imported here."""
    app.emit(app.service.compare_vm(path))
