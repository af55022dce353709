"""Command: import a VM definition file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hypervctl.commands._base import HvCommand

if TYPE_CHECKING:
    from hypervctl.commands._context import AppContext


@click.command(
    "import",
    cls=HvCommand,
    examples="""\
  hypervctl import "D:\\VMs\\web01\\Virtual Machines\\5AE40946-3A98-428E-8C83-081A3C6BD18C.vmcx"
  hypervctl -v import ./web01.vmcx""",
)
@click.argument("path")
@click.pass_obj
def import_cmd(app: AppContext, path: str) -> None:
    """Import the VM defined by PATH (registered in place)."""
    app.emit(app.service.import_vm(path))
