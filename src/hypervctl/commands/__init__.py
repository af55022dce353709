"""Subcommand modules for hypervctl.

Provides register_commands() which uses deferred imports to keep
``hypervctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from hypervctl.commands.compare import compare
    from hypervctl.commands.import_cmd import import_cmd
    from hypervctl.commands.vms import vms

    cli.add_command(vms)
    cli.add_command(import_cmd)
    cli.add_command(compare)
