"""Root CLI group for hypervctl with global flags and command registration."""

from __future__ import annotations

import click

from hypervctl import __version__
from hypervctl.commands import register_commands
from hypervctl.commands._context import AppContext
from hypervctl.config.settings import HypervSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hypervctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error detail.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """hypervctl — manage Hyper-V virtual machines through PowerShell."""
    settings = HypervSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
