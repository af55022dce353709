"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the VmService lazily and routes results to
stdout/stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hypervctl.config.logging import configure_logging
from hypervctl.output.formatters import format_result

if TYPE_CHECKING:
    from hypervctl.config.settings import HypervSettings
    from hypervctl.services.result import ServiceResult
    from hypervctl.services.vm import VmService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is created on first use so ``--help`` never touches
    the process layer.
    """

    def __init__(self, settings: HypervSettings) -> None:
        self.settings = settings
        self._service: VmService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> VmService:
        if self._service is None:
            from hypervctl.infrastructure.process import ProcessRunner
            from hypervctl.services.hyperv import Hyperv
            from hypervctl.services.vm import VmService

            self._service = VmService(Hyperv(ProcessRunner(self.settings.shell)))
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Write a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
