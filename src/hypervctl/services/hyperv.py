"""Hyperv — the three PowerShell-backed operations.

Each call spawns exactly one PowerShell process and releases it before
returning. Failures raise a :class:`~hypervctl.domain.errors.HypervError`
subclass; nothing is retried.
"""

from __future__ import annotations

import logging
import os

from hypervctl.config.settings import HypervSettings
from hypervctl.domain.incompatibility import IncompatibilityReason
from hypervctl.domain.types import Vm
from hypervctl.infrastructure.decoding import classify_lines, decode_vms, parse_incompatibility
from hypervctl.infrastructure.paths import quote_path
from hypervctl.infrastructure.process import ProcessRunner

logger = logging.getLogger(__name__)

# @(...) forces an array, so zero or one VM still decodes as a list.
LIST_VMS_COMMAND = "ConvertTo-Json -InputObject @(Get-VM | Select-Object -Property Id,Name)"

IMPORT_VM_COMMAND = "Import-VM -Path {path}"

# One "<MessageId> <Message>" line per incompatibility, no header.
COMPARE_VM_COMMAND = (
    "Compare-VM -Path {path}"
    " | Select-Object -ExpandProperty Incompatibilities"
    " | ForEach-Object {{ \"$($_.MessageId) $($_.Message -replace '\\r?\\n', ' ')\" }}"
)


def default_runner() -> ProcessRunner:
    """Runner configured from ``HYPERVCTL_*`` env vars and ``hypervctl.toml``."""
    return ProcessRunner(HypervSettings.from_cli().shell)


class Hyperv:
    """Entry point for Hyper-V operations.

    Usage::

        hv = Hyperv()
        for vm in hv.get_vms():
            print(vm.id, vm.name)
    """

    def __init__(self, runner: ProcessRunner | None = None) -> None:
        self._runner = runner or default_runner()

    def get_vms(self) -> list[Vm]:
        """List the VMs on this host."""
        with self._runner.spawn(LIST_VMS_COMMAND) as process:
            vms = decode_vms(process.take_stdout())
        logger.debug("Listed %d VMs", len(vms))
        return vms

    def import_vm(self, path: str | os.PathLike[str]) -> None:
        """Import the VM definition file at *path* in place."""
        command = IMPORT_VM_COMMAND.format(path=quote_path(path))
        self._runner.run_checked(command)
        logger.debug("Imported VM from %s", path)

    def compare_vm(self, path: str | os.PathLike[str]) -> list[IncompatibilityReason]:
        """Report why the VM at *path* cannot be imported on this host.

        An empty list means no incompatibilities were found.
        """
        command = COMPARE_VM_COMMAND.format(path=quote_path(path))
        with self._runner.spawn(command) as process:
            reasons = classify_lines(
                process.take_stdout(),
                parse_incompatibility,
                encoding=self._runner.config.encoding,
            )
        logger.debug("Compare-VM reported %d incompatibilities", len(reasons))
        return reasons
