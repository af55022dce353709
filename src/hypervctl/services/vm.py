"""VmService — wraps Hyperv operations into ServiceResult envelopes."""

from __future__ import annotations

import logging
import os

from hypervctl.domain.errors import HypervError
from hypervctl.services.hyperv import Hyperv
from hypervctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class VmService:
    """Service-layer adapter used by the CLI.

    Every method returns a ServiceResult; HypervError never escapes.
    """

    def __init__(self, hyperv: Hyperv) -> None:
        self._hyperv = hyperv

    def _fail(self, op: str, exc: HypervError) -> ServiceResult:
        logger.debug("%s failed (%s): %s", op, exc.kind, exc.message)
        return ServiceResult.failure(op, exc)

    def list_vms(self) -> ServiceResult:
        op = "list_vms"
        try:
            vms = self._hyperv.get_vms()
        except HypervError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(vms),
                "vms": [vm.model_dump(mode="json") for vm in vms],
            },
        )

    def import_vm(self, path: str | os.PathLike[str]) -> ServiceResult:
        op = "import_vm"
        try:
            self._hyperv.import_vm(path)
        except HypervError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data={"path": os.fspath(path)})

    def compare_vm(self, path: str | os.PathLike[str]) -> ServiceResult:
        op = "compare_vm"
        try:
            reasons = self._hyperv.compare_vm(path)
        except HypervError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": os.fspath(path),
                "count": len(reasons),
                "incompatibilities": [reason.to_dict() for reason in reasons],
            },
        )
