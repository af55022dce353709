"""Tests for VmService envelopes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from hypervctl.services.hyperv import Hyperv
from hypervctl.services.vm import VmService

VM_ID = "5ae40946-3a98-428e-8c83-081a3c6bd18c"


class TestListVms:
    def test_success(self, fake_shell: Any) -> None:
        _, runner = fake_shell(stdout=f'[{{"Id":"{VM_ID}","Name":"vm1"}}]'.encode())
        result = VmService(Hyperv(runner)).list_vms()
        assert result.ok is True
        assert result.op == "list_vms"
        assert result.error is None
        assert result.data == {"count": 1, "vms": [{"id": VM_ID, "name": "vm1"}]}

    def test_failure(self, fake_shell: Any) -> None:
        _, runner = fake_shell(stdout=b"{")
        result = VmService(Hyperv(runner)).list_vms()
        assert result.ok is False
        assert result.data == {}
        assert result.error is not None
        assert result.error.code == "DECODE_FAILED"
        assert "Failed to parse PowerShell output" in result.error.message


class TestImportVm:
    def test_success(self, fake_shell: Any, vm_file: Path) -> None:
        _, runner = fake_shell()
        result = VmService(Hyperv(runner)).import_vm(vm_file)
        assert result.ok is True
        assert result.data == {"path": str(vm_file)}

    def test_invalid_path(self, fake_shell: Any, tmp_path: Path) -> None:
        shell, runner = fake_shell()
        result = VmService(Hyperv(runner)).import_vm(tmp_path / "nope.vmcx")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INVALID_PATH"
        assert shell.calls == []

    def test_non_zero_exit_detail(self, fake_shell: Any, vm_file: Path) -> None:
        _, runner = fake_shell(stderr=b"denied", exit_code=5)
        result = VmService(Hyperv(runner)).import_vm(vm_file)
        assert result.error is not None
        assert result.error.code == "NON_ZERO_EXIT"
        assert result.error.detail == {"exit_code": 5, "stdout": "<empty>", "stderr": "denied"}


class TestCompareVm:
    def test_success(self, fake_shell: Any, vm_file: Path) -> None:
        _, runner = fake_shell(stdout=b"14420 Too many processors\n")
        result = VmService(Hyperv(runner)).compare_vm(vm_file)
        assert result.ok is True
        assert result.data["count"] == 1
        assert result.data["incompatibilities"] == [
            {"reason": "TooManyCores", "message_id": 14420, "message": "Too many processors"}
        ]

    def test_parse_failure_detail(self, fake_shell: Any, vm_file: Path) -> None:
        _, runner = fake_shell(stdout=b"13000\n")
        result = VmService(Hyperv(runner)).compare_vm(vm_file)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "LINE_PARSE_FAILED"
        assert result.error.detail == {"line": "13000"}
