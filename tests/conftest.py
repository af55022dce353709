"""Shared pytest fixtures and process doubles for hypervctl tests."""

from __future__ import annotations

import io
import subprocess
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from hypervctl.config.models import ShellConfig
from hypervctl.infrastructure.process import ProcessRunner

# ---------------------------------------------------------------------------
# Process doubles
# ---------------------------------------------------------------------------


class FakePopen:
    """In-memory stand-in for subprocess.Popen."""

    def __init__(
        self,
        argv: list[str],
        *,
        stdout_data: bytes,
        stderr_data: bytes,
        exit_code: int,
        wait_error: OSError | None,
        reap_error: OSError | None = None,
        stdout: Any = None,
        stderr: Any = None,
        **_kwargs: Any,
    ) -> None:
        self.args = argv
        self.pid = 4242
        self.stdout = io.BytesIO(stdout_data) if stdout == subprocess.PIPE else None
        self.stderr = io.BytesIO(stderr_data) if stderr == subprocess.PIPE else None
        self.returncode: int | None = None
        self.killed = False
        self._exit_code = exit_code
        self._wait_error = wait_error
        self._reap_error = reap_error

    def poll(self) -> int | None:
        return self.returncode

    def wait(self) -> int:
        if self._reap_error is not None:
            raise self._reap_error
        if self.returncode is None:
            self.returncode = self._exit_code
        return self.returncode

    def communicate(self) -> tuple[bytes | None, bytes | None]:
        if self._wait_error is not None:
            raise self._wait_error
        out = self.stdout.read() if self.stdout else None
        err = self.stderr.read() if self.stderr else None
        for stream in (self.stdout, self.stderr):
            if stream is not None:
                stream.close()
        self.wait()
        return out, err

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9


class FakeShell:
    """Popen factory recording every spawn.

    ``calls`` holds the argv of each spawn; ``processes`` the FakePopen
    objects handed out.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        exit_code: int = 0,
        *,
        spawn_error: OSError | None = None,
        wait_error: OSError | None = None,
        reap_error: OSError | None = None,
    ) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
        self.spawn_error = spawn_error
        self.wait_error = wait_error
        self.reap_error = reap_error
        self.calls: list[list[str]] = []
        self.processes: list[FakePopen] = []

    def __call__(self, argv: list[str], **kwargs: Any) -> FakePopen:
        self.calls.append(argv)
        if self.spawn_error is not None:
            raise self.spawn_error
        process = FakePopen(
            argv,
            stdout_data=self.stdout,
            stderr_data=self.stderr,
            exit_code=self.exit_code,
            wait_error=self.wait_error,
            reap_error=self.reap_error,
            **kwargs,
        )
        self.processes.append(process)
        return process

    @property
    def command(self) -> str:
        """The PowerShell command string of the last spawn."""
        return self.calls[-1][-1]


@pytest.fixture
def fake_shell() -> Callable[..., tuple[FakeShell, ProcessRunner]]:
    """Factory returning a FakeShell and a ProcessRunner bound to it."""

    def make(*args: Any, **kwargs: Any) -> tuple[FakeShell, ProcessRunner]:
        shell = FakeShell(*args, **kwargs)
        return shell, ProcessRunner(ShellConfig(), popen=shell)

    return make


@pytest.fixture
def python_runner() -> ProcessRunner:
    """ProcessRunner that runs commands as ``python -c <command>``."""
    return ProcessRunner(ShellConfig(executable=sys.executable, arguments=["-c"]))


@pytest.fixture
def vm_file(tmp_path: Path) -> Path:
    """An existing VM definition file."""
    path = tmp_path / "web01.vmcx"
    path.write_bytes(b"\x00vmcx")
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep a developer's hypervctl.toml and env out of the tests."""
    monkeypatch.delenv("HYPERVCTL_CONFIG", raising=False)
    monkeypatch.delenv("HYPERVCTL_SHELL__EXECUTABLE", raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    import logging

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    hv = logging.getLogger("hypervctl")
    hv_level = hv.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    hv.setLevel(hv_level)


# ---------------------------------------------------------------------------
# Fake PowerShell executable for end-to-end CLI tests
# ---------------------------------------------------------------------------

_FAKE_POWERSHELL = """\
import os
import sys

with open(os.environ["FAKE_PS_LOG"], "a", encoding="utf-8") as log:
    log.write(sys.argv[-1] + "\\n")
sys.stdout.write(os.environ.get("FAKE_PS_STDOUT", ""))
sys.stderr.write(os.environ.get("FAKE_PS_STDERR", ""))
sys.exit(int(os.environ.get("FAKE_PS_EXIT", "0")))
"""


class FakePowerShell:
    """A Python script standing in for powershell.exe, wired up via hypervctl.toml."""

    def __init__(self, root: Path) -> None:
        self.script = root / "fake_powershell.py"
        self.script.write_text(_FAKE_POWERSHELL, encoding="utf-8")
        self.log = root / "commands.log"
        (root / "hypervctl.toml").write_text(
            f"[shell]\nexecutable = '{sys.executable}'\narguments = ['{self.script}']\n",
            encoding="utf-8",
        )

    def env(self, stdout: str = "", stderr: str = "", exit_code: int = 0) -> dict[str, str]:
        """Environment for CliRunner.invoke controlling the fake's behavior."""
        return {
            "FAKE_PS_LOG": str(self.log),
            "FAKE_PS_STDOUT": stdout,
            "FAKE_PS_STDERR": stderr,
            "FAKE_PS_EXIT": str(exit_code),
        }

    def commands(self) -> list[str]:
        """PowerShell commands received so far."""
        if not self.log.exists():
            return []
        return self.log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_powershell(tmp_path: Path) -> FakePowerShell:
    """Fake powershell.exe configured through a hypervctl.toml in the cwd."""
    return FakePowerShell(tmp_path)
