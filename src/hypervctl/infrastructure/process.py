"""PowerShell process spawning and exit-status checking.

A :class:`ShellProcess` is used in one of two modes:

- Streamed: the caller takes the stdout pipe with :meth:`ShellProcess.take_stdout`
  and reads it while the process runs. The pipe must be taken before any
  wait, otherwise a full OS pipe buffer deadlocks the child.
- Buffered: :meth:`ShellProcess.wait_with_output` blocks until exit and
  returns stdout, stderr, and the exit status together.

INVARIANT: The process and its pipes never outlive the ``with`` block.
On an exception the child is killed before it is reaped.

There is no timeout. A hung PowerShell process hangs the caller.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, Any

from hypervctl.config.models import ShellConfig
from hypervctl.domain.errors import NonZeroExit, PipeUnavailable, SpawnFailed, WaitFailed

logger = logging.getLogger(__name__)

EMPTY_OUTPUT = "<empty>"
UNAVAILABLE_EXIT_CODE = "<unavailable>"


@dataclass(frozen=True)
class ProcessOutput:
    """Snapshot of a finished process.

    ``returncode`` is None when no exit code is available (the process
    was terminated by a signal).
    """

    returncode: int | None
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


def _exit_code(returncode: int | None) -> int | None:
    # Popen reports death-by-signal as a negative return code.
    if returncode is None or returncode < 0:
        return None
    return returncode


def truncate_output(data: bytes, limit: int) -> str:
    """Render the first *limit* bytes of *data* as text for diagnostics.

    Invalid byte sequences are replaced rather than raising.
    """
    if not data:
        return EMPTY_OUTPUT
    return data[:limit].decode("utf-8", errors="replace")


def exit_failure(output: ProcessOutput, limit: int) -> NonZeroExit:
    """Build the error for an unsuccessful exit, embedding truncated output."""
    code = UNAVAILABLE_EXIT_CODE if output.returncode is None else str(output.returncode)
    stdout = truncate_output(output.stdout, limit)
    stderr = truncate_output(output.stderr, limit)
    return NonZeroExit(
        f"PowerShell command failed with exit code {code}.\n"
        f"stdout: {stdout}\n"
        f"stderr: {stderr}",
        exit_code=output.returncode,
        stdout=stdout,
        stderr=stderr,
    )


class ShellProcess:
    """A running PowerShell process, owned by one ``with`` block."""

    def __init__(self, popen: subprocess.Popen[bytes], argv: list[str]) -> None:
        self._popen = popen
        self._argv = argv
        self._stdout_taken = False
        self._closed = False

    @property
    def pid(self) -> int:
        return self._popen.pid

    def take_stdout(self) -> IO[bytes]:
        """Hand the stdout pipe to the caller. Can be done once."""
        stream = self._popen.stdout
        if stream is None or self._stdout_taken:
            raise PipeUnavailable("Could not access stdout of PowerShell process")
        self._stdout_taken = True
        return stream

    def wait_with_output(self) -> ProcessOutput:
        """Block until exit, draining stdout and stderr."""
        if self._stdout_taken:
            raise PipeUnavailable("Stdout of PowerShell process was already taken")
        try:
            stdout, stderr = self._popen.communicate()
        except OSError as exc:
            raise WaitFailed(f"Failed to wait for PowerShell process: {exc}") from exc
        output = ProcessOutput(
            returncode=_exit_code(self._popen.returncode),
            stdout=stdout or b"",
            stderr=stderr or b"",
        )
        logger.debug(
            "PowerShell exited with %s (stdout=%d bytes, stderr=%d bytes)",
            output.returncode,
            len(output.stdout),
            len(output.stderr),
        )
        return output

    def close(self, *, kill: bool = False) -> int | None:
        """Release the pipes and reap the process. Returns the exit code."""
        if self._closed:
            return _exit_code(self._popen.returncode)
        self._closed = True
        if kill and self._popen.poll() is None:
            logger.debug("Killing PowerShell process %s", self._popen.pid)
            self._popen.kill()
        for stream in (self._popen.stdout, self._popen.stderr):
            if stream is not None:
                stream.close()
        try:
            returncode = self._popen.wait()
        except OSError as exc:
            raise WaitFailed(f"Failed to wait for PowerShell process: {exc}") from exc
        return _exit_code(returncode)

    def __enter__(self) -> ShellProcess:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is not None:
            try:
                self.close(kill=True)
            except WaitFailed:
                # The error already propagating is the one the caller sees.
                logger.debug("Could not reap killed PowerShell process", exc_info=True)
            return
        code = self.close()
        if code != 0 and self._stdout_taken:
            logger.warning("PowerShell command %r exited with %s", self._argv[-1], code)


PopenFactory = Callable[..., "subprocess.Popen[bytes]"]


class ProcessRunner:
    """Spawns one PowerShell process per command.

    Args:
        config: Executable, arguments, and diagnostic limits.
        popen: Process factory; defaults to :class:`subprocess.Popen`.
    """

    def __init__(
        self,
        config: ShellConfig | None = None,
        *,
        popen: PopenFactory | None = None,
    ) -> None:
        self._config = config or ShellConfig()
        self._popen = popen or subprocess.Popen

    @property
    def config(self) -> ShellConfig:
        return self._config

    def argv(self, command: str) -> list[str]:
        return [self._config.executable, *self._config.arguments, command]

    def spawn(self, command: str, *, capture_stderr: bool = False) -> ShellProcess:
        """Start *command* with stdout piped (and stderr, if requested).

        *command* is passed verbatim. Callers quote any embedded paths.
        """
        argv = self.argv(command)
        logger.debug("Spawning PowerShell: %s", argv)
        try:
            popen = self._popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE if capture_stderr else None,
            )
        except OSError as exc:
            raise SpawnFailed(f"Failed to spawn PowerShell process: {exc}") from exc
        return ShellProcess(popen, argv)

    def run_checked(self, command: str) -> ProcessOutput:
        """Run *command* to completion; a non-zero exit raises NonZeroExit.

        On success the full, untruncated output is returned.
        """
        with self.spawn(command, capture_stderr=True) as process:
            output = process.wait_with_output()
        if not output.success:
            raise exit_failure(output, self._config.diagnostic_limit)
        return output
