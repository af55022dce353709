"""HypervError — the closed error vocabulary.

Every failure path raises exactly one of the eight subclasses below.
The message is always self-sufficient: it embeds the OS error text,
the truncated process output, or the offending line.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    """Logical cause of a failed operation."""

    SPAWN_FAILED = "SPAWN_FAILED"
    PIPE_UNAVAILABLE = "PIPE_UNAVAILABLE"
    WAIT_FAILED = "WAIT_FAILED"
    NON_ZERO_EXIT = "NON_ZERO_EXIT"
    INVALID_PATH = "INVALID_PATH"
    DECODE_FAILED = "DECODE_FAILED"
    LINE_READ_FAILED = "LINE_READ_FAILED"
    LINE_PARSE_FAILED = "LINE_PARSE_FAILED"


class HypervError(Exception):
    """Base error carrying a human-readable message."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, Any]:
        """Structured context for the service envelope."""
        return {}


class SpawnFailed(HypervError):
    kind = ErrorKind.SPAWN_FAILED


class PipeUnavailable(HypervError):
    kind = ErrorKind.PIPE_UNAVAILABLE


class WaitFailed(HypervError):
    kind = ErrorKind.WAIT_FAILED


class InvalidPath(HypervError):
    kind = ErrorKind.INVALID_PATH


class DecodeFailed(HypervError):
    kind = ErrorKind.DECODE_FAILED


class LineReadFailed(HypervError):
    kind = ErrorKind.LINE_READ_FAILED


class LineParseFailed(HypervError):
    """A non-blank line did not have the ``<code> <message>`` shape."""

    kind = ErrorKind.LINE_PARSE_FAILED

    def __init__(self, message: str, *, line: str) -> None:
        super().__init__(message)
        self.line = line

    def detail(self) -> dict[str, Any]:
        return {"line": self.line}


class NonZeroExit(HypervError):
    """The shell ran but exited unsuccessfully.

    Attributes:
        exit_code: Numeric exit code, or None when unavailable
            (e.g. the process was killed by a signal).
        stdout: Truncated, lossily decoded standard output.
        stderr: Truncated, lossily decoded standard error.
    """

    kind = ErrorKind.NON_ZERO_EXIT

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None,
        stdout: str,
        stderr: str,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    def detail(self) -> dict[str, Any]:
        return {
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
        }
