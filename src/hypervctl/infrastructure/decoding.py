"""Decoding PowerShell stdout into typed values.

Two shapes are supported:

- Document: the whole stream is one JSON value (``ConvertTo-Json`` output).
- Lines: each non-blank line is transformed into one value, in order.

Both are all-or-nothing. A failure anywhere discards everything decoded
so far.
"""

from __future__ import annotations

import codecs
import io
import logging
import re
from collections.abc import Callable, Iterator
from typing import IO, TypeVar

from pydantic import TypeAdapter, ValidationError

from hypervctl.domain.errors import DecodeFailed, LineParseFailed, LineReadFailed
from hypervctl.domain.incompatibility import IncompatibilityReason, classify
from hypervctl.domain.types import Vm

logger = logging.getLogger(__name__)

T = TypeVar("T")

VM_LIST: TypeAdapter[list[Vm]] = TypeAdapter(list[Vm])

_MESSAGE_ID = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Document decoding
# ---------------------------------------------------------------------------


def decode_document(stream: IO[bytes], adapter: TypeAdapter[T]) -> T:
    """Read *stream* to EOF and validate it as one JSON document."""
    try:
        raw = stream.read()
    except OSError as exc:
        raise DecodeFailed(f"Failed to read PowerShell output: {exc}") from exc
    logger.debug("Decoding %d bytes of JSON", len(raw))
    # Windows PowerShell may prefix redirected output with a UTF-8 BOM.
    raw = raw.removeprefix(codecs.BOM_UTF8)
    try:
        return adapter.validate_json(raw)
    except ValidationError as exc:
        raise DecodeFailed(f"Failed to parse PowerShell output: {exc}") from exc


def decode_vms(stream: IO[bytes]) -> list[Vm]:
    """Decode ``Get-VM | ConvertTo-Json`` output."""
    return decode_document(stream, VM_LIST)


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


def iter_lines(stream: IO[bytes], *, encoding: str = "utf-8") -> Iterator[str]:
    r"""Yield text lines from *stream*, split on ``\n`` only.

    A lone ``\r`` stays inside the line. Read and decode errors raise
    LineReadFailed.
    """
    reader = io.TextIOWrapper(stream, encoding=encoding, errors="strict", newline="\n")
    try:
        yield from reader
    except (OSError, UnicodeDecodeError) as exc:
        raise LineReadFailed(f"Failed to read line of PowerShell output: {exc}") from exc


def classify_lines(
    stream: IO[bytes],
    transform: Callable[[str], T],
    *,
    encoding: str = "utf-8",
) -> list[T]:
    """Apply *transform* to each trimmed, non-blank line, preserving order."""
    results: list[T] = []
    for lineno, line in enumerate(iter_lines(stream, encoding=encoding), start=1):
        trimmed = line.strip()
        if not trimmed:
            logger.debug("Skipping blank line %d", lineno)
            continue
        results.append(transform(trimmed))
    return results


def parse_incompatibility(line: str) -> IncompatibilityReason:
    """Parse a ``<message id> <message>`` line from ``Compare-VM``."""
    code_token, sep, message = line.partition(" ")
    if not sep or not code_token or not message:
        raise LineParseFailed(
            f"Malformed incompatibility line, expected '<message id> <message>': {line!r}",
            line=line,
        )
    if not _MESSAGE_ID.fullmatch(code_token):
        raise LineParseFailed(
            f"Invalid message id {code_token!r} in incompatibility line: {line!r}",
            line=line,
        )
    return classify(int(code_token), message)
