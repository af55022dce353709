"""Validation and quoting of file paths embedded in PowerShell commands."""

from __future__ import annotations

import os
from pathlib import Path

from hypervctl.domain.errors import InvalidPath


def quote_path(path: str | os.PathLike[str]) -> str:
    """Return *path* as a single-quoted PowerShell literal.

    The path must name an existing regular file and be representable as
    text. Embedded single quotes are doubled, so the path cannot end the
    literal early.
    """
    p = Path(path)
    if not p.is_file():
        raise InvalidPath(f"Path does not refer to an existing file: {p}")
    text = str(p)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidPath(f"Path cannot be represented as text: {p!r}") from exc
    return "'" + text.replace("'", "''") + "'"
