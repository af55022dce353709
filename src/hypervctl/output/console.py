"""Rich Console factory and theme for hypervctl output.

Consoles render to a StringIO buffer so formatters keep a
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HV_THEME = Theme(
    {
        "hv.ok": "bold green",
        "hv.error": "bold red",
        "hv.op": "bold cyan",
        "hv.key": "dim",
        "hv.id": "bold blue",
        "hv.path": "dim",
        "hv.reason": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HV_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
