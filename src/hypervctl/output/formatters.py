"""Human and JSON rendering of ServiceResult.

Human renderers are dispatched by ``result.op``. Unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from hypervctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from hypervctl.services.result import ServiceResult


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    verbose: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return the JSON envelope.
        verbose: Include error detail (exit code, truncated output).
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="hv.ok"), Text(f"  {result.op}", style="hv.op"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="hv.error"), Text(f"  {result.op}", style="hv.op"), "-", Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="hv.key"), Text(str(value)))


def _render_vms(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    vms = result.data.get("vms", [])
    if not vms:
        console.print("  No VMs found.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Id", style="hv.id", no_wrap=True)
    table.add_column("Name")
    for vm in vms:
        table.add_row(Text(vm["id"]), Text(vm["name"]))
    console.print(table)


def _render_incompatibilities(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    console.print(Text("  path: ", style="hv.key"), Text(result.data["path"], style="hv.path"))
    reasons = result.data.get("incompatibilities", [])
    if not reasons:
        console.print("  No incompatibilities found.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Id", justify="right")
    table.add_column("Reason", style="hv.reason")
    table.add_column("Message")
    for reason in reasons:
        table.add_row(str(reason["message_id"]), reason["reason"], Text(reason["message"]))
    console.print(table)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], Any]] = {
    "list_vms": _render_vms,
    "compare_vm": _render_incompatibilities,
}
