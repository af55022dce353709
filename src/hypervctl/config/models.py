"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hypervctl.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- hypervctl.toml sections ---


class ShellConfig(BaseModel):
    """[shell] section — how the PowerShell process is launched.

    The command string is appended as the final argument:
    ``[executable, *arguments, command]``.
    """

    model_config = {"frozen": True}

    executable: str = "powershell.exe"
    arguments: list[str] = Field(
        default_factory=lambda: ["-NoProfile", "-NonInteractive", "-Command"]
    )
    encoding: str = "utf-8"
    # Byte budget for stdout/stderr embedded in exit-failure messages.
    diagnostic_limit: int = Field(default=1000, gt=0)
