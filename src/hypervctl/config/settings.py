"""HypervSettings: how hypervctl finds and launches PowerShell.

Values are resolved per field, first match wins:

- keyword arguments (the root command's flags),
- ``HYPERVCTL_*`` environment variables, with ``__`` reaching into a
  section (``HYPERVCTL_SHELL__EXECUTABLE=pwsh``),
- the ``hypervctl.toml`` picked by :func:`~hypervctl.config.discovery.find_config`,
- the defaults on :class:`~hypervctl.config.models.ShellConfig`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from hypervctl.config.discovery import find_config
from hypervctl.config.models import ShellConfig


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        import click

        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of the config file, e.g. ``[shell]``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            self._tables = _read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return self._tables


# pydantic-settings builds its sources inside __init__, so from_cli hands
# the chosen file over here for the duration of one construction.
_pending = threading.local()


class HypervSettings(BaseSettings):
    """Resolved hypervctl configuration.

    Attributes:
        config_path: The ``hypervctl.toml`` that was read, if any.
        shell: Executable, arguments and limits for the PowerShell process.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HYPERVCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    shell: ShellConfig = Field(default_factory=ShellConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No .env or secrets directory; the config file ranks below env vars.
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> HypervSettings:
        """Load settings for one invocation.

        An explicit *config_path* that is not a file means no config file
        is read. Without one, ``hypervctl.toml`` is searched for from
        *start* (the working directory by default) upwards.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(start)

        _pending.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _pending.toml_path = None
