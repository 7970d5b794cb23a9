"""Configuration management for secutils."""

from __future__ import annotations

import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import SecutilsConfig
from .resolver import assign_dotted, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.secutils/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # secutils configuration file
    # Generated automatically; manage via `secutils config set KEY --value VALUE`.
    """
)


class ConfigManager:
    """Load and persist the YAML configuration file."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        ensure_file: bool = True,
    ) -> SecutilsConfig:
        """Load configuration from disk and apply CLI overrides on top."""
        if ensure_file:
            self.ensure_exists()

        return resolve_with_precedence(
            defaults=SecutilsConfig(),
            file_overrides=self._read_file(),
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return raw overrides stored on disk."""
        return self._read_file()

    def save(self, config: SecutilsConfig | Mapping[str, Any]) -> None:
        """Persist configuration data to disk."""
        if isinstance(config, SecutilsConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)
        self._write_file(data)

    def ensure_exists(self) -> Path:
        """Create a configuration file with defaults if one does not exist."""
        path = self._config_path
        if not path.exists():
            self._write_file(SecutilsConfig().model_dump(mode="python"))
        return path

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    # Internal helpers -------------------------------------------------

    def _read_file(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}

        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Failed to read configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        return raw

    def _write_file(self, data: Mapping[str, Any]) -> None:
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            serialized = yaml.safe_dump(dict(data), sort_keys=False)
            stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            self._config_path.write_text(
                f"{_CONFIG_HEADER}# Last updated: {stamp}\n{serialized}", encoding="utf-8"
            )
        except OSError as exc:
            raise ConfigError(f"Failed to write configuration file: {exc}") from exc


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "SecutilsConfig",
    "resolve_with_precedence",
    "assign_dotted",
    "ConfigError",
]
