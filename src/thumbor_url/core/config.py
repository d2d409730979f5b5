"""ConfigManager — server, key and presets backed by TOML files and the environment."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from thumbor_url.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "thumbor-url"

DEFAULT_SERVER = "http://localhost:8888"
SERVER_ENV_VAR = "THUMBOR_SERVER"
KEY_ENV_VAR = "THUMBOR_KEY"


class ConfigManager:
    """Layered configuration for talking to a Thumbor server.

    Values are resolved from the environment first, then from
    ``config.toml`` in ``config_dir``, then from built-in defaults.
    Named presets live in ``presets/<name>.toml`` and map operation
    names to their arguments.

    Args:
        config_dir: Root directory for configuration files.
                    Defaults to ``~/.config/thumbor-url/``.
        env: Environment mapping.  Defaults to ``os.environ``.
    """

    def __init__(self, config_dir: Path | None = None, env: Mapping[str, str] | None = None) -> None:
        """Initialise the config manager.

        Args:
            config_dir: Custom configuration directory.  Uses the
                        platform default if ``None``.
            env: Environment variables to consult for overrides.
        """
        self._config_dir = config_dir or _DEFAULT_CONFIG_DIR
        self._env = os.environ if env is None else env
        self._global: dict[str, Any] = {}
        self._presets: dict[str, dict[str, Any]] = {}

    @property
    def config_dir(self) -> Path:
        """Return the configuration directory path."""
        return self._config_dir

    def load(self) -> None:
        """Load global config and presets from ``config_dir``.

        Missing files are silently skipped.

        Raises:
            ConfigError: If a file exists but is not valid TOML.
        """
        global_file = self._config_dir / "config.toml"
        if global_file.is_file():
            self._global = self._read_toml(global_file)
            logger.info("Loaded global config from %s", global_file)

        presets_dir = self._config_dir / "presets"
        if presets_dir.is_dir():
            for toml_file in sorted(presets_dir.glob("*.toml")):
                preset_name = toml_file.stem
                self._presets[preset_name] = self._read_toml(toml_file)
                logger.info("Loaded preset '%s'", preset_name)

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a global config value.

        Args:
            key: The configuration key.
            default: Fallback value when the key is not found.

        Returns:
            The configuration value, or *default*.
        """
        return self._global.get(key, default)

    def set_global(self, key: str, value: Any) -> None:
        """Set a global configuration value (in-memory only).

        Args:
            key: The configuration key.
            value: The value to store.
        """
        self._global[key] = value

    @property
    def server(self) -> str:
        """Return the Thumbor server URL.

        Raises:
            ConfigError: If the configured ``server`` is not a string.
        """
        server = self._env.get(SERVER_ENV_VAR) or self.get("server", DEFAULT_SERVER)
        if not isinstance(server, str):
            msg = f"Config 'server' must be a string, got {type(server).__name__}"
            raise ConfigError(msg)
        return server

    @property
    def secret(self) -> str | None:
        """Return the signing key, or ``None`` for unsafe URLs.

        An empty key is treated as no key.

        Raises:
            ConfigError: If the configured ``key`` is not a string.
        """
        key = self._env.get(KEY_ENV_VAR) or self.get("key")
        if key is None:
            return None
        if not isinstance(key, str):
            msg = f"Config 'key' must be a string, got {type(key).__name__}"
            raise ConfigError(msg)
        return key or None

    def presets(self) -> dict[str, dict[str, Any]]:
        """Return all loaded presets as a name → operations mapping."""
        return {name: dict(ops) for name, ops in self._presets.items()}

    def preset(self, name: str) -> dict[str, Any]:
        """Look up a preset by name.

        Args:
            name: The preset file stem (e.g. ``"thumbnail"``).

        Returns:
            A mapping of operation name to arguments, in file order.

        Raises:
            ConfigError: If no preset with that name was loaded.
        """
        try:
            return dict(self._presets[name])
        except KeyError:
            msg = f"Unknown preset '{name}'. Available: {sorted(self._presets)}"
            raise ConfigError(msg) from None

    @staticmethod
    def _read_toml(path: Path) -> dict[str, Any]:
        """Read and parse a TOML file.

        Args:
            path: Path to the TOML file.

        Returns:
            Parsed dictionary.

        Raises:
            ConfigError: If the file is not valid TOML.
        """
        with path.open("rb") as fh:
            try:
                return tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in '{path}'"
                raise ConfigError(msg) from exc
