"""Thumbor — factory that hands out configured ``UrlBuilder`` instances."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from thumbor_url.builder import UrlBuilder
from thumbor_url.core.exceptions import ConfigError

if TYPE_CHECKING:
    from thumbor_url.core.config import ConfigManager

logger = logging.getLogger(__name__)


class Thumbor:
    """Entry point: holds the server address and signing key.

    Create one factory and use it for every image::

        thumbor = Thumbor("https://thumbor.example.com", "my-secret-key")
        url = str(thumbor.url("https://example.com/image.jpg").fit_in(640, 480).quality(80))

    Args:
        server: Base URL of the Thumbor server, including any port.
        secret: Signing key matching the server's ``SECURITY_KEY``.
                ``None`` or ``""`` produce unsafe URLs.
        config: Optional configuration used to resolve named presets.
    """

    def __init__(self, server: str, secret: str | None = None, config: ConfigManager | None = None) -> None:
        """Initialise the factory."""
        self._server = server
        self._secret = secret
        self._config = config
        if not self.has_secret():
            logger.info("No secret configured for %s; URLs will be unsafe", server)

    @classmethod
    def construct(cls, server: str, secret: str | None = None) -> Thumbor:
        """Alternate constructor kept for callers migrating from phumbor."""
        return cls(server, secret)

    @classmethod
    def from_config(cls, config: ConfigManager) -> Thumbor:
        """Create a factory from the server and key in *config*.

        Args:
            config: A loaded ``ConfigManager``.

        Returns:
            A factory that can also resolve *config*'s presets.
        """
        return cls(config.server, config.secret, config=config)

    def create_builder(self, original: str) -> UrlBuilder:
        """Return a fresh builder for the image at *original*."""
        return UrlBuilder(self._server, self._secret, original)

    def url(self, original: str, preset: str | None = None) -> UrlBuilder:
        """Return a builder for *original*, optionally pre-loaded with a preset.

        Args:
            original: Location of the source image.
            preset: Name of a configured preset to apply first.

        Returns:
            A new ``UrlBuilder``.

        Raises:
            ConfigError: If *preset* is unknown, has invalid arguments, or no config is set.
            UnknownOperationError: If the preset names an unknown operation.
        """
        builder = self.create_builder(original)
        if preset is not None:
            builder.apply_preset(self._preset(preset), name=preset)
        return builder

    def get_server(self) -> str:
        """Return the configured server URL."""
        return self._server

    def has_secret(self) -> bool:
        """Return ``True`` when a non-empty signing key is configured."""
        return bool(self._secret)

    def _preset(self, name: str) -> dict[str, object]:
        if self._config is None:
            msg = f"Cannot resolve preset '{name}' without a configuration"
            raise ConfigError(msg)
        return self._config.preset(name)
