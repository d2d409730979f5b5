"""Tests for the Thumbor factory."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from thumbor_url.builder import UrlBuilder
from thumbor_url.core.config import ConfigManager
from thumbor_url.core.exceptions import ConfigError
from thumbor_url.thumbor import Thumbor

SERVER = "http://thumbor.example.com"
SECRET = "my-secret-key"
IMAGE = "https://example.com/images/test.jpg"


class TestFactory:
    """Tests for factory construction and queries."""

    def test_url_returns_builder(self) -> None:
        """``url()`` returns a ``UrlBuilder``."""
        assert isinstance(Thumbor(SERVER, SECRET).url(IMAGE), UrlBuilder)

    def test_create_builder_returns_fresh_builders(self) -> None:
        """Each call returns a new, independent builder."""
        thumbor = Thumbor(SERVER)
        first = thumbor.create_builder(IMAGE).grayscale()
        second = thumbor.create_builder(IMAGE)

        assert first is not second
        assert "grayscale" not in str(second)

    def test_construct_alias(self) -> None:
        """``construct`` behaves like the constructor."""
        thumbor = Thumbor.construct(SERVER, SECRET)
        assert thumbor.get_server() == SERVER
        assert thumbor.has_secret()

    def test_get_server(self) -> None:
        """The configured server is returned unchanged."""
        assert Thumbor(SERVER + "/").get_server() == SERVER + "/"

    @pytest.mark.parametrize(("secret", "expected"), [(SECRET, True), (None, False), ("", False)])
    def test_has_secret(self, secret: str | None, expected: bool) -> None:
        """Only a non-empty secret counts."""
        assert Thumbor(SERVER, secret).has_secret() is expected

    def test_logs_unsafe_without_secret(self, caplog: pytest.LogCaptureFixture) -> None:
        """Constructing without a secret logs at info that URLs are unsafe."""
        caplog.set_level(logging.INFO, logger="thumbor_url.thumbor")
        Thumbor(SERVER)
        assert "unsafe" in caplog.text
        assert all(record.levelno == logging.INFO for record in caplog.records)

    def test_end_to_end_unsafe(self) -> None:
        """The factory produces the bare unsafe URL for an untouched builder."""
        assert str(Thumbor(SERVER).url(IMAGE)) == f"{SERVER}/unsafe/{IMAGE}"


class TestFactoryWithConfig:
    """Tests for building a factory from configuration."""

    def test_from_config_uses_server_and_key(self, tmp_path: Path) -> None:
        """Server and key come from the config."""
        config = ConfigManager(config_dir=tmp_path, env={})
        config.set_global("server", SERVER)
        config.set_global("key", SECRET)

        thumbor = Thumbor.from_config(config)

        assert thumbor.get_server() == SERVER
        assert thumbor.has_secret()

    def test_url_applies_preset(self, tmp_path: Path) -> None:
        """A named preset is applied to the new builder."""
        presets_dir = tmp_path / "presets"
        presets_dir.mkdir()
        (presets_dir / "thumb.toml").write_text("fit_in = [150, 150]\nsmart_crop = true\nquality = 75\n")
        config = ConfigManager(config_dir=tmp_path, env={})
        config.load()

        url = str(Thumbor.from_config(config).url(IMAGE, preset="thumb"))

        assert url == f"http://localhost:8888/unsafe/fit-in/150x150/smart/filters:quality(75)/{IMAGE}"

    def test_unknown_preset_raises(self, tmp_path: Path) -> None:
        """Asking for a missing preset raises ``ConfigError``."""
        config = ConfigManager(config_dir=tmp_path, env={})
        with pytest.raises(ConfigError, match="Unknown preset"):
            Thumbor.from_config(config).url(IMAGE, preset="missing")

    def test_preset_without_config_raises(self) -> None:
        """A factory built without config cannot resolve presets."""
        with pytest.raises(ConfigError, match="without a configuration"):
            Thumbor(SERVER).url(IMAGE, preset="thumb")
