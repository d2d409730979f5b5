"""thumbor-url — build and sign Thumbor image URLs."""

from thumbor_url.builder import UrlBuilder
from thumbor_url.commands import CommandSet
from thumbor_url.core.exceptions import ConfigError, ThumborUrlError, UnknownOperationError
from thumbor_url.thumbor import Thumbor
from thumbor_url.url import ThumborUrl, sign

__version__ = "0.1.0"

__all__ = [
    "CommandSet",
    "ConfigError",
    "Thumbor",
    "ThumborUrl",
    "ThumborUrlError",
    "UnknownOperationError",
    "UrlBuilder",
    "sign",
]
