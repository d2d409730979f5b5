"""Exception hierarchy for thumbor-url."""


class ThumborUrlError(Exception):
    """Base exception for all thumbor-url errors."""


class UnknownOperationError(ThumborUrlError, AttributeError):
    """Raised when an operation name is not a known transformation."""


class ConfigError(ThumborUrlError):
    """Raised when configuration cannot be read or a preset is missing."""
