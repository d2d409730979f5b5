"""ThumborUrl — assembles and signs the final Thumbor URL."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

UNSAFE = "unsafe"

_URL_SAFE = str.maketrans({"+": "-", "/": "_"})


def sign(path: str, secret: str) -> str:
    """Sign a URL path using HMAC-SHA1.

    The digest is base64-encoded and made URL-safe by mapping ``+`` to
    ``-`` and ``/`` to ``_``.  Padding is kept, as Thumbor expects.

    Args:
        path: Everything after the signature segment.
        secret: The server's ``SECURITY_KEY``.

    Returns:
        The URL-safe signature.

    See https://github.com/thumbor/thumbor/wiki/Libraries
    """
    digest = hmac.new(secret.encode(), path.encode(), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii").translate(_URL_SAFE)


@dataclass(frozen=True)
class ThumborUrl:
    """A complete Thumbor URL: server, optional secret, image and commands.

    Attributes:
        server: Base URL of the Thumbor server.
        secret: Signing key; ``None`` or ``""`` produce an ``unsafe`` URL.
        original: Location of the source image, always the last component.
        commands: Ordered path segments from ``CommandSet.to_list()``.
    """

    server: str
    secret: str | None
    original: str
    commands: tuple[str, ...] = field(default_factory=tuple)

    @property
    def path(self) -> str:
        """Return the path that gets signed: commands followed by the image."""
        if self.commands:
            return "/".join(self.commands) + "/" + self.original
        return self.original

    @property
    def signature(self) -> str:
        """Return the HMAC signature, or ``unsafe`` when no secret is set."""
        if self.secret:
            return sign(self.path, self.secret)
        return UNSAFE

    def build(self) -> str:
        """Generate the complete Thumbor URL."""
        img_path = self.path
        signature = self.signature
        if signature == UNSAFE:
            logger.debug("Building unsafe URL for %s", self.original)
        server = self.server.rstrip("/")
        return f"{server}/{signature}/{img_path}"

    def __str__(self) -> str:
        return self.build()
