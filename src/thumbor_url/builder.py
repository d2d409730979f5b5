"""UrlBuilder — fluent façade over ``CommandSet`` and ``ThumborUrl``."""

from __future__ import annotations

import copy
import inspect
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from thumbor_url.commands import OPERATIONS, SWITCH_OPERATIONS, CommandSet
from thumbor_url.core.datatypes import Dimension, FilterArg
from thumbor_url.core.exceptions import ConfigError, UnknownOperationError
from thumbor_url.url import ThumborUrl

logger = logging.getLogger(__name__)


class UrlBuilder:
    """Chainable builder for a single Thumbor image URL.

    Every transformation method forwards to the owned ``CommandSet`` and
    returns the builder itself::

        url = (
            UrlBuilder("https://thumbor.example.com", "secret", "https://example.com/a.jpg")
            .fit_in(640, 480)
            .smart_crop(True)
            .webp()
            .quality(80)
        )
        str(url)

    Args:
        server: Base URL of the Thumbor server.
        secret: Signing key, or ``None`` for unsafe URLs.
        original: Location of the source image.
    """

    def __init__(self, server: str, secret: str | None, original: str) -> None:
        """Initialise a builder with an empty command set."""
        self._server = server
        self._secret = secret
        self._original = original
        self._commands = CommandSet()

    @property
    def original(self) -> str:
        """Return the source image location."""
        return self._original

    # ── copying ────────────────────────────────────────────────

    def __copy__(self) -> UrlBuilder:
        clone = UrlBuilder(self._server, self._secret, self._original)
        clone._commands = copy.deepcopy(self._commands)
        return clone

    def clone(self) -> UrlBuilder:
        """Return an independent copy; later changes do not leak between them."""
        return copy.copy(self)

    # ── name-based application ─────────────────────────────────

    def apply(self, operation: str, *args: Any, **kwargs: Any) -> UrlBuilder:
        """Apply a transformation by name.

        Args:
            operation: A ``CommandSet`` operation name, e.g. ``"fit_in"``.
            *args: Positional arguments for the operation.
            **kwargs: Keyword arguments for the operation.

        Returns:
            The builder, for chaining.

        Raises:
            UnknownOperationError: If *operation* is not a known transformation.
        """
        if operation not in OPERATIONS:
            msg = f"Operation '{operation}' does not exist on {CommandSet.__name__}"
            raise UnknownOperationError(msg)
        logger.debug("Applying %s%r to %s", operation, args, self._original)
        getattr(self._commands, operation)(*args, **kwargs)
        return self

    def apply_preset(self, preset: Mapping[str, Any], name: str | None = None) -> UrlBuilder:
        """Apply a mapping of operation name to arguments, in mapping order.

        A list value is spread as positional arguments, a mapping as
        keyword arguments, and any other value is passed as the single
        argument.  For operations without required arguments (``webp``,
        ``trim``, ``grayscale``...) a boolean means apply when ``true``
        and skip when ``false``; ``webp = []`` also calls ``webp()``.

        Args:
            preset: Operations to apply, e.g. loaded from a TOML preset.
            name: Preset name, used in error messages.

        Returns:
            The builder, for chaining.

        Raises:
            UnknownOperationError: If the preset names an unknown operation.
            ConfigError: If a value does not match the operation's arguments.
        """
        label = f"preset '{name}'" if name is not None else "preset"
        for operation, value in preset.items():
            if operation not in OPERATIONS:
                msg = f"Operation '{operation}' in {label} does not exist on {CommandSet.__name__}"
                raise UnknownOperationError(msg)

            args: tuple[Any, ...]
            kwargs: dict[str, Any]
            if operation in SWITCH_OPERATIONS and isinstance(value, bool):
                if not value:
                    continue
                args, kwargs = (), {}
            elif isinstance(value, Mapping):
                args, kwargs = (), dict(value)
            elif isinstance(value, list):
                args, kwargs = tuple(value), {}
            else:
                args, kwargs = (value,), {}

            try:
                inspect.signature(getattr(self._commands, operation)).bind(*args, **kwargs)
            except TypeError as exc:
                msg = f"Invalid arguments for '{operation}' in {label}: {exc}"
                raise ConfigError(msg) from exc
            self.apply(operation, *args, **kwargs)
        return self

    # ── geometry ───────────────────────────────────────────────

    def trim(self, colour_source: str | None = None, tolerance: int | None = None) -> UrlBuilder:
        """Trim surrounding space, optionally from a colour source with a tolerance."""
        self._commands.trim(colour_source, tolerance)
        return self

    def crop(self, top_left_x: int, top_left_y: int, bottom_right_x: int, bottom_right_y: int) -> UrlBuilder:
        """Crop to the window between the two corners."""
        self._commands.crop(top_left_x, top_left_y, bottom_right_x, bottom_right_y)
        return self

    def fit_in(self, width: int, height: int) -> UrlBuilder:
        """Fit the image in a box of the given dimensions."""
        self._commands.fit_in(width, height)
        return self

    def full_fit_in(self, width: int, height: int) -> UrlBuilder:
        """Fit the box by the image's smallest side."""
        self._commands.full_fit_in(width, height)
        return self

    def adaptive_fit_in(self, width: int, height: int) -> UrlBuilder:
        """Fit in the box, swapping its orientation when that fits better."""
        self._commands.adaptive_fit_in(width, height)
        return self

    def resize(self, width: Dimension, height: Dimension) -> UrlBuilder:
        """Resize to the given dimensions; sides may be ``0`` or ``"orig"``."""
        self._commands.resize(width, height)
        return self

    def flip_horizontal(self, flip: bool = True) -> UrlBuilder:
        """Flip horizontally; needs a resize to take effect."""
        self._commands.flip_horizontal(flip)
        return self

    def flip_vertical(self, flip: bool = True) -> UrlBuilder:
        """Flip vertically; needs a resize to take effect."""
        self._commands.flip_vertical(flip)
        return self

    def halign(self, halign: str) -> UrlBuilder:
        """Set the horizontal alignment token."""
        self._commands.halign(halign)
        return self

    def valign(self, valign: str) -> UrlBuilder:
        """Set the vertical alignment token."""
        self._commands.valign(valign)
        return self

    def smart_crop(self, smart_crop: bool) -> UrlBuilder:
        """Toggle smart cropping."""
        self._commands.smart_crop(smart_crop)
        return self

    def metadata_only(self, metadata_only: bool) -> UrlBuilder:
        """Toggle returning JSON metadata instead of the image."""
        self._commands.metadata_only(metadata_only)
        return self

    # ── filters ────────────────────────────────────────────────

    def add_filter(self, filter_name: str, *args: FilterArg) -> UrlBuilder:
        """Append an arbitrary filter with its arguments."""
        self._commands.add_filter(filter_name, *args)
        return self

    def quality(self, quality: int) -> UrlBuilder:
        """Set output quality (1-100)."""
        self._commands.quality(quality)
        return self

    def format(self, image_format: str) -> UrlBuilder:
        """Convert to the given output format."""
        self._commands.format(image_format)
        return self

    def webp(self) -> UrlBuilder:
        """Convert to WebP."""
        self._commands.webp()
        return self

    def avif(self) -> UrlBuilder:
        """Convert to AVIF."""
        self._commands.avif()
        return self

    def blur(self, radius: int, sigma: int | None = None) -> UrlBuilder:
        """Apply a gaussian blur."""
        self._commands.blur(radius, sigma)
        return self

    def brightness(self, amount: int) -> UrlBuilder:
        """Adjust brightness (-100 to 100)."""
        self._commands.brightness(amount)
        return self

    def contrast(self, amount: int) -> UrlBuilder:
        """Adjust contrast (-100 to 100)."""
        self._commands.contrast(amount)
        return self

    def grayscale(self) -> UrlBuilder:
        """Convert to grayscale."""
        self._commands.grayscale()
        return self

    def rotate(self, angle: int) -> UrlBuilder:
        """Rotate by 0, 90, 180 or 270 degrees."""
        self._commands.rotate(angle)
        return self

    def sharpen(self, amount: float, radius: float, luminance_only: bool = False) -> UrlBuilder:
        """Sharpen the image."""
        self._commands.sharpen(amount, radius, luminance_only)
        return self

    def noise(self, amount: int) -> UrlBuilder:
        """Add noise (0-100)."""
        self._commands.noise(amount)
        return self

    def watermark(self, image_url: str, x: int = 0, y: int = 0, alpha: int = 0) -> UrlBuilder:
        """Overlay a watermark image."""
        self._commands.watermark(image_url, x, y, alpha)
        return self

    def fill(self, color: str) -> UrlBuilder:
        """Fill empty space with a colour, ``auto``, ``blur`` or ``transparent``."""
        self._commands.fill(color)
        return self

    def round_corners(
        self,
        radius: int,
        red: int | None = None,
        green: int | None = None,
        blue: int | None = None,
    ) -> UrlBuilder:
        """Round the corners, optionally over a background colour."""
        self._commands.round_corners(radius, red, green, blue)
        return self

    def strip_exif(self) -> UrlBuilder:
        """Strip EXIF metadata."""
        self._commands.strip_exif()
        return self

    def strip_icc(self) -> UrlBuilder:
        """Strip the ICC colour profile."""
        self._commands.strip_icc()
        return self

    def no_upscale(self) -> UrlBuilder:
        """Prevent upscaling."""
        self._commands.no_upscale()
        return self

    def saturation(self, amount: float) -> UrlBuilder:
        """Adjust saturation (1.0 is unchanged)."""
        self._commands.saturation(amount)
        return self

    def rgb(self, red: int, green: int, blue: int) -> UrlBuilder:
        """Adjust each RGB channel."""
        self._commands.rgb(red, green, blue)
        return self

    def max_bytes(self, max_bytes: int) -> UrlBuilder:
        """Cap the output file size in bytes."""
        self._commands.max_bytes(max_bytes)
        return self

    def equalize(self) -> UrlBuilder:
        """Apply histogram equalisation."""
        self._commands.equalize()
        return self

    def convolution(self, matrix: Sequence[int | float], columns: int, normalize: bool = False) -> UrlBuilder:
        """Apply a convolution matrix."""
        self._commands.convolution(matrix, columns, normalize)
        return self

    # ── rendering ──────────────────────────────────────────────

    def build(self) -> ThumborUrl:
        """Snapshot the current commands into a ``ThumborUrl``."""
        return ThumborUrl(
            server=self._server,
            secret=self._secret,
            original=self._original,
            commands=tuple(self._commands.to_list()),
        )

    def __str__(self) -> str:
        return self.build().build()
