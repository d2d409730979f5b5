"""CommandSet — accumulates image operations and renders them as URL segments."""

from __future__ import annotations

from collections.abc import Sequence

from thumbor_url.core.datatypes import (
    Crop,
    Dimension,
    Filter,
    FilterArg,
    Resize,
    ResizeKind,
    Trim,
    format_filter_arg,
)


class CommandSet:
    """A mutable set of Thumbor image operations.

    Nothing is range-checked: values such as ``quality(150)`` are passed
    through and left for the server to interpret.  Only one resize
    directive is kept, so the last call to ``fit_in``, ``full_fit_in``,
    ``adaptive_fit_in`` or ``resize`` wins.  Filters are kept in call
    order, duplicates included.

    See https://thumbor.readthedocs.io/en/latest/usage.html
    """

    def __init__(self) -> None:
        """Initialise an empty command set."""
        self._trim: Trim | None = None
        self._crop: Crop | None = None
        self._resize: Resize | None = None
        self._halign: str | None = None
        self._valign: str | None = None
        self._smart_crop = False
        self._metadata_only = False
        self._flip_horizontal = False
        self._flip_vertical = False
        self._filters: list[Filter] = []

    # ── geometry ───────────────────────────────────────────────

    def trim(self, colour_source: str | None = None, tolerance: int | None = None) -> None:
        """Trim surrounding space from the thumbnail.

        The top-left pixel is assumed to hold the background colour unless
        *colour_source* says otherwise.

        Args:
            colour_source: ``"top-left"`` or ``"bottom-right"``.
            tolerance: Euclidean colour distance tolerance (0-442 for RGB).
        """
        self._trim = Trim(colour_source=colour_source, tolerance=tolerance)

    def crop(self, top_left_x: int, top_left_y: int, bottom_right_x: int, bottom_right_y: int) -> None:
        """Manually specify the crop window coordinates."""
        self._crop = Crop(left=top_left_x, top=top_left_y, right=bottom_right_x, bottom=bottom_right_y)

    def fit_in(self, width: int, height: int) -> None:
        """Resize the image to fit in a box of the given dimensions."""
        self._resize = Resize(ResizeKind.FIT_IN, width, height)

    def full_fit_in(self, width: int, height: int) -> None:
        """Resize the image to fit the box by its smallest side."""
        self._resize = Resize(ResizeKind.FULL_FIT_IN, width, height)

    def adaptive_fit_in(self, width: int, height: int) -> None:
        """Fit in the box, swapping the box orientation when that fits better.

        Images smaller than the box are not upscaled.
        """
        self._resize = Resize(ResizeKind.ADAPTIVE_FIT_IN, width, height)

    def resize(self, width: Dimension, height: Dimension) -> None:
        """Resize the image to the given dimensions.

        Use ``0`` for a proportional side: for a 640x480 image,
        ``resize(320, 0)`` yields 320x240.  Use ``"orig"`` to keep an
        original side: ``resize(320, "orig")`` yields 320x480.

        Args:
            width: Target width, ``0`` or ``"orig"``.
            height: Target height, ``0`` or ``"orig"``.
        """
        self._resize = Resize(ResizeKind.PLAIN, width, height)

    def flip_horizontal(self, flip: bool = True) -> None:
        """Flip the image horizontally.  Has no effect without a resize."""
        self._flip_horizontal = flip

    def flip_vertical(self, flip: bool = True) -> None:
        """Flip the image vertically.  Has no effect without a resize."""
        self._flip_vertical = flip

    def halign(self, halign: str) -> None:
        """Horizontal alignment used when cropping changes the width.

        Args:
            halign: ``"left"``, ``"center"`` or ``"right"``.
        """
        self._halign = halign

    def valign(self, valign: str) -> None:
        """Vertical alignment used when cropping changes the height.

        Args:
            valign: ``"top"``, ``"middle"`` or ``"bottom"``.
        """
        self._valign = valign

    def smart_crop(self, smart_crop: bool) -> None:
        """Enable face and feature detection cropping (overrides alignment)."""
        self._smart_crop = smart_crop

    def metadata_only(self, metadata_only: bool) -> None:
        """Request JSON metadata instead of the thumbnailed image."""
        self._metadata_only = metadata_only

    # ── filters ────────────────────────────────────────────────

    def add_filter(self, filter_name: str, *args: FilterArg) -> None:
        """Append a filter to the transformation.

        Args:
            filter_name: Filter name, e.g. ``"brightness"`` or ``"quality"``.
            *args: Filter arguments; booleans render as ``true``/``false``.

        See https://thumbor.readthedocs.io/en/latest/filters.html
        """
        self._filters.append(Filter(name=filter_name, args=tuple(args)))

    def quality(self, quality: int) -> None:
        """Set output quality (1-100)."""
        self.add_filter("quality", quality)

    def format(self, image_format: str) -> None:
        """Convert to *image_format* (webp, jpeg, png, gif, avif or heic)."""
        self.add_filter("format", image_format)

    def webp(self) -> None:
        """Convert to WebP."""
        self.format("webp")

    def avif(self) -> None:
        """Convert to AVIF (needs server support)."""
        self.format("avif")

    def blur(self, radius: int, sigma: int | None = None) -> None:
        """Apply a gaussian blur, with an optional sigma."""
        if sigma is not None:
            self.add_filter("blur", radius, sigma)
        else:
            self.add_filter("blur", radius)

    def brightness(self, amount: int) -> None:
        """Adjust brightness (-100 to 100)."""
        self.add_filter("brightness", amount)

    def contrast(self, amount: int) -> None:
        """Adjust contrast (-100 to 100)."""
        self.add_filter("contrast", amount)

    def grayscale(self) -> None:
        """Convert to grayscale."""
        self.add_filter("grayscale")

    def rotate(self, angle: int) -> None:
        """Rotate the image (0, 90, 180 or 270 degrees)."""
        self.add_filter("rotate", angle)

    def sharpen(self, amount: float, radius: float, luminance_only: bool = False) -> None:
        """Sharpen the image.

        Args:
            amount: Sharpen amount.
            radius: Sharpen radius.
            luminance_only: Apply to the luminance channel only.
        """
        self.add_filter("sharpen", amount, radius, luminance_only)

    def noise(self, amount: int) -> None:
        """Add noise (0-100)."""
        self.add_filter("noise", amount)

    def watermark(self, image_url: str, x: int = 0, y: int = 0, alpha: int = 0) -> None:
        """Overlay a watermark image.

        Args:
            image_url: URL of the watermark image.
            x: Horizontal position; negative values count from the right.
            y: Vertical position; negative values count from the bottom.
            alpha: Transparency (0-100, 0 is fully visible).
        """
        self.add_filter("watermark", image_url, x, y, alpha)

    def fill(self, color: str) -> None:
        """Fill empty space with a hex colour, ``auto``, ``blur`` or ``transparent``."""
        self.add_filter("fill", color)

    def round_corners(
        self,
        radius: int,
        red: int | None = None,
        green: int | None = None,
        blue: int | None = None,
    ) -> None:
        """Round the image corners.

        The background colour is only emitted when all three components
        are given.
        """
        if red is not None and green is not None and blue is not None:
            self.add_filter("round_corner", radius, red, green, blue)
        else:
            self.add_filter("round_corner", radius)

    def strip_exif(self) -> None:
        """Strip EXIF metadata."""
        self.add_filter("strip_exif")

    def strip_icc(self) -> None:
        """Strip the ICC colour profile."""
        self.add_filter("strip_icc")

    def no_upscale(self) -> None:
        """Prevent upscaling images smaller than the requested size."""
        self.add_filter("no_upscale")

    def saturation(self, amount: float) -> None:
        """Adjust saturation (0.0 to 2.0, 1.0 is unchanged)."""
        self.add_filter("saturation", amount)

    def rgb(self, red: int, green: int, blue: int) -> None:
        """Adjust each RGB channel (-100 to 100)."""
        self.add_filter("rgb", red, green, blue)

    def max_bytes(self, max_bytes: int) -> None:
        """Cap the output file size in bytes."""
        self.add_filter("max_bytes", max_bytes)

    def equalize(self) -> None:
        """Apply histogram equalisation."""
        self.add_filter("equalize")

    def convolution(self, matrix: Sequence[int | float], columns: int, normalize: bool = False) -> None:
        """Apply a convolution matrix.

        Args:
            matrix: Matrix values in row-major order.
            columns: Number of columns in the matrix.
            normalize: Whether the server should normalise the result.
        """
        matrix_str = ";".join(format_filter_arg(value) for value in matrix)
        self.add_filter("convolution", matrix_str, columns, normalize)

    # ── rendering ──────────────────────────────────────────────

    def to_list(self) -> list[str]:
        """Render the commands as ordered URL path segments.

        The order is fixed: meta, trim, crop, resize, halign, valign,
        smart, filters.  Flips are folded into the resize segment and
        are dropped when no resize is set.

        Returns:
            The list of segments, empty when nothing was requested.
        """
        commands: list[str] = []

        if self._metadata_only:
            commands.append("meta")

        if self._trim is not None:
            commands.append(self._trim.render())

        if self._crop is not None:
            commands.append(self._crop.render())

        if self._resize is not None:
            commands.append(
                self._resize.render(
                    flip_horizontal=self._flip_horizontal,
                    flip_vertical=self._flip_vertical,
                )
            )

        if self._halign is not None:
            commands.append(self._halign)

        if self._valign is not None:
            commands.append(self._valign)

        if self._smart_crop:
            commands.append("smart")

        if self._filters:
            commands.append("filters:" + ":".join(f.render() for f in self._filters))

        return commands


OPERATIONS: frozenset[str] = frozenset(
    {
        "trim",
        "crop",
        "fit_in",
        "full_fit_in",
        "adaptive_fit_in",
        "resize",
        "flip_horizontal",
        "flip_vertical",
        "halign",
        "valign",
        "smart_crop",
        "metadata_only",
        "add_filter",
        "quality",
        "format",
        "webp",
        "avif",
        "blur",
        "brightness",
        "contrast",
        "grayscale",
        "rotate",
        "sharpen",
        "noise",
        "watermark",
        "fill",
        "round_corners",
        "strip_exif",
        "strip_icc",
        "no_upscale",
        "saturation",
        "rgb",
        "max_bytes",
        "equalize",
        "convolution",
    }
)

# Operations with no required arguments; a boolean preset value means "apply or skip".
SWITCH_OPERATIONS: frozenset[str] = frozenset(
    {
        "trim",
        "webp",
        "avif",
        "grayscale",
        "strip_exif",
        "strip_icc",
        "no_upscale",
        "equalize",
    }
)
