"""CLI entry point — click group for building and signing Thumbor URLs."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import click

from thumbor_url.core.datatypes import ORIGINAL, Dimension
from thumbor_url.core.exceptions import ThumborUrlError

_SIZE_RE = re.compile(r"^(-?\d+|orig)x(-?\d+|orig)$")
_FILTER_RE = re.compile(r"^([A-Za-z_][\w-]*)(?:\((.*)\))?$")


def _parse_side(raw: str) -> Dimension:
    return raw if raw == ORIGINAL else int(raw)


def _parse_size(value: str, *, allow_original: bool) -> tuple[Dimension, Dimension]:
    """Parse a ``WxH`` option value.

    Args:
        value: Text such as ``640x480`` or ``origx480``.
        allow_original: Whether either side may be ``orig``.

    Returns:
        The ``(width, height)`` pair.

    Raises:
        click.BadParameter: If the value is not a valid size.
    """
    match = _SIZE_RE.match(value)
    if match is None or (not allow_original and ORIGINAL in match.groups()):
        expected = "WxH (sides may be 'orig')" if allow_original else "WxH"
        msg = f"'{value}' is not a valid size, expected {expected}"
        raise click.BadParameter(msg)
    return _parse_side(match.group(1)), _parse_side(match.group(2))


def _parse_crop(value: str) -> tuple[int, int, int, int]:
    """Parse a ``LEFT,TOP,RIGHT,BOTTOM`` crop window."""
    parts = value.split(",")
    try:
        left, top, right, bottom = (int(part) for part in parts)
    except ValueError:
        msg = f"'{value}' is not a valid crop, expected LEFT,TOP,RIGHT,BOTTOM"
        raise click.BadParameter(msg) from None
    return left, top, right, bottom


def _parse_filter(value: str) -> tuple[str, list[str]]:
    """Split ``name(a,b)`` into the filter name and its raw arguments."""
    match = _FILTER_RE.match(value.strip())
    if match is None:
        msg = f"'{value}' is not a valid filter, expected NAME or NAME(ARG,...)"
        raise click.BadParameter(msg)
    name, raw_args = match.groups()
    args = raw_args.split(",") if raw_args else []
    return name, args


@click.group()
@click.version_option(package_name="thumbor-url")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Thumbor URL — build and sign Thumbor image URLs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command(name="url")
@click.argument("image")
@click.option("-s", "--server", default=None, help="Thumbor server URL (default: from config).")
@click.option("-k", "--key", default=None, help="Signing key (default: from config).")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Configuration directory (default: ~/.config/thumbor-url).",
)
@click.option("-p", "--preset", default=None, help="Named preset to apply before other options.")
@click.option("--meta", is_flag=True, default=False, help="Request JSON metadata instead of the image.")
@click.option("--trim", "trim_flag", is_flag=True, default=False, help="Trim surrounding space.")
@click.option("--crop", default=None, help="Crop window as LEFT,TOP,RIGHT,BOTTOM.")
@click.option("--fit-in", "fit_in", default=None, help="Fit in a WxH box.")
@click.option("--full-fit-in", "full_fit_in", default=None, help="Fit a WxH box by the smallest side.")
@click.option("--adaptive-fit-in", "adaptive_fit_in", default=None, help="Adaptive fit in a WxH box.")
@click.option("--resize", default=None, help="Resize to WxH (sides may be 'orig').")
@click.option("--flip-horizontal", is_flag=True, default=False, help="Flip horizontally (needs a resize).")
@click.option("--flip-vertical", is_flag=True, default=False, help="Flip vertically (needs a resize).")
@click.option("--halign", default=None, help="Horizontal alignment (left, center or right; not checked).")
@click.option("--valign", default=None, help="Vertical alignment (top, middle or bottom; not checked).")
@click.option("--smart", is_flag=True, default=False, help="Enable smart cropping.")
@click.option("-f", "--filter", "filters", multiple=True, help="Filter as NAME(ARG,...); repeatable, order kept.")
def url_cmd(
    image: str,
    server: str | None,
    key: str | None,
    config_dir: Path | None,
    preset: str | None,
    meta: bool,
    trim_flag: bool,
    crop: str | None,
    fit_in: str | None,
    full_fit_in: str | None,
    adaptive_fit_in: str | None,
    resize: str | None,
    flip_horizontal: bool,
    flip_vertical: bool,
    halign: str | None,
    valign: str | None,
    smart: bool,
    filters: tuple[str, ...],
) -> None:
    """Print the Thumbor URL for IMAGE.

    Only one of --fit-in, --full-fit-in, --adaptive-fit-in and --resize
    takes effect; the last one in that list wins.
    """
    from thumbor_url.core.config import ConfigManager
    from thumbor_url.thumbor import Thumbor

    config = ConfigManager(config_dir=config_dir)
    try:
        config.load()
        thumbor = Thumbor(server or config.server, key if key is not None else config.secret, config=config)
        builder = thumbor.url(image, preset=preset)
    except ThumborUrlError as exc:
        raise click.ClickException(str(exc)) from exc

    if meta:
        builder.metadata_only(True)
    if trim_flag:
        builder.trim()
    if crop is not None:
        builder.crop(*_parse_crop(crop))
    if fit_in is not None:
        builder.fit_in(*_parse_size(fit_in, allow_original=False))
    if full_fit_in is not None:
        builder.full_fit_in(*_parse_size(full_fit_in, allow_original=False))
    if adaptive_fit_in is not None:
        builder.adaptive_fit_in(*_parse_size(adaptive_fit_in, allow_original=False))
    if resize is not None:
        builder.resize(*_parse_size(resize, allow_original=True))
    if flip_horizontal:
        builder.flip_horizontal()
    if flip_vertical:
        builder.flip_vertical()
    if halign is not None:
        builder.halign(halign)
    if valign is not None:
        builder.valign(valign)
    if smart:
        builder.smart_crop(True)
    for raw_filter in filters:
        name, args = _parse_filter(raw_filter)
        builder.add_filter(name, *args)

    click.echo(str(builder))


@cli.command(name="sign")
@click.argument("path")
@click.option("-k", "--key", required=True, help="Signing key.")
def sign_cmd(path: str, key: str) -> None:
    """Print the URL-safe HMAC-SHA1 signature of PATH."""
    from thumbor_url.url import sign

    click.echo(sign(path, key))
