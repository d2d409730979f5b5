"""Structured value objects that render to Thumbor URL segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

ORIGINAL: Literal["orig"] = "orig"

Dimension = int | Literal["orig"]
FilterArg = str | int | float | bool


class ResizeKind(Enum):
    """Resize strategy, valued by the path prefix Thumbor expects."""

    PLAIN = ""
    FIT_IN = "fit-in/"
    FULL_FIT_IN = "full-fit-in/"
    ADAPTIVE_FIT_IN = "adaptive-fit-in/"

    @property
    def prefix(self) -> str:
        """Return the segment prefix for this resize kind."""
        return self.value


def _flip(value: Dimension, flipped: bool) -> Dimension:
    """Negate a dimension for flipping; ``orig`` has no magnitude and is kept."""
    if not flipped or value == ORIGINAL:
        return value
    return -abs(int(value))


@dataclass(frozen=True)
class Resize:
    """A single resize directive: kind plus target width and height.

    Flipping is not stored here.  It is applied by ``render()`` so the
    stored dimensions stay exactly as the caller gave them.
    """

    kind: ResizeKind
    width: Dimension
    height: Dimension

    def render(self, *, flip_horizontal: bool = False, flip_vertical: bool = False) -> str:
        """Render the resize segment, negating dimensions for requested flips.

        Args:
            flip_horizontal: Negate the width (unless it is ``orig``).
            flip_vertical: Negate the height (unless it is ``orig``).

        Returns:
            The segment, e.g. ``fit-in/-640x480``.
        """
        width = _flip(self.width, flip_horizontal)
        height = _flip(self.height, flip_vertical)
        return f"{self.kind.prefix}{width}x{height}"


@dataclass(frozen=True)
class Crop:
    """Manual crop window given by its top-left and bottom-right corners."""

    left: int
    top: int
    right: int
    bottom: int

    def render(self) -> str:
        """Render as ``LxT:RxB``."""
        return f"{self.left}x{self.top}:{self.right}x{self.bottom}"


@dataclass(frozen=True)
class Trim:
    """Trim request with optional colour source and tolerance."""

    colour_source: str | None = None
    tolerance: int | None = None

    def render(self) -> str:
        """Render as ``trim[:colour_source][:tolerance]``."""
        token = "trim"
        if self.colour_source is not None:
            token += f":{self.colour_source}"
        if self.tolerance is not None:
            token += f":{self.tolerance}"
        return token


def format_filter_arg(value: FilterArg) -> str:
    """Stringify one filter argument.

    Booleans become ``true``/``false``.  Floats with no fractional part
    drop the trailing ``.0`` so ``1.0`` renders as ``1``.

    Args:
        value: A string, integer, float or boolean argument.

    Returns:
        The text placed between the filter's parentheses.
    """
    # bool is a subclass of int, so it must be checked first.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


@dataclass(frozen=True)
class Filter:
    """A named filter invocation with its positional arguments."""

    name: str
    args: tuple[FilterArg, ...] = field(default_factory=tuple)

    def render(self) -> str:
        """Render as ``name(arg1,arg2,...)``."""
        return f"{self.name}({','.join(format_filter_arg(arg) for arg in self.args)})"
