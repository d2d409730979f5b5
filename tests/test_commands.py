"""Tests for CommandSet segment rendering."""

from __future__ import annotations

import pytest

from thumbor_url.commands import OPERATIONS, CommandSet


@pytest.fixture()
def commands() -> CommandSet:
    """Return an empty command set."""
    return CommandSet()


class TestEmptyCommandSet:
    """Tests for a command set with nothing requested."""

    def test_renders_no_segments(self, commands: CommandSet) -> None:
        """An empty command set renders an empty list."""
        assert commands.to_list() == []


class TestSegmentOrder:
    """Tests for the fixed canonical segment order."""

    def test_order_is_independent_of_call_order(self, commands: CommandSet) -> None:
        """Segments come out as meta, trim, crop, resize, halign, valign, smart, filters."""
        commands.quality(80)
        commands.smart_crop(True)
        commands.valign("top")
        commands.halign("left")
        commands.fit_in(640, 480)
        commands.crop(10, 20, 100, 200)
        commands.trim()
        commands.metadata_only(True)

        assert commands.to_list() == [
            "meta",
            "trim",
            "10x20:100x200",
            "fit-in/640x480",
            "left",
            "top",
            "smart",
            "filters:quality(80)",
        ]

    def test_alignment_passes_through_unchecked(self, commands: CommandSet) -> None:
        """Alignment tokens are not validated."""
        commands.halign("sideways")
        assert commands.to_list() == ["sideways"]

    def test_alignment_kept_with_smart_crop(self, commands: CommandSet) -> None:
        """Alignment is still emitted when smart cropping is on."""
        commands.halign("right")
        commands.smart_crop(True)
        assert commands.to_list() == ["right", "smart"]

    def test_disabled_flags_are_omitted(self, commands: CommandSet) -> None:
        """Flags set back to false emit nothing."""
        commands.smart_crop(True)
        commands.smart_crop(False)
        commands.metadata_only(False)
        assert commands.to_list() == []


class TestResize:
    """Tests for the single-valued resize directive."""

    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            ("fit_in", "resize", "300x200"),
            ("resize", "fit_in", "fit-in/300x200"),
            ("full_fit_in", "adaptive_fit_in", "adaptive-fit-in/300x200"),
            ("adaptive_fit_in", "full_fit_in", "full-fit-in/300x200"),
        ],
    )
    def test_last_resize_wins(self, commands: CommandSet, first: str, second: str, expected: str) -> None:
        """Only the last resize call survives."""
        getattr(commands, first)(640, 480)
        getattr(commands, second)(300, 200)

        assert commands.to_list() == [expected]

    def test_resize_with_original_dimension(self, commands: CommandSet) -> None:
        """``orig`` is accepted as a plain resize side."""
        commands.resize(320, "orig")
        assert commands.to_list() == ["320xorig"]


class TestFlip:
    """Tests for flip encoding through negative dimensions."""

    def test_horizontal_flip_on_fit_in(self, commands: CommandSet) -> None:
        """A horizontal flip negates the fit-in width."""
        commands.fit_in(640, 480)
        commands.flip_horizontal()
        assert commands.to_list() == ["fit-in/-640x480"]

    def test_both_flips_on_fit_in(self, commands: CommandSet) -> None:
        """Both flips negate both fit-in sides."""
        commands.fit_in(640, 480)
        commands.flip_horizontal()
        commands.flip_vertical()
        assert commands.to_list() == ["fit-in/-640x-480"]

    def test_vertical_flip_with_original_width(self, commands: CommandSet) -> None:
        """A vertical flip negates the height and leaves ``orig`` alone."""
        commands.resize("orig", 480)
        commands.flip_vertical()
        assert commands.to_list() == ["origx-480"]

    def test_flip_before_resize_still_applies(self, commands: CommandSet) -> None:
        """Flips are applied at render time regardless of call order."""
        commands.flip_horizontal()
        commands.full_fit_in(800, 600)
        assert commands.to_list() == ["full-fit-in/-800x600"]

    def test_flip_without_resize_is_noop(self, commands: CommandSet) -> None:
        """Flips with no resize produce no segment."""
        commands.flip_horizontal()
        commands.flip_vertical()
        assert commands.to_list() == []

    def test_flip_can_be_turned_off(self, commands: CommandSet) -> None:
        """``flip_horizontal(False)`` cancels an earlier flip."""
        commands.resize(100, 100)
        commands.flip_horizontal()
        commands.flip_horizontal(False)
        assert commands.to_list() == ["100x100"]

    def test_repeated_renders_are_identical(self, commands: CommandSet) -> None:
        """Rendering twice gives the same result."""
        commands.adaptive_fit_in(640, 480)
        commands.flip_vertical()
        assert commands.to_list() == commands.to_list() == ["adaptive-fit-in/640x-480"]


class TestFilters:
    """Tests for filter accumulation and the convenience wrappers."""

    def test_filters_share_one_segment_in_call_order(self, commands: CommandSet) -> None:
        """All filters render in a single colon-joined segment."""
        commands.add_filter("brightness", 50)
        commands.add_filter("contrast", 20)
        commands.add_filter("brightness", 10)
        assert commands.to_list() == ["filters:brightness(50):contrast(20):brightness(10)"]

    def test_mixed_argument_kinds(self, commands: CommandSet) -> None:
        """Booleans, floats, ints and strings are stringified per kind."""
        commands.add_filter("custom", "a", 1, 2.5, False)
        assert commands.to_list() == ["filters:custom(a,1,2.5,false)"]

    def test_out_of_range_values_pass_through(self, commands: CommandSet) -> None:
        """Quality outside 1-100 is not rejected."""
        commands.quality(150)
        assert commands.to_list() == ["filters:quality(150)"]

    @pytest.mark.parametrize(
        ("operation", "args", "expected"),
        [
            ("quality", (80,), "quality(80)"),
            ("format", ("png",), "format(png)"),
            ("webp", (), "format(webp)"),
            ("avif", (), "format(avif)"),
            ("blur", (5,), "blur(5)"),
            ("blur", (5, 2), "blur(5,2)"),
            ("brightness", (-10,), "brightness(-10)"),
            ("contrast", (20,), "contrast(20)"),
            ("grayscale", (), "grayscale()"),
            ("rotate", (90,), "rotate(90)"),
            ("sharpen", (2.0, 1.5, True), "sharpen(2,1.5,true)"),
            ("sharpen", (0.5, 0.5), "sharpen(0.5,0.5,false)"),
            ("noise", (40,), "noise(40)"),
            ("watermark", ("http://x.com/w.png",), "watermark(http://x.com/w.png,0,0,0)"),
            ("watermark", ("w.png", -10, -10, 50), "watermark(w.png,-10,-10,50)"),
            ("fill", ("blur",), "fill(blur)"),
            ("round_corners", (20,), "round_corner(20)"),
            ("round_corners", (20, 255, 255, 255), "round_corner(20,255,255,255)"),
            ("round_corners", (20, 255, 255), "round_corner(20)"),
            ("strip_exif", (), "strip_exif()"),
            ("strip_icc", (), "strip_icc()"),
            ("no_upscale", (), "no_upscale()"),
            ("saturation", (1.5,), "saturation(1.5)"),
            ("rgb", (10, -20, 30), "rgb(10,-20,30)"),
            ("max_bytes", (75000,), "max_bytes(75000)"),
            ("equalize", (), "equalize()"),
            ("convolution", ([1, 2, 1, 2, 4, 2, 1, 2, 1], 3, True), "convolution(1;2;1;2;4;2;1;2;1,3,true)"),
        ],
    )
    def test_convenience_filters(
        self,
        commands: CommandSet,
        operation: str,
        args: tuple[object, ...],
        expected: str,
    ) -> None:
        """Each convenience method appends the expected filter."""
        getattr(commands, operation)(*args)
        assert commands.to_list() == [f"filters:{expected}"]


class TestOperations:
    """Tests for the closed operation set."""

    def test_every_operation_is_a_method(self) -> None:
        """Each listed operation name exists on ``CommandSet``."""
        for name in OPERATIONS:
            assert callable(getattr(CommandSet, name))

    def test_rendering_is_not_an_operation(self) -> None:
        """``to_list`` is not exposed as a transformation."""
        assert "to_list" not in OPERATIONS
