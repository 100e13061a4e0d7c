"""Tests for metric boxes, border styles and border boxes."""

import pytest

from tui_panels.core.color import Color
from tui_panels.core.events import EventEmitter
from tui_panels.errors import BorderStyleError, ConfigurationError
from tui_panels.layout.border_box import BorderBox, BorderEdge
from tui_panels.layout.borders import BORDER_STYLES, BorderFill, BorderGlyphs, resolve_border_style
from tui_panels.layout.metric_box import MetricBox


def record(emitter: EventEmitter, *keys: str) -> list:
    """Collect the keys emitted on ``emitter``."""
    seen: list = []
    for key in keys:
        emitter.on(key, lambda event: seen.append(event.type))
    return seen


class TestMetricBox:
    """Tests for MetricBox."""

    def test_css_shorthand(self) -> None:
        assert MetricBox().as_tuple() == (0, 0, 0, 0)
        assert MetricBox(1).as_tuple() == (1, 1, 1, 1)
        assert MetricBox(1, 2).as_tuple() == (1, 2, 1, 2)
        assert MetricBox(1, 2, 3).as_tuple() == (1, 2, 3, 2)
        assert MetricBox(1, 2, 3, 4).as_tuple() == (1, 2, 3, 4)

    def test_coerce(self) -> None:
        box = MetricBox(1)
        assert MetricBox.coerce(box) is box
        assert MetricBox.coerce(2).as_tuple() == (2, 2, 2, 2)
        assert MetricBox.coerce((1, 2)).as_tuple() == (1, 2, 1, 2)
        assert MetricBox.coerce({"left": 3}).as_tuple() == (0, 0, 0, 3)

    def test_grouped_sums(self) -> None:
        box = MetricBox(1, 2, 3, 4)
        assert box.inline == 6
        assert box.block == 4
        assert box.all == 10

    def test_change_emitted_once_per_write(self) -> None:
        box = MetricBox()
        seen = record(box, "change")
        box.top = 1
        box.top = 1
        box.left = 2
        assert seen == ["change", "change"]

    def test_grouped_write_coalesces(self) -> None:
        box = MetricBox()
        seen = record(box, "change")
        box.inline = 2
        assert seen == ["change"]
        assert (box.left, box.right) == (2, 2)

        box.block = (1, 3)
        assert seen == ["change", "change"]
        assert (box.top, box.bottom) == (1, 3)

        box.all = (1, 2, 3, 4)
        assert len(seen) == 3
        assert box.as_tuple() == (1, 2, 3, 4)

    def test_grouped_write_without_change_is_silent(self) -> None:
        box = MetricBox(1)
        seen = record(box, "change")
        box.all = 1
        box.inline = (1, 1)
        assert seen == []

    def test_update(self) -> None:
        box = MetricBox()
        seen = record(box, "change")
        assert box.update(top=1, bottom=2) is True
        assert box.update(top=1) is False
        assert seen == ["change"]

    def test_all_with_two_values(self) -> None:
        box = MetricBox()
        box.all = (1, 2)
        assert box.as_tuple() == (1, 2, 1, 2)

    @pytest.mark.parametrize("value", [-1, 1.5, "2", True, None])
    def test_invalid_values(self, value) -> None:
        with pytest.raises(ConfigurationError):
            MetricBox(value)
        box = MetricBox()
        with pytest.raises(ConfigurationError):
            box.top = value

    def test_invalid_group_write_changes_nothing(self) -> None:
        box = MetricBox(1)
        with pytest.raises(ConfigurationError):
            box.all = (2, 2, -1)
        assert box.as_tuple() == (1, 1, 1, 1)

    def test_coerce_rejects_unknown_sides(self) -> None:
        with pytest.raises(ConfigurationError):
            MetricBox.coerce({"middle": 1})
        with pytest.raises(ConfigurationError):
            MetricBox.coerce((1, 2, 3, 4, 5))


class TestBorderStyles:
    """Tests for glyph sets."""

    def test_named_styles(self) -> None:
        assert set(BORDER_STYLES) == {"line", "thick", "double", "round", "solid", "none"}
        assert resolve_border_style("double").top_left == "╔"
        assert resolve_border_style("round").bottom_right == "╯"

    def test_table_layout(self) -> None:
        table = BorderGlyphs().table
        assert len(table) == 16
        assert table[0] == " "
        assert table[0b0101] == "─"
        assert table[0b1010] == "│"
        assert table[0b0110] == "┌"
        assert table[0b1111] == "┼"

    def test_custom_glyphs(self) -> None:
        glyphs = BorderGlyphs.uniform("#")
        assert resolve_border_style(glyphs) is glyphs
        assert set(glyphs.table[1:]) == {"#"}

    def test_unknown_style(self) -> None:
        with pytest.raises(BorderStyleError):
            resolve_border_style("dotted")

    def test_malformed_glyphs(self) -> None:
        with pytest.raises(BorderStyleError):
            BorderGlyphs(horizontal="--")

    def test_fill_parse(self) -> None:
        assert BorderFill.parse("lines") is BorderFill.LINES
        with pytest.raises(ConfigurationError):
            BorderFill.parse("dashed")


class TestBorderEdge:
    """Tests for resize/redraw classification on one edge."""

    def test_defaults(self) -> None:
        edge = BorderEdge()
        assert edge.width == 1
        assert edge.style == "line"
        assert edge.color == Color.DEFAULT
        assert edge.fill is BorderFill.SOLID

    def test_width_change_is_resize(self) -> None:
        edge = BorderEdge()
        seen = record(edge, "resize", "redraw")
        edge.width = 1
        assert seen == []
        edge.width = 2
        assert seen == ["resize"]

    def test_appearance_change_is_redraw(self) -> None:
        edge = BorderEdge()
        seen = record(edge, "resize", "redraw")
        edge.color = "red"
        edge.style = "thick"
        edge.fill = "lines"
        assert seen == ["redraw", "redraw", "redraw"]

    def test_set_coalesces_to_strongest(self) -> None:
        edge = BorderEdge()
        seen = record(edge, "resize", "redraw")
        assert edge.set(width=3, color="red", style="double") == "resize"
        assert seen == ["resize"]
        assert edge.set(color="blue", fill="lines") == "redraw"
        assert seen == ["resize", "redraw"]
        assert edge.set(width=3) is None
        assert seen == ["resize", "redraw"]

    def test_invalid_values(self) -> None:
        edge = BorderEdge()
        with pytest.raises(ConfigurationError):
            edge.width = -1
        with pytest.raises(BorderStyleError):
            edge.style = "dotted"
        with pytest.raises(ConfigurationError):
            edge.color = "nope"
        with pytest.raises(ConfigurationError):
            edge.style = None

    def test_invalid_set_changes_nothing(self) -> None:
        edge = BorderEdge()
        with pytest.raises(ConfigurationError):
            edge.set(width=2, color="nope")
        assert edge.width == 1


class TestBorderBox:
    """Tests for the four-edge border."""

    def test_relays_edge_events(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.left.width = 2
        border.top.color = "green"
        assert seen == ["resize", "redraw"]

    def test_same_width_emits_nothing(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.top = 1
        assert seen == []

    def test_color_change_is_single_redraw(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.right = (None, None, "magenta")
        assert seen == ["redraw"]

    def test_tuple_setter(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.bottom = (2, "round", "yellow", "lines")
        assert seen == ["resize"]
        assert border.bottom.width == 2
        assert border.bottom.style == "round"
        assert border.bottom.fill is BorderFill.LINES

    def test_group_setters_emit_once(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.inline = 2
        assert seen == ["resize"]
        assert border.inline == 4

        border.all = (None, "thick")
        assert seen == ["resize", "redraw"]
        assert all(edge.style == "thick" for edge in border.edges)

        border.block = 2
        assert seen == ["resize", "redraw", "resize"]
        assert border.all == 8

    def test_corner_overrides(self) -> None:
        border = BorderBox()
        seen = record(border, "resize", "redraw")
        border.top.left = ("round", "red")
        assert seen == ["redraw"]
        assert border.top.corner_style("left") == "round"
        assert border.top.corner_color("left") == Color.parse("red")
        assert border.top.corner_style("right") == "line"
        assert border.top.corner_color("right") == Color.DEFAULT

    def test_corner_color_alone(self) -> None:
        border = BorderBox()
        border.bottom.right.color = "blue"
        assert border.bottom.corner_color("right") == Color.parse("blue")
        assert border.bottom.corner_style("right") == "line"

    def test_corner_color_keeps_style_override(self) -> None:
        border = BorderBox()
        border.top.left = ("round", "red")
        border.top.left = {"color": "blue"}
        assert border.top.corner_style("left") == "round"
        assert border.top.corner_color("left") == Color.parse("blue")
        border.top.left.style = None
        assert border.top.corner_style("left") == "line"

    def test_coerce(self) -> None:
        assert BorderBox.coerce(None).all == 0
        assert BorderBox.coerce(2).all == 8

        border = BorderBox.coerce({
            "style": "double",
            "top": {"width": 3, "left": ("round", "red")},
            "bottom": 0,
        })
        assert border.top.width == 3
        assert border.bottom.width == 0
        assert border.left.style == "double"
        assert border.top.corner_style("left") == "round"

        existing = BorderBox()
        assert BorderBox.coerce(existing) is existing

    def test_coerce_rejects_unknown_options(self) -> None:
        with pytest.raises(ConfigurationError):
            BorderBox.coerce({"radius": 2})
        with pytest.raises(ConfigurationError):
            BorderBox.coerce({"left": {"right": "round"}})
