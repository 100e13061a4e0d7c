"""Panel - a box-model rectangle with a border and reflowed text.

A panel derives its geometry from its parent every time something changes:

    width  = parent.width  - margin.inline - border.inline - padding.inline
    height = parent.height - margin.block  - border.block  - padding.block

clamped to ``[0, max_width]`` / ``[0, max_height]``. The content origin is the
parent's content origin shifted by the left/top margin, border and padding.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from tui_panels.core import ansi
from tui_panels.core.color import Color, ColorLike
from tui_panels.core.events import DispatchResult, is_suppressed
from tui_panels.core.style import RESET, Style
from tui_panels.errors import ConfigurationError
from tui_panels.layout.border_box import BorderBox
from tui_panels.layout.borders import resolve_border_style
from tui_panels.layout.metric_box import MetricBox, MetricLike
from tui_panels.layout.node import LayoutNode
from tui_panels.layout.tiler import tile_border
from tui_panels.text.reflow import reflow

logger = logging.getLogger(__name__)

SCROLL_DIRECTIONS = ("down", "up")

Limit = Union[int, float]


def _minimum(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}", value)
    return value


def _maximum(value, name: str) -> Limit:
    if value == math.inf and not isinstance(value, bool):
        return math.inf
    return _minimum(value, name)


def _present(width: int, height: int) -> bool:
    return width > 0 and height > 0


def _segment(width: int, height: int, fill, glyphs, **neighbours) -> list[str]:
    """Tile one border segment, keeping one (possibly empty) row per cell row."""
    return tile_border(width, height, fill, glyphs, **neighbours) or [''] * max(0, height)


class Panel(LayoutNode):
    """
    A node in the layout tree.

    Events:
        resize(width, height): content size changed
        redraw(): appearance changed, geometry did not
        draw(): about to draw; prevent_default() skips the panel
        draw_border(): about to draw the border; prevent_default() skips it

    With ``auto_draw`` the panel draws itself after a ``resize`` or
    ``redraw`` that no listener default-prevented.
    """

    def __init__(
        self,
        parent: LayoutNode,
        *,
        margin: MetricLike = 0,
        padding: MetricLike = 0,
        border=1,
        min_width: int = 1,
        min_height: int = 1,
        max_width: Limit = math.inf,
        max_height: Limit = math.inf,
        text: str = "",
        word_wrap: bool = False,
        tab_size: int = 4,
        scroll: float = 0,
        scroll_direction: str = "down",
        color: ColorLike = "default",
        bg_color: ColorLike = "default",
        auto_draw: bool = False,
    ) -> None:
        super().__init__()
        if not isinstance(parent, LayoutNode):
            raise ConfigurationError(f"Panel parent must be a layout node, got {type(parent).__name__}", parent)

        self._parent = parent
        self._margin = MetricBox.coerce(margin)
        self._padding = MetricBox.coerce(padding)
        self._border = BorderBox.coerce(border)
        self._min_width = _minimum(min_width, "min_width")
        self._min_height = _minimum(min_height, "min_height")
        self._max_width = _maximum(max_width, "max_width")
        self._max_height = _maximum(max_height, "max_height")
        self._text = self._check_text(text)
        self._word_wrap = bool(word_wrap)
        self._tab_size = self._check_tab_size(tab_size)
        self._scroll_direction = self._check_direction(scroll_direction)
        self._color = Color.parse(color)
        self._bg_color = Color.parse(bg_color)
        self.auto_draw = auto_draw

        self._width = 0
        self._height = 0
        self._lines: list[str] = [""]
        self._update_size()
        self._update_text()
        self._scroll: float = 0
        self._scroll = self._clamp_scroll(scroll)

        parent.on("resize", self._on_parent_resize)
        parent.on("redraw", self._on_parent_redraw)
        self._margin.on("change", self._on_box_change)
        self._padding.on("change", self._on_box_change)
        self._border.on("resize", self._on_box_change)
        self._border.on("redraw", self._on_border_redraw)
        parent._adopt(self)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_text(value) -> str:
        if not isinstance(value, str):
            raise ConfigurationError(f"Panel text must be a string, got {type(value).__name__}", value)
        return value

    @staticmethod
    def _check_tab_size(value) -> int:
        return _minimum(value, "tab_size")

    @staticmethod
    def _check_direction(value) -> str:
        if value not in SCROLL_DIRECTIONS:
            raise ConfigurationError(f"Scroll direction must be 'down' or 'up', got {value!r}", value)
        return value

    # -------------------------------------------------------------------------
    # Change handling
    # -------------------------------------------------------------------------

    def _update_size(self) -> bool:
        """Recompute the content size. Returns True if it changed."""
        parent = self._parent
        width = parent.width - self._margin.inline - self._border.inline - self._padding.inline
        height = parent.height - self._margin.block - self._border.block - self._padding.block
        width = max(0, min(self._max_width, width))
        height = max(0, min(self._max_height, height))

        changed = (width, height) != (self._width, self._height)
        self._width = width
        self._height = height
        return changed

    def _update_text(self) -> None:
        self._lines = reflow(
            self._text,
            self._width,
            word_wrap=self._word_wrap,
            tab_size=self._tab_size,
            default_style=self.style.sgr(),
        )

    def _relayout(self, own_change: bool) -> None:
        if self._update_size():
            self._update_text()
            self._scroll = self._clamp_scroll(self._scroll)
            logger.debug("Panel resized to %dx%d", self._width, self._height)
            self._notify("resize", self._width, self._height)
        elif own_change:
            # Same size, but the origin may have moved
            self._notify("redraw")

    def _notify(self, key: str, *args) -> DispatchResult:
        result = self.emit(key, *args)
        if self.auto_draw and result.default_allowed and not is_suppressed(self):
            self.draw()
        return result

    def _on_parent_resize(self, event, *args) -> None:
        self._relayout(own_change=False)

    def _on_parent_redraw(self, event) -> None:
        self._notify("redraw")

    def _on_box_change(self, event) -> None:
        self._relayout(own_change=True)

    def _on_border_redraw(self, event) -> None:
        self._notify("redraw")

    # -------------------------------------------------------------------------
    # Tree
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> LayoutNode:
        return self._parent

    @property
    def terminal(self):
        return self._parent.terminal

    def destroy(self) -> None:
        """Detach from the parent and stop reacting to own boxes."""
        if self._destroyed:
            return
        self._parent.off("resize", self._on_parent_resize)
        self._parent.off("redraw", self._on_parent_redraw)
        self._margin.off("change", self._on_box_change)
        self._padding.off("change", self._on_box_change)
        self._border.off("resize", self._on_box_change)
        self._border.off("redraw", self._on_border_redraw)
        self._parent._release(self)
        super().destroy()

    # -------------------------------------------------------------------------
    # Box model
    # -------------------------------------------------------------------------

    @property
    def margin(self) -> MetricBox:
        return self._margin

    @property
    def padding(self) -> MetricBox:
        return self._padding

    @property
    def border(self) -> BorderBox:
        return self._border

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def abs_x(self) -> int:
        return self._parent.abs_x + self._margin.left + self._border.left.width + self._padding.left

    @property
    def abs_y(self) -> int:
        return self._parent.abs_y + self._margin.top + self._border.top.width + self._padding.top

    @property
    def border_x(self) -> int:
        """Screen column of the outer border edge."""
        return self._parent.abs_x + self._margin.left

    @property
    def border_y(self) -> int:
        return self._parent.abs_y + self._margin.top

    @property
    def padded_width(self) -> int:
        return self._width + self._padding.inline

    @property
    def padded_height(self) -> int:
        return self._height + self._padding.block

    @property
    def min_width(self) -> int:
        return self._min_width

    @min_width.setter
    def min_width(self, value: int) -> None:
        value = _minimum(value, "min_width")
        if value != self._min_width:
            self._min_width = value
            self._notify("redraw")

    @property
    def min_height(self) -> int:
        return self._min_height

    @min_height.setter
    def min_height(self, value: int) -> None:
        value = _minimum(value, "min_height")
        if value != self._min_height:
            self._min_height = value
            self._notify("redraw")

    @property
    def max_width(self) -> Limit:
        return self._max_width

    @max_width.setter
    def max_width(self, value: Limit) -> None:
        value = _maximum(value, "max_width")
        if value != self._max_width:
            self._max_width = value
            self._relayout(own_change=True)

    @property
    def max_height(self) -> Limit:
        return self._max_height

    @max_height.setter
    def max_height(self, value: Limit) -> None:
        value = _maximum(value, "max_height")
        if value != self._max_height:
            self._max_height = value
            self._relayout(own_change=True)

    @property
    def drawable(self) -> bool:
        """False while the content area is smaller than the minimum size."""
        return self._width >= self._min_width and self._height >= self._min_height

    # -------------------------------------------------------------------------
    # Appearance
    # -------------------------------------------------------------------------

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: ColorLike) -> None:
        value = Color.parse(value)
        if value != self._color:
            self._color = value
            self._update_text()
            self._notify("redraw")

    @property
    def bg_color(self) -> Color:
        return self._bg_color

    @bg_color.setter
    def bg_color(self, value: ColorLike) -> None:
        value = Color.parse(value)
        if value != self._bg_color:
            self._bg_color = value
            self._update_text()
            self._notify("redraw")

    @property
    def style(self) -> Style:
        """Text style of the panel content."""
        return Style(color=self._color, bg_color=self._bg_color)

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        value = self._check_text(value)
        if value != self._text:
            self._text = value
            self._text_changed()

    @property
    def word_wrap(self) -> bool:
        return self._word_wrap

    @word_wrap.setter
    def word_wrap(self, value: bool) -> None:
        value = bool(value)
        if value != self._word_wrap:
            self._word_wrap = value
            self._text_changed()

    @property
    def tab_size(self) -> int:
        return self._tab_size

    @tab_size.setter
    def tab_size(self, value: int) -> None:
        value = self._check_tab_size(value)
        if value != self._tab_size:
            self._tab_size = value
            self._text_changed()

    def _text_changed(self) -> None:
        self._update_text()
        self._scroll = self._clamp_scroll(self._scroll)
        self._notify("redraw")

    @property
    def lines(self) -> list[str]:
        """Reflowed text lines."""
        return list(self._lines)

    # -------------------------------------------------------------------------
    # Scrolling
    # -------------------------------------------------------------------------

    @property
    def scroll(self) -> float:
        """Either a proportion in [0, 1) or a line index."""
        return self._scroll

    @scroll.setter
    def scroll(self, value: float) -> None:
        value = self._clamp_scroll(value)
        if value != self._scroll:
            self._scroll = value
            self._notify("redraw")

    @property
    def max_scroll(self) -> int:
        return max(0, len(self._lines) - self._height)

    def _clamp_scroll(self, value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            raise ConfigurationError(f"Scroll must be a number, got {value!r}", value)
        value = max(0, value)
        if value >= 1:
            value = min(round(value), self.max_scroll)
        return value

    @property
    def scroll_direction(self) -> str:
        return self._scroll_direction

    @scroll_direction.setter
    def scroll_direction(self, value: str) -> None:
        value = self._check_direction(value)
        if value != self._scroll_direction:
            self._scroll_direction = value
            self._notify("redraw")

    @property
    def scroll_offset(self) -> int:
        """Index of the first visible line."""
        overflow = self.max_scroll
        if self._scroll < 1:
            offset = round(self._scroll * overflow)
        else:
            offset = min(int(self._scroll), overflow)
        if self._scroll_direction == "up":
            return overflow - offset
        return offset

    def visible_lines(self) -> list[str]:
        start = self.scroll_offset
        return self._lines[start:start + self._height]

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self) -> Panel:
        """Draw the panel and then its children."""
        if self._destroyed or self.emit("draw").default_prevented:
            return self

        if self.drawable:
            self.draw_background()
            if not self.emit("draw_border").default_prevented:
                self.draw_border()
            self.draw_text()

        for child in self.children:
            child.draw()
        return self

    def _write_rows(self, x: int, y: int, rows: list[str]) -> None:
        if not rows:
            return
        frame = ''.join(ansi.cursor_position(y + i, x) + row for i, row in enumerate(rows))
        self.terminal.save_cursor().write(frame + RESET).restore_cursor()

    def draw_background(self) -> Panel:
        """Fill the padded content area with the background color."""
        if not self.drawable:
            return self
        fill = Style(bg_color=self._bg_color).sgr() + ' ' * self.padded_width
        x = self.abs_x - self._padding.left
        y = self.abs_y - self._padding.top
        self._write_rows(x, y, [fill] * self.padded_height)
        return self

    def draw_border(self) -> Panel:
        """Tile and write the eight border segments."""
        if not self.drawable:
            return self

        border = self._border
        top, right, bottom, left = border.top, border.right, border.bottom, border.left
        tw, rw, bw, lw = top.width, right.width, bottom.width, left.width
        if not (tw or rw or bw or lw):
            return self
        pw, ph = self.padded_width, self.padded_height

        top_left = _segment(lw, tw, top.fill, resolve_border_style(top.corner_style("left")),
                            right=_present(pw, tw), bottom=_present(lw, ph))
        top_edge = _segment(pw, tw, top.fill, top.glyphs,
                            left=_present(lw, tw), right=_present(rw, tw))
        top_right = _segment(rw, tw, top.fill, resolve_border_style(top.corner_style("right")),
                             bottom=_present(rw, ph), left=_present(pw, tw))
        left_edge = _segment(lw, ph, left.fill, left.glyphs,
                             top=_present(lw, tw), bottom=_present(lw, bw))
        right_edge = _segment(rw, ph, right.fill, right.glyphs,
                              top=_present(rw, tw), bottom=_present(rw, bw))
        bottom_left = _segment(lw, bw, bottom.fill, resolve_border_style(bottom.corner_style("left")),
                               top=_present(lw, ph), right=_present(pw, bw))
        bottom_edge = _segment(pw, bw, bottom.fill, bottom.glyphs,
                               left=_present(lw, bw), right=_present(rw, bw))
        bottom_right = _segment(rw, bw, bottom.fill, resolve_border_style(bottom.corner_style("right")),
                                top=_present(rw, ph), left=_present(pw, bw))

        def paint(color: Color) -> str:
            return Style(color=color, bg_color=self._bg_color).sgr()

        top_colors = (paint(top.corner_color("left")), paint(top.color), paint(top.corner_color("right")))
        bottom_colors = (paint(bottom.corner_color("left")), paint(bottom.color), paint(bottom.corner_color("right")))
        left_color, right_color = paint(left.color), paint(right.color)

        rows = [
            top_colors[0] + a + top_colors[1] + b + top_colors[2] + c
            for a, b, c in zip(top_left, top_edge, top_right)
        ]
        rows += [
            left_color + a + ansi.cursor_right(pw) + right_color + b
            for a, b in zip(left_edge, right_edge)
        ]
        rows += [
            bottom_colors[0] + a + bottom_colors[1] + b + bottom_colors[2] + c
            for a, b, c in zip(bottom_left, bottom_edge, bottom_right)
        ]
        self._write_rows(self.border_x, self.border_y, rows)
        return self

    def draw_text(self) -> Panel:
        """Write the visible lines at the content origin."""
        if not self.drawable:
            return self
        prefix = self.style.sgr()
        self._write_rows(self.abs_x, self.abs_y, [prefix + line for line in self.visible_lines()])
        return self

    def __repr__(self) -> str:
        return f"Panel({self._width}x{self._height} at {self.abs_x},{self.abs_y})"
