"""Border box - per-edge width, glyph style, fill and color.

Changes are classified so consumers know how much work to redo:

- ``resize``: an edge width changed, layout must be recomputed
- ``redraw``: style, color or fill changed, only repainting is needed

When one call changes both, a single ``resize`` is emitted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional, Union

from tui_panels.core.color import Color, ColorLike
from tui_panels.core.events import EventEmitter, suppressing
from tui_panels.layout.borders import BorderFill, BorderGlyphs, BorderStyle, resolve_border_style
from tui_panels.errors import ConfigurationError

EDGE_OPTIONS = ("width", "style", "color", "fill")


def _width(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Border width must be an integer, got {value!r}", value)
    if value < 0:
        raise ConfigurationError(f"Border width cannot be negative, got {value}", value)
    return value


def _strongest(captured: list) -> Optional[str]:
    if "resize" in captured:
        return "resize"
    if captured:
        return "redraw"
    return None


class BorderCorner(EventEmitter):
    """Optional style and color override for one corner of a border."""

    _optional = True

    def __init__(self, style: Optional[BorderStyle] = None, color: Optional[ColorLike] = None):
        super().__init__()
        self._style = self._check_style(style)
        self._color = self._check_color(color)

    def _check_style(self, style):
        if style is None:
            if not self._optional:
                raise ConfigurationError("Border style cannot be None")
            return None
        resolve_border_style(style)
        return style

    def _check_color(self, color):
        if color is None:
            if not self._optional:
                raise ConfigurationError("Border color cannot be None")
            return None
        return Color.parse(color)

    @property
    def style(self) -> Optional[BorderStyle]:
        return self._style

    @style.setter
    def style(self, value: Optional[BorderStyle]) -> None:
        value = self._check_style(value)
        if self._style != value:
            self._style = value
            self.emit("redraw")

    @property
    def color(self) -> Optional[Color]:
        return self._color

    @color.setter
    def color(self, value: Optional[ColorLike]) -> None:
        value = self._check_color(value)
        if self._color != value:
            self._color = value
            self.emit("redraw")


class BorderEdge(BorderCorner):
    """One side of a border."""

    _optional = False

    def __init__(
        self,
        width: int = 1,
        style: BorderStyle = "line",
        color: ColorLike = "default",
        fill: Union[BorderFill, str] = BorderFill.SOLID,
    ):
        super().__init__(style, color)
        self._width = _width(width)
        self._fill = BorderFill.parse(fill)

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int) -> None:
        value = _width(value)
        if self._width != value:
            self._width = value
            self.emit("resize")

    @property
    def fill(self) -> BorderFill:
        return self._fill

    @fill.setter
    def fill(self, value: Union[BorderFill, str]) -> None:
        value = BorderFill.parse(value)
        if self._fill is not value:
            self._fill = value
            self.emit("redraw")

    @property
    def glyphs(self) -> BorderGlyphs:
        return resolve_border_style(self._style)

    def set(
        self,
        width: Optional[int] = None,
        style: Optional[BorderStyle] = None,
        color: Optional[ColorLike] = None,
        fill: Union[BorderFill, str, None] = None,
    ) -> Optional[str]:
        """
        Update several attributes with at most one event.

        None leaves an attribute unchanged. Returns the emitted event key.
        """
        if width is not None:
            _width(width)
        if style is not None:
            self._check_style(style)
        if color is not None:
            color = Color.parse(color)
        if fill is not None:
            fill = BorderFill.parse(fill)

        with suppressing(self) as (captured,):
            if width is not None:
                self.width = width
            if style is not None:
                self.style = style
            if color is not None:
                self.color = color
            if fill is not None:
                self.fill = fill

        kind = _strongest(captured)
        if kind:
            self.emit(kind)
        return kind


class BorderBlock(BorderEdge):
    """Top or bottom edge, with corner overrides on its left and right ends."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._left = BorderCorner()
        self._right = BorderCorner()
        self._left.on("redraw", self._relay_redraw)
        self._right.on("redraw", self._relay_redraw)

    def _relay_redraw(self, event) -> None:
        self.emit("redraw")

    def _set_corner(self, corner: BorderCorner, value) -> None:
        if isinstance(value, BorderCorner):
            style, color = value.style, value.color
        elif isinstance(value, Mapping):
            style, color = value.get("style"), value.get("color")
        elif isinstance(value, (tuple, list)) and 1 <= len(value) <= 2:
            style, color = (tuple(value) + (None,))[:2]
        else:
            style, color = value, None

        corner._check_style(style)
        corner._check_color(color)

        with suppressing(corner) as (captured,):
            if style is not None:
                corner.style = style
            if color is not None:
                corner.color = color
        if captured:
            corner.emit("redraw")

    @property
    def left(self) -> BorderCorner:
        return self._left

    @left.setter
    def left(self, value) -> None:
        self._set_corner(self._left, value)

    @property
    def right(self) -> BorderCorner:
        return self._right

    @right.setter
    def right(self, value) -> None:
        self._set_corner(self._right, value)

    def corner_style(self, side: str) -> BorderStyle:
        """Style of the ``left`` or ``right`` corner, falling back to the edge."""
        corner = self._corner(side)
        return corner.style if corner.style is not None else self._style

    def corner_color(self, side: str) -> Color:
        corner = self._corner(side)
        return corner.color if corner.color is not None else self._color

    def _corner(self, side: str) -> BorderCorner:
        if side == "left":
            return self._left
        if side == "right":
            return self._right
        raise ConfigurationError(f"Corner side must be 'left' or 'right', got {side!r}", side)


class BorderBox(EventEmitter):
    """
    The four edges of a panel border.

    Edge setters take a width or a ``(width, style, color, fill)`` tuple
    (None entries keep the current value). ``inline``, ``block`` and ``all``
    apply the same value to several edges and emit at most one event.
    """

    def __init__(
        self,
        width: int = 1,
        style: BorderStyle = "line",
        color: ColorLike = "default",
        fill: Union[BorderFill, str] = BorderFill.SOLID,
    ):
        super().__init__()
        self._top = BorderBlock(width, style, color, fill)
        self._right = BorderEdge(width, style, color, fill)
        self._bottom = BorderBlock(width, style, color, fill)
        self._left = BorderEdge(width, style, color, fill)

        for edge in self.edges:
            edge.on("resize", self._relay_resize)
            edge.on("redraw", self._relay_redraw)

    @classmethod
    def coerce(cls, value) -> BorderBox:
        """
        Build a border from a width, a mapping or an existing box.

        Mapping keys ``width``, ``style``, ``color`` and ``fill`` apply to
        every edge; ``top``, ``right``, ``bottom`` and ``left`` override a
        single edge with a width, a tuple or a mapping (top and bottom
        mappings may also carry ``left``/``right`` corner overrides).
        """
        if isinstance(value, BorderBox):
            return value
        if value is None:
            return cls(0)
        if isinstance(value, Mapping):
            unknown = set(value) - set(EDGE_OPTIONS) - {"top", "right", "bottom", "left"}
            if unknown:
                raise ConfigurationError(f"Unknown border options: {sorted(unknown)}", value)
            box = cls(**{k: value[k] for k in EDGE_OPTIONS if k in value})
            for side in ("top", "right", "bottom", "left"):
                if side in value:
                    box.configure_edge(side, value[side])
            return box
        return cls(value)

    def _relay_resize(self, event) -> None:
        self.emit("resize")

    def _relay_redraw(self, event) -> None:
        self.emit("redraw")

    @property
    def edges(self) -> tuple[BorderBlock, BorderEdge, BorderBlock, BorderEdge]:
        return (self._top, self._right, self._bottom, self._left)

    def configure_edge(self, side: str, value) -> Optional[str]:
        """Apply a width, tuple or mapping to one edge. Returns the emitted event key."""
        edge = self._edge(side)

        if isinstance(value, Mapping):
            allowed = set(EDGE_OPTIONS)
            if isinstance(edge, BorderBlock):
                allowed |= {"left", "right"}
            unknown = set(value) - allowed
            if unknown:
                raise ConfigurationError(f"Unknown options for {side} border: {sorted(unknown)}", value)
            corners = {k: value[k] for k in ("left", "right") if k in value}
            with suppressing(edge) as (captured,):
                edge.set(**{k: value[k] for k in EDGE_OPTIONS if k in value})
                for corner, corner_value in corners.items():
                    setattr(edge, corner, corner_value)
            kind = _strongest(captured)
            if kind:
                edge.emit(kind)
            return kind

        if isinstance(value, (tuple, list)):
            if len(value) > 4:
                raise ConfigurationError(f"Border edge takes at most 4 values, got {value!r}", value)
            return edge.set(*value)

        return edge.set(width=_width(value))

    def _edge(self, side: str) -> BorderEdge:
        if side not in ("top", "right", "bottom", "left"):
            raise ConfigurationError(f"Unknown border side: {side!r}", side)
        return getattr(self, f"_{side}")

    def _configure_group(self, sides: tuple[str, ...], value) -> None:
        edges = [self._edge(side) for side in sides]
        with suppressing(*edges) as captures:
            for side in sides:
                self.configure_edge(side, value)
        kind = _strongest([key for captured in captures for key in captured])
        if kind:
            self.emit(kind)

    @property
    def top(self) -> BorderBlock:
        return self._top

    @top.setter
    def top(self, value) -> None:
        self.configure_edge("top", value)

    @property
    def right(self) -> BorderEdge:
        return self._right

    @right.setter
    def right(self, value) -> None:
        self.configure_edge("right", value)

    @property
    def bottom(self) -> BorderBlock:
        return self._bottom

    @bottom.setter
    def bottom(self, value) -> None:
        self.configure_edge("bottom", value)

    @property
    def left(self) -> BorderEdge:
        return self._left

    @left.setter
    def left(self, value) -> None:
        self.configure_edge("left", value)

    @property
    def inline(self) -> int:
        """left.width + right.width"""
        return self._left.width + self._right.width

    @inline.setter
    def inline(self, value) -> None:
        self._configure_group(("left", "right"), value)

    @property
    def block(self) -> int:
        """top.width + bottom.width"""
        return self._top.width + self._bottom.width

    @block.setter
    def block(self, value) -> None:
        self._configure_group(("top", "bottom"), value)

    @property
    def all(self) -> int:
        return self.inline + self.block

    @all.setter
    def all(self, value) -> None:
        self._configure_group(("top", "right", "bottom", "left"), value)
