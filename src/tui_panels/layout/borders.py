"""Border glyph sets and fill modes."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Union

from tui_panels.errors import BorderStyleError, ConfigurationError


class BorderFill(Enum):
    """How a border segment fills its cells."""
    SOLID = "solid"     # Full grid inside the segment
    LINES = "lines"     # Only lines running towards adjacent segments

    @classmethod
    def parse(cls, value: Union["BorderFill", str]) -> "BorderFill":
        if isinstance(value, BorderFill):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Invalid border fill: {value!r}", value) from None


@dataclass(frozen=True)
class BorderGlyphs:
    """
    One glyph per box-drawing role.

    The names describe the glyph shape: ``top`` is the T-junction opening
    downwards (┬), ``left`` the one opening to the right (├).
    """
    empty: str = ' '
    horizontal: str = '─'
    vertical: str = '│'
    top_left: str = '┌'
    top_right: str = '┐'
    bottom_left: str = '└'
    bottom_right: str = '┘'
    top: str = '┬'
    right: str = '┤'
    bottom: str = '┴'
    left: str = '├'
    center: str = '┼'

    def __post_init__(self) -> None:
        for f in fields(self):
            glyph = getattr(self, f.name)
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise BorderStyleError(self, f"Border glyph {f.name!r} must be a single character, got {glyph!r}")

    @property
    def table(self) -> tuple[str, ...]:
        """Glyphs indexed by the ``N<<3 | E<<2 | S<<1 | W`` connection mask."""
        return tuple(getattr(self, role) for role in GLYPH_ROLES)

    @classmethod
    def uniform(cls, glyph: str) -> "BorderGlyphs":
        """A glyph set that draws ``glyph`` everywhere except empty cells."""
        return cls(*([' '] + [glyph] * 11))


# Mask bits: N=8, E=4, S=2, W=1
GLYPH_ROLES = (
    'empty',         # 0000
    'horizontal',    # 000W
    'vertical',      # 00S0
    'top_right',     # 00SW
    'horizontal',    # 0E00
    'horizontal',    # 0E0W
    'top_left',      # 0ES0
    'top',           # 0ESW
    'vertical',      # N000
    'bottom_right',  # N00W
    'vertical',      # N0S0
    'right',         # N0SW
    'bottom_left',   # NE00
    'bottom',        # NE0W
    'left',          # NES0
    'center',        # NESW
)

BORDER_STYLES: dict[str, BorderGlyphs] = {
    'line': BorderGlyphs(),
    'thick': BorderGlyphs(' ', '━', '┃', '┏', '┓', '┗', '┛', '┳', '┫', '┻', '┣', '╋'),
    'double': BorderGlyphs(' ', '═', '║', '╔', '╗', '╚', '╝', '╦', '╣', '╩', '╠', '╬'),
    'round': BorderGlyphs(' ', '─', '│', '╭', '╮', '╰', '╯', '┬', '┤', '┴', '├', '┼'),
    'solid': BorderGlyphs.uniform('█'),
    'none': BorderGlyphs.uniform(' '),
}

BorderStyle = Union[str, BorderGlyphs]


def resolve_border_style(style: BorderStyle) -> BorderGlyphs:
    """Return the glyph set for a style name or custom glyph set."""
    if isinstance(style, BorderGlyphs):
        return style
    if isinstance(style, str) and style in BORDER_STYLES:
        return BORDER_STYLES[style]
    raise BorderStyleError(style)
