"""SGR (Select Graphic Rendition) composition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from tui_panels.core.color import Color, ColorLike
from tui_panels.errors import ConfigurationError

RESET = '\x1b[0m'


def sgr(*codes: Union[int, str]) -> str:
    """Build an SGR sequence from raw parameters. No parameters means reset."""
    if not codes:
        return RESET
    return f"\x1b[{';'.join(str(c) for c in codes)}m"


def _toggle(value, on: int, off: int, alt_value: Optional[str] = None, alt: Optional[int] = None) -> Optional[int]:
    if value is None:
        return None
    if alt_value is not None and value == alt_value:
        return alt
    if isinstance(value, bool):
        return on if value else off
    raise ConfigurationError(f"Invalid style flag: {value!r}", value)


@dataclass
class Style:
    """
    Text attributes for a run of output.

    Attributes left as None are not emitted, so a Style only changes what it
    names. ``reset`` (or an empty Style) produces a full reset.
    """
    color: Optional[ColorLike] = None
    bg_color: Optional[ColorLike] = None
    reset: bool = False
    bold: Union[bool, Literal["faint"], None] = None
    italic: Optional[bool] = None
    underline: Union[bool, Literal["double"], None] = None
    blink: Optional[bool] = None
    inverse: Optional[bool] = None
    invisible: Optional[bool] = None
    strikethrough: Optional[bool] = None

    def codes(self) -> list[str]:
        """Return the SGR parameters for this style."""
        if self.reset:
            return ['0']

        codes: list[str] = []
        for value, on, off, alt_value, alt in (
            (self.bold, 1, 22, "faint", 2),
            (self.italic, 3, 23, None, None),
            (self.underline, 4, 24, "double", 21),
            (self.blink, 5, 25, None, None),
            (self.inverse, 7, 27, None, None),
            (self.invisible, 8, 28, None, None),
            (self.strikethrough, 9, 29, None, None),
        ):
            code = _toggle(value, on, off, alt_value, alt)
            if code is not None:
                codes.append(str(code))

        if self.color is not None:
            codes.append(Color.parse(self.color).to_sgr_fg())
        if self.bg_color is not None:
            codes.append(Color.parse(self.bg_color).to_sgr_bg())

        return codes or ['0']

    def sgr(self) -> str:
        """Return the escape sequence for this style."""
        return f"\x1b[{';'.join(self.codes())}m"


def compose_style(style: Union[Style, int, None] = None, *codes: int, **attributes) -> str:
    """
    Build an SGR sequence from a Style, raw codes, or keyword attributes.

    >>> compose_style(color="red")
    '\\x1b[31m'
    >>> compose_style(1, 31)
    '\\x1b[1;31m'
    >>> compose_style()
    '\\x1b[0m'
    """
    if isinstance(style, Style):
        return style.sgr()
    if isinstance(style, int):
        return sgr(style, *codes)
    if attributes:
        return Style(**attributes).sgr()
    return RESET
