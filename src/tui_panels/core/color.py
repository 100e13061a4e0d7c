"""Color values accepted by panels, borders and the terminal."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from tui_panels.errors import InvalidColorError


class ColorMode(Enum):
    """Which SGR family a color is emitted with."""
    DEFAULT = "default"     # SGR 39 / 49
    NAMED = "named"         # SGR 30-37, 90-97 (and 40-47, 100-107)
    INDEXED = "256"         # SGR 38;5;n / 48;5;n
    TRUE_COLOR = "rgb"      # SGR 38;2;r;g;b / 48;2;r;g;b


COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

_HEX_PATTERN = re.compile(r'^#([0-9a-f]{6}|[0-9a-f]{3})$', re.IGNORECASE)


@dataclass(frozen=True)
class Color:
    """
    A terminal color.

    ``value`` is the palette offset (0-7, or 8-15 for bright variants) for
    NAMED colors, the palette index for INDEXED, an (r, g, b) tuple for
    TRUE_COLOR and None for DEFAULT.
    """
    mode: ColorMode
    value: Union[int, tuple[int, int, int], None] = None

    DEFAULT: ClassVar["Color"]

    @classmethod
    def named(cls, name: str) -> "Color":
        """Create a Color from ``red`` or ``bright-red`` style names."""
        base = name.lower()
        offset = 0
        if base.startswith("bright-"):
            base = base[len("bright-"):]
            offset = 8
        if base not in COLOR_NAMES:
            raise InvalidColorError(name, f"Invalid color name: {name!r}")
        return cls(ColorMode.NAMED, COLOR_NAMES.index(base) + offset)

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 255:
            raise InvalidColorError(index, f"256-color index must be an integer 0-255, got {index!r}")
        return cls(ColorMode.INDEXED, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from RGB values."""
        if not all(isinstance(c, int) and 0 <= c <= 255 for c in (r, g, b)):
            raise InvalidColorError((r, g, b), f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(ColorMode.TRUE_COLOR, (r, g, b))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Create a Color from ``#RRGGBB`` or ``#RGB``."""
        match = _HEX_PATTERN.match(text)
        if not match:
            raise InvalidColorError(text, f"Invalid hex color: {text!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = ''.join(d * 2 for d in digits)
        return cls.from_rgb(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def parse(cls, value: "ColorLike") -> "Color":
        """
        Parse any accepted color form.

        Accepts a Color, ``"default"``, a color name (optionally ``bright-``
        prefixed), a 0-255 palette index, or a ``#RRGGBB`` / ``#RGB`` string.
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, bool):
            raise InvalidColorError(value)
        if isinstance(value, int):
            return cls.from_256(value)
        if isinstance(value, str):
            if value == "default":
                return cls.DEFAULT
            if value.startswith("#"):
                return cls.from_hex(value)
            return cls.named(value)
        raise InvalidColorError(value)

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for foreground color."""
        if self.mode == ColorMode.DEFAULT:
            return "39"
        elif self.mode == ColorMode.NAMED:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(30 + self.value)
            else:
                return str(90 + self.value - 8)
        elif self.mode == ColorMode.INDEXED:
            return f"38;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"38;2;{r};{g};{b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for background color."""
        if self.mode == ColorMode.DEFAULT:
            return "49"
        elif self.mode == ColorMode.NAMED:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(40 + self.value)
            else:
                return str(100 + self.value - 8)
        elif self.mode == ColorMode.INDEXED:
            return f"48;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"48;2;{r};{g};{b}"

    def __str__(self) -> str:
        if self.mode == ColorMode.DEFAULT:
            return "default"
        if self.mode == ColorMode.NAMED:
            assert isinstance(self.value, int)
            name = COLOR_NAMES[self.value % 8]
            return f"bright-{name}" if self.value >= 8 else name
        if self.mode == ColorMode.INDEXED:
            return str(self.value)
        assert isinstance(self.value, tuple)
        return "#{:02x}{:02x}{:02x}".format(*self.value)


Color.DEFAULT = Color(ColorMode.DEFAULT)

ColorLike = Union[Color, str, int]
