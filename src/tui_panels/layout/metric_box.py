"""Four-sided metric box used for margin and padding."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from tui_panels.core.events import EventEmitter, suppressing
from tui_panels.errors import ConfigurationError

SIDES = ("top", "right", "bottom", "left")

MetricLike = Union[int, tuple, list, Mapping, "MetricBox"]


def _metric(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}", value)
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {value}", value)
    return value


def _pair(value, name: str) -> tuple[int, int]:
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise ConfigurationError(f"{name} expects a number or a pair, got {value!r}", value)
        return value[0], value[1]
    return value, value


class MetricBox(EventEmitter):
    """
    Top/right/bottom/left integer metrics.

    Emits ``change`` once for every write that alters a value, including
    grouped writes through ``inline``, ``block``, ``all`` and ``update()``.

    The constructor follows CSS shorthand: ``MetricBox(1)`` sets every side,
    ``MetricBox(1, 2)`` sets block and inline, and so on.
    """

    def __init__(self, top: int = 0, right: int | None = None, bottom: int | None = None, left: int | None = None):
        super().__init__()
        if right is None:
            right = top
        if bottom is None:
            bottom = top
        if left is None:
            left = right
        self._top = _metric(top, "top")
        self._right = _metric(right, "right")
        self._bottom = _metric(bottom, "bottom")
        self._left = _metric(left, "left")

    @classmethod
    def coerce(cls, value: MetricLike) -> MetricBox:
        """Build a box from an int, a 1-4 tuple, a side mapping or a box."""
        if isinstance(value, MetricBox):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - set(SIDES)
            if unknown:
                raise ConfigurationError(f"Unknown box sides: {sorted(unknown)}", value)
            return cls(*(value.get(side, 0) for side in SIDES))
        if isinstance(value, (tuple, list)):
            if not 1 <= len(value) <= 4:
                raise ConfigurationError(f"Expected 1 to 4 values, got {len(value)}", value)
            return cls(*value)
        return cls(value)

    def _set(self, side: str, value) -> None:
        value = _metric(value, side)
        attr = f"_{side}"
        if getattr(self, attr) != value:
            setattr(self, attr, value)
            self.emit("change")

    @property
    def top(self) -> int:
        return self._top

    @top.setter
    def top(self, value: int) -> None:
        self._set("top", value)

    @property
    def right(self) -> int:
        return self._right

    @right.setter
    def right(self, value: int) -> None:
        self._set("right", value)

    @property
    def bottom(self) -> int:
        return self._bottom

    @bottom.setter
    def bottom(self, value: int) -> None:
        self._set("bottom", value)

    @property
    def left(self) -> int:
        return self._left

    @left.setter
    def left(self, value: int) -> None:
        self._set("left", value)

    def update(self, **sides: int) -> bool:
        """Set several sides at once. Returns True if anything changed."""
        unknown = set(sides) - set(SIDES)
        if unknown:
            raise ConfigurationError(f"Unknown box sides: {sorted(unknown)}", sides)
        for side, value in sides.items():
            _metric(value, side)

        with suppressing(self) as (captured,):
            for side, value in sides.items():
                setattr(self, side, value)

        if captured:
            self.emit("change")
        return bool(captured)

    @property
    def inline(self) -> int:
        """left + right. Set with a number or a ``(left, right)`` pair."""
        return self._left + self._right

    @inline.setter
    def inline(self, value: int | tuple[int, int]) -> None:
        left, right = _pair(value, "inline")
        self.update(left=left, right=right)

    @property
    def block(self) -> int:
        """top + bottom. Set with a number or a ``(top, bottom)`` pair."""
        return self._top + self._bottom

    @block.setter
    def block(self, value: int | tuple[int, int]) -> None:
        top, bottom = _pair(value, "block")
        self.update(top=top, bottom=bottom)

    @property
    def all(self) -> int:
        """Sum of all sides. Set with a number or a 2-4 value CSS shorthand."""
        return self.inline + self.block

    @all.setter
    def all(self, value: int | tuple) -> None:
        if isinstance(value, (tuple, list)):
            if not 2 <= len(value) <= 4:
                raise ConfigurationError(f"all expects a number or 2 to 4 values, got {value!r}", value)
            top, right = value[0], value[1]
            bottom = value[2] if len(value) > 2 else top
            left = value[3] if len(value) > 3 else right
        else:
            top = right = bottom = left = value
        self.update(top=top, right=right, bottom=bottom, left=left)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self._top, self._right, self._bottom, self._left)

    def __repr__(self) -> str:
        return f"MetricBox(top={self._top}, right={self._right}, bottom={self._bottom}, left={self._left})"
