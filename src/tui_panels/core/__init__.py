"""Core primitives - events, colors, styles and escape sequences."""

from tui_panels.core.color import Color, ColorMode
from tui_panels.core.events import ANY, DispatchResult, Event, EventEmitter, suppress, suppressing
from tui_panels.core.style import Style, compose_style, sgr

__all__ = [
    "Color",
    "ColorMode",
    "ANY",
    "DispatchResult",
    "Event",
    "EventEmitter",
    "suppress",
    "suppressing",
    "Style",
    "compose_style",
    "sgr",
]
