"""
tui-panels: retained-mode terminal panels

Lay out nested rectangles on a terminal with a CSS-like box model, frame them
with box-drawing borders and fill them with reflowed, styled text.

Quick Start:
    >>> from tui_panels import Panel, Terminal
    >>> terminal = Terminal()
    >>> panel = Panel(terminal, margin=1, padding=(0, 1), text="Hello")
    >>> with terminal.session():
    ...     panel.draw()

Features:
    - Ordered event emitter with prevent-default and scoped suppression
    - Margin, border and padding boxes that classify changes as resize or redraw
    - Border tiling that joins adjacent and nested borders
    - Text reflow that keeps SGR styles attached to their characters
"""

__version__ = "0.1.0"

# Events
from tui_panels.core.events import ANY, DispatchResult, Event, EventEmitter, suppress

# Styling
from tui_panels.core.color import Color
from tui_panels.core.style import Style

# Layout
from tui_panels.layout.border_box import BorderBox
from tui_panels.layout.borders import BorderFill, BorderGlyphs
from tui_panels.layout.metric_box import MetricBox
from tui_panels.layout.panel import Panel
from tui_panels.layout.tiler import tile_border

# Text
from tui_panels.text.reflow import reflow

# Terminal
from tui_panels.terminal import Terminal, TerminalSize

__all__ = [
    # Version
    "__version__",
    # Events
    "ANY",
    "DispatchResult",
    "Event",
    "EventEmitter",
    "suppress",
    # Styling
    "Color",
    "Style",
    # Layout
    "BorderBox",
    "BorderFill",
    "BorderGlyphs",
    "MetricBox",
    "Panel",
    "tile_border",
    # Text
    "reflow",
    # Terminal
    "Terminal",
    "TerminalSize",
]
