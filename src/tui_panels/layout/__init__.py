"""Layout tree - box model, borders and panels."""

from tui_panels.layout.border_box import BorderBlock, BorderBox, BorderCorner, BorderEdge
from tui_panels.layout.borders import BORDER_STYLES, BorderFill, BorderGlyphs, resolve_border_style
from tui_panels.layout.metric_box import MetricBox
from tui_panels.layout.node import LayoutNode
from tui_panels.layout.panel import Panel
from tui_panels.layout.tiler import tile_border

__all__ = [
    "BorderBlock",
    "BorderBox",
    "BorderCorner",
    "BorderEdge",
    "BORDER_STYLES",
    "BorderFill",
    "BorderGlyphs",
    "resolve_border_style",
    "MetricBox",
    "LayoutNode",
    "Panel",
    "tile_border",
]
