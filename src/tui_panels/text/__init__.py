"""Text layout."""

from tui_panels.text.reflow import PLACEHOLDER, reflow

__all__ = ["PLACEHOLDER", "reflow"]
