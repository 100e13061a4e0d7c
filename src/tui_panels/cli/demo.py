"""Demo panel tree and the interactive loop that drives it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tui_panels.cli.keys import Key, decode_key
from tui_panels.core.style import RESET, compose_style
from tui_panels.layout.panel import Panel
from tui_panels.terminal import Terminal


def _styled(text: str, **attributes) -> str:
    return f"{compose_style(**attributes)}{text}{RESET}"


DEMO_TEXT = (
    f"{_styled('Bottomless flask:', color='magenta', bold=True)}\n"
    "The flask does not destroy what is poured into it. It accumulates "
    f"{_styled('mana', color='cyan')} instead: filling the flask means feeding it "
    f"{_styled('mana', color='cyan')}, emptying it releases the "
    f"{_styled('mana', color='cyan')} again. When the shell breaks, all of the "
    f"stored {_styled('mana', color='cyan')} is released at once, hence the "
    f"{_styled('explosion', color='bright-red', bold=True)}.\n"
    "\tFilling it takes a long time, because a big "
    f"{_styled('explosion', color='bright-red', bold=True)} needs a "
    f"{_styled('lot', underline=True)} of energy."
)


@dataclass
class DemoTree:
    """The two panels of the demo."""
    outer: Panel
    inner: Panel

    @property
    def panels(self) -> list[Panel]:
        return [self.outer, self.inner]

    def destroy(self) -> None:
        self.outer.destroy()


def build_demo_tree(terminal: Terminal) -> DemoTree:
    """Build an outer frame with a scrolling, word-wrapped text panel inside."""
    outer = Panel(
        terminal,
        margin=(1, 2, 3, 4),
        border={
            "style": "double",
            "top": {"width": 4, "fill": "lines"},
            "right": {"width": 3, "fill": "lines"},
            "bottom": 0,
            "left": {"width": 1, "fill": "lines"},
        },
    )

    inner = Panel(
        outer,
        padding=(1, 2),
        border={
            "width": 2,
            "top": {"style": "round", "color": "green", "left": ("round", "red"), "right": ("round", "blue")},
            "right": {"color": "cyan"},
            "bottom": {
                "style": "round",
                "color": "bright-yellow",
                "left": ("round", "yellow"),
                "right": ("round", "bright-cyan"),
            },
            "left": {"color": "bright-red"},
        },
        min_width=30,
        max_width=70,
        color="#FFD700",
        word_wrap=True,
        text=DEMO_TEXT,
    )
    return DemoTree(outer, inner)


class DemoApp:
    """Keyboard-driven viewer for the demo tree."""

    def __init__(self, terminal: Optional[Terminal] = None) -> None:
        self.terminal = terminal or Terminal()
        self.tree = build_demo_tree(self.terminal)
        self.terminal.on("resize", self._on_resize)
        self.terminal.on("data", self._on_data)
        self.tree.inner.on("redraw", self._on_inner_redraw)

    def render(self) -> None:
        """Clear the screen and draw the whole tree."""
        self.terminal.clear()
        self.tree.outer.draw()

    def _on_resize(self, event, cols: int, rows: int) -> None:
        self.render()

    def _on_inner_redraw(self, event) -> None:
        self.tree.inner.draw()

    def _on_data(self, event, data: bytes) -> None:
        self.handle_key(data)

    def handle_key(self, data: bytes) -> None:
        inner = self.tree.inner
        key_event = decode_key(data)
        forward = 1 if inner.scroll_direction == "down" else -1

        if key_event.key == Key.UP:
            inner.scroll = inner.scroll - forward
        elif key_event.key == Key.DOWN:
            inner.scroll = inner.scroll + forward
        elif key_event.key == Key.PAGE_UP:
            inner.scroll = inner.scroll - forward * max(1, inner.height)
        elif key_event.key == Key.PAGE_DOWN:
            inner.scroll = inner.scroll + forward * max(1, inner.height)
        elif key_event.key == Key.LEFT:
            inner.scroll_direction = "down"
        elif key_event.key == Key.RIGHT:
            inner.scroll_direction = "up"
        elif key_event.char == "w":
            inner.word_wrap = not inner.word_wrap
        elif key_event.char == "q":
            self.terminal.exit()

    def run(self) -> None:
        """Main application loop."""
        with self.terminal.session():
            self.terminal.cursor_visible(False)
            self.render()
            while self.terminal.active:
                self.terminal.poll(0.1)
        self.tree.destroy()


def run_demo() -> None:
    """Launch the demo on the real terminal."""
    DemoApp().run()
