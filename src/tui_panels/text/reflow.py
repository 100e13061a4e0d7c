"""
Reflow styled text into display lines of a given width.

Inline SGR tokens are taken out of the text while it is laid out and put
back afterwards next to the character they preceded, so a color change in
front of a word still sits in front of it after the word wraps.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional, Union

from tui_panels.core.ansi import SGR_PATTERN, is_reset
from tui_panels.errors import ConfigurationError

PLACEHOLDER = '\ufffd'

Width = Union[int, float]


def is_control(char: str) -> bool:
    """C0/C1 control characters other than tab, line feed and carriage return."""
    cp = ord(char)
    return (cp < 32 and cp not in (9, 10, 13)) or 127 <= cp < 160


def normalize_reset(token: str, default_style: Optional[str]) -> str:
    """Turn a bare reset into ``reset + default style``."""
    if not default_style or not is_reset(token):
        return token
    match = SGR_PATTERN.fullmatch(default_style)
    if not match or match.group(1) in ('', '0'):
        return token
    return f'\x1b[0;{match.group(1)}m'


def tokenize(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_style, piece)`` with one piece per code point or SGR token."""
    pos = 0
    for match in SGR_PATTERN.finditer(text):
        for char in text[pos:match.start()]:
            yield False, char
        yield True, match.group(0)
        pos = match.end()
    for char in text[pos:]:
        yield False, char


class _LineBuilder:
    """Mutable layout state for one reflow run."""

    def __init__(self, width: Width, first_width: Width, word_wrap: bool):
        self.width = width
        self.first_width = first_width
        self.word_wrap = word_wrap
        self.lines: list[list[str]] = []
        self.anchors: list[list[tuple[int, str]]] = []
        self.line: list[str] = []
        self.line_anchors: list[tuple[int, str]] = []
        self.pending: list[str] = []
        self.cursor = 0

    @property
    def limit(self) -> Width:
        return self.first_width if not self.lines else self.width

    def close_line(self) -> None:
        self.lines.append(self.line)
        self.anchors.append(self.line_anchors)
        self.line = []
        self.line_anchors = []
        self.cursor = 0

    def anchor_pending_at_end(self) -> None:
        column = len(self.line)
        self.line_anchors.extend((column, token) for token in self.pending)
        self.pending = []

    def line_feed(self) -> None:
        self.anchor_pending_at_end()
        self.close_line()

    def carriage_return(self) -> None:
        self.cursor = 0

    def style(self, token: str) -> None:
        self.pending.append(token)

    def put(self, chunk: str) -> None:
        if not chunk or len(chunk) > self.limit:
            return

        if self.cursor + len(chunk) > self.limit:
            # Whitespace at the break is swallowed by it
            if chunk.isspace():
                self.close_line()
                return
            if not (self.word_wrap and self._wrap_word()):
                self.close_line()
            if self.cursor and self.cursor + len(chunk) > self.limit:
                self.close_line()
            if len(chunk) > self.limit:
                return

        self._place(chunk)

    def _place(self, chunk: str) -> None:
        for char in chunk:
            if self.pending:
                self.line_anchors.extend((self.cursor, token) for token in self.pending)
                self.pending = []
            if self.cursor < len(self.line):
                self.line[self.cursor] = char
            else:
                self.line.append(char)
            self.cursor += 1

    def _wrap_word(self) -> bool:
        """Move the word after the last space to a new line."""
        text = ''.join(self.line)
        space = text.rfind(' ')
        if space <= 0:
            return False

        cut = space + 1
        fragment = self.line[cut:]
        if len(fragment) > self.width:
            # Too long for the following lines, hard break instead
            return False
        moved = [(max(0, column - cut), token) for column, token in self.line_anchors if column >= space]
        self.line_anchors = [(column, token) for column, token in self.line_anchors if column < space]
        self.line = self.line[:space]
        self.close_line()

        self.line = fragment
        self.line_anchors = moved
        self.cursor = len(fragment)
        return True

    def finish(self) -> list[str]:
        self.anchor_pending_at_end()
        self.close_line()
        return [_render(line, anchors) for line, anchors in zip(self.lines, self.anchors)]


def _render(line: list[str], anchors: list[tuple[int, str]]) -> str:
    anchors = sorted(anchors, key=lambda anchor: anchor[0])
    out: list[str] = []
    i = 0
    for column, char in enumerate(line):
        while i < len(anchors) and anchors[i][0] <= column:
            out.append(anchors[i][1])
            i += 1
        out.append(char)
    out.extend(token for _, token in anchors[i:])
    return ''.join(out)


def reflow(
    text: str,
    width: Width,
    first_width: Optional[Width] = None,
    *,
    word_wrap: bool = False,
    tab_size: int = 4,
    default_style: Optional[str] = None,
) -> list[str]:
    """
    Fit ``text`` into lines of at most ``width`` visible characters.

    Args:
        text: Raw text, may contain SGR tokens
        width: Line width; ``math.inf`` disables breaking
        first_width: Width of the first line (defaults to ``width``)
        word_wrap: Break at the last space instead of mid-word
        tab_size: Number of spaces a tab expands to
        default_style: SGR token merged into bare resets so the
            surrounding style survives them

    Returns:
        Display lines with style tokens re-inserted. Always at least one line.
    """
    if first_width is None:
        first_width = width
    for name, value in (("width", width), ("first_width", first_width)):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value) or value < 0:
            raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}", value)
    if isinstance(tab_size, bool) or not isinstance(tab_size, int) or tab_size < 0:
        raise ConfigurationError(f"tab_size must be a non-negative integer, got {tab_size!r}", tab_size)

    builder = _LineBuilder(width, first_width, word_wrap)
    tab = ' ' * tab_size

    for is_style, piece in tokenize(text):
        if is_style:
            builder.style(normalize_reset(piece, default_style))
        elif piece == '\n':
            builder.line_feed()
        elif piece == '\r':
            builder.carriage_return()
        elif piece == '\t':
            builder.put(tab)
        elif is_control(piece):
            builder.put(PLACEHOLDER)
        else:
            builder.put(piece)

    return builder.finish()
