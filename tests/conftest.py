"""Shared fixtures: a virtual terminal backed by in-memory streams."""

import io
import re

import pytest

from tui_panels.terminal import Terminal, TerminalSize

ESCAPE = re.compile(r'\x1b\[([0-9;?]*)([A-Za-z])|\x1b[78]')


@pytest.fixture
def terminal() -> Terminal:
    """An inactive 80x24 terminal writing into a StringIO."""
    return Terminal(io.BytesIO(), io.StringIO(), size=TerminalSize(rows=24, cols=80))


@pytest.fixture
def active_terminal(terminal: Terminal):
    """The virtual terminal after init(); restored on teardown."""
    terminal.init()
    yield terminal
    terminal.exit()


def output(terminal: Terminal) -> str:
    """Everything written to the terminal so far."""
    return terminal.stdout.getvalue()


def reset_output(terminal: Terminal) -> None:
    terminal.stdout.seek(0)
    terminal.stdout.truncate()


def render_screen(data: str, rows: int = 24, cols: int = 80) -> list[str]:
    """
    Replay cursor positioning and text onto a blank grid.

    Understands absolute positioning and cursor-right, skips every other
    escape sequence. Enough to check what panels put where.
    """
    grid = [[' '] * cols for _ in range(rows)]
    row = col = 0
    i = 0
    while i < len(data):
        if data[i] == '\x1b':
            match = ESCAPE.match(data, i)
            if match is None:
                i += 1
                continue
            if match.group(2) == 'H':
                r, c = match.group(1).split(';') if match.group(1) else ('1', '1')
                row, col = int(r) - 1, int(c) - 1
            elif match.group(2) == 'C':
                col += int(match.group(1) or 1)
            i = match.end()
            continue
        if 0 <= row < rows and 0 <= col < cols:
            grid[row][col] = data[i]
        col += 1
        i += 1
    return [''.join(line) for line in grid]
