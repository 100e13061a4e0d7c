"""ANSI helpers - building control sequences and measuring styled text."""

from __future__ import annotations

import re

ESC = '\x1b'
CSI = '\x1b['

# SGR tokens are the only escapes that may be embedded in panel text
SGR_PATTERN = re.compile(r'\x1b\[([0-9;:]*)m')


def csi(code: str) -> str:
    """``ESC [ code``"""
    return f'{CSI}{code}'


def cursor_position(row: int, col: int) -> str:
    """Move cursor to position (1-indexed)."""
    return f'{CSI}{row};{col}H'


def cursor_right(n: int) -> str:
    return f'{CSI}{n}C' if n > 0 else ''


def cursor_left(n: int) -> str:
    return f'{CSI}{n}D' if n > 0 else ''


def cursor_up(n: int) -> str:
    return f'{CSI}{n}A' if n > 0 else ''


def cursor_down(n: int) -> str:
    return f'{CSI}{n}B' if n > 0 else ''


def set_mode(code: str, enabled: bool) -> str:
    """``ESC [ code h`` or ``ESC [ code l``"""
    return f"{CSI}{code}{'h' if enabled else 'l'}"


SAVE_CURSOR = f'{ESC}7'
RESTORE_CURSOR = f'{ESC}8'
ERASE_SCREEN = f'{CSI}2J'
ERASE_LINE = f'{CSI}2K'
HOME = f'{CSI}H'


def strip_styles(s: str) -> str:
    """Remove embedded SGR tokens."""
    return SGR_PATTERN.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding SGR codes)."""
    return len(strip_styles(s))


def is_reset(token: str) -> bool:
    """True for ``ESC[m`` and ``ESC[0m``."""
    match = SGR_PATTERN.fullmatch(token)
    return bool(match) and match.group(1) in ('', '0')


def pad_to_width(s: str, width: int, char: str = ' ') -> str:
    """Pad string with char to reach exactly width visible characters."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)
