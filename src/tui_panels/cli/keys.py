"""Key table for raw terminal input.

Input chunks are looked up whole; there is no incremental escape-sequence
parser. A chunk that is not in the table and is a single printable
character becomes a character event.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    CTRL_C = auto()
    CTRL_D = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A decoded input chunk."""
    key: Optional[Key] = None   # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: bytes = b""

    @property
    def is_char(self) -> bool:
        return self.char is not None and self.key is None


KEY_SEQUENCES: dict[bytes, Key] = {
    # Arrow keys (CSI)
    b'\x1b[A': Key.UP,
    b'\x1b[B': Key.DOWN,
    b'\x1b[C': Key.RIGHT,
    b'\x1b[D': Key.LEFT,
    # Arrow keys (SS3 - application mode)
    b'\x1bOA': Key.UP,
    b'\x1bOB': Key.DOWN,
    b'\x1bOC': Key.RIGHT,
    b'\x1bOD': Key.LEFT,
    # Navigation
    b'\x1b[H': Key.HOME,
    b'\x1b[F': Key.END,
    b'\x1b[1~': Key.HOME,
    b'\x1b[4~': Key.END,
    b'\x1b[5~': Key.PAGE_UP,
    b'\x1b[6~': Key.PAGE_DOWN,
    b'\x1b[2~': Key.INSERT,
    b'\x1b[3~': Key.DELETE,
    # Single bytes
    b'\x1b': Key.ESCAPE,
    b'\r': Key.ENTER,
    b'\n': Key.ENTER,
    b'\t': Key.TAB,
    b'\x7f': Key.BACKSPACE,
    b'\x08': Key.BACKSPACE,
    b'\x03': Key.CTRL_C,
    b'\x04': Key.CTRL_D,
}


def decode_key(data: bytes) -> KeyEvent:
    """Look up a whole input chunk."""
    key = KEY_SEQUENCES.get(data)
    if key is not None:
        return KeyEvent(key=key, raw=data)

    text = data.decode('utf-8', errors='replace')
    if len(text) == 1 and text.isprintable():
        return KeyEvent(char=text, raw=data)
    return KeyEvent(raw=data)
