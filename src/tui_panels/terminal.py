"""Terminal surface - the root node of every panel tree.

The terminal owns the physical streams: it toggles raw mode and the
alternate screen buffer, turns input chunks and resize notifications into
events, and is the only thing panels write their output to.
"""

from __future__ import annotations

import logging
import os
import select
import signal
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Any, Iterator, Optional, Union

from tui_panels.core import ansi
from tui_panels.core.style import compose_style
from tui_panels.errors import ConfigurationError, CursorStyleError, PositionError
from tui_panels.layout.node import LayoutNode

logger = logging.getLogger(__name__)

CTRL_C = b'\x03'
CTRL_D = b'\x04'

CURSOR_STYLES = {
    'blinking_block': 0,
    'default': 1,
    'block': 2,
    'blinking_underline': 3,
    'underline': 4,
    'blinking_bar': 5,
    'bar': 6,
}


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


def query_size(stream: Optional[IO] = None) -> TerminalSize:
    """Get current terminal dimensions, 24x80 when they cannot be determined."""
    try:
        fd = (stream if stream is not None else sys.stdout).fileno()
        size = os.get_terminal_size(fd)
        return TerminalSize(size.lines, size.columns)
    except (OSError, ValueError, AttributeError):
        return TerminalSize(24, 80)


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


class Terminal(LayoutNode):
    """
    The physical screen.

    Events:
        data(chunk: bytes): raw input while active
        end(): input ended, or Ctrl-C / Ctrl-D when enabled
        close(had_error: bool): the input stream closed
        resize(cols: int, rows: int): screen size changed

    ``close`` and ``end`` restore the terminal (see :meth:`exit`) after all
    other listeners have run.
    """

    def __init__(
        self,
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        *,
        size: Optional[TerminalSize] = None,
        exit_on_ctrl_c: bool = True,
        exit_on_ctrl_d: bool = True,
    ) -> None:
        super().__init__()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.exit_on_ctrl_c = exit_on_ctrl_c
        self.exit_on_ctrl_d = exit_on_ctrl_d

        initial = size or query_size(self.stdout)
        self._rows = initial.rows
        self._cols = initial.cols
        self._active = False
        self._saved_tty: Optional[list] = None
        self._previous_winch: Any = None
        self._winch_installed = False

        self.on('close', self._on_close, level=100)
        self.on('end', self._on_end, level=100)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def init(self) -> Terminal:
        """Enter full-screen mode: alternate buffer, raw input, resize tracking."""
        if not self._active:
            self.alt_buffer(True)
            self._enter_raw_mode()
            self._install_resize_handler()
            self.move_to()
            self._active = True
            logger.debug("Terminal initialised at %dx%d", self._cols, self._rows)
        return self

    def exit(self) -> Terminal:
        """Restore the terminal to the state it was in before :meth:`init`."""
        if self._active:
            self._active = False
            self._restore_raw_mode()
            self._restore_resize_handler()
            self.style()
            self.cursor_style()
            self.cursor_visible(True)
            self.alt_buffer(False)
            logger.debug("Terminal restored")
        return self

    @contextmanager
    def session(self) -> Iterator[Terminal]:
        """Context manager around :meth:`init` / :meth:`exit`."""
        self.init()
        try:
            yield self
        finally:
            self.exit()

    def destroy(self) -> None:
        self.exit()
        super().destroy()

    @property
    def active(self) -> bool:
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        if value:
            self.init()
        else:
            self.exit()

    def _on_close(self, event, had_error: bool = False) -> None:
        self.exit()

    def _on_end(self, event) -> None:
        self.exit()

    def _enter_raw_mode(self) -> None:
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - input stays cooked
            return
        try:
            fd = self.stdin.fileno()
            self._saved_tty = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError, AttributeError):
            logger.debug("stdin is not a tty, raw mode not enabled")
            self._saved_tty = None

    def _restore_raw_mode(self) -> None:
        if self._saved_tty is None:
            return
        import termios
        termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._saved_tty)
        self._saved_tty = None

    def _install_resize_handler(self) -> None:
        if not hasattr(signal, 'SIGWINCH'):
            return
        try:
            self._previous_winch = signal.signal(signal.SIGWINCH, self._on_winch)
            self._winch_installed = True
        except ValueError:
            # Signal handlers can only be set from the main thread
            logger.debug("Resize signal unavailable, call refresh_size() to track resizes")

    def _restore_resize_handler(self) -> None:
        if self._winch_installed:
            signal.signal(signal.SIGWINCH, self._previous_winch or signal.SIG_DFL)
            self._winch_installed = False
            self._previous_winch = None

    def _on_winch(self, signum, frame) -> None:
        self.refresh_size()

    # -------------------------------------------------------------------------
    # Input side
    # -------------------------------------------------------------------------

    def feed(self, data: bytes) -> Terminal:
        """Deliver a raw input chunk from the input stream."""
        if self._active:
            self.emit('data', data)
            if (
                (self.exit_on_ctrl_c and data == CTRL_C)
                or (self.exit_on_ctrl_d and data == CTRL_D)
            ):
                self.emit('end')
        return self

    def close(self, had_error: bool = False) -> Terminal:
        """Report that the input stream closed."""
        if self._active:
            self.emit('close', had_error)
        return self

    def handle_resize(self, cols: int, rows: int) -> bool:
        """Record a new screen size. Emits ``resize`` and returns True if it changed."""
        for name, value in (("cols", cols), ("rows", rows)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"Terminal {name} must be a non-negative integer, got {value!r}", value)
        if (cols, rows) == (self._cols, self._rows):
            return False
        self._cols = cols
        self._rows = rows
        logger.debug("Terminal resized to %dx%d", cols, rows)
        self.emit('resize', cols, rows)
        return True

    def refresh_size(self) -> bool:
        """Re-read the size from the OS."""
        size = query_size(self.stdout)
        return self.handle_resize(size.cols, size.rows)

    def poll(self, timeout: float = 0.1) -> Optional[bytes]:
        """
        Read whatever input is available within ``timeout`` and feed it.

        Returns the chunk, or None when nothing arrived.
        """
        try:
            fd = self.stdin.fileno()
            ready, _, _ = select.select([fd], [], [], timeout)
        except (ValueError, OSError):
            return None
        if not ready:
            return None

        try:
            data = os.read(fd, 1024)
        except OSError:
            return None

        if not data:
            if self._active:
                self.emit('end')
            return None

        self.feed(data)
        return data

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def size(self) -> TerminalSize:
        return TerminalSize(self._rows, self._cols)

    @property
    def width(self) -> int:
        return self._cols

    @property
    def height(self) -> int:
        return self._rows

    @property
    def abs_x(self) -> int:
        return 1

    @property
    def abs_y(self) -> int:
        return 1

    @property
    def terminal(self) -> Terminal:
        return self

    # -------------------------------------------------------------------------
    # Output side
    # -------------------------------------------------------------------------

    def write(self, message: Union[str, bytes]) -> Terminal:
        """Write text to terminal."""
        if isinstance(message, bytes):
            message = message.decode('utf-8', errors='replace')
        self.stdout.write(str(message))
        self.stdout.flush()
        return self

    def flush(self) -> Terminal:
        self.stdout.flush()
        return self

    def write_line(self, message: Union[str, bytes] = '') -> Terminal:
        return self.write(message).write('\n')

    def write_code(self, code: str) -> Terminal:
        """``ESC code``"""
        return self.write(f'{ansi.ESC}{code}')

    def write_csi(self, code: str) -> Terminal:
        """``ESC [ code``"""
        return self.write(ansi.csi(code))

    def set_csi_flag(self, code: str, enabled: bool) -> Terminal:
        """``ESC [ code h/l``"""
        return self.write(ansi.set_mode(code, enabled))

    def move_to(self, col: float = 1, row: float = 1, relative: bool = False) -> Terminal:
        """
        Move the cursor.

        Absolute positions are 1-based. A value in [0, 1) is a fraction of
        the screen size. With ``relative`` the values are signed offsets.
        """
        if relative:
            if not _is_integral(col) or not _is_integral(row):
                raise PositionError(f"Relative position cannot be fractional: ({col}, {row})", (col, row))
            col, row = int(col), int(row)
            return self.write(
                (ansi.cursor_left(-col) if col < 0 else ansi.cursor_right(col))
                + (ansi.cursor_up(-row) if row < 0 else ansi.cursor_down(row))
            )

        col = self._absolute(col, self._cols)
        row = self._absolute(row, self._rows)
        return self.write(ansi.cursor_position(row, col))

    @staticmethod
    def _absolute(value: float, size: int) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PositionError(f"Position must be a number, got {value!r}", value)
        if value < 0:
            raise PositionError(f"Absolute position cannot be negative: {value}", value)
        if value < 1:
            return round(value * (size - 1) + 1)
        if not _is_integral(value):
            raise PositionError(f"Position cannot be fractional: {value}", value)
        return int(value)

    def style(self, *args, **attributes) -> Terminal:
        """Write an SGR sequence (see :func:`compose_style`). No arguments resets."""
        return self.write(compose_style(*args, **attributes))

    def cursor_style(self, style: Union[int, str] = 1) -> Terminal:
        """Set cursor shape: 0-6 or a name from ``CURSOR_STYLES``."""
        if isinstance(style, str):
            if style not in CURSOR_STYLES:
                raise CursorStyleError(style)
            code = CURSOR_STYLES[style]
        elif isinstance(style, int) and not isinstance(style, bool) and 0 <= style <= 6:
            code = style
        else:
            raise CursorStyleError(style)
        return self.write_csi(f'{code} q')

    def cursor_visible(self, visible: bool = True) -> Terminal:
        return self.set_csi_flag('?25', visible)

    def alt_buffer(self, enabled: bool) -> Terminal:
        """Switch the alternate screen buffer (preserves scrollback)."""
        return self.set_csi_flag('?1049', enabled)

    def save_cursor(self) -> Terminal:
        return self.write(ansi.SAVE_CURSOR)

    def restore_cursor(self) -> Terminal:
        return self.write(ansi.RESTORE_CURSOR)

    def clear(self) -> Terminal:
        """Clear screen and move cursor to home."""
        return self.write(ansi.ERASE_SCREEN + ansi.HOME)
