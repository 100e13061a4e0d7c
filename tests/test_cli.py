"""Tests for the CLI, key decoding and the demo app."""

import io
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import output, reset_output
from tui_panels.cli.app import create_app
from tui_panels.cli.demo import DemoApp, build_demo_tree
from tui_panels.cli.keys import Key, decode_key
from tui_panels.terminal import Terminal, TerminalSize

runner = CliRunner()


class TestLayoutCommand:
    """Tests for ``tui-panels layout``."""

    def test_reports_both_panels(self) -> None:
        result = runner.invoke(create_app(), ["layout", "80", "24"])
        assert result.exit_code == 0
        assert "outer" in result.output
        assert "inner" in result.output
        assert "70x16" in result.output
        assert "62x10" in result.output

    def test_negative_size_rejected(self) -> None:
        result = runner.invoke(create_app(), ["layout", "80", "-1"])
        assert result.exit_code != 0


class TestReflowCommand:
    """Tests for ``tui-panels reflow``."""

    def test_hard_break(self, tmp_path: Path) -> None:
        path = tmp_path / "text.txt"
        path.write_text("abcdefgh", encoding="utf-8")
        result = runner.invoke(create_app(), ["reflow", str(path), "--width", "5"])
        assert result.exit_code == 0
        assert " 12345" in result.output
        assert "|abcde\x1b[0m|" in result.output
        assert "|fgh  \x1b[0m|" in result.output
        assert "2 lines at width 5" in result.output

    def test_word_wrap(self, tmp_path: Path) -> None:
        path = tmp_path / "text.txt"
        path.write_text("hello big world", encoding="utf-8")
        result = runner.invoke(create_app(), ["reflow", str(path), "-w", "9", "--wrap"])
        assert result.exit_code == 0
        assert "|hello big\x1b[0m|" in result.output
        assert "|world    \x1b[0m|" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(create_app(), ["reflow", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "No such file" in result.output


class TestDecodeKey:
    """Tests for whole-chunk key lookup."""

    @pytest.mark.parametrize("data, key", [
        (b"\x1b[A", Key.UP),
        (b"\x1bOB", Key.DOWN),
        (b"\x1b[5~", Key.PAGE_UP),
        (b"\r", Key.ENTER),
        (b"\x03", Key.CTRL_C),
    ])
    def test_named_keys(self, data: bytes, key: Key) -> None:
        event = decode_key(data)
        assert event.key is key
        assert event.raw == data
        assert not event.is_char

    def test_printable_character(self) -> None:
        assert decode_key(b"w").char == "w"
        assert decode_key("é".encode()).is_char

    def test_unknown_sequence(self) -> None:
        event = decode_key(b"\x1b[Z")
        assert event.key is None
        assert event.char is None


class TestDemo:
    """Tests for the demo tree and its key handling."""

    @pytest.fixture
    def app(self) -> DemoApp:
        terminal = Terminal(io.BytesIO(), io.StringIO(), size=TerminalSize(rows=20, cols=60))
        return DemoApp(terminal)

    def test_tree_geometry(self, terminal: Terminal) -> None:
        tree = build_demo_tree(terminal)
        assert (tree.outer.width, tree.outer.height) == (70, 16)
        assert (tree.outer.abs_x, tree.outer.abs_y) == (6, 6)
        assert (tree.inner.width, tree.inner.height) == (62, 10)
        assert (tree.inner.abs_x, tree.inner.abs_y) == (10, 9)
        assert tree.inner.drawable
        tree.destroy()
        assert all(panel.destroyed for panel in tree.panels)

    def test_too_narrow_for_inner(self) -> None:
        terminal = Terminal(io.BytesIO(), io.StringIO(), size=TerminalSize(rows=20, cols=40))
        tree = build_demo_tree(terminal)
        assert not tree.inner.drawable

    def test_scroll_keys(self, app: DemoApp) -> None:
        inner = app.tree.inner
        assert inner.max_scroll > 0
        app.handle_key(b"\x1b[B")
        assert inner.scroll == 1
        assert output(app.terminal) != ""
        app.handle_key(b"\x1b[A")
        assert inner.scroll == 0
        app.handle_key(b"\x1b[6~")
        assert inner.scroll == min(inner.height, inner.max_scroll)

    def test_direction_flips_arrows(self, app: DemoApp) -> None:
        inner = app.tree.inner
        app.handle_key(b"\x1b[C")
        assert inner.scroll_direction == "up"
        app.handle_key(b"\x1b[A")
        assert inner.scroll == 1
        app.handle_key(b"\x1b[D")
        assert inner.scroll_direction == "down"

    def test_toggle_wrap(self, app: DemoApp) -> None:
        assert app.tree.inner.word_wrap
        app.handle_key(b"w")
        assert not app.tree.inner.word_wrap

    def test_quit(self, app: DemoApp) -> None:
        app.terminal.init()
        app.terminal.feed(b"q")
        assert not app.terminal.active

    def test_resize_rerenders(self, app: DemoApp) -> None:
        reset_output(app.terminal)
        app.terminal.handle_resize(70, 22)
        assert output(app.terminal).startswith("\x1b[2J\x1b[H")
