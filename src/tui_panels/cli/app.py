"""Typer CLI application."""

import io
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="tui-panels",
        help="Retained-mode terminal panels: layout, borders and text reflow.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    @app.callback()
    def main(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log layout and terminal activity")] = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    @app.command()
    def demo() -> None:
        """Run the interactive panel demo (arrows scroll, w wraps, q quits)."""
        from tui_panels.cli.demo import run_demo
        run_demo()

    @app.command()
    def layout(
        width: Annotated[int, typer.Argument(min=0, help="Terminal columns")],
        height: Annotated[int, typer.Argument(min=0, help="Terminal rows")],
    ) -> None:
        """Show the demo tree geometry for a terminal of the given size."""
        from tui_panels.cli.demo import build_demo_tree
        from tui_panels.terminal import Terminal, TerminalSize

        terminal = Terminal(io.BytesIO(), io.StringIO(), size=TerminalSize(rows=height, cols=width))
        tree = build_demo_tree(terminal)

        table = Table(title=f"Demo layout on {width}x{height}")
        table.add_column("Panel", style="bold")
        table.add_column("Content", justify="right")
        table.add_column("Origin", justify="right")
        table.add_column("Border origin", justify="right")
        table.add_column("Padded", justify="right")
        table.add_column("Lines", justify="right")
        table.add_column("Drawn")

        for name, panel in (("outer", tree.outer), ("inner", tree.inner)):
            table.add_row(
                name,
                f"{panel.width}x{panel.height}",
                f"{panel.abs_x},{panel.abs_y}",
                f"{panel.border_x},{panel.border_y}",
                f"{panel.padded_width}x{panel.padded_height}",
                str(len(panel.lines)),
                "[green]yes[/]" if panel.drawable else "[yellow]no[/]",
            )

        console.print(table)
        tree.destroy()

    @app.command()
    def reflow(
        path: Annotated[Path, typer.Argument(help="Text file to reflow")],
        width: Annotated[int, typer.Option("--width", "-w", min=1, help="Line width")] = 40,
        wrap: Annotated[bool, typer.Option("--wrap", help="Break at word boundaries")] = False,
        tab_size: Annotated[int, typer.Option("--tab-size", min=0, help="Spaces per tab")] = 4,
    ) -> None:
        """Reflow a text file (SGR styles preserved) and print it with a ruler."""
        from tui_panels.core.ansi import pad_to_width
        from tui_panels.core.style import RESET
        from tui_panels.text.reflow import reflow as reflow_text

        if not path.is_file():
            console.print(f"[red]No such file: {path}[/]")
            raise typer.Exit(1)

        text = path.read_text(encoding="utf-8", errors="replace")
        lines = reflow_text(text, width, word_wrap=wrap, tab_size=tab_size)

        ruler = "".join(str(i % 10) for i in range(1, width + 1))
        print(f" {ruler}")
        for line in lines:
            print(f"|{pad_to_width(line, width)}{RESET}|")
        console.print(f"[dim]{len(lines)} lines at width {width}[/]")

    return app
