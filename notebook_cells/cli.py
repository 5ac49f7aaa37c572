"""
Developer CLI for notebook-cells with Rich output.
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from notebook_cells import Cell, NotebookApp, NotebookDocument, NotebookStore
from notebook_cells.banners import banners_for
from notebook_cells.commands import FocusCell
from notebook_cells.config import Settings
from notebook_cells.gestures import KeyEvent, gesture_commands
from notebook_cells.listener import KeyboardHub
from notebook_cells.reorder import InvalidMove, move_cell
from notebook_cells.visibility import resolve_cell


console = Console()

PLATFORMS = click.Choice(["mac", "other"])


def _setup_logging(level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


def _settings(platform: Optional[str]) -> Settings:
    settings = Settings.from_env()
    if platform:
        settings = settings.model_copy(update={"platform": platform})
    return settings


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_chord(chord: str) -> KeyEvent:
    """Parse "shift+enter", "ctrl+meta+enter", "a" ... into a KeyEvent."""
    *modifiers, key = [part.strip().lower() for part in chord.split("+")]
    unknown = set(modifiers) - {"shift", "ctrl", "meta", "cmd"}
    if unknown:
        raise click.BadParameter(f"unknown modifier(s) in {chord!r}: {', '.join(sorted(unknown))}")
    return KeyEvent(
        key="Enter" if key in ("enter", "return") else key,
        shift_pressed="shift" in modifiers,
        ctrl_pressed="ctrl" in modifiers,
        meta_pressed="meta" in modifiers or "cmd" in modifiers,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """notebook-cells: inspect the cell coordination core."""
    _setup_logging("DEBUG" if verbose else Settings.from_env().log_level)


@main.command()
@click.option("--shift", is_flag=True, help="Shift held")
@click.option("--ctrl", is_flag=True, help="Ctrl held")
@click.option("--meta", is_flag=True, help="Meta/Cmd held")
@click.option("--key", default="Enter", help="Key name")
@click.option("--platform", type=PLATFORMS, default=None, help="Override platform detection")
def gesture(shift: bool, ctrl: bool, meta: bool, key: str, platform: Optional[str]):
    """Show the commands a keypress emits."""
    settings = _settings(platform)
    event = KeyEvent(
        key=key,
        shift_pressed=shift,
        ctrl_pressed=ctrl,
        meta_pressed=meta,
        platform_is_mac=settings.is_mac,
    )
    commands = gesture_commands(event)

    if not commands:
        console.print("[yellow]Not consumed[/yellow] [dim](default key behaviour applies)[/dim]")
        return

    table = Table(title="Emitted commands", border_style="blue")
    table.add_column("#", style="bold cyan", justify="right")
    table.add_column("Command")
    for i, command in enumerate(commands):
        table.add_row(str(i), repr(command))
    console.print(table)


@main.command()
@click.argument("order", nargs=-1, required=True)
@click.option("--id", "cell_id", required=True, help="Cell to move")
@click.option("--dest", "destination_id", required=True, help="Cell to move next to")
@click.option("--above/--below", default=True, help="Side of the destination")
def move(order: tuple, cell_id: str, destination_id: str, above: bool):
    """Move a cell within ORDER and print the new order."""
    result = move_cell(list(order), cell_id, destination_id, above)
    if isinstance(result, InvalidMove):
        console.print(f"[red]Invalid move: {result.reason.value}[/red]")
        sys.exit(1)
    console.print(" ".join(result))


@main.command()
@click.option("--type", "cell_type", type=click.Choice(["code", "markdown", "raw"]), default="code")
@click.option("--outputs", "output_count", type=int, default=0, help="Number of outputs")
@click.option("--meta", "meta_items", multiple=True, help="Metadata entry as key=value (JSON value)")
@click.option("--tag", "tags", multiple=True, help="Cell tag")
def inspect(cell_type: str, output_count: int, meta_items: tuple, tags: tuple):
    """Show derived visibility and banners for a cell."""
    metadata = {}
    for item in meta_items:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--meta")
        metadata[key] = _parse_value(value)
    if tags:
        metadata["tags"] = list(tags)

    cell = Cell.from_dict({
        "cell_type": cell_type,
        "metadata": metadata,
        "outputs": [{} for _ in range(output_count)],
    })
    visibility = resolve_cell(cell)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Flag", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("source_hidden", str(visibility.source_hidden))
    table.add_row("output_hidden", str(visibility.output_hidden))
    table.add_row("output_expanded", str(visibility.output_expanded))
    banners = banners_for(cell.tags)
    table.add_row("banners", "\n".join(b.text for b in banners) or "-")

    console.print(Panel(table, title=f"[bold blue]{cell_type} cell[/bold blue]", border_style="blue"))


@main.command()
@click.argument("chords", nargs=-1)
@click.option("--cells", "cell_count", type=int, default=2, help="Number of code cells to start with")
@click.option("--platform", type=PLATFORMS, default=None, help="Override platform detection")
def replay(chords: tuple, cell_count: int, platform: Optional[str]):
    """Replay key CHORDS (e.g. shift+enter ctrl+enter) against a scratch notebook."""
    executed = []
    document = NotebookDocument.from_cells(
        Cell(id=f"cell_{i + 1}", source=f"x = {i + 1}") for i in range(cell_count)
    )
    store = NotebookStore(document, executor=lambda cell: executed.append(cell.id))
    if document.cell_order:
        store.dispatch(FocusCell(id=document.cell_order[0]))

    hub = KeyboardHub()
    with NotebookApp(store, hub, settings=_settings(platform)) as app:
        for chord in chords:
            event = hub.emit(parse_chord(chord))
            state = "[green]consumed[/green]" if event.default_prevented else "[dim]ignored[/dim]"
            console.print(f"{chord}: {state}")
        rows = app.render_state()

    table = Table(title="Cells", border_style="blue")
    table.add_column("Id", style="bold cyan")
    table.add_column("Type")
    table.add_column("Focused")
    table.add_column("Editing")
    for row in rows:
        table.add_row(row["id"], row["type"], "yes" if row["focused"] else "", "yes" if row["editing"] else "")
    console.print(table)
    console.print(f"Executed: {', '.join(executed) or '-'}")


if __name__ == "__main__":
    main()
