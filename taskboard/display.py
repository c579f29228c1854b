"""
FILE: taskboard/display.py
PURPOSE: Rich rendering of the board and user notifications
EXPORTS:
  - ConsoleNotifier (class): Notifier printing to a Rich console
  - column_lines(store, column, drag_task_id, cursor) -> List[str]
  - board_table(store, drag_task_id, cursor) -> Table
  - stats_table(stats) -> Table
  - board_json(store) -> str
DEPENDENCIES:
  - rich (formatted output)
  - taskboard.core (models, store)
NOTES:
  - Read-only: nothing here changes the store
  - Shared by the CLI and the REPL
"""

import json
from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from .core.models import Task, Column
from .core.store import BoardStore, ColumnStats
from .core.constants import NOTIFY_SUCCESS

console = Console()

PRIORITY_STYLES = {
    "low": "dim",
    "normal": "white",
    "high": "yellow",
    "critical": "bold red",
}

COLUMN_STYLES = {
    Column.TODO: "cyan",
    Column.IN_PROGRESS: "magenta",
    Column.COMPLETED: "green",
}


class ConsoleNotifier:
    """Prints notifications; errors go to stderr."""

    def __init__(self, console_instance: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console_instance or console
        self.error_console = error_console or Console(stderr=True)

    def notify(self, message: str, kind: str) -> None:
        if kind == NOTIFY_SUCCESS:
            self.console.print(f"[green]✓ {message}[/green]")
        else:
            self.error_console.print(f"[red]Error:[/red] {message}")


def _card(task: Task, dragging: bool = False) -> str:
    style = PRIORITY_STYLES.get(task.priority, "white")
    text = f"[cyan]#{task.id}[/cyan] [{style}]{task.title}[/{style}]"
    if dragging:
        text = f"[reverse]{text}[/reverse]"
    return text


DROP_MARKER = "[bold yellow]→ drop here[/bold yellow]"


def column_lines(
    store: BoardStore,
    column: Column,
    drag_task_id: Optional[int] = None,
    cursor: Optional[Tuple[Column, int]] = None,
) -> List[str]:
    """
    Card lines for one column, with the drop marker where the card would land.

    Within the dragged card's own column a drop on slot i moves the card
    to index i, so below its current position the marker goes after card i.
    """
    by_id = {task.id: task for task in store.tasks}
    ids = store.board[column]
    lines = [_card(by_id[task_id], task_id == drag_task_id) for task_id in ids]
    if cursor is None or cursor[0] is not column:
        return lines

    position = cursor[1]
    if drag_task_id in ids and position > ids.index(drag_task_id):
        position += 1
    lines.insert(min(position, len(lines)), DROP_MARKER)
    return lines


def board_table(
    store: BoardStore,
    drag_task_id: Optional[int] = None,
    cursor: Optional[Tuple[Column, int]] = None,
) -> Table:
    """
    Build a three-column table of the board.

    Args:
        store: Store to render
        drag_task_id: Task currently being dragged (highlighted)
        cursor: Keyboard drop slot to mark with an arrow
    """
    table = Table(show_header=True, header_style="bold", expand=True)
    stats = {s.column: s for s in store.column_stats()}
    for column in Column:
        count = stats[column].count
        limit = f"/{stats[column].limit}" if stats[column].limit else ""
        style = COLUMN_STYLES[column]
        table.add_column(f"[{style}]{column.label}[/{style}] [dim]({count}{limit})[/dim]")

    cells = []
    for column in Column:
        lines = column_lines(store, column, drag_task_id, cursor)
        cells.append("\n".join(lines) if lines else "[dim]empty[/dim]")
    table.add_row(*cells)
    return table


def stats_table(stats: List[ColumnStats]) -> Table:
    table = Table(title="Columns", show_header=True, header_style="bold cyan")
    table.add_column("Column", style="white")
    table.add_column("Tasks", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Status")
    for s in stats:
        if s.over_capacity:
            status = "[red]over limit[/red]"
        elif s.is_full:
            status = "[yellow]full[/yellow]"
        else:
            status = "[green]ok[/green]"
        table.add_row(s.column.label, str(s.count), str(s.limit) if s.limit else "-", status)
    return table


def board_json(store: BoardStore) -> str:
    """Board as JSON: column -> list of task dicts."""
    by_id = {task.id: task for task in store.tasks}
    data = {
        column.value: [
            {"id": t.id, "title": t.title, "status": t.status, "priority": t.priority}
            for t in (by_id[task_id] for task_id in store.board[column])
        ]
        for column in Column
    }
    return json.dumps(data, indent=2)
