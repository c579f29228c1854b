"""
FILE: taskboard/cli/commands/board.py
PURPOSE: Board commands (board, add, import, mv, stats)
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from ..main import app, console, error_console, state
from ...core import service
from ...core.drag import DropOutcome
from ...core.exceptions import (
    TaskboardError,
    TaskNotFoundError,
    InvalidInputError,
)
from ...display import ConsoleNotifier, board_table, board_json, stats_table


def _session() -> service.BoardSession:
    return service.BoardSession(
        notifier=ConsoleNotifier(console, error_console),
        config=state["config"],
    )


@app.command()
def board(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the board.

    Example:
        taskboard board
        taskboard board --json
    """
    try:
        session = _session()
        asyncio.run(session.refresh())

        if json_output:
            console.print(board_json(session.store))
        else:
            console.print(board_table(session.store))

    except TaskboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    status: str = typer.Option("Not Started", "--status", "-s", help="Raw status (e.g. 'Pending', 'Done')"),
    priority: str = typer.Option("normal", "--priority", "-p", help="low, normal, high or critical"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Task description"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a new task.

    Example:
        taskboard add "Write documentation"
        taskboard add "Fix bug" --status "In Progress" --priority high
    """
    try:
        task = service.create_task(
            title=title,
            status=status,
            priority=priority,
            description=description,
        )

        if json_output:
            console.print(task.to_json())
        else:
            console.print(f"[green]✓ Created task [bold]#{task.id}[/bold]:[/green] {task.title}")

    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command("import")
def import_file(
    path: Path = typer.Argument(..., help="JSON file holding a list of tasks"),
):
    """
    Create tasks from a JSON file.

    The file holds a list of objects with at least a "title"; "status",
    "priority", "description" and "due_date" are optional.

    Example:
        taskboard import tasks.json
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        error_console.print(f"[red]Error:[/red] Could not read {path}: {e}")
        raise typer.Exit(1)

    if not isinstance(records, list):
        error_console.print("[red]Error:[/red] Expected a JSON list of tasks")
        raise typer.Exit(1)

    try:
        created = service.import_tasks(records)
    except TaskboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Imported {len(created)} task(s)[/green]")


@app.command()
def mv(
    task_id: int = typer.Argument(..., help="Task ID to drag"),
    column_name: str = typer.Argument(..., help="Target column (e.g. 'todo', 'In Progress', 'done')"),
    onto: Optional[int] = typer.Option(None, "--onto", "-o", help="Drop onto this task instead of the column end"),
):
    """
    Drag a task to a column, or onto a card within it.

    Dropping into the task's own column reorders it; any other column
    changes the task's status.

    Example:
        taskboard mv 5 "In Progress"
        taskboard mv 3 done --onto 7
    """
    try:
        column = service.find_column(column_name)
        session = _session()

        async def _drag():
            await session.refresh()
            return await session.move(task_id, column, onto=onto)

        result = asyncio.run(_drag())

    except (TaskNotFoundError, InvalidInputError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except TaskboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)

    if result is None or result.outcome is DropOutcome.CANCELLED:
        error_console.print("[red]Error:[/red] Drag did not start or had no drop target")
        raise typer.Exit(1)

    if result.outcome is DropOutcome.REORDER:
        if result.changed:
            console.print(
                f"[blue]↕[/blue] Task {task_id} now at position {result.index + 1} in "
                f"[cyan]{column.label}[/cyan] [dim](order is kept for this session only)[/dim]"
            )
        else:
            console.print(f"[dim]Task {task_id} is already there[/dim]")
    elif not result.changed:
        # Notifier already reported why
        raise typer.Exit(1)


@app.command()
def stats(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show task counts and WIP limits per column.

    Example:
        taskboard stats
    """
    try:
        session = _session()
        asyncio.run(session.refresh())
    except TaskboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    column_stats = session.column_stats()
    if json_output:
        data = [
            {
                "column": s.column.value,
                "count": s.count,
                "limit": s.limit,
                "over_capacity": s.over_capacity,
            }
            for s in column_stats
        ]
        console.print(json.dumps(data, indent=2))
    else:
        console.print(stats_table(column_stats))
