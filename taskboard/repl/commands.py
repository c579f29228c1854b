"""
FILE: taskboard/repl/commands.py
PURPOSE: REPL command handlers
EXPORTS:
  - handle_board_command, handle_pick_command, handle_step_command,
    handle_drop_command, handle_cancel_command, handle_mv_command,
    handle_refresh_command, handle_stats_command, handle_help_command
DEPENDENCIES:
  - rich (formatted output)
  - taskboard.core (service, drag, exceptions)
  - taskboard.display (board rendering)
NOTES:
  - Every handler takes (session, result, console)
  - Handlers that can drop are coroutines
  - Errors are printed, never raised, so the loop keeps running
"""

from rich.console import Console

from ..core import service
from ..core.drag import DropOutcome, DropResult
from ..core.exceptions import TaskboardError
from ..display import board_table, stats_table
from .parser import ParseResult


def _show(session: service.BoardSession, console: Console) -> None:
    controller = session.controller
    drag_task_id = controller.session.task_id if controller.session else None
    console.print(board_table(session.store, drag_task_id=drag_task_id, cursor=session.keyboard.drop_slot))


def _parse_id(value: str, console: Console):
    try:
        return int(value)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid task ID '{value}'")
        return None


def _report(result: DropResult, console: Console) -> None:
    if result is None:
        console.print("[dim]Nothing to drop[/dim]")
    elif result.outcome is DropOutcome.CANCELLED:
        console.print("[dim]Dropped outside the board, nothing changed[/dim]")
    elif result.outcome is DropOutcome.REORDER:
        if result.changed:
            console.print(f"[blue]↕[/blue] Task {result.task_id} moved to position {result.index + 1}")
        else:
            console.print("[dim]Order unchanged[/dim]")
    # Column moves are reported by the notifier


def handle_board_command(session, result: ParseResult, console: Console) -> None:
    _show(session, console)


def handle_pick_command(session, result: ParseResult, console: Console) -> None:
    if not result.args:
        console.print("[red]Error:[/red] Usage: pick <task_id>")
        return
    task_id = _parse_id(result.args[0], console)
    if task_id is None:
        return
    try:
        picked = session.keyboard.pick(task_id)
    except TaskboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return
    if not picked:
        if session.mutator.busy:
            console.print("[yellow]Still saving the previous move, try again in a moment[/yellow]")
        else:
            console.print("[yellow]Already dragging; drop or cancel first[/yellow]")
        return
    console.print("[dim]Picked up. Use up/down/left/right, then drop (or cancel)[/dim]")
    _show(session, console)


def handle_step_command(session, result: ParseResult, console: Console) -> None:
    steps = {
        "up": session.keyboard.up,
        "down": session.keyboard.down,
        "left": session.keyboard.left,
        "right": session.keyboard.right,
    }
    if not session.controller.is_dragging:
        console.print("[yellow]Nothing picked up. Use 'pick <task_id>' first[/yellow]")
        return
    if not steps[result.command]():
        console.print("[dim]Can't move further that way[/dim]")
    _show(session, console)


async def handle_drop_command(session, result: ParseResult, console: Console) -> None:
    _report(await session.keyboard.drop(), console)
    _show(session, console)


def handle_cancel_command(session, result: ParseResult, console: Console) -> None:
    if session.keyboard.cancel():
        console.print("[dim]Drag cancelled[/dim]")
    else:
        console.print("[dim]Nothing to cancel[/dim]")


async def handle_mv_command(session, result: ParseResult, console: Console) -> None:
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Usage: mv <task_id> <column> [--onto <task_id>]")
        return
    task_id = _parse_id(result.args[0], console)
    if task_id is None:
        return
    onto = None
    if result.value("onto") is not None:
        onto = _parse_id(result.value("onto"), console)
        if onto is None:
            return
    try:
        column = service.find_column(result.args[1])
        drop = await session.move(task_id, column, onto=onto)
    except TaskboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return
    if drop is None:
        console.print("[yellow]Could not start the drag (another move may still be saving)[/yellow]")
        return
    _report(drop, console)
    _show(session, console)


async def handle_refresh_command(session, result: ParseResult, console: Console) -> None:
    if session.controller.is_dragging:
        console.print("[yellow]Drop or cancel the current drag first[/yellow]")
        return
    try:
        await session.refresh()
    except TaskboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return
    _show(session, console)


def handle_stats_command(session, result: ParseResult, console: Console) -> None:
    console.print(stats_table(session.column_stats()))


def handle_help_command(session, result: ParseResult, console: Console) -> None:
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("board", "Show the board"),
        ("pick <id>", "Pick up a task to drag it"),
        ("up / down", "Move the drop slot within a column"),
        ("left / right", "Move the drop slot to the next column"),
        ("drop", "Drop the task at the slot"),
        ("cancel", "Put the task back where it was"),
        ("mv <id> <column> [--onto <id>]", "Drag a task in one step"),
        ("refresh", "Reload tasks from the database"),
        ("stats", "Column counts and WIP limits"),
        ("clear", "Clear the screen"),
        ("exit", "Quit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [green]{cmd:34}[/green] {desc}")
