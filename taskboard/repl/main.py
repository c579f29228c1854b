"""
FILE: taskboard/repl/main.py
PURPOSE: Interactive board with keyboard drag-and-drop (prompt-toolkit)
EXPORTS:
  - main(config) - Entry point for REPL mode
  - run_repl(session) - Main REPL loop (coroutine)
  - execute_command(session, result) - Dispatch one parsed command
  - run_line(session, line) - Parse and dispatch one input line
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - taskboard.core.service (BoardSession)
  - taskboard.repl.parser, completer, commands
NOTES:
  - Runs on one asyncio loop, so a status update awaits in the same loop
    that reads the next command
  - Bottom toolbar shows column counts and the drag state
  - Ctrl+D or "exit"/"quit" to exit
"""

import asyncio
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.formatted_text import HTML
from rich.console import Console

from ..config import BoardConfig
from ..core import service
from ..core.exceptions import TaskboardError, InvalidInputError
from ..display import ConsoleNotifier
from .parser import parse_command, ParseResult
from .completer import create_completer
from .commands import (
    handle_board_command,
    handle_pick_command,
    handle_step_command,
    handle_drop_command,
    handle_cancel_command,
    handle_mv_command,
    handle_refresh_command,
    handle_stats_command,
    handle_help_command,
)

# Rich console for formatted output
console = Console()

HANDLERS = {
    "board": handle_board_command,
    "ls": handle_board_command,
    "pick": handle_pick_command,
    "up": handle_step_command,
    "down": handle_step_command,
    "left": handle_step_command,
    "right": handle_step_command,
    "drop": handle_drop_command,
    "cancel": handle_cancel_command,
    "mv": handle_mv_command,
    "refresh": handle_refresh_command,
    "stats": handle_stats_command,
    "help": handle_help_command,
}


def format_prompt(session: service.BoardSession) -> HTML:
    """'board> ' normally, 'board:[dragging #3]> ' during a drag."""
    drag = session.controller.session
    if drag is not None:
        return HTML(f"<b>board:[<ansiyellow>dragging #{drag.task_id}</ansiyellow>]&gt; </b>")
    return HTML("<b>board&gt; </b>")


def plain_prompt(session: service.BoardSession) -> str:
    drag = session.controller.session
    return f"board:[dragging #{drag.task_id}]> " if drag is not None else "board> "


def bottom_toolbar(session: service.BoardSession) -> HTML:
    counts = " | ".join(f"{s.column.label}: {s.count}" for s in session.column_stats())
    saving = " | saving..." if session.mutator.busy else ""
    return HTML(f"<style bg='#444444' fg='#ffffff'> {counts}{saving} </style>")


async def execute_command(session: service.BoardSession, result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    if not command:
        return True

    if command == "clear":
        console.clear()
        return True

    handler = HANDLERS.get(command)
    if handler is None:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()
        return True

    outcome = handler(session, result, console)
    if asyncio.iscoroutine(outcome):
        await outcome
    console.print()
    return True


async def run_line(session: service.BoardSession, line: str) -> bool:
    """Parse one input line and run it; parse errors are printed, not raised."""
    try:
        result = parse_command(line)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print()
        return True
    return await execute_command(session, result)


async def run_repl(session: service.BoardSession) -> None:
    """
    Main REPL loop.

    Exits on Ctrl+D (EOFError) or "exit"/"quit". Ctrl+C cancels an
    active drag instead of leaving.
    """
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()
    prompt_session: Optional[PromptSession] = None

    if has_tty:
        try:
            prompt_session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(session),
                complete_while_typing=True,
                bottom_toolbar=lambda: bottom_toolbar(session),
            )
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")

    try:
        await session.refresh()
    except TaskboardError as e:
        console.print(f"[red]Error:[/red] Could not load tasks: {e}")

    console.print("[bold cyan]taskboard[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if prompt_session is None:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    while True:
        try:
            if prompt_session is None:
                user_input = await asyncio.to_thread(input, plain_prompt(session))
            else:
                user_input = await prompt_session.prompt_async(format_prompt(session))

            if not await run_line(session, user_input):
                break

        except KeyboardInterrupt:
            if session.keyboard.cancel():
                console.print("[dim]^C Drag cancelled[/dim]")
            else:
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            console.print()
            console.print("[dim]Goodbye![/dim]")
            break
        except TaskboardError as e:
            console.print(f"[red]Error:[/red] {e}")


def main(config: Optional[BoardConfig] = None) -> None:
    """
    Entry point for REPL mode.

    Called when user runs: taskboard (or taskboard repl)
    """
    session = service.BoardSession(
        notifier=ConsoleNotifier(console),
        config=config or BoardConfig(),
    )
    try:
        asyncio.run(run_repl(session))
    except TaskboardError as e:
        console.print(f"[red]Fatal error:[/red] {e}")
        sys.exit(1)
