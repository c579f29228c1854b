"""
FILE: taskboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - version() - Show version
  - repl() - Launch interactive REPL
  - board() - Show the board
  - add() - Create task
  - import_file() - Create tasks from a JSON file
  - mv() - Drag a task to a column
  - stats() - Column counts and WIP limits
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - taskboard.config (BoardConfig, logging)
  - taskboard.core.repository (database location)
NOTES:
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Running with no command launches the REPL
"""

import sys
from pathlib import Path
from typing import Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console

from .. import __version__
from ..config import BoardConfig, load_config, setup_logging
from ..core import repository
from ..core.exceptions import TaskboardError

# Typer app setup
app = typer.Typer(
    name="taskboard",
    help="Three-column task board with drag-and-drop moves",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Config for the current invocation (set by the callback)
state = {"config": BoardConfig()}


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Load configuration, then launch the REPL when no command is specified.
    """
    setup_logging(verbose, console=error_console)
    try:
        config = load_config(config_path)
        config.column_limits()
    except TaskboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if config.database is not None:
        repository.set_database(config.database)
    state["config"] = config

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main(config)
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
from .commands import (
    version,
    repl,
    board,
    add,
    import_file,
    mv,
    stats,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
