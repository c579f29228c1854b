"""
FILE: taskboard/cli/commands/system.py
PURPOSE: System commands (version, repl)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, state, __version__


@app.command()
def version():
    """Show taskboard version."""
    console.print(f"taskboard v{__version__}")


@app.command()
def repl():
    """Launch the interactive board (keyboard drag-and-drop)."""
    from ...repl import main as repl_main
    try:
        repl_main(state["config"])
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
