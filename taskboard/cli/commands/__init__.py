"""
FILE: taskboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .board import (
    board,
    add,
    import_file,
    mv,
    stats,
)
from .system import (
    version,
    repl,
)

__all__ = [
    "board",
    "add",
    "import_file",
    "mv",
    "stats",
    "version",
    "repl",
]
