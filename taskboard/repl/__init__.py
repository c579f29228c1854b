"""
FILE: taskboard/repl/__init__.py
PURPOSE: REPL package for the interactive board
EXPORTS:
  - main() (from repl.main)
"""

from .main import main

__all__ = ["main"]
