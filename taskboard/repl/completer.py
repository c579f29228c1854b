"""
FILE: taskboard/repl/completer.py
PURPOSE: Autocomplete for REPL commands, task ids and column names
EXPORTS:
  - BoardCompleter (Completer)
  - create_completer(session) -> BoardCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - taskboard.core.service (BoardSession, for live task ids)
NOTES:
  - Task ids come from the session's store, so they match what is shown
  - Column names are completed for the second argument of mv
"""

from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.models import Column


class BoardCompleter(Completer):
    """Context-aware completion for the board REPL."""

    COMMANDS = [
        "board", "pick", "up", "down", "left", "right", "drop", "cancel",
        "mv", "refresh", "stats", "help", "clear", "exit", "quit",
    ]

    # Commands whose first argument is a task id
    TASK_COMMANDS = ("pick", "mv")

    COLUMN_NAMES = ["todo", "in-progress", "done"]

    def __init__(self, session=None):
        self.session = session

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        words = text.split()
        word = document.get_word_before_cursor(WORD=True)
        # Index of the word being typed
        position = len(words) if text.endswith(" ") or not words else len(words) - 1

        if position == 0:
            yield from self._complete_from(self.COMMANDS, word)
            return

        command = words[0].lower()
        if command in self.TASK_COMMANDS and position == 1:
            yield from self._complete_task_ids(word)
        elif command == "mv" and position == 2:
            yield from self._complete_from(self.COLUMN_NAMES, word)
        elif command == "mv" and position >= 3:
            if word.startswith("-") or not word:
                yield from self._complete_from(["--onto"], word)

    def _complete_from(self, options, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for option in options:
            if option.startswith(word_lower):
                yield Completion(option, start_position=-len(word))

    def _complete_task_ids(self, word: str) -> Iterable[Completion]:
        if self.session is None:
            return
        store = self.session.store
        for task in store.tasks:
            id_str = str(task.id)
            if id_str.startswith(word):
                title = task.title if len(task.title) <= 40 else task.title[:37] + "..."
                column: Optional[Column] = store.board.column_of(task.id)
                meta = f"{title} [{column.label}]" if column else title
                yield Completion(id_str, start_position=-len(word), display=id_str, display_meta=meta)


def create_completer(session=None) -> BoardCompleter:
    """Create a completer bound to a BoardSession (may be None)."""
    return BoardCompleter(session)
