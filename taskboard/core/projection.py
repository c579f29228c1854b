"""
FILE: taskboard/core/projection.py
PURPOSE: Derive the three ordered board columns from the flat task list
EXPORTS:
  - Board (dataclass)
  - project(tasks) -> Board
DEPENDENCIES:
  - taskboard.core.models (Task, Column)
  - taskboard.core.status (to_column)
NOTES:
  - project() is pure: same list in, same Board out
  - Within a column, order follows the input list
  - The board is always rebuilt from scratch, never patched
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import Task, Column
from .status import to_column


def _empty_columns() -> Dict[Column, List[int]]:
    return {column: [] for column in Column}


@dataclass
class Board:
    """Ordered task ids per column."""

    columns: Dict[Column, List[int]] = field(default_factory=_empty_columns)

    def __getitem__(self, column: Column) -> List[int]:
        return self.columns[column]

    def column_of(self, task_id: int) -> Optional[Column]:
        """Column holding task_id, or None if it is not on the board."""
        for column, ids in self.columns.items():
            if task_id in ids:
                return column
        return None

    def index_of(self, task_id: int) -> int:
        """Position of task_id within its column (ValueError if absent)."""
        column = self.column_of(task_id)
        if column is None:
            raise ValueError(f"task {task_id} is not on the board")
        return self.columns[column].index(task_id)

    def task_ids(self) -> List[int]:
        """All ids, column by column."""
        return [task_id for column in Column for task_id in self.columns[column]]

    def as_dict(self) -> Dict[str, List[int]]:
        return {column.value: list(ids) for column, ids in self.columns.items()}


def project(tasks: Iterable[Task]) -> Board:
    """
    Build the board for a task list.

    Args:
        tasks: Canonical task list, in display order

    Returns:
        Board with each task id appended to the column of its status
    """
    board = Board()
    for task in tasks:
        board.columns[to_column(task.status)].append(task.id)
    return board
