"""
FILE: taskboard/core/store.py
PURPOSE: Own the canonical task list and the board projected from it
EXPORTS:
  - ColumnStats (dataclass)
  - BoardStore (class)
DEPENDENCIES:
  - dataclasses (stdlib)
  - logging (stdlib)
  - taskboard.core.models (Task, Column)
  - taskboard.core.projection (Board, project)
  - taskboard.core.status (to_column)
  - taskboard.core.exceptions (TaskNotFoundError, InvalidInputError)
NOTES:
  - Invariant: store.board == project(store.tasks) after every call
  - Reorders and moves rewrite the task LIST, then reproject; the board is
    never edited directly
  - Rendering code reads store.board and store.tasks but must not mutate them
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional

from .models import Task, Column
from .projection import Board, project
from .status import to_column
from .exceptions import TaskNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass
class ColumnStats:
    """Occupancy of one column."""

    column: Column
    count: int
    limit: Optional[int] = None

    @property
    def is_full(self) -> bool:
        return self.limit is not None and self.count >= self.limit

    @property
    def over_capacity(self) -> bool:
        return self.limit is not None and self.count > self.limit


class BoardStore:
    """
    Holds the task list for one board and its current projection.

    All column changes go through load(), reorder() or relocate().
    """

    def __init__(self, tasks: Iterable[Task] = (), wip_limits: Optional[Dict[Column, int]] = None):
        self.wip_limits: Dict[Column, int] = dict(wip_limits or {})
        self._tasks: List[Task] = []
        self._board = Board()
        self.load(tasks)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def board(self) -> Board:
        return self._board

    def load(self, tasks: Iterable[Task]) -> Board:
        """
        Replace the canonical list and rebuild the board.

        Raises:
            InvalidInputError: If two tasks share an id
        """
        tasks = list(tasks)
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise InvalidInputError(f"Duplicate task id {task.id} in task list")
            seen.add(task.id)

        self._tasks = tasks
        self._board = project(tasks)
        logger.debug("Board rebuilt from %d task(s)", len(tasks))
        return self._board

    def get(self, task_id: int) -> Task:
        """Fetch a task by id (raises TaskNotFoundError)."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def column_of(self, task_id: int) -> Column:
        """Column currently holding task_id (raises TaskNotFoundError)."""
        return to_column(self.get(task_id).status)

    def snapshot(self) -> List[Task]:
        return list(self._tasks)

    def restore(self, snapshot: List[Task]) -> None:
        self.load(snapshot)

    def reorder(self, task_id: int, index: int) -> bool:
        """
        Move a task to a new index inside its own column.

        Args:
            task_id: Task to move
            index: Target position in the column (clamped to the column bounds)

        Returns:
            True if the order changed, False if the task was already there

        Notes:
            - Other columns are untouched
            - The column keeps exactly the same members
        """
        column = self.column_of(task_id)
        sequence = list(self._board[column])
        current = sequence.index(task_id)
        index = max(0, min(index, len(sequence) - 1))
        if index == current:
            return False

        sequence.pop(current)
        sequence.insert(index, task_id)

        # Refill this column's slots in the list with the new order
        by_id = {task.id: task for task in self._tasks}
        slots = iter(sequence)
        reordered = [
            by_id[next(slots)] if to_column(task.status) is column else task
            for task in self._tasks
        ]
        self.load(reordered)
        return True

    def relocate(
        self,
        task_id: int,
        column: Column,
        raw_status: str,
        before: Optional[int] = None,
    ) -> Task:
        """
        Rewrite a task's status and place it in another column.

        Args:
            task_id: Task to move
            column: Destination column (must match to_column(raw_status))
            raw_status: Status string to store on the task
            before: Insert ahead of this task; None appends to the column

        Returns:
            The updated Task value
        """
        if to_column(raw_status) is not column:
            raise InvalidInputError(f"Status '{raw_status}' does not belong to {column.value}")

        task = self.get(task_id)
        moved = replace(task, status=raw_status)
        remaining = [t for t in self._tasks if t.id != task_id]

        position = len(remaining)
        if before is not None:
            for i, other in enumerate(remaining):
                if other.id == before:
                    if to_column(other.status) is column:
                        position = i
                    break

        remaining.insert(position, moved)
        self.load(remaining)
        return moved

    def column_stats(self) -> List[ColumnStats]:
        return [
            ColumnStats(column=column, count=len(self._board[column]), limit=self.wip_limits.get(column))
            for column in Column
        ]

    def stats_for(self, column: Column) -> ColumnStats:
        return ColumnStats(column=column, count=len(self._board[column]), limit=self.wip_limits.get(column))
