"""
FILE: taskboard/core/service.py
PURPOSE: Business logic layer and board session wiring
EXPORTS:
  - create_task(title, status, priority, description, due_date) -> Task
  - import_tasks(records) -> List[Task]
  - find_column(name) -> Column
  - BoardSession (class)
DEPENDENCIES:
  - taskboard.core.repository (task persistence)
  - taskboard.core.store, mutator, drag, layout (board engine)
  - taskboard.gestures (pointer/keyboard adapters)
  - taskboard.config (BoardConfig)
  - taskboard.core.exceptions (InvalidInputError)
NOTES:
  - All functions validate input and raise descriptive errors
  - BoardSession is the one object UIs talk to: it owns the store and routes
    every gesture through the DragController
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from . import repository
from .models import Task, Column
from .constants import VALID_PRIORITIES, DEFAULT_PRIORITY, RAW_STATUS_TODO
from .exceptions import InvalidInputError
from .status import to_column, is_known_status
from .store import BoardStore, ColumnStats
from .source import TaskSource, Notifier, RepositoryTaskSource
from .mutator import Mutator
from .drag import DragController, DropResult
from ..config import BoardConfig
from ..gestures import PointerAdapter, KeyboardAdapter

logger = logging.getLogger(__name__)


def create_task(
    title: str,
    status: str = RAW_STATUS_TODO,
    priority: str = DEFAULT_PRIORITY,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
) -> Task:
    """
    Create a new task with validation.

    Args:
        title: Task title (required, must not be empty)
        status: Raw status; anything unrecognised still shows up in To Do
        priority: One of low, normal, high, critical
        description: Optional task description
        due_date: Optional ISO date

    Returns:
        Newly created Task object

    Raises:
        InvalidInputError: If title is empty or priority is invalid
    """
    title = title.strip()
    if not title:
        raise InvalidInputError("Task title cannot be empty")

    priority = (priority or DEFAULT_PRIORITY).strip().lower()
    if priority not in VALID_PRIORITIES:
        raise InvalidInputError(
            f"Invalid priority '{priority}'. Must be one of: {', '.join(VALID_PRIORITIES)}"
        )

    description = description.strip() if description else None

    return repository.create_task(
        title=title,
        status=(status or RAW_STATUS_TODO).strip(),
        priority=priority,
        description=description or None,
        due_date=due_date,
    )


def import_tasks(records: Iterable[Dict[str, Any]]) -> List[Task]:
    """
    Create tasks from JSON-style records ({"title": ..., "status": ...}).

    Raises:
        InvalidInputError: If a record is not a mapping or has no title;
            records before the bad one are kept
    """
    created = []
    for number, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise InvalidInputError(f"Record {number} is not an object")
        created.append(
            create_task(
                title=str(record.get("title") or ""),
                status=str(record.get("status") or RAW_STATUS_TODO),
                priority=str(record.get("priority") or DEFAULT_PRIORITY),
                description=record.get("description"),
                due_date=record.get("due_date"),
            )
        )
    return created


def find_column(name: str) -> Column:
    """
    Resolve a user-typed column name ("todo", "In Progress", "done", ...).

    Raises:
        InvalidInputError: If the name matches no column; unlike task
            statuses, typed names do not fall back to To Do
    """
    if not is_known_status(name):
        available = ", ".join(column.label for column in Column)
        raise InvalidInputError(f"Column '{name}' not found. Available columns: {available}")
    return to_column(name)


class BoardSession:
    """
    A live board: canonical list, drag engine, and gesture adapters.

    Attributes:
        store: BoardStore holding the tasks and the projected board
        mutator: Mutator performing optimistic column moves
        controller: DragController state machine
        pointer: PointerAdapter feeding the controller
        keyboard: KeyboardAdapter feeding the controller
    """

    def __init__(
        self,
        notifier: Notifier,
        source: Optional[TaskSource] = None,
        config: Optional[BoardConfig] = None,
    ):
        self.config = config or BoardConfig()
        self.source = source or RepositoryTaskSource()
        self.notifier = notifier
        self.layout = self.config.layout
        self.store = BoardStore(wip_limits=self.config.column_limits())
        self.mutator = Mutator(self.store, self.source, notifier, timeout=self.config.persist_timeout)
        self.controller = DragController(
            self.store,
            self.mutator,
            self.layout.targets,
            activation_distance=self.config.activation_distance,
        )
        self.pointer = PointerAdapter(self.controller, self.layout)
        self.keyboard = KeyboardAdapter(self.controller, self.layout)

    async def refresh(self) -> None:
        """Load the full task list from the source and rebuild the board."""
        tasks = await self.source.fetch_tasks()
        self.store.load(tasks)

    async def move(self, task_id: int, column: Column, onto: Optional[int] = None) -> Optional[DropResult]:
        """Drag task_id into column (optionally onto a card) via the keyboard path."""
        self.store.get(task_id)
        return await self.keyboard.drag_to(task_id, column, onto=onto)

    def tasks_in(self, column: Column) -> List[Task]:
        by_id = {task.id: task for task in self.store.tasks}
        return [by_id[task_id] for task_id in self.store.board[column]]

    def column_stats(self) -> List[ColumnStats]:
        return self.store.column_stats()
