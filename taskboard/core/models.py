"""
FILE: taskboard/core/models.py
PURPOSE: Domain models for tasks and board columns
EXPORTS:
  - Task (dataclass)
  - Column (enum)
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - Task is frozen: the board replaces values (dataclasses.replace), never edits them
  - Task.status is the backend's raw string, not a Column
  - Column is the board's canonical bucket; see core/status.py for the mapping
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional
import json


class Column(Enum):
    """One of the three canonical board columns."""

    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @property
    def label(self) -> str:
        """Human-readable column heading."""
        return {
            Column.TODO: "To Do",
            Column.IN_PROGRESS: "In Progress",
            Column.COMPLETED: "Completed",
        }[self]


@dataclass(frozen=True)
class Task:
    """A task as supplied by the task source."""

    id: int
    title: str
    status: str = "Not Started"
    priority: str = "normal"
    description: Optional[str] = None
    due_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Task":
        """Convert SQLite row to Task object."""
        return cls(
            id=row["id"],
            title=row["title"],
            status=row["status"],
            priority=row["priority"],
            description=row["description"],
            due_date=row["due_date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(asdict(self), indent=2)
