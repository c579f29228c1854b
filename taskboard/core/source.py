"""
FILE: taskboard/core/source.py
PURPOSE: Interfaces the board core needs from the surrounding application
EXPORTS:
  - TaskSource (protocol): fetch_tasks(), update_task_status()
  - Notifier (protocol): notify(message, kind)
  - RepositoryTaskSource (class): TaskSource backed by the local SQLite store
DEPENDENCIES:
  - asyncio (stdlib, runs blocking repository calls off the event loop)
  - typing (Protocol)
  - taskboard.core.repository
NOTES:
  - update_task_status fails by raising; the core does not care why
  - notify is fire-and-forget; its return value is ignored
"""

import asyncio
from typing import List, Protocol

from . import repository
from .models import Task


class TaskSource(Protocol):
    """Where the canonical task list comes from and status changes go."""

    async def fetch_tasks(self) -> List[Task]:
        ...

    async def update_task_status(self, task_id: int, raw_status: str) -> None:
        ...


class Notifier(Protocol):
    """Sink for user-facing success/error messages."""

    def notify(self, message: str, kind: str) -> None:
        ...


class RepositoryTaskSource:
    """TaskSource over the SQLite repository."""

    async def fetch_tasks(self) -> List[Task]:
        return await asyncio.to_thread(repository.list_tasks)

    async def update_task_status(self, task_id: int, raw_status: str) -> None:
        await asyncio.to_thread(repository.update_task_status, task_id, raw_status)
