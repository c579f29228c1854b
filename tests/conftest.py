"""Shared pytest configuration and fixtures for tests."""

import asyncio
import io
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskboard import config as config_module
from taskboard.core import repository
from taskboard.core.models import Task


class FakeSource:
    """
    In-memory task source.

    `tasks` is the server's truth. Status updates change it unless
    `fail` is set; `gate` (an asyncio.Event) holds updates until set.
    """

    def __init__(self, tasks=()):
        self.tasks: List[Task] = list(tasks)
        self.updates = []
        self.fetches = 0
        self.fail: Optional[Exception] = None
        self.fetch_error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    async def fetch_tasks(self) -> List[Task]:
        self.fetches += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.tasks)

    async def update_task_status(self, task_id: int, raw_status: str) -> None:
        self.updates.append((task_id, raw_status))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail is not None:
            raise self.fail
        self.tasks = [replace(t, status=raw_status) if t.id == task_id else t for t in self.tasks]


class RecordingNotifier:
    """Keeps every (message, kind) it receives."""

    def __init__(self):
        self.messages = []

    def notify(self, message: str, kind: str) -> None:
        self.messages.append((message, kind))

    @property
    def kinds(self):
        return [kind for _, kind in self.messages]


def make_tasks(*specs) -> List[Task]:
    """make_tasks((1, "Pending"), (2, "Completed")) -> Tasks titled 'Task 1', ..."""
    return [Task(id=task_id, title=f"Task {task_id}", status=status) for task_id, status in specs]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def temp_db(monkeypatch, tmp_path):
    """Use temporary database and no user config for the test."""
    db_path = tmp_path / "test_taskboard.db"
    monkeypatch.setattr(repository, "DB_PATH", db_path)
    monkeypatch.setattr(repository, "DB_DIR", tmp_path)
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "missing-config.yaml")
    yield db_path
