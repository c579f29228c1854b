"""
FILE: taskboard/core/repository.py
PURPOSE: Database operations and SQLite connection management
EXPORTS:
  - get_connection() -> Connection
  - init_database(conn) -> None
  - create_task(title, status, priority, description, due_date) -> Task
  - get_task(task_id) -> Task | None
  - list_tasks() -> List[Task]
  - update_task_status(task_id, status) -> Task
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - datetime (stdlib)
  - taskboard.core.models (Task)
  - taskboard.core.exceptions (TaskNotFoundError)
NOTES:
  - Database stored at ~/.taskboard/taskboard.db (overridable via set_database)
  - Auto-creates directory and initializes schema on first run
  - Returns domain objects (Task), never raw dicts
  - Statuses are stored verbatim; column mapping happens in core/status.py
"""

import sqlite3
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from .models import Task
from .exceptions import TaskNotFoundError


# Database file location (cross-platform)
DB_DIR = Path.home() / ".taskboard"
DB_PATH = DB_DIR / "taskboard.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'Not Started',
    priority TEXT NOT NULL DEFAULT 'normal',
    description TEXT,
    due_date TEXT,
    position INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_tasks_position ON tasks(position);
"""


def set_database(path: Path) -> None:
    """Point the repository at a different database file."""
    global DB_DIR, DB_PATH
    DB_PATH = Path(path).expanduser()
    DB_DIR = DB_PATH.parent


def get_connection() -> sqlite3.Connection:
    """
    Get SQLite connection to the board database.

    Creates the database directory if it doesn't exist.
    Enables row_factory for dict-like row access.
    Initializes database schema on first connection.
    """
    DB_DIR.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row

    init_database(conn)

    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
    """
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='tasks'"
    )
    if cursor.fetchone() is None:
        conn.executescript(SCHEMA_SQL)
        conn.commit()


def create_task(
    title: str,
    status: str = "Not Started",
    priority: str = "normal",
    description: Optional[str] = None,
    due_date: Optional[str] = None,
) -> Task:
    """
    Create a new task at the end of the board.

    Returns:
        Newly created Task object

    Note:
        Sets created_at and updated_at automatically.
    """
    conn = get_connection()
    try:
        now = datetime.now().isoformat()
        (position,) = conn.execute("SELECT COALESCE(MAX(position), 0) + 1 FROM tasks").fetchone()
        cursor = conn.execute(
            """
            INSERT INTO tasks (title, status, priority, description, due_date, position, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (title, status, priority, description, due_date, position, now, now),
        )
        conn.commit()
        task_id = cursor.lastrowid
    finally:
        conn.close()

    task = get_task(task_id)
    if not task:
        # This should never happen, but handle gracefully
        raise TaskNotFoundError(task_id)

    return task


def get_task(task_id: int) -> Optional[Task]:
    """
    Fetch single task by ID.

    Returns:
        Task object if found, None otherwise
    """
    conn = get_connection()
    try:
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
    finally:
        conn.close()

    return Task.from_row(row) if row else None


def list_tasks() -> List[Task]:
    """
    List all tasks in board order (position, then id).
    """
    conn = get_connection()
    try:
        rows = conn.execute("SELECT * FROM tasks ORDER BY position, id").fetchall()
    finally:
        conn.close()

    return [Task.from_row(row) for row in rows]


def update_task_status(task_id: int, status: str) -> Task:
    """
    Overwrite a task's raw status.

    Raises:
        TaskNotFoundError: If task_id doesn't exist

    Note:
        Automatically updates updated_at timestamp.
    """
    conn = get_connection()
    try:
        cursor = conn.execute(
            "UPDATE tasks SET status = ?, updated_at = ? WHERE id = ?",
            (status, datetime.now().isoformat(), task_id),
        )
        conn.commit()
        updated = cursor.rowcount
    finally:
        conn.close()

    if not updated:
        raise TaskNotFoundError(task_id)

    task = get_task(task_id)
    if not task:
        raise TaskNotFoundError(task_id)
    return task
