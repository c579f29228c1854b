"""
FILE: taskboard/core/status.py
PURPOSE: Map the backend's free-form status vocabulary onto board columns
EXPORTS:
  - normalize_status(raw_status) -> str
  - to_column(raw_status) -> Column
  - to_raw_status(column) -> str
DEPENDENCIES:
  - taskboard.core.models (Column)
  - taskboard.core.constants (synonym sets, raw status literals)
NOTES:
  - Unrecognised statuses land in ToDo so a task never disappears from the board
  - The mapping is many-to-one: to_raw_status(to_column(s)) is not s in general.
    "Pending" maps to ToDo, and ToDo writes back "Not Started".
"""

import re
from typing import Optional

from .models import Column
from .constants import (
    TODO_SYNONYMS,
    IN_PROGRESS_SYNONYMS,
    COMPLETED_SYNONYMS,
    RAW_STATUS_TODO,
    RAW_STATUS_IN_PROGRESS,
    RAW_STATUS_COMPLETED,
)

_SEPARATORS = re.compile(r"[\s_\-]+")

_RAW_STATUS = {
    Column.TODO: RAW_STATUS_TODO,
    Column.IN_PROGRESS: RAW_STATUS_IN_PROGRESS,
    Column.COMPLETED: RAW_STATUS_COMPLETED,
}


def normalize_status(raw_status: Optional[str]) -> str:
    """Lowercase, treat '_' and '-' as spaces, collapse whitespace."""
    if not raw_status:
        return ""
    return _SEPARATORS.sub(" ", str(raw_status)).strip().lower()


def to_column(raw_status: Optional[str]) -> Column:
    """
    Map a raw backend status onto its board column.

    Args:
        raw_status: Status string as reported by the task source

    Returns:
        The matching Column, or Column.TODO for anything unrecognised

    Notes:
        - Matching is case-insensitive ("DONE", "Done", "done" are equal)
        - Canonical column names ("ToDo", "InProgress", "Completed") also match
    """
    key = normalize_status(raw_status)
    if key in IN_PROGRESS_SYNONYMS:
        return Column.IN_PROGRESS
    if key in COMPLETED_SYNONYMS:
        return Column.COMPLETED
    # TODO_SYNONYMS and unknown values share the fallback
    return Column.TODO


def to_raw_status(column: Column) -> str:
    """Return the fixed raw status string written back for a column."""
    return _RAW_STATUS[column]


def is_known_status(raw_status: Optional[str]) -> bool:
    """True if raw_status is in any synonym set (i.e. did not hit the fallback)."""
    key = normalize_status(raw_status)
    return key in TODO_SYNONYMS or key in IN_PROGRESS_SYNONYMS or key in COMPLETED_SYNONYMS
