"""Tests for mapping backend statuses onto board columns."""

import pytest

from taskboard.core.models import Column
from taskboard.core.status import to_column, to_raw_status, normalize_status, is_known_status


@pytest.mark.parametrize("raw", ["Pending", "not started", "NOT_STARTED", "todo", "To Do", "ToDo"])
def test_todo_synonyms(raw):
    assert to_column(raw) is Column.TODO


@pytest.mark.parametrize("raw", ["In Progress", "in-progress", "INPROGRESS", "working", "Doing"])
def test_in_progress_synonyms(raw):
    assert to_column(raw) is Column.IN_PROGRESS


@pytest.mark.parametrize("raw", ["Completed", "done", "DONE", "Finished", "closed"])
def test_completed_synonyms(raw):
    assert to_column(raw) is Column.COMPLETED


@pytest.mark.parametrize("raw", ["Blocked", "", None, "  ", "archived", "in  progress soon"])
def test_unknown_status_defaults_to_todo(raw):
    assert to_column(raw) is Column.TODO


def test_normalize_collapses_separators():
    assert normalize_status("  In__Progress ") == "in progress"
    assert normalize_status("not-started") == "not started"


def test_raw_status_per_column():
    assert to_raw_status(Column.TODO) == "Not Started"
    assert to_raw_status(Column.IN_PROGRESS) == "In Progress"
    assert to_raw_status(Column.COMPLETED) == "Completed"


def test_raw_status_maps_back_to_same_column():
    for column in Column:
        assert to_column(to_raw_status(column)) is column


def test_round_trip_is_many_to_one():
    """'Pending' lands in To Do, but To Do writes back 'Not Started'."""
    assert to_raw_status(to_column("Pending")) == "Not Started"
    assert to_raw_status(to_column("done")) == "Completed"


def test_is_known_status():
    assert is_known_status("done")
    assert is_known_status("Pending")
    assert not is_known_status("Blocked")
