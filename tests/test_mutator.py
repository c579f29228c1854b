"""Tests for optimistic column moves and resync on failure."""

import asyncio

import pytest

from taskboard.core.models import Column
from taskboard.core.mutator import Mutator
from taskboard.core.projection import project
from taskboard.core.store import BoardStore
from taskboard.core.exceptions import InvalidInputError, MutationInFlightError

from conftest import FakeSource, make_tasks


@pytest.fixture
def source():
    return FakeSource(make_tasks((1, "Pending"), (2, "Completed"), (3, "working")))


@pytest.fixture
def store(source):
    return BoardStore(source.tasks)


@pytest.fixture
def mutator(store, source, notifier):
    return Mutator(store, source, notifier, timeout=1.0)


@pytest.mark.asyncio
async def test_successful_move(mutator, store, source, notifier):
    ok = await mutator.move_task(1, Column.TODO, Column.IN_PROGRESS)

    assert ok is True
    assert source.updates == [(1, "In Progress")]
    assert store.board[Column.TODO] == []
    assert store.board[Column.IN_PROGRESS] == [3, 1]
    assert store.get(1).status == "In Progress"
    assert notifier.messages == [("Moved 'Task 1' to In Progress", "success")]
    assert source.fetches == 0


@pytest.mark.asyncio
async def test_move_before_card(mutator, store):
    await mutator.move_task(1, Column.TODO, Column.IN_PROGRESS, before=3)
    assert store.board[Column.IN_PROGRESS] == [1, 3]


@pytest.mark.asyncio
async def test_optimistic_state_visible_while_saving(mutator, store, source):
    source.gate = asyncio.Event()
    move = asyncio.create_task(mutator.move_task(1, Column.TODO, Column.COMPLETED))
    await asyncio.sleep(0)

    assert mutator.busy
    assert mutator.pending_task_id == 1
    assert store.board[Column.COMPLETED] == [2, 1]

    source.gate.set()
    assert await move is True
    assert not mutator.busy


@pytest.mark.asyncio
async def test_failed_update_reconciles_from_source(mutator, store, source, notifier):
    source.fail = RuntimeError("server said no")

    ok = await mutator.move_task(1, Column.TODO, Column.IN_PROGRESS)

    assert ok is False
    assert source.fetches == 1
    assert store.board == project(await source.fetch_tasks())
    assert store.board[Column.TODO] == [1]
    assert store.get(1).status == "Pending"
    assert notifier.messages == [("Could not move 'Task 1' to In Progress", "error")]
    assert not mutator.busy


@pytest.mark.asyncio
async def test_reconcile_takes_server_state_not_snapshot(mutator, store, source):
    """Another client changed task 3 meanwhile; the refetch picks that up."""
    source.fail = RuntimeError("conflict")
    source.tasks = make_tasks((1, "Pending"), (2, "Completed"), (3, "done"))

    await mutator.move_task(1, Column.TODO, Column.IN_PROGRESS)

    assert store.board[Column.COMPLETED] == [2, 3]
    assert store.board[Column.IN_PROGRESS] == []


@pytest.mark.asyncio
async def test_timeout_counts_as_failure(store, source, notifier):
    mutator = Mutator(store, source, notifier, timeout=0.01)
    source.gate = asyncio.Event()

    ok = await mutator.move_task(1, Column.TODO, Column.COMPLETED)

    assert ok is False
    assert source.updates == [(1, "Completed")]
    assert store.board[Column.TODO] == [1]
    assert notifier.kinds == ["error"]
    assert not mutator.busy


@pytest.mark.asyncio
async def test_refetch_failure_restores_snapshot(mutator, store, source, notifier):
    source.fail = RuntimeError("update failed")
    source.fetch_error = ConnectionError("offline")

    ok = await mutator.move_task(1, Column.TODO, Column.IN_PROGRESS)

    assert ok is False
    assert store.board[Column.TODO] == [1]
    assert store.board[Column.IN_PROGRESS] == [3]
    assert notifier.kinds == ["error", "error"]
    assert "restored" in notifier.messages[1][0]


@pytest.mark.asyncio
async def test_second_move_while_pending(mutator, source):
    source.gate = asyncio.Event()
    first = asyncio.create_task(mutator.move_task(1, Column.TODO, Column.COMPLETED))
    await asyncio.sleep(0)

    with pytest.raises(MutationInFlightError) as exc:
        await mutator.move_task(3, Column.IN_PROGRESS, Column.COMPLETED)
    assert exc.value.pending_task_id == 1

    source.gate.set()
    await first
    assert source.updates == [(1, "Completed")]


@pytest.mark.asyncio
async def test_same_column_rejected(mutator, source):
    with pytest.raises(InvalidInputError):
        await mutator.move_task(1, Column.TODO, Column.TODO)
    assert source.updates == []


@pytest.mark.asyncio
async def test_wrong_source_column_rejected(mutator, source):
    with pytest.raises(InvalidInputError, match="not In Progress"):
        await mutator.move_task(1, Column.IN_PROGRESS, Column.COMPLETED)
    assert source.updates == []


@pytest.mark.asyncio
async def test_wip_limit_blocks_move(source, notifier):
    store = BoardStore(source.tasks, wip_limits={Column.COMPLETED: 1})
    mutator = Mutator(store, source, notifier)

    ok = await mutator.move_task(1, Column.TODO, Column.COMPLETED)

    assert ok is False
    assert source.updates == []
    assert store.board[Column.TODO] == [1]
    assert notifier.kinds == ["error"]
    assert "limit of 1" in notifier.messages[0][0]


def test_check_drop(source, notifier):
    store = BoardStore(source.tasks, wip_limits={Column.COMPLETED: 2})
    mutator = Mutator(store, source, notifier)

    assert mutator.check_drop(1, Column.COMPLETED) is None
    assert mutator.check_drop(1, Column.IN_PROGRESS) is None


@pytest.mark.asyncio
async def test_reconcile_directly(mutator, store, source):
    source.tasks = make_tasks((9, "done"))
    assert await mutator.reconcile() is True
    assert store.board.as_dict() == {"ToDo": [], "InProgress": [], "Completed": [9]}
