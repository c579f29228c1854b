"""
FILE: taskboard/core/mutator.py
PURPOSE: Optimistic cross-column moves with resync-from-source on failure
EXPORTS:
  - Mutator (class)
DEPENDENCIES:
  - asyncio (stdlib, timeout on the status update)
  - logging (stdlib)
  - taskboard.core.store (BoardStore)
  - taskboard.core.source (TaskSource, Notifier protocols)
  - taskboard.core.status (to_raw_status)
  - taskboard.core.exceptions (MutationInFlightError, InvalidInputError)
NOTES:
  - Step 1 (optimistic) runs before the first await, so the board shows
    the move while the status update is in flight
  - Any failure of the update (error or timeout) triggers a full refetch
    and reprojection. The board may visibly snap back; that is accepted.
  - No retries. One pending move at a time (see busy).
  - If the refetch fails too, the pre-move snapshot is restored
"""

import asyncio
import logging
from typing import List, Optional

from .models import Task, Column
from .store import BoardStore
from .source import TaskSource, Notifier
from .status import to_raw_status
from .constants import DEFAULT_PERSIST_TIMEOUT, NOTIFY_SUCCESS, NOTIFY_ERROR
from .exceptions import MutationInFlightError, InvalidInputError

logger = logging.getLogger(__name__)


class Mutator:
    """Applies, persists and (on failure) reconciles column changes."""

    def __init__(
        self,
        store: BoardStore,
        source: TaskSource,
        notifier: Notifier,
        timeout: Optional[float] = DEFAULT_PERSIST_TIMEOUT,
    ):
        self.store = store
        self.source = source
        self.notifier = notifier
        self.timeout = timeout
        self._pending: Optional[int] = None

    @property
    def busy(self) -> bool:
        """True while a status update is in flight."""
        return self._pending is not None

    @property
    def pending_task_id(self) -> Optional[int]:
        return self._pending

    def check_drop(self, task_id: int, to_column: Column) -> Optional[str]:
        """
        Validate a move before anything changes.

        Returns:
            None if the move is allowed, otherwise a user-facing reason
        """
        stats = self.store.stats_for(to_column)
        if stats.is_full:
            task = self.store.get(task_id)
            return (
                f"Cannot move '{task.title}': {to_column.label} is at its limit "
                f"of {stats.limit} task(s)"
            )
        return None

    async def move_task(
        self,
        task_id: int,
        from_column: Column,
        to_column: Column,
        before: Optional[int] = None,
    ) -> bool:
        """
        Move a task to another column and persist its new status.

        Args:
            task_id: Task being moved
            from_column: Column the drag started in
            to_column: Destination column
            before: Task to insert ahead of; None appends

        Returns:
            True if the backend accepted the change, False if the move was
            rejected up front or reconciled after a failure

        Raises:
            MutationInFlightError: If another move is still pending
            InvalidInputError: If from_column is not where the task is, or
                equals to_column
        """
        if self._pending is not None:
            raise MutationInFlightError(task_id, self._pending)
        if from_column is to_column:
            raise InvalidInputError(f"Task {task_id} is already in {to_column.label}")
        actual = self.store.column_of(task_id)
        if actual is not from_column:
            raise InvalidInputError(
                f"Task {task_id} is in {actual.label}, not {from_column.label}"
            )

        reason = self.check_drop(task_id, to_column)
        if reason:
            logger.info("Rejected move of task %s: %s", task_id, reason)
            self.notifier.notify(reason, NOTIFY_ERROR)
            return False

        raw_status = to_raw_status(to_column)
        snapshot = self.store.snapshot()
        self._pending = task_id
        try:
            # Step 1: optimistic
            task = self.store.relocate(task_id, to_column, raw_status, before=before)
            logger.debug(
                "Optimistic move of task %s: %s -> %s", task_id, from_column.value, to_column.value
            )

            # Step 2: persist
            try:
                await self._persist(task_id, raw_status)
            except Exception as e:
                # Step 3b: any failure is handled the same way
                logger.warning("Status update for task %s failed: %s", task_id, str(e) or type(e).__name__)
                self.notifier.notify(f"Could not move '{task.title}' to {to_column.label}", NOTIFY_ERROR)
                await self.reconcile(snapshot)
                return False

            # Step 3a
            self.notifier.notify(f"Moved '{task.title}' to {to_column.label}", NOTIFY_SUCCESS)
            return True
        finally:
            self._pending = None

    async def _persist(self, task_id: int, raw_status: str) -> None:
        update = self.source.update_task_status(task_id, raw_status)
        if self.timeout is None:
            await update
        else:
            await asyncio.wait_for(update, timeout=self.timeout)

    async def reconcile(self, snapshot: Optional[List[Task]] = None) -> bool:
        """
        Resync the board from the task source.

        Args:
            snapshot: Task list to fall back to if the refetch fails

        Returns:
            True if the board now mirrors the source, False if it fell back
        """
        try:
            tasks = await self.source.fetch_tasks()
            self.store.load(tasks)
        except Exception as e:
            logger.error("Board refresh after failed move did not succeed: %s", e)
            if snapshot is not None:
                self.store.restore(snapshot)
            self.notifier.notify("Could not refresh the board; restored the previous layout", NOTIFY_ERROR)
            return False

        logger.debug("Board reconciled from source (%d task(s))", len(tasks))
        return True
