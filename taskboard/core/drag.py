"""
FILE: taskboard/core/drag.py
PURPOSE: Drag-and-drop state machine for the task board
EXPORTS:
  - DragPhase (enum): IDLE, DRAGGING, RESOLVED
  - DropOutcome (enum): REORDER, MOVE, CANCELLED
  - DragSession (dataclass)
  - DropResult (dataclass)
  - DragController (class)
DEPENDENCIES:
  - logging (stdlib)
  - taskboard.core.store (BoardStore)
  - taskboard.core.mutator (Mutator)
  - taskboard.core.collision (resolve, resolve_within)
NOTES:
  - Independent of any UI toolkit; gesture adapters (taskboard/gestures.py)
    feed press/move/pick/drop/cancel into it
  - A pointer press only becomes a drag after moving activation_distance
  - drop() is back in IDLE before it awaits the mutator
  - No new drag starts while a move is still being saved
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .models import Column
from .projection import Board
from .store import BoardStore
from .mutator import Mutator
from .collision import Rect, DropTarget, TargetKind, resolve, resolve_within
from .constants import DEFAULT_ACTIVATION_DISTANCE

logger = logging.getLogger(__name__)

TargetProvider = Callable[[Board], List[DropTarget]]


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESOLVED = "resolved"


class DropOutcome(Enum):
    REORDER = "reorder"
    MOVE = "move"
    CANCELLED = "cancelled"


@dataclass
class DragSession:
    """One in-progress gesture."""

    task_id: int
    source: Column
    origin: Rect
    geometry: Rect
    keyboard: bool = False


@dataclass
class DropResult:
    """
    What a drop did.

    Attributes:
        outcome: REORDER, MOVE or CANCELLED
        task_id: Dragged task
        source: Column the drag started in
        target: Column dropped on (None when cancelled)
        index: New index within the column (REORDER only)
        before: Task the moved task was inserted ahead of (MOVE only)
        changed: Whether the board ended up different from before the drag
    """

    outcome: DropOutcome
    task_id: int
    source: Column
    target: Optional[Column] = None
    index: Optional[int] = None
    before: Optional[int] = None
    changed: bool = False


class DragController:
    """
    Interprets drag gestures as reorders or column moves.

    Only one drag session exists at a time.
    """

    def __init__(
        self,
        store: BoardStore,
        mutator: Mutator,
        targets: TargetProvider,
        activation_distance: float = DEFAULT_ACTIVATION_DISTANCE,
    ):
        self.store = store
        self.mutator = mutator
        self.targets = targets
        self.activation_distance = activation_distance
        self.phase = DragPhase.IDLE
        self.session: Optional[DragSession] = None
        self._press: Optional[DragSession] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def _can_start(self, task_id: int) -> bool:
        if self.phase is not DragPhase.IDLE or self._press is not None:
            logger.debug("Ignoring drag of task %s: a gesture is already active", task_id)
            return False
        if self.mutator.busy:
            logger.info(
                "Ignoring drag of task %s: task %s is still being saved",
                task_id, self.mutator.pending_task_id,
            )
            return False
        return True

    def press(self, task_id: int, geometry: Rect) -> bool:
        """
        Pointer went down on a task card.

        The press is remembered but is not a drag until move() carries it
        past the activation distance.

        Returns:
            True if the press was accepted
        """
        if not self._can_start(task_id):
            return False
        source = self.store.column_of(task_id)
        self._press = DragSession(task_id=task_id, source=source, origin=geometry, geometry=geometry)
        return True

    def pick(self, task_id: int, geometry: Rect) -> bool:
        """Keyboard pick-up: starts dragging immediately."""
        if not self._can_start(task_id):
            return False
        source = self.store.column_of(task_id)
        self._begin(DragSession(task_id=task_id, source=source, origin=geometry, geometry=geometry, keyboard=True))
        return True

    def _begin(self, session: DragSession) -> None:
        self._press = None
        self.session = session
        self.phase = DragPhase.DRAGGING
        logger.debug("Drag started: task %s from %s", session.task_id, session.source.value)

    def move(self, geometry: Rect) -> None:
        """Pointer or keyboard moved the dragged item."""
        if self.session is not None:
            self.session.geometry = geometry
            return
        if self._press is not None:
            self._press.geometry = geometry
            if self._press.origin.distance_to(geometry) >= self.activation_distance:
                self._begin(self._press)

    def cancel(self) -> bool:
        """
        Abandon the current gesture (e.g. Escape). Never touches the board.

        Returns:
            True if there was something to cancel
        """
        active = self.session is not None or self._press is not None
        if self.session is not None:
            logger.debug("Drag cancelled: task %s", self.session.task_id)
        self.session = None
        self._press = None
        self.phase = DragPhase.IDLE
        return active

    def decide(self, session: DragSession) -> DropResult:
        """
        Work out what dropping session at its current geometry means.

        Pure: reads the board but changes nothing.
        """
        targets = self.targets(self.store.board)
        hit = resolve(session.geometry, targets)
        if hit is None:
            return DropResult(DropOutcome.CANCELLED, session.task_id, session.source)

        column = hit.column
        over = hit if hit.kind is TargetKind.TASK else resolve_within(session.geometry, targets, column)
        over_id = over.task_id if over is not None else None

        if column is session.source:
            sequence = self.store.board[column]
            if over_id is None:
                index = len(sequence) - 1
            else:
                index = sequence.index(over_id)
            return DropResult(DropOutcome.REORDER, session.task_id, session.source, target=column, index=index)

        return DropResult(
            DropOutcome.MOVE, session.task_id, session.source, target=column, before=over_id,
        )

    async def drop(self, geometry: Optional[Rect] = None) -> Optional[DropResult]:
        """
        Release the dragged item.

        Args:
            geometry: Final geometry; defaults to the last one seen

        Returns:
            DropResult, or None if there was no active drag (a plain click)
        """
        if self.session is None:
            if self._press is not None:
                logger.debug("Press on task %s released without dragging", self._press.task_id)
            self.cancel()
            return None

        session = self.session
        if geometry is not None:
            session.geometry = geometry
        self.phase = DragPhase.RESOLVED
        try:
            result = self.decide(session)
        finally:
            self.session = None
            self._press = None
            self.phase = DragPhase.IDLE

        logger.debug("Drop resolved: %s", result)
        if result.outcome is DropOutcome.REORDER:
            result.changed = self.store.reorder(result.task_id, result.index)
        elif result.outcome is DropOutcome.MOVE:
            result.changed = await self.mutator.move_task(
                result.task_id, result.source, result.target, before=result.before,
            )
        return result
