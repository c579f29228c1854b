"""
FILE: taskboard/gestures.py
PURPOSE: Turn pointer and keyboard input into DragController events
EXPORTS:
  - PointerAdapter (class): press / move / release in board coordinates
  - KeyboardAdapter (class): pick / up / down / left / right / drop / cancel
DEPENDENCIES:
  - taskboard.core.drag (DragController, DropResult)
  - taskboard.core.layout (BoardLayout)
  - taskboard.core.collision (Rect)
NOTES:
  - Both adapters only produce geometry; the controller and the collision
    resolver decide what a drop means
  - Keyboard slots run from 0 to len(column); the last slot is the empty
    space below the cards (drop there = append)
"""

from typing import Optional, Tuple

from .core.models import Column
from .core.collision import Rect
from .core.layout import BoardLayout
from .core.drag import DragController, DropResult
from .core.exceptions import InvalidInputError


class PointerAdapter:
    """Drives a drag from pointer coordinates."""

    def __init__(self, controller: DragController, layout: BoardLayout):
        self.controller = controller
        self.layout = layout
        self._grab: Optional[Tuple[Rect, float, float]] = None

    def press(self, task_id: int, x: float, y: float) -> bool:
        card = self.layout.card_rect(self.controller.store.board, task_id)
        if not self.controller.press(task_id, card):
            return False
        self._grab = (card, x, y)
        return True

    def _geometry(self, x: float, y: float) -> Optional[Rect]:
        if self._grab is None:
            return None
        card, x0, y0 = self._grab
        return card.translated(x - x0, y - y0)

    def move(self, x: float, y: float) -> None:
        geometry = self._geometry(x, y)
        if geometry is not None:
            self.controller.move(geometry)

    async def release(self, x: float, y: float) -> Optional[DropResult]:
        geometry = self._geometry(x, y)
        self._grab = None
        return await self.controller.drop(geometry)

    def cancel(self) -> bool:
        self._grab = None
        return self.controller.cancel()


class KeyboardAdapter:
    """Drives a drag with discrete slot moves, like arrow keys on a board."""

    def __init__(self, controller: DragController, layout: BoardLayout):
        self.controller = controller
        self.layout = layout
        self.cursor: Optional[Tuple[Column, int]] = None

    @property
    def board(self):
        return self.controller.store.board

    @property
    def active(self) -> bool:
        """True while the controller is running a drag this adapter picked up."""
        session = self.controller.session
        return self.cursor is not None and session is not None and session.keyboard

    @property
    def drop_slot(self) -> Optional[Tuple[Column, int]]:
        """Cursor of the current keyboard drag, None otherwise."""
        return self.cursor if self.active else None

    def pick(self, task_id: int) -> bool:
        """Pick up a task (space/enter on a focused card)."""
        column = self.controller.store.column_of(task_id)
        index = self.board[column].index(task_id)
        if not self.controller.pick(task_id, self.layout.slot_rect(column, index)):
            return False
        self.cursor = (column, index)
        return True

    def _place(self, column: Column, index: int) -> None:
        index = max(0, min(index, len(self.board[column])))
        self.cursor = (column, index)
        self.controller.move(self.layout.slot_rect(column, index))

    def _step(self, dcolumn: int, dindex: int) -> bool:
        if not self.active:
            self.cursor = None
            return False
        column, index = self.cursor
        columns = list(Column)
        position = columns.index(column) + dcolumn
        if not 0 <= position < len(columns):
            return False
        self._place(columns[position], index + dindex)
        return True

    def up(self) -> bool:
        return self._step(0, -1)

    def down(self) -> bool:
        return self._step(0, 1)

    def left(self) -> bool:
        return self._step(-1, 0)

    def right(self) -> bool:
        return self._step(1, 0)

    async def drop(self) -> Optional[DropResult]:
        self.cursor = None
        return await self.controller.drop()

    def cancel(self) -> bool:
        self.cursor = None
        return self.controller.cancel()

    async def drag_to(self, task_id: int, column: Column, onto: Optional[int] = None) -> Optional[DropResult]:
        """
        Pick a task, move it over a column (or a card in it) and drop.

        Args:
            task_id: Task to drag
            column: Column to drop into
            onto: Card to drop onto; None drops on the empty end of the column

        Returns:
            DropResult, or None if the drag could not start
        """
        if not self.pick(task_id):
            return None
        if onto is None:
            index = len(self.board[column])
        else:
            if self.board.column_of(onto) is not column:
                self.cancel()
                raise InvalidInputError(f"Task {onto} is not in {column.label}")
            index = self.board[column].index(onto)
        self._place(column, index)
        return await self.drop()
