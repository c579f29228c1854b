"""
FILE: taskboard/core/layout.py
PURPOSE: Geometry of a rendered board (column and card rectangles)
EXPORTS:
  - BoardLayout (dataclass)
DEPENDENCIES:
  - taskboard.core.models (Column)
  - taskboard.core.projection (Board)
  - taskboard.core.collision (Rect, DropTarget)
NOTES:
  - Columns sit side by side in Column order; cards stack under a header
  - Every column reserves one empty slot below its last card, so "drop at
    the end of the column" always lands inside the column rect
"""

from dataclasses import dataclass
from typing import List

from .models import Column
from .projection import Board
from .collision import Rect, DropTarget


@dataclass
class BoardLayout:
    """Pixel metrics for the board."""

    column_width: float = 280.0
    column_gap: float = 24.0
    header_height: float = 48.0
    card_height: float = 72.0
    card_gap: float = 8.0
    card_padding: float = 8.0
    min_slots: int = 4

    def column_x(self, column: Column) -> float:
        return list(Column).index(column) * (self.column_width + self.column_gap)

    def column_rect(self, board: Board, column: Column) -> Rect:
        slots = max(len(board[column]) + 1, self.min_slots)
        height = self.header_height + slots * (self.card_height + self.card_gap)
        return Rect(self.column_x(column), 0.0, self.column_width, height)

    def slot_rect(self, column: Column, index: int) -> Rect:
        """Rect of the card at (or the empty slot at) index in column."""
        return Rect(
            self.column_x(column) + self.card_padding,
            self.header_height + index * (self.card_height + self.card_gap),
            self.column_width - 2 * self.card_padding,
            self.card_height,
        )

    def card_rect(self, board: Board, task_id: int) -> Rect:
        column = board.column_of(task_id)
        if column is None:
            raise ValueError(f"task {task_id} is not on the board")
        return self.slot_rect(column, board[column].index(task_id))

    def targets(self, board: Board) -> List[DropTarget]:
        """Drop targets for every column and every card on the board."""
        targets = [DropTarget.for_column(column, self.column_rect(board, column)) for column in Column]
        for column in Column:
            for index, task_id in enumerate(board[column]):
                targets.append(DropTarget.for_task(task_id, column, self.slot_rect(column, index)))
        return targets
