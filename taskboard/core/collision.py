"""
FILE: taskboard/core/collision.py
PURPOSE: Decide which drop target a drag geometry is over
EXPORTS:
  - Rect (dataclass)
  - TargetKind (enum)
  - DropTarget (dataclass)
  - resolve(geometry, targets) -> DropTarget | None
  - resolve_within(geometry, targets, column) -> DropTarget | None
DEPENDENCIES:
  - math (stdlib)
  - taskboard.core.models (Column)
NOTES:
  - Column targets always win over task targets. A column's rect contains
    its cards, so testing both at once flaps between interpretations.
  - Task targets are only consulted when no column intersects at all.
  - Among candidates of one kind: largest overlap, then nearest center,
    then registration order.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import Column


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in board coordinates."""

    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def intersects(self, other: "Rect") -> bool:
        """Edges touching count; a zero-size rect behaves like a point."""
        return (
            self.x <= other.right
            and other.x <= self.right
            and self.y <= other.bottom
            and other.y <= self.bottom
        )

    def overlap_area(self, other: "Rect") -> float:
        width = min(self.right, other.right) - max(self.x, other.x)
        height = min(self.bottom, other.bottom) - max(self.y, other.y)
        if width <= 0 or height <= 0:
            return 0.0
        return width * height

    def distance_to(self, other: "Rect") -> float:
        (ax, ay), (bx, by) = self.center, other.center
        return math.hypot(ax - bx, ay - by)

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    @classmethod
    def around(cls, x: float, y: float, width: float = 0.0, height: float = 0.0) -> "Rect":
        """Rect of the given size centered on (x, y)."""
        return cls(x - width / 2, y - height / 2, width, height)


class TargetKind(Enum):
    COLUMN = "column"
    TASK = "task"


@dataclass(frozen=True)
class DropTarget:
    """A registered drop zone: a whole column or one task card."""

    id: str
    kind: TargetKind
    rect: Rect
    column: Column
    task_id: Optional[int] = None

    @classmethod
    def for_column(cls, column: Column, rect: Rect) -> "DropTarget":
        return cls(id=f"column-{column.value}", kind=TargetKind.COLUMN, rect=rect, column=column)

    @classmethod
    def for_task(cls, task_id: int, column: Column, rect: Rect) -> "DropTarget":
        return cls(id=f"task-{task_id}", kind=TargetKind.TASK, rect=rect, column=column, task_id=task_id)


def _best(geometry: Rect, candidates: Sequence[DropTarget]) -> Optional[DropTarget]:
    hits = [
        (index, target)
        for index, target in enumerate(candidates)
        if geometry.intersects(target.rect)
    ]
    if not hits:
        return None
    _, best = min(
        hits,
        key=lambda hit: (
            -geometry.overlap_area(hit[1].rect),
            geometry.distance_to(hit[1].rect),
            hit[0],
        ),
    )
    return best


def resolve(geometry: Rect, targets: Iterable[DropTarget]) -> Optional[DropTarget]:
    """
    Pick the drop target for a drag geometry.

    Args:
        geometry: Current rect of the dragged item (or a point-sized rect)
        targets: Registered column and task targets

    Returns:
        The best column target if any column intersects, otherwise the best
        task target, otherwise None (a drop here cancels the drag)
    """
    targets = list(targets)
    columns = [t for t in targets if t.kind is TargetKind.COLUMN]
    hit = _best(geometry, columns)
    if hit is not None:
        return hit
    return _best(geometry, [t for t in targets if t.kind is TargetKind.TASK])


def resolve_within(
    geometry: Rect,
    targets: Iterable[DropTarget],
    column: Column,
) -> Optional[DropTarget]:
    """
    Find the task card under the geometry inside an already chosen column.

    Only used to compute an insertion index; it never changes the column.
    """
    cards: List[DropTarget] = [
        t for t in targets if t.kind is TargetKind.TASK and t.column is column
    ]
    return _best(geometry, cards)
