# events/selection.py
"""
Drag-to-select interaction model for the availability grid.

A drag starts on one cell, reads that cell and fixes the paint mode
for the whole gesture:

    cell was free   -> ADD    (every touched cell becomes True)
    cell was marked -> REMOVE (every touched cell becomes False)

The mode never flips mid-drag, so dragging across a mix of marked and
free cells paints them all the same way. A plain click (down + up on
one cell) toggles exactly that cell.
"""
import logging
from typing import Iterable, List, Optional, Set, Tuple

from .availability_matrix import check_cell, empty_matrix, validate_matrix
from .sanitizers import ValidationError

logger = logging.getLogger('scheduler.events')

Cell = Tuple[int, int]


class SelectionEngine:
    MODE_ADD = "add"
    MODE_REMOVE = "remove"

    # Raw pointer events understood by dispatch()
    EVENT_DOWN = "down"
    EVENT_ENTER = "enter"
    EVENT_UP = "up"
    EVENT_LEAVE = "leave"

    def __init__(self, matrix: Optional[List[List[bool]]] = None):
        # The matrix is edited in place; callers keep their reference
        self.matrix = validate_matrix(matrix) if matrix is not None else empty_matrix()
        self.mode = self.MODE_ADD
        self._dragging = False
        self._touched: Set[Cell] = set()

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    @property
    def touched(self) -> frozenset:
        """Cells painted by the current (or last) drag."""
        return frozenset(self._touched)

    def begin(self, day: int, hour: int) -> str:
        """
        Start a drag on (day, hour) and paint that cell.

        Returns the mode chosen for this drag.
        """
        check_cell(day, hour)

        if self._dragging:
            # Pointer-up was lost (e.g. released outside the window)
            logger.debug("begin() while dragging; closing previous drag first")
            self.end()

        self.mode = self.MODE_REMOVE if self.matrix[day][hour] else self.MODE_ADD
        self._dragging = True
        self._touched = set()
        self._paint(day, hour)
        return self.mode

    def continue_drag(self, day: int, hour: int) -> bool:
        """
        Paint (day, hour) with the current mode.

        No-op when no drag is active. Returns whether a cell was painted.
        """
        if not self._dragging:
            return False

        check_cell(day, hour)
        self._paint(day, hour)
        return True

    def end(self) -> frozenset:
        """Finish the drag. Safe to call any number of times."""
        self._dragging = False
        return self.touched

    def dispatch(self, kind: str, day: Optional[int] = None, hour: Optional[int] = None):
        """
        Feed one raw pointer event.

        down/enter carry a cell; up/leave (pointer left the grid) do not.
        """
        if kind == self.EVENT_DOWN:
            return self.begin(day, hour)
        if kind == self.EVENT_ENTER:
            return self.continue_drag(day, hour)
        if kind in (self.EVENT_UP, self.EVENT_LEAVE):
            return self.end()
        raise ValidationError(f"Unknown pointer event: {kind}")

    def _paint(self, day: int, hour: int):
        self.matrix[day][hour] = self.mode == self.MODE_ADD
        self._touched.add((day, hour))


def paint(matrix: List[List[bool]], cells: Iterable[Cell]) -> frozenset:
    """
    Run one complete stroke over `cells` (first cell decides the mode).

    Returns the touched cells. An empty stroke touches nothing.
    """
    cells = list(cells)
    if not cells:
        return frozenset()

    engine = SelectionEngine(matrix)
    first_day, first_hour = cells[0]
    engine.begin(first_day, first_hour)
    for day, hour in cells[1:]:
        engine.continue_drag(day, hour)
    return engine.end()
