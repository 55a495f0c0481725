# events/availability_matrix.py
"""
The 7x24 availability matrix.

Rows are days of the event's week (0 = Monday), columns are hours
(0 = midnight). The matrix is the in-memory shape the grid edits;
the database only stores the sparse list of true cells.
"""
from typing import Iterable, List, Tuple

from .sanitizers import ValidationError

DAYS_IN_WEEK = 7
HOURS_IN_DAY = 24

DAY_LABELS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _hour_label(hour: int) -> str:
    display = 12 if hour % 12 == 0 else hour % 12
    period = "AM" if hour < 12 else "PM"
    return f"{display}:00 {period}"


HOUR_LABELS = [_hour_label(h) for h in range(HOURS_IN_DAY)]


def is_valid_cell(day, hour) -> bool:
    # bool is an int subclass; True/False are never valid indexes here
    if isinstance(day, bool) or isinstance(hour, bool):
        return False
    if not isinstance(day, int) or not isinstance(hour, int):
        return False
    return 0 <= day < DAYS_IN_WEEK and 0 <= hour < HOURS_IN_DAY


def check_cell(day, hour) -> Tuple[int, int]:
    if not is_valid_cell(day, hour):
        raise ValidationError(
            f"Invalid cell ({day}, {hour}): day must be 0-{DAYS_IN_WEEK - 1} "
            f"and hour 0-{HOURS_IN_DAY - 1}"
        )
    return day, hour


def empty_matrix() -> List[List[bool]]:
    return [[False] * HOURS_IN_DAY for _ in range(DAYS_IN_WEEK)]


def validate_matrix(matrix) -> List[List[bool]]:
    """
    Check that `matrix` is a 7x24 grid of booleans.

    Returns the matrix unchanged so it can be used inline.
    """
    if not isinstance(matrix, (list, tuple)) or len(matrix) != DAYS_IN_WEEK:
        raise ValidationError(f"Availability matrix must have {DAYS_IN_WEEK} rows (days)")

    for day, row in enumerate(matrix):
        if not isinstance(row, (list, tuple)) or len(row) != HOURS_IN_DAY:
            raise ValidationError(
                f"Availability matrix row {day} must have {HOURS_IN_DAY} columns (hours)"
            )
        if any(not isinstance(value, bool) for value in row):
            raise ValidationError(f"Availability matrix row {day} must only contain booleans")

    return matrix


def _cell_of(slot) -> Tuple[int, int]:
    if isinstance(slot, dict):
        return slot["day_index"], slot["hour_index"]
    return slot.day_index, slot.hour_index


def matrix_from_slots(slots: Iterable) -> List[List[bool]]:
    """
    Build a matrix from slot rows (model instances or dicts with
    day_index / hour_index). Out-of-range rows are rejected.
    """
    matrix = empty_matrix()
    for slot in slots:
        day, hour = check_cell(*_cell_of(slot))
        matrix[day][hour] = True
    return matrix


def slots_from_matrix(matrix) -> List[dict]:
    """Flatten a matrix into its true cells, day-major."""
    validate_matrix(matrix)
    return [
        {"day_index": day, "hour_index": hour}
        for day in range(DAYS_IN_WEEK)
        for hour in range(HOURS_IN_DAY)
        if matrix[day][hour]
    ]
