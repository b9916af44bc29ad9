# /luct-portal/app/services/monitoring_helpers/metrics.py

"""
Pure functions that turn raw counts and averages coming out of SQL into the
figures shown on the reporting pages.

They exist so that every endpoint applies exactly the same rules:
- percentages and averages use half-up rounding, matching SQL `ROUND`;
- an empty group yields `None` ("no data"), never 0, NaN or a ZeroDivisionError;
- `Decimal` values returned by PostgreSQL and floats returned by SQLite are
  treated alike.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union

Number = Union[int, float, Decimal]

REPORT_ATTENDANCE_PLACES = 1
MARKED_ATTENDANCE_PLACES = 2
RATING_PLACES = 2


def round_half_up(value: Number, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _as_number(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def report_attendance_percentage(actual_students_present: Optional[Number], total_registered_students: Optional[Number]) -> Optional[float]:
    """
    Lecturer's head count as a share of the class's registered students,
    e.g. 1 present out of 2 registered -> 50.0. A class with nobody
    registered has no meaningful percentage and returns None.
    """
    registered = _as_number(total_registered_students)
    present = _as_number(actual_students_present)
    if registered is None or registered <= 0 or present is None:
        return None
    return round_half_up(present / registered * 100, REPORT_ATTENDANCE_PLACES)


def marked_attendance_percentage(present_marks: Optional[Number], total_marks: Optional[Number]) -> Optional[float]:
    """Share of 'present' attendance marks among all marks; None without marks."""
    total = _as_number(total_marks)
    if total is None or total <= 0:
        return None
    present = _as_number(present_marks) or Decimal(0)
    return round_half_up(present / total * 100, MARKED_ATTENDANCE_PLACES)


def average_rating(raw_average: Optional[Number]) -> Optional[float]:
    """Rounds an SQL `AVG(rating)`; `AVG` over zero rows is NULL and stays None."""
    number = _as_number(raw_average)
    if number is None:
        return None
    return round_half_up(number, RATING_PLACES)


def mean_percentage(raw_average: Optional[Number]) -> Optional[float]:
    number = _as_number(raw_average)
    if number is None:
        return None
    return round_half_up(number, MARKED_ATTENDANCE_PLACES)


def count(value: Optional[Number]) -> int:
    """COUNT/SUM results can arrive as None (outer joins) or Decimal (PostgreSQL)."""
    number = _as_number(value)
    return int(number) if number is not None else 0
