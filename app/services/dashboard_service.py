# /luct-portal/app/services/dashboard_service.py

"""
Headline figures for the landing page of each role.

`SUMMARY_BUILDERS` maps every `Role` to its builder; `get_summary_data`
refuses a role without a builder instead of returning an empty summary.
"""

from typing import Any, Callable, Dict

from ..models.monitoring_model import DashboardSummary
from ..models.user_model import CurrentUser, Role
from .database_service import DatabaseService
from .monitoring_helpers import metrics

Stats = Dict[str, Any]


def _student_summary(user: CurrentUser, db: DatabaseService) -> Stats:
    totals = db.get_student_totals(user.id)
    return {
        "enrolled_classes": metrics.count(totals["enrolled_classes"]),
        "available_reports": metrics.count(totals["available_reports"]),
        "ratings_submitted": metrics.count(totals["ratings_submitted"]),
        "attendance_percentage": metrics.marked_attendance_percentage(totals["present_marks"], totals["total_marks"]),
    }


def _lecturer_summary(user: CurrentUser, db: DatabaseService) -> Stats:
    totals = db.get_lecturer_totals(user.id)
    return {
        "total_classes": metrics.count(totals["total_classes"]),
        "total_reports": metrics.count(totals["total_reports"]),
        "total_students": metrics.count(totals["total_students"]),
        "avg_rating": metrics.average_rating(totals["avg_rating"]),
    }


def _prl_summary(user: CurrentUser, db: DatabaseService) -> Stats:
    record = db.get_user_by_id(user.id)
    if not record or not record.faculty_id:
        return {"total_courses": 0, "total_classes": 0, "total_reports": 0, "pending_feedback": 0, "avg_rating": None}
    totals = db.get_faculty_totals(record.faculty_id, user.id)
    return {
        "total_courses": metrics.count(totals["total_courses"]),
        "total_classes": metrics.count(totals["total_classes"]),
        "total_reports": metrics.count(totals["total_reports"]),
        "pending_feedback": metrics.count(totals["pending_feedback"]),
        "avg_rating": metrics.average_rating(totals["avg_rating"]),
    }


def _pl_summary(user: CurrentUser, db: DatabaseService) -> Stats:
    totals = db.get_programme_totals()
    return {
        "total_reports": metrics.count(totals["total_reports"]),
        "avg_attendance": metrics.mean_percentage(totals["avg_attendance"]),
        "avg_rating": metrics.average_rating(totals["avg_rating"]),
        "total_lecturers": metrics.count(totals["total_lecturers"]),
        "total_classes": metrics.count(totals["total_classes"]),
        "total_courses": metrics.count(totals["total_courses"]),
    }


SUMMARY_BUILDERS: Dict[Role, Callable[[CurrentUser, DatabaseService], Stats]] = {
    Role.STUDENT: _student_summary,
    Role.LECTURER: _lecturer_summary,
    Role.PRL: _prl_summary,
    Role.PL: _pl_summary,
}


def get_summary_data(user: CurrentUser, db: DatabaseService) -> DashboardSummary:
    """
    Builds the dashboard summary for the caller's role.

    Args:
        user: The authenticated caller, resolved from the bearer token.
        db: An instance of the DatabaseService, provided by dependency injection.

    Returns:
        A DashboardSummary with role-specific `stats`.
    """
    builder = SUMMARY_BUILDERS.get(user.role)
    if builder is None:
        raise LookupError(f"No dashboard summary defined for role {user.role!r}")
    return DashboardSummary(role=user.role, stats=builder(user, db))
