# /luct-portal/app/services/report_service.py

"""
Business logic for lecture reports: submission by lecturers, the scoped
listings read by PLs, PRLs and lecturers, the student view of reports for
their enrolled classes, and the CSV export of the programme-wide list.

Every listing is built from `DatabaseService.get_report_rows`, which returns
the raw counts; the two attendance figures are derived here with the shared
rounding rules in `monitoring_helpers.metrics`.
"""

import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd

from ..core.exceptions import NotFound, PermissionDenied, ValidationFailed
from ..models import report_model
from ..models.user_model import CurrentUser, Role
from .database_service import DatabaseService
from .monitoring_helpers import metrics

logger = logging.getLogger(__name__)

RECENT_REPORTS_LIMIT = 5

EXPORT_COLUMNS = [
    "Week", "Date", "Course Code", "Course Name", "Class", "Lecturer", "Topic",
    "Learning Outcomes", "Recommendations", "Students Present", "Registered Students",
    "Attendance %", "Marked Attendance %",
]


def _to_summary(row: Dict[str, Any]) -> report_model.ReportSummary:
    registered = metrics.count(row.get("total_registered_students"))
    data = {
        **row,
        "total_registered_students": registered,
        "attendance_percentage": metrics.report_attendance_percentage(row["actual_students_present"], registered),
        "marked_attendance_percentage": metrics.marked_attendance_percentage(
            row.get("present_marks"), row.get("total_marks")
        ),
    }
    return report_model.ReportSummary.model_validate(data)


# --- Submission ---

def submit_report(report_data: report_model.ReportCreate, lecturer: CurrentUser, db: DatabaseService) -> report_model.ReportSummary:
    """
    Records a lecture report. Reports are immutable once stored, so every
    check happens up front: the lecture cannot be dated in the future and
    the class must currently be assigned to the submitting lecturer.
    """
    if report_data.date > date.today():
        raise ValidationFailed("Report date cannot be in the future.")

    db_class = db.get_class_by_id(report_data.class_id)
    if not db_class:
        raise NotFound(f"Class with ID {report_data.class_id} not found.")

    if db_class.lecturer_id != lecturer.id:
        logger.warning("Lecturer %s tried to report on unassigned class %s", lecturer.id, db_class.id)
        raise PermissionDenied("You can only submit reports for classes assigned to you.")

    record = {
        "id": f"rpt_{uuid.uuid4().hex[:12]}",
        "submitted_by": lecturer.id,
        **report_data.model_dump(),
    }
    new_report = db.add_report(record)
    logger.info("Lecturer %s submitted report %s for class %s", lecturer.id, new_report.id, db_class.id)
    return _get_report_row(db, report_id=new_report.id)


def _get_report_row(db: DatabaseService, **filters) -> report_model.ReportSummary:
    rows = db.get_report_rows(**filters)
    if not rows:
        raise NotFound(f"Report with ID {filters.get('report_id')} not found.")
    return _to_summary(rows[0])


# --- Scoped Listings ---

def _scope_filters(current_user: CurrentUser, db: DatabaseService) -> Optional[Dict[str, Any]]:
    """
    Query filters restricting a PL or PRL to the reports they may read.
    Returns None when the caller may read nothing at all.
    """
    if current_user.role == Role.PL:
        return {}
    if current_user.role == Role.PRL:
        user = db.get_user_by_id(current_user.id)
        if not user or not user.faculty_id:
            return None
        return {"faculty_id": user.faculty_id}
    return None


def list_reports(current_user: CurrentUser, db: DatabaseService, search: Optional[str] = None) -> List[report_model.ReportSummary]:
    filters = _scope_filters(current_user, db)
    if filters is None:
        return []
    search = search.strip() if search else None
    return [_to_summary(row) for row in db.get_report_rows(search=search or None, **filters)]


def get_report(report_id: str, current_user: CurrentUser, db: DatabaseService) -> report_model.ReportSummary:
    # Out-of-scope reports are reported as missing rather than forbidden.
    filters = _scope_filters(current_user, db)
    if filters is None:
        raise NotFound(f"Report with ID {report_id} not found.")
    return _get_report_row(db, report_id=report_id, **filters)


def list_prl_reports(prl_id: str, faculty_id: Optional[str], db: DatabaseService) -> List[report_model.ReportSummary]:
    """Faculty reports, each carrying this PRL's own feedback when given."""
    if faculty_id is None:
        return []
    rows = db.get_report_rows(faculty_id=faculty_id, feedback_prl_id=prl_id)
    return [_to_summary(row) for row in rows]


def list_all_reports(db: DatabaseService) -> List[report_model.ReportSummary]:
    return [_to_summary(row) for row in db.get_report_rows()]


def list_lecturer_reports(lecturer_id: str, db: DatabaseService) -> List[report_model.ReportSummary]:
    return [_to_summary(row) for row in db.get_report_rows(submitted_by=lecturer_id)]


def list_recent_lecturer_reports(lecturer_id: str, db: DatabaseService) -> List[report_model.ReportSummary]:
    rows = db.get_report_rows(submitted_by=lecturer_id, limit=RECENT_REPORTS_LIMIT)
    return [_to_summary(row) for row in rows]


def list_enrolled_reports(student_id: str, db: DatabaseService) -> List[report_model.EnrolledReport]:
    return [report_model.EnrolledReport.model_validate(row) for row in db.get_enrolled_report_rows(student_id)]


# --- Export Logic ---

def export_reports_as_csv(db: DatabaseService) -> str:
    """Programme-wide report list as CSV; empty percentages are left blank."""
    reports = list_all_reports(db)

    export_data = [
        {
            "Week": r.week,
            "Date": r.date.isoformat(),
            "Course Code": r.course_code,
            "Course Name": r.course_name,
            "Class": r.class_name,
            "Lecturer": r.lecturer_name,
            "Topic": r.topic,
            "Learning Outcomes": r.learning_outcomes or "",
            "Recommendations": r.recommendations or "",
            "Students Present": r.actual_students_present,
            "Registered Students": r.total_registered_students,
            "Attendance %": r.attendance_percentage,
            "Marked Attendance %": r.marked_attendance_percentage,
        } for r in reports
    ]

    df = pd.DataFrame(export_data, columns=EXPORT_COLUMNS) if export_data else pd.DataFrame(columns=EXPORT_COLUMNS)
    return df.to_csv(index=False)
