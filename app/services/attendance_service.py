# /luct-portal/app/services/attendance_service.py

"""
Students' self-declared attendance marks on lecture reports.

A mark is an upsert: a student has at most one mark per report and marking
again overwrites the status. These marks feed the marks-based attendance
figure and are independent of the head count the lecturer typed in.
"""

import logging
import uuid

from ..core.exceptions import NotFound, PermissionDenied
from ..models import report_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _get_enrolled_report(report_id: str, student_id: str, db: DatabaseService):
    report = db.get_report_by_id(report_id)
    if not report:
        raise NotFound(f"Report with ID {report_id} not found.")
    if not db.get_enrolment(student_id, report.class_id):
        raise PermissionDenied("You are not enrolled in the class of this report.")
    return report


def mark_attendance(mark_data: report_model.AttendanceMarkCreate, student_id: str, db: DatabaseService) -> report_model.AttendanceMark:
    _get_enrolled_report(mark_data.report_id, student_id, db)

    mark = db.upsert_attendance_mark({
        "id": f"att_{uuid.uuid4().hex[:12]}",
        "report_id": mark_data.report_id,
        "student_id": student_id,
        "status": mark_data.status.value,
    })
    logger.info("Student %s marked %s on report %s", student_id, mark.status, mark.report_id)
    return report_model.AttendanceMark.model_validate(mark)


def get_attendance_status(report_id: str, student_id: str, db: DatabaseService) -> report_model.AttendanceStatusResponse:
    """The caller's own mark for a report; `status` is None when not marked yet."""
    _get_enrolled_report(report_id, student_id, db)
    mark = db.get_attendance_mark(report_id, student_id)
    return report_model.AttendanceStatusResponse(status=mark.status if mark else None)
