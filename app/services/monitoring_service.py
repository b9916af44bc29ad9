# /luct-portal/app/services/monitoring_service.py

"""
Aggregated views for the overview and monitoring pages of each role.

The repository returns raw counts and SQL averages; this module turns them
into the published figures. Empty groups surface as None, never as 0.
"""

from typing import List, Optional

from ..models import monitoring_model
from .database_service import DatabaseService
from .monitoring_helpers import metrics


# --- Lecturer ---

def get_lecturer_overview_stats(lecturer_id: str, db: DatabaseService) -> monitoring_model.LecturerOverviewStats:
    totals = db.get_lecturer_totals(lecturer_id)
    return monitoring_model.LecturerOverviewStats(
        totalClasses=metrics.count(totals["total_classes"]),
        totalReports=metrics.count(totals["total_reports"]),
        totalStudents=metrics.count(totals["total_students"]),
    )


# --- PL & PRL ---

def get_programme_metrics(db: DatabaseService) -> monitoring_model.PLMetrics:
    totals = db.get_programme_totals()
    return monitoring_model.PLMetrics(
        total_reports=metrics.count(totals["total_reports"]),
        avg_attendance=metrics.mean_percentage(totals["avg_attendance"]),
        avg_rating=metrics.average_rating(totals["avg_rating"]),
        total_lecturers=metrics.count(totals["total_lecturers"]),
        total_classes=metrics.count(totals["total_classes"]),
        total_courses=metrics.count(totals["total_courses"]),
    )


def get_class_monitoring(db: DatabaseService, faculty_id: Optional[str] = None) -> List[monitoring_model.ClassMonitoringRow]:
    """
    One row per class. `avg_reported_attendance` is the mean head count
    relative to the live enrolment; `attendance_percentage` comes from the
    students' own marks.
    """
    result = []
    for row in db.get_class_monitoring_rows(faculty_id=faculty_id):
        total_students = metrics.count(row["total_students"])
        result.append(monitoring_model.ClassMonitoringRow(
            class_id=row["class_id"],
            class_name=row["class_name"],
            course_name=row["course_name"],
            course_code=row["course_code"],
            lecturer_name=row["lecturer_name"],
            total_students=total_students,
            reports_submitted=metrics.count(row["reports_submitted"]),
            avg_reported_attendance=metrics.report_attendance_percentage(row["avg_present"], total_students),
            attendance_percentage=metrics.marked_attendance_percentage(row["present_marks"], row["total_marks"]),
            avg_rating=metrics.average_rating(row["avg_rating"]),
        ))
    return result


def get_faculty_class_monitoring(db: DatabaseService, faculty_id: Optional[str]) -> List[monitoring_model.ClassMonitoringRow]:
    if faculty_id is None:
        return []
    return get_class_monitoring(db, faculty_id=faculty_id)


def get_lecturer_workload(db: DatabaseService) -> List[monitoring_model.LecturerWorkloadRow]:
    return [
        monitoring_model.LecturerWorkloadRow(
            lecturer_id=row["lecturer_id"],
            lecturer_name=row["lecturer_name"],
            email=row["email"],
            faculty_id=row["faculty_id"],
            total_classes=metrics.count(row["total_classes"]),
            total_courses=metrics.count(row["total_courses"]),
            total_reports=metrics.count(row["total_reports"]),
            avg_rating=metrics.average_rating(row["avg_rating"]),
        )
        for row in db.get_lecturer_workload_rows()
    ]


# --- Student ---

def get_student_attendance(student_id: str, db: DatabaseService) -> List[monitoring_model.StudentAttendanceRow]:
    """Per enrolled class, how many lectures were held and how the student marked them."""
    result = []
    for row in db.get_student_attendance_rows(student_id):
        present = metrics.count(row["marked_present"])
        absent = metrics.count(row["marked_absent"])
        result.append(monitoring_model.StudentAttendanceRow(
            class_id=row["class_id"],
            class_name=row["class_name"],
            course_name=row["course_name"],
            reports_held=metrics.count(row["reports_held"]),
            marked_present=present,
            marked_absent=absent,
            attendance_percentage=metrics.marked_attendance_percentage(present, present + absent),
        ))
    return result
