# /luct-portal/app/services/database_helpers/monitoring_repository_sql.py

"""
Aggregation queries behind the monitoring and overview pages.

Each metric is computed in its own grouped subquery and then LEFT JOINed onto
the row it describes (class, lecturer, enrolled class). Joining the raw fact
tables directly would multiply counts (every enrolment times every mark), so
no aggregate here is taken over more than one fan-out.

The methods return raw SQL results (counts, `AVG`s that may be NULL); turning
them into display figures is left to `monitoring_helpers.metrics`.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.db.models.course_models import Course, Class, Enrolment
from app.db.models.rating_models import Rating
from app.db.models.report_models import LectureReport, AttendanceMark, Feedback
from app.db.models.user_models import User
from app.models.user_model import Role


class MonitoringRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Reusable grouped subqueries ---

    def _enrolments_per_class(self):
        return (
            self.db.query(
                Enrolment.class_id.label("class_id"),
                func.count(func.distinct(Enrolment.student_id)).label("total_students"),
            )
            .group_by(Enrolment.class_id)
            .subquery()
        )

    def _reports_per_class(self):
        return (
            self.db.query(
                LectureReport.class_id.label("class_id"),
                func.count(LectureReport.id).label("reports_submitted"),
                func.avg(LectureReport.actual_students_present).label("avg_present"),
            )
            .group_by(LectureReport.class_id)
            .subquery()
        )

    def _marks_per_class(self):
        return (
            self.db.query(
                LectureReport.class_id.label("class_id"),
                func.count(AttendanceMark.id).label("total_marks"),
                func.sum(case((AttendanceMark.status == "present", 1), else_=0)).label("present_marks"),
            )
            .join(AttendanceMark, AttendanceMark.report_id == LectureReport.id)
            .group_by(LectureReport.class_id)
            .subquery()
        )

    def _ratings_per_class(self):
        return (
            self.db.query(
                Rating.class_id.label("class_id"),
                func.avg(Rating.rating).label("avg_rating"),
                func.count(Rating.id).label("total_ratings"),
            )
            .group_by(Rating.class_id)
            .subquery()
        )

    # --- Per-class monitoring (PL and PRL) ---

    def get_class_monitoring_rows(self, faculty_id: Optional[str] = None) -> List[Dict[str, Any]]:
        enrolments = self._enrolments_per_class()
        reports = self._reports_per_class()
        marks = self._marks_per_class()
        ratings = self._ratings_per_class()

        query = (
            self.db.query(
                Class.id.label("class_id"),
                Class.class_name,
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                User.name.label("lecturer_name"),
                func.coalesce(enrolments.c.total_students, 0).label("total_students"),
                func.coalesce(reports.c.reports_submitted, 0).label("reports_submitted"),
                reports.c.avg_present,
                func.coalesce(marks.c.total_marks, 0).label("total_marks"),
                func.coalesce(marks.c.present_marks, 0).label("present_marks"),
                ratings.c.avg_rating,
            )
            .join(Course, Class.course_id == Course.id)
            .outerjoin(User, Class.lecturer_id == User.id)
            .outerjoin(enrolments, enrolments.c.class_id == Class.id)
            .outerjoin(reports, reports.c.class_id == Class.id)
            .outerjoin(marks, marks.c.class_id == Class.id)
            .outerjoin(ratings, ratings.c.class_id == Class.id)
        )
        if faculty_id is not None:
            query = query.filter(Course.faculty_id == faculty_id)
        rows = query.order_by(Course.name, Class.class_name).all()
        return [dict(row._mapping) for row in rows]

    # --- Per-lecturer workload (PL) ---

    def get_lecturer_workload_rows(self) -> List[Dict[str, Any]]:
        classes = (
            self.db.query(
                Class.lecturer_id.label("lecturer_id"),
                func.count(func.distinct(Class.id)).label("total_classes"),
                func.count(func.distinct(Class.course_id)).label("total_courses"),
            )
            .filter(Class.lecturer_id.isnot(None))
            .group_by(Class.lecturer_id)
            .subquery()
        )
        reports = (
            self.db.query(
                LectureReport.submitted_by.label("lecturer_id"),
                func.count(LectureReport.id).label("total_reports"),
            )
            .group_by(LectureReport.submitted_by)
            .subquery()
        )
        ratings = (
            self.db.query(
                Class.lecturer_id.label("lecturer_id"),
                func.avg(Rating.rating).label("avg_rating"),
            )
            .join(Rating, Rating.class_id == Class.id)
            .filter(Class.lecturer_id.isnot(None))
            .group_by(Class.lecturer_id)
            .subquery()
        )
        rows = (
            self.db.query(
                User.id.label("lecturer_id"),
                User.name.label("lecturer_name"),
                User.email,
                User.faculty_id,
                func.coalesce(classes.c.total_classes, 0).label("total_classes"),
                func.coalesce(classes.c.total_courses, 0).label("total_courses"),
                func.coalesce(reports.c.total_reports, 0).label("total_reports"),
                ratings.c.avg_rating,
            )
            .outerjoin(classes, classes.c.lecturer_id == User.id)
            .outerjoin(reports, reports.c.lecturer_id == User.id)
            .outerjoin(ratings, ratings.c.lecturer_id == User.id)
            .filter(User.role == Role.LECTURER.value)
            .order_by(User.name)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    # --- Programme-wide metrics (PL) ---

    def get_programme_totals(self) -> Dict[str, Any]:
        enrolments = self._enrolments_per_class()
        # Mean of per-report head-count percentages, over reports whose class
        # has at least one registered student.
        avg_attendance = (
            self.db.query(
                func.avg(LectureReport.actual_students_present * 100.0 / enrolments.c.total_students)
            )
            .join(enrolments, enrolments.c.class_id == LectureReport.class_id)
            .filter(enrolments.c.total_students > 0)
            .scalar()
        )
        return {
            "total_reports": self.db.query(func.count(LectureReport.id)).scalar(),
            "avg_attendance": avg_attendance,
            "avg_rating": self.db.query(func.avg(Rating.rating)).scalar(),
            "total_lecturers": self.db.query(func.count(User.id)).filter(User.role == Role.LECTURER.value).scalar(),
            "total_classes": self.db.query(func.count(Class.id)).scalar(),
            "total_courses": self.db.query(func.count(Course.id)).scalar(),
        }

    # --- Lecturer overview ---

    def get_lecturer_totals(self, lecturer_id: str) -> Dict[str, Any]:
        return {
            "total_classes": self.db.query(func.count(Class.id)).filter(Class.lecturer_id == lecturer_id).scalar(),
            "total_reports": (
                self.db.query(func.count(LectureReport.id))
                .filter(LectureReport.submitted_by == lecturer_id)
                .scalar()
            ),
            "total_students": (
                self.db.query(func.count(func.distinct(Enrolment.student_id)))
                .join(Class, Enrolment.class_id == Class.id)
                .filter(Class.lecturer_id == lecturer_id)
                .scalar()
            ),
            "avg_rating": (
                self.db.query(func.avg(Rating.rating))
                .join(Class, Rating.class_id == Class.id)
                .filter(Class.lecturer_id == lecturer_id)
                .scalar()
            ),
        }

    # --- PRL overview ---

    def get_faculty_totals(self, faculty_id: str, prl_id: str) -> Dict[str, Any]:
        faculty_reports = (
            self.db.query(LectureReport.id)
            .join(Class, LectureReport.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .filter(Course.faculty_id == faculty_id)
        )
        reviewed = select(Feedback.report_id).where(Feedback.prl_id == prl_id)
        return {
            "total_courses": self.db.query(func.count(Course.id)).filter(Course.faculty_id == faculty_id).scalar(),
            "total_classes": (
                self.db.query(func.count(Class.id))
                .join(Course, Class.course_id == Course.id)
                .filter(Course.faculty_id == faculty_id)
                .scalar()
            ),
            "total_reports": faculty_reports.count(),
            "pending_feedback": faculty_reports.filter(LectureReport.id.notin_(reviewed)).count(),
            "avg_rating": (
                self.db.query(func.avg(Rating.rating))
                .join(Class, Rating.class_id == Class.id)
                .join(Course, Class.course_id == Course.id)
                .filter(Course.faculty_id == faculty_id)
                .scalar()
            ),
        }

    # --- Student attendance ---

    def get_student_attendance_rows(self, student_id: str) -> List[Dict[str, Any]]:
        reports = self._reports_per_class()
        own_marks = (
            self.db.query(
                LectureReport.class_id.label("class_id"),
                func.sum(case((AttendanceMark.status == "present", 1), else_=0)).label("marked_present"),
                func.sum(case((AttendanceMark.status == "absent", 1), else_=0)).label("marked_absent"),
            )
            .join(AttendanceMark, AttendanceMark.report_id == LectureReport.id)
            .filter(AttendanceMark.student_id == student_id)
            .group_by(LectureReport.class_id)
            .subquery()
        )
        rows = (
            self.db.query(
                Class.id.label("class_id"),
                Class.class_name,
                Course.name.label("course_name"),
                func.coalesce(reports.c.reports_submitted, 0).label("reports_held"),
                func.coalesce(own_marks.c.marked_present, 0).label("marked_present"),
                func.coalesce(own_marks.c.marked_absent, 0).label("marked_absent"),
            )
            .join(Enrolment, Enrolment.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .outerjoin(reports, reports.c.class_id == Class.id)
            .outerjoin(own_marks, own_marks.c.class_id == Class.id)
            .filter(Enrolment.student_id == student_id)
            .order_by(Course.name, Class.class_name)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def get_student_totals(self, student_id: str) -> Dict[str, Any]:
        enrolled_class_ids = select(Enrolment.class_id).where(Enrolment.student_id == student_id)
        marks = (
            self.db.query(
                func.count(AttendanceMark.id),
                func.sum(case((AttendanceMark.status == "present", 1), else_=0)),
            )
            .filter(AttendanceMark.student_id == student_id)
            .one()
        )
        return {
            "enrolled_classes": (
                self.db.query(func.count(Enrolment.id)).filter(Enrolment.student_id == student_id).scalar()
            ),
            "available_reports": (
                self.db.query(func.count(LectureReport.id))
                .filter(LectureReport.class_id.in_(enrolled_class_ids))
                .scalar()
            ),
            "ratings_submitted": self.db.query(func.count(Rating.id)).filter(Rating.user_id == student_id).scalar(),
            "total_marks": marks[0],
            "present_marks": marks[1],
        }
