# /luct-portal/app/services/database_helpers/report_repository_sql.py

"""
SQLAlchemy queries for `LectureReport`, `AttendanceMark` and `Feedback`.

`get_report_rows` is the single query behind every report listing (lecturer,
PRL, PL). It joins each report with its class, course and author and with two
pre-aggregated subqueries: the live enrolment count of the class and the
attendance-mark tallies of the report. Aggregating in subqueries keeps the
counts from being multiplied by the joins.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.course_models import Course, Class, Enrolment
from app.db.models.report_models import LectureReport, AttendanceMark, Feedback
from app.db.models.user_models import User
from .sql_utils import model_to_dict


class ReportRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Lecture Report Methods ---

    def add_report(self, record: Dict) -> LectureReport:
        new_report = LectureReport(**record)
        self.db.add(new_report)
        self.db.commit()
        self.db.refresh(new_report)
        return new_report

    def get_report_by_id(self, report_id: str) -> Optional[LectureReport]:
        return self.db.query(LectureReport).filter(LectureReport.id == report_id).first()

    def get_report_faculty_id(self, report_id: str) -> Optional[str]:
        """Faculty owning the course the report's class belongs to."""
        return (
            self.db.query(Course.faculty_id)
            .join(Class, Class.course_id == Course.id)
            .join(LectureReport, LectureReport.class_id == Class.id)
            .filter(LectureReport.id == report_id)
            .scalar()
        )

    def class_has_reports(self, class_id: str) -> bool:
        return self.db.query(LectureReport.id).filter(LectureReport.class_id == class_id).first() is not None

    def get_report_rows(
        self,
        faculty_id: Optional[str] = None,
        class_lecturer_id: Optional[str] = None,
        submitted_by: Optional[str] = None,
        report_id: Optional[str] = None,
        search: Optional[str] = None,
        feedback_prl_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Report rows with the raw inputs of both attendance figures.

        Each filter is optional and they combine with AND. When
        `feedback_prl_id` is given, the row also carries that PRL's existing
        feedback comment (or None).
        """
        enrol_counts = (
            self.db.query(
                Enrolment.class_id.label("class_id"),
                func.count(Enrolment.id).label("registered"),
            )
            .group_by(Enrolment.class_id)
            .subquery()
        )
        mark_counts = (
            self.db.query(
                AttendanceMark.report_id.label("report_id"),
                func.count(AttendanceMark.id).label("total_marks"),
                func.sum(case((AttendanceMark.status == "present", 1), else_=0)).label("present_marks"),
            )
            .group_by(AttendanceMark.report_id)
            .subquery()
        )

        query = (
            self.db.query(
                LectureReport,
                Class.class_name.label("class_name"),
                Course.id.label("course_id"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                User.name.label("lecturer_name"),
                func.coalesce(enrol_counts.c.registered, 0).label("total_registered_students"),
                func.coalesce(mark_counts.c.total_marks, 0).label("total_marks"),
                func.coalesce(mark_counts.c.present_marks, 0).label("present_marks"),
            )
            .join(Class, LectureReport.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .join(User, LectureReport.submitted_by == User.id)
            .outerjoin(enrol_counts, enrol_counts.c.class_id == Class.id)
            .outerjoin(mark_counts, mark_counts.c.report_id == LectureReport.id)
        )

        if feedback_prl_id is not None:
            query = query.outerjoin(
                Feedback,
                and_(Feedback.report_id == LectureReport.id, Feedback.prl_id == feedback_prl_id),
            ).add_columns(Feedback.comment.label("existing_feedback"))

        if faculty_id is not None:
            query = query.filter(Course.faculty_id == faculty_id)
        if class_lecturer_id is not None:
            query = query.filter(Class.lecturer_id == class_lecturer_id)
        if submitted_by is not None:
            query = query.filter(LectureReport.submitted_by == submitted_by)
        if report_id is not None:
            query = query.filter(LectureReport.id == report_id)
        if search:
            escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{escaped}%"
            query = query.filter(
                or_(
                    LectureReport.topic.ilike(pattern, escape="\\"),
                    LectureReport.learning_outcomes.ilike(pattern, escape="\\"),
                )
            )

        query = query.order_by(LectureReport.date.desc(), LectureReport.created_at.desc())
        if limit is not None:
            query = query.limit(limit)

        results = []
        for row in query.all():
            report = row[0]
            record = model_to_dict(report)
            record.update(
                {key: value for key, value in row._mapping.items() if not isinstance(value, LectureReport)}
            )
            results.append(record)
        return results

    def get_enrolled_report_rows(self, student_id: str) -> List[Dict[str, Any]]:
        """Reports of every class the student is enrolled in, with their own mark."""
        enrolled_class_ids = select(Enrolment.class_id).where(Enrolment.student_id == student_id)
        rows = (
            self.db.query(
                LectureReport.id,
                LectureReport.class_id,
                LectureReport.week,
                LectureReport.date,
                LectureReport.topic,
                LectureReport.learning_outcomes,
                LectureReport.recommendations,
                LectureReport.actual_students_present,
                Class.class_name,
                Course.name.label("course_name"),
                User.name.label("lecturer_name"),
                AttendanceMark.status.label("student_status"),
            )
            .join(Class, LectureReport.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .join(User, LectureReport.submitted_by == User.id)
            .outerjoin(
                AttendanceMark,
                and_(AttendanceMark.report_id == LectureReport.id, AttendanceMark.student_id == student_id),
            )
            .filter(LectureReport.class_id.in_(enrolled_class_ids))
            .order_by(LectureReport.date.desc())
            .all()
        )
        return [dict(row._mapping) for row in rows]

    # --- Attendance Mark Methods ---

    def get_attendance_mark(self, report_id: str, student_id: str) -> Optional[AttendanceMark]:
        return (
            self.db.query(AttendanceMark)
            .filter(AttendanceMark.report_id == report_id, AttendanceMark.student_id == student_id)
            .first()
        )

    def upsert_attendance_mark(self, record: Dict) -> AttendanceMark:
        """
        Inserts the mark, or overwrites the status of the existing mark for the
        same (report, student) pair. If a concurrent request inserted the pair
        first, the unique constraint rejects our insert and we update instead.
        """
        existing = self.get_attendance_mark(record["report_id"], record["student_id"])
        if existing is None:
            new_mark = AttendanceMark(**record)
            self.db.add(new_mark)
            try:
                self.db.commit()
                self.db.refresh(new_mark)
                return new_mark
            except IntegrityError:
                self.db.rollback()
                existing = self.get_attendance_mark(record["report_id"], record["student_id"])
                if existing is None:
                    raise
        existing.status = record["status"]
        self.db.commit()
        self.db.refresh(existing)
        return existing

    # --- Feedback Methods ---

    def get_feedback(self, report_id: str, prl_id: str) -> Optional[Feedback]:
        return (
            self.db.query(Feedback)
            .filter(Feedback.report_id == report_id, Feedback.prl_id == prl_id)
            .first()
        )

    def add_feedback(self, record: Dict) -> Feedback:
        new_feedback = Feedback(**record)
        self.db.add(new_feedback)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(new_feedback)
        return new_feedback
