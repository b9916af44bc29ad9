# /luct-portal/app/services/database_helpers/rating_repository_sql.py

"""
SQLAlchemy queries for the `Rating` table: submission, per-student history,
faculty/lecturer-scoped listings and the per-course averages shown to lecturers.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from app.db.models.course_models import Course, Class, Enrolment
from app.db.models.rating_models import Rating
from app.db.models.report_models import LectureReport
from app.db.models.user_models import User


class RatingRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_rating(self, record: Dict) -> Rating:
        new_rating = Rating(**record)
        self.db.add(new_rating)
        self.db.commit()
        self.db.refresh(new_rating)
        return new_rating

    def get_rating_details(
        self,
        student_id: Optional[str] = None,
        lecturer_id: Optional[str] = None,
        faculty_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Ratings joined with their class, course, lecturer and author."""
        lecturer = aliased(User)
        student = aliased(User)
        query = (
            self.db.query(
                Rating.id,
                Rating.rating,
                Rating.comment,
                Rating.created_at,
                Class.id.label("class_id"),
                Class.class_name,
                Course.id.label("course_id"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                lecturer.name.label("lecturer_name"),
                student.name.label("student_name"),
            )
            .join(Class, Rating.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .join(student, Rating.user_id == student.id)
            .outerjoin(lecturer, Class.lecturer_id == lecturer.id)
        )
        if student_id is not None:
            query = query.filter(Rating.user_id == student_id)
        if lecturer_id is not None:
            query = query.filter(Class.lecturer_id == lecturer_id)
        if faculty_id is not None:
            query = query.filter(Course.faculty_id == faculty_id)
        rows = query.order_by(Rating.created_at.desc(), Course.name, Class.class_name).all()
        return [dict(row._mapping) for row in rows]

    def get_course_rating_summary(self, lecturer_id: str) -> List[Dict[str, Any]]:
        """Average and count of ratings per course, over the lecturer's classes."""
        rows = (
            self.db.query(
                Course.id.label("course_id"),
                Course.name.label("course_name"),
                func.avg(Rating.rating).label("avg_rating"),
                func.count(Rating.id).label("total_ratings"),
            )
            .join(Class, Rating.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .filter(Class.lecturer_id == lecturer_id)
            .group_by(Course.id, Course.name)
            .order_by(func.avg(Rating.rating).desc(), Course.name)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def get_rateable_classes(self, student_id: str) -> List[Dict[str, Any]]:
        """Classes the student is enrolled in and that have at least one report."""
        reported_class_ids = select(LectureReport.class_id).distinct()
        rows = (
            self.db.query(
                Class.id.label("class_id"),
                Class.class_name,
                Class.venue,
                Class.scheduled_time,
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                User.name.label("lecturer_name"),
            )
            .join(Enrolment, Enrolment.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .outerjoin(User, Class.lecturer_id == User.id)
            .filter(Enrolment.student_id == student_id)
            .filter(Class.id.in_(reported_class_ids))
            .order_by(Course.name, Class.scheduled_time)
            .all()
        )
        return [dict(row._mapping) for row in rows]
