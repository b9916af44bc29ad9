# /luct-portal/app/services/database_helpers/course_class_repository_sql.py

"""
This module contains the SQLAlchemy queries for the teaching structure:
the `Course`, `Class` and `Enrolment` tables.

Class listings always carry a live `total_registered_students` figure computed
from the enrolment rows; nothing in the schema stores that count. The optional
`faculty_id` filters are the query-level half of PRL faculty scoping.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.course_models import Course, Class, Enrolment
from app.db.models.user_models import Faculty, User
from .sql_utils import model_to_dict


class CourseClassRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Course Methods ---

    def get_all_courses(self, faculty_id: Optional[str] = None, course_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Courses with their faculty name and number of classes."""
        class_counts = (
            self.db.query(Class.course_id.label("course_id"), func.count(Class.id).label("class_count"))
            .group_by(Class.course_id)
            .subquery()
        )
        query = (
            self.db.query(
                Course,
                Faculty.name.label("faculty_name"),
                func.coalesce(class_counts.c.class_count, 0).label("class_count"),
            )
            .join(Faculty, Course.faculty_id == Faculty.id)
            .outerjoin(class_counts, class_counts.c.course_id == Course.id)
        )
        if faculty_id is not None:
            query = query.filter(Course.faculty_id == faculty_id)
        if course_id is not None:
            query = query.filter(Course.id == course_id)
        rows = query.order_by(Course.name).all()
        return [
            {**model_to_dict(course), "faculty_name": faculty_name, "class_count": class_count}
            for course, faculty_name, class_count in rows
        ]

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        return self.db.query(Course).filter(Course.id == course_id).first()

    def get_course_by_code(self, code: str) -> Optional[Course]:
        return self.db.query(Course).filter(func.upper(Course.code) == code.upper()).first()

    def add_course(self, record: Dict) -> Course:
        new_course = Course(**record)
        self.db.add(new_course)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(new_course)
        return new_course

    def update_course(self, course_id: str, data: Dict) -> Optional[Course]:
        db_course = self.get_course_by_id(course_id)
        if db_course:
            for key, value in data.items():
                setattr(db_course, key, value)
            self.db.commit()
            self.db.refresh(db_course)
        return db_course

    def delete_course(self, course_id: str) -> bool:
        db_course = self.get_course_by_id(course_id)
        if db_course:
            # Cascades to the course's classes and everything under them.
            self.db.delete(db_course)
            self.db.commit()
            return True
        return False

    # --- Class Methods ---

    def _enrolment_counts(self):
        return (
            self.db.query(
                Enrolment.class_id.label("class_id"),
                func.count(Enrolment.id).label("registered"),
            )
            .group_by(Enrolment.class_id)
            .subquery()
        )

    def _class_summary_query(self):
        counts = self._enrolment_counts()
        return (
            self.db.query(
                Class,
                Course.code.label("course_code"),
                Course.name.label("course_name"),
                User.name.label("lecturer_name"),
                func.coalesce(counts.c.registered, 0).label("total_registered_students"),
            )
            .join(Course, Class.course_id == Course.id)
            .outerjoin(User, Class.lecturer_id == User.id)
            .outerjoin(counts, counts.c.class_id == Class.id)
        )

    @staticmethod
    def _summary_row_to_dict(row) -> Dict[str, Any]:
        cls, course_code, course_name, lecturer_name, registered = row
        return {
            **model_to_dict(cls),
            "course_code": course_code,
            "course_name": course_name,
            "lecturer_name": lecturer_name,
            "total_registered_students": registered,
        }

    def get_class_summaries(
        self,
        course_id: Optional[str] = None,
        lecturer_id: Optional[str] = None,
        faculty_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = self._class_summary_query()
        if course_id is not None:
            query = query.filter(Class.course_id == course_id)
        if lecturer_id is not None:
            query = query.filter(Class.lecturer_id == lecturer_id)
        if faculty_id is not None:
            query = query.filter(Course.faculty_id == faculty_id)
        rows = query.order_by(Course.name, Class.class_name).all()
        return [self._summary_row_to_dict(row) for row in rows]

    def get_class_summary(self, class_id: str) -> Optional[Dict[str, Any]]:
        row = self._class_summary_query().filter(Class.id == class_id).first()
        return self._summary_row_to_dict(row) if row else None

    def get_class_by_id(self, class_id: str) -> Optional[Class]:
        return self.db.query(Class).filter(Class.id == class_id).first()

    def add_class(self, record: Dict) -> Class:
        new_class = Class(**record)
        self.db.add(new_class)
        self.db.commit()
        self.db.refresh(new_class)
        return new_class

    def update_class(self, class_id: str, data: Dict) -> Optional[Class]:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self.db.commit()
            self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: str) -> bool:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            # Enrolments, reports (with their marks and feedback) and ratings
            # are removed by the cascade defined on the model.
            self.db.delete(db_class)
            self.db.commit()
            return True
        return False

    # --- Enrolment Methods ---

    def get_enrolment(self, student_id: str, class_id: str) -> Optional[Enrolment]:
        return (
            self.db.query(Enrolment)
            .filter(Enrolment.student_id == student_id, Enrolment.class_id == class_id)
            .first()
        )

    def add_enrolment(self, record: Dict) -> Enrolment:
        """
        Inserts an enrolment. A concurrent duplicate is stopped by the unique
        constraint and surfaces as an `IntegrityError` for the caller to map.
        """
        new_enrolment = Enrolment(**record)
        self.db.add(new_enrolment)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(new_enrolment)
        return new_enrolment

    def get_enrolled_classes(self, student_id: str) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(
                Enrolment.id.label("enrolment_id"),
                Class.id.label("class_id"),
                Class.class_name,
                Class.venue,
                Class.scheduled_time,
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                User.name.label("lecturer_name"),
            )
            .join(Class, Enrolment.class_id == Class.id)
            .join(Course, Class.course_id == Course.id)
            .outerjoin(User, Class.lecturer_id == User.id)
            .filter(Enrolment.student_id == student_id)
            .order_by(Course.name, Class.class_name)
            .all()
        )
        return [dict(row._mapping) for row in rows]
