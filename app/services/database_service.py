# /luct-portal/app/services/database_service.py

"""
Facade over the SQL repositories.

Services and routers talk only to `DatabaseService`; each method delegates to
the repository that owns the table. One instance wraps one request-scoped
SQLAlchemy session, provided by the `get_db_service` dependency.
"""

from typing import Any, Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.database import get_db

from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.course_class_repository_sql import CourseClassRepositorySQL
from .database_helpers.report_repository_sql import ReportRepositorySQL
from .database_helpers.rating_repository_sql import RatingRepositorySQL
from .database_helpers.monitoring_repository_sql import MonitoringRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.course_class_repo = CourseClassRepositorySQL(db_session)
        self.report_repo = ReportRepositorySQL(db_session)
        self.rating_repo = RatingRepositorySQL(db_session)
        self.monitoring_repo = MonitoringRepositorySQL(db_session)

    def rollback(self) -> None:
        self.session.rollback()

    # --- USER & FACULTY METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_repo.get_user_by_email(email)
    def add_user(self, record: Dict): return self.user_repo.add_user(record)
    def get_all_faculties(self): return self.user_repo.get_all_faculties()
    def get_faculty_by_id(self, faculty_id: str): return self.user_repo.get_faculty_by_id(faculty_id)
    def get_faculty_by_name(self, name: str): return self.user_repo.get_faculty_by_name(name)
    def add_faculty(self, record: Dict): return self.user_repo.add_faculty(record)

    # --- COURSE & CLASS METHODS (DELEGATED) ---
    def get_all_courses(self, faculty_id: Optional[str] = None, course_id: Optional[str] = None) -> List[Dict[str, Any]]: return self.course_class_repo.get_all_courses(faculty_id=faculty_id, course_id=course_id)
    def get_course_by_id(self, course_id: str): return self.course_class_repo.get_course_by_id(course_id)
    def get_course_by_code(self, code: str): return self.course_class_repo.get_course_by_code(code)
    def add_course(self, record: Dict): return self.course_class_repo.add_course(record)
    def update_course(self, course_id: str, data: Dict): return self.course_class_repo.update_course(course_id, data)
    def delete_course(self, course_id: str) -> bool: return self.course_class_repo.delete_course(course_id)
    def get_class_summaries(self, course_id: Optional[str] = None, lecturer_id: Optional[str] = None, faculty_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.course_class_repo.get_class_summaries(course_id=course_id, lecturer_id=lecturer_id, faculty_id=faculty_id)
    def get_class_summary(self, class_id: str) -> Optional[Dict[str, Any]]: return self.course_class_repo.get_class_summary(class_id)
    def get_class_by_id(self, class_id: str): return self.course_class_repo.get_class_by_id(class_id)
    def add_class(self, record: Dict): return self.course_class_repo.add_class(record)
    def update_class(self, class_id: str, data: Dict): return self.course_class_repo.update_class(class_id, data)
    def delete_class(self, class_id: str) -> bool: return self.course_class_repo.delete_class(class_id)

    # --- ENROLMENT METHODS (DELEGATED) ---
    def get_enrolment(self, student_id: str, class_id: str): return self.course_class_repo.get_enrolment(student_id, class_id)
    def add_enrolment(self, record: Dict): return self.course_class_repo.add_enrolment(record)
    def get_enrolled_classes(self, student_id: str) -> List[Dict[str, Any]]: return self.course_class_repo.get_enrolled_classes(student_id)

    # --- REPORT, ATTENDANCE & FEEDBACK METHODS (DELEGATED) ---
    def add_report(self, record: Dict): return self.report_repo.add_report(record)
    def get_report_by_id(self, report_id: str): return self.report_repo.get_report_by_id(report_id)
    def get_report_faculty_id(self, report_id: str) -> Optional[str]: return self.report_repo.get_report_faculty_id(report_id)
    def class_has_reports(self, class_id: str) -> bool: return self.report_repo.class_has_reports(class_id)
    def get_report_rows(self, **filters) -> List[Dict[str, Any]]: return self.report_repo.get_report_rows(**filters)
    def get_enrolled_report_rows(self, student_id: str) -> List[Dict[str, Any]]: return self.report_repo.get_enrolled_report_rows(student_id)
    def get_attendance_mark(self, report_id: str, student_id: str): return self.report_repo.get_attendance_mark(report_id, student_id)
    def upsert_attendance_mark(self, record: Dict): return self.report_repo.upsert_attendance_mark(record)
    def get_feedback(self, report_id: str, prl_id: str): return self.report_repo.get_feedback(report_id, prl_id)
    def add_feedback(self, record: Dict): return self.report_repo.add_feedback(record)

    # --- RATING METHODS (DELEGATED) ---
    def add_rating(self, record: Dict): return self.rating_repo.add_rating(record)
    def get_rating_details(self, student_id: Optional[str] = None, lecturer_id: Optional[str] = None, faculty_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.rating_repo.get_rating_details(student_id=student_id, lecturer_id=lecturer_id, faculty_id=faculty_id)
    def get_course_rating_summary(self, lecturer_id: str) -> List[Dict[str, Any]]: return self.rating_repo.get_course_rating_summary(lecturer_id)
    def get_rateable_classes(self, student_id: str) -> List[Dict[str, Any]]: return self.rating_repo.get_rateable_classes(student_id)

    # --- AGGREGATION METHODS (DELEGATED) ---
    def get_class_monitoring_rows(self, faculty_id: Optional[str] = None) -> List[Dict[str, Any]]: return self.monitoring_repo.get_class_monitoring_rows(faculty_id=faculty_id)
    def get_lecturer_workload_rows(self) -> List[Dict[str, Any]]: return self.monitoring_repo.get_lecturer_workload_rows()
    def get_programme_totals(self) -> Dict[str, Any]: return self.monitoring_repo.get_programme_totals()
    def get_lecturer_totals(self, lecturer_id: str) -> Dict[str, Any]: return self.monitoring_repo.get_lecturer_totals(lecturer_id)
    def get_faculty_totals(self, faculty_id: str, prl_id: str) -> Dict[str, Any]: return self.monitoring_repo.get_faculty_totals(faculty_id, prl_id)
    def get_student_attendance_rows(self, student_id: str) -> List[Dict[str, Any]]: return self.monitoring_repo.get_student_attendance_rows(student_id)
    def get_student_totals(self, student_id: str) -> Dict[str, Any]: return self.monitoring_repo.get_student_totals(student_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a request-scoped DatabaseService."""
    yield DatabaseService(db_session=db)
