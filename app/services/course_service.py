# /luct-portal/app/services/course_service.py

"""
Business logic for faculties and courses, including the PRL "my courses"
view which nests each course's classes under it.
"""

import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from ..core.exceptions import Conflict, NotFound, ValidationFailed
from ..models import course_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Faculties ---

def list_faculties(db: DatabaseService) -> List[course_model.Faculty]:
    return [course_model.Faculty.model_validate(f) for f in db.get_all_faculties()]


def create_faculty(faculty_data: course_model.FacultyCreate, db: DatabaseService) -> course_model.Faculty:
    name = faculty_data.name.strip()
    if db.get_faculty_by_name(name):
        raise Conflict(f"Faculty '{name}' already exists.")
    try:
        new_faculty = db.add_faculty({"id": f"fac_{uuid.uuid4().hex[:12]}", "name": name})
    except IntegrityError:
        raise Conflict(f"Faculty '{name}' already exists.")
    return course_model.Faculty.model_validate(new_faculty)


# --- Courses ---

def list_courses(db: DatabaseService, faculty_id: Optional[str] = None) -> List[course_model.Course]:
    return [course_model.Course.model_validate(row) for row in db.get_all_courses(faculty_id=faculty_id)]


def get_course(course_id: str, db: DatabaseService) -> course_model.Course:
    rows = db.get_all_courses(course_id=course_id)
    if not rows:
        raise NotFound(f"Course with ID {course_id} not found.")
    return course_model.Course.model_validate(rows[0])


def create_course(course_data: course_model.CourseCreate, db: DatabaseService) -> course_model.Course:
    if not db.get_faculty_by_id(course_data.faculty_id):
        raise NotFound(f"Faculty with ID {course_data.faculty_id} not found.")

    code = course_data.code.strip().upper()
    if db.get_course_by_code(code):
        raise Conflict(f"A course with code {code} already exists.")

    record = {
        "id": f"crs_{uuid.uuid4().hex[:12]}",
        "code": code,
        "name": course_data.name.strip(),
        "faculty_id": course_data.faculty_id,
    }
    try:
        new_course = db.add_course(record)
    except IntegrityError:
        logger.info("Concurrent duplicate course code %s", code)
        raise Conflict(f"A course with code {code} already exists.")
    logger.info("Created course %s (%s)", new_course.id, new_course.code)
    return get_course(new_course.id, db)


def update_course(course_id: str, course_update: course_model.CourseUpdate, db: DatabaseService) -> course_model.Course:
    update_data = course_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No update data provided.")

    if not db.get_course_by_id(course_id):
        raise NotFound(f"Course with ID {course_id} not found.")

    if "faculty_id" in update_data and not db.get_faculty_by_id(update_data["faculty_id"]):
        raise NotFound(f"Faculty with ID {update_data['faculty_id']} not found.")

    if "code" in update_data:
        update_data["code"] = update_data["code"].strip().upper()
        clash = db.get_course_by_code(update_data["code"])
        if clash and clash.id != course_id:
            raise Conflict(f"A course with code {update_data['code']} already exists.")

    db.update_course(course_id, update_data)
    return get_course(course_id, db)


def delete_course(course_id: str, db: DatabaseService) -> None:
    if not db.delete_course(course_id):
        raise NotFound(f"Course with ID {course_id} not found.")
    logger.info("Deleted course %s", course_id)


def get_courses_with_classes(db: DatabaseService, faculty_id: Optional[str]) -> List[course_model.CourseWithClasses]:
    """Courses of one faculty, each with its classes ordered by scheduled time."""
    if faculty_id is None:
        return []

    classes_by_course: Dict[str, List[course_model.CourseClass]] = {}
    for row in db.get_class_summaries(faculty_id=faculty_id):
        classes_by_course.setdefault(row["course_id"], []).append(course_model.CourseClass.model_validate(row))

    result = []
    for course in db.get_all_courses(faculty_id=faculty_id):
        classes = sorted(classes_by_course.get(course["id"], []), key=lambda c: c.scheduled_time or "")
        result.append(course_model.CourseWithClasses(
            course_id=course["id"],
            course_name=course["name"],
            course_code=course["code"],
            classes=classes,
        ))
    return result
