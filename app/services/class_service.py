# /luct-portal/app/services/class_service.py

"""
This service module is the business logic layer for classes: the scheduled
sections of a course, each optionally taught by one lecturer.

Every listing is assembled from `DatabaseService.get_class_summaries`, so the
number of registered students is always the live enrolment count. Lecturer
assignment (at creation, on update, or through the dedicated PL endpoint) goes
through one validation path which also keeps lecturers inside the faculty of
the course they teach.
"""

import logging
import uuid
from typing import List, Optional

from ..core.exceptions import NotFound, PermissionDenied, ValidationFailed
from ..db.models.course_models import Class, Course
from ..models import class_model
from ..models.user_model import CurrentUser, Role
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _validate_lecturer(db: DatabaseService, lecturer_id: str, course: Course) -> None:
    """
    The lecturer must exist and hold the lecturer role. When both the lecturer
    and the course belong to a faculty, the two faculties must match.
    """
    lecturer = db.get_user_by_id(lecturer_id)
    if not lecturer or lecturer.role != Role.LECTURER.value:
        raise NotFound(f"Lecturer with ID {lecturer_id} not found.")

    if lecturer.faculty_id and course.faculty_id and lecturer.faculty_id != course.faculty_id:
        logger.warning(
            "Rejected cross-faculty assignment of lecturer %s to course %s", lecturer_id, course.id
        )
        raise ValidationFailed("Lecturer belongs to a different faculty than the course.")


def _get_course_or_404(db: DatabaseService, course_id: str) -> Course:
    course = db.get_course_by_id(course_id)
    if not course:
        raise NotFound(f"Course with ID {course_id} not found.")
    return course


def _check_class_ownership(db_class: Class, current_user: CurrentUser) -> None:
    """A lecturer may only modify classes assigned to them; the PL may modify any."""
    if current_user.role == Role.LECTURER and db_class.lecturer_id != current_user.id:
        logger.warning("Lecturer %s tried to modify class %s", current_user.id, db_class.id)
        raise PermissionDenied("You can only modify classes assigned to you.")


# --- Facade Methods for CRUD Operations ---

def create_class(class_data: class_model.ClassCreate, current_user: CurrentUser, db: DatabaseService) -> class_model.ClassSummary:
    course = _get_course_or_404(db, class_data.course_id)
    if class_data.lecturer_id:
        if current_user.role == Role.LECTURER and class_data.lecturer_id != current_user.id:
            raise PermissionDenied("Only the Program Leader can assign a class to another lecturer.")
        _validate_lecturer(db, class_data.lecturer_id, course)

    record = {"id": f"cls_{uuid.uuid4().hex[:12]}", **class_data.model_dump()}
    record["class_name"] = record["class_name"].strip()
    new_class = db.add_class(record)
    logger.info("Created class %s for course %s", new_class.id, course.id)
    return get_class(new_class.id, db)


def update_class(
    class_id: str, class_update: class_model.ClassUpdate, current_user: CurrentUser, db: DatabaseService
) -> class_model.ClassSummary:
    update_data = class_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationFailed("No update data provided.")

    db_class = db.get_class_by_id(class_id)
    if not db_class:
        raise NotFound(f"Class with ID {class_id} not found.")
    _check_class_ownership(db_class, current_user)

    if update_data.get("class_name") is None:
        update_data.pop("class_name", None)
    if update_data.get("course_id") is None:
        update_data.pop("course_id", None)

    if (
        current_user.role == Role.LECTURER
        and "lecturer_id" in update_data
        and update_data["lecturer_id"] != db_class.lecturer_id
    ):
        raise PermissionDenied("Only the Program Leader can change the lecturer of a class.")

    course = _get_course_or_404(db, update_data.get("course_id", db_class.course_id))
    lecturer_id = update_data.get("lecturer_id", db_class.lecturer_id)
    if lecturer_id and ("lecturer_id" in update_data or "course_id" in update_data):
        _validate_lecturer(db, lecturer_id, course)

    db.update_class(class_id, update_data)
    return get_class(class_id, db)


def delete_class(class_id: str, current_user: CurrentUser, db: DatabaseService) -> None:
    db_class = db.get_class_by_id(class_id)
    if not db_class:
        raise NotFound(f"Class with ID {class_id} not found.")
    _check_class_ownership(db_class, current_user)

    db.delete_class(class_id)
    logger.info("Deleted class %s", class_id)


def assign_lecturer(assignment: class_model.LecturerAssignment, db: DatabaseService) -> class_model.ClassSummary:
    db_class = db.get_class_by_id(assignment.class_id)
    if not db_class:
        raise NotFound(f"Class with ID {assignment.class_id} not found.")

    course = _get_course_or_404(db, db_class.course_id)
    _validate_lecturer(db, assignment.lecturer_id, course)

    db.update_class(assignment.class_id, {"lecturer_id": assignment.lecturer_id})
    logger.info("Assigned lecturer %s to class %s", assignment.lecturer_id, assignment.class_id)
    return get_class(assignment.class_id, db)


# --- Data Assembly ---

def list_classes(
    db: DatabaseService,
    course_id: Optional[str] = None,
    lecturer_id: Optional[str] = None,
    faculty_id: Optional[str] = None,
) -> List[class_model.ClassSummary]:
    rows = db.get_class_summaries(course_id=course_id, lecturer_id=lecturer_id, faculty_id=faculty_id)
    return [class_model.ClassSummary.model_validate(row) for row in rows]


def get_class(class_id: str, db: DatabaseService) -> class_model.ClassSummary:
    row = db.get_class_summary(class_id)
    if not row:
        raise NotFound(f"Class with ID {class_id} not found.")
    return class_model.ClassSummary.model_validate(row)


def list_course_classes(course_id: str, db: DatabaseService) -> List[class_model.ClassSummary]:
    """Classes of one course; an unknown course is a 404 rather than an empty list."""
    _get_course_or_404(db, course_id)
    return list_classes(db, course_id=course_id)


def list_faculty_classes(db: DatabaseService, faculty_id: Optional[str]) -> List[class_model.ClassSummary]:
    # A PRL without a faculty sees nothing, never every class.
    if faculty_id is None:
        return []
    return list_classes(db, faculty_id=faculty_id)
