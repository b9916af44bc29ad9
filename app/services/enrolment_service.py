# /luct-portal/app/services/enrolment_service.py

import logging
import uuid
from typing import List

from sqlalchemy.exc import IntegrityError

from ..core.exceptions import Conflict, NotFound
from ..models import enrolment_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def enrol_student(student_id: str, class_id: str, db: DatabaseService) -> enrolment_model.Enrolment:
    """
    Enrols a student in a class. The existence check gives a friendly 409 in
    the common case; the unique constraint on (student, class) settles the race
    between two concurrent requests.
    """
    if not db.get_class_by_id(class_id):
        raise NotFound(f"Class with ID {class_id} not found.")

    if db.get_enrolment(student_id, class_id):
        raise Conflict("You are already enrolled in this class.")

    record = {"id": f"enr_{uuid.uuid4().hex[:12]}", "student_id": student_id, "class_id": class_id}
    try:
        new_enrolment = db.add_enrolment(record)
    except IntegrityError:
        logger.info("Concurrent duplicate enrolment of %s in %s", student_id, class_id)
        raise Conflict("You are already enrolled in this class.")

    logger.info("Student %s enrolled in class %s", student_id, class_id)
    return enrolment_model.Enrolment.model_validate(new_enrolment)


def list_enrolled_classes(student_id: str, db: DatabaseService) -> List[enrolment_model.EnrolledClass]:
    return [enrolment_model.EnrolledClass.model_validate(row) for row in db.get_enrolled_classes(student_id)]
