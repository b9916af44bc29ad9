# /luct-portal/app/services/rating_service.py

"""
Student ratings of classes, and the read-only views lecturers and PRLs have
over them. A student may rate a class only once it is under way: they must be
enrolled in it and it must have at least one lecture report.
"""

import logging
import uuid
from typing import List, Optional

from ..core.exceptions import NotFound, PermissionDenied
from ..models import rating_model
from .database_service import DatabaseService
from .monitoring_helpers import metrics

logger = logging.getLogger(__name__)


def submit_rating(rating_data: rating_model.RatingCreate, student_id: str, db: DatabaseService) -> rating_model.Rating:
    if not db.get_class_by_id(rating_data.class_id):
        raise NotFound(f"Class with ID {rating_data.class_id} not found.")

    if not db.get_enrolment(student_id, rating_data.class_id):
        raise PermissionDenied("You can only rate classes you are enrolled in.")

    if not db.class_has_reports(rating_data.class_id):
        raise PermissionDenied("This class cannot be rated until a lecture has been reported.")

    comment = rating_data.comment.strip() if rating_data.comment else None
    new_rating = db.add_rating({
        "id": f"rtg_{uuid.uuid4().hex[:12]}",
        "class_id": rating_data.class_id,
        "user_id": student_id,
        "rating": rating_data.rating,
        "comment": comment or None,
    })
    logger.info("Student %s rated class %s", student_id, rating_data.class_id)
    return rating_model.Rating.model_validate(new_rating)


def list_rateable_classes(student_id: str, db: DatabaseService) -> List[rating_model.RateableClass]:
    return [rating_model.RateableClass.model_validate(row) for row in db.get_rateable_classes(student_id)]


def list_student_ratings(student_id: str, db: DatabaseService) -> List[rating_model.RatingDetail]:
    return [rating_model.RatingDetail.model_validate(row) for row in db.get_rating_details(student_id=student_id)]


def get_lecturer_ratings(lecturer_id: str, db: DatabaseService) -> rating_model.LecturerRatings:
    summary = [
        rating_model.CourseRatingSummary(
            course_id=row["course_id"],
            course_name=row["course_name"],
            avg_rating=metrics.average_rating(row["avg_rating"]),
            total_ratings=metrics.count(row["total_ratings"]),
        )
        for row in db.get_course_rating_summary(lecturer_id)
    ]
    details = [rating_model.RatingDetail.model_validate(row) for row in db.get_rating_details(lecturer_id=lecturer_id)]
    return rating_model.LecturerRatings(summary=summary, details=details)


def list_faculty_ratings(faculty_id: Optional[str], db: DatabaseService) -> List[rating_model.RatingDetail]:
    if faculty_id is None:
        return []
    return [rating_model.RatingDetail.model_validate(row) for row in db.get_rating_details(faculty_id=faculty_id)]
