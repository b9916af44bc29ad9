# /luct-portal/app/services/feedback_service.py

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..core.exceptions import Conflict, NotFound, PermissionDenied, ValidationFailed
from ..models import report_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def submit_feedback(
    report_id: str,
    feedback_data: report_model.FeedbackCreate,
    prl_id: str,
    faculty_id: Optional[str],
    db: DatabaseService,
) -> report_model.Feedback:
    """
    Records a PRL's one-shot feedback on a report from their own faculty.
    Feedback cannot be edited, so a second submission is a conflict.
    """
    comment = feedback_data.comment.strip()
    if not comment:
        raise ValidationFailed("Feedback comment cannot be empty.")

    if not db.get_report_by_id(report_id):
        raise NotFound(f"Report with ID {report_id} not found.")

    if faculty_id is None or db.get_report_faculty_id(report_id) != faculty_id:
        logger.warning("PRL %s denied feedback on report %s outside their faculty", prl_id, report_id)
        raise PermissionDenied("You can only give feedback on reports from your faculty.")

    if db.get_feedback(report_id, prl_id):
        raise Conflict("You have already given feedback on this report.")

    record = {"id": f"fbk_{uuid.uuid4().hex[:12]}", "report_id": report_id, "prl_id": prl_id, "comment": comment}
    try:
        new_feedback = db.add_feedback(record)
    except IntegrityError:
        raise Conflict("You have already given feedback on this report.")

    logger.info("PRL %s gave feedback on report %s", prl_id, report_id)
    return report_model.Feedback.model_validate(new_feedback)
