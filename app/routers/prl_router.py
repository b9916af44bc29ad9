# /luct-portal/app/routers/prl_router.py

"""
Principal Lecturer endpoints. Each one is scoped to the faculty recorded on
the caller's user row, resolved by `get_prl_faculty_id`; a PRL with no
faculty gets empty lists and cannot give feedback.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..core.deps import get_prl_faculty_id, require_roles
from ..models import class_model, course_model, monitoring_model, rating_model, report_model
from ..models.user_model import CurrentUser, Role
from ..services import class_service, course_service, feedback_service, monitoring_service, rating_service, report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

prl_only = require_roles(Role.PRL)


@router.get("/reports", response_model=List[report_model.ReportSummary], summary="Faculty Lecture Reports")
def get_faculty_reports(
    faculty_id: Optional[str] = Depends(get_prl_faculty_id),
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(prl_only),
):
    return report_service.list_prl_reports(current_user.id, faculty_id, db)

@router.post("/reports/{report_id}/feedback", response_model=report_model.Feedback, status_code=status.HTTP_201_CREATED, summary="Give Feedback on a Report")
def give_feedback(
    report_id: str,
    feedback_create: report_model.FeedbackCreate,
    faculty_id: Optional[str] = Depends(get_prl_faculty_id),
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(prl_only),
):
    """One comment per report and PRL; it cannot be edited once given."""
    return feedback_service.submit_feedback(report_id, feedback_create, current_user.id, faculty_id, db)

@router.get("/courses", response_model=List[course_model.CourseWithClasses], summary="Faculty Courses with Classes")
def get_faculty_courses(faculty_id: Optional[str] = Depends(get_prl_faculty_id), db: DatabaseService = Depends(get_db_service)):
    return course_service.get_courses_with_classes(db, faculty_id)

@router.get("/monitoring", response_model=List[monitoring_model.ClassMonitoringRow], summary="Faculty Class Monitoring")
def get_faculty_monitoring(faculty_id: Optional[str] = Depends(get_prl_faculty_id), db: DatabaseService = Depends(get_db_service)):
    return monitoring_service.get_faculty_class_monitoring(db, faculty_id)

@router.get("/rating", response_model=List[rating_model.RatingDetail], summary="Faculty Ratings")
def get_faculty_ratings(faculty_id: Optional[str] = Depends(get_prl_faculty_id), db: DatabaseService = Depends(get_db_service)):
    return rating_service.list_faculty_ratings(faculty_id, db)

@router.get("/classes", response_model=List[class_model.ClassSummary], summary="Faculty Classes")
def get_faculty_classes(faculty_id: Optional[str] = Depends(get_prl_faculty_id), db: DatabaseService = Depends(get_db_service)):
    return class_service.list_faculty_classes(db, faculty_id)
