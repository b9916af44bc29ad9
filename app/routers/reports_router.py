# /luct-portal/app/routers/reports_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.deps import require_roles
from ..models import report_model
from ..models.user_model import CurrentUser, Role
from ..services import report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("", response_model=report_model.ReportSummary, status_code=status.HTTP_201_CREATED, summary="Submit a Lecture Report")
def submit_report(
    report_create: report_model.ReportCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.LECTURER)),
):
    """
    Records a lecture for one of the caller's classes. Reports cannot be
    edited afterwards; a future date is rejected with 400.
    """
    return report_service.submit_report(report_create, current_user, db)


@router.get("", response_model=List[report_model.ReportSummary], summary="List Lecture Reports")
def list_reports(
    search: Optional[str] = Query(default=None, description="Matches topic or learning outcomes."),
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.PL, Role.PRL)),
):
    """PLs see every report; PRLs see only the reports of their own faculty."""
    return report_service.list_reports(current_user, db, search=search)


@router.get("/{report_id}", response_model=report_model.ReportSummary, summary="Get a Single Lecture Report")
def get_report(
    report_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.PL, Role.PRL)),
):
    return report_service.get_report(report_id, current_user, db)
