# /luct-portal/app/routers/lecturer_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..core.deps import require_roles
from ..models import class_model, monitoring_model, rating_model, report_model
from ..models.user_model import CurrentUser, Role
from ..services import class_service, monitoring_service, rating_service, report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

lecturer_only = require_roles(Role.LECTURER)

# --- OVERVIEW ENDPOINTS ---

@router.get("/overview/stats", response_model=monitoring_model.LecturerOverviewStats, summary="My Teaching Totals")
def get_overview_stats(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(lecturer_only)):
    return monitoring_service.get_lecturer_overview_stats(current_user.id, db)

@router.get("/overview/recent-reports", response_model=List[report_model.ReportSummary], summary="My Latest Reports")
def get_recent_reports(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(lecturer_only)):
    return report_service.list_recent_lecturer_reports(current_user.id, db)

# --- OWN DATA ENDPOINTS ---

@router.get("/classes", response_model=List[class_model.ClassSummary], summary="My Classes")
def get_my_classes(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(lecturer_only)):
    return class_service.list_classes(db, lecturer_id=current_user.id)

@router.get("/reports", response_model=List[report_model.ReportSummary], summary="My Reports")
def get_my_reports(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(lecturer_only)):
    return report_service.list_lecturer_reports(current_user.id, db)

@router.get("/ratings", response_model=rating_model.LecturerRatings, summary="Ratings of My Classes")
def get_my_ratings(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(lecturer_only)):
    """Per-course averages plus every individual rating left on the caller's classes."""
    return rating_service.get_lecturer_ratings(current_user.id, db)
