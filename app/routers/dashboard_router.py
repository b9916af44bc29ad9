# /luct-portal/app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import require_roles
from ..models.monitoring_model import DashboardSummary
from ..models.user_model import CurrentUser
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves the headline figures for the caller's role."
)
def get_dashboard_summary(
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles()),
):
    return dashboard_service.get_summary_data(user=current_user, db=db)
