# /luct-portal/app/routers/ratings_router.py

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.deps import require_roles
from ..models import rating_model
from ..models.user_model import CurrentUser, Role
from ..services import rating_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

student_only = require_roles(Role.STUDENT)


@router.get("/available-classes", response_model=List[rating_model.RateableClass], summary="Classes I Can Rate")
def get_available_classes(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(student_only)):
    """Enrolled classes that have had at least one lecture reported."""
    return rating_service.list_rateable_classes(current_user.id, db)

@router.post("", response_model=rating_model.Rating, status_code=status.HTTP_201_CREATED, summary="Rate a Class")
def submit_rating(
    rating_create: rating_model.RatingCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(student_only),
):
    return rating_service.submit_rating(rating_create, current_user.id, db)

@router.get("/my", response_model=List[rating_model.RatingDetail], summary="My Ratings")
def get_my_ratings(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(student_only)):
    return rating_service.list_student_ratings(current_user.id, db)
