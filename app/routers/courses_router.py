# /luct-portal/app/routers/courses_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..models import course_model
from ..models.user_model import CurrentUser, Role
from ..services import course_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- COURSE ENDPOINTS ---

@router.get("", response_model=List[course_model.Course], summary="Get All Courses")
def get_all_courses(
    faculty_id: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles()),
):
    return course_service.list_courses(db, faculty_id=faculty_id)

@router.post("", response_model=course_model.Course, status_code=status.HTTP_201_CREATED, summary="Create a New Course")
def create_course(
    course_create: course_model.CourseCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.PL)),
):
    return course_service.create_course(course_data=course_create, db=db)

@router.get("/{course_id}", response_model=course_model.Course, summary="Get a Single Course")
def get_course(
    course_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles()),
):
    return course_service.get_course(course_id, db)

@router.put("/{course_id}", response_model=course_model.Course, summary="Update a Course")
def update_course(
    course_id: str,
    course_update: course_model.CourseUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.PL)),
):
    return course_service.update_course(course_id, course_update, db)

@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Course")
def delete_course(
    course_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles(Role.PL)),
):
    """Deletes the course together with its classes and everything recorded against them."""
    course_service.delete_course(course_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
