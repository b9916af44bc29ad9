# /luct-portal/app/routers/classes_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import require_roles
from ..models import class_model
from ..models.user_model import CurrentUser, Role
from ..services import class_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

can_edit_classes = require_roles(Role.PL, Role.LECTURER)

# --- CLASS ENDPOINTS ---

@router.get("", response_model=List[class_model.ClassSummary], summary="Get All Classes")
def get_all_classes(
    course_id: Optional[str] = None,
    lecturer_id: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles()),
):
    return class_service.list_classes(db, course_id=course_id, lecturer_id=lecturer_id)

@router.post("", response_model=class_model.ClassSummary, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_class(
    class_create: class_model.ClassCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(can_edit_classes),
):
    return class_service.create_class(class_data=class_create, current_user=current_user, db=db)

@router.get("/{class_id}", response_model=class_model.ClassSummary, summary="Get a Single Class")
def get_class(
    class_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(require_roles()),
):
    return class_service.get_class(class_id, db)

@router.put("/{class_id}", response_model=class_model.ClassSummary, summary="Update a Class")
def update_class(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(can_edit_classes),
):
    return class_service.update_class(class_id, class_update, current_user, db)

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(
    class_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(can_edit_classes),
):
    class_service.delete_class(class_id, current_user, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
