# /luct-portal/app/routers/student_router.py

"""
Endpoints a student uses to follow their own classes: enrolment, the lecture
reports of enrolled classes, self-declared attendance and an attendance
summary per class. Every endpoint acts on the caller only.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.deps import require_roles
from ..models import enrolment_model, monitoring_model, report_model
from ..models.user_model import CurrentUser, Role
from ..services import attendance_service, enrolment_service, monitoring_service, report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

student_only = require_roles(Role.STUDENT)

# --- ENROLMENT ENDPOINTS ---

@router.get("/enrolments", response_model=List[enrolment_model.EnrolledClass], summary="List My Enrolled Classes")
def list_enrolments(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(student_only)):
    return enrolment_service.list_enrolled_classes(current_user.id, db)

@router.post("/enrolments", response_model=enrolment_model.Enrolment, status_code=status.HTTP_201_CREATED, summary="Enrol in a Class")
def enrol(
    enrolment_create: enrolment_model.EnrolmentCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(student_only),
):
    return enrolment_service.enrol_student(current_user.id, enrolment_create.class_id, db)

# --- REPORT & ATTENDANCE ENDPOINTS ---

@router.get("/reports/enrolled", response_model=List[report_model.EnrolledReport], summary="Reports for My Classes")
def list_enrolled_reports(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(student_only)):
    return report_service.list_enrolled_reports(current_user.id, db)

@router.get("/attendance/{report_id}", response_model=report_model.AttendanceStatusResponse, summary="Get My Attendance Mark")
def get_attendance(
    report_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(student_only),
):
    return attendance_service.get_attendance_status(report_id, current_user.id, db)

@router.post("/attendance", response_model=report_model.AttendanceMark, summary="Mark My Attendance")
def mark_attendance(
    mark: report_model.AttendanceMarkCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: CurrentUser = Depends(student_only),
):
    """Creates or overwrites the caller's mark for the report."""
    return attendance_service.mark_attendance(mark, current_user.id, db)

@router.get("/monitoring", response_model=List[monitoring_model.StudentAttendanceRow], summary="My Attendance Summary")
def get_monitoring(db: DatabaseService = Depends(get_db_service), current_user: CurrentUser = Depends(student_only)):
    return monitoring_service.get_student_attendance(current_user.id, db)
