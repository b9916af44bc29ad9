# /luct-portal/app/routers/pl_router.py

"""
Programme Leader endpoints: faculty management, lecturer assignment, the
programme-wide monitoring views and the CSV export of all lecture reports.
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from ..core.deps import require_roles
from ..models import class_model, course_model, monitoring_model, report_model
from ..models.user_model import Role
from ..services import class_service, course_service, monitoring_service, report_service
from ..services.database_service import DatabaseService, get_db_service

# Every endpoint below is PL-only.
router = APIRouter(dependencies=[Depends(require_roles(Role.PL))])

# --- FACULTY ENDPOINTS ---

@router.get("/faculties", response_model=List[course_model.Faculty], summary="Get All Faculties")
def get_faculties(db: DatabaseService = Depends(get_db_service)):
    return course_service.list_faculties(db)

@router.post("/faculties", response_model=course_model.Faculty, status_code=status.HTTP_201_CREATED, summary="Create a Faculty")
def create_faculty(faculty_create: course_model.FacultyCreate, db: DatabaseService = Depends(get_db_service)):
    return course_service.create_faculty(faculty_create, db)

# --- LECTURER & ASSIGNMENT ENDPOINTS ---

@router.get("/lecturers", response_model=List[monitoring_model.LecturerWorkloadRow], summary="Lecturers with Workload")
def get_lecturers(db: DatabaseService = Depends(get_db_service)):
    return monitoring_service.get_lecturer_workload(db)

@router.post("/courses/assign", response_model=class_model.ClassSummary, summary="Assign a Lecturer to a Class")
def assign_lecturer(assignment: class_model.LecturerAssignment, db: DatabaseService = Depends(get_db_service)):
    return class_service.assign_lecturer(assignment, db)

@router.get("/courses/{course_id}/classes", response_model=List[class_model.ClassSummary], summary="Classes of a Course")
def get_course_classes(course_id: str, db: DatabaseService = Depends(get_db_service)):
    return class_service.list_course_classes(course_id, db)

# --- MONITORING ENDPOINTS ---

@router.get("/monitoring/metrics", response_model=monitoring_model.PLMetrics, summary="Programme Metrics")
def get_metrics(db: DatabaseService = Depends(get_db_service)):
    return monitoring_service.get_programme_metrics(db)

@router.get("/monitoring/classes", response_model=List[monitoring_model.ClassMonitoringRow], summary="Per-Class Monitoring")
def get_class_monitoring(db: DatabaseService = Depends(get_db_service)):
    return monitoring_service.get_class_monitoring(db)

@router.get("/monitoring/lecturers", response_model=List[monitoring_model.LecturerWorkloadRow], summary="Per-Lecturer Workload")
def get_lecturer_monitoring(db: DatabaseService = Depends(get_db_service)):
    return monitoring_service.get_lecturer_workload(db)

# --- REPORT ENDPOINTS ---

@router.get("/reports", response_model=List[report_model.ReportSummary], summary="All Lecture Reports")
def get_reports(db: DatabaseService = Depends(get_db_service)):
    return report_service.list_all_reports(db)

@router.get("/reports/export", summary="Export Lecture Reports as CSV", response_class=StreamingResponse)
def export_reports_csv(db: DatabaseService = Depends(get_db_service)):
    csv_string = report_service.export_reports_as_csv(db)
    file_name = f"lecture_reports_{date.today().isoformat()}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})
