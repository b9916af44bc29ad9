# /luct-portal/app/models/monitoring_model.py

"""
Response contracts for the aggregation endpoints.

Every average or percentage is Optional: `None` is the "no data" value for an
empty group and must never be replaced with 0, which would read as a real
(and very poor) result.
"""

from typing import Dict, Optional, Union

from pydantic import BaseModel, Field

from .user_model import Role


class LecturerOverviewStats(BaseModel):
    totalClasses: int = Field(..., examples=[3])
    totalReports: int = Field(..., examples=[12])
    totalStudents: int = Field(..., examples=[87])


class PLMetrics(BaseModel):
    total_reports: int
    avg_attendance: Optional[float] = None
    avg_rating: Optional[float] = None
    total_lecturers: int
    total_classes: int
    total_courses: int


class ClassMonitoringRow(BaseModel):
    class_id: str
    class_name: str
    course_name: str
    course_code: str
    lecturer_name: Optional[str] = None
    total_students: int = 0
    reports_submitted: int = 0
    # Mean of the per-report head-count percentages.
    avg_reported_attendance: Optional[float] = None
    # Share of 'present' marks among all marks for the class's reports.
    attendance_percentage: Optional[float] = None
    avg_rating: Optional[float] = None


class LecturerWorkloadRow(BaseModel):
    lecturer_id: str
    lecturer_name: str
    email: str
    faculty_id: Optional[str] = None
    total_classes: int = 0
    total_courses: int = 0
    total_reports: int = 0
    avg_rating: Optional[float] = None


class StudentAttendanceRow(BaseModel):
    class_id: str
    class_name: str
    course_name: str
    reports_held: int = 0
    marked_present: int = 0
    marked_absent: int = 0
    attendance_percentage: Optional[float] = None


class DashboardSummary(BaseModel):
    """
    Role-specific headline figures for the landing page. The keys of `stats`
    depend on `role`; values are counts or "no data" (None) averages.
    """
    role: Role
    stats: Dict[str, Union[int, float, None]]
