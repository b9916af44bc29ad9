# /luct-portal/app/models/report_model.py

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


# --- Lecture Reports ---

class ReportCreate(BaseModel):
    class_id: str
    week: int = Field(..., ge=1, le=52)
    date: date
    actual_students_present: int = Field(..., ge=0)
    topic: str = Field(..., min_length=1)
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = None

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Topic cannot be blank.")
        return value.strip()


class LectureReport(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    submitted_by: str
    week: int
    date: date
    topic: str
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = None
    actual_students_present: int
    created_at: Optional[datetime] = None


class ReportSummary(LectureReport):
    """
    A report row as shown on the reporting pages. The two attendance figures
    come from different sources and are never reconciled:
    `attendance_percentage` uses the lecturer's head count, while
    `marked_attendance_percentage` uses the students' own attendance marks.
    """
    class_name: str
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    lecturer_name: Optional[str] = None
    total_registered_students: int = 0
    attendance_percentage: Optional[float] = None
    marked_attendance_percentage: Optional[float] = None
    existing_feedback: Optional[str] = None


class EnrolledReport(BaseModel):
    id: str
    class_id: str
    class_name: str
    course_name: Optional[str] = None
    lecturer_name: Optional[str] = None
    week: int
    date: date
    topic: str
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = None
    actual_students_present: int
    student_status: Optional[AttendanceStatus] = None


# --- Attendance Marks ---

class AttendanceMarkCreate(BaseModel):
    report_id: str
    status: AttendanceStatus


class AttendanceMark(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    report_id: str
    student_id: str
    status: AttendanceStatus


class AttendanceStatusResponse(BaseModel):
    status: Optional[AttendanceStatus] = None


# --- PRL Feedback ---

class FeedbackCreate(BaseModel):
    comment: str = Field(..., max_length=4000)


class Feedback(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    report_id: str
    prl_id: str
    comment: str
    created_at: Optional[datetime] = None
