# /luct-portal/app/models/class_model.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class ClassBase(BaseModel):
    venue: Optional[str] = None
    scheduled_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN, description="HH:MM, seconds are dropped.")
    lecturer_id: Optional[str] = None

    @field_validator("scheduled_time")
    @classmethod
    def _trim_seconds(cls, value: Optional[str]) -> Optional[str]:
        return value[:5] if value else value


class ClassCreate(ClassBase):
    class_name: str = Field(..., min_length=1)
    course_id: str


class ClassUpdate(ClassBase):
    """Partial update; only the fields sent by the client are written."""
    class_name: Optional[str] = Field(default=None, min_length=1)
    course_id: Optional[str] = None


class Class(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_name: str
    course_id: str
    lecturer_id: Optional[str] = None
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None


class ClassSummary(Class):
    """A class enriched with its course, lecturer and live enrolment count."""
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    lecturer_name: Optional[str] = None
    total_registered_students: int = 0


class LecturerAssignment(BaseModel):
    class_id: str
    lecturer_id: str
