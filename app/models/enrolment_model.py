# /luct-portal/app/models/enrolment_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class EnrolmentCreate(BaseModel):
    class_id: str


class Enrolment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    class_id: str
    created_at: Optional[datetime] = None


class EnrolledClass(BaseModel):
    enrolment_id: str
    class_id: str
    class_name: str
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None
    course_name: str
    course_code: str
    lecturer_name: Optional[str] = None
