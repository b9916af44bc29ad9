# /luct-portal/app/models/course_model.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FacultyCreate(BaseModel):
    name: str = Field(..., min_length=2)


class Faculty(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CourseCreate(BaseModel):
    name: str = Field(..., min_length=2)
    code: str = Field(..., min_length=2, max_length=20)
    faculty_id: str


class CourseUpdate(BaseModel):
    """All fields optional to allow partial updates."""
    name: Optional[str] = Field(default=None, min_length=2)
    code: Optional[str] = Field(default=None, min_length=2, max_length=20)
    faculty_id: Optional[str] = None


class Course(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    faculty_id: str
    faculty_name: Optional[str] = None
    class_count: int = 0


class CourseClass(BaseModel):
    """A class nested inside a course listing."""
    id: str
    class_name: str
    lecturer_name: Optional[str] = None
    scheduled_time: Optional[str] = None
    venue: Optional[str] = None
    total_registered_students: int = 0


class CourseWithClasses(BaseModel):
    course_id: str
    course_name: str
    course_code: str
    classes: List[CourseClass] = Field(default_factory=list)
