# /luct-portal/app/models/rating_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RatingCreate(BaseModel):
    class_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class Rating(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class RatingDetail(BaseModel):
    """One rating joined with the class, course and lecturer it refers to."""
    id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    class_id: str
    class_name: str
    course_id: str
    course_name: str
    course_code: str
    lecturer_name: Optional[str] = None
    student_name: Optional[str] = None


class RateableClass(BaseModel):
    class_id: str
    class_name: str
    course_name: str
    course_code: str
    lecturer_name: Optional[str] = None
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None


class CourseRatingSummary(BaseModel):
    course_id: str
    course_name: str
    # None when the course has no ratings yet ("Not Yet Rated").
    avg_rating: Optional[float] = None
    total_ratings: int = 0


class LecturerRatings(BaseModel):
    summary: List[CourseRatingSummary]
    details: List[RatingDetail]
