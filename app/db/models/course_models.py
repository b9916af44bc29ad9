# /luct-portal/app/db/models/course_models.py

"""
SQLAlchemy models for the teaching structure: `Course`, `Class` and the
`Enrolment` link between a student and a class.

There is deliberately no stored `total_registered_students` column on `Class`;
the figure is always computed from the enrolment rows.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Course(Base):
    id = Column(String, primary_key=True, index=True)
    code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    faculty_id = Column(String, ForeignKey("faculties.id"), nullable=False, index=True)

    faculty = relationship("Faculty", back_populates="courses")
    classes = relationship("Class", back_populates="course", cascade="all, delete-orphan")


class Class(Base):
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    class_name = Column(String, index=True, nullable=False)
    venue = Column(String, nullable=True)
    scheduled_time = Column(String(5), nullable=True)  # "HH:MM"

    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    lecturer_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)

    course = relationship("Course", back_populates="classes")
    lecturer = relationship("User")

    # Child records disappear with their class.
    enrolments = relationship("Enrolment", back_populates="class_", cascade="all, delete-orphan")
    reports = relationship("LectureReport", back_populates="class_", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="class_", cascade="all, delete-orphan")


class Enrolment(Base):
    __table_args__ = (
        UniqueConstraint("student_id", "class_id", name="uq_enrolment_student_class"),
    )

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("User")
    class_ = relationship("Class", back_populates="enrolments")
