# /luct-portal/app/db/models/report_models.py

"""
SQLAlchemy models for a lecture session and everything attached to it:
the `LectureReport` itself, students' `AttendanceMark`s and PRL `Feedback`.
"""

from sqlalchemy import Column, String, Integer, Date, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class LectureReport(Base):
    __tablename__ = "lecture_reports"

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    submitted_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    week = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)
    topic = Column(String, nullable=False)
    learning_outcomes = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    # Self-reported by the lecturer; independent of the attendance marks below.
    actual_students_present = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_ = relationship("Class", back_populates="reports")
    lecturer = relationship("User")
    attendance_marks = relationship("AttendanceMark", back_populates="report", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="report", cascade="all, delete-orphan")


class AttendanceMark(Base):
    __tablename__ = "student_attendance"
    __table_args__ = (
        UniqueConstraint("report_id", "student_id", name="uq_attendance_report_student"),
    )

    id = Column(String, primary_key=True, index=True)
    report_id = Column(String, ForeignKey("lecture_reports.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False)  # 'present' or 'absent'
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    report = relationship("LectureReport", back_populates="attendance_marks")


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("report_id", "prl_id", name="uq_feedback_report_prl"),
    )

    id = Column(String, primary_key=True, index=True)
    report_id = Column(String, ForeignKey("lecture_reports.id"), nullable=False, index=True)
    prl_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    report = relationship("LectureReport", back_populates="feedback")
