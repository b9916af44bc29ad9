# /luct-portal/app/db/models/user_models.py

"""
SQLAlchemy models for the `Faculty` and `User` entities.

A user's role is stored as the plain string value of `app.models.user_model.Role`
and is never changed after registration.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Faculty(Base):
    __tablename__ = "faculties"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    courses = relationship("Course", back_populates="faculty", cascade="all, delete-orphan")
    members = relationship("User", back_populates="faculty")


class User(Base):
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Optional: students and PLs may not belong to a faculty. PRL views are
    # always scoped to this value.
    faculty_id = Column(String, ForeignKey("faculties.id"), nullable=True, index=True)
    faculty = relationship("Faculty", back_populates="members")
