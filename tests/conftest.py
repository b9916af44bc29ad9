# /tests/conftest.py

import os

# The application engine is built at import time; keep it off the dev database.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import logging
from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import security
from app.db.base import Base
from app.db.database import get_db
from app.main import app
from app.models.user_model import Role
from app.services.database_service import DatabaseService

TEST_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def quiet_app_logger():
    """Expected 4xx paths log at INFO/WARNING; keep test output readable."""
    logger = logging.getLogger("app")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow on purpose, so hash the shared test password once."""
    return security.hash_password(TEST_PASSWORD)


@pytest.fixture
def db_session():
    """
    A fresh in-memory SQLite database for EACH test. StaticPool keeps the one
    connection alive so every session sees the same tables.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def client(db_session):
    """TestClient whose requests all run against the test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_service, password_hash):
    """Factory that inserts a user directly and returns the ORM row."""
    def _make_user(user_id, role, faculty_id=None, name=None):
        return db_service.add_user({
            "id": user_id,
            "name": name or user_id.replace("_", " ").title(),
            "email": f"{user_id}@luct.ac.ls",
            "password_hash": password_hash,
            "role": role.value,
            "faculty_id": faculty_id,
        })
    return _make_user


@pytest.fixture
def headers_for():
    """Returns a function building the bearer header for a user row."""
    def _headers_for(user):
        token = security.create_access_token(subject=user.id, role=user.role, name=user.name)
        return {"Authorization": f"Bearer {token}"}
    return _headers_for


@pytest.fixture
def world(db_service, make_user):
    """
    Two faculties with one course and one class each:

    - fac_ict: course crs_ict (BIT101), class cls_ict taught by lec_ict
    - fac_biz: course crs_biz (BBM101), class cls_biz taught by lec_biz

    plus a PRL for each faculty, a PRL without faculty, one PL and three
    students (none enrolled yet).
    """
    db_service.add_faculty({"id": "fac_ict", "name": "Faculty of ICT"})
    db_service.add_faculty({"id": "fac_biz", "name": "Faculty of Business"})

    w = SimpleNamespace(
        pl=make_user("pl_one", Role.PL),
        prl_ict=make_user("prl_ict", Role.PRL, faculty_id="fac_ict"),
        prl_biz=make_user("prl_biz", Role.PRL, faculty_id="fac_biz"),
        prl_none=make_user("prl_none", Role.PRL),
        lec_ict=make_user("lec_ict", Role.LECTURER, faculty_id="fac_ict"),
        lec_biz=make_user("lec_biz", Role.LECTURER, faculty_id="fac_biz"),
        student1=make_user("student_one", Role.STUDENT),
        student2=make_user("student_two", Role.STUDENT),
        student3=make_user("student_three", Role.STUDENT),
    )

    db_service.add_course({"id": "crs_ict", "code": "BIT101", "name": "Web Design", "faculty_id": "fac_ict"})
    db_service.add_course({"id": "crs_biz", "code": "BBM101", "name": "Accounting", "faculty_id": "fac_biz"})
    db_service.add_class({
        "id": "cls_ict", "class_name": "BIT Year 1", "course_id": "crs_ict",
        "lecturer_id": "lec_ict", "venue": "Hall 6", "scheduled_time": "08:30",
    })
    db_service.add_class({
        "id": "cls_biz", "class_name": "BBM Year 1", "course_id": "crs_biz",
        "lecturer_id": "lec_biz", "venue": "Room 12", "scheduled_time": "10:30",
    })
    return w


@pytest.fixture
def add_report(db_service):
    """Factory that stores a lecture report directly, bypassing the API."""
    def _add_report(report_id, class_id, lecturer_id, present, week=1, on=date(2025, 3, 3), topic="HTML basics"):
        return db_service.add_report({
            "id": report_id,
            "class_id": class_id,
            "submitted_by": lecturer_id,
            "week": week,
            "date": on,
            "topic": topic,
            "learning_outcomes": f"Outcomes of {topic}",
            "recommendations": None,
            "actual_students_present": present,
        })
    return _add_report


@pytest.fixture
def enrol(db_service):
    def _enrol(student, class_id):
        return db_service.add_enrolment({
            "id": f"enr_{student.id}_{class_id}",
            "student_id": student.id,
            "class_id": class_id,
        })
    return _enrol
