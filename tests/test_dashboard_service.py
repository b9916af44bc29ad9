# /tests/test_dashboard_service.py

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.models.user_model import CurrentUser, Role
from app.services import dashboard_service


@pytest.fixture
def mock_db():
    """A DatabaseService stand-in returning raw SQL-style totals."""
    db = MagicMock()
    db.get_student_totals.return_value = {
        "enrolled_classes": 2, "available_reports": 5, "ratings_submitted": 0,
        "total_marks": 0, "present_marks": None,
    }
    db.get_lecturer_totals.return_value = {
        "total_classes": 3, "total_reports": 12, "total_students": 87, "avg_rating": Decimal("4.3333"),
    }
    db.get_faculty_totals.return_value = {
        "total_courses": 4, "total_classes": 6, "total_reports": 9, "pending_feedback": 2, "avg_rating": None,
    }
    db.get_programme_totals.return_value = {
        "total_reports": 0, "avg_attendance": None, "avg_rating": None,
        "total_lecturers": 5, "total_classes": 7, "total_courses": 3,
    }
    return db


def test_every_role_has_a_summary_builder():
    assert set(dashboard_service.SUMMARY_BUILDERS) == set(Role)


def test_lecturer_summary_rounds_average(mock_db):
    """
    GIVEN raw lecturer totals with an unrounded Decimal average
    WHEN the dashboard summary is built
    THEN counts pass through and the average is rounded to 2 places.
    """
    user = CurrentUser(id="lec_1", role=Role.LECTURER, name="Lecturer")

    summary = dashboard_service.get_summary_data(user=user, db=mock_db)

    assert summary.role == Role.LECTURER
    assert summary.stats == {"total_classes": 3, "total_reports": 12, "total_students": 87, "avg_rating": 4.33}
    mock_db.get_lecturer_totals.assert_called_once_with("lec_1")


def test_student_without_marks_has_no_attendance(mock_db):
    user = CurrentUser(id="stu_1", role=Role.STUDENT)

    summary = dashboard_service.get_summary_data(user=user, db=mock_db)

    assert summary.stats["attendance_percentage"] is None
    assert summary.stats["enrolled_classes"] == 2


def test_prl_summary_uses_faculty_from_user_row(mock_db):
    mock_db.get_user_by_id.return_value = SimpleNamespace(id="prl_1", faculty_id="fac_ict")
    user = CurrentUser(id="prl_1", role=Role.PRL)

    summary = dashboard_service.get_summary_data(user=user, db=mock_db)

    mock_db.get_faculty_totals.assert_called_once_with("fac_ict", "prl_1")
    assert summary.stats["pending_feedback"] == 2
    assert summary.stats["avg_rating"] is None


def test_prl_without_faculty_gets_empty_summary(mock_db):
    mock_db.get_user_by_id.return_value = SimpleNamespace(id="prl_2", faculty_id=None)
    user = CurrentUser(id="prl_2", role=Role.PRL)

    summary = dashboard_service.get_summary_data(user=user, db=mock_db)

    mock_db.get_faculty_totals.assert_not_called()
    assert summary.stats["total_reports"] == 0


def test_pl_summary_with_empty_programme(mock_db):
    user = CurrentUser(id="pl_1", role=Role.PL)

    summary = dashboard_service.get_summary_data(user=user, db=mock_db)

    assert summary.stats["avg_attendance"] is None
    assert summary.stats["avg_rating"] is None
    assert summary.stats["total_lecturers"] == 5
    print("\n✅ SUCCESS: empty programme reports 'no data' averages.")
