# /tests/test_error_handling.py

import pytest
from fastapi.testclient import TestClient

from app.db.database import get_db
from app.main import app
from app.services import report_service


@pytest.fixture
def lenient_client(db_session):
    """Like `client`, but returns 500 responses instead of re-raising server errors."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


def test_unexpected_error_is_opaque_500(lenient_client, world, headers_for, mocker):
    """
    GIVEN a service that fails with an internal error message
    WHEN the endpoint is called
    THEN the caller gets a generic 500 and none of the internal text.
    """
    mocker.patch.object(
        report_service, "list_all_reports", side_effect=RuntimeError("relation lecture_reports does not exist")
    )

    response = lenient_client.get("/pl/reports", headers=headers_for(world.pl))

    assert response.status_code == 500
    assert response.json() == {"detail": "An unexpected server error occurred."}
    assert "lecture_reports" not in response.text


def test_portal_errors_use_detail_body(client, world, headers_for):
    response = client.get("/courses/crs_missing", headers=headers_for(world.pl))

    assert response.status_code == 404
    assert response.json() == {"detail": "Course with ID crs_missing not found."}


def test_health_endpoints_are_public(client):
    assert client.get("/").json()["status"] == "LUCT Portal API is running!"
    assert client.get("/health").json() == {"status": "ok"}
