# /tests/test_student_flows.py

"""
End-to-end flows across the student and lecturer roles: enrolment, report
submission, attendance marks and ratings.
"""

from datetime import date, timedelta

from app.db.models.course_models import Enrolment
from app.db.models.rating_models import Rating
from app.db.models.report_models import AttendanceMark


def _report_payload(class_id="cls_ict", on=None, present=1):
    return {
        "class_id": class_id,
        "week": 3,
        "date": (on or date(2025, 3, 3)).isoformat(),
        "actual_students_present": present,
        "topic": "CSS layout",
        "learning_outcomes": "Flexbox and grid",
    }


# --- Enrolment ---

def test_student_enrols_and_lists_classes(client, world, headers_for):
    headers = headers_for(world.student1)

    response = client.post("/student/enrolments", json={"class_id": "cls_ict"}, headers=headers)

    assert response.status_code == 201
    assert response.json()["id"].startswith("enr_")
    listed = client.get("/student/enrolments", headers=headers).json()
    assert [(c["class_id"], c["course_code"], c["lecturer_name"]) for c in listed] == [("cls_ict", "BIT101", "Lec Ict")]


def test_duplicate_enrolment_is_conflict_and_stores_one_row(client, world, headers_for, db_session):
    """
    GIVEN a student already enrolled in a class
    WHEN they enrol again
    THEN the API answers 409 and only one enrolment row exists.
    """
    headers = headers_for(world.student1)
    assert client.post("/student/enrolments", json={"class_id": "cls_ict"}, headers=headers).status_code == 201

    response = client.post("/student/enrolments", json={"class_id": "cls_ict"}, headers=headers)

    assert response.status_code == 409
    assert db_session.query(Enrolment).filter_by(student_id="student_one", class_id="cls_ict").count() == 1


def test_enrol_in_unknown_class_is_not_found(client, world, headers_for):
    response = client.post("/student/enrolments", json={"class_id": "cls_nope"}, headers=headers_for(world.student1))
    assert response.status_code == 404


def test_only_students_enrol(client, world, headers_for):
    response = client.post("/student/enrolments", json={"class_id": "cls_ict"}, headers=headers_for(world.lec_ict))
    assert response.status_code == 403


# --- Lecture reports ---

def test_lecturer_submits_report_for_own_class(client, world, enrol, headers_for):
    enrol(world.student1, "cls_ict")
    enrol(world.student2, "cls_ict")

    response = client.post("/reports", json=_report_payload(present=1), headers=headers_for(world.lec_ict))

    assert response.status_code == 201
    body = response.json()
    assert body["id"].startswith("rpt_")
    assert body["submitted_by"] == "lec_ict"
    assert body["total_registered_students"] == 2
    assert body["attendance_percentage"] == 50.0
    assert body["marked_attendance_percentage"] is None


def test_report_for_unassigned_class_is_forbidden(client, world, headers_for):
    response = client.post("/reports", json=_report_payload(class_id="cls_biz"), headers=headers_for(world.lec_ict))
    assert response.status_code == 403


def test_report_dated_in_future_is_rejected(client, world, headers_for):
    payload = _report_payload(on=date.today() + timedelta(days=1))
    response = client.post("/reports", json=payload, headers=headers_for(world.lec_ict))
    assert response.status_code == 400


def test_report_for_unknown_class_is_not_found(client, world, headers_for):
    response = client.post("/reports", json=_report_payload(class_id="cls_nope"), headers=headers_for(world.lec_ict))
    assert response.status_code == 404


def test_report_with_blank_topic_is_invalid(client, world, headers_for):
    payload = {**_report_payload(), "topic": "   "}
    assert client.post("/reports", json=payload, headers=headers_for(world.lec_ict)).status_code == 422


def test_report_for_empty_class_has_no_attendance_percentage(client, world, headers_for):
    response = client.post("/reports", json=_report_payload(present=4), headers=headers_for(world.lec_ict))

    assert response.status_code == 201
    assert response.json()["total_registered_students"] == 0
    assert response.json()["attendance_percentage"] is None


# --- Attendance marks ---

def test_attendance_mark_upsert_keeps_last_status(client, world, enrol, add_report, headers_for, db_session):
    """
    GIVEN an enrolled student who marks 'present' on a report
    WHEN they mark 'absent' on the same report
    THEN the stored status is 'absent' and there is still one mark.
    """
    enrol(world.student1, "cls_ict")
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)
    headers = headers_for(world.student1)

    first = client.post("/student/attendance", json={"report_id": "rpt_1", "status": "present"}, headers=headers)
    second = client.post("/student/attendance", json={"report_id": "rpt_1", "status": "absent"}, headers=headers)

    assert first.status_code == second.status_code == 200
    assert second.json()["status"] == "absent"
    assert db_session.query(AttendanceMark).filter_by(report_id="rpt_1", student_id="student_one").count() == 1
    assert client.get("/student/attendance/rpt_1", headers=headers).json() == {"status": "absent"}


def test_attendance_status_is_null_before_marking(client, world, enrol, add_report, headers_for):
    enrol(world.student1, "cls_ict")
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)

    response = client.get("/student/attendance/rpt_1", headers=headers_for(world.student1))

    assert response.status_code == 200
    assert response.json() == {"status": None}


def test_attendance_requires_enrolment(client, world, add_report, headers_for):
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)
    response = client.post(
        "/student/attendance", json={"report_id": "rpt_1", "status": "present"}, headers=headers_for(world.student1)
    )
    assert response.status_code == 403


def test_attendance_on_unknown_report_is_not_found(client, world, headers_for):
    response = client.post(
        "/student/attendance", json={"report_id": "rpt_nope", "status": "present"}, headers=headers_for(world.student1)
    )
    assert response.status_code == 404


def test_attendance_status_must_be_present_or_absent(client, world, enrol, add_report, headers_for):
    enrol(world.student1, "cls_ict")
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)
    response = client.post(
        "/student/attendance", json={"report_id": "rpt_1", "status": "late"}, headers=headers_for(world.student1)
    )
    assert response.status_code == 422


def test_enrolled_reports_carry_own_status(client, world, enrol, add_report, headers_for):
    enrol(world.student1, "cls_ict")
    add_report("rpt_1", "cls_ict", "lec_ict", present=1, week=1, on=date(2025, 3, 3))
    add_report("rpt_2", "cls_ict", "lec_ict", present=1, week=2, on=date(2025, 3, 10))
    add_report("rpt_biz", "cls_biz", "lec_biz", present=1)
    headers = headers_for(world.student1)
    client.post("/student/attendance", json={"report_id": "rpt_1", "status": "present"}, headers=headers)

    reports = client.get("/student/reports/enrolled", headers=headers).json()

    assert [(r["id"], r["student_status"]) for r in reports] == [("rpt_2", None), ("rpt_1", "present")]


# --- Ratings ---

def test_rating_requires_enrolment(client, world, add_report, headers_for):
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)
    response = client.post("/ratings", json={"class_id": "cls_ict", "rating": 4}, headers=headers_for(world.student1))
    assert response.status_code == 403


def test_rating_requires_a_reported_lecture(client, world, enrol, headers_for):
    enrol(world.student1, "cls_ict")
    response = client.post("/ratings", json={"class_id": "cls_ict", "rating": 4}, headers=headers_for(world.student1))
    assert response.status_code == 403


def test_rating_unknown_class_is_not_found(client, world, headers_for):
    response = client.post("/ratings", json={"class_id": "cls_nope", "rating": 4}, headers=headers_for(world.student1))
    assert response.status_code == 404


def test_rating_out_of_range_is_invalid(client, world, headers_for):
    response = client.post("/ratings", json={"class_id": "cls_ict", "rating": 6}, headers=headers_for(world.student1))
    assert response.status_code == 422


def test_student_rates_class_and_sees_history(client, world, enrol, add_report, headers_for, db_session):
    enrol(world.student1, "cls_ict")
    add_report("rpt_1", "cls_ict", "lec_ict", present=1)
    headers = headers_for(world.student1)

    available = client.get("/ratings/available-classes", headers=headers).json()
    assert [c["class_id"] for c in available] == ["cls_ict"]

    response = client.post("/ratings", json={"class_id": "cls_ict", "rating": 5, "comment": " Great "}, headers=headers)
    assert response.status_code == 201
    assert response.json()["comment"] == "Great"

    history = client.get("/ratings/my", headers=headers).json()
    assert len(history) == 1
    assert history[0]["course_code"] == "BIT101"
    assert history[0]["lecturer_name"] == "Lec Ict"
    assert db_session.query(Rating).count() == 1


def test_available_classes_exclude_unreported_classes(client, world, enrol, headers_for):
    enrol(world.student1, "cls_ict")
    assert client.get("/ratings/available-classes", headers=headers_for(world.student1)).json() == []


# --- Full journey with issued tokens ---

def _login(client, email, password="secret123"):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_register_login_enrol_report_gives_fifty_percent(client, world, enrol):
    """
    GIVEN a student who registers and logs in through the API
    WHEN they enrol next to one other student and the lecturer reports 1 present
    THEN the PL, also signed in with an issued token, sees 50.0% attendance.
    """
    registered = client.post("/auth/register", json={
        "name": "Lerato Nthako", "email": "lerato@luct.ac.ls", "password": "secret123", "role": "student",
    })
    assert registered.status_code == 201
    student_headers = _login(client, "lerato@luct.ac.ls")

    enrolled = client.post("/student/enrolments", json={"class_id": "cls_ict"}, headers=student_headers)
    assert enrolled.status_code == 201
    enrol(world.student1, "cls_ict")

    lecturer_headers = _login(client, "lec_ict@luct.ac.ls")
    submitted = client.post("/reports", json=_report_payload(present=1), headers=lecturer_headers)
    assert submitted.status_code == 201

    pl_headers = _login(client, "pl_one@luct.ac.ls")
    report = client.get(f"/reports/{submitted.json()['id']}", headers=pl_headers).json()
    assert report["total_registered_students"] == 2
    assert report["attendance_percentage"] == 50.0

    enrolled_reports = client.get("/student/reports/enrolled", headers=student_headers).json()
    assert [r["id"] for r in enrolled_reports] == [submitted.json()["id"]]
