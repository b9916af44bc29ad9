# /tests/test_courses_classes.py

from app.models.user_model import Role
from app.services.database_service import DatabaseService


# --- Courses ---

def test_pl_creates_course(client, world, headers_for):
    response = client.post(
        "/courses",
        json={"name": "Software Engineering", "code": "bse201", "faculty_id": "fac_ict"},
        headers=headers_for(world.pl),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["code"] == "BSE201"
    assert body["faculty_name"] == "Faculty of ICT"
    assert body["class_count"] == 0


def test_duplicate_course_code_is_conflict(client, world, headers_for):
    response = client.post(
        "/courses",
        json={"name": "Web Design Again", "code": "BIT101", "faculty_id": "fac_ict"},
        headers=headers_for(world.pl),
    )
    assert response.status_code == 409


def test_course_code_race_lost_at_insert_is_conflict(client, world, headers_for, mocker):
    """
    GIVEN a concurrent request already stored BIT101 after our existence check
    WHEN the insert hits the unique constraint
    THEN the API answers 409 and the session stays usable.
    """
    mocker.patch.object(DatabaseService, "get_course_by_code", return_value=None)
    headers = headers_for(world.pl)

    response = client.post(
        "/courses", json={"name": "Web Design Again", "code": "BIT101", "faculty_id": "fac_ict"}, headers=headers
    )

    assert response.status_code == 409
    assert len(client.get("/courses", headers=headers).json()) == 2


def test_faculty_name_race_lost_at_insert_is_conflict(client, world, headers_for, mocker):
    mocker.patch.object(DatabaseService, "get_faculty_by_name", return_value=None)

    response = client.post("/pl/faculties", json={"name": "Faculty of ICT"}, headers=headers_for(world.pl))

    assert response.status_code == 409


def test_course_with_unknown_faculty_is_not_found(client, world, headers_for):
    response = client.post(
        "/courses",
        json={"name": "Ghost Studies", "code": "GST100", "faculty_id": "fac_none"},
        headers=headers_for(world.pl),
    )
    assert response.status_code == 404


def test_only_pl_writes_courses(client, world, headers_for):
    payload = {"name": "Marketing", "code": "MKT101", "faculty_id": "fac_biz"}
    for user in (world.student1, world.lec_biz, world.prl_biz):
        assert client.post("/courses", json=payload, headers=headers_for(user)).status_code == 403


def test_any_role_reads_courses(client, world, headers_for):
    response = client.get("/courses", headers=headers_for(world.student1))

    assert response.status_code == 200
    assert {c["code"] for c in response.json()} == {"BIT101", "BBM101"}
    assert client.get("/courses?faculty_id=fac_biz", headers=headers_for(world.student1)).json()[0]["code"] == "BBM101"


def test_get_single_course_returns_that_course(client, world, headers_for):
    response = client.get("/courses/crs_ict", headers=headers_for(world.student1))

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "BIT101"
    assert body["faculty_name"] == "Faculty of ICT"
    assert body["class_count"] == 1


def test_update_and_delete_course(client, world, headers_for):
    headers = headers_for(world.pl)

    updated = client.put("/courses/crs_ict", json={"name": "Web Design I"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "Web Design I"
    assert updated.json()["class_count"] == 1

    assert client.put("/courses/crs_ict", json={}, headers=headers).status_code == 400
    assert client.put("/courses/crs_ict", json={"code": "BBM101"}, headers=headers).status_code == 409

    assert client.delete("/courses/crs_ict", headers=headers).status_code == 204
    assert client.get("/courses/crs_ict", headers=headers).status_code == 404
    # The course's classes go with it.
    assert client.get("/classes/cls_ict", headers=headers).status_code == 404


# --- Faculties ---

def test_pl_manages_faculties(client, world, headers_for):
    headers = headers_for(world.pl)

    created = client.post("/pl/faculties", json={"name": "Faculty of Design"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["id"].startswith("fac_")

    assert client.post("/pl/faculties", json={"name": "Faculty of Design"}, headers=headers).status_code == 409
    assert len(client.get("/pl/faculties", headers=headers).json()) == 3


# --- Classes ---

def test_class_listing_counts_enrolments_live(client, world, enrol, headers_for):
    enrol(world.student1, "cls_ict")
    enrol(world.student2, "cls_ict")

    response = client.get("/classes/cls_ict", headers=headers_for(world.student3))

    assert response.status_code == 200
    body = response.json()
    assert body["total_registered_students"] == 2
    assert body["lecturer_name"] == "Lec Ict"
    assert body["course_code"] == "BIT101"


def test_lecturer_creates_class_and_time_is_trimmed(client, world, headers_for):
    response = client.post(
        "/classes",
        json={"class_name": "BIT Year 2", "course_id": "crs_ict", "scheduled_time": "14:00:00", "lecturer_id": "lec_ict"},
        headers=headers_for(world.lec_ict),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["scheduled_time"] == "14:00"
    assert body["total_registered_students"] == 0


def test_create_class_for_unknown_course_is_not_found(client, world, headers_for):
    response = client.post("/classes", json={"class_name": "X", "course_id": "crs_nope"}, headers=headers_for(world.pl))
    assert response.status_code == 404


def test_student_cannot_write_classes(client, world, headers_for):
    response = client.post("/classes", json={"class_name": "X", "course_id": "crs_ict"}, headers=headers_for(world.student1))
    assert response.status_code == 403


def test_update_class_partial(client, world, headers_for):
    response = client.put("/classes/cls_ict", json={"venue": "Hall 2"}, headers=headers_for(world.pl))

    assert response.status_code == 200
    assert response.json()["venue"] == "Hall 2"
    assert response.json()["class_name"] == "BIT Year 1"


def test_delete_class(client, world, headers_for):
    headers = headers_for(world.pl)
    assert client.delete("/classes/cls_biz", headers=headers).status_code == 204
    assert client.delete("/classes/cls_biz", headers=headers).status_code == 404


# --- Class ownership ---

def test_lecturer_cannot_take_over_colleagues_class(client, world, make_user, headers_for):
    """
    GIVEN a second ICT lecturer
    WHEN they set themselves as lecturer of a colleague's class
    THEN the API answers 403, the class keeps its lecturer and they still cannot report on it.
    """
    intruder = make_user("lec_ict_two", Role.LECTURER, faculty_id="fac_ict")
    headers = headers_for(intruder)

    response = client.put("/classes/cls_ict", json={"lecturer_id": intruder.id}, headers=headers)

    assert response.status_code == 403
    assert client.get("/classes/cls_ict", headers=headers).json()["lecturer_id"] == "lec_ict"
    report = {
        "class_id": "cls_ict", "week": 1, "date": "2025-03-03", "topic": "HTML",
        "learning_outcomes": "Tags", "actual_students_present": 1,
    }
    assert client.post("/reports", json=report, headers=headers).status_code == 403


def test_lecturer_cannot_reassign_own_class(client, world, make_user, headers_for):
    make_user("lec_ict_two", Role.LECTURER, faculty_id="fac_ict")

    response = client.put("/classes/cls_ict", json={"lecturer_id": "lec_ict_two"}, headers=headers_for(world.lec_ict))

    assert response.status_code == 403


def test_lecturer_updates_own_class(client, world, headers_for):
    response = client.put("/classes/cls_ict", json={"venue": "Lab 3"}, headers=headers_for(world.lec_ict))

    assert response.status_code == 200
    assert response.json()["venue"] == "Lab 3"


def test_lecturer_cannot_delete_other_faculty_class(client, world, headers_for):
    response = client.delete("/classes/cls_biz", headers=headers_for(world.lec_ict))

    assert response.status_code == 403
    assert client.get("/classes/cls_biz", headers=headers_for(world.pl)).status_code == 200


def test_lecturer_deletes_own_class(client, world, headers_for):
    assert client.delete("/classes/cls_ict", headers=headers_for(world.lec_ict)).status_code == 204


def test_lecturer_cannot_create_class_for_colleague(client, world, headers_for):
    response = client.post(
        "/classes",
        json={"class_name": "BIT Year 3", "course_id": "crs_ict", "lecturer_id": "lec_biz"},
        headers=headers_for(world.lec_ict),
    )
    assert response.status_code == 403


def test_pl_reassigns_class_through_update(client, world, make_user, headers_for):
    make_user("lec_ict_two", Role.LECTURER, faculty_id="fac_ict")

    response = client.put("/classes/cls_ict", json={"lecturer_id": "lec_ict_two"}, headers=headers_for(world.pl))

    assert response.status_code == 200
    assert response.json()["lecturer_id"] == "lec_ict_two"


# --- Lecturer assignment ---

def test_assign_lecturer_within_faculty(client, world, make_user, headers_for):
    make_user("lec_new", Role.LECTURER, faculty_id="fac_ict")

    response = client.post(
        "/pl/courses/assign", json={"class_id": "cls_ict", "lecturer_id": "lec_new"}, headers=headers_for(world.pl)
    )

    assert response.status_code == 200
    assert response.json()["lecturer_id"] == "lec_new"


def test_assign_lecturer_from_other_faculty_is_rejected(client, world, headers_for):
    response = client.post(
        "/pl/courses/assign", json={"class_id": "cls_ict", "lecturer_id": "lec_biz"}, headers=headers_for(world.pl)
    )
    assert response.status_code == 400


def test_assign_lecturer_without_faculty_is_allowed(client, world, make_user, headers_for):
    make_user("lec_floating", Role.LECTURER)
    response = client.post(
        "/pl/courses/assign", json={"class_id": "cls_biz", "lecturer_id": "lec_floating"}, headers=headers_for(world.pl)
    )
    assert response.status_code == 200


def test_assign_non_lecturer_or_unknown_class_is_not_found(client, world, headers_for):
    headers = headers_for(world.pl)
    assert client.post(
        "/pl/courses/assign", json={"class_id": "cls_ict", "lecturer_id": "student_one"}, headers=headers
    ).status_code == 404
    assert client.post(
        "/pl/courses/assign", json={"class_id": "cls_nope", "lecturer_id": "lec_ict"}, headers=headers
    ).status_code == 404


def test_pl_lists_classes_of_course(client, world, headers_for):
    headers = headers_for(world.pl)

    response = client.get("/pl/courses/crs_biz/classes", headers=headers)

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["cls_biz"]
    assert client.get("/pl/courses/crs_nope/classes", headers=headers).status_code == 404
