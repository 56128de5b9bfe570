import re

from app.models.student_user import StudentUser
from app.routers.student_users import generate_user_id, name_from_email


def test_generate_user_id_shape():
    assert re.match(r"^student_\d+_[a-z0-9]{9}$", generate_user_id())


def test_name_from_email():
    assert name_from_email("john.doe_99@ruet.ac.bd") == "John Doe 99"


def test_create_then_upsert_by_email(client, make_semester):
    semester = make_semester()

    r = client.post("/api/student-users/create", json={
        "email": "Nadia.Islam@Example.com",
        "batch": "63",
        "section": "A",
        "sectionId": semester.id,
    })
    assert r.status_code == 200
    body = r.json()
    assert body["isExistingUser"] is False
    assert body["semester"]["id"] == semester.id
    user = body["studentUser"]
    assert user["email"] == "nadia.islam@example.com"
    assert user["fullName"] == "Nadia Islam"

    again = client.post("/api/student-users/create", json={"email": "nadia.islam@example.com", "fullName": "Nadia I."})
    assert again.status_code == 200
    assert again.json()["isExistingUser"] is True
    assert again.json()["studentUser"]["userId"] == user["userId"]
    assert again.json()["studentUser"]["fullName"] == "Nadia I."


def test_create_rejects_inactive_section(client, make_semester):
    semester = make_semester(is_active=False)
    r = client.post("/api/student-users/create", json={"email": "a@example.com", "sectionId": semester.id})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid or inactive section"}


def test_create_requires_email(client):
    r = client.post("/api/student-users/create", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "Email is required"}


def test_get_student_user(client, make_student):
    student = make_student()

    r = client.get("/api/student-users", params={"userId": student.user_id})
    assert r.status_code == 200
    assert r.json()["studentUser"]["email"] == student.email

    assert client.get("/api/student-users").status_code == 400
    assert client.get("/api/student-users", params={"userId": "nobody"}).status_code == 404


def test_update_links_section(client, make_semester, make_student):
    semester = make_semester(section="64_C")
    student = make_student()

    r = client.patch("/api/student-users/update", json={
        "userId": student.user_id,
        "batch": "64",
        "section": "C",
        "phone": "01700000000",
    })
    assert r.status_code == 200
    user = r.json()["studentUser"]
    assert user["sectionId"] == semester.id
    assert user["phone"] == "01700000000"


def test_update_duplicate_email(client, make_student):
    make_student(email="taken@example.com")
    student = make_student()

    r = client.patch("/api/student-users/update", json={"userId": student.user_id, "email": "taken@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "An account with this email already exists"}


def test_create_rejects_unknown_section_when_selection_skipped(client, db):
    r = client.post("/api/student-users/create", json={
        "email": "a@example.com",
        "sectionId": "no-such-semester",
        "hasSkippedSelection": True,
    })
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid or inactive section"}

    db.expire_all()
    assert db.query(StudentUser).count() == 0


def test_existing_user_rejects_unknown_section(client, make_student):
    student = make_student(email="known@example.com")

    r = client.post("/api/student-users/create", json={"email": student.email, "sectionId": "no-such-semester"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid or inactive section"}


def test_existing_user_can_pick_section(client, make_semester, make_student):
    semester = make_semester()
    student = make_student(email="known@example.com")

    r = client.post("/api/student-users/create", json={"email": student.email, "sectionId": semester.id})
    assert r.status_code == 200
    assert r.json()["studentUser"]["sectionId"] == semester.id


def test_name_keeps_email_casing(client):
    r = client.post("/api/student-users/create", json={"email": "Ronald.McDonald@Example.com"})
    assert r.status_code == 200
    user = r.json()["studentUser"]
    assert user["fullName"] == "Ronald McDonald"
    assert user["email"] == "ronald.mcdonald@example.com"
