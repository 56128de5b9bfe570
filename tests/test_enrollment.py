from app.models.enrollment import Enrollment
from app.services import enrollment as enrollment_service


def _enroll(client, course_id, user_id):
    return client.post("/api/courses/enroll", json={"courseId": course_id, "userId": user_id})


def _unenroll(client, course_id, user_id):
    return client.request("DELETE", "/api/courses/unenroll", json={"courseId": course_id, "userId": user_id})


def _rows(db, user_id, course_id):
    db.expire_all()
    return db.query(Enrollment).filter_by(user_id=user_id, course_id=course_id).all()


def test_fresh_enroll_creates_one_active_row(client, db, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()

    r = _enroll(client, course.id, student.user_id)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Successfully enrolled in course"
    assert body["enrollment"]["status"] == "active"
    assert body["enrollment"]["progress_percentage"] == 0

    rows = _rows(db, student.user_id, course.id)
    assert len(rows) == 1
    assert rows[0].status == "active"


def test_second_enroll_conflicts(client, db, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()

    assert _enroll(client, course.id, student.user_id).status_code == 200
    r = _enroll(client, course.id, student.user_id)

    assert r.status_code == 409
    assert r.json() == {"error": "Already enrolled in this course"}
    assert len(_rows(db, student.user_id, course.id)) == 1


def test_unenroll_marks_dropped_and_keeps_row(client, db, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()
    _enroll(client, course.id, student.user_id)

    r = _unenroll(client, course.id, student.user_id)
    assert r.status_code == 200
    assert r.json()["enrollment"]["status"] == "dropped"

    rows = _rows(db, student.user_id, course.id)
    assert len(rows) == 1
    assert rows[0].status == "dropped"

    again = _unenroll(client, course.id, student.user_id)
    assert again.status_code == 400
    assert again.json()["error"] == "Cannot unenroll from inactive enrollment"


def test_unenroll_post_alias(client, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()
    _enroll(client, course.id, student.user_id)

    r = client.post("/api/courses/unenroll", json={"courseId": course.id, "userId": student.user_id})
    assert r.status_code == 200
    assert r.json()["enrollment"]["status"] == "dropped"


def test_unenroll_without_enrollment(client, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()

    r = _unenroll(client, course.id, student.user_id)
    assert r.status_code == 404
    assert r.json()["error"] == "Enrollment not found"


def test_reenroll_reactivates_same_row(client, db, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()

    first = _enroll(client, course.id, student.user_id).json()["enrollment"]
    _unenroll(client, course.id, student.user_id)

    row = _rows(db, student.user_id, course.id)[0]
    row.progress_percentage = 40
    db.commit()

    r = _enroll(client, course.id, student.user_id)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Successfully re-enrolled in course"
    assert body["enrollment"]["id"] == first["id"]
    assert body["enrollment"]["status"] == "active"
    assert body["enrollment"]["progress_percentage"] == 40
    assert body["enrollment"]["enrollment_date"] != first["enrollment_date"]

    assert len(_rows(db, student.user_id, course.id)) == 1


def test_enroll_requires_ids(client):
    r = client.post("/api/courses/enroll", json={"userId": "student_x"})
    assert r.status_code == 400
    assert r.json()["error"] == "Course ID is required"

    r = client.post("/api/courses/enroll", json={"courseId": "c1"})
    assert r.status_code == 400
    assert r.json()["error"] == "User ID is required for enrollment"


def test_enroll_unknown_student(client, make_semester, make_course):
    course = make_course(make_semester())
    r = _enroll(client, course.id, "student_missing")
    assert r.status_code == 404
    assert r.json()["error"] == "Student account not found. Please create an account first."


def test_enroll_inactive_course(client, make_semester, make_course, make_student):
    course = make_course(make_semester(), is_active=False)
    student = make_student()

    r = _enroll(client, course.id, student.user_id)
    assert r.status_code == 404
    assert r.json()["error"] == "Course not found or inactive"


def test_enrolled_without_user_id_is_empty(client):
    r = client.get("/api/courses/enrolled")
    assert r.status_code == 200
    assert r.json() == []


def test_enrolled_lists_only_active(client, make_semester, make_course, make_student):
    semester = make_semester()
    kept = make_course(semester, course_code="CSE-1", title="Kept")
    dropped = make_course(semester, course_code="CSE-2", title="Dropped")
    student = make_student()

    _enroll(client, kept.id, student.user_id)
    _enroll(client, dropped.id, student.user_id)
    _unenroll(client, dropped.id, student.user_id)

    r = client.get("/api/courses/enrolled", params={"userId": student.user_id})
    assert r.status_code == 200
    data = r.json()
    assert [c["id"] for c in data] == [kept.id]
    assert data[0]["enrollment"]["status"] == "active"
    assert data[0]["semester"]["section"] == "63_A"


def test_enrolled_with_missing_table_is_empty(client, db_engine, make_student):
    student = make_student()
    Enrollment.__table__.drop(bind=db_engine)

    r = client.get("/api/courses/enrolled", params={"userId": student.user_id})
    assert r.status_code == 200
    assert r.json() == []

def test_concurrent_first_enroll_is_conflict(client, db, monkeypatch, make_semester, make_course, make_student):
    course = make_course(make_semester())
    student = make_student()
    assert _enroll(client, course.id, student.user_id).status_code == 200

    # the second request did not see the first one's row, so only the unique constraint stops it
    monkeypatch.setattr(enrollment_service, "find_enrollment", lambda *args, **kwargs: None)

    r = _enroll(client, course.id, student.user_id)
    assert r.status_code == 409
    assert r.json() == {"error": "Already enrolled in this course"}
    assert len(_rows(db, student.user_id, course.id)) == 1
