from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app
from app.models.course import Course


def test_unknown_route_uses_error_body(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_validation_error_is_400(client):
    r = client.post("/api/courses/enroll", json={"courseId": {"nested": True}, "userId": "x"})
    assert r.status_code == 400
    assert set(r.json()) == {"error"}
    assert "courseId" in r.json()["error"]


def test_unknown_slide_is_404(client):
    r = client.get("/api/slides/missing")
    assert r.status_code == 404
    assert r.json() == {"error": "Slide not found"}


def test_missing_table_is_503(client, db_engine):
    for table in ("study_tools", "slides", "videos", "topics", "user_course_enrollments"):
        Course.metadata.tables[table].drop(bind=db_engine)
    Course.__table__.drop(bind=db_engine)

    r = client.get("/api/courses/all")
    assert r.status_code == 503
    assert r.json() == {"error": "Database schema is not set up. Please contact administrator."}


def test_unhandled_error_is_500():
    def broken_db():
        raise RuntimeError("boom")
        yield

    app.dependency_overrides[get_db] = broken_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/api/courses/all")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
