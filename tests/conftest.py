import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="course-backend-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(_tmp, "logs"))
os.environ.setdefault("STATIC_DIR", os.path.join(_tmp, "static"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.admin_user import AdminUser  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.semester import Semester  # noqa: E402
from app.models.student_user import StudentUser  # noqa: E402
from app.utils.hashing import hash_password  # noqa: E402

ADMIN_PASSWORD = "secret123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_semester(db):
    def _make(section="63_A", title="Spring 2025", **kw):
        kw.setdefault("is_active", True)
        s = Semester(section=section, title=title, **kw)
        db.add(s)
        db.commit()
        db.refresh(s)
        return s
    return _make


@pytest.fixture
def make_course(db):
    def _make(semester, course_code="CSE-2101", title="Data Structures", **kw):
        c = Course(semester_id=semester.id, course_code=course_code, title=title, **kw)
        db.add(c)
        db.commit()
        db.refresh(c)
        return c
    return _make


@pytest.fixture
def make_student(db):
    counter = {"n": 0}

    def _make(user_id=None, email=None, **kw):
        counter["n"] += 1
        n = counter["n"]
        s = StudentUser(
            user_id=user_id or f"student_{n}_test{n:05d}",
            email=email or f"student{n}@example.com",
            full_name=kw.pop("full_name", f"Student {n}"),
            **kw,
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        return s
    return _make


@pytest.fixture
def make_admin(db):
    def _make(email="admin63a@example.com", role="section_admin", department="63_A", **kw):
        u = AdminUser(
            email=email,
            password_hash=hash_password(ADMIN_PASSWORD),
            full_name=kw.pop("full_name", "Section Admin"),
            role=role,
            department=department,
            **kw,
        )
        db.add(u)
        db.commit()
        db.refresh(u)
        return u
    return _make


@pytest.fixture
def login(client):
    """Logs the client in; the admin cookie is kept on the client's cookie jar."""
    def _login(admin):
        r = client.post("/api/auth/admin-login", json={"email": admin.email, "password": ADMIN_PASSWORD})
        assert r.status_code == 200, r.text
        return r
    return _login


@pytest.fixture
def db_engine():
    return engine


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
