import pytest
from sqlalchemy.orm import sessionmaker

from app import seed as seed_module
from app.models.course import Course
from app.models.semester import Semester


def test_seed_is_idempotent(tmp_path, monkeypatch, db):
    monkeypatch.setattr(seed_module, "SessionLocal", sessionmaker(bind=db.get_bind()))
    sheet = tmp_path / "courses.csv"
    sheet.write_text("title,course_code,credits\nAlgorithms,CSE-2201,4\nDatabases,CSE-3103,3\n")

    first = seed_module.seed(str(sheet), "63_A", "Demo Semester")
    second = seed_module.seed(str(sheet), "63_A", "Demo Semester")

    assert (first["created"], first["updated"]) == (2, 0)
    assert (second["created"], second["updated"]) == (0, 2)
    assert first["semester_id"] == second["semester_id"]

    db.expire_all()
    assert db.query(Semester).count() == 1
    assert db.query(Course).count() == 2


def test_seed_main_rejects_bad_section(capsys):
    with pytest.raises(SystemExit) as exc:
        seed_module.main(["courses.csv", "--section", "63a"])
    assert exc.value.code == 2
    assert "invalid section" in capsys.readouterr().err
