"""
Load a course spreadsheet into a semester.

    python -m app.seed courses.xlsx --section 63_A --title "Spring 2025"

Safe to run repeatedly: the semester is looked up by (section, title) and
courses by course code, so a second run only updates rows in place.
"""
import argparse
import logging
import sys

from app.database import Base, SessionLocal, engine
from app.logging_config import setup_logging
from app.models import admin_user, course, enrollment, slide, student_user, study_tool, topic, video  # noqa: F401
from app.models.semester import Semester
from app.utils.course_import import read_course_sheet, upsert_courses
from app.utils.sections import is_valid_section

logger = logging.getLogger("app.seed")


def get_or_create_semester(db, section: str, title: str) -> Semester:
    semester = (
        db.query(Semester)
        .filter(Semester.section == section, Semester.title == title)
        .first()
    )
    if semester is None:
        semester = Semester(section=section, title=title, description="")
        db.add(semester)
        db.flush()
        logger.info("Created semester %s (%s)", title, section)
    return semester


def seed(path: str, section: str, title: str) -> dict:
    df = read_course_sheet(path, path)

    db = SessionLocal()
    try:
        semester = get_or_create_semester(db, section, title)
        result = upsert_courses(db, semester, df)
        db.commit()
        return result
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed a semester's courses from a spreadsheet")
    parser.add_argument("spreadsheet", help="path to a .csv or .xlsx course sheet")
    parser.add_argument("--section", default="63_A", help='section the semester belongs to, e.g. "63_A"')
    parser.add_argument("--title", default="Demo Semester", help="semester title")
    parser.add_argument("--log-level", default=None, help="overrides LOG_LEVEL for this run")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    if not is_valid_section(args.section):
        parser.error(f"invalid section: {args.section}")

    Base.metadata.create_all(bind=engine)

    try:
        result = seed(args.spreadsheet, args.section, args.title)
    except ValueError as e:
        logger.error("Seed failed: %s", e)
        return 1

    logger.info(
        "Seeded semester %s: created=%d updated=%d skipped=%s",
        result["semester_id"], result["created"], result["updated"], result["skipped"],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
