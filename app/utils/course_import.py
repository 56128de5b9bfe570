import zipfile
from typing import Any, Dict, List, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from app.models.course import Course
from app.models.semester import Semester

REQUIRED_COLUMNS = ("title", "course_code")

TRUE_STRINGS = {"1", "true", "yes", "y"}


def to_str(v):
    if v is None or pd.isna(v):
        return None
    s = str(v).strip()
    return None if s == "" or s.lower() == "nan" else s


def to_int(v):
    if v is None or pd.isna(v):
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return None


def to_bool(v) -> bool:
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return False
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in TRUE_STRINGS


def read_course_sheet(source, filename: str = "") -> pd.DataFrame:
    """Load a .csv or .xlsx course sheet; column names are normalised to snake_case."""
    try:
        if filename.lower().endswith(".csv"):
            df = pd.read_csv(source)
        else:
            df = pd.read_excel(source)
    except (OSError, zipfile.BadZipFile) as e:
        raise ValueError(f"Unable to read spreadsheet: {e}")

    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")
    return df


def rows_from_sheet(df: pd.DataFrame) -> List[Tuple[int, Dict[str, Any]]]:
    """(sheet row number, course fields) for each row; rows missing title/code get fields=None."""
    out = []
    for i, row in df.iterrows():
        title = to_str(row.get("title"))
        code = to_str(row.get("course_code"))
        if not title or not code:
            out.append((int(i) + 2, None))
            continue
        out.append((int(i) + 2, {
            "title": title,
            "course_code": code.upper(),
            "teacher_name": to_str(row.get("teacher_name")),
            "teacher_email": to_str(row.get("teacher_email")),
            "credits": to_int(row.get("credits")),
            "description": to_str(row.get("description")) or "",
            "is_highlighted": to_bool(row.get("is_highlighted")),
        }))
    return out


def upsert_courses(db: Session, semester: Semester, df: pd.DataFrame) -> Dict[str, Any]:
    """
    Create or update the semester's courses keyed by course_code.
    Running the same sheet twice leaves the table unchanged.
    The caller commits.
    """
    existing = {
        c.course_code: c
        for c in db.query(Course).filter(Course.semester_id == semester.id).all()
    }

    created = updated = 0
    skipped = []
    for row_no, fields in rows_from_sheet(df):
        if fields is None:
            skipped.append(row_no)
            continue

        if fields["credits"] is None:
            fields["credits"] = semester.default_credits or 3

        course = existing.get(fields["course_code"])
        if course is None:
            course = Course(semester_id=semester.id, **fields)
            db.add(course)
            existing[fields["course_code"]] = course
            created += 1
        else:
            for k, v in fields.items():
                setattr(course, k, v)
            updated += 1

    db.flush()
    return {"semester_id": semester.id, "created": created, "updated": updated, "skipped": skipped}
