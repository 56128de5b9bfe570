from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.semester import Semester
from app.models.topic import Topic
from app.schemas.course import CourseImportOut
from app.schemas.semester import (
    SemesterOut,
    SemesterPayload,
    SemesterSaveOut,
    SemesterTreeOut,
    SemesterWithCountsOut,
)
from app.services.content_service import get_semester_or_404
from app.services.semester_service import (
    add_course_tree,
    apply_semester_fields,
    semester_counts,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.course_import import read_course_sheet, upsert_courses
from app.utils.timeutils import utcnow

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/api/section-admin/semesters", tags=["Section Admin - Semesters"])


def _require_semester_fields(body: SemesterPayload):
    if not body.semester or not body.semester.title or not body.semester.section:
        raise HTTPException(status_code=400, detail="Missing required fields: title and section")
    return body.semester


@router.get("")
def list_semesters(
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = db.query(Semester)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)

    rows = q.order_by(Semester.is_active.desc(), Semester.updated_at.desc()).all()
    counts = semester_counts(db, [s.id for s in rows])

    items: List[SemesterWithCountsOut] = [
        SemesterWithCountsOut(**SemesterOut.model_validate(s).model_dump(), **counts[s.id])
        for s in rows
    ]
    return {"semesters": items}


@router.post("", response_model=SemesterSaveOut)
def create_semester(
    body: SemesterPayload,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    semester_in = _require_semester_fields(body)
    ensure_section_access(
        admin, semester_in.section,
        "You can only create semesters for your assigned section",
    )

    semester = Semester()
    apply_semester_fields(semester, semester_in)
    db.add(semester)
    db.flush()

    add_course_tree(db, semester, body.courses)
    db.commit()
    db.refresh(semester)

    logger.info(
        "Semester %s (%s) created by %s with %d course(s)",
        semester.title, semester.section, admin.email, len(body.courses),
    )
    return {"semester": semester, "message": "Semester created successfully"}


@router.get("/{semester_id}", response_model=SemesterTreeOut)
def get_semester(
    semester_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    semester = (
        db.query(Semester)
        .options(
            selectinload(Semester.courses).selectinload(Course.topics).selectinload(Topic.slides),
            selectinload(Semester.courses).selectinload(Course.topics).selectinload(Topic.videos),
            selectinload(Semester.courses).selectinload(Course.study_tools),
        )
        .filter(Semester.id == semester_id)
        .first()
    )
    if not semester:
        raise HTTPException(status_code=404, detail="Semester not found")
    ensure_section_access(admin, semester.section, "You can only view semesters in your assigned section")
    return semester


@router.put("/{semester_id}", response_model=SemesterSaveOut)
def update_semester(
    semester_id: str,
    body: SemesterPayload,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    semester = get_semester_or_404(db, semester_id, "Semester not found or access denied")
    ensure_section_access(admin, semester.section, "You can only update semesters for your assigned section")

    semester_in = _require_semester_fields(body)
    ensure_section_access(admin, semester_in.section, "You can only update semesters for your assigned section")

    apply_semester_fields(semester, semester_in)
    semester.updated_at = utcnow()

    # non-empty course list replaces the whole tree
    if body.courses:
        for course in list(semester.courses):
            db.delete(course)
        db.flush()
        add_course_tree(db, semester, body.courses)

    db.commit()
    db.refresh(semester)
    return {"semester": semester, "message": "Semester and courses updated successfully"}


@router.delete("/{semester_id}")
def delete_semester(
    semester_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    semester = get_semester_or_404(db, semester_id, "Semester not found or access denied")
    ensure_section_access(admin, semester.section, "You can only delete semesters for your assigned section")

    title = semester.title
    db.delete(semester)
    db.commit()
    logger.info("Semester %s deleted by %s", semester_id, admin.email)
    return {"success": True, "message": f'Semester "{title}" deleted successfully'}


@router.post("/{semester_id}/import", response_model=CourseImportOut)
def import_courses(
    semester_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    semester = get_semester_or_404(db, semester_id)
    ensure_section_access(admin, semester.section, "You can only import courses into your assigned section")

    try:
        df = read_course_sheet(file.file, file.filename or "")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = upsert_courses(db, semester, df)
    db.commit()
    logger.info(
        "Imported courses into %s: %d created, %d updated, %d skipped",
        semester.id, result["created"], result["updated"], len(result["skipped"]),
    )
    return result
