import random
import string
import time

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.semester import Semester
from app.models.student_user import StudentUser
from app.schemas.student_user import (
    StudentUserCreateIn,
    StudentUserCreateOut,
    StudentUserOut,
    StudentUserResultOut,
    StudentUserUpdateIn,
)
from app.utils.sections import make_section
from app.utils.timeutils import utcnow

import logging
logger = logging.getLogger("app.students")


router = APIRouter(prefix="/api/student-users", tags=["Students"])

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_user_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"student_{int(time.time() * 1000)}_{suffix}"


def name_from_email(email: str) -> str:
    """'john.doe_99@ruet.ac.bd' -> 'John Doe 99'"""
    local = email.split("@", 1)[0]
    for sep in "._-":
        local = local.replace(sep, " ")
    return " ".join(w[:1].upper() + w[1:] for w in local.split(" ") if w)


def _active_semester_or_400(db: Session, semester_id: str) -> Semester:
    semester = (
        db.query(Semester)
        .filter(Semester.id == semester_id, Semester.is_active.is_(True))
        .first()
    )
    if not semester:
        raise HTTPException(status_code=400, detail="Invalid or inactive section")
    return semester


@router.post("/create", response_model=StudentUserCreateOut)
def create_student_user(body: StudentUserCreateIn, db: Session = Depends(get_db)):
    if not body.email:
        raise HTTPException(status_code=400, detail="Email is required")

    raw_email = body.email.strip()
    email = raw_email.lower()
    full_name = (body.fullName or "").strip() or name_from_email(raw_email)

    # section_id must reference an active semester, also for existing users and skipped selection
    semester = _active_semester_or_400(db, body.sectionId) if body.sectionId else None

    existing = db.query(StudentUser).filter(StudentUser.email == email).first()
    if existing:
        existing.last_accessed = utcnow()
        existing.full_name = full_name
        if body.batch:
            existing.batch = body.batch
        if body.section:
            existing.section = body.section
        if body.sectionId:
            existing.section_id = body.sectionId
        if body.hasSkippedSelection is not None:
            existing.has_skipped_selection = body.hasSkippedSelection
        db.commit()
        db.refresh(existing)
        return {
            "studentUser": StudentUserOut.from_row(existing),
            "isExistingUser": True,
        }

    row = StudentUser(
        user_id=generate_user_id(),
        email=email,
        full_name=full_name,
        batch=body.batch or None,
        section=body.section or None,
        section_id=body.sectionId or None,
        has_skipped_selection=bool(body.hasSkippedSelection),
        is_active=True,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created student user %s", row.user_id)

    return {
        "studentUser": StudentUserOut.from_row(row),
        "semester": semester,
        "isExistingUser": False,
    }


@router.get("", response_model=StudentUserResultOut)
def get_student_user(userId: str = Query(None), db: Session = Depends(get_db)):
    if not userId:
        raise HTTPException(status_code=400, detail="User ID is required")

    row = (
        db.query(StudentUser)
        .filter(StudentUser.user_id == userId, StudentUser.is_active.is_(True))
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Student user not found")

    row.last_accessed = utcnow()
    db.commit()
    db.refresh(row)
    return {"studentUser": StudentUserOut.from_row(row)}


@router.patch("/update", response_model=StudentUserResultOut)
def update_student_user(body: StudentUserUpdateIn, db: Session = Depends(get_db)):
    if not body.userId:
        raise HTTPException(status_code=400, detail="User ID is required")

    row = db.query(StudentUser).filter(StudentUser.user_id == body.userId).first()
    if not row:
        raise HTTPException(status_code=404, detail="Student user not found")

    if body.email:
        row.email = body.email.strip().lower()
    if body.fullName:
        row.full_name = body.fullName
    if body.batch:
        row.batch = body.batch
    if body.section:
        row.section = body.section
    if body.profilePhotoUrl:
        row.profile_photo_url = body.profilePhotoUrl
    if body.phone:
        row.phone = body.phone
    if body.studentId:
        row.student_id = body.studentId

    if body.batch and body.section:
        semester = (
            db.query(Semester.id)
            .filter(
                Semester.section == make_section(body.batch, body.section),
                Semester.is_active.is_(True),
            )
            .first()
        )
        if semester:
            row.section_id = semester.id

    now = utcnow()
    row.updated_at = now
    row.last_accessed = now
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="An account with this email already exists")
    db.refresh(row)
    return {"studentUser": StudentUserOut.from_row(row)}
