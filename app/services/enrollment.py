"""
Enrollment lifecycle for a (student, course) pair.

    (none)  --enroll-->   active
    active  --unenroll--> dropped
    dropped --enroll-->   active   (same row, progress kept)

One row per pair, enforced by uq_user_course_enrollment. Rows are never deleted
here; history beyond the single mutable row is not kept.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.student_user import StudentUser
from app.utils.timeutils import utcnow

logger = logging.getLogger("app.enrollment")

ACTIVE = "active"
DROPPED = "dropped"


def get_active_course_or_404(db: Session, course_id: str) -> Course:
    course = (
        db.query(Course)
        .filter(Course.id == course_id, Course.is_active.is_(True))
        .first()
    )
    if not course:
        raise HTTPException(status_code=404, detail="Course not found or inactive")
    return course


def get_student_or_404(db: Session, user_id: str, detail: str) -> StudentUser:
    student = db.query(StudentUser).filter(StudentUser.user_id == user_id).first()
    if not student:
        raise HTTPException(status_code=404, detail=detail)
    return student


def find_enrollment(db: Session, user_id: str, course_id: str) -> Enrollment | None:
    return (
        db.query(Enrollment)
        .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
        .first()
    )


def enroll(db: Session, course_id: str, user_id: str) -> Tuple[Enrollment, bool]:
    """
    Returns (enrollment, reactivated). reactivated is False for a brand new row.
    """
    get_active_course_or_404(db, course_id)
    get_student_or_404(
        db, user_id, "Student account not found. Please create an account first."
    )

    existing = find_enrollment(db, user_id, course_id)
    if existing is not None:
        if existing.status == ACTIVE:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Already enrolled in this course",
            )

        now = utcnow()
        previous = existing.status
        existing.status = ACTIVE
        existing.enrollment_date = now
        existing.updated_at = now
        db.commit()
        db.refresh(existing)
        logger.info("Re-enrolled %s in %s (was %s)", user_id, course_id, previous)
        return existing, True

    row = Enrollment(
        user_id=user_id,
        course_id=course_id,
        status=ACTIVE,
        progress_percentage=0,
        enrollment_date=utcnow(),
        notes=f"Enrolled via web interface by user {user_id}",
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request created the pair first
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already enrolled in this course",
        )
    db.refresh(row)
    logger.info("Enrolled %s in %s", user_id, course_id)
    return row, False


def unenroll(db: Session, course_id: str, user_id: str) -> Enrollment:
    get_student_or_404(db, user_id, "Student account not found.")

    row = find_enrollment(db, user_id, course_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Enrollment not found")

    if row.status != ACTIVE:
        raise HTTPException(status_code=400, detail="Cannot unenroll from inactive enrollment")

    row.status = DROPPED
    row.updated_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info("Unenrolled %s from %s", user_id, course_id)
    return row


def active_enrollments(db: Session, user_id: str) -> List[Enrollment]:
    """Active enrollments of the user, most recent enrollment first, course and semester loaded."""
    return (
        db.query(Enrollment)
        .options(joinedload(Enrollment.course).joinedload(Course.semester))
        .filter(Enrollment.user_id == user_id, Enrollment.status == ACTIVE)
        .order_by(Enrollment.enrollment_date.desc())
        .all()
    )
