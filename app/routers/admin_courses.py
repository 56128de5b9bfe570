from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.semester import Semester
from app.models.student_user import StudentUser
from app.models.study_tool import StudyTool
from app.models.topic import Topic
from app.schemas.course import (
    AdminCourseCreate,
    AdminCourseOut,
    AdminCourseSaveOut,
    AdminCourseUpdate,
    AdminCourseWithStats,
)
from app.services.content_service import (
    get_course_or_404,
    get_semester_or_404,
    reject_null_columns,
    section_of_course,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.excel_export import enrollment_roster_xlsx, make_filename
from app.utils.timeutils import utcnow

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/api/section-admin/courses", tags=["Section Admin - Courses"])


def _counts(db: Session, model, course_ids: List[str]) -> dict:
    if not course_ids:
        return {}
    rows = (
        db.query(model.course_id, func.count())
        .filter(model.course_id.in_(course_ids))
        .group_by(model.course_id)
        .all()
    )
    return dict(rows)


@router.get("", response_model=List[AdminCourseWithStats])
def list_courses(
    semester_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = (
        db.query(Course)
        .join(Semester, Semester.id == Course.semester_id)
        .options(joinedload(Course.semester))
    )
    if semester_id:
        q = q.filter(Course.semester_id == semester_id)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)

    courses = q.order_by(Course.created_at.desc()).all()
    ids = [c.id for c in courses]
    topics = _counts(db, Topic, ids)
    tools = _counts(db, StudyTool, ids)

    out = []
    for c in courses:
        t = topics.get(c.id, 0)
        s = tools.get(c.id, 0)
        out.append(AdminCourseWithStats(
            **AdminCourseOut.model_validate(c).model_dump(),
            section=section_of_course(c),
            topics_count=t,
            study_tools_count=s,
            materials_count=t + s,
        ))
    return out


@router.post("", response_model=AdminCourseSaveOut)
def create_course(
    body: AdminCourseCreate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not body.title or not body.course_code or not body.semester_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: title, course_code, and semester_id",
        )

    semester = get_semester_or_404(db, body.semester_id)
    ensure_section_access(
        admin, semester.section,
        "You can only create courses for semesters in your assigned section",
    )

    course = Course(
        semester_id=semester.id,
        title=body.title,
        course_code=body.course_code,
        teacher_name=body.teacher_name,
        teacher_email=body.teacher_email,
        description=body.description or "",
        credits=body.credits or 3,
        is_highlighted=body.is_highlighted,
        is_active=body.is_active,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return {"course": course, "message": "Course created successfully"}


@router.put("", response_model=AdminCourseSaveOut)
def update_course(
    body: AdminCourseUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    data = body.model_dump(exclude_unset=True)
    course_id = data.pop("id", None)
    if not course_id:
        raise HTTPException(status_code=400, detail="Course ID is required")
    reject_null_columns(Course, data)

    course = get_course_or_404(db, course_id)
    ensure_section_access(
        admin, section_of_course(course),
        "You can only update courses in your assigned section",
    )

    for k, v in data.items():
        setattr(course, k, v)
    course.updated_at = utcnow()

    db.commit()
    db.refresh(course)
    return {"course": course, "message": "Course updated successfully"}


@router.delete("")
def delete_course(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not id:
        raise HTTPException(status_code=400, detail="Course ID is required")

    course = get_course_or_404(db, id)
    ensure_section_access(
        admin, section_of_course(course),
        "You can only delete courses in your assigned section",
    )

    db.delete(course)
    db.commit()
    return {"success": True, "message": "Course deleted successfully"}


@router.get("/{course_id}/enrollments/export")
def export_enrollments(
    course_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    course = get_course_or_404(db, course_id)
    ensure_section_access(
        admin, section_of_course(course),
        "You can only export courses in your assigned section",
    )

    rows = (
        db.query(Enrollment, StudentUser)
        .join(StudentUser, StudentUser.user_id == Enrollment.user_id)
        .filter(Enrollment.course_id == course.id)
        .order_by(Enrollment.status.asc(), StudentUser.full_name.asc())
        .all()
    )
    data = [
        {
            "user_id": e.user_id,
            "full_name": s.full_name,
            "email": s.email,
            "student_id": s.student_id,
            "batch": s.batch,
            "section": s.section,
            "status": e.status,
            "progress_percentage": e.progress_percentage,
            "enrollment_date": e.enrollment_date,
            "last_accessed": e.last_accessed,
        }
        for e, s in rows
    ]

    content = enrollment_roster_xlsx(
        course.course_code, course.title, section_of_course(course), data,
    )
    filename = make_filename(f"{course.course_code or 'course'}_enrollments")
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
