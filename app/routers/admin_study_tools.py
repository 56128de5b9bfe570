from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.semester import Semester
from app.models.study_tool import EXAM_TYPES, STUDY_TOOL_TYPES, StudyTool
from app.schemas.content import StudyToolCreate, StudyToolOut, StudyToolUpdate
from app.services.content_service import (
    get_course_or_404,
    get_study_tool_or_404,
    reject_null_columns,
    section_of_course,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.timeutils import utcnow

router = APIRouter(prefix="/api/section-admin/study-tools", tags=["Section Admin - Study Tools"])


def _check_type(value: Optional[str]):
    if value not in STUDY_TOOL_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid type. Must be one of: {', '.join(STUDY_TOOL_TYPES)}",
        )


def _check_exam_type(value: Optional[str]):
    if value not in EXAM_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid exam_type. Must be one of: {', '.join(EXAM_TYPES)}",
        )


@router.get("", response_model=List[StudyToolOut])
def list_study_tools(
    course_id: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = (
        db.query(StudyTool)
        .join(Course, Course.id == StudyTool.course_id)
        .join(Semester, Semester.id == Course.semester_id)
    )
    if course_id:
        q = q.filter(StudyTool.course_id == course_id)
    if type:
        q = q.filter(StudyTool.type == type)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)
    return q.order_by(StudyTool.created_at.desc()).all()


@router.post("")
def create_study_tool(
    body: StudyToolCreate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not body.title or not body.type or not body.course_id:
        raise HTTPException(status_code=400, detail="Missing required fields: title, type, and course_id")
    _check_type(body.type)
    exam_type = body.exam_type or "both"
    _check_exam_type(exam_type)

    course = get_course_or_404(db, body.course_id)
    ensure_section_access(
        admin, section_of_course(course),
        "You can only create study tools for courses in your assigned section",
    )

    tool = StudyTool(
        course_id=course.id,
        title=body.title,
        type=body.type,
        content_url=body.content_url,
        exam_type=exam_type,
        description=body.description or "",
        is_downloadable=body.is_downloadable,
    )
    db.add(tool)
    db.commit()
    db.refresh(tool)
    return {
        "success": True,
        "study_tool": StudyToolOut.model_validate(tool),
        "message": "Study tool created successfully",
    }


@router.put("")
def update_study_tool(
    body: StudyToolUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    data = body.model_dump(exclude_unset=True)
    tool_id = data.pop("id", None)
    if not tool_id:
        raise HTTPException(status_code=400, detail="Study tool ID is required")
    reject_null_columns(StudyTool, data)
    if "type" in data:
        _check_type(data["type"])
    if "exam_type" in data:
        _check_exam_type(data["exam_type"])

    tool = get_study_tool_or_404(db, tool_id)
    ensure_section_access(
        admin, section_of_course(tool.course),
        "You can only update study tools in your assigned section",
    )

    for k, v in data.items():
        setattr(tool, k, v)
    tool.updated_at = utcnow()

    db.commit()
    db.refresh(tool)
    return {
        "success": True,
        "study_tool": StudyToolOut.model_validate(tool),
        "message": "Study tool updated successfully",
    }


@router.delete("")
def delete_study_tool(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not id:
        raise HTTPException(status_code=400, detail="Study tool ID is required")

    tool = get_study_tool_or_404(db, id)
    ensure_section_access(
        admin, section_of_course(tool.course),
        "You can only delete study tools in your assigned section",
    )

    db.delete(tool)
    db.commit()
    return {"success": True, "message": "Study tool deleted successfully"}
