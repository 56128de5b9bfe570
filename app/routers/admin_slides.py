from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.semester import Semester
from app.models.slide import Slide
from app.models.topic import Topic
from app.schemas.content import SlideCreate, SlideOut, SlideUpdate
from app.services.content_service import (
    get_slide_or_404,
    get_topic_or_404,
    next_order_index,
    reject_null_columns,
    section_of_topic,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.timeutils import utcnow
from app.utils.validators import is_google_drive_url

router = APIRouter(prefix="/api/section-admin/slides", tags=["Section Admin - Slides"])


@router.get("", response_model=List[SlideOut])
def list_slides(
    topic_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = (
        db.query(Slide)
        .join(Topic, Topic.id == Slide.topic_id)
        .join(Course, Course.id == Topic.course_id)
        .join(Semester, Semester.id == Course.semester_id)
    )
    if topic_id:
        q = q.filter(Slide.topic_id == topic_id)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)
    return q.order_by(Slide.order_index.asc()).all()


@router.post("")
def create_slide(
    body: SlideCreate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not body.title or not body.google_drive_url or not body.topic_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: title, google_drive_url, and topic_id",
        )
    if not is_google_drive_url(body.google_drive_url):
        raise HTTPException(status_code=400, detail="Invalid Google Drive URL format")

    topic = get_topic_or_404(db, body.topic_id)
    ensure_section_access(
        admin, section_of_topic(topic),
        "You can only create slides for topics in your assigned section",
    )

    slide = Slide(
        topic_id=topic.id,
        title=body.title,
        description=body.description or "",
        google_drive_url=body.google_drive_url,
        order_index=(
            body.order_index
            if body.order_index is not None
            else next_order_index(db, Slide.order_index, Slide.topic_id, topic.id)
        ),
        file_size_mb=body.file_size_mb,
        slide_count=body.slide_count,
        is_downloadable=body.is_downloadable,
    )
    db.add(slide)
    db.commit()
    db.refresh(slide)
    return {"success": True, "slide": SlideOut.model_validate(slide), "message": "Slide created successfully"}


@router.put("")
def update_slide(
    body: SlideUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    data = body.model_dump(exclude_unset=True)
    slide_id = data.pop("id", None)
    if not slide_id:
        raise HTTPException(status_code=400, detail="Slide ID is required")
    reject_null_columns(Slide, data)
    if "google_drive_url" in data and not is_google_drive_url(data["google_drive_url"]):
        raise HTTPException(status_code=400, detail="Invalid Google Drive URL format")

    slide = get_slide_or_404(db, slide_id)
    ensure_section_access(admin, section_of_topic(slide.topic), "You can only update slides in your assigned section")

    for k, v in data.items():
        setattr(slide, k, v)
    slide.updated_at = utcnow()

    db.commit()
    db.refresh(slide)
    return {"success": True, "slide": SlideOut.model_validate(slide), "message": "Slide updated successfully"}


@router.delete("")
def delete_slide(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not id:
        raise HTTPException(status_code=400, detail="Slide ID is required")

    slide = get_slide_or_404(db, id)
    ensure_section_access(admin, section_of_topic(slide.topic), "You can only delete slides in your assigned section")

    db.delete(slide)
    db.commit()
    return {"success": True, "message": "Slide deleted successfully"}
