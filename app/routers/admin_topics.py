from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.semester import Semester
from app.models.topic import Topic
from app.schemas.content import TopicCreate, TopicOut, TopicUpdate
from app.services.content_service import (
    get_course_or_404,
    get_topic_or_404,
    next_order_index,
    reject_null_columns,
    section_of_course,
    section_of_topic,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.timeutils import utcnow

router = APIRouter(prefix="/api/section-admin/topics", tags=["Section Admin - Topics"])


@router.get("", response_model=List[TopicOut])
def list_topics(
    course_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = (
        db.query(Topic)
        .join(Course, Course.id == Topic.course_id)
        .join(Semester, Semester.id == Course.semester_id)
    )
    if course_id:
        q = q.filter(Topic.course_id == course_id)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)
    return q.order_by(Topic.order_index.asc()).all()


@router.post("")
def create_topic(
    body: TopicCreate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not body.title or not body.course_id:
        raise HTTPException(status_code=400, detail="Missing required fields: title and course_id")

    course = get_course_or_404(db, body.course_id)
    ensure_section_access(
        admin, section_of_course(course),
        "You can only create topics for courses in your assigned section",
    )

    topic = Topic(
        course_id=course.id,
        title=body.title,
        description=body.description or "",
        order_index=(
            body.order_index
            if body.order_index is not None
            else next_order_index(db, Topic.order_index, Topic.course_id, course.id)
        ),
        is_published=body.is_published,
    )
    db.add(topic)
    db.commit()
    db.refresh(topic)
    return {"success": True, "topic": TopicOut.model_validate(topic), "message": "Topic created successfully"}


@router.put("")
def update_topic(
    body: TopicUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    data = body.model_dump(exclude_unset=True)
    topic_id = data.pop("id", None)
    if not topic_id:
        raise HTTPException(status_code=400, detail="Topic ID is required")
    reject_null_columns(Topic, data)

    topic = get_topic_or_404(db, topic_id)
    ensure_section_access(admin, section_of_topic(topic), "You can only update topics in your assigned section")

    for k, v in data.items():
        setattr(topic, k, v)
    topic.updated_at = utcnow()

    db.commit()
    db.refresh(topic)
    return {"success": True, "topic": TopicOut.model_validate(topic), "message": "Topic updated successfully"}


@router.delete("")
def delete_topic(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not id:
        raise HTTPException(status_code=400, detail="Topic ID is required")

    topic = get_topic_or_404(db, id)
    ensure_section_access(admin, section_of_topic(topic), "You can only delete topics in your assigned section")

    db.delete(topic)
    db.commit()
    return {"success": True, "message": "Topic deleted successfully"}
