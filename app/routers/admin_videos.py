from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin_user import AdminUser
from app.models.course import Course
from app.models.semester import Semester
from app.models.topic import Topic
from app.models.video import Video
from app.schemas.content import VideoCreate, VideoOut, VideoUpdate
from app.services.content_service import (
    get_topic_or_404,
    get_video_or_404,
    next_order_index,
    reject_null_columns,
    section_of_topic,
)
from app.utils.auth import ensure_section_access, require_section_admin, scoped_section
from app.utils.timeutils import utcnow
from app.utils.validators import is_youtube_url

router = APIRouter(prefix="/api/section-admin/videos", tags=["Section Admin - Videos"])


@router.get("", response_model=List[VideoOut])
def list_videos(
    topic_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    q = (
        db.query(Video)
        .join(Topic, Topic.id == Video.topic_id)
        .join(Course, Course.id == Topic.course_id)
        .join(Semester, Semester.id == Course.semester_id)
    )
    if topic_id:
        q = q.filter(Video.topic_id == topic_id)
    scope = scoped_section(admin)
    if scope is not None:
        q = q.filter(Semester.section == scope)
    return q.order_by(Video.order_index.asc()).all()


@router.post("")
def create_video(
    body: VideoCreate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not body.title or not body.youtube_url or not body.topic_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: title, youtube_url, and topic_id",
        )
    if not is_youtube_url(body.youtube_url):
        raise HTTPException(status_code=400, detail="Invalid YouTube URL format")

    topic = get_topic_or_404(db, body.topic_id)
    ensure_section_access(
        admin, section_of_topic(topic),
        "You can only create videos for topics in your assigned section",
    )

    video = Video(
        topic_id=topic.id,
        title=body.title,
        description=body.description or "",
        youtube_url=body.youtube_url,
        order_index=(
            body.order_index
            if body.order_index is not None
            else next_order_index(db, Video.order_index, Video.topic_id, topic.id)
        ),
        duration_minutes=body.duration_minutes,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return {"success": True, "video": VideoOut.model_validate(video), "message": "Video created successfully"}


@router.put("")
def update_video(
    body: VideoUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    data = body.model_dump(exclude_unset=True)
    video_id = data.pop("id", None)
    if not video_id:
        raise HTTPException(status_code=400, detail="Video ID is required")
    reject_null_columns(Video, data)
    if "youtube_url" in data and not is_youtube_url(data["youtube_url"]):
        raise HTTPException(status_code=400, detail="Invalid YouTube URL format")

    video = get_video_or_404(db, video_id)
    ensure_section_access(admin, section_of_topic(video.topic), "You can only update videos in your assigned section")

    for k, v in data.items():
        setattr(video, k, v)
    video.updated_at = utcnow()

    db.commit()
    db.refresh(video)
    return {"success": True, "video": VideoOut.model_validate(video), "message": "Video updated successfully"}


@router.delete("")
def delete_video(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(require_section_admin),
):
    if not id:
        raise HTTPException(status_code=400, detail="Video ID is required")

    video = get_video_or_404(db, id)
    ensure_section_access(admin, section_of_topic(video.topic), "You can only delete videos in your assigned section")

    db.delete(video)
    db.commit()
    return {"success": True, "message": "Video deleted successfully"}
