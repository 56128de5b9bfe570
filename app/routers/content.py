from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.topic import Topic
from app.schemas.content import ContentItemOut
from app.services.content_service import get_slide_or_404, get_video_or_404

router = APIRouter(prefix="/api", tags=["Content"])


def _topic_ref(topic: Optional[Topic]) -> Optional[dict]:
    if topic is None:
        return None

    course = topic.course
    course_ref = None
    if course is not None:
        semester = course.semester
        course_ref = {
            "id": course.id,
            "title": course.title,
            "courseCode": course.course_code,
            "teacherName": course.teacher_name,
            "semester": {
                "id": semester.id,
                "title": semester.title,
                "section": semester.section,
                "name": semester.title,
            } if semester is not None else None,
        }
    return {"id": topic.id, "title": topic.title, "course": course_ref}


def _item_view(item, kind: str, url: str, share_prefix: str) -> dict:
    topic = _topic_ref(item.topic)
    course = topic["course"] if topic else None
    semester = course["semester"] if course else None

    course_title = course["title"] if course else None
    title = f"{item.title} - {course_title}" if course_title else item.title
    description = item.description or (
        f"View {item.title} {kind}s" + (f" from {course_title} course" if course_title else "")
    )

    return {
        "id": item.id,
        "title": item.title,
        "url": url,
        "description": item.description,
        "type": kind,
        "orderIndex": item.order_index,
        "createdAt": item.created_at,
        "updatedAt": item.updated_at,
        "topic": topic,
        "metadata": {
            "title": title,
            "description": description,
            "courseTitle": course_title,
            "topicTitle": topic["title"] if topic else None,
            "semesterTitle": semester["title"] if semester else None,
            "teacherName": course["teacherName"] if course else None,
            "shareUrl": f"/{share_prefix}/{item.id}",
            "embedUrl": url,
        },
    }


@router.get("/slides/{slide_id}", response_model=ContentItemOut)
def get_slide(slide_id: str, db: Session = Depends(get_db)):
    slide = get_slide_or_404(db, slide_id)
    return _item_view(slide, "slide", slide.google_drive_url, "slide")


@router.get("/videos/{video_id}", response_model=ContentItemOut)
def get_video(video_id: str, db: Session = Depends(get_db)):
    video = get_video_or_404(db, video_id)
    return _item_view(video, "video", video.youtube_url, "video")
