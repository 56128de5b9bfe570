from __future__ import annotations

from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.course import Course
from app.models.semester import Semester
from app.models.slide import Slide
from app.models.study_tool import StudyTool
from app.models.topic import Topic
from app.models.video import Video


def get_semester_or_404(db: Session, semester_id: str, detail: str = "Semester not found") -> Semester:
    obj = db.query(Semester).filter(Semester.id == semester_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail=detail)
    return obj


def get_course_or_404(db: Session, course_id: str) -> Course:
    obj = db.query(Course).filter(Course.id == course_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Course not found")
    return obj


def get_topic_or_404(db: Session, topic_id: str) -> Topic:
    obj = db.query(Topic).filter(Topic.id == topic_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Topic not found")
    return obj


def get_slide_or_404(db: Session, slide_id: str) -> Slide:
    obj = db.query(Slide).filter(Slide.id == slide_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Slide not found")
    return obj


def get_video_or_404(db: Session, video_id: str) -> Video:
    obj = db.query(Video).filter(Video.id == video_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Video not found")
    return obj


def get_study_tool_or_404(db: Session, tool_id: str) -> StudyTool:
    obj = db.query(StudyTool).filter(StudyTool.id == tool_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Study tool not found")
    return obj


# section a piece of content belongs to, walking up to its semester

def section_of_course(course: Course) -> Optional[str]:
    return course.semester.section if course.semester else None


def section_of_topic(topic: Topic) -> Optional[str]:
    return section_of_course(topic.course) if topic.course else None


def next_order_index(db: Session, column, parent_column, parent_id: str) -> int:
    last = (
        db.query(column)
        .filter(parent_column == parent_id)
        .order_by(column.desc())
        .first()
    )
    return ((last[0] if last else None) or 0) + 1


def reject_null_columns(model, data: dict) -> None:
    """PUT bodies may clear nullable columns, but an explicit null on a NOT NULL column is a 400."""
    columns = model.__table__.columns
    bad = sorted(k for k, v in data.items() if v is None and k in columns and not columns[k].nullable)
    if bad:
        raise HTTPException(status_code=400, detail=f"Fields cannot be null: {', '.join(bad)}")
