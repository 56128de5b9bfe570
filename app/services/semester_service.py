from __future__ import annotations

from typing import Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.semester import Semester
from app.models.slide import Slide
from app.models.study_tool import StudyTool
from app.models.topic import Topic
from app.models.video import Video
from app.schemas.semester import CourseIn, SemesterIn


def apply_semester_fields(semester: Semester, body: SemesterIn) -> None:
    semester.title = body.title
    semester.section = body.section
    semester.description = body.description or ""
    semester.has_midterm = True if body.has_midterm is None else body.has_midterm
    semester.has_final = True if body.has_final is None else body.has_final
    semester.start_date = body.start_date
    semester.end_date = body.end_date
    semester.default_credits = body.default_credits or 3
    semester.is_active = True if body.is_active is None else body.is_active


def add_course_tree(db: Session, semester: Semester, courses: List[CourseIn]) -> List[Course]:
    """
    Adds courses -> topics -> slides/videos and study resources under the semester.
    Everything is added to the session; the caller commits once.
    """
    created = []
    for course_in in courses:
        course = Course(
            semester_id=semester.id,
            title=course_in.title,
            course_code=course_in.course_code or course_in.code or "",
            teacher_name=course_in.teacher_name,
            teacher_email=course_in.teacher_email or None,
            credits=course_in.credits or semester.default_credits or 3,
            description=course_in.description or "",
            is_highlighted=course_in.is_highlighted,
        )
        db.add(course)
        db.flush()

        for t_idx, topic_in in enumerate(course_in.topics):
            topic = Topic(
                course_id=course.id,
                title=topic_in.title,
                description=topic_in.description or "",
                order_index=topic_in.order_index if topic_in.order_index is not None else t_idx,
            )
            db.add(topic)
            db.flush()

            for s_idx, slide_in in enumerate(topic_in.slides):
                db.add(Slide(
                    topic_id=topic.id,
                    title=slide_in.title,
                    google_drive_url=slide_in.google_drive_url or slide_in.url or "",
                    description=slide_in.description or "",
                    order_index=slide_in.order_index if slide_in.order_index is not None else s_idx,
                ))

            for v_idx, video_in in enumerate(topic_in.videos):
                db.add(Video(
                    topic_id=topic.id,
                    title=video_in.title,
                    youtube_url=video_in.youtube_url or video_in.url or "",
                    description=video_in.description or "",
                    order_index=video_in.order_index if video_in.order_index is not None else v_idx,
                ))

        for tool_in in course_in.study_resources:
            url = tool_in.content_url or tool_in.url
            # "text" / "file" are placeholders the admin form sends for non-link resources
            if url in ("text", "file"):
                url = None
            db.add(StudyTool(
                course_id=course.id,
                title=tool_in.title,
                type=tool_in.type or "note",
                content_url=url,
                exam_type=tool_in.exam_type or "both",
                description=tool_in.description or "",
            ))

        created.append(course)

    db.flush()
    return created


def _count_by(db: Session, key, query) -> Dict[str, int]:
    return {k: n for k, n in query.with_entities(key, func.count()).group_by(key).all()}


def semester_counts(db: Session, semester_ids: Iterable[str]) -> Dict[str, Dict[str, int]]:
    ids = list(semester_ids)
    if not ids:
        return {}

    courses = _count_by(
        db, Course.semester_id,
        db.query(Course).filter(Course.semester_id.in_(ids)),
    )
    topics = _count_by(
        db, Course.semester_id,
        db.query(Topic).join(Course, Course.id == Topic.course_id).filter(Course.semester_id.in_(ids)),
    )
    tools = _count_by(
        db, Course.semester_id,
        db.query(StudyTool).join(Course, Course.id == StudyTool.course_id).filter(Course.semester_id.in_(ids)),
    )
    students = _count_by(
        db, Course.semester_id,
        db.query(Enrollment)
        .join(Course, Course.id == Enrollment.course_id)
        .filter(Course.semester_id.in_(ids), Enrollment.status == "active"),
    )

    out = {}
    for sid in ids:
        t = topics.get(sid, 0)
        s = tools.get(sid, 0)
        out[sid] = {
            "courses_count": courses.get(sid, 0),
            "topics_count": t,
            "study_resources_count": s,
            "materials_count": t + s,
            "students_count": students.get(sid, 0),
        }
    return out
