from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SlideOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    topic_id: str
    title: str
    description: Optional[str] = None
    google_drive_url: str
    order_index: int
    file_size_mb: Optional[float] = None
    slide_count: Optional[int] = None
    is_downloadable: bool
    created_at: datetime
    updated_at: datetime


class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    topic_id: str
    title: str
    description: Optional[str] = None
    youtube_url: str
    order_index: int
    duration_minutes: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class TopicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    title: str
    description: Optional[str] = None
    order_index: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class TopicWithContentOut(TopicOut):
    slides: List[SlideOut] = Field(default_factory=list)
    videos: List[VideoOut] = Field(default_factory=list)


class StudyToolOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    title: str
    type: str
    content_url: Optional[str] = None
    exam_type: str
    description: Optional[str] = None
    is_downloadable: bool
    created_at: datetime
    updated_at: datetime


# --- create / update bodies (section admin) ---

class TopicCreate(BaseModel):
    title: Optional[str] = None
    course_id: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    is_published: bool = True


class TopicUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    is_published: Optional[bool] = None


class SlideCreate(BaseModel):
    title: Optional[str] = None
    google_drive_url: Optional[str] = None
    topic_id: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    file_size_mb: Optional[float] = None
    slide_count: Optional[int] = None
    is_downloadable: bool = True


class SlideUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    title: Optional[str] = None
    google_drive_url: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    file_size_mb: Optional[float] = None
    slide_count: Optional[int] = None
    is_downloadable: Optional[bool] = None


class VideoCreate(BaseModel):
    title: Optional[str] = None
    youtube_url: Optional[str] = None
    topic_id: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    duration_minutes: Optional[int] = None


class VideoUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    title: Optional[str] = None
    youtube_url: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None
    duration_minutes: Optional[int] = None


class StudyToolCreate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    course_id: Optional[str] = None
    content_url: Optional[str] = None
    exam_type: Optional[str] = "both"
    description: Optional[str] = None
    is_downloadable: bool = True


class StudyToolUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    content_url: Optional[str] = None
    exam_type: Optional[str] = None
    description: Optional[str] = None
    is_downloadable: Optional[bool] = None


# --- single item views (slide / video pages) ---

class SemesterRef(BaseModel):
    id: str
    title: str
    section: str
    name: str


class CourseRef(BaseModel):
    id: str
    title: str
    courseCode: str
    teacherName: Optional[str] = None
    semester: Optional[SemesterRef] = None


class TopicRef(BaseModel):
    id: str
    title: str
    course: Optional[CourseRef] = None


class ItemMetadata(BaseModel):
    title: str
    description: str
    courseTitle: Optional[str] = None
    topicTitle: Optional[str] = None
    semesterTitle: Optional[str] = None
    teacherName: Optional[str] = None
    shareUrl: str
    embedUrl: str


class ContentItemOut(BaseModel):
    id: str
    title: str
    url: str
    description: Optional[str] = None
    type: str
    orderIndex: int
    createdAt: datetime
    updatedAt: datetime
    topic: Optional[TopicRef] = None
    metadata: ItemMetadata
