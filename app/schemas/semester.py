from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SemesterPublicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    section: str
    is_active: bool
    description: Optional[str] = None


class SemesterBatchOut(SemesterPublicOut):
    created_at: datetime
    updated_at: datetime


class BatchSemestersOut(BaseModel):
    batch: str
    semesters: List[SemesterBatchOut]
    count: int


class BatchOut(BaseModel):
    batch: str
    sections: List[str]
    sampleTitle: str
    displayName: str


class SemesterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    section: str
    has_midterm: bool
    has_final: bool
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    default_credits: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class SemesterWithCountsOut(SemesterOut):
    courses_count: int = 0
    topics_count: int = 0
    materials_count: int = 0
    study_resources_count: int = 0
    students_count: int = 0


# --- nested create / replace payload ---

class SlideIn(BaseModel):
    title: str
    google_drive_url: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = ""
    order_index: Optional[int] = None


class VideoIn(BaseModel):
    title: str
    youtube_url: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = ""
    order_index: Optional[int] = None


class TopicIn(BaseModel):
    title: str
    description: Optional[str] = ""
    order_index: Optional[int] = None
    slides: List[SlideIn] = Field(default_factory=list)
    videos: List[VideoIn] = Field(default_factory=list)


class StudyResourceIn(BaseModel):
    title: str
    type: str = "note"
    content_url: Optional[str] = None
    url: Optional[str] = None
    exam_type: Optional[str] = "both"
    description: Optional[str] = ""


class CourseIn(BaseModel):
    title: str
    course_code: Optional[str] = None
    code: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    credits: Optional[int] = None
    description: Optional[str] = ""
    is_highlighted: bool = False
    topics: List[TopicIn] = Field(default_factory=list)
    study_resources: List[StudyResourceIn] = Field(default_factory=list)


class SemesterIn(BaseModel):
    title: Optional[str] = None
    section: Optional[str] = None
    description: Optional[str] = ""
    has_midterm: Optional[bool] = None
    has_final: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    default_credits: Optional[int] = None
    is_active: Optional[bool] = None


class SemesterPayload(BaseModel):
    semester: Optional[SemesterIn] = None
    courses: List[CourseIn] = Field(default_factory=list)


class SemesterSaveOut(BaseModel):
    success: bool = True
    semester: SemesterOut
    message: str


# --- full tree for the admin editor ---

from app.schemas.content import StudyToolOut, TopicWithContentOut  # noqa: E402
from app.schemas.course import AdminCourseOut  # noqa: E402


class CourseTreeOut(AdminCourseOut):
    topics: List[TopicWithContentOut] = Field(default_factory=list)
    study_tools: List[StudyToolOut] = Field(default_factory=list)


class SemesterTreeOut(SemesterOut):
    courses: List[CourseTreeOut] = Field(default_factory=list)
