from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SemesterBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    section: str
    is_active: bool


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    course_code: str
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    description: Optional[str] = None
    credits: int
    is_highlighted: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    semester: Optional[SemesterBrief] = None


class EnrollmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    course_id: str
    status: str
    progress_percentage: float
    enrollment_date: datetime
    last_accessed: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EnrollmentBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    progress_percentage: float
    enrollment_date: datetime
    last_accessed: Optional[datetime] = None
    completion_date: Optional[datetime] = None


class EnrolledCourseOut(CourseOut):
    enrollment: EnrollmentBrief


class EnrollRequest(BaseModel):
    courseId: Optional[str] = None
    userId: Optional[str] = None


class EnrollmentActionOut(BaseModel):
    message: str
    enrollment: EnrollmentOut


# --- section admin ---

class AdminCourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    semester_id: str
    title: str
    course_code: str
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    description: Optional[str] = None
    credits: int
    is_highlighted: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AdminCourseWithStats(AdminCourseOut):
    section: Optional[str] = None
    topics_count: int = 0
    study_tools_count: int = 0
    materials_count: int = 0


class AdminCourseCreate(BaseModel):
    title: Optional[str] = None
    course_code: Optional[str] = None
    semester_id: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    description: Optional[str] = None
    credits: Optional[int] = None
    is_highlighted: bool = False
    is_active: bool = True


class AdminCourseUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    title: Optional[str] = None
    course_code: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    description: Optional[str] = None
    credits: Optional[int] = None
    is_highlighted: Optional[bool] = None
    is_active: Optional[bool] = None


class AdminCourseSaveOut(BaseModel):
    success: bool = True
    course: AdminCourseOut
    message: str


class CourseImportOut(BaseModel):
    semester_id: str
    created: int
    updated: int
    skipped: List[int]
