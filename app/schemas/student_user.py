from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StudentUserCreateIn(BaseModel):
    email: Optional[str] = None
    fullName: Optional[str] = None
    batch: Optional[str] = None
    section: Optional[str] = None
    sectionId: Optional[str] = None
    hasSkippedSelection: Optional[bool] = None


class StudentUserUpdateIn(BaseModel):
    userId: Optional[str] = None
    email: Optional[str] = None
    fullName: Optional[str] = None
    batch: Optional[str] = None
    section: Optional[str] = None
    profilePhotoUrl: Optional[str] = None
    phone: Optional[str] = None
    studentId: Optional[str] = None


class StudentUserOut(BaseModel):
    id: str
    userId: str
    email: str
    fullName: Optional[str] = None
    batch: Optional[str] = None
    section: Optional[str] = None
    sectionId: Optional[str] = None
    hasSkippedSelection: bool
    profilePhotoUrl: Optional[str] = None
    phone: Optional[str] = None
    studentId: Optional[str] = None
    createdAt: datetime
    lastAccessed: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "StudentUserOut":
        return cls(
            id=row.id,
            userId=row.user_id,
            email=row.email,
            fullName=row.full_name,
            batch=row.batch,
            section=row.section,
            sectionId=row.section_id,
            hasSkippedSelection=bool(row.has_skipped_selection),
            profilePhotoUrl=row.profile_photo_url,
            phone=row.phone,
            studentId=row.student_id,
            createdAt=row.created_at,
            lastAccessed=row.last_accessed,
        )


class SemesterRefOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    section: str


class StudentUserCreateOut(BaseModel):
    success: bool = True
    studentUser: StudentUserOut
    semester: Optional[SemesterRefOut] = None
    isExistingUser: bool


class StudentUserResultOut(BaseModel):
    success: bool = True
    studentUser: StudentUserOut
