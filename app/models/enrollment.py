from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow

ENROLLMENT_STATUSES = ("active", "completed", "dropped", "paused")


class Enrollment(Base):
    __tablename__ = "user_course_enrollments"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(255),
        ForeignKey("student_users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id = Column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status = Column(String(20), nullable=False, default="active")
    progress_percentage = Column(Float, nullable=False, default=0)

    enrollment_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_accessed = Column(DateTime(timezone=True), nullable=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    course = relationship("Course", back_populates="enrollments")
    student = relationship("StudentUser")

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_user_course_enrollment"),
        CheckConstraint(
            "status IN ('active', 'completed', 'dropped', 'paused')",
            name="ck_enrollment_status",
        ),
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_enrollment_progress",
        ),
    )
