from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=new_id)
    semester_id = Column(
        String(36),
        ForeignKey("semesters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    course_code = Column(String(32), nullable=False)
    teacher_name = Column(String(255), nullable=True)
    teacher_email = Column(String(255), nullable=True)
    description = Column(Text, default="")

    credits = Column(Integer, nullable=False, default=3)
    is_highlighted = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # relationship
    semester = relationship("Semester", back_populates="courses")
    topics = relationship(
        "Topic",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Topic.order_index",
    )
    study_tools = relationship(
        "StudyTool",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
