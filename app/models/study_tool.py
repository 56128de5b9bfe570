from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow

STUDY_TOOL_TYPES = ("note", "previous_question", "syllabus")
EXAM_TYPES = ("midterm", "final", "both")


class StudyTool(Base):
    __tablename__ = "study_tools"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    content_url = Column(Text, nullable=True)
    exam_type = Column(String(16), nullable=False, default="both")
    description = Column(Text, default="")
    is_downloadable = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    course = relationship("Course", back_populates="study_tools")
