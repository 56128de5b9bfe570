from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow


class Topic(Base):
    __tablename__ = "topics"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    order_index = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    course = relationship("Course", back_populates="topics")
    slides = relationship(
        "Slide",
        back_populates="topic",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Slide.order_index",
    )
    videos = relationship(
        "Video",
        back_populates="topic",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Video.order_index",
    )
