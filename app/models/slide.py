from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow


class Slide(Base):
    __tablename__ = "slides"

    id = Column(String(36), primary_key=True, default=new_id)
    topic_id = Column(
        String(36),
        ForeignKey("topics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    google_drive_url = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False, default=0)

    file_size_mb = Column(Float, nullable=True)
    slide_count = Column(Integer, nullable=True)
    is_downloadable = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    topic = relationship("Topic", back_populates="slides")
