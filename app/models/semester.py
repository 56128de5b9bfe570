from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow


class Semester(Base):
    __tablename__ = "semesters"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="")

    # "<batch>_<section letter>", e.g. "63_A"
    section = Column(String(20), nullable=False, index=True)

    has_midterm = Column(Boolean, nullable=False, default=True)
    has_final = Column(Boolean, nullable=False, default=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    default_credits = Column(Integer, nullable=False, default=3)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    courses = relationship(
        "Course",
        back_populates="semester",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
