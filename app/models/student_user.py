from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.timeutils import new_id, utcnow


class StudentUser(Base):
    __tablename__ = "student_users"

    id = Column(String(36), primary_key=True, default=new_id)
    # external identifier handed to the client, e.g. "student_1718000000000_k3j9x0a1b"
    user_id = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)

    batch = Column(String(10), nullable=True, index=True)
    section = Column(String(10), nullable=True)
    section_id = Column(String(36), ForeignKey("semesters.id", ondelete="SET NULL"), nullable=True)
    has_skipped_selection = Column(Boolean, nullable=False, default=False)

    profile_photo_url = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    student_id = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    last_accessed = Column(DateTime(timezone=True), default=utcnow, nullable=True)

    semester = relationship("Semester")
