# classroom_qa/models/lecture.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from classroom_qa.db.base import Base


class Lecture(Base):
    __tablename__ = "lectures"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    teacher_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("User", back_populates="lectures")
    questions = relationship(
        "Question",
        back_populates="lecture",
        cascade="all, delete-orphan",
    )
    tags = relationship(
        "Tag",
        back_populates="lecture",
        cascade="all, delete-orphan",
    )
