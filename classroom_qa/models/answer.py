# classroom_qa/models/answer.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from classroom_qa.db.base import Base


class Answer(Base):
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    author = relationship("User", back_populates="answers")
    question = relationship("Question", back_populates="answers")
    images = relationship(
        "Image",
        back_populates="answer",
        cascade="all, delete-orphan",
        order_by="Image.id",
    )
