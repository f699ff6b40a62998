# classroom_qa/models/question.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from classroom_qa.db.base import Base
from classroom_qa.models.tag import question_tags


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    lecture_id = Column(Integer, ForeignKey("lectures.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    resolved = Column(Boolean, nullable=False, default=False, index=True)

    # copy of the author's profile flag at creation time
    show_nickname = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    author = relationship("User", back_populates="questions")
    lecture = relationship("Lecture", back_populates="questions")
    tags = relationship("Tag", secondary=question_tags, back_populates="questions", order_by="Tag.name")
    answers = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Answer.created_at, Answer.id",
    )
    images = relationship(
        "Image",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Image.id",
    )
