# classroom_qa/models/image.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from classroom_qa.db.base import Base


class Image(Base):
    __tablename__ = "images"
    __table_args__ = (
        # attached to exactly one owner
        CheckConstraint(
            "(question_id IS NULL) <> (answer_id IS NULL)",
            name="ck_images_single_owner",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), unique=True, nullable=False)
    path = Column(String(512), nullable=False)

    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=True, index=True)
    answer_id = Column(Integer, ForeignKey("answers.id", ondelete="CASCADE"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    question = relationship("Question", back_populates="images")
    answer = relationship("Answer", back_populates="images")
