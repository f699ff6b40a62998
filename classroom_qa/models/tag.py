# classroom_qa/models/tag.py
from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import relationship

from classroom_qa.db.base import Base

question_tags = Table(
    "question_tags",
    Base.metadata,
    Column("question_id", Integer, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"
    # tag names are unique per lecture, not globally
    __table_args__ = (UniqueConstraint("name", "lecture_id", name="uq_tags_name_lecture"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    lecture_id = Column(Integer, ForeignKey("lectures.id", ondelete="CASCADE"), nullable=False, index=True)

    lecture = relationship("Lecture", back_populates="tags")
    questions = relationship("Question", secondary=question_tags, back_populates="tags")
