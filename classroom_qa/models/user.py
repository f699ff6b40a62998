# classroom_qa/models/user.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from classroom_qa.db.base import Base


class Role(str, enum.Enum):
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)  # real name, may repeat
    role = Column(String(20), nullable=False, default=Role.STUDENT.value)

    # student-only profile; always NULL / False for teachers
    nickname = Column(String(100), nullable=True)
    show_nickname = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    lectures = relationship("Lecture", back_populates="teacher")
    questions = relationship("Question", back_populates="author")
    answers = relationship("Answer", back_populates="author")

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER.value

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT.value
