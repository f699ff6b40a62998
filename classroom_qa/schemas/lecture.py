# classroom_qa/schemas/lecture.py
from datetime import datetime

from pydantic import Field

from classroom_qa.schemas.base import CamelModel
from classroom_qa.schemas.user import Author


class LectureCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str | None = None


class LecturePublic(CamelModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    teacher: Author
    question_count: int = 0


class LectureRef(CamelModel):
    id: int
    name: str


class LectureEnvelope(CamelModel):
    lecture: LecturePublic


class LectureListEnvelope(CamelModel):
    lectures: list[LecturePublic]
