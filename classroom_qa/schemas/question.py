# classroom_qa/schemas/question.py
from datetime import datetime

from pydantic import Field

from classroom_qa.schemas.base import CamelModel
from classroom_qa.schemas.image import ImagePublic, ImageRef
from classroom_qa.schemas.lecture import LectureRef
from classroom_qa.schemas.tag import TagPublic
from classroom_qa.schemas.user import Author


class QuestionCreate(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    lecture_id: int
    tag_ids: list[int] = []
    images: list[ImageRef] = []


class QuestionTagsUpdate(CamelModel):
    tag_ids: list[int]


class AnswerCreate(CamelModel):
    content: str = Field(min_length=1)
    images: list[ImageRef] = []


class AnswerPublic(CamelModel):
    id: int
    content: str
    question_id: int
    created_at: datetime | None = None
    author: Author
    images: list[ImagePublic] = []


class QuestionPublic(CamelModel):
    id: int
    title: str
    content: str
    resolved: bool
    show_nickname: bool
    created_at: datetime | None = None
    author: Author
    lecture: LectureRef
    tags: list[TagPublic] = []
    images: list[ImagePublic] = []
    answers: list[AnswerPublic] = []


class QuestionEnvelope(CamelModel):
    question: QuestionPublic


class QuestionListEnvelope(CamelModel):
    questions: list[QuestionPublic]


class AnswerEnvelope(CamelModel):
    answer: AnswerPublic
