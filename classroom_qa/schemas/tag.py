# classroom_qa/schemas/tag.py
from pydantic import Field

from classroom_qa.schemas.base import CamelModel


class TagCreate(CamelModel):
    name: str = Field(min_length=1)


class TagPublic(CamelModel):
    id: int
    name: str
    lecture_id: int


class TagEnvelope(CamelModel):
    tag: TagPublic


class TagListEnvelope(CamelModel):
    tags: list[TagPublic]
