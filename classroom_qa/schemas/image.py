# classroom_qa/schemas/image.py
from pydantic import Field

from classroom_qa.schemas.base import CamelModel


class ImageRef(CamelModel):
    """An uploaded file referenced from a question/answer creation body."""

    filename: str = Field(min_length=1)
    path: str | None = None


class ImagePublic(CamelModel):
    id: int
    filename: str
    path: str


class UploadedImage(CamelModel):
    filename: str
    path: str
    original_name: str | None = None


class UploadEnvelope(CamelModel):
    image: UploadedImage
