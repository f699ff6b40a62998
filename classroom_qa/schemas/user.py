# classroom_qa/schemas/user.py
from typing import Annotated, Literal, Union

from pydantic import EmailStr, Field

from classroom_qa.models.user import User
from classroom_qa.schemas.base import CamelModel


class TeacherPublic(CamelModel):
    id: int
    email: EmailStr
    name: str
    role: Literal["TEACHER"]


class StudentPublic(CamelModel):
    id: int
    email: EmailStr
    name: str
    role: Literal["STUDENT"]
    nickname: str | None = None
    show_nickname: bool = False


# The shape of a user depends on its role: only students carry a profile.
UserPublic = Annotated[Union[TeacherPublic, StudentPublic], Field(discriminator="role")]


class Author(CamelModel):
    """Author as shown next to a lecture, question or answer; ``name`` may be masked."""

    id: int
    name: str
    role: Literal["TEACHER", "STUDENT"]


class UserEnvelope(CamelModel):
    user: UserPublic


def to_user_public(user: User) -> TeacherPublic | StudentPublic:
    if user.is_teacher:
        return TeacherPublic.model_validate(user)
    return StudentPublic.model_validate(user)
