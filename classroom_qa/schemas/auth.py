# classroom_qa/schemas/auth.py
from typing import Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, EmailStr, Field, field_validator

from classroom_qa.schemas.base import CamelModel
from classroom_qa.schemas.user import UserPublic


class LoginRequest(BaseModel):
    # plain str: a malformed address is just a failed login
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Match the form stored at registration when the address parses."""
        v = v.strip()
        try:
            return validate_email(v, check_deliverability=False).normalized
        except EmailNotValidError:
            return v


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)  # required, may repeat
    role: Literal["TEACHER", "STUDENT"] = "STUDENT"

    # ignored unless role == "STUDENT"
    nickname: str | None = None
    show_nickname: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class ProfileUpdate(CamelModel):
    """Fields left out of the request keep their stored value."""

    nickname: str | None = None
    show_nickname: bool | None = None


class CurrentUser(BaseModel):
    """Caller identity decoded from the bearer token; trusted for the whole request."""

    id: int
    email: str
    role: Literal["TEACHER", "STUDENT"]

    @property
    def is_teacher(self) -> bool:
        return self.role == "TEACHER"


class AuthResponse(CamelModel):
    user: UserPublic
    token: str
