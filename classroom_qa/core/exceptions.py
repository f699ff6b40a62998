# classroom_qa/core/exceptions.py
from fastapi import status


class AppError(Exception):
    """Base error; rendered as ``{"error": message}`` with ``status_code``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User is not permitted to access this resource"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    # 400 rather than 409: existing clients branch on 400 for duplicate emails
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class InternalError(AppError):
    default_message = "Something went wrong, please try again later"


def raise_authentication_required():
    raise AuthError("Authentication required")


def raise_invalid_token():
    raise AuthError("Token is invalid or expired", status_code=status.HTTP_403_FORBIDDEN)


def raise_invalid_credentials():
    raise AuthError("Incorrect email or password")


def raise_user_not_found():
    raise NotFoundError("User not found")


def raise_lecture_not_found():
    raise NotFoundError("Lecture not found")


def raise_question_not_found():
    raise NotFoundError("Question not found")


def raise_tag_not_found():
    raise NotFoundError("Tag not found")
