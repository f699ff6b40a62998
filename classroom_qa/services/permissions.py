# classroom_qa/services/permissions.py
"""
Who may do what.

The ``can_*`` predicates are pure; the ``ensure_*`` helpers raise
PermissionDeniedError and are what the endpoints call, after the target
resource has been loaded (a missing resource is reported as 404 first).
"""
import logging

from classroom_qa.core.exceptions import PermissionDeniedError
from classroom_qa.models.lecture import Lecture
from classroom_qa.models.question import Question
from classroom_qa.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


def can_create_lecture(user: CurrentUser) -> bool:
    return user.is_teacher


def can_delete_lecture(user: CurrentUser, lecture: Lecture) -> bool:
    return user.is_teacher and lecture.teacher_id == user.id


def can_delete_question(user: CurrentUser, question: Question) -> bool:
    return question.author_id == user.id


def can_set_resolved(user: CurrentUser, question: Question) -> bool:
    return user.is_teacher or question.author_id == user.id


def can_update_question_tags(user: CurrentUser, question: Question) -> bool:
    return question.author_id == user.id


def _deny(user: CurrentUser, action: str, message: str):
    logger.warning(f"User {user.id} ({user.role}) denied: {action}")
    raise PermissionDeniedError(message)


def ensure_can_create_lecture(user: CurrentUser) -> None:
    if not can_create_lecture(user):
        _deny(user, "create lecture", "Only teachers can create lectures")


def ensure_can_delete_lecture(user: CurrentUser, lecture: Lecture) -> None:
    if not user.is_teacher:
        _deny(user, f"delete lecture {lecture.id}", "Only teachers can delete lectures")
    if not can_delete_lecture(user, lecture):
        _deny(user, f"delete lecture {lecture.id}", "You can only delete your own lectures")


def ensure_can_delete_question(user: CurrentUser, question: Question) -> None:
    if not can_delete_question(user, question):
        _deny(user, f"delete question {question.id}", "You can only delete your own questions")


def ensure_can_set_resolved(user: CurrentUser, question: Question) -> None:
    if not can_set_resolved(user, question):
        _deny(
            user,
            f"change resolved state of question {question.id}",
            "Only the author or a teacher can change the resolved state",
        )


def ensure_can_update_question_tags(user: CurrentUser, question: Question) -> None:
    if not can_update_question_tags(user, question):
        _deny(user, f"retag question {question.id}", "You can only edit tags of your own questions")
