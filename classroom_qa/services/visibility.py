# classroom_qa/services/visibility.py
"""
Display-time anonymization of author names.

Nothing here writes to the database. Only ``name`` is ever replaced; the
author's ``id`` and ``role`` always pass through.

The two rules read different flags:

* questions use ``Question.show_nickname``, copied from the author's
  profile when the question was posted;
* answers use the author's current ``User.show_nickname``.
"""
from classroom_qa.core.config import settings
from classroom_qa.models.answer import Answer
from classroom_qa.models.image import Image
from classroom_qa.models.lecture import Lecture
from classroom_qa.models.question import Question
from classroom_qa.models.user import Role, User
from classroom_qa.schemas.image import ImagePublic
from classroom_qa.schemas.lecture import LecturePublic, LectureRef
from classroom_qa.schemas.question import AnswerPublic, QuestionPublic
from classroom_qa.schemas.tag import TagPublic
from classroom_qa.schemas.user import Author


def _nickname_or_anonymous(author: User, show_nickname: bool, anonymous_label: str) -> str:
    if show_nickname and author.nickname:
        return author.nickname
    return anonymous_label


def question_author_name(
    question: Question,
    viewer_role: str,
    anonymous_label: str | None = None,
) -> str:
    label = anonymous_label or settings.ANONYMOUS_LABEL
    if viewer_role == Role.TEACHER.value:
        return question.author.name
    return _nickname_or_anonymous(question.author, question.show_nickname, label)


def answer_author_name(
    answer: Answer,
    viewer_role: str,
    anonymous_label: str | None = None,
) -> str:
    label = anonymous_label or settings.ANONYMOUS_LABEL
    author = answer.author
    if viewer_role == Role.TEACHER.value or author.is_teacher:
        return author.name
    return _nickname_or_anonymous(author, bool(author.show_nickname), label)


def _author(user: User, name: str) -> Author:
    return Author(id=user.id, name=name, role=user.role)


def _images(images: list[Image]) -> list[ImagePublic]:
    return [ImagePublic.model_validate(img) for img in images]


def present_answer(answer: Answer, viewer_role: str) -> AnswerPublic:
    return AnswerPublic(
        id=answer.id,
        content=answer.content,
        question_id=answer.question_id,
        created_at=answer.created_at,
        author=_author(answer.author, answer_author_name(answer, viewer_role)),
        images=_images(answer.images),
    )


def present_question(question: Question, viewer_role: str) -> QuestionPublic:
    return QuestionPublic(
        id=question.id,
        title=question.title,
        content=question.content,
        resolved=question.resolved,
        show_nickname=question.show_nickname,
        created_at=question.created_at,
        author=_author(question.author, question_author_name(question, viewer_role)),
        lecture=LectureRef(id=question.lecture.id, name=question.lecture.name),
        tags=[TagPublic.model_validate(tag) for tag in question.tags],
        images=_images(question.images),
        answers=[present_answer(a, viewer_role) for a in question.answers],
    )


def present_lecture(lecture: Lecture, question_count: int | None = None) -> LecturePublic:
    # the owning teacher is never anonymized
    if question_count is None:
        question_count = len(lecture.questions)
    return LecturePublic(
        id=lecture.id,
        name=lecture.name,
        description=lecture.description,
        created_at=lecture.created_at,
        teacher=_author(lecture.teacher, lecture.teacher.name),
        question_count=question_count,
    )
