# classroom_qa/services/question_service.py
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from classroom_qa.core.exceptions import ValidationError, raise_lecture_not_found
from classroom_qa.models.answer import Answer
from classroom_qa.models.question import Question
from classroom_qa.models.user import User
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.question import QuestionCreate
from classroom_qa.services import image_service, lecture_service, tag_service
from classroom_qa.services.storage import ImageStorage

logger = logging.getLogger(__name__)

_QUESTION_LOAD_OPTIONS = (
    selectinload(Question.author),
    selectinload(Question.lecture),
    selectinload(Question.tags),
    selectinload(Question.images),
    selectinload(Question.answers).selectinload(Answer.author),
    selectinload(Question.answers).selectinload(Answer.images),
)


def create_question(
    db: Session,
    *,
    author: CurrentUser,
    obj_in: QuestionCreate,
    storage: ImageStorage,
) -> Question:
    """
    Post a question to an existing lecture.

    ``show_nickname`` is copied from the author's profile now; later profile
    changes do not affect this question.
    """
    lecture = lecture_service.get_lecture(db, obj_in.lecture_id)
    if lecture is None:
        raise_lecture_not_found()

    tags = tag_service.resolve_tags(db, lecture_id=lecture.id, tag_ids=obj_in.tag_ids)
    images = image_service.build_images(db, obj_in.images, storage)

    author_row = db.get(User, author.id)
    show_nickname = bool(author_row and author_row.is_student and author_row.show_nickname)

    db_obj = Question(
        title=obj_in.title.strip(),
        content=obj_in.content,
        author_id=author.id,
        lecture_id=lecture.id,
        resolved=False,
        show_nickname=show_nickname,
        tags=tags,
        images=images,
    )
    db.add(db_obj)
    db.commit()
    logger.info(f"User {author.id} posted question {db_obj.id} in lecture {lecture.id}")
    return get_question(db, db_obj.id)


def get_question(db: Session, question_id: int) -> Optional[Question]:
    return (
        db.query(Question)
        .options(*_QUESTION_LOAD_OPTIONS)
        .filter(Question.id == question_id)
        .first()
    )


def list_questions(db: Session) -> List[Question]:
    """
    every question, newest first, with everything needed to render it
    """
    return (
        db.query(Question)
        .options(*_QUESTION_LOAD_OPTIONS)
        .order_by(Question.created_at.desc(), Question.id.desc())
        .all()
    )


def parse_tag_filter(raw: str | None) -> List[int]:
    """
    ``"1, 2,3"`` -> ``[1, 2, 3]``; empty pieces are skipped.
    """
    if not raw:
        return []
    tag_ids = []
    for piece in raw.split(","):
        piece = piece.strip()
        if not piece:
            continue
        try:
            tag_ids.append(int(piece))
        except ValueError:
            raise ValidationError(f"Invalid tag id: {piece}")
    return tag_ids


def filter_questions(
    questions: Iterable[Question],
    *,
    lecture_id: int | None = None,
    tag_ids: Iterable[int] = (),
    resolved: bool | None = None,
) -> List[Question]:
    """
    In-process filtering. A question matches the tag filter when it carries
    at least one of ``tag_ids``.
    """
    wanted_tags = set(tag_ids)
    result = []
    for q in questions:
        if lecture_id is not None and q.lecture_id != lecture_id:
            continue
        if resolved is not None and q.resolved != resolved:
            continue
        if wanted_tags and not wanted_tags.intersection(t.id for t in q.tags):
            continue
        result.append(q)
    return result


def set_resolved(db: Session, *, db_obj: Question, resolved: bool) -> Question:
    db_obj.resolved = resolved
    db.add(db_obj)
    db.commit()
    logger.info(f"Question {db_obj.id} marked {'resolved' if resolved else 'unresolved'}")
    return get_question(db, db_obj.id)


def set_tags(db: Session, *, db_obj: Question, tag_ids: Iterable[int]) -> Question:
    """
    Replace the question's tags with ``tag_ids`` (all from its own lecture).
    """
    db_obj.tags = tag_service.resolve_tags(db, lecture_id=db_obj.lecture_id, tag_ids=tag_ids)
    db.add(db_obj)
    db.commit()
    return get_question(db, db_obj.id)


def delete_question(db: Session, *, db_obj: Question) -> List[str]:
    """
    Delete a question with its answers and image rows; returns the image filenames.
    """
    filenames = [img.filename for img in db_obj.images]
    filenames += [img.filename for a in db_obj.answers for img in a.images]
    question_id = db_obj.id
    db.delete(db_obj)
    db.commit()
    logger.info(f"Deleted question {question_id}")
    return filenames
