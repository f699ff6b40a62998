# classroom_qa/services/lecture_service.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from classroom_qa.models.lecture import Lecture
from classroom_qa.models.question import Question
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.lecture import LectureCreate

logger = logging.getLogger(__name__)


def create_lecture(
    db: Session,
    *,
    teacher: CurrentUser,
    obj_in: LectureCreate,
) -> Lecture:
    db_obj = Lecture(
        name=obj_in.name.strip(),
        description=obj_in.description or None,
        teacher_id=teacher.id,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    logger.info(f"Teacher {teacher.id} created lecture {db_obj.id}")
    return db_obj


def get_lecture(db: Session, lecture_id: int) -> Optional[Lecture]:
    return db.get(Lecture, lecture_id)


def list_lectures(db: Session) -> List[Lecture]:
    """
    all lectures, newest first
    """
    return (
        db.query(Lecture)
        .options(joinedload(Lecture.teacher))
        .order_by(Lecture.created_at.desc(), Lecture.id.desc())
        .all()
    )


def question_counts(db: Session, lecture_ids: List[int]) -> dict[int, int]:
    if not lecture_ids:
        return {}
    rows = (
        db.query(Question.lecture_id, func.count(Question.id))
        .filter(Question.lecture_id.in_(lecture_ids))
        .group_by(Question.lecture_id)
        .all()
    )
    return {lecture_id: count for lecture_id, count in rows}


def delete_lecture(db: Session, *, db_obj: Lecture) -> List[str]:
    """
    Delete a lecture with its questions, answers, images and tags.

    Returns the filenames of the image rows that went with it.
    """
    filenames = [
        img.filename
        for question in db_obj.questions
        for img in [*question.images, *(i for a in question.answers for i in a.images)]
    ]
    lecture_id = db_obj.id
    db.delete(db_obj)
    db.commit()
    logger.info(f"Deleted lecture {lecture_id} ({len(filenames)} images detached)")
    return filenames
