# classroom_qa/services/answer_service.py
import logging

from sqlalchemy.orm import Session, selectinload

from classroom_qa.models.answer import Answer
from classroom_qa.models.question import Question
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.question import AnswerCreate
from classroom_qa.services import image_service
from classroom_qa.services.storage import ImageStorage

logger = logging.getLogger(__name__)


def create_answer(
    db: Session,
    *,
    author: CurrentUser,
    question: Question,
    obj_in: AnswerCreate,
    storage: ImageStorage,
) -> Answer:
    """
    Answers are accepted whether or not the question is resolved, and are never edited.
    """
    images = image_service.build_images(db, obj_in.images, storage)
    db_obj = Answer(
        content=obj_in.content,
        author_id=author.id,
        question_id=question.id,
        images=images,
    )
    db.add(db_obj)
    db.commit()
    logger.info(f"User {author.id} answered question {question.id}")
    return (
        db.query(Answer)
        .options(selectinload(Answer.author), selectinload(Answer.images))
        .filter(Answer.id == db_obj.id)
        .one()
    )
