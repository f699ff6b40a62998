# classroom_qa/api/v1/endpoints/questions.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import raise_question_not_found
from classroom_qa.core.security import get_current_user
from classroom_qa.db.session import get_db
from classroom_qa.models.question import Question
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.base import Message
from classroom_qa.schemas.question import (
    AnswerCreate,
    AnswerEnvelope,
    QuestionCreate,
    QuestionEnvelope,
    QuestionListEnvelope,
    QuestionTagsUpdate,
)
from classroom_qa.services import answer_service, permissions, question_service
from classroom_qa.services.storage import ImageStorage, get_storage
from classroom_qa.services.visibility import present_answer, present_question
from classroom_qa.workers.queue import schedule_cleanup_after_delete

router = APIRouter()


def _require_question(db: Session, question_id: int) -> Question:
    q = question_service.get_question(db, question_id)
    if not q:
        raise_question_not_found()
    return q


@router.get("", response_model=QuestionListEnvelope)
def list_questions(
    lecture_id: int | None = Query(None, alias="lectureId"),
    tags: str | None = Query(None, description="comma separated tag ids, any may match"),
    resolved: bool | None = Query(None),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    List questions (students and teachers). Author names are masked per viewer.
    """
    tag_ids = question_service.parse_tag_filter(tags)
    qs = question_service.filter_questions(
        question_service.list_questions(db),
        lecture_id=lecture_id,
        tag_ids=tag_ids,
        resolved=resolved,
    )
    return QuestionListEnvelope(questions=[present_question(q, current_user.role) for q in qs])


@router.post("", response_model=QuestionEnvelope, status_code=status.HTTP_201_CREATED)
def create_question(
    obj_in: QuestionCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    storage: ImageStorage = Depends(get_storage),
):
    q = question_service.create_question(db, author=current_user, obj_in=obj_in, storage=storage)
    return QuestionEnvelope(question=present_question(q, current_user.role))


@router.get("/{question_id}", response_model=QuestionEnvelope)
def get_question(
    question_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    q = _require_question(db, question_id)
    return QuestionEnvelope(question=present_question(q, current_user.role))


@router.delete("/{question_id}", response_model=Message)
def delete_question(
    question_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    q = _require_question(db, question_id)
    permissions.ensure_can_delete_question(current_user, q)

    filenames = question_service.delete_question(db, db_obj=q)
    schedule_cleanup_after_delete(filenames)
    return Message(message="Question deleted")


@router.put("/{question_id}/resolve", response_model=QuestionEnvelope)
def resolve_question(
    question_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    q = _require_question(db, question_id)
    permissions.ensure_can_set_resolved(current_user, q)
    q = question_service.set_resolved(db, db_obj=q, resolved=True)
    return QuestionEnvelope(question=present_question(q, current_user.role))


@router.put("/{question_id}/unresolve", response_model=QuestionEnvelope)
def unresolve_question(
    question_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    q = _require_question(db, question_id)
    permissions.ensure_can_set_resolved(current_user, q)
    q = question_service.set_resolved(db, db_obj=q, resolved=False)
    return QuestionEnvelope(question=present_question(q, current_user.role))


@router.put("/{question_id}/tags", response_model=QuestionEnvelope)
def update_question_tags(
    question_id: int,
    obj_in: QuestionTagsUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Replace the whole tag set of a question (author only).
    """
    q = _require_question(db, question_id)
    permissions.ensure_can_update_question_tags(current_user, q)
    q = question_service.set_tags(db, db_obj=q, tag_ids=obj_in.tag_ids)
    return QuestionEnvelope(question=present_question(q, current_user.role))


@router.post("/{question_id}/answers", response_model=AnswerEnvelope, status_code=status.HTTP_201_CREATED)
def add_answer(
    question_id: int,
    obj_in: AnswerCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    storage: ImageStorage = Depends(get_storage),
):
    q = _require_question(db, question_id)
    answer = answer_service.create_answer(
        db, author=current_user, question=q, obj_in=obj_in, storage=storage
    )
    return AnswerEnvelope(answer=present_answer(answer, current_user.role))
