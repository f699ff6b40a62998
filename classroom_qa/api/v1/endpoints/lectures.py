# classroom_qa/api/v1/endpoints/lectures.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import raise_lecture_not_found
from classroom_qa.core.security import get_current_user
from classroom_qa.db.session import get_db
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.base import Message
from classroom_qa.schemas.lecture import LectureCreate, LectureEnvelope, LectureListEnvelope
from classroom_qa.services import lecture_service, permissions
from classroom_qa.services.visibility import present_lecture
from classroom_qa.workers.queue import schedule_cleanup_after_delete

router = APIRouter()


@router.get("", response_model=LectureListEnvelope)
def list_lectures(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    lectures = lecture_service.list_lectures(db)
    counts = lecture_service.question_counts(db, [lec.id for lec in lectures])
    return LectureListEnvelope(
        lectures=[present_lecture(lec, counts.get(lec.id, 0)) for lec in lectures]
    )


@router.post("", response_model=LectureEnvelope, status_code=status.HTTP_201_CREATED)
def create_lecture(
    obj_in: LectureCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    permissions.ensure_can_create_lecture(current_user)
    lecture = lecture_service.create_lecture(db, teacher=current_user, obj_in=obj_in)
    return LectureEnvelope(lecture=present_lecture(lecture, 0))


@router.get("/{lecture_id}", response_model=LectureEnvelope)
def get_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    lecture = lecture_service.get_lecture(db, lecture_id)
    if not lecture:
        raise_lecture_not_found()
    return LectureEnvelope(lecture=present_lecture(lecture))


@router.delete("/{lecture_id}", response_model=Message)
def delete_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Only the owning teacher; questions, answers and tags go with the lecture.
    """
    lecture = lecture_service.get_lecture(db, lecture_id)
    if not lecture:
        raise_lecture_not_found()
    permissions.ensure_can_delete_lecture(current_user, lecture)

    filenames = lecture_service.delete_lecture(db, db_obj=lecture)
    schedule_cleanup_after_delete(filenames)
    return Message(message="Lecture deleted")
