# classroom_qa/api/v1/endpoints/tags.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import raise_lecture_not_found, raise_tag_not_found
from classroom_qa.core.security import get_current_user
from classroom_qa.db.session import get_db
from classroom_qa.schemas.auth import CurrentUser
from classroom_qa.schemas.base import Message
from classroom_qa.schemas.tag import TagCreate, TagEnvelope, TagListEnvelope, TagPublic
from classroom_qa.services import lecture_service, tag_service

router = APIRouter()


def _require_lecture(db: Session, lecture_id: int):
    lecture = lecture_service.get_lecture(db, lecture_id)
    if not lecture:
        raise_lecture_not_found()
    return lecture


@router.get("", response_model=TagListEnvelope)
def list_tags(
    lecture_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    tags = tag_service.list_tags(db, lecture_id)
    return TagListEnvelope(tags=[TagPublic.model_validate(t) for t in tags])


@router.post("", response_model=TagEnvelope, status_code=status.HTTP_201_CREATED)
def create_tag(
    lecture_id: int,
    obj_in: TagCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Get-or-create: an existing tag of the same name in this lecture is returned with 200.
    """
    _require_lecture(db, lecture_id)
    tag, created = tag_service.get_or_create_tag(db, lecture_id=lecture_id, name=obj_in.name)
    if not created:
        response.status_code = status.HTTP_200_OK
    return TagEnvelope(tag=TagPublic.model_validate(tag))


@router.delete("/{tag_id}", response_model=Message)
def delete_tag(
    lecture_id: int,
    tag_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    _require_lecture(db, lecture_id)
    tag = tag_service.get_tag(db, lecture_id, tag_id)
    if not tag:
        raise_tag_not_found()
    tag_service.delete_tag(db, db_obj=tag)
    return Message(message="Tag deleted")
