# classroom_qa/services/tag_service.py
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import ValidationError
from classroom_qa.models.tag import Tag


def list_tags(db: Session, lecture_id: int) -> List[Tag]:
    return db.query(Tag).filter(Tag.lecture_id == lecture_id).order_by(Tag.name.asc()).all()


def get_tag(db: Session, lecture_id: int, tag_id: int) -> Optional[Tag]:
    return db.query(Tag).filter(Tag.id == tag_id, Tag.lecture_id == lecture_id).first()


def _find_by_name(db: Session, lecture_id: int, name: str) -> Optional[Tag]:
    return db.query(Tag).filter(Tag.lecture_id == lecture_id, Tag.name == name).first()


def get_or_create_tag(db: Session, *, lecture_id: int, name: str) -> Tuple[Tag, bool]:
    """
    Return ``(tag, created)``. Names are trimmed and unique per lecture.
    """
    name = name.strip()
    if not name:
        raise ValidationError("Tag name is required")

    existing = _find_by_name(db, lecture_id, name)
    if existing:
        return existing, False

    tag = Tag(name=name, lecture_id=lecture_id)
    db.add(tag)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request created the same tag first
        db.rollback()
        existing = _find_by_name(db, lecture_id, name)
        if existing is None:
            raise
        return existing, False
    db.refresh(tag)
    return tag, True


def delete_tag(db: Session, *, db_obj: Tag) -> None:
    db.delete(db_obj)
    db.commit()


def resolve_tags(db: Session, *, lecture_id: int, tag_ids: Iterable[int]) -> List[Tag]:
    """
    Load tags by id, all of which must belong to ``lecture_id``.
    """
    wanted = list(dict.fromkeys(tag_ids))
    if not wanted:
        return []
    tags = db.query(Tag).filter(Tag.id.in_(wanted), Tag.lecture_id == lecture_id).all()
    found = {t.id for t in tags}
    missing = [tid for tid in wanted if tid not in found]
    if missing:
        raise ValidationError(f"Unknown tag for this lecture: {', '.join(map(str, missing))}")
    by_id = {t.id: t for t in tags}
    return [by_id[tid] for tid in wanted]
