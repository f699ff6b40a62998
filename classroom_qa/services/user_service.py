# classroom_qa/services/user_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import ConflictError, PermissionDeniedError
from classroom_qa.core.security import get_password_hash
from classroom_qa.models.user import Role, User
from classroom_qa.schemas.auth import ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _clean_nickname(nickname: str | None) -> str | None:
    if nickname is None:
        return None
    nickname = nickname.strip()
    return nickname or None


def register_user(db: Session, *, obj_in: RegisterRequest) -> User:
    """
    Create an account. Students keep nickname/show_nickname; teachers never do.
    """
    if get_user_by_email(db, obj_in.email):
        raise ConflictError("Email already registered")

    user = User(
        email=obj_in.email,
        password_hash=get_password_hash(obj_in.password),
        name=obj_in.name,
        role=obj_in.role,
    )
    if obj_in.role == Role.STUDENT.value:
        user.nickname = _clean_nickname(obj_in.nickname)
        user.show_nickname = obj_in.show_nickname
    else:
        user.nickname = None
        user.show_nickname = False

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered {user.role} user {user.id}")
    return user


def update_profile(db: Session, *, user: User, obj_in: ProfileUpdate) -> User:
    """
    Students only. Omitted fields are left alone; an empty nickname clears it.
    """
    if not user.is_student:
        logger.warning(f"Teacher {user.id} tried to update a student profile")
        raise PermissionDeniedError("Teachers cannot change profile settings")

    update_data = obj_in.model_dump(exclude_unset=True)
    if "nickname" in update_data:
        user.nickname = _clean_nickname(update_data["nickname"])
    if update_data.get("show_nickname") is not None:
        user.show_nickname = update_data["show_nickname"]

    db.add(user)
    db.commit()
    db.refresh(user)
    return user
