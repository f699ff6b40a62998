# classroom_qa/core/security.py
import logging
from datetime import datetime, timedelta, timezone

from fastapi import Header
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from classroom_qa.core.config import settings
from classroom_qa.core.exceptions import (
    raise_authentication_required,
    raise_invalid_token,
)
from classroom_qa.models.user import User
from classroom_qa.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user for a correct email/password pair, otherwise None.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        # hash anyway so both failure paths cost the same
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise_invalid_token()
    except JWTError:
        logger.warning("Rejected invalid token")
        raise_invalid_token()

    try:
        return CurrentUser(id=payload["id"], email=payload["email"], role=payload["role"])
    except (KeyError, PydanticValidationError):
        logger.warning("Rejected token with incomplete payload")
        raise_invalid_token()


def get_current_user(authorization: str | None = Header(None)) -> CurrentUser:
    """Resolve the caller from ``Authorization: Bearer <token>``.

    The identity is taken from the token as-is: a role change in the store is
    only picked up after the user logs in again.
    """
    if not authorization:
        raise_authentication_required()

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise_authentication_required()

    return decode_access_token(token)

