import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated

from fastapi import Depends, Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.exceptions import AuthenticationError
from app.models.user import User
from app.services import user_service

log = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def set_token_cookie(response: Response, safe_user: dict) -> str:
    """Sign a session token for the user and attach it to the response as a cookie."""
    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        data={"data": safe_user, "sub": str(safe_user["id"])},
        expires_delta=expires_delta,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=int(expires_delta.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return token


def clear_token_cookie(response: Response):
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def decode_session_token(token: str) -> Optional[int]:
    """Return the user id carried by a session token, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        log.debug(f"Rejected session token: {exc}")
        return None
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)


def restore_user(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Load the user behind the session cookie; clears cookies that no longer resolve."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    user_id = decode_session_token(token)
    user = user_service.get_user(db, user_id) if user_id is not None else None
    if user is None:
        clear_token_cookie(response)
    return user


def require_auth(current_user: Annotated[Optional[User], Depends(restore_user)]) -> User:
    if current_user is None:
        raise AuthenticationError(
            "Authentication required",
            errors={"message": "Authentication required"},
        )
    return current_user
