"""User storage operations."""

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import UniquenessError
from app.models.user import User, USER_RULES
from app.utils.validators import validate_or_raise

log = logging.getLogger(__name__)


def find_by_email_or_username(db: Session, email: str, username: str) -> Optional[User]:
    """Return the account matching either identifier, in a single query."""
    return db.query(User).filter(or_(User.email == email, User.username == username)).first()


def find_by_credential(db: Session, credential: str) -> Optional[User]:
    """Look up a login credential against both username and email."""
    return db.query(User).filter(or_(User.username == credential, User.email == credential)).first()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def create_user(
    db: Session,
    username: str,
    email: str,
    hashed_password: str,
    first_name: str,
    last_name: str,
) -> User:
    """
    Validate and insert a new account.

    Raises:
        ValidationError: one or more attributes break the model rules.
        UniquenessError: the username or email was taken between the
            caller's pre-check and this insert.
    """
    fields = {
        "username": username,
        "email": email,
        "hashed_password": hashed_password,
        "first_name": first_name,
        "last_name": last_name,
    }
    validate_or_raise(fields, USER_RULES)

    user = User(**fields)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        log.error(f"Unique constraint violated while creating user '{username}': {exc.orig}")
        raise UniquenessError(
            "User already exists",
            errors={"email": "Email or username is already in use."},
        ) from exc
    db.refresh(user)
    log.debug(f"Inserted user id={user.id}")
    return user
