import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import read_body
from app.auth import get_password_hash, require_auth, set_token_cookie
from app.database import get_db
from app.exceptions import ConflictError
from app.models.user import User
from app.schemas.user import UserResponse, to_safe_user
from app.services import user_service
from app.utils.validators import (
    exists,
    is_email,
    min_length,
    no_null_bytes,
    not_email,
    validate_or_raise,
)

log = logging.getLogger(__name__)

router = APIRouter()

SIGNUP_RULES = {
    "email": [
        exists("Please provide a valid email."),
        is_email("Please provide a valid email."),
    ],
    "username": [
        exists("Please provide a username with at least 4 characters."),
        min_length(4, "Please provide a username with at least 4 characters."),
        not_email("Username cannot be an email."),
    ],
    "password": [
        exists("Password must be 6 characters or more."),
        min_length(6, "Password must be 6 characters or more."),
        no_null_bytes("Password cannot contain null characters."),
    ],
    "firstName": [exists("Please provide your first name.")],
    "lastName": [exists("Please provide your last name.")],
}


@router.post("", response_model=UserResponse)
def signup(
    response: Response,
    body: Dict[str, Any] = Depends(read_body),
    db: Session = Depends(get_db),
):
    """Register a new account and log it in."""
    validate_or_raise(body, SIGNUP_RULES)
    email = str(body["email"])
    username = str(body["username"])

    existing_user = user_service.find_by_email_or_username(db, email, username)
    if existing_user:
        log.info(f"Signup rejected for username '{username}': email or username already in use")
        raise ConflictError(
            "User already exists",
            errors={"email": "Email or username is already in use."},
        )

    hashed_password = get_password_hash(str(body["password"]))

    user = user_service.create_user(
        db,
        username=username,
        email=email,
        hashed_password=hashed_password,
        first_name=str(body["firstName"]),
        last_name=str(body["lastName"]),
    )
    log.info(f"Created user id={user.id} username='{user.username}'")

    safe_user = to_safe_user(user)
    set_token_cookie(response, safe_user.model_dump(by_alias=True))
    return {"user": safe_user}


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: Annotated[User, Depends(require_auth)]):
    """Get the logged-in user."""
    return {"user": to_safe_user(current_user)}
