import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import read_body
from app.auth import clear_token_cookie, restore_user, set_token_cookie, verify_password
from app.database import get_db
from app.exceptions import AuthenticationError
from app.models.user import User
from app.schemas.user import SessionResponse, UserResponse, to_auth_view, to_safe_user
from app.services import user_service
from app.utils.validators import exists, validate_or_raise

log = logging.getLogger(__name__)

router = APIRouter()

LOGIN_RULES = {
    "credential": [exists("Please provide a valid email or username.")],
    "password": [exists("Please provide a password.")],
}


def password_matches(password: str, hashed_password: str) -> bool:
    # bcrypt refuses some inputs outright, such as NUL bytes
    try:
        return verify_password(password, hashed_password)
    except ValueError:
        return False


@router.get("", response_model=SessionResponse)
def read_session(current_user: Annotated[Optional[User], Depends(restore_user)]):
    """Return the user behind the session cookie, if any."""
    if current_user is None:
        return {"user": None}
    return {"user": to_safe_user(current_user)}


@router.post("", response_model=UserResponse)
def login(
    response: Response,
    body: Dict[str, Any] = Depends(read_body),
    db: Session = Depends(get_db),
):
    """Log in with a username or email and a password."""
    validate_or_raise(body, LOGIN_RULES)
    credential = str(body["credential"])

    user = user_service.find_by_credential(db, credential)
    login_user = to_auth_view(user) if user else None
    if not login_user or not password_matches(str(body["password"]), login_user["hashedPassword"]):
        log.info(f"Login failed for credential '{credential}'")
        raise AuthenticationError(
            "Login failed",
            errors={"credential": "The provided credentials were invalid."},
        )

    safe_user = to_safe_user(user)
    set_token_cookie(response, safe_user.model_dump(by_alias=True))
    log.info(f"User id={user.id} logged in")
    return {"user": safe_user}


@router.delete("")
def logout(response: Response):
    clear_token_cookie(response)
    return {"message": "success"}
