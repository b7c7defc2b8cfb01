"""User views and response schemas.

Each view is an explicit projection of a `User` row. Call sites pick the view
they need; nothing is hidden or exposed implicitly.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserView(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class UserPublic(UserView):
    """Default view: no password hash, email or timestamps."""
    id: int
    username: str
    first_name: str
    last_name: str


class UserWithoutPassword(UserPublic):
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserLogin(UserWithoutPassword):
    """Every column. Internal use only; never return to a client."""
    hashed_password: str


class SafeUser(UserView):
    """The projection returned to clients and embedded in the session token."""
    id: int
    email: str
    username: str
    first_name: str
    last_name: str


class UserResponse(BaseModel):
    user: SafeUser


class SessionResponse(BaseModel):
    user: Optional[SafeUser] = None


USER_VIEWS = {
    "default": UserPublic,
    "withoutPassword": UserWithoutPassword,
    "loginUser": UserLogin,
}


def to_view(user, view: str = "default") -> dict:
    """Project a user row through a named view into a camelCase dict."""
    try:
        schema = USER_VIEWS[view]
    except KeyError:
        raise ValueError(f"Unknown user view: {view}") from None
    return schema.model_validate(user).model_dump(by_alias=True)


def to_public_view(user) -> dict:
    return to_view(user, "default")


def to_auth_view(user) -> dict:
    return to_view(user, "loginUser")


def to_safe_user(user) -> SafeUser:
    return SafeUser.model_validate(user)
