"""Application error types rendered as `{title, message, errors}` responses."""

from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors reported to the client."""

    title = "Server Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        errors: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
        title: Optional[str] = None,
    ):
        self.message = message
        self.errors = errors or {}
        if status_code is not None:
            self.status_code = status_code
        if title is not None:
            self.title = title
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"title": self.title, "message": self.message, "errors": self.errors}


class ValidationError(AppError):
    """One or more fields failed their rules."""

    title = "Bad request."
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: Dict[str, str], message: str = "Bad request."):
        super().__init__(message, errors)


class ConflictError(AppError):
    """Username or email is already registered."""

    title = "Bad request."
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    title = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class UniquenessError(AppError):
    """A unique constraint was violated at insert time."""

    title = "Server Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
