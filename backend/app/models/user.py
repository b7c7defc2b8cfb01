"""User account model."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database import Base
from app.utils.validators import exists, is_email, length_between, not_email

BCRYPT_HASH_LENGTH = 60


class User(Base):
    """A registered account. Never serialize directly; use the views in app.schemas.user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    hashed_password = Column(String(BCRYPT_HASH_LENGTH), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


# Attribute rules checked before every insert, keyed by column name
USER_RULES = {
    "username": [
        exists("Username is required."),
        length_between(4, 30, "Username must be between 4 and 30 characters."),
        not_email("Cannot be an email."),
    ],
    "email": [
        exists("Email is required."),
        length_between(3, 256, "Email must be between 3 and 256 characters."),
        is_email("Please provide a valid email."),
    ],
    "hashed_password": [
        exists("Hashed password is required."),
        length_between(
            BCRYPT_HASH_LENGTH,
            BCRYPT_HASH_LENGTH,
            f"Hashed password must be {BCRYPT_HASH_LENGTH} characters.",
        ),
    ],
    "first_name": [exists("First name is required.")],
    "last_name": [exists("Last name is required.")],
}
