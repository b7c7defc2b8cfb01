import pytest

from app.auth import get_password_hash, verify_password
from app.exceptions import UniquenessError, ValidationError
from app.schemas.user import to_auth_view, to_public_view, to_safe_user, to_view
from app.services import user_service


def make_user(db, **overrides):
    fields = {
        "username": "carol",
        "email": "carol@mail.com",
        "hashed_password": get_password_hash("password1"),
        "first_name": "Carol",
        "last_name": "Danvers",
    }
    fields.update(overrides)
    return user_service.create_user(db, **fields)


def test_create_user_assigns_id_and_timestamps(db):
    user = make_user(db)
    assert user.id is not None
    assert user.created_at is not None
    assert user.updated_at is not None


def test_create_user_validates_model_rules(db):
    with pytest.raises(ValidationError) as exc_info:
        make_user(db, username="x" * 31, email="nope", hashed_password="plaintext", first_name="")
    assert exc_info.value.errors == {
        "username": "Username must be between 4 and 30 characters.",
        "email": "Please provide a valid email.",
        "hashed_password": "Hashed password must be 60 characters.",
        "first_name": "First name is required.",
    }


def test_create_user_rejects_email_username(db):
    with pytest.raises(ValidationError) as exc_info:
        make_user(db, username="carol@mail.org")
    assert exc_info.value.errors == {"username": "Cannot be an email."}


def test_create_user_duplicate_raises_uniqueness_error(db):
    make_user(db)
    with pytest.raises(UniquenessError):
        make_user(db, username="carol2")
    with pytest.raises(UniquenessError):
        make_user(db, email="other@mail.com")


def test_find_by_email_or_username(db):
    user = make_user(db)
    assert user_service.find_by_email_or_username(db, "carol@mail.com", "someone").id == user.id
    assert user_service.find_by_email_or_username(db, "x@mail.com", "carol").id == user.id
    assert user_service.find_by_email_or_username(db, "x@mail.com", "someone") is None


def test_find_by_credential(db):
    user = make_user(db)
    assert user_service.find_by_credential(db, "carol").id == user.id
    assert user_service.find_by_credential(db, "carol@mail.com").id == user.id
    assert user_service.find_by_credential(db, "nobody") is None


def test_default_view_hides_sensitive_fields(db):
    view = to_public_view(make_user(db))
    assert set(view) == {"id", "username", "firstName", "lastName"}


def test_without_password_view(db):
    view = to_view(make_user(db), "withoutPassword")
    assert "hashedPassword" not in view
    assert {"email", "createdAt", "updatedAt"} <= set(view)


def test_login_view_includes_hash(db):
    user = make_user(db)
    view = to_auth_view(user)
    assert view["hashedPassword"] == user.hashed_password
    assert verify_password("password1", view["hashedPassword"])


def test_safe_user_projection(db):
    safe = to_safe_user(make_user(db)).model_dump(by_alias=True)
    assert set(safe) == {"id", "email", "username", "firstName", "lastName"}


def test_unknown_view(db):
    with pytest.raises(ValueError) as exc_info:
        to_view(make_user(db), "everything")
    assert exc_info.value.__suppress_context__
