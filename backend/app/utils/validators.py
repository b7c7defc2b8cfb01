"""Field rules for request bodies and model attributes.

A rule is a callable taking the field value and returning an error message, or
``None`` when the value passes. Rules for a field run in order and stop at the
first failure, so each field contributes at most one message. All fields are
always checked, so the caller sees every violation at once.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from app.exceptions import ValidationError

Rule = Callable[[Any], Optional[str]]


def is_utf8_encodable(value: str) -> bool:
    """False for strings holding lone surrogates, which JSON bodies can carry."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_email_address(value: Any) -> bool:
    """Syntax-only email check; no DNS lookup."""
    if not isinstance(value, str) or not value or not is_utf8_encodable(value):
        return False
    try:
        validated = validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    # Special-use TLDs pass, but a bare host such as "a@b" does not
    return "." in validated.domain


def exists(message: str) -> Rule:
    """Fails on missing or falsy values (``None``, ``""``, ``0``, ``False``)."""
    def rule(value):
        return None if value else message
    return rule


def min_length(minimum: int, message: str) -> Rule:
    def rule(value):
        return None if len(str(value)) >= minimum else message
    return rule


def length_between(minimum: int, maximum: int, message: str) -> Rule:
    def rule(value):
        return None if minimum <= len(str(value)) <= maximum else message
    return rule


def no_null_bytes(message: str) -> Rule:
    def rule(value):
        return message if "\x00" in str(value) else None
    return rule


def is_email(message: str) -> Rule:
    def rule(value):
        return None if is_email_address(str(value)) else message
    return rule


def not_email(message: str) -> Rule:
    def rule(value):
        return message if is_email_address(str(value)) else None
    return rule


def check_fields(data: Mapping[str, Any], rules: Mapping[str, List[Rule]]) -> Dict[str, str]:
    """Run every field's rules and return ``{field: message}`` for the failures."""
    errors: Dict[str, str] = {}
    for field, field_rules in rules.items():
        value = data.get(field)
        for rule in field_rules:
            message = rule(value)
            if message is not None:
                errors[field] = message
                break
    return errors


def validate_or_raise(data: Mapping[str, Any], rules: Mapping[str, List[Rule]]) -> None:
    errors = check_fields(data, rules)
    if errors:
        raise ValidationError(errors)
