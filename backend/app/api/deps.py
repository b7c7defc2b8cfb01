"""Shared request dependencies."""

import json
import logging
from typing import Any, Dict

from fastapi import Request

from app.exceptions import ValidationError
from app.utils.validators import is_utf8_encodable

log = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> Dict[str, Any]:
    """Parse a JSON or form-encoded request body into a plain dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return reject_unencodable(dict(form))

    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        log.debug("Rejected request body that is not valid JSON")
        raise ValidationError({"body": "Request body must be valid JSON."})
    if not isinstance(body, dict):
        raise ValidationError({"body": "Request body must be a JSON object."})
    return reject_unencodable(body)


def reject_unencodable(body: Dict[str, Any]) -> Dict[str, Any]:
    errors = {
        key: "Value contains characters that are not allowed."
        for key, value in body.items()
        if isinstance(value, str) and not is_utf8_encodable(value)
    }
    if errors:
        raise ValidationError(errors)
    return body
