"""
Validation phase for article requests.

Each function receives the raw input and the request's shared
``ValidationErrors`` and returns cleaned values. All checks run even after an
earlier one fails so that a single response reports every problem.
"""

from typing import Any, Dict, Optional

from input_validation.conf import get_setting
from input_validation.errors import ValidationErrors
from input_validation.sanitizers import sanitize_fields
from input_validation.validators import (
    reject_unknown,
    require,
    validate_choice,
    validate_integer,
    validate_no_markup,
    validate_object,
    validate_safe_url,
    validate_string,
)

from .models import SOURCE_URL_MAX_LENGTH, ArticleStatus

ARTICLE_FIELDS = ("title", "body", "status", "source_url")
REQUIRED_ON_CREATE = ("title", "body")
TEXT_FIELDS = ("title", "body")
URL_FIELDS = ("source_url",)


def validate_article_id(raw: Any, errors: ValidationErrors) -> Optional[int]:
    """Article ids are positive integers that fit the primary key column."""
    return validate_integer(
        raw,
        errors,
        "id",
        min_value=1,
        max_value=get_setting("ARTICLE.ID_MAX"),
    )


def validate_status(raw: Any, errors: ValidationErrors) -> Optional[str]:
    return validate_choice(raw, ArticleStatus.values, errors, "status")


def _validate_text(data: Dict[str, Any], errors: ValidationErrors, cleaned: Dict[str, Any]) -> None:
    reject_markup = get_setting("REJECT_MARKUP", True)

    if "title" in data:
        title = validate_string(
            data["title"],
            errors,
            "title",
            min_length=get_setting("ARTICLE.TITLE_MIN_LENGTH"),
            max_length=get_setting("ARTICLE.TITLE_MAX_LENGTH"),
        )
        if title is not None and reject_markup:
            title = validate_no_markup(title, errors, "title")
        if title is not None:
            cleaned["title"] = title

    if "body" in data:
        body = validate_string(
            data["body"],
            errors,
            "body",
            max_length=get_setting("ARTICLE.BODY_MAX_LENGTH"),
        )
        if body is not None and reject_markup:
            body = validate_no_markup(body, errors, "body")
        if body is not None:
            cleaned["body"] = body


def validate_article_payload(
    data: Any,
    errors: ValidationErrors,
    partial: bool = False,
) -> Dict[str, Any]:
    """
    Validate a create (``partial=False``) or update (``partial=True``) body.

    On create ``title`` and ``body`` are required while ``status`` defaults to
    Draft and ``source_url`` is optional. On update any subset of the fields
    may be sent, but at least one of them.
    """
    if not isinstance(data, dict):
        validate_object(data, errors)
        return {}

    reject_unknown(data, ARTICLE_FIELDS, errors)

    if partial:
        if not any(field in data for field in ARTICLE_FIELDS):
            errors.add(
                "non_field_errors",
                "Provide at least one of: " + ", ".join(ARTICLE_FIELDS) + ".",
                code="empty_update",
            )
            return {}
    else:
        for field in REQUIRED_ON_CREATE:
            require(data, field, errors)

    data = sanitize_fields(data, text_fields=TEXT_FIELDS, url_fields=URL_FIELDS)
    cleaned: Dict[str, Any] = {}

    _validate_text({k: v for k, v in data.items() if not errors.has(k)}, errors, cleaned)

    if "status" in data:
        status = validate_status(data["status"], errors)
        if status is not None:
            cleaned["status"] = status

    source_url = data.get("source_url")
    if "source_url" in data and source_url not in (None, ""):
        source_url = validate_safe_url(source_url, errors, "source_url", max_length=SOURCE_URL_MAX_LENGTH)
        if source_url is not None:
            cleaned["source_url"] = source_url
    elif "source_url" in data:
        cleaned["source_url"] = ""

    return cleaned


def validate_status_change(
    data: Any,
    errors: ValidationErrors,
    article_id: Any = None,
) -> Dict[str, Any]:
    """Validate ``POST /api/articles/<id>/status/``: the path id and a status body."""
    cleaned: Dict[str, Any] = {"id": validate_article_id(article_id, errors)}

    data = validate_object(data, errors)
    reject_unknown(data, ("status",), errors)
    if "status" not in data:
        if not errors.has("non_field_errors"):
            errors.add("status", "This field is required.", code="required")
    else:
        cleaned["status"] = validate_status(data["status"], errors)

    return cleaned


def validate_article_lookup(data: Any, errors: ValidationErrors, article_id: Any = None) -> Dict[str, Any]:
    """Only the path id matters for a lookup; query parameters are ignored."""
    return {"id": validate_article_id(article_id, errors)}


def validate_article_update(data: Any, errors: ValidationErrors, article_id: Any = None) -> Dict[str, Any]:
    article_pk = validate_article_id(article_id, errors)
    cleaned = validate_article_payload(data, errors, partial=True)
    cleaned["id"] = article_pk
    return cleaned


def validate_article_filters(data: Any, errors: ValidationErrors) -> Dict[str, Any]:
    """Query string filters for the list endpoint."""
    cleaned: Dict[str, Any] = {}
    reject_unknown(data, ("status",), errors)
    if data.get("status"):
        cleaned["status"] = validate_status(data["status"], errors)
    return cleaned
