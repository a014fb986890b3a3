"""
Validation Phase Decorators

Provides the view-level entry point for the validate-then-act flow.
"""

import functools
import json
import logging
from typing import Any, Callable, Dict, Optional

from django.http import JsonResponse

from .conf import get_setting
from .errors import NON_FIELD_ERRORS, ValidationErrors
from .validators import reject_repeated

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH")


def validation_error_response(errors: ValidationErrors, status: int = 400) -> JsonResponse:
    """Build the JSON error payload returned when validation fails."""
    return JsonResponse(
        {
            "error": "Validation error",
            "errors": errors.as_list(),
        },
        status=status,
    )


def _read_payload(request, errors: ValidationErrors) -> Optional[Any]:
    if request.method not in BODY_METHODS:
        reject_repeated(request.GET, errors)
        return request.GET.dict()

    max_bytes = get_setting("MAX_BODY_BYTES")
    body = request.body
    if max_bytes and len(body) > max_bytes:
        errors.add(
            NON_FIELD_ERRORS,
            f"Request body exceeds {max_bytes} bytes.",
            code="payload_too_large",
        )
        return None

    if not body:
        return {}

    try:
        return json.loads(body)
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError and oversized integer literals
        errors.add(NON_FIELD_ERRORS, f"Malformed JSON: {e}", code="invalid_json")
        return None


def validation_phase(validator: Callable[..., Any]) -> Callable:
    """
    Decorator that runs a validation phase before the view.

    The validator is called as ``validator(data, errors, **view_kwargs)`` and
    returns the cleaned data. If it added anything to ``errors`` the view is
    not called and a 400 response listing every error is returned instead.

    Example:
        def validate_comment(data, errors):
            text = validate_string(data.get('text'), errors, 'text', max_length=500)
            return {'text': text}

        @validation_phase(validate_comment)
        def create_comment(request):
            Comment.objects.create(**request.validated_data)
            ...
    """

    def decorator(view_func):
        @functools.wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            errors = ValidationErrors()

            data = _read_payload(request, errors)
            cleaned: Dict[str, Any] = {}
            if data is not None:
                cleaned = validator(data, errors, **kwargs)

            if errors:
                if get_setting("LOG_REJECTED_INPUT", True):
                    logger.warning(
                        "Rejected %s %s: invalid fields %s",
                        request.method,
                        request.path,
                        ", ".join(errors.fields()),
                    )
                return validation_error_response(errors)

            request.validated_data = cleaned
            return view_func(request, *args, **kwargs)

        return wrapped_view

    return decorator
