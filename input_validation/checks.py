"""
Django System Checks for input validation settings

Run with:
    python manage.py check --tag input_validation
"""

from django.core.checks import Error, register

from .conf import get_setting

LENGTH_LIMITS = [
    ("ARTICLE.TITLE_MIN_LENGTH", "ARTICLE.TITLE_MAX_LENGTH"),
    (None, "ARTICLE.BODY_MAX_LENGTH"),
    (None, "ARTICLE.ID_MAX"),
    (None, "MAX_BODY_BYTES"),
]


@register("input_validation")
def check_validation_settings(app_configs, **kwargs):
    """Check that configured limits are positive and ordered."""
    errors = []

    for min_key, max_key in LENGTH_LIMITS:
        max_value = get_setting(max_key)
        if not isinstance(max_value, int) or max_value <= 0:
            errors.append(
                Error(
                    f"INPUT_VALIDATION {max_key} must be a positive integer (got {max_value!r})",
                    hint=f"Set INPUT_VALIDATION {max_key} to a value greater than zero",
                    id="input_validation.E001",
                )
            )
            continue

        if min_key is None:
            continue

        min_value = get_setting(min_key)
        if isinstance(min_value, int) and min_value > max_value:
            errors.append(
                Error(
                    f"INPUT_VALIDATION {min_key} ({min_value}) is greater than {max_key} ({max_value})",
                    hint=f"Lower {min_key} or raise {max_key}",
                    id="input_validation.E002",
                )
            )

    return errors
