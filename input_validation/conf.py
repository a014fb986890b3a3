"""Configuration and defaults for input_validation."""

from typing import Any, Dict

# Default validation settings, overridden per key by settings.INPUT_VALIDATION
DEFAULTS: Dict[str, Any] = {
    'ARTICLE': {
        'TITLE_MIN_LENGTH': 1,
        'TITLE_MAX_LENGTH': 200,
        'BODY_MAX_LENGTH': 20000,
        'ID_MAX': 2 ** 63 - 1,  # BigAutoField upper bound
    },
    'REJECT_MARKUP': True,
    'STRIP_TAGS': True,
    'LOG_REJECTED_INPUT': True,
    'MAX_BODY_BYTES': 1048576,  # 1 MiB
}

_MISSING = object()


def _lookup(source: Dict[str, Any], keys) -> Any:
    value: Any = source
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return _MISSING
    return value


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a validation setting from Django settings or use the built-in default.

    Args:
        key: Dotted path to the setting (e.g., 'ARTICLE.TITLE_MAX_LENGTH')
        default: Value returned when neither settings nor DEFAULTS define it

    Returns:
        The setting value or default
    """
    from django.conf import settings

    keys = key.split('.')

    value = _lookup(getattr(settings, 'INPUT_VALIDATION', {}), keys)
    if value is _MISSING or value is None:
        value = _lookup(DEFAULTS, keys)

    return default if value is _MISSING or value is None else value
