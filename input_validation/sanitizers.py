"""
Input sanitization utilities.

Sanitizers normalize values before validation runs. They never decide whether
a value is acceptable; that is the validators' job.
"""

import re
from typing import Any, Dict, Iterable

from .conf import get_setting

TAG_PATTERN = re.compile(r'<[^>]+>')
# Control characters except tab (\x09) and newline (\x0a)
CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b-\x1f\x7f]')
SPACE_RUNS = re.compile(r'[ \t]{2,}')
URL_WHITESPACE = re.compile(r'[\s\x00-\x1f\x7f]')


class InputSanitizer:
    """
    Main sanitizer class for cleaning user input.
    """

    @staticmethod
    def sanitize_text(value: Any, strip_tags: bool = True) -> Any:
        """
        Clean free text.

        Args:
            value: Input string to sanitize
            strip_tags: If True, remove HTML tags

        Returns:
            Sanitized string, or the value unchanged when it is not a string
        """
        if not isinstance(value, str):
            return value

        if strip_tags:
            value = TAG_PATTERN.sub('', value)

        value = value.replace('\r\n', '\n').replace('\r', '\n')
        value = CONTROL_CHARS.sub('', value)
        value = SPACE_RUNS.sub(' ', value)

        return value.strip()

    @staticmethod
    def sanitize_url(value: Any) -> Any:
        """Trim a URL and drop embedded whitespace and control characters."""
        if not isinstance(value, str):
            return value

        return URL_WHITESPACE.sub('', value.strip())


def sanitize_fields(
    data: Dict[str, Any],
    text_fields: Iterable[str] = (),
    url_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    Return a shallow copy of ``data`` with the named fields sanitized.

    Tag stripping follows the STRIP_TAGS setting.
    """
    strip_tags = get_setting('STRIP_TAGS', True)
    cleaned = dict(data)

    for field_name in text_fields:
        if field_name in cleaned:
            cleaned[field_name] = InputSanitizer.sanitize_text(cleaned[field_name], strip_tags=strip_tags)

    for field_name in url_fields:
        if field_name in cleaned:
            cleaned[field_name] = InputSanitizer.sanitize_url(cleaned[field_name])

    return cleaned
