"""
Error-accumulating validators.

Every check follows the same contract:
- takes the raw value, the shared ``ValidationErrors`` and the field name
- appends at most one entry when the value is unacceptable
- returns the cleaned value, or None when the value was rejected

Checks never raise on bad input, so a controller can run all of them and
report every problem in a single 400 response.
"""

import ipaddress
import re
from typing import Any, Dict, Iterable, Optional, Sequence
from urllib.parse import urlparse

from django.utils.translation import gettext as _

from .errors import NON_FIELD_ERRORS, ValidationErrors

INTEGER_PATTERN = re.compile(r'-?[0-9]+')
# Python refuses int() on strings longer than 4300 digits
MAX_INTEGER_DIGITS = 64

MARKUP_PATTERNS = [
    re.compile(r'<\s*script[^>]*>', re.IGNORECASE),   # Script tags
    re.compile(r'javascript\s*:', re.IGNORECASE),      # JavaScript protocol
    re.compile(r'vbscript\s*:', re.IGNORECASE),        # VBScript protocol
    re.compile(r'\bon\w+\s*=', re.IGNORECASE),         # Event handlers (onclick, onload, etc.)
    re.compile(r'<\s*(iframe|object|embed|applet)[^>]*>', re.IGNORECASE),
    re.compile(r'data:text/html', re.IGNORECASE),      # Data URLs
]

LOCALHOST_NAMES = {'localhost', 'localhost.localdomain', 'ip6-localhost'}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(data: Dict[str, Any], field: str, errors: ValidationErrors) -> Any:
    """Check that ``field`` is present in ``data`` and not blank."""
    value = data.get(field)
    if _is_blank(value):
        errors.add(field, _('This field is required.'), code='required')
        return None
    return value


def validate_object(data: Any, errors: ValidationErrors) -> Dict[str, Any]:
    """The request payload itself must be a JSON object."""
    if not isinstance(data, dict):
        errors.add(
            NON_FIELD_ERRORS,
            _('Expected a JSON object.'),
            code='invalid_payload',
        )
        return {}
    return data


def reject_unknown(data: Dict[str, Any], allowed: Iterable[str], errors: ValidationErrors) -> None:
    allowed = set(allowed)
    for key in data:
        if key not in allowed:
            errors.add(key, _('Unknown field.'), code='unknown_field')


def reject_repeated(query, errors: ValidationErrors) -> None:
    """Query parameters must appear at most once; ``QueryDict.dict()`` would keep the last."""
    for key, values in query.lists():
        if len(values) > 1:
            errors.add(key, _('Parameter given more than once.'), code='duplicate_parameter')


def validate_integer(
    value: Any,
    errors: ValidationErrors,
    field: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """
    Accept ints and ASCII decimal digit strings. Booleans are not integers
    here, and strings with more than MAX_INTEGER_DIGITS significant digits
    are rejected before conversion.
    """
    int_value = None
    if isinstance(value, int) and not isinstance(value, bool):
        int_value = value
    elif isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        text = value.strip()
        if len(text.lstrip('-').lstrip('0')) > MAX_INTEGER_DIGITS:
            errors.add(
                field,
                _('Ensure that there are no more than %(limit)s digits.') % {'limit': MAX_INTEGER_DIGITS},
                code='max_digits',
            )
            return None
        int_value = int(text)

    if int_value is None:
        errors.add(field, _('A valid integer is required.'), code='invalid_integer')
        return None

    if min_value is not None and int_value < min_value:
        errors.add(
            field,
            _('Ensure this value is greater than or equal to %(limit)s.') % {'limit': min_value},
            code='min_value',
        )
        return None

    if max_value is not None and int_value > max_value:
        errors.add(
            field,
            _('Ensure this value is less than or equal to %(limit)s.') % {'limit': max_value},
            code='max_value',
        )
        return None

    return int_value


def validate_choice(
    value: Any,
    choices: Sequence[str],
    errors: ValidationErrors,
    field: str,
) -> Optional[str]:
    """Exact, case-sensitive membership in a closed set of values."""
    if not isinstance(value, str) or value not in choices:
        errors.add(
            field,
            _('"%(value)s" is not a valid choice. Must be one of: %(choices)s.') % {
                'value': value,
                'choices': ', '.join(choices),
            },
            code='invalid_choice',
        )
        return None
    return value


def validate_string(
    value: Any,
    errors: ValidationErrors,
    field: str,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    allow_blank: bool = False,
) -> Optional[str]:
    if not isinstance(value, str):
        errors.add(field, _('Expected a string.'), code='invalid_type')
        return None

    value = value.strip()

    if not value:
        if allow_blank:
            return value
        errors.add(field, _('This field may not be blank.'), code='blank')
        return None

    if min_length is not None and len(value) < min_length:
        errors.add(
            field,
            _('Ensure this field has at least %(limit)s characters.') % {'limit': min_length},
            code='min_length',
        )
        return None

    if max_length is not None and len(value) > max_length:
        errors.add(
            field,
            _('Ensure this field has no more than %(limit)s characters.') % {'limit': max_length},
            code='max_length',
        )
        return None

    return value


def validate_no_markup(value: Any, errors: ValidationErrors, field: str) -> Any:
    """Reject HTML/JavaScript injection patterns in free text."""
    if not isinstance(value, str):
        return value

    for pattern in MARKUP_PATTERNS:
        if pattern.search(value):
            errors.add(
                field,
                _('Input contains HTML or JavaScript that is not allowed.'),
                code='markup_not_allowed',
            )
            return None
    return value


def validate_safe_url(
    value: Any,
    errors: ValidationErrors,
    field: str,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """
    Validate a URL that the server may later fetch.

    Rules:
    - Only http:// and https:// schemes
    - A hostname is required
    - No localhost, loopback, private or link-local addresses
    - At most ``max_length`` characters when given
    """
    if not isinstance(value, str) or not value.strip():
        errors.add(field, _('Enter a valid URL.'), code='invalid_url')
        return None

    value = value.strip()
    if max_length is not None and len(value) > max_length:
        errors.add(
            field,
            _('Ensure this field has no more than %(limit)s characters.') % {'limit': max_length},
            code='max_length',
        )
        return None

    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError:
        errors.add(field, _('Enter a valid URL.'), code='invalid_url')
        return None

    if parsed.scheme not in ('http', 'https'):
        errors.add(field, _('Only HTTP and HTTPS URLs are allowed.'), code='invalid_protocol')
        return None

    if not hostname:
        errors.add(field, _('URL must include a hostname.'), code='missing_hostname')
        return None

    hostname = hostname.lower()
    if hostname in LOCALHOST_NAMES:
        errors.add(field, _('URLs pointing to localhost are not allowed.'), code='localhost_not_allowed')
        return None

    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return value

    if address.is_loopback or address.is_unspecified:
        errors.add(field, _('URLs pointing to localhost are not allowed.'), code='localhost_not_allowed')
        return None

    if address.is_private or address.is_link_local or address.is_reserved:
        errors.add(
            field,
            _('URLs pointing to private IP addresses are not allowed.'),
            code='private_ip_not_allowed',
        )
        return None

    return value
