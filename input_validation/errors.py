"""
Error collection for the validation phase.

Validation checks never raise on bad input. They append an entry to a shared
``ValidationErrors`` instance that the caller created, and the caller decides
what to do once every check has run:

    errors = ValidationErrors()
    title = validate_string(data.get('title'), errors, 'title', max_length=200)
    status = validate_choice(data.get('status'), ArticleStatus.values, errors, 'status')
    if errors:
        return validation_error_response(errors)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

NON_FIELD_ERRORS = 'non_field_errors'


@dataclass(frozen=True)
class ErrorEntry:
    """A single validation problem attached to a field."""

    field: str
    code: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {'field': self.field, 'code': self.code, 'message': self.message}


class InputValidationError(Exception):
    """
    Raised by ``ValidationErrors.raise_if_any`` for callers outside the
    request/response cycle (management commands, services called from code).
    """

    def __init__(self, errors: 'ValidationErrors'):
        self.errors = errors
        super().__init__('; '.join(f'{e.field}: {e.message}' for e in errors))


class ValidationErrors:
    """
    Ordered collection of ``ErrorEntry`` objects.

    An empty collection is falsy, so ``if errors:`` reads as
    "did validation fail?".
    """

    def __init__(self, entries: Optional[Iterable[ErrorEntry]] = None):
        self._entries: List[ErrorEntry] = list(entries or [])

    def add(self, field: str, message: str, code: str = 'invalid') -> None:
        self._entries.append(ErrorEntry(field=field, code=code, message=str(message)))

    def extend(self, other: Iterable[ErrorEntry]) -> None:
        for entry in other:
            self._entries.append(entry)

    def has(self, field: str) -> bool:
        return any(entry.field == field for entry in self._entries)

    def fields(self) -> List[str]:
        """Field names in first-seen order, without duplicates."""
        seen: List[str] = []
        for entry in self._entries:
            if entry.field not in seen:
                seen.append(entry.field)
        return seen

    def codes(self, field: Optional[str] = None) -> List[str]:
        return [e.code for e in self._entries if field is None or e.field == field]

    def as_list(self) -> List[Dict[str, str]]:
        return [entry.as_dict() for entry in self._entries]

    def raise_if_any(self) -> None:
        if self._entries:
            raise InputValidationError(self)

    @classmethod
    def from_serializer_errors(cls, detail: Union[Dict[str, Any], List[Any]]) -> 'ValidationErrors':
        """
        Flatten DRF ``serializer.errors`` into a ``ValidationErrors``.

        Nested serializer errors are joined with dots (``author.name``) and
        list indices become path segments (``tags.0``).
        """
        errors = cls()
        _flatten_detail(detail, '', errors)
        return errors

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self.has(field)

    def __repr__(self) -> str:
        return f'<ValidationErrors {self.as_list()!r}>'


def _flatten_detail(detail: Any, path: str, errors: ValidationErrors) -> None:
    if isinstance(detail, dict):
        for key, value in detail.items():
            child = str(key) if not path else f'{path}.{key}'
            _flatten_detail(value, child, errors)
    elif isinstance(detail, (list, tuple)):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list, tuple)):
                _flatten_detail(item, f'{path}.{index}' if path else str(index), errors)
            else:
                _flatten_detail(item, path, errors)
    else:
        # ErrorDetail is a str subclass carrying a ``code`` attribute
        code = getattr(detail, 'code', None) or 'invalid'
        errors.add(path or NON_FIELD_ERRORS, str(detail), code=code)
