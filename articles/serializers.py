"""
DRF serializers for articles.

The serializer variant of the validation phase: fields sanitize in
``to_internal_value`` and run error-accumulating checks as validators, and
the view calls ``is_valid()`` before touching business logic.
"""

from collections.abc import Mapping
from typing import Any

from rest_framework import serializers
from rest_framework.exceptions import ErrorDetail

from input_validation.conf import get_setting
from input_validation.errors import ValidationErrors
from input_validation.sanitizers import InputSanitizer
from input_validation.validators import validate_no_markup, validate_safe_url

from .models import SOURCE_URL_MAX_LENGTH, Article, ArticleStatus


def _run_check(check, value: Any, field_name: str) -> None:
    """Adapt an error-accumulating check to DRF's raising validator protocol."""
    errors = ValidationErrors()
    check(value, errors, field_name)
    if errors:
        entry = next(iter(errors))
        raise serializers.ValidationError(entry.message, code=entry.code)


class NoMarkupValidator:
    requires_context = True

    def __call__(self, value: Any, serializer_field) -> None:
        if get_setting("REJECT_MARKUP", True):
            _run_check(validate_no_markup, value, serializer_field.field_name)


class SafeURLValidator:
    requires_context = True

    def __call__(self, value: Any, serializer_field) -> None:
        if value:
            _run_check(validate_safe_url, value, serializer_field.field_name)


class SanitizedCharField(serializers.CharField):
    """
    CharField that strips tags and control characters before validation.
    """

    def __init__(self, *args, **kwargs):
        validators = kwargs.pop("validators", [])
        validators.append(NoMarkupValidator())
        kwargs["validators"] = validators

        super().__init__(*args, **kwargs)

    def to_internal_value(self, data: Any) -> str:
        # Sanitize before validation
        if isinstance(data, str):
            data = InputSanitizer.sanitize_text(data, strip_tags=get_setting("STRIP_TAGS", True))

        return super().to_internal_value(data)


class SafeURLField(serializers.CharField):
    """
    URL field with SSRF prevention and sanitization.
    """

    def __init__(self, *args, **kwargs):
        validators = kwargs.pop("validators", [])
        validators.append(SafeURLValidator())
        kwargs["validators"] = validators

        super().__init__(*args, **kwargs)

    def to_internal_value(self, data: Any) -> str:
        if isinstance(data, str):
            data = InputSanitizer.sanitize_url(data)

        return super().to_internal_value(data)


class RejectUnknownFieldsMixin:
    """
    Report keys that are not writable fields as ``unknown_field``, together
    with the regular field errors rather than instead of them.
    """

    def to_internal_value(self, data):
        unknown = {}
        if isinstance(data, Mapping):
            writable = {name for name, field in self.fields.items() if not field.read_only}
            unknown = {
                name: [ErrorDetail("Unknown field.", code="unknown_field")]
                for name in data
                if name not in writable
            }

        try:
            value = super().to_internal_value(data)
        except serializers.ValidationError as exc:
            if not unknown:
                raise
            raise serializers.ValidationError({**exc.detail, **unknown})

        if unknown:
            raise serializers.ValidationError(unknown)
        return value


class ArticleSerializer(RejectUnknownFieldsMixin, serializers.ModelSerializer):
    source_url = SafeURLField(required=False, allow_blank=True, max_length=SOURCE_URL_MAX_LENGTH)
    status = serializers.ChoiceField(
        choices=ArticleStatus.choices,
        default=ArticleStatus.DRAFT,
    )

    class Meta:
        model = Article
        fields = [
            "id",
            "title",
            "body",
            "source_url",
            "status",
            "created_at",
            "updated_at",
            "published_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at", "published_at"]

    def get_fields(self):
        # Length limits come from INPUT_VALIDATION each time the serializer is built
        fields = super().get_fields()
        fields["title"] = SanitizedCharField(
            min_length=get_setting("ARTICLE.TITLE_MIN_LENGTH"),
            max_length=get_setting("ARTICLE.TITLE_MAX_LENGTH"),
        )
        fields["body"] = SanitizedCharField(max_length=get_setting("ARTICLE.BODY_MAX_LENGTH"))
        return fields


class ArticleStatusSerializer(RejectUnknownFieldsMixin, serializers.Serializer):
    status = serializers.ChoiceField(choices=ArticleStatus.choices)
