"""
Tests for the validation error collection.
"""

from django.test import SimpleTestCase
from rest_framework import serializers

from input_validation.errors import (
    ErrorEntry,
    InputValidationError,
    ValidationErrors,
)


class ValidationErrorsTests(SimpleTestCase):
    """Tests for ValidationErrors."""

    def test_empty_is_falsy(self):
        """A fresh collection means validation passed."""
        errors = ValidationErrors()
        self.assertFalse(errors)
        self.assertEqual(len(errors), 0)
        self.assertEqual(errors.as_list(), [])

    def test_entries_keep_insertion_order(self):
        """Entries are reported in the order checks ran."""
        errors = ValidationErrors()
        errors.add('title', 'Too long.', code='max_length')
        errors.add('status', 'Bad choice.', code='invalid_choice')
        errors.add('title', 'Has markup.', code='markup_not_allowed')

        self.assertTrue(errors)
        self.assertEqual(
            errors.as_list(),
            [
                {'field': 'title', 'code': 'max_length', 'message': 'Too long.'},
                {'field': 'status', 'code': 'invalid_choice', 'message': 'Bad choice.'},
                {'field': 'title', 'code': 'markup_not_allowed', 'message': 'Has markup.'},
            ],
        )
        self.assertEqual(errors.fields(), ['title', 'status'])
        self.assertEqual(errors.codes('title'), ['max_length', 'markup_not_allowed'])

    def test_shared_by_reference(self):
        """Checks mutate the caller's collection."""
        def check(errors):
            errors.add('id', 'Bad id.')

        errors = ValidationErrors()
        check(errors)
        self.assertIn('id', errors)
        self.assertEqual(errors.codes(), ['invalid'])

    def test_extend(self):
        first = ValidationErrors([ErrorEntry('a', 'required', 'x')])
        second = ValidationErrors()
        second.add('b', 'y')
        first.extend(second)
        self.assertEqual(first.fields(), ['a', 'b'])

    def test_raise_if_any(self):
        """raise_if_any is a no-op when empty and raises otherwise."""
        errors = ValidationErrors()
        errors.raise_if_any()

        errors.add('status', 'Bad choice.', code='invalid_choice')
        with self.assertRaises(InputValidationError) as ctx:
            errors.raise_if_any()
        self.assertIs(ctx.exception.errors, errors)
        self.assertIn('status: Bad choice.', str(ctx.exception))


class FromSerializerErrorsTests(SimpleTestCase):
    """Tests for flattening DRF serializer errors."""

    def test_flat_field_errors_keep_codes(self):
        class Sample(serializers.Serializer):
            name = serializers.CharField(max_length=3)
            kind = serializers.ChoiceField(choices=['a', 'b'])

        serializer = Sample(data={'name': 'toolong', 'kind': 'c'})
        self.assertFalse(serializer.is_valid())

        errors = ValidationErrors.from_serializer_errors(serializer.errors)
        self.assertEqual(errors.codes('name'), ['max_length'])
        self.assertEqual(errors.codes('kind'), ['invalid_choice'])

    def test_nested_and_non_field_errors(self):
        detail = {
            'author': {'name': ['This field is required.']},
            'tags': [{}, {'label': ['Too long.']}],
            'non_field_errors': ['Mismatch.'],
        }
        errors = ValidationErrors.from_serializer_errors(detail)
        self.assertEqual(errors.fields(), ['author.name', 'tags.1.label', 'non_field_errors'])

    def test_plain_list_becomes_non_field_errors(self):
        errors = ValidationErrors.from_serializer_errors(['Invalid data.'])
        self.assertEqual(errors.fields(), ['non_field_errors'])
