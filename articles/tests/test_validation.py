"""
Tests for the article validation phase.
"""

from django.test import SimpleTestCase, override_settings

from articles.models import SOURCE_URL_MAX_LENGTH
from articles.validation import (
    validate_article_filters,
    validate_article_id,
    validate_article_payload,
    validate_article_update,
    validate_status,
    validate_status_change,
)
from input_validation.errors import ValidationErrors


class ArticleIdTests(SimpleTestCase):

    def test_valid_ids(self):
        for raw, expected in (('1', 1), (42, 42), ('9223372036854775807', 2 ** 63 - 1)):
            with self.subTest(raw=raw):
                errors = ValidationErrors()
                self.assertEqual(validate_article_id(raw, errors), expected)
                self.assertFalse(errors)

    def test_invalid_ids(self):
        cases = [
            ('abc', 'invalid_integer'),
            ('1.0', 'invalid_integer'),
            ("1' OR '1'='1", 'invalid_integer'),
            ('0', 'min_value'),
            ('-4', 'min_value'),
            ('9223372036854775808', 'max_value'),
            ('\u0663', 'invalid_integer'),
            ('9' * 5000, 'max_digits'),
        ]
        for raw, code in cases:
            with self.subTest(raw=raw):
                errors = ValidationErrors()
                self.assertIsNone(validate_article_id(raw, errors))
                self.assertEqual(errors.codes('id'), [code])


class StatusTests(SimpleTestCase):

    def test_allowed_statuses(self):
        for value in ('Draft', 'Published', 'Private'):
            with self.subTest(value=value):
                errors = ValidationErrors()
                self.assertEqual(validate_status(value, errors), value)
                self.assertFalse(errors)

    def test_rejected_statuses(self):
        for value in ('draft', 'Archived', '', None, ['Draft']):
            with self.subTest(value=value):
                errors = ValidationErrors()
                self.assertIsNone(validate_status(value, errors))
                self.assertEqual(errors.codes('status'), ['invalid_choice'])


class ArticlePayloadTests(SimpleTestCase):

    def test_valid_create(self):
        errors = ValidationErrors()
        cleaned = validate_article_payload(
            {
                'title': '  Why validate input?  ',
                'body': 'Because <em>controllers</em> are the entry point.',
                'status': 'Published',
                'source_url': ' https://example.com/post ',
            },
            errors,
        )
        self.assertFalse(errors)
        self.assertEqual(
            cleaned,
            {
                'title': 'Why validate input?',
                'body': 'Because controllers are the entry point.',
                'status': 'Published',
                'source_url': 'https://example.com/post',
            },
        )

    def test_status_optional_on_create(self):
        errors = ValidationErrors()
        cleaned = validate_article_payload({'title': 'T', 'body': 'B'}, errors)
        self.assertFalse(errors)
        self.assertNotIn('status', cleaned)

    def test_all_errors_reported_together(self):
        """One pass reports every problem, not just the first."""
        errors = ValidationErrors()
        validate_article_payload(
            {
                'body': 'x' * 20001,
                'status': 'draft',
                'source_url': 'http://127.0.0.1/admin',
                'author': 'mallory',
            },
            errors,
        )
        self.assertEqual(
            sorted(errors.fields()),
            ['author', 'body', 'source_url', 'status', 'title'],
        )
        self.assertEqual(errors.codes('title'), ['required'])
        self.assertEqual(errors.codes('body'), ['max_length'])
        self.assertEqual(errors.codes('status'), ['invalid_choice'])
        self.assertEqual(errors.codes('source_url'), ['localhost_not_allowed'])
        self.assertEqual(errors.codes('author'), ['unknown_field'])

    def test_required_not_doubled(self):
        """A blank required field is reported once."""
        errors = ValidationErrors()
        validate_article_payload({'title': '   ', 'body': 'B'}, errors)
        self.assertEqual(errors.codes('title'), ['required'])

    def test_tags_only_title_is_blank(self):
        errors = ValidationErrors()
        validate_article_payload({'title': '<b></b>', 'body': 'B'}, errors)
        self.assertEqual(errors.codes('title'), ['blank'])

    def test_script_url_in_body_rejected(self):
        errors = ValidationErrors()
        validate_article_payload({'title': 'T', 'body': 'click javascript:alert(1)'}, errors)
        self.assertEqual(errors.codes('body'), ['markup_not_allowed'])

    @override_settings(INPUT_VALIDATION={'STRIP_TAGS': False})
    def test_markup_rejected_when_not_stripped(self):
        errors = ValidationErrors()
        validate_article_payload({'title': 'T', 'body': '<script>alert(1)</script>'}, errors)
        self.assertEqual(errors.codes('body'), ['markup_not_allowed'])

    @override_settings(INPUT_VALIDATION={'STRIP_TAGS': False, 'REJECT_MARKUP': False})
    def test_markup_allowed_when_disabled(self):
        errors = ValidationErrors()
        cleaned = validate_article_payload({'title': 'T', 'body': '<script>x</script>'}, errors)
        self.assertFalse(errors)
        self.assertEqual(cleaned['body'], '<script>x</script>')

    @override_settings(INPUT_VALIDATION={'ARTICLE': {'TITLE_MAX_LENGTH': 10}})
    def test_title_limit_from_settings(self):
        errors = ValidationErrors()
        validate_article_payload({'title': 'A much longer title', 'body': 'B'}, errors)
        self.assertEqual(errors.codes('title'), ['max_length'])

    def test_blank_source_url_clears(self):
        errors = ValidationErrors()
        cleaned = validate_article_payload({'title': 'T', 'body': 'B', 'source_url': ''}, errors)
        self.assertFalse(errors)
        self.assertEqual(cleaned['source_url'], '')

    def test_source_url_length(self):
        errors = ValidationErrors()
        long_url = 'https://example.com/' + 'a' * SOURCE_URL_MAX_LENGTH
        validate_article_payload({'title': 'T', 'body': 'B', 'source_url': long_url}, errors)
        self.assertEqual(errors.codes('source_url'), ['max_length'])

    def test_non_object_payload(self):
        errors = ValidationErrors()
        self.assertEqual(validate_article_payload(['title'], errors), {})
        self.assertEqual(errors.as_list()[0]['code'], 'invalid_payload')
        self.assertEqual(len(errors), 1)

    def test_partial_update(self):
        errors = ValidationErrors()
        cleaned = validate_article_payload({'status': 'Private'}, errors, partial=True)
        self.assertFalse(errors)
        self.assertEqual(cleaned, {'status': 'Private'})

    def test_empty_update(self):
        errors = ValidationErrors()
        validate_article_payload({}, errors, partial=True)
        self.assertEqual(errors.codes('non_field_errors'), ['empty_update'])

    def test_partial_update_blank_title(self):
        errors = ValidationErrors()
        validate_article_payload({'title': ''}, errors, partial=True)
        self.assertEqual(errors.codes('title'), ['blank'])


class StatusChangeTests(SimpleTestCase):

    def test_valid(self):
        errors = ValidationErrors()
        cleaned = validate_status_change({'status': 'Published'}, errors, article_id='7')
        self.assertFalse(errors)
        self.assertEqual(cleaned, {'id': 7, 'status': 'Published'})

    def test_id_and_status_both_reported(self):
        errors = ValidationErrors()
        validate_status_change({'status': 'Archived'}, errors, article_id='seven')
        self.assertEqual(errors.fields(), ['id', 'status'])

    def test_missing_status(self):
        errors = ValidationErrors()
        validate_status_change({}, errors, article_id='1')
        self.assertEqual(errors.codes('status'), ['required'])

    def test_extra_fields(self):
        errors = ValidationErrors()
        validate_status_change({'status': 'Draft', 'published_at': 'now'}, errors, article_id='1')
        self.assertEqual(errors.codes('published_at'), ['unknown_field'])

    def test_unknown_key_without_status(self):
        errors = ValidationErrors()
        validate_status_change({'state': 'Draft'}, errors, article_id='1')
        self.assertEqual(errors.fields(), ['state', 'status'])
        self.assertEqual(errors.codes(), ['unknown_field', 'required'])

    def test_update_checks_id_and_body_together(self):
        errors = ValidationErrors()
        validate_article_update({'status': 'nope'}, errors, article_id='0')
        self.assertEqual(errors.fields(), ['id', 'status'])


class FilterTests(SimpleTestCase):

    def test_filters(self):
        errors = ValidationErrors()
        self.assertEqual(validate_article_filters({'status': 'Draft'}, errors), {'status': 'Draft'})
        self.assertEqual(validate_article_filters({}, errors), {})
        self.assertFalse(errors)

    def test_bad_filters(self):
        errors = ValidationErrors()
        validate_article_filters({'status': 'all', 'page': '2'}, errors)
        self.assertEqual(errors.fields(), ['page', 'status'])
