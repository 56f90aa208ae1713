"""
Unit tests for task payload validation.
"""
from django.test import SimpleTestCase

from apps.tasks.validators import (
    validate_completed,
    validate_description,
    validate_task_create,
    validate_task_patch,
)


class DescriptionValidationTest(SimpleTestCase):

    def test_trims_valid_description(self):
        result = validate_description("  Buy milk  ")
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data, {"description": "Buy milk"})

    def test_rejects_null_empty_and_blank(self):
        for value in (None, "", "   "):
            with self.subTest(value=value):
                result = validate_description(value)
                self.assertFalse(result.valid)
                self.assertIn("description", result.errors)

    def test_rejects_non_string(self):
        self.assertFalse(validate_description(42).valid)


class CompletedValidationTest(SimpleTestCase):

    def test_accepts_booleans_only(self):
        self.assertTrue(validate_completed(True).valid)
        self.assertTrue(validate_completed(False).valid)
        for value in ("true", 1, None):
            with self.subTest(value=value):
                self.assertFalse(validate_completed(value).valid)


class CreateValidationTest(SimpleTestCase):

    def test_completed_defaults_to_false(self):
        result = validate_task_create({"description": "Write report"})
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data, {"description": "Write report", "completed": False})

    def test_missing_description(self):
        result = validate_task_create({"completed": True})
        self.assertFalse(result.valid)
        self.assertIn("description", result.errors)

    def test_owner_field_rejected(self):
        result = validate_task_create({"description": "x", "owner": "someone-else"})
        self.assertFalse(result.valid)
        self.assertIn("owner", result.errors)


class PatchValidationTest(SimpleTestCase):

    def test_allowed_fields(self):
        result = validate_task_patch({"completed": True, "description": " Renamed "})
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data, {"completed": True, "description": "Renamed"})

    def test_empty_patch_is_valid(self):
        result = validate_task_patch({})
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data, {})

    def test_unknown_field_rejected(self):
        result = validate_task_patch({"completed": True, "location": "Home"})
        self.assertFalse(result.valid)
        self.assertIn("location", result.errors)
        self.assertNotIn("completed", result.errors)

    def test_null_description_rejected(self):
        result = validate_task_patch({"description": None})
        self.assertFalse(result.valid)
        self.assertIn("description", result.errors)
