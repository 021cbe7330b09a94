#!/usr/bin/env python3
import importlib
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from app.validation import format_errors, load_settings


class TestSettings(unittest.TestCase):
    def setUp(self):
        fd, self.token_path = tempfile.mkstemp(suffix='.json')
        os.close(fd)
        self.addCleanup(os.remove, self.token_path)
        self.env = {
            "TWILIO_ACCOUNT_SID": "AC" + "0123456789abcdef" * 2,
            "TWILIO_AUTH_SID": "SK" + "fedcba9876543210" * 2,
            "TWILIO_AUTH_TOKEN": "token",
            "TWILIO_FROM_NUMBER": "+33700000000",
            "GOOGLE_SHEET_ID": "1AbC-def_123",
            "GOOGLE_TOKEN_PATH": self.token_path,
            "PORT": "",
            "SENTRY_DSN": "",
        }

    def load(self):
        with patch.dict(os.environ, self.env, clear=True):
            return load_settings()

    def errors(self):
        with self.assertRaises(ValidationError) as ctx:
            self.load()
        return format_errors(ctx.exception)

    def test_valid_settings_with_defaults(self):
        settings = self.load()
        self.assertEqual(settings.port, 9080)
        self.assertEqual(settings.short_cache_ttl_seconds, 600)
        self.assertEqual(settings.twilio_timeout_seconds, 10)
        self.assertEqual(settings.google_sheet_range, "A2:D")
        self.assertEqual(settings.google_token_path, Path(self.token_path))
        self.assertFalse(settings.debug_mode)

    def test_typed_overrides(self):
        self.env.update({"PORT": "65535", "SHORT_CACHE_TTL_SECONDS": "60", "DEBUG_MODE": "true"})
        settings = self.load()
        self.assertEqual(settings.port, 65535)
        self.assertEqual(settings.short_cache_ttl_seconds, 60)
        self.assertTrue(settings.debug_mode)

    def test_missing_required(self):
        self.env = {}
        errors = self.errors()
        for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "GOOGLE_TOKEN_PATH"):
            self.assertTrue(any(e.startswith(name) for e in errors), errors)

    def test_invalid_formats(self):
        self.env.update({
            "TWILIO_ACCOUNT_SID": "ac0123",
            "TWILIO_FROM_NUMBER": "0700000000",
            "GOOGLE_SHEET_ID": "bad id!",
            "PORT": "65536",
        })
        errors = self.errors()
        self.assertEqual(len(errors), 4, errors)

    def test_unicode_digits_rejected_in_from_number(self):
        self.env["TWILIO_FROM_NUMBER"] = "+3٣٣٦١١١١١١"
        errors = self.errors()
        self.assertTrue(errors[0].startswith("TWILIO_FROM_NUMBER"), errors)

    def test_non_integer_values_are_validation_errors(self):
        self.env.update({"PORT": "abc", "SHORT_CACHE_TTL_SECONDS": "ten", "TWILIO_TIMEOUT_SECONDS": "1.5s"})
        errors = self.errors()
        self.assertEqual(len(errors), 3, errors)
        self.assertTrue(any(e.startswith("PORT") for e in errors), errors)

    def test_token_path_must_exist(self):
        self.env["GOOGLE_TOKEN_PATH"] = self.token_path + ".missing"
        errors = self.errors()
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("GOOGLE_TOKEN_PATH"))


class TestStartup(unittest.TestCase):
    def test_bad_port_exits_with_validation_message(self):
        sys.modules.pop('main', None)
        self.addCleanup(sys.modules.pop, 'main', None)
        with patch.dict(os.environ, {"PORT": "abc"}, clear=True):
            with self.assertLogs('main', level='ERROR') as logs:
                with self.assertRaises(SystemExit) as ctx:
                    importlib.import_module('main')
        self.assertEqual(ctx.exception.code, 1)
        output = "\n".join(logs.output)
        self.assertIn("PORT", output)
        self.assertIn("Parameters validation failed", output)


if __name__ == '__main__':
    unittest.main()
