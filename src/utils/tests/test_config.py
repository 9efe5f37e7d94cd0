"""Tests for Settings and duration parsing."""

import os
import unittest
from datetime import timedelta
from unittest.mock import patch

from utils.config import Settings, parse_duration


class TestParseDuration(unittest.TestCase):

    def test_units(self):
        self.assertEqual(parse_duration('24h'), timedelta(hours=24))
        self.assertEqual(parse_duration('7d'), timedelta(days=7))
        self.assertEqual(parse_duration('30m'), timedelta(minutes=30))
        self.assertEqual(parse_duration('45s'), timedelta(seconds=45))
        self.assertEqual(parse_duration('3600'), timedelta(hours=1))

    def test_invalid(self):
        for value in ('', 'h', '1w', '-5m', 'soon'):
            with self.assertRaises(ValueError, msg=value):
                parse_duration(value)


class TestSettingsFromEnv(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        settings = Settings.from_env()

        self.assertIsNone(settings.jwt_secret_key)
        self.assertEqual(settings.jwt_algorithm, 'HS256')
        self.assertEqual(settings.jwt_expires_in, timedelta(hours=24))
        self.assertEqual(settings.mongodb_database, 'auth_service')
        self.assertEqual(settings.frontend_url, 'http://localhost:3001')
        self.assertEqual(settings.cors_origins, '*')
        self.assertEqual(settings.port, 8000)

    @patch.dict(os.environ, {
        'JWT_SECRET_KEY': 'abc',
        'JWT_EXPIRES_IN': '1h',
        'MONGO_URL': 'mongodb://localhost:27017',
        'FRONTEND_URL': 'https://app.example.com/',
        'LOG_LEVEL': 'debug',
        'PORT': '9000',
    }, clear=True)
    def test_overrides(self):
        settings = Settings.from_env()

        self.assertEqual(settings.jwt_secret_key, 'abc')
        self.assertEqual(settings.jwt_expires_in, timedelta(hours=1))
        self.assertEqual(settings.mongo_url, 'mongodb://localhost:27017')
        self.assertEqual(settings.frontend_url, 'https://app.example.com')
        self.assertEqual(settings.log_level, 'DEBUG')
        self.assertEqual(settings.port, 9000)

    @patch.dict(os.environ, {'JWT_SECRET_KEY': ''}, clear=True)
    def test_empty_secret_is_unset(self):
        self.assertIsNone(Settings.from_env().jwt_secret_key)


if __name__ == '__main__':
    unittest.main()
