import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from crypto_screener.config.settings import Settings
from crypto_screener.schemas.ticker import FieldKey


class TestScreenerSettings(unittest.TestCase):
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.SCREENER_API_URL, "https://api.coinlore.net/api")
        self.assertEqual(settings.SCREENER_REQUEST_TIMEOUT_SEC, 5.0)
        self.assertEqual(settings.SCREENER_DEFAULT_SORT_FIELD, FieldKey.VOLUME_24H)
        self.assertEqual(settings.SCREENER_NAME_WIDTH, 30)

    def test_env_overrides(self):
        env = {
            "SCREENER_API_URL": "https://example.test/api",
            "SCREENER_REQUEST_TIMEOUT_SEC": "2.5",
            "SCREENER_DEFAULT_SORT_FIELD": "percent_change_24h",
            "SCREENER_NAME_WIDTH": "12",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.SCREENER_API_URL, "https://example.test/api")
        self.assertEqual(settings.SCREENER_REQUEST_TIMEOUT_SEC, 2.5)
        self.assertEqual(settings.SCREENER_DEFAULT_SORT_FIELD, FieldKey.PERCENT_CHANGE_24H)
        self.assertEqual(settings.SCREENER_NAME_WIDTH, 12)

    def test_empty_default_sort_means_unsorted(self):
        with patch.dict(os.environ, {"SCREENER_DEFAULT_SORT_FIELD": "  "}, clear=True):
            settings = Settings.from_env()

        self.assertIsNone(settings.SCREENER_DEFAULT_SORT_FIELD)

    def test_invalid_values_fail_validation(self):
        for env in (
            {"SCREENER_DEFAULT_SORT_FIELD": "market_cap"},
            {"SCREENER_REQUEST_TIMEOUT_SEC": "0"},
            {"SCREENER_NAME_WIDTH": "abc"},
        ):
            with patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ValidationError):
                    Settings.from_env()


if __name__ == "__main__":
    unittest.main()
