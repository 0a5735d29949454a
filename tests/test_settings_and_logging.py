import json
import os
import unittest
from unittest import mock

from app.config import Settings
from app.logging_config import REDACTED, redact_sensitive


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.PORT, 3000)
        self.assertEqual(settings.ORDER_MIN_AMOUNT, 100)
        self.assertEqual(settings.ORDER_ALLOWED_CURRENCIES, ["INR"])
        self.assertEqual(settings.RAZORPAY_TIMEOUT_SECONDS, 10.0)
        self.assertFalse(settings.razorpay_configured)

    def test_reads_environment(self):
        env = {
            "RAZORPAY_KEY_ID": "rzp_test_key",
            "RAZORPAY_KEY_SECRET": "s3cr3t",
            "ALLOWED_ORIGINS": "https://app.yeetfit.in, https://admin.yeetfit.in",
            "ORDER_ALLOWED_CURRENCIES": "INR,USD",
            "PORT": "8080",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertTrue(settings.razorpay_configured)
        self.assertEqual(settings.ALLOWED_ORIGINS, ["https://app.yeetfit.in", "https://admin.yeetfit.in"])
        self.assertEqual(settings.ORDER_ALLOWED_CURRENCIES, ["INR", "USD"])
        self.assertEqual(settings.PORT, 8080)

    def test_blank_credentials_count_as_missing(self):
        with mock.patch.dict(os.environ, {"RAZORPAY_KEY_ID": "rzp", "RAZORPAY_KEY_SECRET": "  "}, clear=True):
            settings = Settings(_env_file=None)
        self.assertIsNone(settings.RAZORPAY_KEY_SECRET)
        self.assertFalse(settings.razorpay_configured)

    def test_describe_never_includes_secret(self):
        settings = Settings(_env_file=None, RAZORPAY_KEY_ID="rzp_test_key", RAZORPAY_KEY_SECRET="s3cr3t")
        summary = settings.describe()
        self.assertTrue(summary["key_secret_present"])
        self.assertNotIn("s3cr3t", json.dumps(summary))


class TestRedaction(unittest.TestCase):
    def test_masks_top_level_and_nested_keys(self):
        event = redact_sensitive(None, "info", {
            "event": "razorpay_call",
            "key_secret": "s3cr3t",
            "headers": {"Authorization": "Basic abc", "Accept": "application/json"},
            "order_id": "order_abc",
        })
        self.assertEqual(event["key_secret"], REDACTED)
        self.assertEqual(event["headers"]["Authorization"], REDACTED)
        self.assertEqual(event["headers"]["Accept"], "application/json")
        self.assertEqual(event["order_id"], "order_abc")


if __name__ == "__main__":
    unittest.main()
