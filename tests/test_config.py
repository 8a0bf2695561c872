"""
Tests for renum Configuration
=============================
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from renum.config import Settings, load_settings
from renum.errors import ConfigError, RenumError


class TestLoadSettings(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(load_settings({}), Settings("int32", "WARNING"))

    def test_environment(self):
        settings = load_settings({
            "RENUM_DEFAULT_UNDERLYING": "uint8",
            "RENUM_LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.default_underlying, "uint8")
        self.assertEqual(settings.log_level, "DEBUG")

    def test_blank_values_use_defaults(self):
        settings = load_settings({"RENUM_DEFAULT_UNDERLYING": "  ", "RENUM_LOG_LEVEL": ""})
        self.assertEqual(settings, Settings())

    def test_alias_accepted(self):
        self.assertEqual(load_settings({"RENUM_DEFAULT_UNDERLYING": "short"}).default_underlying,
                         "short")

    def test_invalid_underlying(self):
        with self.assertRaises(ConfigError):
            load_settings({"RENUM_DEFAULT_UNDERLYING": "double"})

    def test_invalid_log_level(self):
        with self.assertRaises(ConfigError) as ctx:
            load_settings({"RENUM_LOG_LEVEL": "LOUD"})
        self.assertIsInstance(ctx.exception, RenumError)


if __name__ == "__main__":
    unittest.main(verbosity=2)
