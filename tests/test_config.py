#!/usr/bin/env python3
"""
Tests for configuration loading
"""

import importlib
import unittest
import sys
import os
from unittest.mock import patch

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import config


class TestConfig(unittest.TestCase):
    """Test cases for configuration loading"""

    def tearDown(self):
        importlib.reload(config)

    def test_config_values(self):
        """Test that config values have expected types"""
        self.assertIsInstance(config.DEFAULT_MODEL, str)
        self.assertIsInstance(config.GETIMG_API_URL, str)
        self.assertIsInstance(config.GETIMG_TIMEOUT, float)
        self.assertIsInstance(config.LOG_TO_FILE, bool)
        self.assertTrue(config.GETIMG_API_URL.startswith("http"))

    def test_defaults(self):
        """Test defaults when the environment is empty"""
        with patch.dict(os.environ, {}, clear=True), patch("dotenv.load_dotenv"):
            importlib.reload(config)
            self.assertIsNone(config.GETIMG_API_KEY)
            self.assertEqual(config.DEFAULT_MODEL, "lcm-realistic-vision-v5-1")
            self.assertEqual(config.GETIMG_API_URL, "https://api.getimg.ai/v1")
            self.assertEqual(config.GETIMG_TIMEOUT, 60.0)
            self.assertFalse(config.LOG_TO_FILE)

    def test_environment_overrides(self):
        """Test that environment variables override defaults"""
        env = {
            "GETIMG_API_KEY": "key-from-env",
            "GETIMG_MODEL": "dream-shaper-v8",
            "GETIMG_TIMEOUT": "12.5",
            "LOG_TO_FILE": "TRUE",
        }
        with patch.dict(os.environ, env, clear=True), patch("dotenv.load_dotenv"):
            importlib.reload(config)
            self.assertEqual(config.GETIMG_API_KEY, "key-from-env")
            self.assertEqual(config.DEFAULT_MODEL, "dream-shaper-v8")
            self.assertEqual(config.GETIMG_TIMEOUT, 12.5)
            self.assertTrue(config.LOG_TO_FILE)


if __name__ == '__main__':
    unittest.main()
