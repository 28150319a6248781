"""Tests for configuration management."""

import json
import os
import shutil
import tempfile
import unittest

import yaml

from money_tracker.utils.config_manager import ConfigManager
from money_tracker.models.core import ClassifierConfig


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, 'test_config.json')

    def tearDown(self):
        """Clean up test fixtures"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_config_loading(self):
        """Test loading default configuration when no file exists"""
        manager = ConfigManager(config_path=os.path.join(self.temp_dir, "nonexistent_file.json"))
        config = manager.load_config()

        self.assertIsInstance(config, ClassifierConfig)
        self.assertEqual(config.output_directory, "data")
        self.assertEqual(config.extra_candidate_keywords, [])
        self.assertEqual(config.extra_banks, {})
        self.assertEqual(config.extra_merchant_keywords, {})

    def test_json_config_loading(self):
        """Test loading configuration from JSON file"""
        test_config = {
            "output_directory": "out",
            "extra_candidate_keywords": ["received"],
            "extra_banks": {"FEDERAL": "Federal Bank"},
            "extra_merchant_keywords": {"irctc": "Travel"}
        }
        with open(self.config_file, 'w') as f:
            json.dump(test_config, f)

        config = ConfigManager(config_path=self.config_file).load_config()

        self.assertEqual(config.output_directory, "out")
        self.assertEqual(config.extra_candidate_keywords, ["received"])
        self.assertEqual(config.extra_banks["FEDERAL"], "Federal Bank")
        self.assertEqual(config.extra_merchant_keywords["irctc"], "Travel")

    def test_yaml_config_loading(self):
        """Test loading configuration from YAML file"""
        yaml_file = os.path.join(self.temp_dir, 'config.yml')
        with open(yaml_file, 'w') as f:
            yaml.dump({"extra_banks": {"UNION": "Union Bank of India"}}, f)

        config = ConfigManager(config_path=yaml_file).load_config()

        self.assertEqual(config.extra_banks, {"UNION": "Union Bank of India"})
        self.assertEqual(config.output_directory, "data")

    def test_empty_yaml_uses_defaults(self):
        yaml_file = os.path.join(self.temp_dir, 'empty.yaml')
        open(yaml_file, 'w').close()

        config = ConfigManager(config_path=yaml_file).load_config()

        self.assertEqual(config.extra_banks, {})

    def test_invalid_config_falls_back_to_defaults(self):
        """Invalid values are logged and the defaults are used"""
        invalid_configs = [
            {"extra_banks": ["SBI"]},
            {"extra_merchant_keywords": {"irctc": 5}},
            {"extra_candidate_keywords": "received"},
            {"output_directory": ""},
            ["not", "a", "dict"],
        ]

        for invalid in invalid_configs:
            with open(self.config_file, 'w') as f:
                json.dump(invalid, f)

            with self.assertLogs('money_tracker.utils.config_manager', level='ERROR'):
                config = ConfigManager(config_path=self.config_file).load_config()

            self.assertEqual(config.extra_banks, {})
            self.assertEqual(config.output_directory, "data")

    def test_malformed_json_falls_back_to_defaults(self):
        with open(self.config_file, 'w') as f:
            f.write("{not json")

        config = ConfigManager(config_path=self.config_file).load_config()

        self.assertEqual(config.extra_merchant_keywords, {})

    def test_config_is_cached(self):
        with open(self.config_file, 'w') as f:
            json.dump({"output_directory": "first"}, f)

        manager = ConfigManager(config_path=self.config_file)
        first = manager.load_config()

        with open(self.config_file, 'w') as f:
            json.dump({"output_directory": "second"}, f)

        self.assertIs(manager.load_config(), first)
        self.assertEqual(manager.load_config(force_reload=True).output_directory, "second")

        manager.reset_config()
        self.assertEqual(manager.load_config().output_directory, "second")

    def test_save_config_template(self):
        """Test generating configuration templates in both formats"""
        manager = ConfigManager()

        json_path = os.path.join(self.temp_dir, 'nested', 'template.json')
        manager.save_config_template(json_path)
        with open(json_path) as f:
            template = json.load(f)
        self.assertIn("extra_banks", template)

        yaml_path = os.path.join(self.temp_dir, 'template.yml')
        manager.save_config_template(yaml_path)
        loaded = ConfigManager(config_path=yaml_path).load_config()
        self.assertEqual(loaded.extra_merchant_keywords["irctc"], "Travel")


if __name__ == '__main__':
    unittest.main()
