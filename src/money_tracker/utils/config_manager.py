"""Configuration management for the SMS transaction classifier."""

import json
import os
import yaml
from typing import Dict, Any, Optional
import logging

from ..models.core import ClassifierConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages loading and validation of classifier configuration"""

    SEARCH_PATHS = [
        'money_tracker.json',
        'money_tracker.yml',
        'money_tracker.yaml',
        'config/money_tracker.json',
        'config/money_tracker.yml',
        'config/money_tracker.yaml',
        '~/.money_tracker/config.json',
        '~/.money_tracker/config.yml',
        '~/.money_tracker/config.yaml',
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[ClassifierConfig] = None

    def load_config(self, force_reload: bool = False) -> ClassifierConfig:
        """Load classifier configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            ClassifierConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()

        self._config_cache = ClassifierConfig(
            output_directory=config_data.get('output_directory', 'data'),
            extra_candidate_keywords=config_data.get('extra_candidate_keywords'),
            extra_banks=config_data.get('extra_banks'),
            extra_merchant_keywords=config_data.get('extra_merchant_keywords'),
        )
        return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no usable file found
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            if data is None:
                logger.info(f"Configuration file {config_file} is empty, using defaults")
                return {}

            self._validate_config_data(data)
            logger.info(f"Configuration loaded from {config_file}")
            return data

        except (OSError, ValueError, yaml.YAMLError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Error reading configuration file {config_file}: {e}")
            return {}

    def _find_config_file(self) -> Optional[str]:
        if self.config_path:
            return self.config_path

        for path in self.SEARCH_PATHS:
            path = os.path.expanduser(path)
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Args:
            data: Configuration data to validate

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        if 'output_directory' in data:
            if not isinstance(data['output_directory'], str):
                raise ValueError("output_directory must be a string")
            if not data['output_directory'].strip():
                raise ValueError("output_directory cannot be empty")

        if 'extra_candidate_keywords' in data:
            if not isinstance(data['extra_candidate_keywords'], list):
                raise ValueError("extra_candidate_keywords must be a list")
            for keyword in data['extra_candidate_keywords']:
                if not isinstance(keyword, str) or not keyword.strip():
                    raise ValueError("All candidate keywords must be non-empty strings")

        for mapping_key in ['extra_banks', 'extra_merchant_keywords']:
            if mapping_key in data:
                if not isinstance(data[mapping_key], dict):
                    raise ValueError(f"{mapping_key} must be a dictionary")
                for key, value in data[mapping_key].items():
                    if not isinstance(key, str) or not key.strip():
                        raise ValueError(f"{mapping_key} keys must be non-empty strings")
                    if not isinstance(value, str) or not value.strip():
                        raise ValueError(f"{mapping_key} value for {key} must be a non-empty string")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = {
            "output_directory": "data",
            "extra_candidate_keywords": [
                "debit",
                "received"
            ],
            "extra_banks": {
                "FEDERAL": "Federal Bank",
                "UNION": "Union Bank of India"
            },
            "extra_merchant_keywords": {
                "bigbasket": "Groceries",
                "irctc": "Travel"
            }
        }

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if output_path.endswith(('.yml', '.yaml')):
                yaml.dump(template, f, default_flow_style=False, indent=2, sort_keys=False)
            else:
                json.dump(template, f, indent=2)

        logger.info(f"Configuration template saved to {output_path}")

    def reset_config(self) -> None:
        """Reset configuration cache, forcing reload on next access"""
        self._config_cache = None
        logger.debug("Configuration cache reset")
