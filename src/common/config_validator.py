################################################################################
# File Name: config_validator.py
# Purpose/Description: Configuration validation with required fields and defaults
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# ================================================================================
################################################################################

"""
Configuration validation module.

Provides validation of application configuration with:
- Required field checking
- Default value application (dot notation)
- Nested configuration support
- Clear error messages for missing fields

Usage:
    from common.config_validator import ConfigValidator

    validator = ConfigValidator()
    config = validator.validate(rawConfig)
"""

import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, missingFields: list[str] | None = None):
        super().__init__(message)
        self.missingFields = missingFields or []


# Required configuration keys
REQUIRED_KEYS: list[str] = [
    'delivery.deviceName',
]

# Default values for optional settings
DEFAULTS: dict[str, Any] = {
    'application.name': 'NavLink',
    'application.version': '1.0.0',
    'logging.level': 'INFO',
    'logging.format': '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s | %(message)s',
    'logging.maskPII': True,
    'logging.file': None,
    'delivery.deviceName': 'ESP32_BLE',
    'delivery.deviceAddress': None,
    'delivery.serviceUuid': '12345678-1234-1234-1234-1234567890ab',
    'delivery.characteristicUuid': 'abcd1234-5678-90ab-cdef-1234567890ab',
    'delivery.scanTimeoutSeconds': 10.0,
    'delivery.connectionTimeoutSeconds': 5.0,
    'delivery.reconnectDelaySeconds': 5.0,
    'delivery.backoffMultiplier': 1.0,
    'delivery.maxRetryAttempts': 3,
    'delivery.sendTimeoutSeconds': 2.0,
    'delivery.queueCapacity': 20,
    'delivery.autoStart': True,
    'patterns.files': {},
    'patterns.inline': {},
    'pipeline.historySize': 50,
    'pipeline.deviceManufacturer': None,
    'simulator.discoveryDelaySeconds': 0.5,
    'simulator.connectDelaySeconds': 0.5,
}


class ConfigValidator:
    """
    Validates configuration dictionaries.

    Attributes:
        requiredKeys: List of required configuration keys (dot notation)
        defaults: Dictionary of default values for optional fields
    """

    def __init__(
        self,
        requiredKeys: list[str] | None = None,
        defaults: dict[str, Any] | None = None
    ):
        """
        Initialize the validator.

        Args:
            requiredKeys: List of required keys in dot notation (e.g., 'delivery.deviceName')
            defaults: Dictionary of default values in dot notation
        """
        self.requiredKeys = requiredKeys if requiredKeys is not None else REQUIRED_KEYS
        self.defaults = defaults if defaults is not None else DEFAULTS

    def validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and enhance configuration.

        Defaults are applied before the required-field check so that a
        required key with a default never fails validation.

        Args:
            config: Raw configuration dictionary

        Returns:
            Validated copy of the configuration with defaults applied

        Raises:
            ConfigValidationError: If required fields are missing
        """
        config = self._applyDefaults(copy.deepcopy(config))

        missingFields = self._validateRequired(config)
        if missingFields:
            fieldList = ', '.join(missingFields)
            raise ConfigValidationError(
                f"Missing required configuration fields: {fieldList}",
                missingFields=missingFields
            )

        logger.info("Configuration validated successfully")
        return config

    def _validateRequired(self, config: dict[str, Any]) -> list[str]:
        missingFields = []

        for key in self.requiredKeys:
            value = getNestedValue(config, key)
            if value is None or value == '':
                missingFields.append(key)

        return missingFields

    def _applyDefaults(self, config: dict[str, Any]) -> dict[str, Any]:
        for key, defaultValue in self.defaults.items():
            if getNestedValue(config, key) is None and not _hasKey(config, key):
                setNestedValue(config, key, copy.deepcopy(defaultValue))
                logger.debug(f"Applied default for {key}: {defaultValue}")

        return config


def getNestedValue(config: dict[str, Any], key: str) -> Any:
    """
    Get a value from nested dictionary using dot notation.

    Args:
        config: Configuration dictionary
        key: Dot-notation key (e.g., 'delivery.queueCapacity')

    Returns:
        Value if found, None otherwise
    """
    value: Any = config

    for k in key.split('.'):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return None

    return value


def setNestedValue(config: dict[str, Any], key: str, value: Any) -> None:
    """
    Set a value in nested dictionary using dot notation.

    Args:
        config: Configuration dictionary to modify
        key: Dot-notation key
        value: Value to set
    """
    keys = key.split('.')
    current = config

    for k in keys[:-1]:
        if not isinstance(current.get(k), dict):
            current[k] = {}
        current = current[k]

    current[keys[-1]] = value


def _hasKey(config: dict[str, Any], key: str) -> bool:
    """True when the dotted key exists, even with a None value."""
    keys = key.split('.')
    current: Any = config

    for k in keys[:-1]:
        if not isinstance(current, dict) or k not in current:
            return False
        current = current[k]

    return isinstance(current, dict) and keys[-1] in current
