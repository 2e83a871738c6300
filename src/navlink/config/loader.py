################################################################################
# File Name: loader.py
# Purpose/Description: Application and pattern configuration loading
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
NavLink configuration loader module.

Two layers:
1. The application config (JSON + .env) is loaded, placeholder-resolved and
   validated into a plain dictionary with defaults applied.
2. The 'patterns' section (inline dictionaries or JSON file paths) is built
   into an immutable PatternConfigSet of pydantic models.

Usage:
    from navlink.config.loader import loadNavlinkConfig, buildPatternConfigSet

    try:
        appConfig = loadNavlinkConfig('src/navlink_config.json', '.env')
        patternSet = loadPatternConfigSet(appConfig)
    except PatternConfigError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from common.config_validator import ConfigValidationError, ConfigValidator, DEFAULTS, REQUIRED_KEYS
from common.secrets_loader import loadEnvFile, loadJsonFile, resolveSecrets

from .defaults import DEFAULT_PATTERN_SECTIONS
from .exceptions import PatternConfigError
from .types import (
    AppPatternsConfig,
    DeviceProfilesConfig,
    MCUFormatsConfig,
    NavigationKeywords,
    NotificationTypesConfig,
    PatternConfigSet,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SECTION_MODELS: dict[str, type[BaseModel]] = {
    'appPatterns': AppPatternsConfig,
    'navigationKeywords': NavigationKeywords,
    'deviceProfiles': DeviceProfilesConfig,
    'mcuFormats': MCUFormatsConfig,
    'notificationTypes': NotificationTypesConfig,
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# =============================================================================
# Application Config
# =============================================================================

def loadNavlinkConfig(
    configPath: str,
    envFilePath: str | None = None
) -> dict[str, Any]:
    """
    Load and validate the application configuration.

    Performs the following operations:
    1. Load environment variables from .env file (if provided)
    2. Load configuration JSON file
    3. Resolve secret placeholders (${VAR} syntax)
    4. Apply defaults and check required fields

    Args:
        configPath: Path to the configuration JSON file
        envFilePath: Optional path to .env file

    Returns:
        Validated configuration dictionary with defaults applied

    Raises:
        PatternConfigError: If the file cannot be loaded or validation fails
    """
    logger.info(f"Loading NavLink configuration | path={configPath}")

    if envFilePath and os.path.exists(envFilePath):
        loadEnvFile(envFilePath)

    config = resolveSecrets(_loadJson(configPath, 'configFile'))
    config = validateNavlinkConfig(config)

    config['_configDir'] = str(Path(configPath).resolve().parent)

    logger.info("NavLink configuration loaded and validated")
    return config


def validateNavlinkConfig(config: dict[str, Any]) -> dict[str, Any]:
    """
    Validate the application configuration and apply defaults.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated configuration with defaults applied

    Raises:
        PatternConfigError: If validation fails
    """
    validator = ConfigValidator(requiredKeys=REQUIRED_KEYS, defaults=DEFAULTS)

    try:
        config = validator.validate(config)
    except ConfigValidationError as e:
        raise PatternConfigError(
            f"Configuration validation failed: {e}",
            missingFields=e.missingFields
        ) from e

    _validateDelivery(config)
    _validateLogging(config)

    return config


def _validateDelivery(config: dict[str, Any]) -> None:
    delivery = config['delivery']
    invalidFields = []

    for key in ('scanTimeoutSeconds', 'connectionTimeoutSeconds', 'sendTimeoutSeconds'):
        if not isinstance(delivery.get(key), (int, float)) or delivery[key] <= 0:
            invalidFields.append(f'delivery.{key}')

    if not isinstance(delivery.get('reconnectDelaySeconds'), (int, float)) \
            or delivery['reconnectDelaySeconds'] < 0:
        invalidFields.append('delivery.reconnectDelaySeconds')

    if not isinstance(delivery.get('backoffMultiplier'), (int, float)) \
            or delivery['backoffMultiplier'] < 1:
        invalidFields.append('delivery.backoffMultiplier')

    for key in ('maxRetryAttempts', 'queueCapacity'):
        value = delivery.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            invalidFields.append(f'delivery.{key}')

    if invalidFields:
        raise PatternConfigError(
            f"Invalid delivery settings: {', '.join(invalidFields)}",
            invalidFields=invalidFields
        )


def _validateLogging(config: dict[str, Any]) -> None:
    level = str(config['logging'].get('level', '')).upper()
    if level not in VALID_LOG_LEVELS:
        raise PatternConfigError(
            f"Invalid log level: '{config['logging'].get('level')}'. "
            f"Must be one of: {', '.join(VALID_LOG_LEVELS)}",
            invalidFields=['logging.level']
        )


# =============================================================================
# Pattern Config
# =============================================================================

def buildPatternConfigSet(raw: dict[str, Any] | None = None) -> PatternConfigSet:
    """
    Build an immutable PatternConfigSet from plain dictionaries.

    Missing sections fall back to the built-in defaults.

    Args:
        raw: Mapping of section name ('appPatterns', 'navigationKeywords',
            'deviceProfiles', 'mcuFormats', 'notificationTypes') to section dict

    Returns:
        PatternConfigSet snapshot

    Raises:
        PatternConfigError: If any section fails validation
    """
    raw = raw or {}

    unknownSections = [name for name in raw if name not in SECTION_MODELS]
    if unknownSections:
        logger.warning(f"Ignoring unknown pattern sections | sections={unknownSections}")

    sections = {}
    for name in SECTION_MODELS:
        data = raw.get(name)
        if data is None:
            data = DEFAULT_PATTERN_SECTIONS[name]
        sections[name] = buildSection(name, data)

    patternSet = PatternConfigSet(**sections)
    logger.info(
        f"Pattern config built | apps={len(patternSet.appPatterns.getAllApps())} "
        f"profiles={len(patternSet.deviceProfiles.profiles)} "
        f"activeFormat={patternSet.mcuFormats.activeFormat}"
    )
    return patternSet


def buildSection(name: str, data: dict[str, Any]) -> BaseModel:
    """
    Validate one pattern section into its pydantic model.

    Args:
        name: Section name (key of SECTION_MODELS)
        data: Section dictionary

    Returns:
        The section model instance

    Raises:
        PatternConfigError: On unknown section name or validation failure
    """
    modelClass = SECTION_MODELS.get(name)
    if modelClass is None:
        raise PatternConfigError(
            f"Unknown pattern section: '{name}'. Must be one of: {', '.join(SECTION_MODELS)}",
            invalidFields=[name]
        )

    if not isinstance(data, dict):
        raise PatternConfigError(
            f"Pattern section '{name}' must be an object",
            invalidFields=[name]
        )

    try:
        return modelClass.model_validate(data)
    except ValidationError as e:
        missingFields = []
        invalidFields = []
        for error in e.errors():
            path = '.'.join([name] + [str(part) for part in error['loc']])
            if error['type'] == 'missing':
                missingFields.append(path)
            else:
                invalidFields.append(path)

        messages = '; '.join(error['msg'] for error in e.errors())
        raise PatternConfigError(
            f"Invalid '{name}' configuration: {messages}",
            missingFields=missingFields,
            invalidFields=invalidFields
        ) from e


def loadPatternConfigSet(appConfig: dict[str, Any]) -> PatternConfigSet:
    """
    Build the PatternConfigSet named by an application config.

    'patterns.files' maps section name to a JSON file path (relative paths
    resolve against the config file's directory); 'patterns.inline' maps
    section name to a dictionary and wins over a file for the same section.

    Args:
        appConfig: Validated application configuration

    Returns:
        PatternConfigSet snapshot

    Raises:
        PatternConfigError: If a file cannot be read or a section is invalid
    """
    patterns = appConfig.get('patterns', {}) or {}
    baseDir = Path(appConfig.get('_configDir', '.'))
    raw: dict[str, Any] = {}

    for name, filePath in (patterns.get('files') or {}).items():
        path = Path(filePath)
        if not path.is_absolute():
            path = baseDir / path
        raw[name] = resolveSecrets(_loadJson(str(path), f'patterns.files.{name}'))
        logger.debug(f"Loaded pattern section from file | section={name} path={path}")

    for name, section in (patterns.get('inline') or {}).items():
        raw[name] = section

    return buildPatternConfigSet(raw)


def _loadJson(path: str, fieldName: str) -> Any:
    try:
        return loadJsonFile(path)
    except FileNotFoundError as e:
        raise PatternConfigError(
            f"Configuration file not found: {path}",
            missingFields=[fieldName]
        ) from e
    except json.JSONDecodeError as e:
        raise PatternConfigError(
            f"Invalid JSON in configuration file: {path}\n"
            f"Parse error: {e.msg} at line {e.lineno}, column {e.colno}",
            invalidFields=[fieldName]
        ) from e
    except OSError as e:
        raise PatternConfigError(
            f"Cannot read configuration file: {path}\nError: {e}",
            missingFields=[fieldName]
        ) from e
