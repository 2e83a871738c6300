################################################################################
# File Name: secrets_loader.py
# Purpose/Description: Environment loading and ${VAR} placeholder resolution
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
Secrets and environment module.

Provides:
- Loads environment variables from a .env file (python-dotenv)
- Resolves ${VAR_NAME} placeholders in configuration
- Supports default values: ${VAR_NAME:default}
- Never logs secret values

Usage:
    from common.secrets_loader import loadEnvFile, loadJsonFile, resolveSecrets

    loadEnvFile('.env')
    config = resolveSecrets(loadJsonFile('navlink_config.json'))
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

# Pattern to match ${VAR_NAME} or ${VAR_NAME:default}
PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')


def loadEnvFile(envPath: str | None = None) -> list[str]:
    """
    Load environment variables from .env file.

    Existing environment variables are never overridden.

    Args:
        envPath: Path to .env file. Defaults to .env in current directory.

    Returns:
        Names of the variables defined in the file
    """
    envFile = Path(envPath or '.env')

    if not envFile.exists():
        logger.debug(f".env file not found at {envFile}")
        return []

    names = list(dotenv_values(envFile).keys())
    load_dotenv(envFile, override=False)
    logger.info(f"Loaded {len(names)} variables from {envFile}")

    return names


def resolveSecrets(config: Any) -> Any:
    """
    Recursively resolve ${VAR_NAME} placeholders in configuration.

    Args:
        config: Configuration value (dict, list, str, or other)

    Returns:
        Configuration with placeholders resolved
    """
    if isinstance(config, dict):
        return {key: resolveSecrets(value) for key, value in config.items()}

    elif isinstance(config, list):
        return [resolveSecrets(item) for item in config]

    elif isinstance(config, str):
        return _resolveString(config)

    return config


def _resolveString(value: str) -> str:
    def replacer(match: re.Match) -> str:
        varName = match.group(1)
        defaultValue = match.group(2)

        envValue = os.environ.get(varName)

        if envValue is not None:
            logger.debug(f"Resolved {varName} from environment")
            return envValue
        elif defaultValue is not None:
            logger.debug(f"Using default for {varName}")
            return defaultValue

        logger.warning(f"Environment variable {varName} not set and no default")
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replacer, value)


def loadJsonFile(path: str | Path) -> Any:
    """
    Read a UTF-8 JSON document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is invalid JSON
    """
    jsonFile = Path(path)
    if not jsonFile.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(jsonFile, 'r', encoding='utf-8') as f:
        return json.load(f)
