################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
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
Common utilities package.

This package provides shared functionality used across the application:
- Configuration validation and loading
- Environment / placeholder resolution
- Logging configuration
- Error handling

Usage:
    from common.config_validator import ConfigValidator
    from common.secrets_loader import loadEnvFile, resolveSecrets
    from common.logging_config import getLogger
    from common.error_handler import ConfigurationError
"""

from .config_validator import ConfigValidationError, ConfigValidator
from .error_handler import (
    BaseError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    RetryableError,
    classifyError,
    formatError,
    handleError,
)
from .logging_config import getLogger, maskPII, setupLogging
from .secrets_loader import loadEnvFile, loadJsonFile, resolveSecrets

__all__ = [
    'ConfigValidator',
    'ConfigValidationError',
    'loadEnvFile',
    'resolveSecrets',
    'loadJsonFile',
    'getLogger',
    'maskPII',
    'setupLogging',
    'BaseError',
    'ErrorCategory',
    'RetryableError',
    'ConfigurationError',
    'DataError',
    'classifyError',
    'formatError',
    'handleError'
]
