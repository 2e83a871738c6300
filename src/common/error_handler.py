################################################################################
# File Name: error_handler.py
# Purpose/Description: Error taxonomy and classification shared by all modules
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
Error taxonomy shared by every NavLink package.

Each domain exception derives from one of the categories below, so a caller
can decide what to do without knowing the concrete type:

- RETRYABLE: the link misbehaved; delivery retries within its bounds
- CONFIGURATION: a config section is unusable; fatal at startup
- DATA: one event could not be rendered; it is dropped
- SYSTEM: anything else

Usage:
    from common.error_handler import ConfigurationError, handleError

    try:
        store = buildConfigStore(rawConfig)
    except ConfigurationError as e:
        handleError(e, context={'source': 'startup'}, reraise=False)
"""

import logging
import traceback
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """How an error is treated by its caller."""
    RETRYABLE = 'retryable'
    CONFIGURATION = 'config'
    DATA = 'data'
    SYSTEM = 'system'


# Type-name fragments of foreign exceptions that point at a flaky link
RETRYABLE_TYPE_TERMS = ('timeout', 'connection', 'broken', 'gatt', 'bluetooth')
CONFIGURATION_MESSAGE_TERMS = ('config', 'missing', 'required')
DATA_MESSAGE_TERMS = ('validation', 'invalid', 'parse', 'payload')

# Link trouble is expected and stays below WARNING
CATEGORY_LOG_LEVELS = {
    ErrorCategory.RETRYABLE: logging.INFO,
    ErrorCategory.CONFIGURATION: logging.ERROR,
    ErrorCategory.DATA: logging.WARNING,
    ErrorCategory.SYSTEM: logging.ERROR,
}


# ================================================================================
# Exception Tree
# ================================================================================

class BaseError(Exception):
    """
    Root of the NavLink exception tree.

    Attributes:
        message: Human readable description
        details: Structured context (field names, sizes, states)
    """

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def isRetryable(self) -> bool:
        return self.category is ErrorCategory.RETRYABLE

    def toDict(self) -> dict[str, Any]:
        """Serializable form for structured logs."""
        return {
            'type': type(self).__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details
        }


class RetryableError(BaseError):
    """Transient link failure; the delivery manager absorbs it."""
    category = ErrorCategory.RETRYABLE


class ConfigurationError(BaseError):
    """A configuration value or section is unusable."""
    category = ErrorCategory.CONFIGURATION


class DataError(BaseError):
    """A single event cannot be processed and is dropped."""
    category = ErrorCategory.DATA


# ================================================================================
# Classification and Reporting
# ================================================================================

def classifyError(error: Exception) -> ErrorCategory:
    """
    Map any exception onto an ErrorCategory.

    NavLink exceptions carry their own category. Foreign exceptions are
    judged by type name first, then by the wording of their message.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    typeName = type(error).__name__.lower()
    if any(term in typeName for term in RETRYABLE_TYPE_TERMS):
        return ErrorCategory.RETRYABLE

    message = str(error).lower()
    if any(term in message for term in CONFIGURATION_MESSAGE_TERMS):
        return ErrorCategory.CONFIGURATION
    if any(term in message for term in DATA_MESSAGE_TERMS):
        return ErrorCategory.DATA

    return ErrorCategory.SYSTEM


def handleError(
    error: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Log an error at the level its category calls for.

    Only SYSTEM errors carry a traceback in the log record.

    Args:
        error: Exception that occurred
        context: Extra key/value pairs appended to the log line
        reraise: Whether to re-raise the exception after logging

    Returns:
        Report with type, category, message, context and traceback

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)
    report = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context or {},
        'traceback': traceback.format_exc()
    }

    contextText = ''.join(f" {key}={value}" for key, value in report['context'].items())
    logger.log(
        CATEGORY_LOG_LEVELS[category],
        f"Error handled | category={category.value} type={report['type']} "
        f"message={error}{contextText}",
        exc_info=category is ErrorCategory.SYSTEM
    )

    if reraise:
        raise error

    return report


def formatError(error: Exception) -> str:
    """One-line rendering: '[CATEGORY] message | details={...}'."""
    tag = classifyError(error).value.upper()

    if isinstance(error, BaseError):
        suffix = f" | details={error.details}" if error.details else ""
        return f"[{tag}] {error.message}{suffix}"

    return f"[{tag}] {type(error).__name__}: {error}"
