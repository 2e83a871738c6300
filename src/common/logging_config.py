################################################################################
# File Name: logging_config.py
# Purpose/Description: Structured logging configuration and utilities
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
Logging setup for NavLink.

Every module logs through `logging.getLogger(__name__)` using the
"Action | key=value" message style. This module configures the root logger
once per process:

- pipe-separated console output on stderr (stdout carries CLI results)
- optional UTF-8 log file
- caller numbers and email addresses masked before any handler writes them

Usage:
    from common.logging_config import setupLogging, getLogger

    setupLogging(level='INFO')
    logger = getLogger(__name__)
    logger.info("Notification processed | outcome=sent")
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Caller numbers: optional '+', 10 to 15 digits, single spaces or dashes between
PII_PATTERNS = {
    'email': re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),
    'phone': re.compile(r'(?<![\w+])\+?\d(?:[\s-]?\d){9,14}(?!\w)'),
}


def maskPII(message: str) -> str:
    """Replace every email address and phone number with a placeholder."""
    for name, pattern in PII_PATTERNS.items():
        message = pattern.sub(f'[{name.upper()}_MASKED]', message)
    return message


class PIIMaskingFilter(logging.Filter):
    """
    Masks PII in the message and in string values of the 'extra' dict.

    %-style arguments are merged into the message first so a number passed
    as an argument is masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            if record.args:
                record.msg = record.getMessage()
                record.args = None
            record.msg = maskPII(record.msg)

        extra = getattr(record, 'extra', None)
        if isinstance(extra, dict):
            record.extra = {
                key: maskPII(value) if isinstance(value, str) else value
                for key, value in extra.items()
            }

        return True


class StructuredFormatter(logging.Formatter):
    """Appends 'key=value' pairs from a record's 'extra' dict to the line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        extra = getattr(record, 'extra', None)
        if isinstance(extra, dict) and extra:
            pairs = ' '.join(f'{key}={value}' for key, value in extra.items())
            line = f'{line} | {pairs}'

        return line


def _attachHandler(
    rootLogger: logging.Logger,
    handler: logging.Handler,
    formatter: logging.Formatter,
    enablePIIMasking: bool
) -> None:
    handler.setFormatter(formatter)
    if enablePIIMasking:
        handler.addFilter(PIIMaskingFilter())
    rootLogger.addHandler(handler)


def setupLogging(
    level: str = 'INFO',
    logFormat: str | None = None,
    logFile: str | None = None,
    enablePIIMasking: bool = True
) -> logging.Logger:
    """
    Configure the root logger, replacing any handlers already installed.

    Args:
        level: Level name; unknown names fall back to INFO
        logFormat: Format string, DEFAULT_FORMAT when None
        logFile: Optional log file; parent directories are created
        enablePIIMasking: Attach PIIMaskingFilter to every handler

    Returns:
        The root logger
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level.upper(), logging.INFO))
    rootLogger.handlers.clear()

    formatter = StructuredFormatter(fmt=logFormat or DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    _attachHandler(rootLogger, logging.StreamHandler(sys.stderr), formatter, enablePIIMasking)

    if logFile:
        Path(logFile).parent.mkdir(parents=True, exist_ok=True)
        _attachHandler(
            rootLogger,
            logging.FileHandler(logFile, encoding='utf-8'),
            formatter,
            enablePIIMasking
        )

    rootLogger.info(f"Logging configured | level={level} file={logFile} maskPII={enablePIIMasking}")
    return rootLogger


def setupLoggingFromConfig(config: dict[str, Any], verbose: bool = False) -> logging.Logger:
    """
    Apply the 'logging' section of a validated application config.

    Args:
        config: Application configuration
        verbose: Force DEBUG regardless of the configured level
    """
    section = config.get('logging', {})
    return setupLogging(
        level='DEBUG' if verbose else section.get('level', 'INFO'),
        logFormat=section.get('format'),
        logFile=section.get('file'),
        enablePIIMasking=section.get('maskPII', True)
    )


def getLogger(name: str) -> logging.Logger:
    """Return the module logger for name."""
    return logging.getLogger(name)
