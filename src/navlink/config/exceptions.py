################################################################################
# File Name: exceptions.py
# Purpose/Description: Pattern configuration exception classes
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
Pattern configuration exception classes.

Usage:
    from navlink.config.exceptions import PatternConfigError

    try:
        patternSet = buildPatternConfigSet(raw)
    except PatternConfigError as e:
        print(f"Config error: {e}")
        print(f"Missing fields: {e.missingFields}")
        print(f"Invalid fields: {e.invalidFields}")
"""

from common.error_handler import ConfigurationError


class PatternConfigError(ConfigurationError):
    """
    Raised when a pattern configuration section cannot be built.

    Fatal at startup: identity fields (ids, activeFormat, activeProfile) are
    never silently defaulted.

    Attributes:
        missingFields: List of required field paths that are missing
        invalidFields: List of field paths with invalid values
    """

    def __init__(
        self,
        message: str,
        missingFields: list[str] | None = None,
        invalidFields: list[str] | None = None
    ):
        self.missingFields = missingFields or []
        self.invalidFields = invalidFields or []
        super().__init__(
            message,
            details={
                'missingFields': self.missingFields,
                'invalidFields': self.invalidFields
            }
        )
