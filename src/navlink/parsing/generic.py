################################################################################
# File Name: generic.py
# Purpose/Description: Pattern-driven parser for any configured navigation app
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
Generic navigation parser driven entirely by an AppPattern.
"""

from navlink.config.types import AppPattern

from .base import AppParser
from .text_parser import NavigationTextParser


class GenericNavigationParser(AppParser):
    """App parser whose recognition rules come from configuration."""

    def __init__(self, appPattern: AppPattern, textParser: NavigationTextParser):
        super().__init__(textParser)
        self._appPattern = appPattern

    @property
    def appPattern(self) -> AppPattern:
        return self._appPattern

    @property
    def appId(self) -> str:
        return self._appPattern.id

    @property
    def packageNames(self) -> tuple[str, ...]:
        return self._appPattern.packageNames

    @property
    def titlePatterns(self) -> tuple[str, ...]:
        return self._appPattern.titlePatterns

    @property
    def detectionKeywords(self) -> tuple[str, ...]:
        return self._appPattern.detectionKeywords
