################################################################################
# File Name: base.py
# Purpose/Description: Abstract base class for app-specific navigation parsers
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
Abstract base class for app parsers.

All app parsers must inherit from AppParser and describe how their app is
recognized (package names, title patterns, detection keywords). Parsing is
shared: every variant delegates the text to a NavigationTextParser.
"""

from abc import ABC, abstractmethod

from navlink.model.types import NavigationData

from .text_parser import NavigationTextParser


class AppParser(ABC):
    """
    Abstract base class for navigation app parsers.

    All app parsers must implement:
    - appId: Configuration-level app id
    - packageNames: Packages owned by the app
    - titlePatterns: Case-insensitive title substrings
    - detectionKeywords: Lowercase body substrings
    """

    def __init__(self, textParser: NavigationTextParser):
        """
        Initialize app parser.

        Args:
            textParser: Shared text-to-event parser
        """
        self._textParser = textParser

    @property
    def textParser(self) -> NavigationTextParser:
        return self._textParser

    @property
    @abstractmethod
    def appId(self) -> str:
        pass

    @property
    @abstractmethod
    def packageNames(self) -> tuple[str, ...]:
        pass

    @property
    @abstractmethod
    def titlePatterns(self) -> tuple[str, ...]:
        pass

    @property
    @abstractmethod
    def detectionKeywords(self) -> tuple[str, ...]:
        pass

    def canParse(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None
    ) -> bool:
        """
        Decide whether this parser applies to a notification.

        Checked in order, first hit wins: exact package name, title pattern
        (case-insensitive substring), detection keyword in the lowercased text.

        Args:
            packageName: Source package
            title: Notification title
            text: Notification text

        Returns:
            True if the notification belongs to this app
        """
        if packageName in self.packageNames:
            return True

        if title:
            loweredTitle = title.lower()
            if any(pattern.lower() in loweredTitle for pattern in self.titlePatterns):
                return True

        if text:
            loweredText = text.lower()
            if any(keyword.lower() in loweredText for keyword in self.detectionKeywords):
                return True

        return False

    def parseNavigation(
        self,
        title: str | None = None,
        text: str | None = None,
        bigText: str | None = None
    ) -> NavigationData | None:
        """
        Parse a notification into NavigationData.

        Present fields are concatenated title, text, bigText, each followed
        by a space, then trimmed.

        Returns:
            NavigationData, or None when there is no text
        """
        combined = ''.join(f"{part} " for part in (title, text, bigText) if part is not None)
        combined = combined.strip()
        if not combined:
            return None

        return self._textParser.parse(combined)

    def isNavigationNotification(self, text: str | None) -> bool:
        """Cheap pre-filter usable before full parsing."""
        return self._textParser.isNavigationText(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(appId={self.appId!r})"
