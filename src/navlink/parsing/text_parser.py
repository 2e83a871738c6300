################################################################################
# File Name: text_parser.py
# Purpose/Description: Keyword-driven extraction of NavigationData from text
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Distance tokens accept thousands separators
# ================================================================================
################################################################################

"""
Navigation text parser.

Turns concatenated notification text into NavigationData using the resolved
keyword configuration. The parser holds no mutable state: identical text and
keywords always give the same result (timestamp aside).

Algorithm:
1. Blank text gives None
2. Direction: first configured direction with a substring hit, else UNKNOWN
3. Distance: number adjacent to a configured unit, rendered '<value> <unit>'
4. EventType: alert vocabulary, then waypoint vocabulary, else NAVIGATION
   (INFO when only informational vocabulary matched and no direction)
5. Maneuver: roundabout exit ordinal, first maneuver keyword, or the
   cleaned text
6. ETA from distance and direction when a distance was found

Usage:
    parser = NavigationTextParser(patternSet.navigationKeywords.resolve())
    data = parser.parse('Turn left in 200 m onto Main St')
"""

import logging
import re

from navlink.config.types import ResolvedKeywords
from navlink.model.helpers import DISTANCE_NUMBER, calculateEta
from navlink.model.types import Direction, EventType, NavigationData

logger = logging.getLogger(__name__)

_EXIT_ORDINAL = re.compile(r'\b(\d+)\s*(st|nd|rd|th)\s+exit\b', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')
_TRAILING_CONNECTORS = re.compile(r'^(?:in|after|for)\s+|\s+(?:in|after|for)$', re.IGNORECASE)

MAX_MANEUVER_LENGTH = 60


class NavigationTextParser:
    """
    Pure keyword/pattern parser for navigation instructions.

    Attributes:
        keywords: Resolved vocabulary snapshot
    """

    def __init__(self, keywords: ResolvedKeywords):
        self.keywords = keywords
        self._distancePattern = _buildDistancePattern(keywords.distanceUnits)

    def parse(self, text: str | None, timestamp: int | None = None) -> NavigationData | None:
        """
        Parse navigation text.

        Args:
            text: Concatenated notification text
            timestamp: Event time in epoch milliseconds (defaults to now)

        Returns:
            NavigationData, or None for blank text
        """
        if text is None or not text.strip():
            return None

        normalized = _WHITESPACE.sub(' ', text.strip())
        lowered = normalized.lower()

        direction = self.detectDirection(lowered)
        distance = self.extractDistance(normalized)
        keywordManeuver = self.extractManeuver(normalized, direction)
        eventType = self.classifyEventType(lowered, direction, keywordManeuver is not None)
        maneuver = keywordManeuver or self.describe(normalized) or None

        eta = calculateEta(distance, direction) if distance else None

        kwargs = {
            'type': eventType,
            'direction': direction,
            'distance': distance,
            'maneuver': maneuver,
            'eta': eta,
        }
        if timestamp is not None:
            kwargs['timestamp'] = timestamp

        data = NavigationData(**kwargs)
        logger.debug(
            f"Parsed navigation text | type={eventType.value} direction={direction.value} "
            f"distance={distance}"
        )
        return data

    def detectDirection(self, lowered: str) -> Direction:
        """First direction (in configuration order) with a keyword in the text."""
        for direction, keywords in self.keywords.directions:
            if any(keyword in lowered for keyword in keywords):
                return direction
        return Direction.UNKNOWN

    def extractDistance(self, text: str) -> str | None:
        """Distance token rendered as '<value> <unit>', or None."""
        if self._distancePattern is None:
            return None

        match = self._distancePattern.search(text)
        if match is None:
            return None

        return f"{match.group(1)} {match.group(2).lower()}"

    def classifyEventType(
        self,
        lowered: str,
        direction: Direction,
        hasManeuver: bool
    ) -> EventType:
        if _containsAny(lowered, self.keywords.alertKeywords):
            return EventType.ALERT

        if _containsAny(lowered, self.keywords.waypointKeywords):
            return EventType.WAYPOINT

        if direction is Direction.UNKNOWN and not hasManeuver \
                and _containsAny(lowered, self.keywords.navigationKeywords):
            return EventType.INFO

        return EventType.NAVIGATION

    def extractManeuver(self, text: str, direction: Direction) -> str | None:
        """
        Maneuver named by the text's vocabulary.

        For roundabouts the exit ordinal ('2nd exit') wins. Otherwise the
        first configured maneuver keyword present, capitalized. Returns None
        when the text contains no maneuver keyword; parse() then falls back
        to describe().
        """
        if direction.isRoundabout:
            match = _EXIT_ORDINAL.search(text)
            if match:
                return f"{match.group(1)}{match.group(2).lower()} exit"

        lowered = text.lower()
        for keyword in self.keywords.maneuvers:
            if keyword in lowered:
                return keyword.capitalize()

        return None

    def describe(self, text: str) -> str:
        """Text with distance phrases removed, for display as a fallback maneuver."""
        cleaned = text
        if self._distancePattern is not None:
            cleaned = self._distancePattern.sub('', cleaned)
        cleaned = _WHITESPACE.sub(' ', cleaned).strip(' ,.')
        cleaned = _TRAILING_CONNECTORS.sub('', cleaned).strip()
        return cleaned[:MAX_MANEUVER_LENGTH]

    def isNavigationText(self, text: str | None) -> bool:
        """Cheap check: any navigation vocabulary, direction keyword or distance token."""
        if not text:
            return False

        lowered = text.lower()
        if _containsAny(lowered, self.keywords.navigationKeywords):
            return True
        if _containsAny(lowered, self.keywords.allDirectionKeywords()):
            return True
        return self.extractDistance(text) is not None


def _containsAny(lowered: str, keywords: tuple[str, ...] | list[str]) -> bool:
    return any(keyword in lowered for keyword in keywords)


def _buildDistancePattern(units: tuple[str, ...]) -> re.Pattern | None:
    if not units:
        return None

    alternatives = '|'.join(re.escape(unit) for unit in sorted(units, key=len, reverse=True))
    return re.compile(
        rf'({DISTANCE_NUMBER})\s*({alternatives})(?![a-z])',
        re.IGNORECASE
    )
