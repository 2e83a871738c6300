################################################################################
# File Name: phone.py
# Purpose/Description: Extraction of PhoneCallData from dialer notifications
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Whole-word call vocabulary; keyword detection optional
# ================================================================================
################################################################################

"""
Phone call parser.

Call UIs differ per vendor, so call state vocabulary comes from the active
DeviceProfile. State keywords are checked in the order missed, ended,
outgoing, incoming; the first hit wins and a miss means INCOMING.

Usage:
    parser = PhoneCallParser(patternSet.deviceProfiles, manufacturer='samsung')
    if parser.isPhoneCallNotification(pkg, title, text):
        call = parser.parse(pkg, title, text)
"""

import logging
import re
from collections.abc import Iterable

from navlink.config.types import CallPatterns, DeviceProfile, DeviceProfilesConfig
from navlink.model.types import CallState, PhoneCallData

logger = logging.getLogger(__name__)

# International form first, then bare 10-15 digit runs
_PHONE_PATTERNS = [
    re.compile(r'\+\d(?:[\s-]?\d){9,14}(?!\d)'),
    re.compile(r'(?<![\d+])\d{10,15}(?!\d)'),
]

_NAME_PATTERNS = [
    re.compile(r'(?:incoming call from|missed call from|call from|calling from)\s*:?\s*([^\d+,:;()\n]+)',
               re.IGNORECASE),
    re.compile(r'^\s*([^\d+,:;()\n]+?)\s+is calling', re.IGNORECASE),
]

_TIMER_PATTERN = re.compile(r'(?<![\d:])(?:(\d{1,2}):)?(\d{1,2}):(\d{2})(?![\d:])')

# Title words that label the call UI rather than a caller
_GENERIC_CALL_WORDS = ('call', 'calling', 'phone', 'dialer', 'dialing', 'ringing')


class PhoneCallParser:
    """
    Parser for telephony notifications.

    Attributes:
        deviceProfiles: Device profile configuration
        profile: Active profile resolved for the manufacturer
    """

    def __init__(self, deviceProfiles: DeviceProfilesConfig, manufacturer: str | None = None):
        self.deviceProfiles = deviceProfiles
        self.manufacturer = manufacturer
        self.profile: DeviceProfile | None = deviceProfiles.getActiveProfile(manufacturer)

        if self.profile is None:
            logger.warning("No device profile available; call detection uses packages only")
        else:
            logger.debug(f"Active device profile | id={self.profile.id} manufacturer={manufacturer}")

    @property
    def patterns(self) -> CallPatterns:
        return self.profile.patterns if self.profile else CallPatterns()

    def isPhoneCallNotification(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None,
        matchKeywords: bool = True
    ) -> bool:
        """
        Check whether a notification comes from the telephony stack.

        True when any profile lists the package, or, with matchKeywords,
        when the title/text contains a call phrase of the active profile as
        whole words ('on call' does not match 'on Calle').
        """
        if packageName in self.deviceProfiles.getAllPackages():
            return True
        if not matchKeywords:
            return False

        lowered = _combine(title, text).lower()
        return bool(lowered) and _containsAny(lowered, self.patterns.allKeywords())

    def parse(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None,
        bigText: str | None = None
    ) -> PhoneCallData | None:
        """
        Parse a call notification.

        Args:
            packageName: Source package
            title: Notification title
            text: Notification text
            bigText: Expanded text

        Returns:
            PhoneCallData, or None when neither caller name nor number is found
        """
        combined = _combine(title, text, bigText)
        if not combined:
            return None

        callState = self.detectCallState(combined)
        callerNumber = extractPhoneNumber(combined)
        callerName = self.extractCallerName(title, text)

        if not callerName and not callerNumber:
            logger.debug(f"Call notification without caller | package={packageName}")
            return None

        duration = parseDuration(combined) if callState is CallState.ONGOING else 0

        return PhoneCallData(
            callerName=callerName,
            callerNumber=callerNumber or '',
            callState=callState,
            duration=duration
        )

    def detectCallState(self, text: str) -> CallState:
        """First matching state in the order missed, ended, outgoing, incoming."""
        lowered = text.lower()
        patterns = self.patterns
        ordered = [
            (CallState.MISSED, patterns.missed),
            (CallState.ENDED, patterns.ended),
            (CallState.ONGOING, patterns.outgoing),
            (CallState.INCOMING, patterns.incoming),
        ]
        for state, keywords in ordered:
            if _containsAny(lowered, keywords):
                return state
        return CallState.INCOMING

    def extractCallerName(self, title: str | None, text: str | None) -> str | None:
        """
        Caller name from 'call from X' / 'X is calling', else from a title
        or text that is not call vocabulary.
        """
        for field in (title, text):
            if not field:
                continue
            for pattern in _NAME_PATTERNS:
                match = pattern.search(field)
                if match:
                    name = _cleanName(match.group(1))
                    if name:
                        return name

        for field in (title, text):
            if field and not self._isCallVocabulary(field):
                name = _cleanName(field)
                if name:
                    return name

        return None

    def _isCallVocabulary(self, value: str) -> bool:
        lowered = value.lower()
        if _containsAny(lowered, self.patterns.allKeywords()):
            return True
        return _containsAny(lowered, _GENERIC_CALL_WORDS)


def extractPhoneNumber(text: str) -> str | None:
    """First phone number in the text with separators removed."""
    for pattern in _PHONE_PATTERNS:
        match = pattern.search(text)
        if match:
            return re.sub(r'[\s-]', '', match.group(0))
    return None


def parseDuration(text: str) -> int:
    """Seconds from an 'mm:ss' or 'h:mm:ss' timer, 0 when absent."""
    match = _TIMER_PATTERN.search(text)
    if match is None:
        return 0

    hours = int(match.group(1)) if match.group(1) else 0
    return hours * 3600 + int(match.group(2)) * 60 + int(match.group(3))


def _combine(*parts: str | None) -> str:
    return ' '.join(part.strip() for part in parts if part and part.strip())


def _cleanName(value: str) -> str | None:
    cleaned = _TIMER_PATTERN.sub('', value)
    for pattern in _PHONE_PATTERNS:
        cleaned = pattern.sub('', cleaned)
    cleaned = re.sub(r'\s+', ' ', cleaned).strip(' .,:;-')
    if not cleaned or not re.search(r'[^\W\d_]', cleaned):
        return None
    return cleaned


def _containsAny(lowered: str, phrases: Iterable[str]) -> bool:
    """Whole-word, case-insensitive phrase match against lowercased text."""
    return any(
        re.search(rf'(?<!\w){re.escape(phrase.lower())}(?!\w)', lowered)
        for phrase in phrases
        if phrase
    )
