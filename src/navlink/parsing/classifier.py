################################################################################
# File Name: classifier.py
# Purpose/Description: Scoring classifier for generic (non-navigation) notifications
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
Notification classifier.

Scores every enabled NotificationType against a notification:
- package listed in the type's apps: +1000
- each title pattern found in the title: +50
- each keyword found in the combined text: +10

The best positive score wins (earlier-declared type on ties). No positive
score is a routine miss and returns None.

Usage:
    classifier = NotificationClassifier(configStore)
    result = classifier.classify('com.whatsapp', 'Alice', 'See you at 6')
    if result and classifier.shouldSendToMcu(result, 'com.whatsapp'):
        ...
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from navlink.config.store import ConfigStore
from navlink.config.types import NotificationType

logger = logging.getLogger(__name__)

PACKAGE_SCORE = 1000
TITLE_PATTERN_SCORE = 50
KEYWORD_SCORE = 10

_PERCENTAGE_PATTERN = re.compile(r'(\d{1,3})\s*%')
_TEMPERATURE_PATTERN = re.compile(r'-?\d+(?:\.\d+)?\s*°\s*[CF]?', re.IGNORECASE)


@dataclass(frozen=True)
class ClassifiedNotification:
    """
    Classification result.

    Attributes:
        type: Winning notification type
        confidence: Winning score
        extractedData: Fields extracted for the type
    """

    type: NotificationType
    confidence: int
    extractedData: dict[str, Any] = field(default_factory=dict)

    def toDict(self) -> dict[str, Any]:
        return {
            'typeId': self.type.id,
            'confidence': self.confidence,
            'extractedData': dict(self.extractedData)
        }


class NotificationClassifier:
    """Classifies generic notifications against the configured types."""

    def __init__(self, configStore: ConfigStore):
        self._configStore = configStore

    def scoreType(
        self,
        notificationType: NotificationType,
        packageName: str,
        title: str | None,
        lowered: str
    ) -> int:
        score = 0

        if packageName in notificationType.apps:
            score += PACKAGE_SCORE

        if title:
            loweredTitle = title.lower()
            score += TITLE_PATTERN_SCORE * sum(
                1 for pattern in notificationType.titlePatterns if pattern.lower() in loweredTitle
            )

        score += KEYWORD_SCORE * sum(
            1 for keyword in notificationType.keywords if keyword.lower() in lowered
        )

        return score

    def classify(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None,
        bigText: str | None = None
    ) -> ClassifiedNotification | None:
        """
        Classify a notification.

        Args:
            packageName: Source package
            title: Notification title
            text: Notification text
            bigText: Expanded text

        Returns:
            ClassifiedNotification, or None when no type scores above zero
        """
        lowered = ' '.join(part for part in (title, text, bigText) if part).lower()

        bestType: NotificationType | None = None
        bestScore = 0
        for notificationType in self._configStore.get().notificationTypes.getEnabledTypes():
            score = self.scoreType(notificationType, packageName, title, lowered)
            if score > bestScore:
                bestType, bestScore = notificationType, score

        if bestType is None:
            logger.debug(f"Classification miss | package={packageName}")
            return None

        extracted = extractNotificationData(bestType.id, title, text, bigText)
        logger.debug(f"Classified notification | type={bestType.id} score={bestScore}")
        return ClassifiedNotification(bestType, bestScore, extracted)

    def shouldSendToMcu(self, classified: ClassifiedNotification, packageName: str) -> bool:
        """True when the type is enabled for the app, or the config sends disabled types anyway."""
        config = self._configStore.get().notificationTypes
        if config.isAppEnabledForType(classified.type.id, packageName):
            return True
        return config.settings.sendToMCUWhenDisabled


def extractNotificationData(
    typeId: str,
    title: str | None,
    text: str | None,
    bigText: str | None
) -> dict[str, Any]:
    """
    Extract the fields for a notification type id.

    message: sender, message; battery: percentage, is_charging;
    weather: temperature; anything else: title, raw_text.
    """
    fullText = ' '.join(part for part in (title, text) if part)

    if typeId == 'message':
        return {
            'sender': title or '',
            'message': text or bigText or '',
        }

    if typeId == 'battery':
        data: dict[str, Any] = {}
        match = _PERCENTAGE_PATTERN.search(fullText)
        if match:
            data['percentage'] = int(match.group(1))
        lowered = fullText.lower()
        data['is_charging'] = 'charging' in lowered and 'not charging' not in lowered
        return data

    if typeId == 'weather':
        match = _TEMPERATURE_PATTERN.search(fullText)
        temperature = re.sub(r'\s+', '', match.group(0)) if match else (text or '')
        return {'temperature': temperature}

    return {
        'title': title or '',
        'raw_text': text or '',
    }
