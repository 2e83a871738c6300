################################################################################
# File Name: pipeline.py
# Purpose/Description: Notification-to-device processing pipeline
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Registry resolved before call detection; type gating
# ================================================================================
################################################################################
"""
Notification processing pipeline.

Routes each notification through, in order:

1. The phone call parser (telephony packages; call vocabulary only for
   packages that no navigation app claims)
2. The navigation app parser resolved from the registry
3. The generic notification classifier

and hands the resulting event to the delivery manager. Misses are routine
and recorded as IGNORED. The phone and navigation stages honor the
'phone_call' and 'navigation' notification types the same way the
classifier honors its own types.

Usage:
    pipeline = createPipelineFromConfig(appConfig, transport)
    result = pipeline.processNotification(
        'com.google.android.apps.maps', 'Google Maps', 'Turn left in 200 m'
    )
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from navlink.config.loader import loadPatternConfigSet
from navlink.config.store import ConfigStore
from navlink.config.types import PatternConfigSet
from navlink.delivery.dispatcher import Dispatcher
from navlink.delivery.manager import DeliveryManager, createDeliveryManagerFromConfig
from navlink.delivery.transport import Transport
from navlink.delivery.types import SendResult
from navlink.model.types import (
    DeviceEvent,
    NavigationData,
    NotificationEvent,
    PhoneCallData,
    currentTimeMillis,
)
from navlink.parsing.classifier import NotificationClassifier
from navlink.parsing.phone import PhoneCallParser
from navlink.parsing.registry import ParserRegistry, createDefaultRegistry
from navlink.transform.helpers import TransformerSelector

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 50

NAVIGATION_TYPE_ID = 'navigation'
PHONE_CALL_TYPE_ID = 'phone_call'


class ProcessingOutcome(Enum):
    """
    What happened to one notification.

    SENT means accepted for transmission on a live link. The write itself
    happens later on the delivery worker; a failed write is requeued and
    appears in DeliveryStats.failed rather than here.
    """

    SENT = 'sent'
    QUEUED = 'queued'
    DROPPED = 'dropped'
    FAILED = 'failed'
    IGNORED = 'ignored'

    @classmethod
    def fromSendResult(cls, result: SendResult) -> 'ProcessingOutcome':
        return cls(result.value)


@dataclass(frozen=True)
class ProcessingResult:
    """
    Result of processNotification().

    Attributes:
        outcome: Final outcome
        event: Event produced by parsing, None when ignored
        source: Which stage produced the event ('phone_call', 'navigation',
            'notification') or None
    """

    outcome: ProcessingOutcome
    event: DeviceEvent | None = None
    source: str | None = None

    @property
    def delivered(self) -> bool:
        return self.outcome in (ProcessingOutcome.SENT, ProcessingOutcome.QUEUED)


@dataclass(frozen=True)
class ProcessingRecord:
    """History entry for one processed notification."""

    packageName: str
    outcome: ProcessingOutcome
    source: str | None = None
    eventType: str | None = None
    timestamp: int = field(default_factory=currentTimeMillis)

    def toDict(self) -> dict[str, Any]:
        return {
            'packageName': self.packageName,
            'outcome': self.outcome.value,
            'source': self.source,
            'eventType': self.eventType,
            'timestamp': self.timestamp
        }


class NotificationPipeline:
    """
    Owns the parsing and delivery collaborators for one session.

    Replacing the pattern configuration rebuilds the registry and the
    phone parser, so the next notification sees the new keywords. Parsers
    registered by hand on the old registry must be registered again.
    """

    def __init__(
        self,
        configStore: ConfigStore,
        registry: ParserRegistry,
        phoneParser: PhoneCallParser,
        classifier: NotificationClassifier,
        selector: TransformerSelector,
        deliveryManager: DeliveryManager,
        historySize: int = DEFAULT_HISTORY_SIZE
    ):
        self.configStore = configStore
        self.classifier = classifier
        self.selector = selector
        self.deliveryManager = deliveryManager

        self._lock = threading.Lock()
        self._registry = registry
        self._phoneParser = phoneParser
        self._history: deque[ProcessingRecord] = deque(maxlen=historySize)

        configStore.addListener(self._onConfigReplaced)

    @property
    def registry(self) -> ParserRegistry:
        with self._lock:
            return self._registry

    @property
    def phoneParser(self) -> PhoneCallParser:
        with self._lock:
            return self._phoneParser

    # =========================================================================
    # Processing
    # =========================================================================

    def processNotification(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None,
        bigText: str | None = None
    ) -> ProcessingResult:
        """
        Parse one notification and hand the event to delivery.

        Args:
            packageName: Source package
            title: Notification title
            text: Notification text
            bigText: Expanded text

        Returns:
            ProcessingResult with the outcome and the parsed event
        """
        event, source = self.parseNotification(packageName, title, text, bigText)

        if event is None:
            logger.debug(f"Notification ignored | package={packageName}")
            return self._record(packageName, ProcessingResult(ProcessingOutcome.IGNORED))

        sendResult = self.deliveryManager.send(event)
        outcome = ProcessingOutcome.fromSendResult(sendResult)
        logger.debug(f"Notification processed | package={packageName} source={source} outcome={outcome.value}")
        return self._record(packageName, ProcessingResult(outcome, event, source))

    def parseNotification(
        self,
        packageName: str,
        title: str | None = None,
        text: str | None = None,
        bigText: str | None = None
    ) -> tuple[DeviceEvent | None, str | None]:
        """
        Run the parsing stages without delivering.

        Returns:
            (event, source) with source one of 'phone_call', 'navigation',
            'notification', or (None, None) when nothing matched
        """
        with self._lock:
            registry = self._registry
            phoneParser = self._phoneParser

        # Call vocabulary only counts for packages no navigation app claims
        parser = registry.resolveParser(packageName)
        if phoneParser.isPhoneCallNotification(packageName, title, text, matchKeywords=parser is None):
            if not self._isStageEnabled(PHONE_CALL_TYPE_ID, packageName):
                return None, None
            callData = phoneParser.parse(packageName, title, text, bigText)
            if callData is not None:
                return callData, 'phone_call'

        if parser is not None:
            combined = ' '.join(part for part in (title, text, bigText) if part)
            if parser.isNavigationNotification(combined):
                if not self._isStageEnabled(NAVIGATION_TYPE_ID, packageName):
                    return None, None
                navigationData = parser.parseNavigation(title, text, bigText)
                if navigationData is not None:
                    return navigationData, 'navigation'
            logger.debug(f"No navigation content | app={parser.appId} package={packageName}")

        classified = self.classifier.classify(packageName, title, text, bigText)
        if classified is not None:
            if not self.classifier.shouldSendToMcu(classified, packageName):
                logger.debug(f"Notification type disabled for app | type={classified.type.id} package={packageName}")
                return None, None
            notification = NotificationEvent(
                typeId=classified.type.id,
                fields=dict(classified.extractedData),
                packageName=packageName
            )
            return notification, 'notification'

        return None, None

    def _isStageEnabled(self, typeId: str, packageName: str) -> bool:
        config = self.configStore.get().notificationTypes
        if config.isAppEnabledForType(typeId, packageName) or config.settings.sendToMCUWhenDisabled:
            return True
        logger.debug(f"Notification type disabled for app | type={typeId} package={packageName}")
        return False

    # =========================================================================
    # History
    # =========================================================================

    def getHistory(self) -> list[ProcessingRecord]:
        with self._lock:
            return list(self._history)

    def clearHistory(self) -> None:
        with self._lock:
            self._history.clear()

    def getSummary(self) -> dict[str, Any]:
        """Outcome counts over the retained history plus delivery state."""
        counts = {outcome.value: 0 for outcome in ProcessingOutcome}
        for record in self.getHistory():
            counts[record.outcome.value] += 1
        return {
            'outcomes': counts,
            'delivery': self.deliveryManager.getStatus().toDict(),
            'stats': self.deliveryManager.stats.toDict(),
            'activeFormat': self.configStore.get().mcuFormats.activeFormat
        }

    def _record(self, packageName: str, result: ProcessingResult) -> ProcessingResult:
        record = ProcessingRecord(
            packageName=packageName,
            outcome=result.outcome,
            source=result.source,
            eventType=_eventType(result.event)
        )
        with self._lock:
            self._history.append(record)
        return result

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _onConfigReplaced(self, newSet: PatternConfigSet) -> None:
        with self._lock:
            manufacturer = self._phoneParser.manufacturer
            self._registry = createDefaultRegistry(self.configStore)
            self._phoneParser = PhoneCallParser(newSet.deviceProfiles, manufacturer)
        logger.info("Parsers rebuilt | reason=configuration replaced")

    def shutdown(self) -> None:
        """Detach from the config store and stop delivery."""
        self.configStore.removeListener(self._onConfigReplaced)
        self.deliveryManager.cleanup()


def _eventType(event: DeviceEvent | None) -> str | None:
    if isinstance(event, NavigationData):
        return event.type.value
    if isinstance(event, PhoneCallData):
        return 'phone_call'
    if isinstance(event, NotificationEvent):
        return event.typeId
    return None


def createPipelineFromConfig(
    appConfig: dict[str, Any],
    transport: Transport,
    dispatcher: Dispatcher | None = None
) -> NotificationPipeline:
    """
    Wire a pipeline from a validated application config.

    Args:
        appConfig: Output of loadNavlinkConfig()
        transport: Link transport
        dispatcher: Serial executor shared with the transport; the delivery
            manager creates and owns a ThreadedDispatcher when omitted

    Returns:
        NotificationPipeline; scanning has started when delivery.autoStart is set

    Raises:
        PatternConfigError: If the pattern configuration is invalid
    """
    configStore = ConfigStore(loadPatternConfigSet(appConfig))
    pipelineConfig = appConfig.get('pipeline', {})

    registry = createDefaultRegistry(configStore)
    phoneParser = PhoneCallParser(
        configStore.get().deviceProfiles,
        pipelineConfig.get('deviceManufacturer')
    )
    classifier = NotificationClassifier(configStore)
    selector = TransformerSelector(configStore)

    deliveryManager = createDeliveryManagerFromConfig(
        appConfig,
        transport,
        selector,
        dispatcher
    )

    pipeline = NotificationPipeline(
        configStore,
        registry,
        phoneParser,
        classifier,
        selector,
        deliveryManager,
        historySize=pipelineConfig.get('historySize', DEFAULT_HISTORY_SIZE)
    )

    if deliveryManager.settings.autoStart:
        deliveryManager.startScanning()

    logger.info(
        f"Pipeline ready | format={configStore.get().mcuFormats.activeFormat} "
        f"apps={len(registry.getAllEnabledApps())} device={deliveryManager.settings.deviceName}"
    )
    return pipeline
