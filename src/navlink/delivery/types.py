################################################################################
# File Name: types.py
# Purpose/Description: Delivery settings, results and statistics
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Clarify SendResult.SENT
# ================================================================================
################################################################################
"""
Delivery types.

Provides:
- SendResult: outcome of DeliveryManager.send()
- DeliverySettings: immutable link settings read from the 'delivery' section
- DeliveryStats: counters for observers
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Defaults for the ESP32 BLE display
DEFAULT_DEVICE_NAME = 'ESP32_BLE'
DEFAULT_SERVICE_UUID = '12345678-1234-1234-1234-1234567890ab'
DEFAULT_CHARACTERISTIC_UUID = 'abcd1234-5678-90ab-cdef-1234567890ab'
DEFAULT_SCAN_TIMEOUT_SECONDS = 10.0
DEFAULT_CONNECTION_TIMEOUT_SECONDS = 5.0
DEFAULT_RECONNECT_DELAY_SECONDS = 5.0
DEFAULT_MAX_RETRY_ATTEMPTS = 3
DEFAULT_SEND_TIMEOUT_SECONDS = 2.0
DEFAULT_QUEUE_CAPACITY = 20


class SendResult(Enum):
    """Outcome of a send request."""

    SENT = 'sent'          # Accepted for transmission while connected; not yet written
    QUEUED = 'queued'      # Held until the link is up
    DROPPED = 'dropped'    # Rejected (mandatory fields exceed payload limit)
    FAILED = 'failed'      # Manager stopped or event could not be rendered


@dataclass(frozen=True)
class DeliverySettings:
    """
    Link settings.

    Attributes:
        deviceName: Advertised name of the target device
        deviceAddress: Target address; when set it takes precedence over the name
        serviceUuid: GATT service UUID (passed through to the transport)
        characteristicUuid: GATT characteristic UUID
        scanTimeoutSeconds: Scan window
        connectionTimeoutSeconds: Connect window
        reconnectDelaySeconds: Base delay before a reconnect attempt
        backoffMultiplier: Delay multiplier per consecutive failure (1.0 = fixed)
        maxRetryAttempts: Consecutive failed attempts before persistent failure
        sendTimeoutSeconds: Per-send acknowledgment window
        queueCapacity: Bound of the outbound queue
        autoStart: Start scanning when the pipeline is created
    """

    deviceName: str = DEFAULT_DEVICE_NAME
    deviceAddress: str | None = None
    serviceUuid: str = DEFAULT_SERVICE_UUID
    characteristicUuid: str = DEFAULT_CHARACTERISTIC_UUID
    scanTimeoutSeconds: float = DEFAULT_SCAN_TIMEOUT_SECONDS
    connectionTimeoutSeconds: float = DEFAULT_CONNECTION_TIMEOUT_SECONDS
    reconnectDelaySeconds: float = DEFAULT_RECONNECT_DELAY_SECONDS
    backoffMultiplier: float = 1.0
    maxRetryAttempts: int = DEFAULT_MAX_RETRY_ATTEMPTS
    sendTimeoutSeconds: float = DEFAULT_SEND_TIMEOUT_SECONDS
    queueCapacity: int = DEFAULT_QUEUE_CAPACITY
    autoStart: bool = True

    @classmethod
    def fromConfig(cls, config: dict[str, Any]) -> 'DeliverySettings':
        """
        Build settings from a validated application config.

        Args:
            config: Configuration dictionary with a 'delivery' section
        """
        section = config.get('delivery', {}) or {}
        known = {name: section[name] for name in cls.__dataclass_fields__ if name in section}
        return cls(**known)

    def retryDelay(self, attempt: int) -> float:
        """Delay before retry number 'attempt' (1-based)."""
        return self.reconnectDelaySeconds * (self.backoffMultiplier ** max(attempt - 1, 0))


@dataclass
class DeliveryStats:
    """
    Delivery counters.

    Attributes:
        sent: Payloads acknowledged by the transport
        failed: Send attempts that failed (message requeued)
        dropped: Messages discarded (queue overflow or payload overflow)
        queued: Messages accepted while disconnected
    """

    sent: int = 0
    failed: int = 0
    dropped: int = 0
    queued: int = 0

    @property
    def successRate(self) -> float:
        """Percentage of send attempts that succeeded."""
        attempts = self.sent + self.failed
        if attempts == 0:
            return 0.0
        return self.sent / attempts * 100.0

    def toDict(self) -> dict[str, Any]:
        return {
            'sent': self.sent,
            'failed': self.failed,
            'dropped': self.dropped,
            'queued': self.queued,
            'successRate': round(self.successRate, 1)
        }
