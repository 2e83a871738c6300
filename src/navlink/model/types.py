################################################################################
# File Name: types.py
# Purpose/Description: Normalized event model shared by parsers, transformers and delivery
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
Domain model types.

Provides:
- Direction, EventType and CallState enums
- NavigationData and PhoneCallData immutable event snapshots
- DeliveryState, BLEConnectionStatus and QueuedMessage for the delivery path

Optional fields use None for "absent"; every instance is frozen so an event
can be shared between the parsing path and the delivery queue safely.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


def currentTimeMillis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


# =============================================================================
# Enums
# =============================================================================

class _LookupEnum(Enum):
    """Enum with tolerant string lookup used for configuration keys."""

    @classmethod
    def fromString(cls, value: str):
        """
        Convert a configuration string to an enum member.

        Args:
            value: Member name or value, case-insensitive

        Returns:
            Matching enum member

        Raises:
            ValueError: If value does not name a member
        """
        normalized = value.strip().upper().replace('-', '_').replace(' ', '_')
        for member in cls:
            if member.name == normalized or str(member.value).upper() == normalized:
                return member
        validNames = [m.name for m in cls]
        raise ValueError(
            f"Invalid {cls.__name__}: '{value}'. Must be one of: {', '.join(validNames)}"
        )

    @classmethod
    def isValid(cls, value: str) -> bool:
        """Check if a string names a member."""
        try:
            cls.fromString(value)
            return True
        except ValueError:
            return False


class Direction(_LookupEnum):
    """Maneuver/orientation category of a navigation instruction."""

    LEFT = 'LEFT'
    RIGHT = 'RIGHT'
    STRAIGHT = 'STRAIGHT'
    U_TURN = 'U_TURN'
    SHARP_LEFT = 'SHARP_LEFT'
    SHARP_RIGHT = 'SHARP_RIGHT'
    SLIGHT_LEFT = 'SLIGHT_LEFT'
    SLIGHT_RIGHT = 'SLIGHT_RIGHT'
    ROUNDABOUT_LEFT = 'ROUNDABOUT_LEFT'
    ROUNDABOUT_RIGHT = 'ROUNDABOUT_RIGHT'
    ROUNDABOUT_STRAIGHT = 'ROUNDABOUT_STRAIGHT'
    MERGE_LEFT = 'MERGE_LEFT'
    MERGE_RIGHT = 'MERGE_RIGHT'
    KEEP_LEFT = 'KEEP_LEFT'
    KEEP_RIGHT = 'KEEP_RIGHT'
    DESTINATION_REACHED = 'DESTINATION_REACHED'
    WAYPOINT_REACHED = 'WAYPOINT_REACHED'
    UNKNOWN = 'UNKNOWN'

    @property
    def isRoundabout(self) -> bool:
        return self.name.startswith('ROUNDABOUT_')


class EventType(_LookupEnum):
    """Coarse category of a navigation event."""

    NAVIGATION = 'NAVIGATION'   # Regular navigation instructions
    ALERT = 'ALERT'             # Speed cameras, accidents, road closures
    WAYPOINT = 'WAYPOINT'       # Waypoint/destination events
    INFO = 'INFO'               # General information (speed limit, etc.)


class CallState(_LookupEnum):
    """Phone call state."""

    INCOMING = 'INCOMING'   # Ringing
    ONGOING = 'ONGOING'     # Active or outgoing call
    MISSED = 'MISSED'
    ENDED = 'ENDED'


class DeliveryState(Enum):
    """Connection state of the delivery manager."""

    DISCONNECTED = 'disconnected'
    SCANNING = 'scanning'
    CONNECTING = 'connecting'
    CONNECTED = 'connected'


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class NavigationData:
    """
    Immutable snapshot of one navigation instruction.

    Attributes:
        type: Event category
        direction: Maneuver direction, None only for events without directional meaning
        distance: Distance token as found in the text (e.g. '200 m')
        maneuver: Short maneuver description
        icon: Device icon identifier
        eta: Estimated time to the maneuver (e.g. '2 min')
        timestamp: Creation time in epoch milliseconds
    """

    type: EventType = EventType.NAVIGATION
    direction: Direction | None = None
    distance: str | None = None
    maneuver: str | None = None
    icon: str | None = None
    eta: str | None = None
    timestamp: int = field(default_factory=currentTimeMillis)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'type': self.type.value,
            'direction': self.direction.value if self.direction else None,
            'distance': self.distance,
            'maneuver': self.maneuver,
            'icon': self.icon,
            'eta': self.eta,
            'timestamp': self.timestamp
        }


@dataclass(frozen=True)
class PhoneCallData:
    """
    Immutable snapshot of one phone call notification.

    Attributes:
        callerName: Contact name when the notification shows one
        callerNumber: Caller number ('' when the phone hides it)
        callState: Call state
        timestamp: Creation time in epoch milliseconds
        duration: Elapsed seconds; always 0 unless callState is ONGOING
    """

    callerNumber: str
    callState: CallState
    callerName: str | None = None
    timestamp: int = field(default_factory=currentTimeMillis)
    duration: int = 0

    def __post_init__(self) -> None:
        if self.callState is not CallState.ONGOING and self.duration:
            object.__setattr__(self, 'duration', 0)
        elif self.duration < 0:
            object.__setattr__(self, 'duration', 0)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'callerName': self.callerName,
            'callerNumber': self.callerNumber,
            'callState': self.callState.value,
            'timestamp': self.timestamp,
            'duration': self.duration
        }


@dataclass(frozen=True)
class NotificationEvent:
    """
    Generic (non-navigation, non-call) notification routed to the device.

    Attributes:
        typeId: Notification type id from configuration (e.g. 'message')
        fields: Extracted field values keyed by field name
        packageName: Source application package
        timestamp: Creation time in epoch milliseconds
    """

    typeId: str
    fields: dict[str, Any]
    packageName: str = ''
    timestamp: int = field(default_factory=currentTimeMillis)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'typeId': self.typeId,
            'fields': dict(self.fields),
            'packageName': self.packageName,
            'timestamp': self.timestamp
        }


DeviceEvent = Union[NavigationData, PhoneCallData, NotificationEvent]


# =============================================================================
# Delivery
# =============================================================================

@dataclass(frozen=True)
class BLEConnectionStatus:
    """
    Read-only projection of the delivery manager for observers.

    Attributes:
        isConnected: True while a link to the device is up
        deviceName: Name of the connected device
        deviceAddress: Address of the connected device
        queuedMessages: Number of messages waiting for delivery
        state: Delivery state machine state
        retryAttempts: Consecutive failed connection attempts
        persistentFailure: True once retries are exhausted
    """

    isConnected: bool = False
    deviceName: str | None = None
    deviceAddress: str | None = None
    queuedMessages: int = 0
    state: DeliveryState = DeliveryState.DISCONNECTED
    retryAttempts: int = 0
    persistentFailure: bool = False

    def toDict(self) -> dict[str, Any]:
        """Convert status to dictionary for logging/serialization."""
        return {
            'isConnected': self.isConnected,
            'deviceName': self.deviceName,
            'deviceAddress': self.deviceAddress,
            'queuedMessages': self.queuedMessages,
            'state': self.state.value,
            'retryAttempts': self.retryAttempts,
            'persistentFailure': self.persistentFailure
        }


@dataclass(frozen=True)
class QueuedMessage:
    """One pending outbound item, FIFO by enqueue time."""

    event: DeviceEvent
    timestamp: int = field(default_factory=currentTimeMillis)

    @property
    def navigationData(self) -> NavigationData | None:
        """The queued event when it is a navigation instruction."""
        return self.event if isinstance(self.event, NavigationData) else None
