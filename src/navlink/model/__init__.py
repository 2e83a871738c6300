################################################################################
# File Name: __init__.py
# Purpose/Description: Domain model package exports
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
Domain model package.

Value types for navigation events, phone-call events, connection status and
queued messages, plus the distance/ETA helpers.
"""

from .helpers import calculateEta, formatDuration, parseDistanceToMeters
from .types import (
    BLEConnectionStatus,
    CallState,
    DeliveryState,
    DeviceEvent,
    Direction,
    EventType,
    NavigationData,
    NotificationEvent,
    PhoneCallData,
    QueuedMessage,
    currentTimeMillis,
)

__all__ = [
    'BLEConnectionStatus',
    'CallState',
    'DeliveryState',
    'DeviceEvent',
    'Direction',
    'EventType',
    'NavigationData',
    'NotificationEvent',
    'PhoneCallData',
    'QueuedMessage',
    'calculateEta',
    'currentTimeMillis',
    'formatDuration',
    'parseDistanceToMeters',
]
