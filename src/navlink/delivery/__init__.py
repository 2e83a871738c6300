################################################################################
# File Name: __init__.py
# Purpose/Description: Delivery package exports
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
Delivery Subpackage.

Connection lifecycle, bounded queueing and ordered sending to the display.

Usage:
    from navlink.delivery import DeliveryManager, DeliverySettings, ThreadedDispatcher
"""

from .dispatcher import Dispatcher, ScheduledTask, ThreadedDispatcher
from .exceptions import DeliveryError, DeliveryTimeoutError, TransportError
from .manager import DeliveryManager, createDeliveryManagerFromConfig
from .queue import MessageQueue
from .simulated import SIMULATED_DEVICE_ADDRESS, SimulatedTransport, createSimulatedTransportFromConfig
from .transport import Transport, TransportListener
from .types import DeliverySettings, DeliveryStats, SendResult

__all__ = [
    'DeliveryError',
    'DeliveryManager',
    'DeliverySettings',
    'DeliveryStats',
    'DeliveryTimeoutError',
    'Dispatcher',
    'MessageQueue',
    'SIMULATED_DEVICE_ADDRESS',
    'ScheduledTask',
    'SendResult',
    'SimulatedTransport',
    'ThreadedDispatcher',
    'Transport',
    'TransportError',
    'TransportListener',
    'createDeliveryManagerFromConfig',
    'createSimulatedTransportFromConfig',
]
