################################################################################
# File Name: simulated.py
# Purpose/Description: Simulated display transport for testing without hardware
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
Simulated transport for running the pipeline without a radio.

Provides:
- SimulatedTransport implementing the Transport interface
- Configurable discovery and connection delays (run on the dispatcher)
- Failure injection: hidden device, refused connects, failed sends, link drops
- A record of every acknowledged payload

Usage:
    from navlink.delivery import SimulatedTransport, ThreadedDispatcher

    dispatcher = ThreadedDispatcher()
    transport = SimulatedTransport(dispatcher, deviceName='ESP32_BLE')
    manager = DeliveryManager(settings, transport, selector, dispatcher)
    manager.startScanning()
"""

import logging
import threading
from typing import Any

from .dispatcher import Dispatcher, ScheduledTask
from .exceptions import TransportError
from .transport import Transport, TransportListener

logger = logging.getLogger(__name__)


# ================================================================================
# Constants
# ================================================================================

DEFAULT_DISCOVERY_DELAY_SECONDS = 0.5
DEFAULT_CONNECT_DELAY_SECONDS = 0.5
SIMULATED_DEVICE_ADDRESS = 'SIMULATED:00:11:22:33:44:55'


class SimulatedTransport(Transport):
    """
    In-memory transport that advertises one device.

    Completions are delivered through the dispatcher after the configured
    delays, so tests driving a manual dispatcher stay deterministic.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        deviceName: str = 'ESP32_BLE',
        deviceAddress: str = SIMULATED_DEVICE_ADDRESS,
        discoveryDelaySeconds: float = DEFAULT_DISCOVERY_DELAY_SECONDS,
        connectDelaySeconds: float = DEFAULT_CONNECT_DELAY_SECONDS
    ):
        self.deviceName = deviceName
        self.deviceAddress = deviceAddress
        self.discoveryDelaySeconds = discoveryDelaySeconds
        self.connectDelaySeconds = connectDelaySeconds

        self._dispatcher = dispatcher
        self._listener: TransportListener | None = None
        self._lock = threading.Lock()
        self._pending: ScheduledTask | None = None
        self._connected = False
        self._scanning = False

        self._discoverable = True
        self._connectFailuresRemaining = 0
        self._sendFailuresRemaining = 0
        self.sentPayloads: list[bytes] = []

    # -------------------------------------------------------------------------
    # Failure injection
    # -------------------------------------------------------------------------

    def setDiscoverable(self, discoverable: bool) -> None:
        """Hide or show the simulated device for future scans."""
        self._discoverable = discoverable

    def failNextConnects(self, count: int) -> None:
        self._connectFailuresRemaining = count

    def failNextSends(self, count: int) -> None:
        self._sendFailuresRemaining = count

    def dropLink(self) -> None:
        """Simulate the device going out of range."""
        with self._lock:
            if not self._connected:
                return
            self._connected = False
        logger.info(f"Simulated link drop | address={self.deviceAddress}")
        if self._listener is not None:
            self._listener.onDisconnected()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def bind(self, listener: TransportListener) -> None:
        self._listener = listener

    def isConnected(self) -> bool:
        with self._lock:
            return self._connected

    def startScan(self) -> None:
        if self._listener is None:
            raise TransportError("No listener bound")
        with self._lock:
            self._scanning = True
            if not self._discoverable:
                logger.debug("Simulated scan | device hidden")
                return
            self._replacePending(self._dispatcher.schedule(self.discoveryDelaySeconds, self._announce))

    def stopScan(self) -> None:
        with self._lock:
            self._scanning = False
            self._replacePending(None)

    def connect(self, address: str) -> None:
        if self._listener is None:
            raise TransportError("No listener bound")
        with self._lock:
            self._replacePending(
                self._dispatcher.schedule(self.connectDelaySeconds, lambda: self._completeConnect(address))
            )

    def disconnect(self) -> None:
        with self._lock:
            self._replacePending(None)
            wasConnected = self._connected
            self._connected = False
        if wasConnected:
            logger.debug(f"Simulated disconnect | address={self.deviceAddress}")

    def send(self, payload: bytes, timeout: float) -> bool:
        with self._lock:
            if not self._connected:
                raise TransportError("Not connected")
            if self._sendFailuresRemaining > 0:
                self._sendFailuresRemaining -= 1
                logger.debug(f"Simulated send failure | bytes={len(payload)}")
                return False
            self.sentPayloads.append(payload)
        return True

    def getStatus(self) -> dict[str, Any]:
        with self._lock:
            return {
                'deviceName': self.deviceName,
                'deviceAddress': self.deviceAddress,
                'connected': self._connected,
                'scanning': self._scanning,
                'sentPayloads': len(self.sentPayloads)
            }

    # -------------------------------------------------------------------------
    # Completions
    # -------------------------------------------------------------------------

    def _announce(self) -> None:
        with self._lock:
            if not self._scanning or not self._discoverable:
                return
            self._pending = None
        self._listener.onDeviceFound(self.deviceName, self.deviceAddress)

    def _completeConnect(self, address: str) -> None:
        with self._lock:
            self._pending = None
            if address.lower() != self.deviceAddress.lower():
                error = f"unknown address {address}"
            elif self._connectFailuresRemaining > 0:
                self._connectFailuresRemaining -= 1
                error = 'connection refused'
            else:
                error = None
                self._connected = True

        if error is not None:
            self._listener.onConnectFailed(error)
        else:
            self._listener.onConnected(self.deviceName, self.deviceAddress)

    def _replacePending(self, task: ScheduledTask | None) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = task


def createSimulatedTransportFromConfig(config: dict[str, Any], dispatcher: Dispatcher) -> SimulatedTransport:
    """
    Create a SimulatedTransport advertising the configured device.

    Args:
        config: Validated application configuration
        dispatcher: Dispatcher shared with the DeliveryManager
    """
    delivery = config.get('delivery', {})
    simulator = config.get('simulator', {})
    return SimulatedTransport(
        dispatcher,
        deviceName=delivery.get('deviceName', 'ESP32_BLE'),
        deviceAddress=delivery.get('deviceAddress') or SIMULATED_DEVICE_ADDRESS,
        discoveryDelaySeconds=simulator.get('discoveryDelaySeconds', DEFAULT_DISCOVERY_DELAY_SECONDS),
        connectDelaySeconds=simulator.get('connectDelaySeconds', DEFAULT_CONNECT_DELAY_SECONDS)
    )
