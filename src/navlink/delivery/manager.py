################################################################################
# File Name: manager.py
# Purpose/Description: Delivery state machine with bounded retries and queueing
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Document SENT as accepted for transmission
# ================================================================================
################################################################################
"""
Delivery manager.

Owns the link to the display device:

    DISCONNECTED --startScanning--> SCANNING --device match--> CONNECTING
    CONNECTING --connected--> CONNECTED --link drop--> DISCONNECTED

Scan timeouts, connect timeouts and connect failures each count as one
failed attempt. After maxRetryAttempts consecutive failures the manager
reports a persistent failure and stops retrying until restart().

Messages sent while not connected are held in a bounded queue (oldest
dropped) and flushed in FIFO order once connected. Events are rendered
with the transformer that is active at transmission time.

Usage:
    manager = DeliveryManager(settings, transport, selector)
    manager.startScanning()
    result = manager.send(navigationData)
    ...
    manager.cleanup()
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

from navlink.model.types import (
    BLEConnectionStatus,
    DeliveryState,
    DeviceEvent,
    QueuedMessage,
)
from navlink.transform.base import DataTransformer
from navlink.transform.exceptions import PayloadOverflowError

from .dispatcher import Dispatcher, ScheduledTask, ThreadedDispatcher
from .exceptions import TransportError
from .queue import MessageQueue
from .transport import Transport, TransportListener
from .types import DeliverySettings, DeliveryStats, SendResult

logger = logging.getLogger(__name__)

StatusListener = Callable[[BLEConnectionStatus], None]


class TransformerSource(Protocol):
    def current(self) -> DataTransformer: ...


class DeliveryManager(TransportListener):
    """
    Manages discovery, connection, retries and ordered sending.

    Transport completions are posted to the dispatcher; state is guarded
    by a lock so observers may read status from any thread. After
    cleanup() no completion, timer or send callback has any effect.
    """

    def __init__(
        self,
        settings: DeliverySettings,
        transport: Transport,
        transformers: TransformerSource,
        dispatcher: Dispatcher | None = None
    ):
        """
        Initialize delivery manager.

        Args:
            settings: Link settings
            transport: Link transport
            transformers: Source of the currently active transformer
            dispatcher: Serial executor (a ThreadedDispatcher when omitted)
        """
        self.settings = settings
        self._transport = transport
        self._transformers = transformers
        self._ownsDispatcher = dispatcher is None
        self._dispatcher = dispatcher or ThreadedDispatcher()

        self._lock = threading.RLock()
        self._queue = MessageQueue(settings.queueCapacity)
        self._stats = DeliveryStats()
        self._statusListeners: list[StatusListener] = []

        self._state = DeliveryState.DISCONNECTED
        self._deviceName: str | None = None
        self._deviceAddress: str | None = None
        self._attempts = 0
        self._persistentFailure = False
        self._autoReconnect = True
        self._stopped = False

        self._generation = 0
        self._timer: ScheduledTask | None = None
        self._timerToken = 0
        self._flushPending = False

        self._transport.bind(self)

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def state(self) -> DeliveryState:
        with self._lock:
            return self._state

    @property
    def stats(self) -> DeliveryStats:
        with self._lock:
            return DeliveryStats(**vars(self._stats))

    def isConnected(self) -> bool:
        return self.state == DeliveryState.CONNECTED

    def getStatus(self) -> BLEConnectionStatus:
        """Snapshot of the manager for observers."""
        with self._lock:
            return BLEConnectionStatus(
                isConnected=self._state == DeliveryState.CONNECTED,
                deviceName=self._deviceName,
                deviceAddress=self._deviceAddress,
                queuedMessages=len(self._queue),
                state=self._state,
                retryAttempts=self._attempts,
                persistentFailure=self._persistentFailure
            )

    def getQueuedMessages(self) -> list[QueuedMessage]:
        return self._queue.snapshot()

    def addStatusListener(self, listener: StatusListener) -> None:
        with self._lock:
            self._statusListeners.append(listener)

    def removeStatusListener(self, listener: StatusListener) -> None:
        with self._lock:
            if listener in self._statusListeners:
                self._statusListeners.remove(listener)

    def startScanning(self) -> bool:
        """
        Begin discovery from DISCONNECTED.

        Returns:
            True if a scan was started
        """
        with self._lock:
            if self._stopped:
                logger.debug("Scan request ignored | reason=manager stopped")
                return False
            if self._state != DeliveryState.DISCONNECTED:
                logger.debug(f"Scan request ignored | state={self._state.value}")
                return False
            if self._persistentFailure:
                logger.info("Scan request ignored | reason=persistent failure, call restart()")
                return False
            self._beginScan()
        self._notifyStatus()
        return True

    def restart(self) -> bool:
        """Clear a persistent failure and the retry counter, then scan again."""
        with self._lock:
            if self._stopped:
                logger.debug("Restart ignored | reason=manager stopped")
                return False
            logger.info(f"Restarting delivery | previousAttempts={self._attempts}")
            self._cancelTimer()
            self._attempts = 0
            self._persistentFailure = False
            self._autoReconnect = True
            if self._state == DeliveryState.SCANNING:
                self._safeTransportCall(self._transport.stopScan, 'stopScan')
                self._state = DeliveryState.DISCONNECTED
        return self.startScanning()

    def send(self, event: DeviceEvent) -> SendResult:
        """
        Hand an event to the delivery path.

        Args:
            event: Navigation, phone call or notification event

        Returns:
            SENT when connected, QUEUED when held for later, DROPPED when
            the event cannot fit the active format, FAILED when stopped or
            the event cannot be rendered at all. SENT means accepted for
            transmission: a write that fails later is requeued and counted
            in stats.failed.
        """
        with self._lock:
            if self._stopped:
                logger.debug("Send ignored | reason=manager stopped")
                return SendResult.FAILED

        try:
            self._transformers.current().transformEvent(event)
        except PayloadOverflowError as e:
            logger.error(f"Message dropped | reason=payload overflow size={e.payloadSize} max={e.maxPayload}")
            with self._lock:
                self._stats.dropped += 1
            return SendResult.DROPPED
        except TypeError as e:
            logger.error(f"Message rejected | error={e}")
            return SendResult.FAILED

        with self._lock:
            evicted = self._queue.enqueue(QueuedMessage(event=event))
            if evicted is not None:
                self._stats.dropped += 1
                logger.warning(
                    f"Queue full, oldest message dropped | capacity={self._queue.capacity} "
                    f"droppedAt={evicted.timestamp}"
                )
            if self._state == DeliveryState.CONNECTED:
                self._requestFlush()
                return SendResult.SENT
            self._stats.queued += 1
            logger.debug(f"Message queued | state={self._state.value} queued={len(self._queue)}")
        self._notifyStatus()
        return SendResult.QUEUED

    def clearQueue(self) -> int:
        count = self._queue.clear()
        if count:
            logger.info(f"Queue cleared | discarded={count}")
        return count

    def cleanup(self) -> None:
        """
        Stop all delivery activity.

        Pending timers are cancelled, an active scan is stopped and a live
        link is closed. Callbacks already in flight become no-ops.
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            self._autoReconnect = False
            self._generation += 1
            self._cancelTimer()
            previous = self._state
            self._state = DeliveryState.DISCONNECTED
            self._deviceName = None
            self._deviceAddress = None

        if previous == DeliveryState.SCANNING:
            self._safeTransportCall(self._transport.stopScan, 'stopScan')
        elif previous in (DeliveryState.CONNECTING, DeliveryState.CONNECTED):
            self._safeTransportCall(self._transport.disconnect, 'disconnect')

        if self._ownsDispatcher:
            self._dispatcher.shutdown()
        logger.info(f"Delivery stopped | previousState={previous.value} queued={len(self._queue)}")

    # =========================================================================
    # TransportListener (posted to the dispatcher)
    # =========================================================================

    def onDeviceFound(self, name: str | None, address: str) -> None:
        self._post(lambda: self._handleDeviceFound(name, address))

    def onConnected(self, name: str | None, address: str) -> None:
        self._post(lambda: self._handleConnected(name, address))

    def onConnectFailed(self, error: str) -> None:
        self._post(lambda: self._handleConnectFailed(error))

    def onDisconnected(self) -> None:
        self._post(self._handleDisconnected)

    # =========================================================================
    # State transitions
    # =========================================================================

    def _handleDeviceFound(self, name: str | None, address: str) -> None:
        with self._lock:
            if self._state != DeliveryState.SCANNING:
                return
            if not self._matchesTarget(name, address):
                logger.debug(f"Ignoring device | name={name} address={address}")
                return

            logger.info(f"Device found | name={name} address={address}")
            self._cancelTimer()
            self._safeTransportCall(self._transport.stopScan, 'stopScan')
            self._state = DeliveryState.CONNECTING
            self._deviceName = name
            self._deviceAddress = address
            self._setTimer(self.settings.connectionTimeoutSeconds, self._connectTimedOut)
            try:
                self._transport.connect(address)
            except TransportError as e:
                self._failAttempt(f"connect request failed: {e}")
        self._notifyStatus()

    def _handleConnected(self, name: str | None, address: str) -> None:
        with self._lock:
            if self._state != DeliveryState.CONNECTING:
                logger.debug(f"Unexpected connect completion ignored | state={self._state.value}")
                return
            self._cancelTimer()
            self._state = DeliveryState.CONNECTED
            self._deviceName = name or self._deviceName
            self._deviceAddress = address or self._deviceAddress
            self._attempts = 0
            self._persistentFailure = False
            logger.info(
                f"Connected | name={self._deviceName} address={self._deviceAddress} "
                f"queued={len(self._queue)}"
            )
            self._requestFlush()
        self._notifyStatus()

    def _handleConnectFailed(self, error: str) -> None:
        with self._lock:
            if self._state != DeliveryState.CONNECTING:
                return
            self._cancelTimer()
            self._failAttempt(f"connect failed: {error}")
        self._notifyStatus()

    def _handleDisconnected(self) -> None:
        with self._lock:
            if self._state == DeliveryState.CONNECTING:
                self._cancelTimer()
                self._failAttempt('link closed while connecting')
            elif self._state == DeliveryState.CONNECTED:
                logger.info(f"Link lost | name={self._deviceName} address={self._deviceAddress}")
                self._state = DeliveryState.DISCONNECTED
                self._deviceName = None
                self._deviceAddress = None
                if self._autoReconnect:
                    delay = self.settings.reconnectDelaySeconds
                    logger.info(f"Reconnecting | delay={delay}s")
                    self._setTimer(delay, self._retryScan)
            else:
                return
        self._notifyStatus()

    def _scanTimedOut(self) -> None:
        with self._lock:
            if self._state != DeliveryState.SCANNING:
                return
            self._safeTransportCall(self._transport.stopScan, 'stopScan')
            self._failAttempt(f"scan timeout after {self.settings.scanTimeoutSeconds}s")
        self._notifyStatus()

    def _connectTimedOut(self) -> None:
        with self._lock:
            if self._state != DeliveryState.CONNECTING:
                return
            self._safeTransportCall(self._transport.disconnect, 'disconnect')
            self._failAttempt(f"connection timeout after {self.settings.connectionTimeoutSeconds}s")
        self._notifyStatus()

    def _retryScan(self) -> None:
        with self._lock:
            if self._state != DeliveryState.DISCONNECTED or self._persistentFailure:
                return
            self._beginScan()
        self._notifyStatus()

    def _beginScan(self) -> None:
        self._state = DeliveryState.SCANNING
        target = self.settings.deviceAddress or self.settings.deviceName
        logger.info(f"Scanning | target={target} attempt={self._attempts + 1}")
        self._setTimer(self.settings.scanTimeoutSeconds, self._scanTimedOut)
        try:
            self._transport.startScan()
        except TransportError as e:
            self._cancelTimer()
            self._failAttempt(f"scan request failed: {e}")

    def _failAttempt(self, reason: str) -> None:
        """Record one failed attempt and either schedule a retry or give up."""
        self._state = DeliveryState.DISCONNECTED
        self._deviceName = None
        self._deviceAddress = None
        self._attempts += 1
        maxAttempts = self.settings.maxRetryAttempts

        if self._attempts >= maxAttempts:
            self._persistentFailure = True
            logger.info(
                f"Delivery unavailable | reason={reason} attempts={self._attempts}/{maxAttempts} "
                f"queued={len(self._queue)}"
            )
            return

        if not self._autoReconnect:
            logger.info(f"Attempt failed | reason={reason} attempts={self._attempts}/{maxAttempts}")
            return

        delay = self.settings.retryDelay(self._attempts)
        logger.info(
            f"Attempt failed, retrying | reason={reason} attempts={self._attempts}/{maxAttempts} "
            f"delay={delay:.1f}s"
        )
        self._setTimer(delay, self._retryScan)

    def _matchesTarget(self, name: str | None, address: str) -> bool:
        if self.settings.deviceAddress:
            return address.lower() == self.settings.deviceAddress.lower()
        return name == self.settings.deviceName

    # =========================================================================
    # Sending
    # =========================================================================

    def _requestFlush(self) -> None:
        if self._flushPending:
            return
        self._flushPending = True
        self._post(self._flush)

    def _flush(self) -> None:
        """Send queued messages in order until empty, disconnected or a send fails."""
        with self._lock:
            self._flushPending = False

        changed = False

        while True:
            with self._lock:
                if self._state != DeliveryState.CONNECTED:
                    return
                message = self._queue.popleft()
                if message is None:
                    break
                generation = self._generation
                try:
                    payload = self._transformers.current().transformEvent(message.event)
                except PayloadOverflowError as e:
                    self._stats.dropped += 1
                    logger.error(
                        f"Message dropped | reason=payload overflow size={e.payloadSize} max={e.maxPayload}"
                    )
                    continue

            delivered = self._transmit(payload)

            with self._lock:
                if generation != self._generation:
                    return
                if delivered:
                    self._stats.sent += 1
                    changed = True
                    logger.debug(f"Payload sent | bytes={len(payload.encode('utf-8'))}")
                    continue
                self._stats.failed += 1
                changed = True
                evicted = self._queue.requeueFront(message)
                if evicted is not None:
                    self._stats.dropped += 1
                    logger.warning(f"Queue full, oldest message dropped | capacity={self._queue.capacity}")
                logger.info(f"Send failed, message requeued | queued={len(self._queue)}")
                break

        if changed:
            self._notifyStatus()

    def _transmit(self, payload: str) -> bool:
        try:
            return self._transport.send(payload.encode('utf-8'), self.settings.sendTimeoutSeconds)
        except TransportError as e:
            logger.info(f"Transport send error | error={e}")
            return False

    # =========================================================================
    # Plumbing
    # =========================================================================

    def _post(self, fn: Callable[[], None]) -> None:
        """Run fn on the dispatcher unless cleanup() happens first."""
        generation = self._generation

        def run() -> None:
            if generation != self._generation:
                return
            fn()

        self._dispatcher.submit(run)

    def _setTimer(self, delaySeconds: float, fn: Callable[[], None]) -> None:
        self._cancelTimer()
        self._timerToken += 1
        token = self._timerToken
        generation = self._generation

        def fire() -> None:
            with self._lock:
                if generation != self._generation or token != self._timerToken:
                    return
                self._timer = None
            fn()

        self._timer = self._dispatcher.schedule(delaySeconds, fire)

    def _cancelTimer(self) -> None:
        self._timerToken += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _safeTransportCall(self, call: Callable[[], None], name: str) -> None:
        try:
            call()
        except TransportError as e:
            logger.debug(f"Transport {name} failed | error={e}")

    def _notifyStatus(self) -> None:
        with self._lock:
            listeners = list(self._statusListeners)
            generation = self._generation
        if not listeners:
            return
        status = self.getStatus()
        for listener in listeners:
            if generation != self._generation:
                return
            try:
                listener(status)
            except Exception as e:
                logger.warning(f"Status listener error | error={e}")


def createDeliveryManagerFromConfig(
    config: dict[str, Any],
    transport: Transport,
    transformers: TransformerSource,
    dispatcher: Dispatcher | None = None
) -> DeliveryManager:
    """
    Create a DeliveryManager from configuration.

    Args:
        config: Validated application configuration
        transport: Link transport
        transformers: Source of the active transformer
        dispatcher: Optional serial executor

    Returns:
        Configured DeliveryManager (not yet scanning)
    """
    settings = DeliverySettings.fromConfig(config)
    return DeliveryManager(settings, transport, transformers, dispatcher)
