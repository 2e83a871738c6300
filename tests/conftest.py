################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and test doubles
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
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Test doubles:
- ManualDispatcher: runs submitted work and timers only when the test says
  so, with a virtual clock; the delivery state machine is tested without
  sleeping
- FakeTransport: records transport requests; tests drive completions

Usage:
    def test_something(patternSet, manualDispatcher):
        ...
"""

import json
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generator

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from navlink.config.loader import buildPatternConfigSet
from navlink.config.store import ConfigStore
from navlink.config.types import PatternConfigSet, ResolvedKeywords
from navlink.delivery.dispatcher import Dispatcher, ScheduledTask
from navlink.delivery.exceptions import TransportError
from navlink.delivery.transport import Transport, TransportListener
from navlink.delivery.types import DeliverySettings
from navlink.parsing.text_parser import NavigationTextParser


# ================================================================================
# Test Doubles
# ================================================================================

class _ManualTask(ScheduledTask):
    def __init__(self, dueAt: float, fn: Callable[[], None]):
        self.dueAt = dueAt
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualDispatcher(Dispatcher):
    """
    Deterministic dispatcher with a virtual clock.

    submit() queues work; runPending() runs it. schedule() registers a timer
    that fires when advance() moves the clock past its due time.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.pending: list[Callable[[], None]] = []
        self.timers: list[_ManualTask] = []
        self.closed = False

    def submit(self, fn: Callable[[], None]) -> None:
        if not self.closed:
            self.pending.append(fn)

    def schedule(self, delaySeconds: float, fn: Callable[[], None]) -> ScheduledTask:
        task = _ManualTask(self.now + delaySeconds, fn)
        if not self.closed:
            self.timers.append(task)
        return task

    def shutdown(self) -> None:
        self.closed = True

    def runPending(self) -> int:
        """Run queued work, including work queued while running; returns the count."""
        count = 0
        while self.pending:
            fn = self.pending.pop(0)
            fn()
            count += 1
        return count

    def advance(self, seconds: float) -> None:
        """Move the clock, firing due timers in order and running resulting work."""
        target = self.now + seconds
        self.runPending()
        while True:
            due = sorted(
                (task for task in self.timers if not task.cancelled and task.dueAt <= target),
                key=lambda task: task.dueAt
            )
            if not due:
                break
            task = due[0]
            self.timers.remove(task)
            self.now = max(self.now, task.dueAt)
            task.fn()
            self.runPending()
        self.now = target

    def activeTimers(self) -> list[_ManualTask]:
        return [task for task in self.timers if not task.cancelled]


class FakeTransport(Transport):
    """Records requests; completions are driven by the test through the listener."""

    def __init__(self) -> None:
        self.listener: TransportListener | None = None
        self.calls: list[tuple[str, Any]] = []
        self.sent: list[bytes] = []
        self.sendResults: list[bool] = []
        self.failScan = False

    def bind(self, listener: TransportListener) -> None:
        self.listener = listener

    def startScan(self) -> None:
        self.calls.append(('startScan', None))
        if self.failScan:
            raise TransportError("adapter off")

    def stopScan(self) -> None:
        self.calls.append(('stopScan', None))

    def connect(self, address: str) -> None:
        self.calls.append(('connect', address))

    def disconnect(self) -> None:
        self.calls.append(('disconnect', None))

    def send(self, payload: bytes, timeout: float) -> bool:
        result = self.sendResults.pop(0) if self.sendResults else True
        if result:
            self.sent.append(payload)
        return result

    def callNames(self) -> list[str]:
        return [name for name, _ in self.calls]

    def sentText(self) -> list[str]:
        return [payload.decode('utf-8') for payload in self.sent]


# ================================================================================
# Pattern Fixtures
# ================================================================================

@pytest.fixture
def patternSet() -> PatternConfigSet:
    """Built-in pattern configuration."""
    return buildPatternConfigSet()


@pytest.fixture
def configStore(patternSet: PatternConfigSet) -> ConfigStore:
    return ConfigStore(patternSet)


@pytest.fixture
def resolvedKeywords(patternSet: PatternConfigSet) -> ResolvedKeywords:
    return patternSet.navigationKeywords.resolve()


@pytest.fixture
def textParser(resolvedKeywords: ResolvedKeywords) -> NavigationTextParser:
    return NavigationTextParser(resolvedKeywords)


# ================================================================================
# Delivery Fixtures
# ================================================================================

@pytest.fixture
def manualDispatcher() -> ManualDispatcher:
    return ManualDispatcher()


@pytest.fixture
def fakeTransport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def deliverySettings() -> DeliverySettings:
    """Small, round numbers so timer arithmetic in tests stays readable."""
    return DeliverySettings(
        deviceName='ESP32_BLE',
        scanTimeoutSeconds=10.0,
        connectionTimeoutSeconds=5.0,
        reconnectDelaySeconds=5.0,
        maxRetryAttempts=3,
        sendTimeoutSeconds=2.0,
        queueCapacity=3
    )


# ================================================================================
# Application Config Fixtures
# ================================================================================

@pytest.fixture
def sampleConfig() -> dict[str, Any]:
    """
    Provide a minimal application configuration.

    Returns:
        Dictionary with test configuration values
    """
    return {
        'application': {'name': 'NavLink', 'version': '1.0.0'},
        'logging': {'level': 'INFO', 'maskPII': True},
        'delivery': {
            'deviceName': 'ESP32_BLE',
            'scanTimeoutSeconds': 10.0,
            'connectionTimeoutSeconds': 5.0,
            'reconnectDelaySeconds': 5.0,
            'maxRetryAttempts': 3,
            'queueCapacity': 20,
            'autoStart': False
        },
        'patterns': {'files': {}, 'inline': {}},
        'simulator': {'discoveryDelaySeconds': 0.0, 'connectDelaySeconds': 0.0}
    }


@pytest.fixture
def tempConfigFile(tmp_path: Path, sampleConfig: dict[str, Any]) -> Path:
    """
    Write the sample configuration to a temporary file.

    Args:
        tmp_path: Pytest temp directory fixture
        sampleConfig: Sample configuration fixture

    Returns:
        Path to the configuration file
    """
    configPath = tmp_path / 'navlink_config.json'
    configPath.write_text(json.dumps(sampleConfig), encoding='utf-8')
    return configPath


@pytest.fixture
def cleanEnv() -> Generator[None, None, None]:
    """Remove NAVLINK_* variables for the duration of a test."""
    saved = {name: value for name, value in os.environ.items() if name.startswith('NAVLINK_')}
    for name in saved:
        del os.environ[name]

    yield

    for name in [name for name in os.environ if name.startswith('NAVLINK_')]:
        del os.environ[name]
    os.environ.update(saved)
