################################################################################
# File Name: store.py
# Purpose/Description: Thread-safe holder of the current pattern config snapshot
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
Configuration store.

Holds the current PatternConfigSet. Readers call get() once per unit of work
and use that snapshot throughout; reload builds a new set and swaps it in
with replace().

Usage:
    store = ConfigStore(buildPatternConfigSet())
    snapshot = store.get()
    store.replace(buildPatternConfigSet(newRaw))
"""

import logging
import threading
from collections.abc import Callable

from .types import PatternConfigSet

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Owner of the active pattern configuration snapshot.

    Attributes:
        version: Incremented on every replace(); lets dependents cache
            derived objects per snapshot
    """

    def __init__(self, initial: PatternConfigSet):
        self._lock = threading.Lock()
        self._current = initial
        self._version = 0
        self._listeners: list[Callable[[PatternConfigSet], None]] = []

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def get(self) -> PatternConfigSet:
        """Return the current snapshot."""
        with self._lock:
            return self._current

    def replace(self, newSet: PatternConfigSet) -> None:
        """
        Atomically swap in a new snapshot and notify listeners.

        Args:
            newSet: Fully built replacement configuration
        """
        with self._lock:
            previous = self._current
            self._current = newSet
            self._version += 1
            listeners = list(self._listeners)

        if previous.mcuFormats.activeFormat != newSet.mcuFormats.activeFormat:
            logger.info(
                f"Active format changed | from={previous.mcuFormats.activeFormat} "
                f"to={newSet.mcuFormats.activeFormat}"
            )
        logger.info("Pattern configuration replaced")

        for listener in listeners:
            listener(newSet)

    def addListener(self, listener: Callable[[PatternConfigSet], None]) -> None:
        """Register a callback invoked with each new snapshot."""
        with self._lock:
            self._listeners.append(listener)

    def removeListener(self, listener: Callable[[PatternConfigSet], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
