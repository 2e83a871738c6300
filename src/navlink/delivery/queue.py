################################################################################
# File Name: queue.py
# Purpose/Description: Bounded outbound message queue with oldest-drop
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
Bounded FIFO of pending messages.

When full, the oldest message is evicted to make room: for navigation a
stale instruction is worse than none.
"""

import threading
from collections import deque

from navlink.model.types import QueuedMessage


class MessageQueue:
    """Thread-safe bounded queue of QueuedMessage items."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Queue capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._items: deque[QueuedMessage] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def enqueue(self, message: QueuedMessage) -> QueuedMessage | None:
        """
        Append a message at the tail.

        Returns:
            The evicted oldest message when the queue was full, else None
        """
        with self._lock:
            self._items.append(message)
            if len(self._items) > self._capacity:
                return self._items.popleft()
            return None

    def requeueFront(self, message: QueuedMessage) -> QueuedMessage | None:
        """
        Put a message back at the head after a failed send.

        The bound still holds; if the queue filled up meanwhile the head,
        which is the oldest message, is the one evicted.

        Returns:
            The evicted message, or None
        """
        with self._lock:
            self._items.appendleft(message)
            if len(self._items) > self._capacity:
                return self._items.popleft()
            return None

    def popleft(self) -> QueuedMessage | None:
        with self._lock:
            return self._items.popleft() if self._items else None

    def snapshot(self) -> list[QueuedMessage]:
        with self._lock:
            return list(self._items)

    def clear(self) -> int:
        """Discard everything; returns the number discarded."""
        with self._lock:
            count = len(self._items)
            self._items.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
