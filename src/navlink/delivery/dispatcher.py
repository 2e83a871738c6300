################################################################################
# File Name: dispatcher.py
# Purpose/Description: Single-worker task dispatcher with cancellable timers
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | shutdown() callable from the worker thread
# ================================================================================
################################################################################
"""
Dispatcher for delivery work.

All transport completions, timers and sends of one DeliveryManager run on a
single worker so that payloads leave in FIFO order and state transitions
never interleave. Timers fire on a threading.Timer and hop onto the worker.

Tests substitute a manual dispatcher that runs work only when told to.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)


class ScheduledTask(ABC):
    """Handle of a delayed task."""

    @abstractmethod
    def cancel(self) -> None:
        pass


class Dispatcher(ABC):
    """
    Abstract serial executor.

    All dispatchers must implement:
    - submit(): Run a callable on the worker as soon as possible
    - schedule(): Run a callable on the worker after a delay
    - shutdown(): Stop accepting work
    """

    @abstractmethod
    def submit(self, fn: Callable[[], None]) -> None:
        pass

    @abstractmethod
    def schedule(self, delaySeconds: float, fn: Callable[[], None]) -> ScheduledTask:
        pass

    @abstractmethod
    def shutdown(self) -> None:
        pass


class _TimerTask(ScheduledTask):
    def __init__(self, timer: threading.Timer, owner: 'ThreadedDispatcher'):
        self._timer = timer
        self._owner = owner

    def cancel(self) -> None:
        self._timer.cancel()
        self._owner._forget(self._timer)


class ThreadedDispatcher(Dispatcher):
    """
    Dispatcher backed by a one-thread executor.

    Exceptions raised by tasks are logged and do not stop the worker.
    """

    def __init__(self, name: str = 'navlink-delivery'):
        self._name = name
        self._workerIdent: int | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=name,
            initializer=self._markWorker
        )
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, fn: Callable[[], None]) -> None:
        with self._lock:
            if self._closed:
                logger.debug(f"Dispatcher closed, task ignored | dispatcher={self._name}")
                return
            self._executor.submit(self._run, fn)

    def schedule(self, delaySeconds: float, fn: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(max(delaySeconds, 0.0), lambda: self._fire(timer, fn))
        timer.daemon = True
        with self._lock:
            if not self._closed:
                self._timers.add(timer)
                timer.start()
        return _TimerTask(timer, self)

    def shutdown(self) -> None:
        """
        Cancel pending timers and wait for queued tasks to finish.

        Called from a task on the worker itself (a status listener that
        cleans up, for instance) it returns without waiting; queued tasks
        still run after the current one.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        onWorker = threading.get_ident() == self._workerIdent
        self._executor.shutdown(wait=not onWorker)
        logger.debug(f"Dispatcher stopped | dispatcher={self._name} waited={not onWorker}")

    def _markWorker(self) -> None:
        self._workerIdent = threading.get_ident()

    def _fire(self, timer: threading.Timer, fn: Callable[[], None]) -> None:
        self._forget(timer)
        self.submit(fn)

    def _forget(self, timer: threading.Timer) -> None:
        with self._lock:
            self._timers.discard(timer)

    def _run(self, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception as e:
            logger.error(f"Dispatcher task failed | dispatcher={self._name} error={e}", exc_info=True)
