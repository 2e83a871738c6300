################################################################################
# File Name: test_delivery_queue.py
# Purpose/Description: Tests for the delivery queue, settings, stats and dispatcher
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Shutdown from the worker thread
# ================================================================================
################################################################################

"""
Tests for navlink.delivery queue, types and dispatcher.

Run with:
    pytest tests/test_delivery_queue.py -v
"""

import threading

import pytest

from navlink.delivery.dispatcher import ThreadedDispatcher
from navlink.delivery.queue import MessageQueue
from navlink.delivery.types import DeliverySettings, DeliveryStats
from navlink.model.types import Direction, NavigationData, QueuedMessage


def _message(index: int) -> QueuedMessage:
    return QueuedMessage(NavigationData(direction=Direction.LEFT, distance=f'{index} m'), timestamp=index)


class TestMessageQueue:
    """Tests for MessageQueue."""

    def test_enqueue_beyondCapacity_keepsMostRecentInOrder(self):
        """
        Given: A queue of capacity 3
        When: 4 messages are enqueued
        Then: The first is evicted and the last 3 remain in order
        """
        queue = MessageQueue(3)
        evicted = [queue.enqueue(_message(i)) for i in range(4)]

        assert evicted[:3] == [None, None, None]
        assert evicted[3].timestamp == 0
        assert [m.timestamp for m in queue.snapshot()] == [1, 2, 3]

    def test_requeueFront_fullQueue_evictsOldest(self):
        """
        Given: A full queue
        When: A message is put back at the head
        Then: That head message, the oldest, is the one evicted
        """
        queue = MessageQueue(2)
        queue.enqueue(_message(1))
        queue.enqueue(_message(2))

        evicted = queue.requeueFront(_message(0))

        assert evicted.timestamp == 0
        assert len(queue) == 2

    def test_requeueFront_withRoom_restoresHead(self):
        """
        Given: A popped message and room in the queue
        When: It is requeued
        Then: It is first again
        """
        queue = MessageQueue(3)
        queue.enqueue(_message(1))
        queue.enqueue(_message(2))
        head = queue.popleft()

        assert queue.requeueFront(head) is None
        assert queue.popleft() is head

    def test_popleft_empty_returnsNone(self):
        """
        Given: An empty queue
        When: popleft() is called
        Then: None
        """
        assert MessageQueue(1).popleft() is None

    def test_clear_returnsDiscardedCount(self):
        """
        Given: Two queued messages
        When: clear() is called
        Then: 2 is returned and the queue is empty
        """
        queue = MessageQueue(5)
        queue.enqueue(_message(1))
        queue.enqueue(_message(2))

        assert queue.clear() == 2
        assert len(queue) == 0

    def test_init_zeroCapacity_raisesValueError(self):
        """
        Given: Capacity 0
        When: The queue is created
        Then: ValueError
        """
        with pytest.raises(ValueError):
            MessageQueue(0)


class TestDeliverySettings:
    """Tests for DeliverySettings."""

    def test_fromConfig_partialSection_fillsDefaultsAndIgnoresUnknown(self):
        """
        Given: A delivery section with one known and one unknown key
        When: fromConfig() is called
        Then: The known key is used, the rest default
        """
        settings = DeliverySettings.fromConfig({'delivery': {'queueCapacity': 7, 'colour': 'red'}})

        assert settings.queueCapacity == 7
        assert settings.deviceName == 'ESP32_BLE'
        assert settings.maxRetryAttempts == 3

    def test_retryDelay_withBackoff_growsGeometrically(self):
        """
        Given: 5 s base delay and multiplier 2
        When: retryDelay() is called for attempts 1..3
        Then: 5, 10, 20
        """
        settings = DeliverySettings(reconnectDelaySeconds=5.0, backoffMultiplier=2.0)

        assert [settings.retryDelay(n) for n in (1, 2, 3)] == [5.0, 10.0, 20.0]

    def test_retryDelay_defaultMultiplier_isFixed(self):
        """
        Given: Default multiplier 1.0
        When: retryDelay() is called
        Then: Always the base delay
        """
        assert DeliverySettings().retryDelay(4) == 5.0


class TestDeliveryStats:
    """Tests for DeliveryStats."""

    def test_successRate_noAttempts_isZero(self):
        """
        Given: Fresh stats
        When: successRate is read
        Then: 0.0
        """
        assert DeliveryStats().successRate == 0.0

    def test_toDict_mixedResults_roundsRate(self):
        """
        Given: 2 sent and 1 failed
        When: toDict() is called
        Then: successRate 66.7
        """
        stats = DeliveryStats(sent=2, failed=1, dropped=4)

        result = stats.toDict()

        assert result['successRate'] == 66.7
        assert result['dropped'] == 4


class TestThreadedDispatcher:
    """Tests for ThreadedDispatcher."""

    def test_submit_tasks_runInOrderOnOneThread(self):
        """
        Given: A dispatcher and five submitted tasks
        When: The dispatcher shuts down
        Then: All ran in submission order on one worker thread
        """
        dispatcher = ThreadedDispatcher(name='test-dispatcher')
        results = []
        threads = set()

        for i in range(5):
            dispatcher.submit(lambda i=i: (results.append(i), threads.add(threading.get_ident())))
        dispatcher.shutdown()

        assert results == [0, 1, 2, 3, 4]
        assert len(threads) == 1

    def test_submit_failingTask_workerKeepsRunning(self):
        """
        Given: A task that raises
        When: Another task is submitted after it
        Then: The second task still runs
        """
        dispatcher = ThreadedDispatcher()
        results = []

        def boom():
            raise RuntimeError('boom')

        dispatcher.submit(boom)
        dispatcher.submit(lambda: results.append('after'))
        dispatcher.shutdown()

        assert results == ['after']

    def test_schedule_delayedTask_runsOnWorker(self):
        """
        Given: A task scheduled with a short delay
        When: The delay elapses
        Then: The task runs
        """
        dispatcher = ThreadedDispatcher()
        done = threading.Event()

        dispatcher.schedule(0.01, done.set)

        assert done.wait(2.0) is True
        dispatcher.shutdown()

    def test_schedule_cancelledTask_neverRuns(self):
        """
        Given: A scheduled task that is cancelled
        When: Its delay would have elapsed
        Then: It has not run
        """
        dispatcher = ThreadedDispatcher()
        done = threading.Event()

        task = dispatcher.schedule(0.05, done.set)
        task.cancel()

        assert done.wait(0.2) is False
        dispatcher.shutdown()

    def test_submit_afterShutdown_isIgnored(self):
        """
        Given: A shut-down dispatcher
        When: A task is submitted
        Then: It does not run and nothing raises
        """
        dispatcher = ThreadedDispatcher()
        dispatcher.shutdown()
        results = []

        dispatcher.submit(lambda: results.append(1))

        assert results == []

    def test_shutdown_fromWorkerTask_returnsWithoutJoiningItself(self):
        """
        Given: A task that shuts its own dispatcher down, with another task queued behind it
        When: The worker runs it
        Then: No error; the queued task still runs and later work is ignored
        """
        dispatcher = ThreadedDispatcher()
        release = threading.Event()
        stopped = threading.Event()
        drained = threading.Event()
        errors = []
        results = []

        def stopFromWorker():
            release.wait(timeout=2.0)
            try:
                dispatcher.shutdown()
            except RuntimeError as e:
                errors.append(e)
            stopped.set()

        dispatcher.submit(stopFromWorker)
        dispatcher.submit(lambda: (results.append('queued'), drained.set()))
        release.set()

        assert stopped.wait(timeout=2.0)
        assert drained.wait(timeout=2.0)
        assert errors == []
        assert results == ['queued']

        dispatcher.submit(lambda: results.append('late'))
        assert results == ['queued']
