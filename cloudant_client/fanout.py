# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.

"""Run one thread per input value and collect what they produce.

Each thread is handed its value as a thread argument when it is created,
so no thread can observe a value that belongs to another iteration::

    >>> sorted(fan_out([3, 1, 2], lambda v: v * 10))
    [10, 20, 30]
"""

import logging
import queue
import threading


log = logging.getLogger(__name__)

CREATED = "created"
DISPATCHED = "dispatched"
AWAITING_COMPLETION = "awaiting_completion"
DRAINED = "drained"


class SinkClosedError(Exception):
    pass


class Sink(object):
    """Bounded multi-producer, single-consumer result queue.

    Producers ``put`` until the sink is closed; the consumer drains it once
    after closing. A put beyond ``capacity`` raises ``queue.Full`` rather
    than blocking, since nothing reads the sink while it is open.
    """

    def __init__(self, capacity):
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.count = 0
        self.closed = False
        self.drained = False
        self._queue = queue.Queue()
        self._lock = threading.Lock()

    def put(self, value):
        with self._lock:
            if self.closed:
                raise SinkClosedError("put on a closed sink")
            if self.count >= self.capacity:
                raise queue.Full()
            self.count += 1
            self._queue.put_nowait(value)

    def close(self):
        with self._lock:
            if self.closed:
                raise RuntimeError("sink is already closed")
            self.closed = True

    def drain(self):
        with self._lock:
            if not self.closed:
                raise RuntimeError("sink must be closed before it is drained")
            if self.drained:
                raise RuntimeError("sink has already been drained")
            self.drained = True
        items = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                return items


def _identity(value):
    return value


class FanOut(object):
    def __init__(self, values, task=None, capacity=None):
        self.values = tuple(values)
        self.task = task if task is not None else _identity
        if capacity is None:
            capacity = len(self.values)
        if capacity < len(self.values):
            raise ValueError(
                "sink capacity {} is smaller than the {} tasks writing to it".format(
                    capacity, len(self.values)
                )
            )
        self.sink = Sink(capacity)
        self.state = CREATED
        self.pending = 0
        self._threads = []
        self._failures = []
        self._lock = threading.Lock()

    def _run(self, value):
        log.debug("fan-out task running with %r", value)
        try:
            self.sink.put(self.task(value))
        except BaseException as e:
            with self._lock:
                self._failures.append(e)
        finally:
            with self._lock:
                self.pending -= 1

    def dispatch(self):
        if self.state != CREATED:
            raise RuntimeError("tasks have already been dispatched")
        with self._lock:
            self.pending = len(self.values)
        for value in self.values:
            t = threading.Thread(target=self._run, args=(value,))
            t.daemon = True
            t.start()
            self._threads.append(t)
        self.state = DISPATCHED

    def wait(self):
        if self.state != DISPATCHED:
            raise RuntimeError("wait() called in state {}".format(self.state))
        self.state = AWAITING_COMPLETION
        for t in self._threads:
            t.join()
        self.sink.close()

    def drain(self):
        if self.state != AWAITING_COMPLETION:
            raise RuntimeError("drain() called in state {}".format(self.state))
        results = self.sink.drain()
        self.state = DRAINED
        if self._failures:
            raise self._failures[0]
        return results


def fan_out(values, task=None):
    fo = FanOut(values, task)
    fo.dispatch()
    fo.wait()
    return fo.drain()


def same_members(a, b):
    return sorted(a) == sorted(b)
