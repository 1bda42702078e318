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

import logging
import math
import random
import threading
import time

from ..errors import CloudantError


log = logging.getLogger(__name__)

MIN_CLIENT_TIMEOUT = 60
LONGPOLL_TIMEOUT = MIN_CLIENT_TIMEOUT - 3
BATCH_SIZE = 10000
BASE_DELAY = 0.1
EXP_RETRY_GATE = int(math.log(LONGPOLL_TIMEOUT / BASE_DELAY, 2))

FINITE = "finite"
LISTEN = "listen"

TERMINAL_STATUSES = (400, 401, 403, 404)

INVALID_OPTIONS = ("descending", "feed", "heartbeat", "last_event_id", "timeout")


def validate_options(options):
    if options.get("db") is None:
        raise ValueError("db must be provided")
    invalid = [name for name in INVALID_OPTIONS if options.get(name) is not None]
    flt = options.get("filter")
    if flt is not None and flt != "_selector":
        invalid.append("filter={}".format(flt))
    if len(invalid) == 1:
        raise ValueError(
            "The option '{}' is invalid when using ChangesFollower.".format(invalid[0])
        )
    elif invalid:
        raise ValueError(
            "The options {} are invalid when using ChangesFollower.".format(
                ", ".join(invalid)
            )
        )


class ChangesFollower(object):
    """Follow a database's changes feed, surviving transient errors.

    ``start()`` listens for new changes until ``stop()`` is called;
    ``start_one_off()`` reads the feed up to the point it was started.
    Both return a generator of change results. ``error_tolerance`` is how
    long, in seconds since the last successful request, transient errors
    are retried: ``None`` retries forever and ``0`` never retries.
    """

    def __init__(self, client, error_tolerance=None, **options):
        validate_options(options)
        if client.timeout is not None and client.timeout < MIN_CLIENT_TIMEOUT:
            raise ValueError(
                "To use ChangesFollower the client timeout must be at least "
                "{} ms. The client timeout is {} ms.".format(
                    MIN_CLIENT_TIMEOUT * 1000, int(client.timeout * 1000)
                )
            )
        if error_tolerance is not None and error_tolerance < 0:
            raise ValueError("Error tolerance duration must not be negative.")
        self.client = client
        self.options = dict(options)
        self.limit = options.get("limit")
        self.error_tolerance = error_tolerance
        self.retry = 0
        self._started = False
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    def start(self):
        return self._run(LISTEN)

    def start_one_off(self):
        return self._run(FINITE)

    def stop(self):
        self._stopped.set()

    def _run(self, mode):
        with self._lock:
            if self._started:
                raise RuntimeError("Cannot start a feed that has already started.")
            self._started = True

        since = self.options.get("since")
        if since is None:
            since = "0" if mode == FINITE else "now"

        opts = dict(self.options)
        opts.pop("since", None)
        if mode == FINITE:
            opts["feed"] = "normal"
        else:
            opts["feed"] = "longpoll"
            opts["timeout"] = LONGPOLL_TIMEOUT * 1000
        opts["limit"] = self._batch_size()
        log.debug("Applying changes limit %d", opts["limit"])
        return self._follow(mode, since, opts)

    def _batch_size(self):
        batch_size = BATCH_SIZE
        if self.options.get("include_docs"):
            info = self.client.get_database_information(self.options["db"])
            info = info.get_result()
            docs = info.get("doc_count") or 0
            external = (info.get("sizes") or {}).get("external") or 0
            if docs > 0 and external > 0:
                batch_size = max(1, 5 * 1024 * 1024 // (external // docs + 500))
        if self.limit is not None and 0 < self.limit < batch_size:
            batch_size = self.limit
        return batch_size

    def _follow(self, mode, since, opts):
        remaining = self.limit
        last_success = time.monotonic()
        while not self._stopped.is_set():
            if remaining == 0:
                self.stop()
                return
            try:
                result = self.client.post_changes(since=since, **opts).get_result()
            except CloudantError as e:
                log.debug("Error getting changes: %s", e)
                if e.status_code in TERMINAL_STATUSES:
                    log.debug("Terminal error.")
                    raise
                if not self._tolerates(last_success):
                    log.debug("Error tolerance deadline exceeded.")
                    raise
                self._retry_delay()
                continue
            since = result["last_seq"]
            self.retry = 0
            last_success = time.monotonic()
            for item in result.get("results", []):
                if remaining == 0 or self._stopped.is_set():
                    return
                yield item
                if remaining is not None:
                    remaining -= 1
            if mode == FINITE and result.get("pending", 0) == 0:
                return

    def _tolerates(self, last_success):
        if self.error_tolerance is None:
            return True
        if self.error_tolerance == 0:
            return False
        return time.monotonic() - last_success < self.error_tolerance

    def _retry_delay(self):
        if self.retry < EXP_RETRY_GATE:
            delay = (2 ** self.retry) * BASE_DELAY
        else:
            delay = LONGPOLL_TIMEOUT
        self.retry += 1
        # wakes up early when stopped
        self._stopped.wait(random.uniform(0, delay))
