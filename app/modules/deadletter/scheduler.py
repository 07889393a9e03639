"""Retry scheduler for the mailbox work queue.

One tick scans the queue, attempts every request whose restart delay has
elapsed, writes each outcome back, compacts the queue and publishes its
depth. Ticks are driven by the periodic job runner in ``jobs``.

Max-retry policy:
    max_retries == 0  retry until the gateway accepts the call
    max_retries > 0   abandon the request after a failed attempt once
                      retries >= max_retries (logged and counted)
"""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from infrastructure.logging import get_module_logger
from modules.deadletter.metrics import MailboxMetrics
from modules.deadletter.queue import WorkQueue
from modules.deadletter.relay import RelayClient

logger = get_module_logger()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RetryScheduler:
    """Periodic scanner of the work queue.

    The scheduler is the only writer of retry state. It never holds the queue
    lock across a relay attempt, so admission only ever waits on the lock for
    in-memory bookkeeping.

    Attributes:
        queue: WorkQueue being scanned
        relay: RelayClient used for delivery attempts
        metrics: MailboxMetrics receiving the depth gauge and counters
        clock: Callable returning the current UTC time
    """

    def __init__(
        self,
        queue: WorkQueue,
        relay: RelayClient,
        metrics: MailboxMetrics,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.queue = queue
        self.relay = relay
        self.metrics = metrics
        self.clock = clock
        self._tick_lock = threading.Lock()
        self.log = logger.bind(component="retry_scheduler")

    def tick(self) -> Optional[dict]:
        """Run one scan of the queue.

        Returns:
            Dictionary with tick statistics:
                - scanned: Pending requests seen at the start of the tick
                - attempted: Requests that were due and attempted
                - delivered: Attempts accepted by the gateway
                - failed: Attempts that were not accepted
                - exhausted: Failed requests abandoned by the max-retry policy
                - removed: Requests dropped by compaction
                - depth: Queue depth after compaction
            or None if another tick was still running.
        """
        if not self._tick_lock.acquire(blocking=False):
            self.log.warning("retry_tick_skipped_overlap")
            return None

        try:
            return self._run_tick()
        finally:
            self._tick_lock.release()

    def _run_tick(self) -> dict:
        stats = {
            "scanned": 0,
            "attempted": 0,
            "delivered": 0,
            "failed": 0,
            "exhausted": 0,
            "removed": 0,
            "depth": 0,
        }

        item_ids = self.queue.snapshot()
        stats["scanned"] = len(item_ids)

        for item_id in item_ids:
            try:
                request = self.queue.begin_attempt(item_id, self.clock())
            except Exception as e:  # pylint: disable=broad-except
                self.log.error(
                    "retry_item_skipped",
                    item_id=item_id,
                    error=str(e),
                    exc_info=True,
                )
                continue
            if request is None:
                continue

            stats["attempted"] += 1
            delivered = self._attempt(request)

            completed = self.queue.record_outcome(item_id, delivered)
            if delivered:
                stats["delivered"] += 1
                self.metrics.relay_attempts.labels(outcome="delivered").inc()
                continue

            stats["failed"] += 1
            self.metrics.relay_attempts.labels(outcome="failed").inc()
            if completed:
                stats["exhausted"] += 1
                self.metrics.requests_exhausted.inc()
                self.log.warning(
                    "deferred_request_exhausted",
                    item_id=item_id,
                    function=request.function,
                    retries=request.retries,
                    max_retries=request.max_retries,
                )

        stats["removed"] = self.queue.compact()
        stats["depth"] = len(self.queue)
        self.metrics.queue_depth.set(stats["depth"])

        if stats["attempted"] or stats["removed"]:
            self.log.info("retry_tick_complete", **stats)
        return stats

    def _attempt(self, request) -> bool:
        try:
            return self.relay.attempt(request).is_success
        except Exception as e:  # pylint: disable=broad-except
            self.log.error(
                "relay_attempt_exception",
                item_id=request.id,
                function=request.function,
                error=str(e),
                exc_info=True,
            )
            return False
