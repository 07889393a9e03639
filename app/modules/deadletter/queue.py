"""Work queue holding deferred requests until they are delivered.

The queue is an insertion-ordered mapping keyed by a stable id assigned at
admission. A single lock guards every structural change (admission,
compaction) and every write to per-request retry state, so admission running
concurrently with a scan never loses either the admitted request or the
scan's write-back.

Callers never receive references into the queue's storage: every read
returns a detached copy.
"""

import dataclasses
import threading
from datetime import datetime
from typing import Dict, List, Optional

from infrastructure.logging import get_module_logger
from modules.deadletter.models import DeferredRequest

logger = get_module_logger()


class QueueFullError(Exception):
    """Raised when admission would grow the queue past its bound."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Mailbox queue is full ({max_depth} pending requests)")
        self.max_depth = max_depth


def _detach(item: DeferredRequest) -> DeferredRequest:
    return dataclasses.replace(item, headers=dict(item.headers))


class WorkQueue:
    """Thread-safe in-memory queue of deferred requests.

    Supports:
    - Admission with stable ids (FIFO, no delivery-order guarantee)
    - Per-request attempt bookkeeping under the queue lock
    - Compaction that removes completed requests by key
    - An optional bound on the number of pending requests

    Attributes:
        max_depth: Maximum number of held requests, 0 for unbounded
    """

    def __init__(self, max_depth: int = 0) -> None:
        self._items: Dict[str, DeferredRequest] = {}
        self._lock = threading.Lock()
        self._next_id = 1
        self.max_depth = max_depth

    def add(self, item: DeferredRequest) -> str:
        """Append a request to the tail of the queue.

        Args:
            item: The request to admit. The queue stores its own copy.

        Returns:
            The id assigned to the request.

        Raises:
            QueueFullError: If the queue already holds max_depth requests.
        """
        with self._lock:
            if self.max_depth > 0 and len(self._items) >= self.max_depth:
                logger.warning(
                    "deferred_request_rejected_queue_full",
                    function=item.function,
                    max_depth=self.max_depth,
                )
                raise QueueFullError(self.max_depth)

            item_id = str(self._next_id)
            self._next_id += 1
            self._items[item_id] = dataclasses.replace(
                item, id=item_id, headers=dict(item.headers)
            )

            logger.info(
                "deferred_request_admitted",
                item_id=item_id,
                function=item.function,
                retries=item.retries,
                max_retries=item.max_retries,
                delay_seconds=item.delay_seconds,
                queue_depth=len(self._items),
            )
            return item_id

    def snapshot(self) -> List[str]:
        """Return the ids of pending requests in admission order."""
        with self._lock:
            return [item_id for item_id, item in self._items.items() if not item.sent]

    def begin_attempt(
        self, item_id: str, now: datetime
    ) -> Optional[DeferredRequest]:
        """Start an attempt on a request if it is due.

        Records the attempt (last attempt time and retry count) before any
        network call is made, so the restart delay is measured from the start
        of the attempt.

        Args:
            item_id: Id of the request to attempt.
            now: Current time, timezone aware.

        Returns:
            A detached copy reflecting the new state, or None if the request
            is gone, already complete, or not yet due.
        """
        with self._lock:
            item = self._items.get(item_id)
            if item is None or not item.is_due(now):
                return None

            item.last_attempt_time = max(item.last_attempt_time, now)
            item.retries += 1
            return _detach(item)

    def record_outcome(self, item_id: str, delivered: bool) -> bool:
        """Write the outcome of an attempt back into the request.

        A delivered request is complete. A failed request is complete only
        once it has exhausted a bounded attempt budget; otherwise it stays
        pending until its next deadline.

        Args:
            item_id: Id of the attempted request.
            delivered: Whether the gateway accepted the call.

        Returns:
            True if the request is now complete.
        """
        with self._lock:
            item = self._items.get(item_id)
            if item is None or item.sent:
                return False

            if delivered or item.is_exhausted:
                item.sent = True
            return item.sent

    def compact(self) -> int:
        """Remove every completed request.

        Returns:
            Number of requests removed.
        """
        with self._lock:
            completed = [item_id for item_id, item in self._items.items() if item.sent]
            for item_id in completed:
                del self._items[item_id]

            if completed:
                logger.debug(
                    "work_queue_compacted",
                    removed=len(completed),
                    queue_depth=len(self._items),
                )
            return len(completed)

    def get(self, item_id: str) -> Optional[DeferredRequest]:
        with self._lock:
            item = self._items.get(item_id)
            return _detach(item) if item is not None else None

    def items(self) -> List[DeferredRequest]:
        with self._lock:
            return [_detach(item) for item in self._items.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
