"""Deferred request model.

A deferred request is a call that could not be completed synchronously and is
now waiting in the mailbox for another delivery attempt. The definition
fields are fixed at admission; the state fields belong to the retry scheduler.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional


@dataclass
class DeferredRequest:
    """A call awaiting delivery to the gateway.

    Fields:
        function: Target function identifier (required, non-blank)
        body: Opaque payload relayed verbatim
        query: Raw query string of the admission request
        headers: Caller headers relayed alongside the body
        max_retries: Attempt budget, 0 retries until delivered
        restart_delay: Minimum spacing between two attempts
        id: Stable identifier assigned by the work queue
        retries: Attempts made so far (seeded from X-Retries)
        last_attempt_time: When the last attempt started (admission time at first)
        sent: Completion flag, no further attempts once set

    Example:
        request = DeferredRequest(
            function="echo",
            body=b"hello",
            restart_delay=timedelta(seconds=4),
        )
    """

    # Definition
    function: str
    body: bytes = b""
    query: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    max_retries: int = 0
    restart_delay: timedelta = field(default_factory=lambda: timedelta(seconds=4))

    # State
    id: Optional[str] = None
    retries: int = 0
    last_attempt_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    sent: bool = False

    def __post_init__(self) -> None:
        """Validate the definition."""
        if not self.function or not self.function.strip():
            raise ValueError("function is required")
        if not isinstance(self.body, bytes):
            raise ValueError("body must be bytes")
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.retries < 0:
            raise ValueError("retries must not be negative")
        if self.restart_delay < timedelta(0):
            raise ValueError("restart_delay must not be negative")
        try:
            self.last_attempt_time + self.restart_delay
        except OverflowError:
            raise ValueError("restart_delay is too large")

    @property
    def deadline(self) -> datetime:
        """Earliest time the next attempt may start."""
        return self.last_attempt_time + self.restart_delay

    def is_due(self, now: datetime) -> bool:
        if self.sent:
            return False
        try:
            return now >= self.deadline
        except OverflowError:
            # Deadline past datetime.max
            return False

    @property
    def is_exhausted(self) -> bool:
        """True once a bounded request has used its whole attempt budget."""
        return self.max_retries > 0 and self.retries >= self.max_retries

    @property
    def delay_seconds(self) -> int:
        return int(self.restart_delay.total_seconds())
