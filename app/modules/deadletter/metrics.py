"""Prometheus metrics for the mailbox.

Each MailboxMetrics owns its own CollectorRegistry so several applications
(for example in tests) can coexist in one process without colliding on
metric names.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)


class MailboxMetrics:
    """Queue depth gauge and relay counters."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        self.queue_depth = Gauge(
            "mailbox_queue_depth",
            "Mailbox Queue Depth",
            registry=self.registry,
        )
        self.requests_admitted = Counter(
            "mailbox_requests_admitted",
            "Deferred requests admitted to the mailbox",
            registry=self.registry,
        )
        self.relay_attempts = Counter(
            "mailbox_relay_attempts",
            "Relay attempts made against the gateway",
            ["outcome"],
            registry=self.registry,
        )
        self.requests_exhausted = Counter(
            "mailbox_requests_exhausted",
            "Deferred requests abandoned after using their retry budget",
            registry=self.registry,
        )

    def render(self) -> tuple[bytes, str]:
        """Return the exposition payload and its content type."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
