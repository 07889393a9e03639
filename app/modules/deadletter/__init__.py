"""Dead-letter mailbox.

Holds deferred calls in memory and keeps relaying them to the gateway until
they are accepted or abandoned.

Architecture:
- DeferredRequest: call definition plus retry state
- WorkQueue: lock-guarded mapping of pending requests
- RelayClient: one delivery attempt against the gateway
- RetryScheduler: periodic scan, attempt, write-back and compaction
- MailboxMetrics: Prometheus gauge and counters
- MailboxService: the wired object graph for one application
"""

from modules.deadletter.metrics import MailboxMetrics
from modules.deadletter.models import DeferredRequest
from modules.deadletter.queue import QueueFullError, WorkQueue
from modules.deadletter.relay import RelayClient, build_retry_headers
from modules.deadletter.scheduler import RetryScheduler
from modules.deadletter.service import MailboxService, create_mailbox_service

__all__ = [
    "DeferredRequest",
    "WorkQueue",
    "QueueFullError",
    "RelayClient",
    "build_retry_headers",
    "RetryScheduler",
    "MailboxMetrics",
    "MailboxService",
    "create_mailbox_service",
]
