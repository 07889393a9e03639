"""Mailbox service wiring.

Builds the object graph (queue, relay client, metrics, scheduler) once per
application from explicit settings. The FastAPI lifespan stores the result on
``app.state.mailbox``; routes and the periodic job receive it from there.
"""

from dataclasses import dataclass

from infrastructure.configuration import MailboxSettings
from infrastructure.logging import get_module_logger
from modules.deadletter.metrics import MailboxMetrics
from modules.deadletter.models import DeferredRequest
from modules.deadletter.queue import WorkQueue
from modules.deadletter.relay import RelayClient
from modules.deadletter.scheduler import RetryScheduler

logger = get_module_logger()


@dataclass
class MailboxService:
    """Everything the admission path and the scheduler share."""

    settings: MailboxSettings
    queue: WorkQueue
    relay: RelayClient
    metrics: MailboxMetrics
    scheduler: RetryScheduler

    def admit(self, request: DeferredRequest) -> str:
        """Admit a deferred request.

        Raises:
            QueueFullError: If the queue is at capacity.
        """
        item_id = self.queue.add(request)
        self.metrics.requests_admitted.inc()
        return item_id

    def close(self) -> None:
        self.relay.close()


def create_mailbox_service(settings: MailboxSettings) -> MailboxService:
    """Factory to create the mailbox service from configuration.

    Args:
        settings: Mailbox settings (gateway, timeouts, queue bound).

    Returns:
        A fully wired MailboxService.

    Examples:
        >>> service = create_mailbox_service(get_settings().mailbox)
        >>> service.scheduler.tick()
    """
    queue = WorkQueue(max_depth=settings.max_queue_depth)
    relay = RelayClient(
        gateway_url=settings.gateway_url,
        timeout=settings.relay_timeout_seconds,
    )
    metrics = MailboxMetrics()
    scheduler = RetryScheduler(queue, relay, metrics)

    logger.info(
        "mailbox_service_created",
        gateway_url=relay.gateway_url,
        relay_timeout_seconds=settings.relay_timeout_seconds,
        max_queue_depth=settings.max_queue_depth,
    )
    return MailboxService(
        settings=settings,
        queue=queue,
        relay=relay,
        metrics=metrics,
        scheduler=scheduler,
    )
