from fastapi import APIRouter, Response

from infrastructure.services import MailboxServiceDep

router = APIRouter(tags=["Metrics"])


@router.get("/metrics")
def get_metrics(mailbox: MailboxServiceDep):
    """Prometheus exposition of the mailbox metrics."""
    payload, content_type = mailbox.metrics.render()
    return Response(content=payload, media_type=content_type)
