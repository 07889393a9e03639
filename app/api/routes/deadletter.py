"""Admission endpoint for deferred requests.

A caller that could not complete a synchronous call posts it here; the
mailbox holds it and relays it to the gateway later.
"""

from datetime import timedelta

from fastapi import APIRouter, HTTPException, Request, status

from api.dependencies.rate_limits import admission_rate_limit, get_limiter
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.services import MailboxServiceDep
from modules.deadletter import DeferredRequest, QueueFullError
from modules.deadletter.relay import (
    DELAY_DURATION_HEADER,
    MAX_RETRIES_HEADER,
    RETRIES_HEADER,
)

logger = get_module_logger()
router = APIRouter(tags=["Dead Letter"])
limiter = get_limiter()

# Headers that describe the admission hop itself and are never relayed
NON_FORWARDED_HEADERS = frozenset(
    {
        "host",
        "content-length",
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
        RETRIES_HEADER.lower(),
        MAX_RETRIES_HEADER.lower(),
        DELAY_DURATION_HEADER.lower(),
    }
)


def parse_int_header(request: Request, name: str, default: int) -> int:
    """Read a non-negative integer header, falling back to a default.

    Raises:
        HTTPException: 400 if the header is present but not a
        non-negative integer.
    """
    raw = request.headers.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be an integer",
        )
    if value < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must not be negative",
        )
    return value


def forwarded_headers(request: Request) -> dict[str, str]:
    return {
        key: value
        for key, value in request.headers.items()
        if key.lower() not in NON_FORWARDED_HEADERS
    }


@router.post("/deadletter")
@router.post("/deadletter/")
def reject_missing_function():
    """Deferred requests must name the function to call."""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="function is required",
    )


@router.post("/deadletter/{function}", status_code=status.HTTP_202_ACCEPTED)
@limiter.limit(admission_rate_limit)
async def admit_deferred_request(
    function: str, request: Request, mailbox: MailboxServiceDep
):
    """Admit a deferred call for later delivery to the gateway.

    Headers:
        X-Delay-Duration: seconds between attempts (default from settings)
        X-Retries: attempts already made by earlier hops (default 0)
        X-Max-Retries: attempt budget, 0 for unlimited (default 0)
    """
    with bind_request_context(
        correlation_id=request.headers.get("X-Correlation-ID"),
        request_path=request.url.path,
        request_method=request.method,
    ):
        if not function.strip():
            logger.warning("deferred_request_rejected", reason="missing_function")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="function is required",
            )

        delay = parse_int_header(
            request, DELAY_DURATION_HEADER, mailbox.settings.default_delay_seconds
        )
        retries = parse_int_header(request, RETRIES_HEADER, 0)
        max_retries = parse_int_header(request, MAX_RETRIES_HEADER, 0)
        try:
            restart_delay = timedelta(seconds=delay)
        except OverflowError:
            logger.warning("deferred_request_rejected", reason="delay_out_of_range")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{DELAY_DURATION_HEADER} is too large",
            )
        body = await request.body()

        try:
            deferred = DeferredRequest(
                function=function,
                body=body,
                query=request.url.query,
                headers=forwarded_headers(request),
                max_retries=max_retries,
                restart_delay=restart_delay,
                retries=retries,
            )
        except ValueError as e:
            logger.warning("deferred_request_rejected", reason=str(e))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
            )

        try:
            item_id = mailbox.admit(deferred)
        except QueueFullError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Mailbox queue is full",
            ) from e

        return {"id": item_id}
