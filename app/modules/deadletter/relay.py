"""Relay client delivering deferred requests to the gateway.

One call to ``attempt`` is one delivery attempt:

    RelayClient.attempt(request)
        ↓
    POST {gateway_url}/async-function/{function}/?{query}
        headers: caller headers + X-Retries, X-Max-Retries, X-Delay-Duration
        body:    original payload
        ↓
    OperationResult (data = gateway status code, or GATEWAY_UNREACHABLE)

The retry headers let the gateway, or any later hop, wrap the call into a new
deferred request with the same budget.

Usage:
    from modules.deadletter.relay import RelayClient

    client = RelayClient(gateway_url="http://gateway:8080", timeout=10)
    result = client.attempt(request)
    if result.is_success:
        ...
"""

from typing import Dict, Optional

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_gateway_response,
    classify_transport_error,
)
from modules.deadletter.models import DeferredRequest

logger = get_module_logger()

RETRIES_HEADER = "X-Retries"
MAX_RETRIES_HEADER = "X-Max-Retries"
DELAY_DURATION_HEADER = "X-Delay-Duration"


def build_retry_headers(request: DeferredRequest) -> Dict[str, str]:
    """Retry metadata headers for the request's current state."""
    return {
        RETRIES_HEADER: str(request.retries),
        MAX_RETRIES_HEADER: str(request.max_retries),
        DELAY_DURATION_HEADER: str(request.delay_seconds),
    }


class RelayClient:
    """HTTP client performing delivery attempts against the gateway.

    Attributes:
        gateway_url: Gateway base URL, without trailing slash
        timeout: Timeout applied to every attempt in seconds
        session: Requests session with connection pooling
    """

    def __init__(
        self,
        gateway_url: str = "http://gateway:8080",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.gateway_url = gateway_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "mailbox-relay/1.0"})
        self._logger = logger.bind(gateway_url=self.gateway_url)

    def url_for(self, function: str) -> str:
        return f"{self.gateway_url}/async-function/{function}/"

    def attempt(self, request: DeferredRequest) -> OperationResult:
        """Perform one delivery attempt.

        Never raises for transport failures; every outcome is reported
        through the returned OperationResult.

        Args:
            request: Snapshot of the request at the start of this attempt.

        Returns:
            OperationResult: SUCCESS when the gateway answers 200 or 202,
            TRANSIENT_ERROR otherwise. ``data`` holds the status code.
        """
        url = self.url_for(request.function)
        headers = dict(request.headers)
        headers.update(build_retry_headers(request))

        log = self._logger.bind(
            item_id=request.id,
            function=request.function,
            url=url,
            retries=request.retries,
            max_retries=request.max_retries,
        )

        try:
            response = self._session.post(
                url,
                data=request.body,
                params=request.query or None,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            result = classify_transport_error(e)
            log.error(
                "relay_attempt_unreachable",
                error=str(e),
                error_code=result.error_code,
            )
            return result

        result = classify_gateway_response(response.status_code)
        if result.is_success:
            log.info("relay_attempt_delivered", status_code=response.status_code)
        else:
            log.warning(
                "relay_attempt_rejected",
                status_code=response.status_code,
                error_code=result.error_code,
            )
        return result

    def close(self) -> None:
        """Close HTTP session and release connections."""
        self._session.close()
        self._logger.debug("relay_client_closed")
