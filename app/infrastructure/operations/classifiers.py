"""Classifiers for gateway responses and transport exceptions.

Converts raw HTTP outcomes of a relay attempt into standardized
OperationResult objects. Every failure is transient: the gateway is not
asked why a call failed, only whether it was accepted.

Key Functions:
- classify_gateway_response(): gateway status code → OperationResult
- classify_transport_error(): requests exception → OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_gateway_response,
        classify_transport_error,
    )

    try:
        response = session.post(url, data=body, timeout=timeout)
    except requests.RequestException as exc:
        return classify_transport_error(exc)
    return classify_gateway_response(response.status_code)
"""

from http import HTTPStatus

import requests

from infrastructure.operations.result import OperationResult

# Status codes the gateway uses to acknowledge a call
ACCEPTED_STATUS_CODES = frozenset({HTTPStatus.OK, HTTPStatus.ACCEPTED})

# Reported in place of a status code when the gateway could not be reached
GATEWAY_UNREACHABLE = HTTPStatus.BAD_GATEWAY.value


def classify_gateway_response(status_code: int) -> OperationResult:
    """Classify a gateway response status code.

    Args:
        status_code: HTTP status code returned by the gateway.

    Returns:
        OperationResult: SUCCESS for 200/202, TRANSIENT_ERROR for anything
        else. ``data`` always holds the status code.
    """
    if status_code in ACCEPTED_STATUS_CODES:
        return OperationResult.success(
            data=status_code, message=f"Gateway accepted call ({status_code})"
        )

    return OperationResult.transient_error(
        message=f"Unexpected status from gateway: {status_code}",
        error_code=f"HTTP_{status_code}",
        data=status_code,
    )


def classify_transport_error(exc: Exception) -> OperationResult:
    """Classify an exception raised while talking to the gateway.

    Args:
        exc: Exception raised by the HTTP client.

    Returns:
        OperationResult with TRANSIENT_ERROR status and ``data`` set to
        GATEWAY_UNREACHABLE.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            message=f"Gateway timed out: {exc}",
            error_code="TIMEOUT",
            data=GATEWAY_UNREACHABLE,
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            message=f"Connection error: {exc}",
            error_code="GATEWAY_UNREACHABLE",
            data=GATEWAY_UNREACHABLE,
        )

    return OperationResult.transient_error(
        message=f"Unexpected error: {exc}",
        error_code="UNEXPECTED_ERROR",
        data=GATEWAY_UNREACHABLE,
    )
