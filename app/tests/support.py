"""Test doubles shared across the mailbox test suite."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List

from infrastructure.operations import (
    GATEWAY_UNREACHABLE,
    OperationResult,
    classify_gateway_response,
)
from modules.deadletter import DeferredRequest
from modules.deadletter.relay import build_retry_headers

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable replacement for the scheduler clock."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class StubRelay:
    """Relay client double answering with a scripted list of status codes.

    The last status code repeats once the script is used up. ``None`` in the
    script simulates an unreachable gateway.
    """

    def __init__(self, statuses: List[int | None] | None = None):
        self.statuses = list(statuses or [202])
        self.attempts: List[DeferredRequest] = []
        self.headers_seen: List[Dict[str, str]] = []

    def attempt(self, request: DeferredRequest) -> OperationResult:
        self.attempts.append(request)
        self.headers_seen.append(build_retry_headers(request))
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if status is None:
            return OperationResult.transient_error(
                message="Connection error",
                error_code="GATEWAY_UNREACHABLE",
                data=GATEWAY_UNREACHABLE,
            )
        return classify_gateway_response(status)

    def close(self):
        pass
