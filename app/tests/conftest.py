"""Shared fixtures for the mailbox test suite."""

import sys
from datetime import timedelta
from pathlib import Path
from typing import Dict

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `modules.deadletter`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from infrastructure.configuration import MailboxSettings  # noqa: E402
from modules.deadletter import (  # noqa: E402
    DeferredRequest,
    MailboxMetrics,
    RetryScheduler,
    WorkQueue,
)
from tests.support import FakeClock, StubRelay  # noqa: E402


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def deferred_request_factory(clock):
    """Factory for creating DeferredRequest instances admitted at the fake clock's time."""

    def _factory(
        function: str = "echo",
        body: bytes = b"payload",
        delay_seconds: int = 4,
        max_retries: int = 0,
        retries: int = 0,
        query: str = "",
        headers: Dict[str, str] | None = None,
    ) -> DeferredRequest:
        return DeferredRequest(
            function=function,
            body=body,
            query=query,
            headers=headers or {},
            max_retries=max_retries,
            restart_delay=timedelta(seconds=delay_seconds),
            retries=retries,
            last_attempt_time=clock(),
        )

    return _factory


@pytest.fixture
def work_queue():
    return WorkQueue()


@pytest.fixture
def stub_relay():
    return StubRelay()


@pytest.fixture
def mailbox_metrics():
    return MailboxMetrics()


@pytest.fixture
def retry_scheduler_factory(work_queue, mailbox_metrics, clock):
    """Factory for schedulers over the shared queue, metrics and clock."""

    def _factory(relay=None) -> RetryScheduler:
        return RetryScheduler(
            work_queue,
            relay or StubRelay(),
            mailbox_metrics,
            clock=clock,
        )

    return _factory


@pytest.fixture
def mailbox_settings_factory():
    """Factory for MailboxSettings built from explicit values, not the environment."""

    def _factory(**overrides) -> MailboxSettings:
        values = {
            "gateway_url": "http://gateway.test:8080",
            "MAILBOX_TICK_INTERVAL_SECONDS": 1,
            "MAILBOX_RELAY_TIMEOUT_SECONDS": 5,
            "MAILBOX_DEFAULT_DELAY_SECONDS": 4,
            "MAILBOX_MAX_QUEUE_DEPTH": 100,
            "MAILBOX_SCHEDULER_ENABLED": False,
        }
        values.update(overrides)
        return MailboxSettings(**values)

    return _factory
