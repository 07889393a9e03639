"""Fixtures for the HTTP route tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from modules.deadletter import (
    MailboxMetrics,
    MailboxService,
    RetryScheduler,
    WorkQueue,
)
from tests.support import StubRelay


@pytest.fixture
def mailbox(mailbox_settings_factory, clock):
    settings = mailbox_settings_factory()
    queue = WorkQueue(max_depth=settings.max_queue_depth)
    relay = StubRelay()
    metrics = MailboxMetrics()
    return MailboxService(
        settings=settings,
        queue=queue,
        relay=relay,
        metrics=metrics,
        scheduler=RetryScheduler(queue, relay, metrics, clock=clock),
    )


@pytest.fixture
def app(mailbox):
    # Routes only; the lifespan is exercised by the server tests
    application = FastAPI()
    setup_rate_limiter(application)
    application.include_router(api_router)
    application.state.mailbox = mailbox
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
