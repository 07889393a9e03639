from contextlib import asynccontextmanager
import threading
from typing import AsyncIterator, Optional, Tuple, TYPE_CHECKING

import schedule
from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_settings
from jobs import scheduled_tasks
from modules.deadletter import MailboxService, create_mailbox_service

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

# Upper bound on waiting for an in-progress tick at shutdown
SCHEDULER_JOIN_TIMEOUT_SECONDS = 5.0


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(log_level=settings.LOG_LEVEL)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _start_scheduled_tasks(
    mailbox: MailboxService,
    logger: BoundLogger,
) -> Tuple[Optional[threading.Event], Optional[threading.Thread]]:
    if not mailbox.settings.scheduler_enabled:
        logger.info("scheduled_tasks_skipped", reason="scheduler_disabled")
        return None, None

    job_scheduler = schedule.Scheduler()
    scheduled_tasks.init(job_scheduler, mailbox)
    stop_event, thread = scheduled_tasks.run_continuously(job_scheduler)
    logger.info("scheduled_tasks_started")
    return stop_event, thread


def _stop_scheduled_tasks(
    stop_event: Optional[threading.Event],
    thread: Optional[threading.Thread],
    logger: BoundLogger,
    timeout: float = SCHEDULER_JOIN_TIMEOUT_SECONDS,
) -> None:
    if stop_event is None:
        return
    stop_event.set()
    if thread is None:
        return

    thread.join(timeout)
    if thread.is_alive():
        logger.warning("scheduled_tasks_stop_timeout", timeout_seconds=timeout)
    else:
        logger.info("scheduled_tasks_stopped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    mailbox = create_mailbox_service(settings.mailbox)
    app.state.mailbox = mailbox
    stop_event, thread = _start_scheduled_tasks(mailbox, logger)
    app.state.scheduled_stop_event = stop_event
    app.state.scheduled_thread = thread

    yield

    logger.info("application_shutdown", pending_requests=len(mailbox.queue))

    # Pending requests are volatile and dropped here
    _stop_scheduled_tasks(
        app.state.scheduled_stop_event, app.state.scheduled_thread, logger
    )
    mailbox.close()
