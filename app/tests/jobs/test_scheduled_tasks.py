import time
from unittest.mock import MagicMock, call, patch

import schedule

from jobs import scheduled_tasks


def test_init_registers_tick_and_heartbeat(mailbox_settings_factory):
    scheduler = MagicMock()
    mailbox = MagicMock()
    mailbox.settings = mailbox_settings_factory(MAILBOX_TICK_INTERVAL_SECONDS=3)

    scheduled_tasks.init(scheduler, mailbox)

    scheduler.every.assert_has_calls([call(3), call(5)], any_order=True)
    tick_registration = scheduler.every(3).seconds.do
    assert tick_registration.called
    heartbeat_call = scheduler.every(5).minutes.do.call_args
    assert heartbeat_call.kwargs == {"mailbox": mailbox}


def test_init_jobs_run_on_a_real_scheduler(mailbox_settings_factory):
    job_scheduler = schedule.Scheduler()
    mailbox = MagicMock()
    mailbox.settings = mailbox_settings_factory()

    scheduled_tasks.init(job_scheduler, mailbox)
    job_scheduler.run_all()

    mailbox.scheduler.tick.assert_called_once_with()
    assert len(job_scheduler.get_jobs()) == 2


def test_safe_run_returns_job_result():
    def tick(*args, **kwargs):
        return {"args": args, "kwargs": kwargs}

    result = scheduled_tasks.safe_run(tick)("a", key="b")

    assert result == {"args": ("a",), "kwargs": {"key": "b"}}


@patch("jobs.scheduled_tasks.logger")
def test_safe_run_logs_and_swallows_errors(mock_logger):
    def tick(**kwargs):
        raise RuntimeError("boom")

    result = scheduled_tasks.safe_run(tick)(key="b")

    assert result is None
    mock_logger.error.assert_called_once_with(
        "safe_run_error",
        error="boom",
        module=__name__,
        function="tick",
        arguments={"key": "b"},
        job_args=(),
    )


@patch("jobs.scheduled_tasks.logger")
def test_scheduler_heartbeat_logs_queue_depth(mock_logger, work_queue, deferred_request_factory):
    mailbox = MagicMock()
    mailbox.queue = work_queue
    work_queue.add(deferred_request_factory())

    scheduled_tasks.scheduler_heartbeat(mailbox)

    mock_logger.info.assert_called_once()
    args, kwargs = mock_logger.info.call_args
    assert args == ("running_scheduler_heartbeat",)
    assert kwargs["queue_depth"] == 1
    assert kwargs["module"] == "scheduled_tasks"


def test_run_continuously_runs_pending_until_stopped():
    scheduler = MagicMock()

    stop_event, thread = scheduled_tasks.run_continuously(scheduler, interval=0.01)
    deadline = time.monotonic() + 2
    while not scheduler.run_pending.called and time.monotonic() < deadline:
        time.sleep(0.01)
    stop_event.set()
    thread.join(2)

    assert scheduler.run_pending.called
    assert thread.name == "mailbox-scheduler"
    assert not thread.is_alive()
