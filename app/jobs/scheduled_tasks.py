import threading
import time

import schedule

from infrastructure.logging import get_module_logger
from modules.deadletter import MailboxService

logger = get_module_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            return job(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "safe_run_error",
                error=str(e),
                module=job.__module__,
                function=job.__name__,
                arguments=kwargs,
                job_args=args,
            )
            return None

    return wrapper


def init(scheduler: schedule.Scheduler, mailbox: MailboxService) -> None:
    interval = mailbox.settings.tick_interval_seconds
    logger.info("scheduled_tasks_initialized", tick_interval_seconds=interval)

    scheduler.every(interval).seconds.do(safe_run(mailbox.scheduler.tick))
    scheduler.every(5).minutes.do(safe_run(scheduler_heartbeat), mailbox=mailbox)


def scheduler_heartbeat(mailbox: MailboxService):
    logger.info(
        "running_scheduler_heartbeat",
        module="scheduled_tasks",
        time=time.ctime(),
        queue_depth=len(mailbox.queue),
    )


def run_continuously(scheduler: schedule.Scheduler, interval=0.2):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run, continuous_thread: threading.Event which can
    be set to cease continuous run, and the thread running the loop so the
    caller can wait for an in-progress tick to finish. Please note that it is
    *intended behavior that run_continuously() does not run
    missed jobs*. A tick that overruns its period is followed by
    a single tick, never by a burst of catch-up ticks.
    """
    cease_continuous_run = threading.Event()

    def run():
        while not cease_continuous_run.is_set():
            scheduler.run_pending()
            cease_continuous_run.wait(interval)

    continuous_thread = threading.Thread(
        target=run, daemon=True, name="mailbox-scheduler"
    )
    continuous_thread.start()
    return cease_continuous_run, continuous_thread
