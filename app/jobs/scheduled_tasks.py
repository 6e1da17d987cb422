import threading
import time
from typing import Optional

import schedule

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from jobs.cache_replay import run_cache_replay
from modules.cache import CacheReplayer

logger = get_module_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            job(*args, **kwargs)
        except Exception as e:
            logger.error(
                "safe_run_error",
                error=str(e),
                function=job.__name__,
                module=job.__module__,
                job_args=args,
                job_kwargs=kwargs,
                exc_info=True,
            )

    return wrapper


def init(
    replayer: CacheReplayer,
    directory: Optional[str] = None,
    interval_seconds: Optional[int] = None,
    scheduler: Optional[schedule.Scheduler] = None,
) -> Optional[schedule.Job]:
    """Register the cache replay job.

    Runs a first pass right away when REPLAY_ON_STARTUP is set.

    Returns:
        The scheduled replay job, or None when replay is disabled
    """
    cache_settings = settings.cache
    if not cache_settings.REPLAY_ENABLED:
        logger.info("cache_replay_disabled")
        return None

    directory = directory or cache_settings.CACHE_DIR
    interval_seconds = interval_seconds or cache_settings.REPLAY_INTERVAL_SECONDS
    if scheduler is None:
        scheduler = schedule.default_scheduler

    logger.info(
        "scheduled_tasks_initialized",
        directory=directory,
        interval_seconds=interval_seconds,
    )

    job = scheduler.every(interval_seconds).seconds.do(
        safe_run(run_cache_replay), replayer, directory
    )
    scheduler.every(5).minutes.do(safe_run(scheduler_heartbeat))

    if cache_settings.REPLAY_ON_STARTUP:
        safe_run(run_cache_replay)(replayer, directory)

    return job


def scheduler_heartbeat():
    logger.info(
        "running_scheduler_heartbeat",
        module="scheduled_tasks",
        time=time.ctime(),
    )


def run_continuously(interval=1, scheduler: Optional[schedule.Scheduler] = None):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Please note that it is
    *intended behavior that run_continuously() does not run
    missed jobs*. For example, if you've registered a job that
    should run every minute and you set a continuous run
    interval of one hour then your job won't be run 60 times
    at each interval but only once.
    """
    cease_continuous_run = threading.Event()
    if scheduler is None:
        scheduler = schedule.default_scheduler

    class ScheduleThread(threading.Thread):
        def run(self):
            while not cease_continuous_run.is_set():
                scheduler.run_pending()
                cease_continuous_run.wait(interval)

    continuous_thread = ScheduleThread(daemon=True)
    continuous_thread.start()
    return cease_continuous_run
