"""
Weekly triggers for the article pipelines.

Each trigger runs on its own daemon thread and fires once a week at a fixed
local weekday/hour/minute:
- Round-up: Monday 20:00
- Vlog: Wednesday 20:00

A failing run is logged with its traceback and the trigger keeps going.

Usage:
    scheduler = ArticleScheduler.from_config(pipeline)
    scheduler.start()
    # ... application runs ...
    scheduler.stop()
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from loguru import logger

from rugby_etl.config import SCHEDULE_CONFIG


@dataclass(frozen=True)
class WeeklySchedule:
    day_of_week: int  # Monday=0
    hour: int
    minute: int = 0

    def next_run(self, after: datetime) -> datetime:
        """First slot strictly after the given time."""
        candidate = after.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        candidate += timedelta(days=(self.day_of_week - after.weekday()) % 7)
        if candidate <= after:
            candidate += timedelta(days=7)
        return candidate


class WeeklyTrigger:
    """Runs one job on a weekly schedule in a background thread."""

    def __init__(
        self,
        name: str,
        schedule: WeeklySchedule,
        job: Callable[[], object],
        clock: Callable[[], datetime] = datetime.now
    ):
        self.name = name
        self.schedule = schedule
        self.job = job
        self._clock = clock

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._last_run: Optional[datetime] = None
        self._next_run: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def last_run(self) -> Optional[datetime]:
        return self._last_run

    @property
    def next_run(self) -> Optional[datetime]:
        return self._next_run

    def start(self) -> bool:
        """
        Start the trigger thread.

        Returns:
            True if started, False if already running
        """
        if self.is_running:
            logger.warning(f"Trigger '{self.name}' already running")
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name=f"trigger-{self.name}", daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: float = 30.0) -> bool:
        """
        Stop the trigger thread.

        Returns:
            True if stopped, False if the thread did not finish in time
        """
        if not self.is_running:
            return True

        self._stop_event.set()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning(f"Trigger '{self.name}' did not stop in time")
            return False
        return True

    def fire(self) -> bool:
        """
        Run the job once, now.

        Returns:
            True if the job completed, False if it raised
        """
        self._last_run = self._clock()
        logger.info(f"[TRIGGER] {self.name} fired at {self._last_run:%Y-%m-%d %H:%M}")

        try:
            self.job()
        except Exception as e:
            logger.exception(f"Error in '{self.name}' run: {e}")
            return False
        return True

    def _run_loop(self):
        while not self._stop_event.is_set():
            now = self._clock()
            self._next_run = self.schedule.next_run(now)
            logger.info(f"Trigger '{self.name}' next run: {self._next_run:%Y-%m-%d %H:%M}")

            wait_seconds = (self._next_run - now).total_seconds()
            if self._stop_event.wait(timeout=wait_seconds):
                return

            self.fire()


class ArticleScheduler:
    """The round-up and vlog triggers, started and stopped together."""

    def __init__(self, triggers: List[WeeklyTrigger]):
        self.triggers: Dict[str, WeeklyTrigger] = {t.name: t for t in triggers}

    @classmethod
    def from_config(cls, pipeline, schedule_config: Optional[Dict] = None) -> 'ArticleScheduler':
        """
        Build both triggers for a pipeline.

        Args:
            pipeline: NewspaperPipeline
            schedule_config: SCHEDULE_CONFIG-style dict (default: SCHEDULE_CONFIG)
        """
        config = schedule_config or SCHEDULE_CONFIG
        days_back = config.get('days_back', 7)
        previous_max = config.get('previous_vlogs_max', 10)

        return cls([
            WeeklyTrigger(
                'roundup',
                WeeklySchedule(**config['roundup']),
                lambda: pipeline.run_weekly_roundups(days_back=days_back),
            ),
            WeeklyTrigger(
                'vlog',
                WeeklySchedule(**config['vlog']),
                lambda: pipeline.run_vlog(max_previous=previous_max),
            ),
        ])

    @property
    def is_running(self) -> bool:
        return any(t.is_running for t in self.triggers.values())

    def start(self):
        for trigger in self.triggers.values():
            trigger.start()
        logger.info(f"Article scheduler started ({', '.join(self.triggers)})")

    def stop(self, timeout: float = 30.0) -> bool:
        logger.info("Stopping article scheduler...")
        stopped = [t.stop(timeout) for t in self.triggers.values()]
        logger.info("Article scheduler stopped")
        return all(stopped)

    def run_now(self, name: str) -> bool:
        """Fire one trigger synchronously (manual run)."""
        if name not in self.triggers:
            raise KeyError(f"Unknown trigger: {name}")
        return self.triggers[name].fire()

    def status(self) -> Dict[str, Dict]:
        return {
            name: {
                'running': t.is_running,
                'last_run': t.last_run.isoformat() if t.last_run else None,
                'next_run': t.next_run.isoformat() if t.next_run else None,
            }
            for name, t in self.triggers.items()
        }
