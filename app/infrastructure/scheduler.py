"""Background scheduler that periodically sweeps due announcements."""

from __future__ import annotations

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session

from app.application.use_cases.announcements import SweepReport, run_scheduled_sweep

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "announcement_sweep"


class AnnouncementScheduler:
    """Own the interval job that promotes due scheduled announcements.

    One job runs at a time: a slow sweep delays the next tick instead of
    overlapping it.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        interval_seconds: int = 60,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._session_factory = session_factory
        self._interval_seconds = interval_seconds
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def interval_seconds(self) -> int:
        return self._interval_seconds

    def start(self) -> None:
        """Start the background job; calling it twice has no effect."""

        if self.running:
            return
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self._interval_seconds),
            id=SWEEP_JOB_ID,
            name="Sweep due scheduled announcements",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info(
            "Announcement scheduler started (every %s seconds)", self._interval_seconds
        )

    def stop(self, *, wait: bool = True) -> None:
        """Stop the background job if it is running."""

        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Announcement scheduler stopped")
        self._scheduler = None

    def run_once(self) -> SweepReport:
        """Execute a single sweep with a fresh session."""

        session = self._session_factory()
        try:
            return run_scheduled_sweep(session)
        finally:
            session.close()

    def _tick(self) -> None:
        try:
            self.run_once()
        except Exception:
            logger.exception("Announcement sweep failed")


__all__ = ["AnnouncementScheduler", "SWEEP_JOB_ID"]
