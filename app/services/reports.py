"""
Daily report of train runs and how long each lasted.
"""
from datetime import date, datetime, time, timedelta
from typing import List
import math

from app.core.clock import Clock, utcnow
from app.models.run import TrainRun
from app.schemas.report import RunDuration, RunReport
from app.services.store import Store


def compute_duration(start: datetime, end: datetime) -> RunDuration:
    """Whole minutes between two instants, rounded half up and never negative."""
    elapsed_minutes = (end - start).total_seconds() / 60
    minutes = max(0, math.floor(elapsed_minutes + 0.5))
    return RunDuration(minutes=minutes, hours=minutes // 60, remainder_minutes=minutes % 60)


class ReportGenerator:
    """Read-only view over run history."""

    def __init__(self, store: Store, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def runs_for_date(self, day: date) -> List[RunReport]:
        """
        Runs that started on the given UTC calendar day, earliest first.

        Open runs are measured up to now, so their duration grows between
        calls.
        """
        day_start = datetime.combine(day, time.min)
        runs = self.store.runs_started_between(day_start, day_start + timedelta(days=1))
        now = self.clock()
        return [self._report(run, now) for run in runs]

    @staticmethod
    def _report(run: TrainRun, now: datetime) -> RunReport:
        end = run.stop_time if run.stop_time is not None else now
        return RunReport(
            train_id=run.train_id,
            start_time=run.start_time,
            stop_time=run.stop_time,
            duration=compute_duration(run.start_time, end),
            **run.snapshot(),
        )
