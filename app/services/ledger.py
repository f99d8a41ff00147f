"""
Run history: opening a run when a train starts and closing the right one when
it stops.
"""
from datetime import datetime
from typing import Any, Dict
import logging
import uuid

from app.models.run import TrainRun
from app.models.train import Train
from app.services.store import Store

logger = logging.getLogger(__name__)


class RunLedger:
    """
    Records start and stop events as runs.

    Starting always opens a fresh run. Stopping closes a run using three
    tiers so that a stop event always leaves a trace:

    1. the most recently started open run of the train;
    2. otherwise the most recently started run of the train, even if it is
       already closed (its stop time is overwritten);
    3. otherwise a new zero-length run starting and stopping at the stop time.
    """

    def __init__(self, store: Store):
        self.store = store

    def record_start(self, train_id: str, snapshot: Dict[str, Any], started_at: datetime) -> TrainRun:
        """Open a new run for the train with a frozen copy of its fields."""
        run = TrainRun(
            id=str(uuid.uuid4()),
            train_id=train_id,
            start_time=started_at,
            stop_time=None,
            **snapshot,
        )
        self.store.add_run(run)
        logger.info(f"Opened run {run.id} for train {train_id}")
        return run

    def record_stop(self, train: Train, stopped_at: datetime) -> TrainRun:
        """
        Close the run matching a stop of ``train`` at ``stopped_at``.

        Returns:
            The run that was closed or synthesized.
        """
        run = self.store.find_open_run(train.id)
        if run is not None:
            run.stop_time = stopped_at
            logger.info(f"Closed open run {run.id} for train {train.id}")
            return run

        run = self.store.find_latest_run(train.id)
        if run is not None:
            logger.warning(
                f"No open run for train {train.id}; overwriting stop time of run {run.id} "
                f"(was {run.stop_time})"
            )
            run.stop_time = stopped_at
            return run

        run = TrainRun(
            id=str(uuid.uuid4()),
            train_id=train.id,
            start_time=stopped_at,
            stop_time=stopped_at,
            **train.snapshot(),
        )
        self.store.add_run(run)
        logger.warning(f"No run history for train {train.id}; recorded zero-length run {run.id}")
        return run
