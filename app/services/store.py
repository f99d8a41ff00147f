"""
Persistence interface for trains and their run history.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional
import logging

from sqlalchemy.orm import Session

from app.models.run import TrainRun
from app.models.train import Train

logger = logging.getLogger(__name__)


class Store(ABC):
    """Storage operations needed by the registry, ledger and reports."""

    @abstractmethod
    def transaction(self):
        """Context manager committing on success and rolling back on error."""

    @abstractmethod
    def list_active_trains(self) -> List[Train]:
        """Active trains by location ascending, then most recently updated first."""

    @abstractmethod
    def get_train(self, train_id: str) -> Optional[Train]:
        """Train by id, active or not."""

    @abstractmethod
    def add_train(self, train: Train) -> None:
        ...

    @abstractmethod
    def add_run(self, run: TrainRun) -> None:
        ...

    @abstractmethod
    def find_open_run(self, train_id: str) -> Optional[TrainRun]:
        """Most recently started run of the train that has no stop time."""

    @abstractmethod
    def find_latest_run(self, train_id: str) -> Optional[TrainRun]:
        """Most recently started run of the train, open or closed."""

    @abstractmethod
    def runs_started_between(self, start: datetime, end: datetime) -> List[TrainRun]:
        """Runs with start <= start_time < end, earliest first."""


class SqlAlchemyStore(Store):
    """Store backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            yield self.db
            self.db.commit()
        except Exception:
            logger.error("Rolling back roster transaction")
            self.db.rollback()
            raise

    def list_active_trains(self) -> List[Train]:
        return (
            self.db.query(Train)
            .filter(Train.active.is_(True))
            .order_by(Train.location.asc(), Train.updated_at.desc())
            .all()
        )

    def get_train(self, train_id: str) -> Optional[Train]:
        return self.db.query(Train).filter(Train.id == train_id).first()

    def add_train(self, train: Train) -> None:
        self.db.add(train)
        self.db.flush()

    def add_run(self, run: TrainRun) -> None:
        self.db.add(run)
        self.db.flush()

    def find_open_run(self, train_id: str) -> Optional[TrainRun]:
        return (
            self.db.query(TrainRun)
            .filter(TrainRun.train_id == train_id, TrainRun.stop_time.is_(None))
            .order_by(TrainRun.start_time.desc())
            .first()
        )

    def find_latest_run(self, train_id: str) -> Optional[TrainRun]:
        return (
            self.db.query(TrainRun)
            .filter(TrainRun.train_id == train_id)
            .order_by(TrainRun.start_time.desc())
            .first()
        )

    def runs_started_between(self, start: datetime, end: datetime) -> List[TrainRun]:
        return (
            self.db.query(TrainRun)
            .filter(TrainRun.start_time >= start, TrainRun.start_time < end)
            .order_by(TrainRun.start_time.asc())
            .all()
        )
