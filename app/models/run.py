"""
Run history database model.
"""
from sqlalchemy import Column, String, DateTime

from app.db.base import Base
from app.models.train import TrainFieldsMixin


class TrainRun(TrainFieldsMixin, Base):
    """
    One continuous interval during which a train was running.

    The descriptive fields are a snapshot taken when the run opened, so later
    edits to the train do not change history.

    Attributes:
        id: Unique run identifier (UUID4)
        train_id: Id of the originating train (no foreign key)
        start_time: When the run opened (UTC)
        stop_time: When the run closed (UTC), None while open
    """
    __tablename__ = "train_runs"

    id = Column(String(36), primary_key=True, index=True)
    train_id = Column(String(36), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    stop_time = Column(DateTime, nullable=True)

    @property
    def is_open(self) -> bool:
        return self.stop_time is None

    def __repr__(self) -> str:
        return f"<TrainRun(id={self.id}, train_id={self.train_id}, start={self.start_time}, stop={self.stop_time})>"
