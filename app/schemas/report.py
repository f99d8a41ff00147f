"""
Pydantic schemas for the daily run report.
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime
from typing import List, Optional

from app.schemas.train import TrainFields, as_utc


class RunDuration(BaseModel):
    """Length of a run in whole minutes."""
    minutes: int = Field(..., ge=0, description="Total duration in minutes")
    hours: int = Field(..., ge=0, description="Whole hours")
    remainder_minutes: int = Field(..., alias="remainderMinutes", ge=0, lt=60, description="Minutes past the whole hours")

    model_config = ConfigDict(populate_by_name=True)


class RunReport(TrainFields):
    """One run in the daily report, with the snapshot taken at start."""
    train_id: str
    owner: str = ""
    start_time: datetime
    stop_time: Optional[datetime] = None
    duration: RunDuration

    @field_validator('start_time', 'stop_time', mode='after')
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)


class RunReportResponse(BaseModel):
    runs: List[RunReport]
