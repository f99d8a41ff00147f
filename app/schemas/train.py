"""
Pydantic schemas for roster API operations and live updates.
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime, timezone
from typing import List, Optional

from app.models.train import Location, Power, PowerType, TrainType


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mark naive database timestamps as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TrainFields(BaseModel):
    """Descriptive train fields shown on the public display."""
    name: str = Field(..., description="Display name of the train")
    railway: str = Field(..., description="Operating railway")
    country: str = Field(..., description="Country, usually a flag emoji")
    power: Power = Field(..., description="Steam, Diesel or Electric")
    train_type: TrainType = Field(..., alias="trainType", description="Service category")
    number_of_cars: int = Field(..., alias="numberOfCars", ge=0, le=100, description="Number of cars")
    power_type: PowerType = Field(..., alias="powerType", description="AC, DC or Digital")
    years: str = Field(..., description="Period the prototype ran in")
    notes: str = Field(default="", description="Free-form notes")
    location: Location = Field(..., description="Loop the train runs on")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RunningTrain(TrainFields):
    """Roster entry. The owner is never included."""
    id: str
    updated_at: datetime

    @field_validator('updated_at', mode='after')
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)


class RosterResponse(BaseModel):
    """Active roster returned by GET /running."""
    trains: List[RunningTrain]


class TrainCreated(BaseModel):
    id: str


class CommandAccepted(BaseModel):
    ok: bool = True


def serialize_roster(trains) -> list:
    """JSON-ready roster payload for HTTP responses and live updates."""
    return [
        RunningTrain.model_validate(train).model_dump(mode="json", by_alias=True)
        for train in trains
    ]
