"""
Train database model.
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum, Boolean, Text
import enum

from app.db.base import Base


class Power(enum.Enum):
    """How the locomotive is powered."""
    STEAM = "Steam"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"


class TrainType(enum.Enum):
    """Service category of a train."""
    PASSENGER = "Passenger"
    FREIGHT = "Freight"
    SPECIAL = "Special"
    MIXED = "Mixed"


class PowerType(enum.Enum):
    """Layout control system the model runs on."""
    AC = "AC"
    DC = "DC"
    DIGITAL = "Digital"


class Location(enum.Enum):
    """Loops of the layout a train can run on."""
    UPPER_LOOP = "Upper loop"
    LOWER_LOOP_1 = "Lower loop 1"
    LOWER_LOOP_2 = "Lower loop 2"


def enum_column(enum_cls):
    """Column type persisting an enum by its display value."""
    return Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=32,
    )


# Descriptive fields shared by trains and run snapshots
DESCRIPTIVE_FIELDS = (
    "name", "railway", "country", "power", "train_type", "number_of_cars",
    "power_type", "years", "notes", "owner", "location",
)


class TrainFieldsMixin:
    """Descriptive columns of a model train."""
    name = Column(String(200), nullable=False)
    railway = Column(String(200), nullable=False)
    country = Column(String(50), nullable=False)  # emoji flag
    power = Column(enum_column(Power), nullable=False)
    train_type = Column(enum_column(TrainType), nullable=False)
    number_of_cars = Column(Integer, nullable=False, default=0)
    power_type = Column(enum_column(PowerType), nullable=False)
    years = Column(String(50), nullable=False)  # e.g. 1950 or 1950–1960
    notes = Column(Text, nullable=False, default="")
    owner = Column(String(200), nullable=False, default="")  # never shown on the display
    location = Column(enum_column(Location), nullable=False)

    def snapshot(self) -> dict:
        """Copy of the descriptive fields."""
        return {field: getattr(self, field) for field in DESCRIPTIVE_FIELDS}


class Train(TrainFieldsMixin, Base):
    """
    Train model representing a model train on the roster.

    Attributes:
        id: Opaque unique identifier (UUID4)
        name: Display name of the train
        railway: Operating railway company
        country: Country shown on the display, usually a flag emoji
        power: Steam, Diesel or Electric
        train_type: Passenger, Freight, Special or Mixed
        number_of_cars: Number of cars, 0-100
        power_type: AC, DC or Digital
        years: Period the prototype ran in
        notes: Free-form notes
        owner: Owner of the model (not public)
        location: Loop the train runs on
        active: Whether the train is currently running
        updated_at: Time of the last mutation (UTC)
    """
    __tablename__ = "trains"

    id = Column(String(36), primary_key=True, index=True)
    active = Column(Boolean, nullable=False, default=True, index=True)
    updated_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Train(id={self.id}, name={self.name}, location={self.location}, active={self.active})>"
