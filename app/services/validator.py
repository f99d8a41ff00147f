"""
Validation of train records submitted by the admin.

Records arrive with the wire field names used by the display and admin
clients (``trainType``, ``numberOfCars``, ``powerType``). The first rule that
fails decides the error message.
"""
import enum
from typing import Any, Dict, Mapping, Optional, Type

from app.core.exceptions import ValidationError
from app.models.train import Location, Power, PowerType, TrainType

# Wire name -> column name
WIRE_FIELDS = {
    "name": "name",
    "railway": "railway",
    "country": "country",
    "power": "power",
    "trainType": "train_type",
    "numberOfCars": "number_of_cars",
    "powerType": "power_type",
    "years": "years",
    "notes": "notes",
    "owner": "owner",
    "location": "location",
}

MIN_CARS = 0
MAX_CARS = 100


def _choices(enum_cls: Type[enum.Enum]) -> str:
    return ", ".join(member.value for member in enum_cls)


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _member(enum_cls: Type[enum.Enum], value: Any) -> Optional[enum.Enum]:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _car_count(value: Any) -> Optional[int]:
    # bool is an int subclass but never a car count
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < MIN_CARS or value > MAX_CARS:
        return None
    return value


def normalize_number_of_cars(value: Any) -> Any:
    """
    Coerce form-style input for ``numberOfCars`` to an int.

    Numeric strings and integral floats become ints; anything else is returned
    unchanged and left for validation to reject.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return value
        return int(number) if number.is_integer() else number
    return value


def validate_train(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check a train record against the domain rules.

    Args:
        record: Fields keyed by wire name. Enum fields may be raw strings or
            enum members.

    Returns:
        The cleaned fields keyed by column name, with enum members in place of
        strings and ``notes``/``owner`` defaulted to "".

    Raises:
        ValidationError: On the first violated rule.
    """
    name = record.get("name")
    if not _non_empty_string(name):
        raise ValidationError("name required")

    railway = record.get("railway")
    if not _non_empty_string(railway):
        raise ValidationError("railway required")

    country = record.get("country")
    if not _non_empty_string(country):
        raise ValidationError("country required (emoji flag)")

    power = _member(Power, record.get("power"))
    if power is None:
        raise ValidationError(f"power must be one of: {_choices(Power)}")

    train_type = _member(TrainType, record.get("trainType"))
    if train_type is None:
        raise ValidationError(f"trainType must be one of: {_choices(TrainType)}")

    number_of_cars = _car_count(record.get("numberOfCars"))
    if number_of_cars is None:
        raise ValidationError(
            f"numberOfCars must be an integer between {MIN_CARS} and {MAX_CARS}"
        )

    power_type = _member(PowerType, record.get("powerType"))
    if power_type is None:
        raise ValidationError(f"powerType must be one of: {_choices(PowerType)}")

    years = record.get("years")
    if not _non_empty_string(years):
        raise ValidationError("years required (e.g. 1950 or 1950–1960)")

    location = _member(Location, record.get("location"))
    if location is None:
        raise ValidationError(f"location must be one of: {_choices(Location)}")

    notes = record.get("notes", "")
    if not isinstance(notes, str):
        raise ValidationError("notes must be a string")

    owner = record.get("owner", "")
    if not isinstance(owner, str):
        raise ValidationError("owner must be a string")

    return {
        "name": name,
        "railway": railway,
        "country": country,
        "power": power,
        "train_type": train_type,
        "number_of_cars": number_of_cars,
        "power_type": power_type,
        "years": years,
        "notes": notes,
        "owner": owner,
        "location": location,
    }


def to_wire(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Re-key column-named fields by wire name."""
    return {wire: fields[column] for wire, column in WIRE_FIELDS.items() if column in fields}
