"""
The live roster of running trains and the commands that change it.
"""
from typing import Any, Dict, List, Mapping, Optional
import logging
import uuid

from app.core.clock import Clock, utcnow
from app.core.exceptions import NotFoundError
from app.models.train import Train
from app.schemas.train import serialize_roster
from app.services.broadcast import Broadcaster
from app.services.ledger import RunLedger
from app.services.store import Store
from app.services.validator import (
    WIRE_FIELDS,
    normalize_number_of_cars,
    to_wire,
    validate_train,
)

logger = logging.getLogger(__name__)


class TrainRegistry:
    """
    Starts, edits and stops trains.

    Every mutation runs validate, mutate, ledger update and commit without
    yielding to the event loop, so mutations never interleave. The refreshed
    roster is published to viewers only after the commit.
    """

    def __init__(
        self,
        store: Store,
        ledger: Optional[RunLedger] = None,
        broadcaster: Optional[Broadcaster] = None,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.ledger = ledger or RunLedger(store)
        self.broadcaster = broadcaster
        self.clock = clock

    def list_active(self) -> List[Train]:
        """Active trains ordered by location, most recently updated first."""
        return self.store.list_active_trains()

    def roster(self) -> List[Dict[str, Any]]:
        """Serialized active roster as sent to viewers."""
        return serialize_roster(self.list_active())

    async def start(self, fields: Mapping[str, Any]) -> Train:
        """
        Put a new train on the roster and open a run for it.

        Args:
            fields: Train fields keyed by wire name

        Returns:
            The created train

        Raises:
            ValidationError: If any field violates its rule
        """
        record = dict(fields)
        if "numberOfCars" in record:
            record["numberOfCars"] = normalize_number_of_cars(record["numberOfCars"])
        cleaned = validate_train(record)

        now = self.clock()
        train = Train(id=str(uuid.uuid4()), active=True, updated_at=now, **cleaned)
        with self.store.transaction():
            self.store.add_train(train)
            self.ledger.record_start(train.id, train.snapshot(), now)

        logger.info(f"Started train {train.id} ({train.name}) on {train.location.value}")
        await self._publish()
        return train

    async def update(self, train_id: str, fields: Mapping[str, Any]) -> Train:
        """
        Merge a partial edit onto a train.

        The merged record is validated as a whole, so an edit can be rejected
        for a field it did not touch. Run history is not changed.

        Raises:
            NotFoundError: If no train has this id
            ValidationError: If the merged record violates any rule
        """
        train = self.store.get_train(train_id)
        if train is None:
            raise NotFoundError(train_id)

        merged = to_wire(train.snapshot())
        for key, value in fields.items():
            if key in WIRE_FIELDS:
                merged[key] = value
        if "numberOfCars" in fields:
            merged["numberOfCars"] = normalize_number_of_cars(fields["numberOfCars"])
        cleaned = validate_train(merged)

        with self.store.transaction():
            for column, value in cleaned.items():
                setattr(train, column, value)
            train.updated_at = self.clock()

        logger.info(f"Updated train {train.id}")
        await self._publish()
        return train

    async def stop(self, train_id: str) -> Train:
        """
        Take a train off the roster and close its run.

        Raises:
            NotFoundError: If no train has this id
        """
        train = self.store.get_train(train_id)
        if train is None:
            raise NotFoundError(train_id)

        stopped_at = self.clock()
        with self.store.transaction():
            train.active = False
            train.updated_at = stopped_at
            self.ledger.record_stop(train, stopped_at)

        logger.info(f"Stopped train {train.id} ({train.name})")
        await self._publish()
        return train

    async def _publish(self) -> None:
        if self.broadcaster is None:
            return
        await self.broadcaster.publish(self.roster())
