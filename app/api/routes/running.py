"""
API routes for starting, editing and stopping trains on the roster.
"""
from fastapi import APIRouter, Body, Depends, status
from typing import Any, Dict
import logging

from app.core.dependencies import get_registry
from app.schemas.train import CommandAccepted, RosterResponse, TrainCreated
from app.services.registry import TrainRegistry

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=RosterResponse, response_model_by_alias=True)
async def list_running(registry: TrainRegistry = Depends(get_registry)):
    """
    Get the trains currently running.

    Returns:
        Active trains ordered by location, most recently updated first
    """
    return {"trains": registry.roster()}


@router.post("", response_model=TrainCreated, status_code=status.HTTP_201_CREATED)
async def start_train(
    fields: Dict[str, Any] = Body(...),
    registry: TrainRegistry = Depends(get_registry)
):
    """
    Start a train and open a run for it.

    Args:
        fields: Train fields (name, railway, country, power, trainType,
            numberOfCars, powerType, years, notes, owner, location)
        registry: Train registry

    Returns:
        Id of the new train
    """
    train = await registry.start(fields)
    return TrainCreated(id=train.id)


@router.patch("/{train_id}", response_model=CommandAccepted)
async def update_train(
    train_id: str,
    fields: Dict[str, Any] = Body(...),
    registry: TrainRegistry = Depends(get_registry)
):
    """Edit some fields of a train."""
    await registry.update(train_id, fields)
    return CommandAccepted()


@router.delete("/{train_id}", response_model=CommandAccepted)
async def stop_train(
    train_id: str,
    registry: TrainRegistry = Depends(get_registry)
):
    """Stop a train and close its run."""
    await registry.stop(train_id)
    return CommandAccepted()
