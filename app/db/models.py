"""
Model imports for database initialization.
This file imports all models to ensure they are registered with the Base metadata.
"""
from app.db.base import Base

# Import all models here so they are registered with Base
from app.models.train import Train  # Live roster
from app.models.run import TrainRun  # Run history, weak reference to trains

__all__ = ["Base", "Train", "TrainRun"]
