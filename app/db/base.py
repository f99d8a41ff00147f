"""
Declarative base shared by the roster and run history tables.
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models are registered by importing app.db.models
