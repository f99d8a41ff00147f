"""
FastAPI dependency injection utilities.
"""
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker
from starlette.requests import HTTPConnection

from app.core.clock import Clock, utcnow
from app.db.session import SessionLocal
from app.services.broadcast import Broadcaster, RosterProvider
from app.services.registry import TrainRegistry
from app.services.reports import ReportGenerator
from app.services.store import SqlAlchemyStore, Store


def get_db() -> Generator[Session, None, None]:
    """
    Create database session dependency for FastAPI routes.

    Yields:
        Database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Clock:
    return utcnow


def get_store(db: Session = Depends(get_db)) -> Store:
    return SqlAlchemyStore(db)


def get_broadcaster(connection: HTTPConnection) -> Broadcaster:
    """The application's broadcaster, shared by HTTP and WebSocket routes."""
    return connection.app.state.broadcaster


def get_registry(
    store: Store = Depends(get_store),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    clock: Clock = Depends(get_clock),
) -> TrainRegistry:
    return TrainRegistry(store, broadcaster=broadcaster, clock=clock)


def get_report_generator(
    store: Store = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> ReportGenerator:
    return ReportGenerator(store, clock=clock)


def get_session_factory() -> sessionmaker:
    return SessionLocal


def get_roster_provider(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> RosterProvider:
    """
    Roster reader for long-lived connections.

    Each call opens its own session and closes it before returning, so a
    connected viewer never holds a pooled database connection.
    """
    def read_roster():
        with session_factory() as db:
            return TrainRegistry(SqlAlchemyStore(db)).roster()

    return read_roster
