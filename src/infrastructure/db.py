"""Database infrastructure for the budget store.

This module creates and reuses the SQLAlchemy engine connected to the
shared SQLite file. The dashboard, the command line entry points and the
widget all open the same file.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.schema import ensure_schema
from src.infrastructure.settings import StorageSettings


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the shared database.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine usable across threads.
    """
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        db_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        future=True,
    )


_engine: Optional[Engine] = None


def get_engine(settings: StorageSettings | None = None) -> Engine:
    """Get a singleton SQLAlchemy engine for the shared database.

    The schema is created on first use.

    Args:
        settings: Storage settings; read from the environment when omitted.

    Returns:
        Engine: Lazily initialized engine connected to the shared store.
    """
    global _engine
    if _engine is None:
        resolved = settings or StorageSettings.from_env()
        engine = _create_engine(resolved.db_url)
        ensure_schema(engine)
        _engine = engine
    return _engine


def reset_engine() -> None:
    """Dispose of the cached engine so the next call reconnects."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, file
    location) behind the port so use cases depend only on the protocol.
    """

    def __init__(self, settings: StorageSettings | None = None) -> None:
        self._settings = settings

    def get_engine(self) -> Engine:
        """Get the engine for the shared database.

        Returns:
            Engine: SQLAlchemy engine connected to the shared store.
        """
        return get_engine(self._settings)


__all__ = [
    "get_engine",
    "reset_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
