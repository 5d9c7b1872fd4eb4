"""Database port for the budget application.

This module defines the application-layer protocol for reaching the shared
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the shared budget database.

    The main process and the widget read the same database file; use cases
    depend on this protocol instead of on the file location.
    """

    def get_engine(self) -> Engine:
        """Get the engine for the shared budget database.

        Returns:
            Engine: SQLAlchemy engine connected to the shared store.
        """


__all__ = ["DatabaseEnginePort"]
