"""Shared helpers for the SQLAlchemy repositories."""

from datetime import datetime
from typing import Any, Iterable, Mapping

from sqlalchemy.sql.elements import TextClause
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import PersistenceError


def to_iso(instant: datetime | None) -> str | None:
    """Serialize an instant, keeping its UTC offset."""
    if instant is None:
        return None
    return instant.isoformat()


def from_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


class SqlAlchemyRepository:
    """Base for repositories reading and writing the shared database.

    Driver errors are re-raised as PersistenceError so callers never depend
    on SQLAlchemy exception types.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the shared engine.
        """
        self._db_port = db_port

    def _fetch_all(
        self,
        query: TextClause,
        params: Mapping[str, Any] | None = None,
    ) -> list[Row]:
        try:
            with self._db_port.get_engine().connect() as conn:
                return conn.execute(query, dict(params or {})).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Read failed: {exc}") from exc

    def _execute(
        self,
        statement: TextClause,
        params: Mapping[str, Any] | Iterable[Mapping[str, Any]],
    ) -> None:
        """Run a write statement in its own transaction.

        Args:
            statement: SQL statement to run.
            params: One parameter mapping, or several for a batch write.
        """
        if isinstance(params, Mapping):
            bound: Any = dict(params)
        else:
            bound = [dict(item) for item in params]
            if not bound:
                return
        try:
            with self._db_port.get_engine().begin() as conn:
                conn.execute(statement, bound)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Write failed: {exc}") from exc

    def _execute_each(
        self,
        statement: TextClause,
        params: Iterable[Mapping[str, Any]],
    ) -> int:
        """Run a statement once per mapping in a single transaction.

        Returns:
            int: Total rows affected, which skips ignored inserts.
        """
        written = 0
        try:
            with self._db_port.get_engine().begin() as conn:
                for item in params:
                    written += conn.execute(statement, dict(item)).rowcount
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Write failed: {exc}") from exc
        return written


__all__ = ["to_iso", "from_iso", "SqlAlchemyRepository"]
