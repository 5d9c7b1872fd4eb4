"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from src.domain.errors import StorageUnavailableError, ValidationError
from src.infrastructure.logging.logger import get_app_logger


DATABASE_FILENAME = "BracaBudget.sqlite"


@dataclass(frozen=True)
class StorageSettings:
    """Settings locating the shared store and the local zone.

    Attributes:
        db_url: SQLAlchemy URL of the shared database.
        container_dir: Shared container directory, if one is configured.
        timezone: IANA zone name used for period boundaries.
        static_rates: Raw ``FROM:TO=rate`` pairs for the static provider.
    """

    db_url: str
    container_dir: Optional[Path] = None
    timezone: str = "UTC"
    static_rates: str = ""

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> "StorageSettings":
        """Build settings from environment variables.

        ``BUDGET_DB_URL`` wins over ``BUDGET_SHARED_CONTAINER`` when both are
        set.

        Returns:
            StorageSettings: Settings sourced from environment variables.

        Raises:
            StorageUnavailableError: If no database URL is set and the shared
                container is missing.
            ValidationError: If BUDGET_TIMEZONE is not a known zone.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        timezone = cls._normalize_timezone(
            os.getenv("BUDGET_TIMEZONE", "UTC")
        )
        static_rates = os.getenv("BUDGET_STATIC_RATES", "").strip()
        raw_container = os.getenv("BUDGET_SHARED_CONTAINER", "").strip()
        container_dir = None
        if raw_container:
            container_dir = Path(raw_container).expanduser().resolve()

        db_url = os.getenv("BUDGET_DB_URL", "").strip()
        if db_url:
            logger.info("Using database URL from BUDGET_DB_URL")
            return cls(
                db_url=db_url,
                container_dir=container_dir,
                timezone=timezone,
                static_rates=static_rates,
            )

        if container_dir is None or not container_dir.is_dir():
            raise StorageUnavailableError(
                "Failed to access shared container. "
                "Set BUDGET_SHARED_CONTAINER to an existing directory."
            )
        return cls(
            db_url=f"sqlite:///{container_dir / DATABASE_FILENAME}",
            container_dir=container_dir,
            timezone=timezone,
            static_rates=static_rates,
        )

    @staticmethod
    def _normalize_timezone(raw_zone: str) -> str:
        zone = raw_zone.strip() or "UTC"
        try:
            ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(
                "BUDGET_TIMEZONE",
                f"unknown time zone '{zone}'",
            ) from exc
        return zone


__all__ = ["DATABASE_FILENAME", "StorageSettings"]
