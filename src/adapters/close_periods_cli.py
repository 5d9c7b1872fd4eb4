"""CLI adapter closing finished months and weeks.

Freezes monthly savings snapshots and writes weekly log entries for every
period that ended since the last run.
"""

import asyncio

from src.domain.errors import StorageUnavailableError
from src.infrastructure.container import (
    build_close_weeks_use_case,
    build_conversion_cache,
    build_database_adapter,
    build_preferences_repository,
    build_settings,
    build_sync_snapshots_use_case,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the snapshot sync and the weekly close."""
    logger = get_app_logger()
    try:
        settings = build_settings()
    except StorageUnavailableError as exc:
        logger.error(str(exc))
        raise SystemExit(1) from exc

    db_adapter = build_database_adapter(settings)
    cache = build_conversion_cache(db_adapter, settings)
    preferences = build_preferences_repository(db_adapter).load_preferences()
    asyncio.run(cache.refresh_for(preferences))

    snapshots = build_sync_snapshots_use_case(
        settings,
        conversion_cache=cache,
    ).run()
    weeks = build_close_weeks_use_case(settings, conversion_cache=cache).run()

    print(
        f"Created {snapshots.created_count} monthly snapshots "
        f"({snapshots.existing_count} already stored)."
    )
    print(
        f"Closed {weeks.created_count} weeks "
        f"({weeks.existing_count} already logged)."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
