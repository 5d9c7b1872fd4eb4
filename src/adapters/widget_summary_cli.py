"""CLI adapter printing what the home-screen widget shows."""

from src.domain.errors import StorageUnavailableError
from src.infrastructure.container import (
    build_settings,
    build_widget_summary_use_case,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print the widget entry computed from the shared store."""
    logger = get_app_logger()
    try:
        settings = build_settings()
    except StorageUnavailableError as exc:
        logger.error(str(exc))
        raise SystemExit(1) from exc

    entry = build_widget_summary_use_case(settings).execute()
    code = entry.currency_code
    print(f"Left this week: {entry.weekly_available:,.2f} {code}")
    print(
        f"Spent {entry.weekly_spent:,.2f} of "
        f"{entry.weekly_allowance:,.2f} {code}, "
        f"{entry.days_left} days left"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
