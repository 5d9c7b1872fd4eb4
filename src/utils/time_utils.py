"""Helpers for timezone-aware instants."""

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo


def resolve_now(now: datetime | None, tz: tzinfo | None = None) -> datetime:
    """Return ``now`` when given, else the current instant in ``tz``.

    Args:
        now: Explicit instant supplied by the caller.
        tz: Zone for the current instant; UTC when omitted.

    Returns:
        datetime: Timezone-aware instant.
    """
    zone = tz or ZoneInfo("UTC")
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now


__all__ = ["resolve_now"]
