"""Week and month boundaries for budgeting periods.

Boundaries are computed on local calendar dates and re-localized at
midnight, so adding days never drifts across daylight-saving changes.
Weekdays use a 1..7 numbering where 1 is Sunday and 7 is Saturday.
"""

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo

from src.domain.constants import DAYS_PER_WEEK
from src.domain.errors import ValidationError
from src.domain.models.ledger import GoalPeriod
from src.domain.models.preferences import BudgetPreferences, WeekStart


MIN_MONTH_START_DAY = 1
MAX_MONTH_START_DAY = 28


def weekday_number(day: date) -> int:
    """Return the weekday of ``day`` with 1 = Sunday and 7 = Saturday."""
    return (day.weekday() + 1) % 7 + 1


class PeriodCalendar:
    """Compute current week and month boundaries for a user's preferences."""

    def __init__(
        self,
        week_start: WeekStart = WeekStart.SUNDAY,
        month_start_day: int = 1,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the calendar.

        Args:
            week_start: First day of the budgeting week.
            month_start_day: Day a budgeting month starts on (1-28).
            tz: Zone used for local dates; UTC when omitted.

        Raises:
            ValidationError: If month_start_day is outside 1-28.
        """
        if not MIN_MONTH_START_DAY <= month_start_day <= MAX_MONTH_START_DAY:
            raise ValidationError(
                "month_start_day",
                f"must be between {MIN_MONTH_START_DAY} and "
                f"{MAX_MONTH_START_DAY}, got {month_start_day}",
            )
        self._week_start = week_start
        self._month_start_day = month_start_day
        self._tz = tz or ZoneInfo("UTC")

    @classmethod
    def from_preferences(
        cls,
        preferences: BudgetPreferences,
        tz: tzinfo | None = None,
    ) -> "PeriodCalendar":
        return cls(
            week_start=preferences.week_start,
            month_start_day=preferences.month_start_day,
            tz=tz,
        )

    @property
    def tz(self) -> tzinfo:
        return self._tz

    @property
    def uses_custom_month(self) -> bool:
        return self._month_start_day != 1

    def localize(self, instant: datetime) -> datetime:
        """Express ``instant`` in the calendar zone.

        Naive values are interpreted as local wall-clock time.
        """
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self._tz)
        return instant.astimezone(self._tz)

    def at_midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self._tz)

    def local_date(self, instant: datetime) -> date:
        return self.localize(instant).date()

    def start_of_day(self, now: datetime) -> datetime:
        return self.at_midnight(self.local_date(now))

    def add_days(self, instant: datetime, days: int) -> datetime:
        """Shift ``instant`` by whole calendar days, keeping wall-clock time."""
        local = self.localize(instant)
        shifted = local.date() + timedelta(days=days)
        return datetime.combine(shifted, local.time(), tzinfo=self._tz)

    def start_of_week(self, now: datetime) -> datetime:
        today = self.local_date(now)
        offset = (
            weekday_number(today) - self._week_start.weekday_number + 7
        ) % 7
        return self.at_midnight(today - timedelta(days=offset))

    def end_of_week(self, now: datetime) -> datetime:
        return self.add_days(self.start_of_week(now), 6)

    def start_of_month(self, now: datetime) -> datetime:
        return self.at_midnight(self._month_start_date(self.local_date(now)))

    def end_of_month(self, now: datetime) -> datetime:
        start = self._month_start_date(self.local_date(now))
        next_start = self._shift_month(start, 1)
        return self.at_midnight(next_start - timedelta(days=1))

    def start_of_calendar_month(self, now: datetime) -> datetime:
        """First day of the ordinary calendar month, ignoring custom starts."""
        return self.at_midnight(self.local_date(now).replace(day=1))

    def end_of_calendar_month(self, now: datetime) -> datetime:
        today = self.local_date(now)
        last = calendar.monthrange(today.year, today.month)[1]
        return self.at_midnight(today.replace(day=last))

    def days_in_month(self, now: datetime) -> int:
        """Days in the ordinary calendar month containing ``now``."""
        today = self.local_date(now)
        return calendar.monthrange(today.year, today.month)[1]

    def weeks_in_month(self, now: datetime) -> Decimal:
        """Continuous number of weeks in the calendar month of ``now``.

        The calendar month length is used even when a custom month start
        day is configured.
        """
        return Decimal(self.days_in_month(now)) / DAYS_PER_WEEK

    def is_same_month(self, first: datetime, second: datetime) -> bool:
        if not self.uses_custom_month:
            left = self.local_date(first)
            right = self.local_date(second)
            return (left.year, left.month) == (right.year, right.month)
        return self.start_of_month(first) == self.start_of_month(second)

    def contains(
        self,
        instant: datetime,
        start: datetime,
        end: datetime,
    ) -> bool:
        """Return True when ``instant`` lies within [start, end].

        Both bounds are inclusive and the end bound covers its whole day.
        """
        upper = self.at_midnight(self.local_date(end) + timedelta(days=1))
        return start <= instant < upper

    def current_window(
        self,
        period: GoalPeriod,
        now: datetime,
    ) -> tuple[datetime, datetime]:
        """Return the current (start, end) window of a goal period."""
        if period is GoalPeriod.WEEKLY:
            return self.start_of_week(now), self.end_of_week(now)
        return self.start_of_month(now), self.end_of_month(now)

    def days_left_in_week(self, now: datetime) -> int:
        remaining = self.local_date(self.end_of_week(now)) - self.local_date(
            now
        )
        return max(0, remaining.days)

    def week_range_label(self, now: datetime) -> str:
        """Return a label such as ``Feb 17 – Feb 23``."""
        start = self.start_of_week(now)
        end = self.end_of_week(now)
        return f"{start:%b} {start.day} – {end:%b} {end.day}"

    def _month_start_date(self, today: date) -> date:
        if not self.uses_custom_month:
            return today.replace(day=1)
        if today.day >= self._month_start_day:
            return today.replace(day=self._month_start_day)
        return self._shift_month(
            today.replace(day=self._month_start_day),
            -1,
        )

    @staticmethod
    def _shift_month(day: date, months: int) -> date:
        # Callers only pass days <= 28, so the day always exists.
        index = day.year * 12 + (day.month - 1) + months
        return day.replace(year=index // 12, month=index % 12 + 1)


__all__ = [
    "PeriodCalendar",
    "weekday_number",
    "MIN_MONTH_START_DAY",
    "MAX_MONTH_START_DAY",
]
