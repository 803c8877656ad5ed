from datetime import date, datetime, time, timezone
from typing import Optional, Tuple

import pytz
from dateutil.relativedelta import relativedelta

# Fixed English abbreviations; strftime('%b') follows the process locale
MONTH_ABBREVIATIONS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)


class DateUtils:
    """
    Centralized date/time utilities for the reporting layer

    Key Features:
    - Timezone-aware datetime handling (naive values are treated as UTC)
    - Calendar-day boundaries in a reporting timezone
    - Short day/month labels for chart series
    """

    UTC = timezone.utc

    @classmethod
    def now_utc(cls) -> datetime:
        """Get current UTC datetime - always use this for database storage"""
        return datetime.now(cls.UTC)

    @classmethod
    def to_utc(cls, dt: datetime) -> datetime:
        """Convert datetime to UTC, assuming UTC for naive values"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=cls.UTC)
        return dt.astimezone(cls.UTC)

    @classmethod
    def from_utc(cls, dt: datetime, target_timezone: str) -> datetime:
        """Convert UTC datetime to target timezone"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=cls.UTC)

        target_tz = pytz.timezone(target_timezone)
        return dt.astimezone(target_tz)

    @classmethod
    def local_date(cls, dt: datetime, timezone_name: str = "UTC") -> date:
        """Calendar date of `dt` as seen in the given timezone"""
        return cls.from_utc(dt, timezone_name).date()

    @classmethod
    def start_of_day(cls, day: date, timezone_name: str = "UTC") -> datetime:
        """First instant of `day` in the given timezone, expressed in UTC"""
        tz = pytz.timezone(timezone_name)
        return tz.localize(datetime.combine(day, time.min)).astimezone(cls.UTC)

    @classmethod
    def end_of_day(cls, day: date, timezone_name: str = "UTC") -> datetime:
        """Last instant (23:59:59.999999) of `day` in the given timezone, in UTC"""
        tz = pytz.timezone(timezone_name)
        return tz.localize(datetime.combine(day, time.max)).astimezone(cls.UTC)

    @classmethod
    def trailing_window(
        cls,
        days: int,
        timezone_name: str = "UTC",
        now: Optional[datetime] = None,
    ) -> Tuple[datetime, datetime]:
        """
        Inclusive [start, end] window covering today and the `days` days before it.

        start is the start of day `days` days ago, end is the end of today,
        both in the reporting timezone and returned as UTC datetimes.
        """
        today = cls.local_date(now or cls.now_utc(), timezone_name)
        first_day = today - relativedelta(days=days)
        return (
            cls.start_of_day(first_day, timezone_name),
            cls.end_of_day(today, timezone_name),
        )

    @staticmethod
    def format_day_month(day: date) -> str:
        """Chart label: '7 mar', '18 oct'"""
        return f"{day.day} {MONTH_ABBREVIATIONS[day.month - 1]}"
