"""Date helpers shared by the recurrence engine and the training walkers.

Weekdays are numbered Sunday first (0 = Sunday ... 6 = Saturday), the same
numbering used by brigade training configuration and BYDAY codes.
"""

import datetime
import zoneinfo


WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def sunday_based_weekday(day: datetime.date) -> int:
    return (day.weekday() + 1) % 7


def day_name(day: datetime.date) -> str:
    return WEEKDAY_NAMES[sunday_based_weekday(day)]


def next_weekday_on_or_after(day: datetime.date, weekday: int) -> datetime.date:
    """
    The first date on or after `day` falling on `weekday` (0 = Sunday).
    """
    return day + datetime.timedelta(days=(weekday - sunday_based_weekday(day)) % 7)


def localize(value: datetime.datetime, tz: datetime.tzinfo) -> datetime.datetime:
    """
    Converts an aware datetime to `tz`; naive datetimes are taken as wall time in `tz`.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def get_timezone(name: str | None) -> zoneinfo.ZoneInfo:
    try:
        return zoneinfo.ZoneInfo(name or "UTC")
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        return zoneinfo.ZoneInfo("UTC")


def combine_local(
    day: datetime.date, time: datetime.time, tz: datetime.tzinfo
) -> datetime.datetime:
    return datetime.datetime.combine(day, time.replace(tzinfo=None), tzinfo=tz)


def iter_dates(start: datetime.date, end: datetime.date, step_days: int = 1):
    current = start
    while current <= end:
        yield current
        current += datetime.timedelta(days=step_days)
