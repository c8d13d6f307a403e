"""
Computed New Zealand public holidays.

Used when the holiday API is unavailable. Weekend holidays are "Mondayised":
a holiday falling on Saturday or Sunday is observed on the next weekday not
already taken by another holiday.
"""

import datetime
from functools import lru_cache

from dateutil.easter import easter
from dateutil.relativedelta import MO, relativedelta

from public_holidays.constants import MATARIKI_DATES, REGIONAL_ANNIVERSARIES
from public_holidays.services.dataclasses import HolidayData


def closest_monday(day: datetime.date) -> datetime.date:
    """
    Tuesday to Thursday go back to the previous Monday, Friday to Sunday go
    forward to the next one.
    """
    weekday = day.weekday()
    if weekday == 0:
        return day
    if weekday <= 3:
        return day - datetime.timedelta(days=weekday)
    return day + datetime.timedelta(days=7 - weekday)


def mondayise(day: datetime.date) -> datetime.date:
    if day.weekday() == 5:
        return day + datetime.timedelta(days=2)
    if day.weekday() == 6:
        return day + datetime.timedelta(days=1)
    return day


def mondayise_pair(first: datetime.date) -> tuple[datetime.date, datetime.date]:
    """
    Observed dates for two consecutive holidays starting on `first`. The two
    observed dates never coincide.
    """
    second = first + datetime.timedelta(days=1)
    if first.weekday() in (5, 6):
        # Sat+Sun move to Mon+Tue, Sun+Mon keep Monday for the second day
        first_observed = first + datetime.timedelta(days=2)
        second_observed = second if second.weekday() == 0 else second + datetime.timedelta(days=2)
        return first_observed, second_observed
    if second.weekday() == 5:
        return first, second + datetime.timedelta(days=2)
    return first, second


def regional_anniversary(year: int, region: str) -> HolidayData | None:
    if region not in REGIONAL_ANNIVERSARIES:
        return None
    (month, day), name = REGIONAL_ANNIVERSARIES[region]
    return HolidayData(
        date=closest_monday(datetime.date(year, month, day)), name=name, region=region
    )


@lru_cache(maxsize=32)
def national_holidays(year: int) -> tuple[HolidayData, ...]:
    easter_sunday = easter(year)
    new_year, day_after_new_year = mondayise_pair(datetime.date(year, 1, 1))
    christmas, boxing_day = mondayise_pair(datetime.date(year, 12, 25))

    holidays = [
        HolidayData(new_year, "New Year's Day"),
        HolidayData(day_after_new_year, "Day after New Year's Day"),
        HolidayData(mondayise(datetime.date(year, 2, 6)), "Waitangi Day"),
        HolidayData(easter_sunday - datetime.timedelta(days=2), "Good Friday"),
        HolidayData(easter_sunday + datetime.timedelta(days=1), "Easter Monday"),
        HolidayData(mondayise(datetime.date(year, 4, 25)), "ANZAC Day"),
        HolidayData(datetime.date(year, 6, 1) + relativedelta(weekday=MO(+1)), "King's Birthday"),
        HolidayData(datetime.date(year, 10, 1) + relativedelta(weekday=MO(+4)), "Labour Day"),
        HolidayData(christmas, "Christmas Day"),
        HolidayData(boxing_day, "Boxing Day"),
    ]

    matariki = MATARIKI_DATES.get(year)
    if matariki is not None:
        holidays.append(HolidayData(matariki, "Matariki"))

    return tuple(sorted(holidays, key=lambda holiday: holiday.date))


def fallback_holidays(year: int, region: str | None = None) -> list[HolidayData]:
    """
    National holidays for the year plus the anniversary day of `region`.
    """
    holidays = list(national_holidays(year))
    if region is not None:
        anniversary = regional_anniversary(year, region)
        if anniversary is not None:
            holidays.append(anniversary)
    return sorted(holidays, key=lambda holiday: holiday.date)
