import datetime
import logging
import re

from django.db import DatabaseError, transaction

from public_holidays.constants import (
    AUCKLAND_REGION,
    NATIONAL_REGION,
    REGIONAL_ANNIVERSARY_NAMES,
    HolidaySource,
)
from public_holidays.exceptions import HolidayApiError, HolidayLookupError
from public_holidays.models import PublicHoliday
from public_holidays.services.dataclasses import HolidayData
from public_holidays.services.holiday_api_client import NagerDateClient
from public_holidays.services.nz_holiday_calendar import fallback_holidays, regional_anniversary


logger = logging.getLogger(__name__)

ANNIVERSARY_DAY_PATTERN = re.compile(r"anniversary\s*day", re.IGNORECASE)


def is_regional_anniversary(name: str) -> bool:
    lowered = name.lower()
    if lowered and any(
        lowered in regional.lower() or regional.lower() in lowered
        for regional in REGIONAL_ANNIVERSARY_NAMES
    ):
        return True
    return bool(ANNIVERSARY_DAY_PATTERN.search(name))


class HolidayService:
    """
    Public holiday lookups backed by the `PublicHoliday` cache table, the
    holiday API and, when the API is unavailable, the computed NZ calendar.

    A year is loaded once per service instance; database failures surface as
    `HolidayLookupError`.
    """

    def __init__(self, api_client: NagerDateClient, default_region: str = AUCKLAND_REGION):
        self.api_client = api_client
        self.default_region = default_region
        self._region_cache: dict[tuple[int, str], dict[datetime.date, str]] = {}

    def fetch_holidays(self, year: int) -> list[HolidayData]:
        """
        Returns the cached holidays for the year, fetching and caching them first
        when the cache is empty.
        """
        try:
            cached = [
                HolidayData(date=holiday.date, name=holiday.name, region=holiday.region)
                for holiday in PublicHoliday.objects.for_year(year)
            ]
        except DatabaseError as e:
            raise HolidayLookupError(f"Unable to read cached holidays for {year}") from e

        if cached:
            return cached

        source = HolidaySource.API
        try:
            holidays = self._fetch_from_api(year)
        except HolidayApiError as e:
            logger.warning("Holiday API unavailable for %s, using computed holidays: %s", year, e)
            holidays = []

        if not holidays:
            source = HolidaySource.FALLBACK
            holidays = fallback_holidays(year, AUCKLAND_REGION)

        self._cache_holidays(year, holidays, source)
        return holidays

    def holidays_for_region(self, year: int, region: str | None = None) -> list[HolidayData]:
        """
        National holidays plus the anniversary day of `region`.
        """
        region = region or self.default_region
        all_holidays = self.fetch_holidays(year)

        holidays = [holiday for holiday in all_holidays if holiday.is_national]
        regional = [holiday for holiday in all_holidays if holiday.region == region]
        if not regional:
            anniversary = regional_anniversary(year, region)
            regional = [anniversary] if anniversary is not None else []

        return sorted([*holidays, *regional], key=lambda holiday: holiday.date)

    def is_public_holiday(self, date: datetime.date, region: str | None = None) -> bool:
        return date in self._holidays_by_date(date.year, region)

    def holiday_name(self, date: datetime.date, region: str | None = None) -> str | None:
        return self._holidays_by_date(date.year, region).get(date)

    def holidays_for_date_range(
        self, start_date: datetime.date, end_date: datetime.date, region: str | None = None
    ) -> dict[datetime.date, str]:
        holidays: dict[datetime.date, str] = {}
        for year in range(start_date.year, end_date.year + 1):
            for date, name in self._holidays_by_date(year, region).items():
                if start_date <= date <= end_date:
                    holidays[date] = name
        return dict(sorted(holidays.items()))

    def clear_cache(self, year: int) -> None:
        try:
            PublicHoliday.objects.for_year(year).delete()
        except DatabaseError as e:
            raise HolidayLookupError(f"Unable to clear cached holidays for {year}") from e
        self._region_cache = {key: value for key, value in self._region_cache.items() if key[0] != year}

    def refresh_holidays(self, year: int) -> list[HolidayData]:
        self.clear_cache(year)
        return self.fetch_holidays(year)

    def _holidays_by_date(self, year: int, region: str | None) -> dict[datetime.date, str]:
        key = (year, region or self.default_region)
        if key not in self._region_cache:
            self._region_cache[key] = {
                holiday.date: holiday.name for holiday in self.holidays_for_region(year, key[1])
            }
        return self._region_cache[key]

    def _fetch_from_api(self, year: int) -> list[HolidayData]:
        holidays = [
            HolidayData(date=holiday.date, name=holiday.name, region=NATIONAL_REGION)
            for holiday in self.api_client.get_public_holidays(year)
            if not is_regional_anniversary(holiday.name)
        ]
        if not holidays:
            return []

        # Anniversary days are regional; only Auckland's is cached alongside the API data
        auckland_anniversary = regional_anniversary(year, AUCKLAND_REGION)
        if auckland_anniversary is not None:
            holidays.append(auckland_anniversary)
        return holidays

    def _cache_holidays(self, year: int, holidays: list[HolidayData], source: str) -> None:
        try:
            with transaction.atomic():
                PublicHoliday.objects.bulk_create(
                    [
                        PublicHoliday(
                            date=holiday.date,
                            name=holiday.name,
                            region=holiday.region,
                            year=year,
                            source=source,
                        )
                        for holiday in holidays
                    ],
                    ignore_conflicts=True,
                )
        except DatabaseError as e:
            raise HolidayLookupError(f"Unable to cache holidays for {year}") from e
