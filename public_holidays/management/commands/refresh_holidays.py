"""Django management command for refreshing the cached public holidays."""

import datetime
from typing import Annotated, Any

from django.core.management.base import BaseCommand, CommandParser

from dependency_injector.wiring import Provide, inject

from public_holidays.exceptions import HolidayLookupError, HolidayServiceNotInjectedError
from public_holidays.services.holiday_service import HolidayService


class Command(BaseCommand):
    """Management command for refreshing the cached public holidays."""

    help = "Clear and refetch the cached public holidays for a year"

    @inject
    def __init__(
        self,
        *args,
        holiday_service: Annotated["HolidayService | None", Provide["holiday_service"]] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.holiday_service = holiday_service

    def add_arguments(self, parser: CommandParser) -> None:
        """Add command arguments."""
        parser.add_argument(
            "--year",
            type=int,
            action="append",
            help="Year to refresh, may be given more than once (default: current and next year)",
        )
        parser.add_argument(
            "--region",
            default=None,
            help="Region used when listing the refreshed holidays (default: settings region)",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the refresh command."""
        if self.holiday_service is None:
            raise HolidayServiceNotInjectedError("holiday_service was not injected")

        years = options.get("year")
        if not years:
            current_year = datetime.datetime.now(tz=datetime.UTC).year
            years = [current_year, current_year + 1]

        for year in years:
            try:
                self.holiday_service.refresh_holidays(year)
                holidays = self.holiday_service.holidays_for_region(year, options.get("region"))
            except HolidayLookupError as e:
                self.stdout.write(self.style.ERROR(f"{year}: {e}"))
                continue

            self.stdout.write(f"{year}: {len(holidays)} holidays")
            for holiday in holidays:
                self.stdout.write(f"  {holiday.date.isoformat()}  {holiday.name}")

        self.stdout.write(self.style.SUCCESS(f"Successfully refreshed holidays for {len(years)} year(s)"))
