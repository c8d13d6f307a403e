import datetime
from typing import Protocol


class HolidayOracle(Protocol):
    def is_public_holiday(self, date: datetime.date, region: str | None = None) -> bool:
        ...

    def holiday_name(self, date: datetime.date, region: str | None = None) -> str | None:
        ...
