import datetime
from dataclasses import dataclass

from public_holidays.constants import NATIONAL_REGION


@dataclass(frozen=True)
class HolidayData:
    date: datetime.date
    name: str
    region: str = NATIONAL_REGION

    @property
    def is_national(self) -> bool:
        return self.region == NATIONAL_REGION
