import datetime
import logging
from dataclasses import replace

from public_holidays.exceptions import HolidayLookupError
from scheduling.services.dataclasses import HolidayShift, Occurrence
from scheduling.services.protocols.holiday_oracle import HolidayOracle


logger = logging.getLogger(__name__)


class HolidayShiftPolicy:
    """
    Moves an occurrence that lands on a public holiday to the following day.

    The shift is a single day and does not cascade: a holiday followed by
    another holiday still lands on the second one. Lookup failures leave the
    occurrence where it is.
    """

    def __init__(self, holiday_oracle: HolidayOracle, region: str | None = None):
        self.holiday_oracle = holiday_oracle
        self.region = region

    def check(self, nominal_date: datetime.date) -> HolidayShift | None:
        try:
            if not self.holiday_oracle.is_public_holiday(nominal_date, self.region):
                return None
            holiday_name = self.holiday_oracle.holiday_name(nominal_date, self.region)
        except HolidayLookupError as e:
            logger.warning("Holiday lookup failed for %s, not shifting: %s", nominal_date, e)
            return None

        return HolidayShift(
            date=nominal_date + datetime.timedelta(days=1), holiday_name=holiday_name
        )

    def apply(self, occurrence: Occurrence) -> Occurrence:
        shift = self.check(occurrence.nominal_date)
        if shift is None:
            return occurrence

        delta = shift.date - occurrence.nominal_date
        return replace(
            occurrence,
            start=occurrence.start + delta,
            end=occurrence.end + delta if occurrence.end is not None else None,
            original_date=occurrence.nominal_date,
            holiday_shifted=True,
            holiday_name=shift.holiday_name,
            move_reason=shift.holiday_name,
        )
