import datetime
import zoneinfo

from scheduling.holiday_shift import HolidayShiftPolicy
from scheduling.services.dataclasses import Occurrence
from scheduling.tests.fakes import AUCKLAND_ANNIVERSARY_2025, FakeHolidayOracle


AUCKLAND = zoneinfo.ZoneInfo("Pacific/Auckland")


def _occurrence(day: datetime.date) -> Occurrence:
    start = datetime.datetime.combine(day, datetime.time(19, 0), tzinfo=AUCKLAND)
    return Occurrence(start=start, end=start + datetime.timedelta(hours=2), nominal_date=day)


def test_holiday_moves_occurrence_to_next_day():
    policy = HolidayShiftPolicy(FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025), region="auckland")

    shifted = policy.apply(_occurrence(datetime.date(2025, 1, 27)))

    assert shifted.date == datetime.date(2025, 1, 28)
    assert shifted.start.hour == 19
    assert shifted.end - shifted.start == datetime.timedelta(hours=2)
    assert shifted.holiday_shifted is True
    assert shifted.holiday_name == "Auckland Anniversary Day"
    assert shifted.original_date == datetime.date(2025, 1, 27)
    assert shifted.nominal_date == datetime.date(2025, 1, 27)


def test_regular_day_is_unchanged():
    policy = HolidayShiftPolicy(FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025))
    occurrence = _occurrence(datetime.date(2025, 2, 3))

    assert policy.apply(occurrence) == occurrence


def test_shift_does_not_cascade_into_a_second_holiday():
    # Christmas Day then Boxing Day: the shifted training lands on Boxing Day
    oracle = FakeHolidayOracle(
        {
            datetime.date(2028, 12, 25): "Christmas Day",
            datetime.date(2028, 12, 26): "Boxing Day",
        }
    )

    shift = HolidayShiftPolicy(oracle).check(datetime.date(2028, 12, 25))

    assert shift.date == datetime.date(2028, 12, 26)
    assert shift.holiday_name == "Christmas Day"
    assert [lookup[0] for lookup in oracle.lookups] == [datetime.date(2028, 12, 25)]


def test_lookup_failure_leaves_occurrence_in_place(caplog):
    policy = HolidayShiftPolicy(FakeHolidayOracle(fail=True))
    occurrence = _occurrence(datetime.date(2025, 1, 27))

    assert policy.check(datetime.date(2025, 1, 27)) is None
    assert policy.apply(occurrence) == occurrence
    assert "Holiday lookup failed" in caplog.text


def test_region_is_passed_to_oracle():
    oracle = FakeHolidayOracle()

    HolidayShiftPolicy(oracle, region="wellington").check(datetime.date(2025, 1, 20))

    assert oracle.lookups == [(datetime.date(2025, 1, 20), "wellington")]
