import datetime
from unittest.mock import Mock

import pytest
from dependency_injector import providers

from public_holidays.services.dataclasses import HolidayData
from public_holidays.services.holiday_service import HolidayService
from public_holidays.tasks import refresh_public_holidays_task


@pytest.fixture
def holiday_service(di_container):
    service = Mock(spec=HolidayService)
    service.refresh_holidays.return_value = [
        HolidayData(datetime.date(2025, 1, 1), "New Year's Day"),
        HolidayData(datetime.date(2025, 2, 6), "Waitangi Day"),
    ]
    with di_container.holiday_service.override(providers.Object(service)):
        yield service


def test_refresh_public_holidays_task(holiday_service):
    assert refresh_public_holidays_task(years=[2025]) == {2025: 2}
    holiday_service.refresh_holidays.assert_called_once_with(2025)


def test_refresh_public_holidays_task_defaults(holiday_service):
    current_year = datetime.datetime.now(tz=datetime.UTC).year

    result = refresh_public_holidays_task.delay().get()

    assert result == {current_year: 2, current_year + 1: 2}
