import datetime
from unittest.mock import Mock, patch

import pytest
import requests

from public_holidays.exceptions import HolidayApiError
from public_holidays.services.holiday_api_client import NagerDateClient


@pytest.fixture
def client():
    return NagerDateClient(
        base_url="https://date.nager.at/api/v3/PublicHolidays/", country_code="NZ", timeout=5
    )


def _response(status_code=200, payload=None, json_error=None):
    response = Mock(status_code=status_code)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@patch("public_holidays.services.holiday_api_client.requests.get")
def test_get_public_holidays(mock_get, client):
    mock_get.return_value = _response(
        payload=[
            {"date": "2025-02-06", "localName": "Waitangi Day", "name": "Waitangi Day"},
            {"date": "2025-04-25", "localName": "", "name": "ANZAC Day"},
            {"date": "not-a-date", "localName": "Broken"},
            "garbage",
        ]
    )

    holidays = client.get_public_holidays(2025)

    mock_get.assert_called_once_with(
        "https://date.nager.at/api/v3/PublicHolidays/2025/NZ", timeout=5
    )
    assert [(holiday.date, holiday.name) for holiday in holidays] == [
        (datetime.date(2025, 2, 6), "Waitangi Day"),
        (datetime.date(2025, 4, 25), "ANZAC Day"),
    ]
    assert all(holiday.is_national for holiday in holidays)


@pytest.mark.parametrize(
    "response",
    [
        _response(status_code=500),
        _response(status_code=404),
        _response(json_error=ValueError("no json")),
        _response(payload={"error": "unexpected"}),
    ],
)
@patch("public_holidays.services.holiday_api_client.requests.get")
def test_unusable_responses_raise(mock_get, response, client):
    mock_get.return_value = response

    with pytest.raises(HolidayApiError):
        client.get_public_holidays(2025)


@patch("public_holidays.services.holiday_api_client.requests.get")
def test_request_failure_raises(mock_get, client):
    mock_get.side_effect = requests.ConnectionError("unreachable")

    with pytest.raises(HolidayApiError, match="failed"):
        client.get_public_holidays(2025)
