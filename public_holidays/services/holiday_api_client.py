import datetime
import logging

import requests

from public_holidays.exceptions import HolidayApiError
from public_holidays.services.dataclasses import HolidayData


logger = logging.getLogger(__name__)


class NagerDateClient:
    """
    Client for the date.nager.at public holiday API.
    """

    def __init__(self, base_url: str, country_code: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.country_code = country_code
        self.timeout = timeout

    def get_public_holidays(self, year: int) -> list[HolidayData]:
        """
        Returns every holiday the API lists for the year, all tagged as national.
        Raises HolidayApiError when the API can't be used.
        """
        url = f"{self.base_url}/{year}/{self.country_code}"
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise HolidayApiError(f"Request to {url} failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise HolidayApiError(f"Request to {url} returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise HolidayApiError(f"Request to {url} returned invalid JSON") from e

        if not isinstance(payload, list):
            raise HolidayApiError(f"Request to {url} returned an unexpected payload")

        holidays = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            name = item.get("localName") or item.get("name") or ""
            try:
                date = datetime.date.fromisoformat(item.get("date", ""))
            except (TypeError, ValueError):
                logger.warning("Skipping holiday %r with invalid date %r", name, item.get("date"))
                continue
            holidays.append(HolidayData(date=date, name=name))
        return holidays
