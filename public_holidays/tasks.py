import datetime
import logging
from typing import TYPE_CHECKING, Annotated

from dependency_injector.wiring import Provide, inject

from brigade_portal.celery import app


if TYPE_CHECKING:
    from public_holidays.services.holiday_service import HolidayService


logger = logging.getLogger(__name__)


@app.task
@inject
def refresh_public_holidays_task(
    years: list[int] | None = None,
    holiday_service: Annotated["HolidayService | None", Provide["holiday_service"]] = None,
):
    """
    Celery task to refresh the cached public holidays. Refreshes the current
    and the next year when no years are given.
    """
    if not holiday_service:
        return None

    if not years:
        current_year = datetime.datetime.now(tz=datetime.UTC).year
        years = [current_year, current_year + 1]

    refreshed = {}
    for year in years:
        holidays = holiday_service.refresh_holidays(year)
        refreshed[year] = len(holidays)
        logger.info("Refreshed %s public holidays for %s", len(holidays), year)
    return refreshed
