import datetime
from collections import defaultdict
from typing import TYPE_CHECKING, Annotated

from dependency_injector.wiring import Provide, inject

from brigades.models import Brigade
from scheduling.holiday_shift import HolidayShiftPolicy
from scheduling.models import Event, EventException
from scheduling.recurrence import RecurrenceExpander
from scheduling.services.dataclasses import ExceptionMap, Occurrence


if TYPE_CHECKING:
    from public_holidays.services.holiday_service import HolidayService


class CalendarService:
    """
    Lists the concrete occurrences of a brigade's visible events.
    """

    @inject
    def __init__(
        self,
        holiday_service: Annotated["HolidayService | None", Provide["holiday_service"]] = None,
    ) -> None:
        self.holiday_service = holiday_service

    def get_occurrences(
        self,
        brigade: Brigade,
        window_from: datetime.date,
        window_to: datetime.date,
    ) -> list[Occurrence]:
        if window_to < window_from:
            return []

        events = list(
            Event.objects.filter_by_brigade(brigade.pk)
            .visible()
            .select_related("brigade")
            .order_by("start_time", "pk")
        )
        exceptions = self._exceptions_by_event([event.pk for event in events if event.is_recurring])

        policy = None
        if self.holiday_service is not None:
            policy = HolidayShiftPolicy(self.holiday_service, region=brigade.holiday_region)
        expander = RecurrenceExpander(occurrence_policy=policy)

        occurrences: list[Occurrence] = []
        for event in events:
            # Nominal dates never precede the start, so later events have nothing to expand
            if event.start_time.date() > window_to + datetime.timedelta(days=1):
                continue
            occurrences.extend(
                expander.expand(
                    event.to_definition(), exceptions.get(event.pk), window_from, window_to
                )
            )
        return sorted(occurrences, key=lambda occurrence: occurrence.start)

    def _exceptions_by_event(self, event_ids: list[int]) -> dict[int, ExceptionMap]:
        exceptions: dict[int, ExceptionMap] = defaultdict(dict)
        for exception in EventException.objects.filter(event_id__in=event_ids):
            override = exception.to_override()
            if override is not None:
                exceptions[exception.event_id][exception.exception_date] = override
        return exceptions
