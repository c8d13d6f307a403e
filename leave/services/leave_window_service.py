import datetime
import logging
from typing import TYPE_CHECKING, Annotated

from django.conf import settings
from django.utils import timezone

from dependency_injector.wiring import Provide, inject

from brigades.models import Brigade, Member
from leave.constants import DEFAULT_UPCOMING_LIMIT, DEFAULT_UPCOMING_MAX_WEEKS
from leave.exceptions import LeaveServiceNotInjectedError
from leave.models import LeaveRequest
from scheduling.date_utils import combine_local, iter_dates, localize
from scheduling.services.dataclasses import (
    CancelledOccurrence,
    MovedOccurrence,
    TrainingDate,
    TrainingRangeSummary,
)


if TYPE_CHECKING:
    from scheduling.services.training_scheduler_service import TrainingSchedulerService


logger = logging.getLogger(__name__)


class LeaveWindowService:
    """
    Read-only walks over a brigade's training nights used by the leave flows.
    """

    @inject
    def __init__(
        self,
        training_scheduler_service: Annotated[
            "TrainingSchedulerService | None", Provide["training_scheduler_service"]
        ] = None,
    ) -> None:
        if training_scheduler_service is None:
            raise LeaveServiceNotInjectedError("training_scheduler_service was not injected")
        self.training_scheduler_service = training_scheduler_service

    def upcoming(
        self,
        member: Member,
        limit: int = DEFAULT_UPCOMING_LIMIT,
        now: datetime.datetime | None = None,
    ) -> list[TrainingDate]:
        """
        The next `limit` training dates the member can still request leave
        for, soonest first.

        Walks forward one training week at a time from the next training
        night, starting a week later when tonight's training has already
        begun. Cancelled trainings are skipped, moved ones are offered on
        their replacement date and holiday-shifted ones on the shifted date.
        Dates the member already holds a pending or approved request for are
        left out. The walk gives up after `LEAVE_UPCOMING_MAX_WEEKS` weeks and
        may return fewer than `limit` dates.
        """
        if limit <= 0:
            return []

        scheduler = self.training_scheduler_service
        slot = scheduler.build_training_slot(member.brigade)
        local_now = localize(now or timezone.now(), slot.tz)
        today = local_now.date()

        first_nominal = scheduler.next_occurrence_from(today, slot.weekday)
        if first_nominal == today and local_now >= combine_local(today, slot.time, slot.tz):
            first_nominal += datetime.timedelta(weeks=1)

        max_weeks = getattr(settings, "LEAVE_UPCOMING_MAX_WEEKS", DEFAULT_UPCOMING_MAX_WEEKS)
        last_nominal = first_nominal + datetime.timedelta(weeks=max_weeks - 1)

        exceptions = scheduler.training_exceptions(member.brigade, first_nominal, last_nominal)
        policy = scheduler.holiday_policy(slot)
        taken = set(
            LeaveRequest.objects.for_member(member.pk)
            .active()
            .upcoming(today)
            .values_list("training_date", flat=True)
        )

        trainings: list[TrainingDate] = []
        collected: set[datetime.date] = set()
        for nominal_date in iter_dates(first_nominal, last_nominal, step_days=7):
            if len(trainings) >= limit:
                break

            resolved = scheduler.resolve_training_date(nominal_date, slot, exceptions, policy)
            if resolved is None:
                continue
            # A training moved to an earlier day may already have happened
            if combine_local(resolved.date, slot.time, slot.tz) <= local_now:
                continue
            if resolved.date in taken or resolved.date in collected:
                continue

            collected.add(resolved.date)
            trainings.append(TrainingDate.from_resolved(resolved, slot.time))

        if len(trainings) < limit:
            logger.debug(
                "Found %s of %s upcoming trainings for member %s within %s weeks",
                len(trainings),
                limit,
                member.pk,
                max_weeks,
            )
        return sorted(trainings, key=lambda training: training.date)

    def range_count(
        self, brigade: Brigade, start_date: datetime.date, end_date: datetime.date
    ) -> TrainingRangeSummary:
        """
        Training nights inside the inclusive range, counted on their nominal
        weekday. Cancelled trainings are left out and moved ones count on
        their replacement date when it falls inside the range, including
        trainings moved in from outside it. Public holidays are not applied.
        """
        if end_date < start_date:
            return TrainingRangeSummary(count=0, dates=[])

        scheduler = self.training_scheduler_service
        slot = scheduler.build_training_slot(brigade)
        exceptions = scheduler.training_exceptions(brigade, start_date, end_date)

        def in_range(day: datetime.date) -> bool:
            return start_date <= day <= end_date

        trainings: list[TrainingDate] = []
        first_nominal = scheduler.next_occurrence_from(start_date, slot.weekday)
        for nominal_date in iter_dates(first_nominal, end_date, step_days=7):
            override = exceptions.get(nominal_date)
            if isinstance(override, CancelledOccurrence):
                continue
            if isinstance(override, MovedOccurrence):
                if in_range(override.replacement_date):
                    trainings.append(self._moved_training(nominal_date, override, slot.time))
                continue
            trainings.append(TrainingDate(date=nominal_date, time=slot.time))

        for exception_date, override in exceptions.items():
            if (
                isinstance(override, MovedOccurrence)
                and not in_range(exception_date)
                and in_range(override.replacement_date)
            ):
                trainings.append(self._moved_training(exception_date, override, slot.time))

        trainings.sort(key=lambda training: training.date)
        return TrainingRangeSummary(count=len(trainings), dates=trainings)

    @staticmethod
    def _moved_training(
        nominal_date: datetime.date, override: MovedOccurrence, time: datetime.time
    ) -> TrainingDate:
        return TrainingDate(
            date=override.replacement_date,
            time=time,
            is_rescheduled=True,
            original_date=nominal_date,
            move_reason=override.notes or None,
        )
