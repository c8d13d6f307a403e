import datetime
import logging
from typing import TYPE_CHECKING, Annotated

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from dateutil.relativedelta import relativedelta
from dependency_injector.wiring import Provide, inject

from brigades.models import Brigade, Member
from scheduling.constants import (
    DEFAULT_TRAINING_MONTHS_AHEAD,
    TRAINING_TITLE,
    EventType,
    RecurrenceWeekday,
)
from scheduling.date_utils import (
    combine_local,
    day_name,
    localize,
    next_weekday_on_or_after,
)
from scheduling.holiday_shift import HolidayShiftPolicy
from scheduling.models import Event, EventException
from scheduling.recurrence import RecurrenceExpander
from scheduling.services.dataclasses import (
    CancelledOccurrence,
    ExceptionMap,
    MaterializationResult,
    MovedOccurrence,
    Occurrence,
    RecurringEventDefinition,
    ResolvedTraining,
    TrainingSlot,
)


if TYPE_CHECKING:
    from public_holidays.services.holiday_service import HolidayService


logger = logging.getLogger(__name__)

TRAINING_DESCRIPTION = "Weekly training session"


class TrainingSchedulerService:
    """
    Computes a brigade's weekly training nights and materializes them as
    training `Event` rows.

    Each nominal training date is resolved in this order: a cancellation drops
    it, a move replaces it with the exception's replacement date, and
    otherwise a public holiday pushes it one day later. The holiday shift is
    never re-checked on the shifted date.
    """

    @inject
    def __init__(
        self,
        holiday_service: Annotated["HolidayService | None", Provide["holiday_service"]] = None,
    ) -> None:
        self.holiday_service = holiday_service

    def build_training_slot(self, brigade: Brigade) -> TrainingSlot:
        return brigade.training_config

    @staticmethod
    def next_occurrence_from(from_date: datetime.date, weekday: int) -> datetime.date:
        """
        The next nominal training date on or after `from_date` for a training
        night held on `weekday` (0 = Sunday).
        """
        return next_weekday_on_or_after(from_date, weekday)

    def holiday_policy(self, slot: TrainingSlot) -> HolidayShiftPolicy | None:
        if self.holiday_service is None:
            return None
        return HolidayShiftPolicy(self.holiday_service, region=slot.region)

    def training_exceptions(
        self,
        brigade: Brigade,
        start: datetime.date | None = None,
        end: datetime.date | None = None,
    ) -> ExceptionMap:
        """
        Overrides on the brigade's training events keyed by the nominal date
        they apply to. Exceptions whose replacement date falls inside the range
        are included even when their nominal date is outside it.
        """
        exceptions: ExceptionMap = {}
        queryset = EventException.objects.for_trainings(brigade.pk).touching_range(start, end)
        for exception in queryset.order_by("exception_date", "pk"):
            override = exception.to_override()
            if override is not None:
                exceptions[exception.exception_date] = override
        return exceptions

    def resolve_training_date(
        self,
        nominal_date: datetime.date,
        slot: TrainingSlot,
        exceptions: ExceptionMap,
        policy: HolidayShiftPolicy | None = None,
    ) -> ResolvedTraining | None:
        """
        Resolves one nominal training date. Returns `None` when the training is
        cancelled. `policy` defaults to the holiday shift for the slot's region.
        """
        override = exceptions.get(nominal_date)
        if isinstance(override, CancelledOccurrence):
            return None
        if isinstance(override, MovedOccurrence):
            return ResolvedTraining(
                nominal_date=nominal_date,
                date=override.replacement_date,
                is_moved=True,
                notes=override.notes,
            )

        if policy is None:
            policy = self.holiday_policy(slot)
        shift = policy.check(nominal_date) if policy is not None else None
        if shift is not None:
            return ResolvedTraining(
                nominal_date=nominal_date,
                date=shift.date,
                holiday_shifted=True,
                holiday_name=shift.holiday_name,
            )

        return ResolvedTraining(nominal_date=nominal_date, date=nominal_date)

    def training_definition(
        self, slot: TrainingSlot, first_date: datetime.date
    ) -> RecurringEventDefinition:
        start = combine_local(first_date, slot.time, slot.tz)
        return RecurringEventDefinition(
            start=start,
            end=start + slot.duration,
            recurrence_rule=f"FREQ=WEEKLY;BYDAY={RecurrenceWeekday.values[slot.weekday]}",
            title=TRAINING_TITLE,
            location=slot.location,
            is_training=True,
            adjust_for_holidays=True,
        )

    def training_dates(
        self,
        brigade: Brigade,
        start: datetime.date,
        end: datetime.date,
        exceptions: ExceptionMap | None = None,
    ) -> list[ResolvedTraining]:
        """
        Resolved training nights whose nominal date falls inside the inclusive
        range, ordered by effective date.
        """
        slot = self.build_training_slot(brigade)
        if exceptions is None:
            exceptions = self.training_exceptions(brigade, start, end)

        first_date = self.next_occurrence_from(start, slot.weekday)
        expander = RecurrenceExpander(occurrence_policy=self.holiday_policy(slot))
        occurrences = expander.expand(
            self.training_definition(slot, first_date), exceptions, start, end
        )
        return [self._to_resolved(occurrence) for occurrence in occurrences]

    def materialize_horizon(
        self,
        brigade: Brigade,
        created_by: Member | None = None,
        months_ahead: int | None = None,
        now: datetime.datetime | None = None,
        dry_run: bool = False,
    ) -> MaterializationResult:
        """
        Creates the training `Event` rows for the next `months_ahead` months,
        skipping dates that already have one. Safe to re-run.
        """
        if months_ahead is None:
            months_ahead = getattr(
                settings, "TRAINING_GENERATE_MONTHS_AHEAD", DEFAULT_TRAINING_MONTHS_AHEAD
            )
        slot = self.build_training_slot(brigade)
        today = localize(now or timezone.now(), slot.tz).date()
        horizon_end = today + relativedelta(months=months_ahead)

        result = MaterializationResult()
        for training in self.training_dates(brigade, today, horizon_end):
            result.trainings.append(training)

            if dry_run:
                exists = Event.objects.filter(
                    brigade=brigade, is_training=True, training_date=training.date
                ).exists()
                created = not exists
            else:
                created = self._create_training_event(brigade, slot, training, created_by)

            if not created:
                result.skipped += 1
                continue
            result.created += 1
            if training.is_rescheduled:
                result.adjusted += 1

        logger.info(
            "Materialized trainings for brigade %s until %s: %s created, %s skipped, %s adjusted%s",
            brigade.pk,
            horizon_end,
            result.created,
            result.skipped,
            result.adjusted,
            " (dry run)" if dry_run else "",
        )
        return result

    def _create_training_event(
        self,
        brigade: Brigade,
        slot: TrainingSlot,
        training: ResolvedTraining,
        created_by: Member | None,
    ) -> bool:
        start_time = combine_local(training.date, slot.time, slot.tz)
        with transaction.atomic():
            _, created = Event.objects.get_or_create(
                brigade=brigade,
                is_training=True,
                training_date=training.date,
                defaults={
                    "title": self._training_title(training),
                    "description": self._training_description(training),
                    "location": slot.location,
                    "start_time": start_time,
                    "end_time": start_time + slot.duration,
                    "event_type": EventType.TRAINING,
                    "created_by": created_by,
                },
            )
        return created

    @staticmethod
    def _training_title(training: ResolvedTraining) -> str:
        if not training.is_rescheduled:
            return TRAINING_TITLE
        return f"{TRAINING_TITLE} (Moved from {day_name(training.nominal_date)})"

    @staticmethod
    def _training_description(training: ResolvedTraining) -> str:
        if training.holiday_shifted:
            description = f"Training moved due to public holiday on {training.nominal_date:%Y-%m-%d}"
            if training.holiday_name:
                description += f" ({training.holiday_name})"
            return description
        if training.is_moved:
            return training.notes or f"Training moved from {training.nominal_date:%Y-%m-%d}"
        return TRAINING_DESCRIPTION

    @staticmethod
    def _to_resolved(occurrence: Occurrence) -> ResolvedTraining:
        return ResolvedTraining(
            nominal_date=occurrence.nominal_date,
            date=occurrence.date,
            is_moved=occurrence.is_moved,
            holiday_shifted=occurrence.holiday_shifted,
            holiday_name=occurrence.holiday_name,
            notes=(occurrence.move_reason or "") if occurrence.is_moved else "",
        )
