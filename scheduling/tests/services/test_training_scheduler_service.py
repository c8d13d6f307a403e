import datetime
import zoneinfo

import pytest
from model_bakery import baker

from scheduling.constants import EventType
from scheduling.models import Event, EventException
from scheduling.services.dataclasses import CancelledOccurrence, MovedOccurrence
from scheduling.services.training_scheduler_service import TrainingSchedulerService
from scheduling.tests.fakes import AUCKLAND_ANNIVERSARY_2025, FakeHolidayOracle


AUCKLAND = zoneinfo.ZoneInfo("Pacific/Auckland")

# Monday 2025-01-20, 09:00 in Auckland
NOW = datetime.datetime(2025, 1, 20, 9, 0, tzinfo=AUCKLAND)


@pytest.fixture
def holiday_oracle():
    return FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025)


@pytest.fixture
def training_scheduler_service(holiday_oracle):
    return TrainingSchedulerService(holiday_service=holiday_oracle)


def _training_event(brigade, day: datetime.date):
    start = datetime.datetime.combine(day, datetime.time(19, 0), tzinfo=AUCKLAND)
    return baker.make(
        Event,
        brigade=brigade,
        title="Training Night",
        start_time=start,
        end_time=start + datetime.timedelta(hours=2),
        event_type=EventType.TRAINING,
    )


def test_next_occurrence_from():
    # 0 = Sunday, 1 = Monday
    assert TrainingSchedulerService.next_occurrence_from(
        datetime.date(2025, 1, 20), 1
    ) == datetime.date(2025, 1, 20)
    assert TrainingSchedulerService.next_occurrence_from(
        datetime.date(2025, 1, 21), 1
    ) == datetime.date(2025, 1, 27)
    assert TrainingSchedulerService.next_occurrence_from(
        datetime.date(2025, 1, 21), 0
    ) == datetime.date(2025, 1, 26)


@pytest.mark.django_db
def test_build_training_slot_reads_brigade_config(brigade, training_scheduler_service):
    slot = training_scheduler_service.build_training_slot(brigade)

    assert slot.weekday == 1
    assert slot.time == datetime.time(19, 0)
    assert slot.duration == datetime.timedelta(hours=2)
    assert slot.region == "auckland"
    assert str(slot.tz) == "Pacific/Auckland"


@pytest.mark.django_db
def test_materialize_horizon_shifts_training_off_public_holiday(
    brigade, training_scheduler_service
):
    result = training_scheduler_service.materialize_horizon(brigade, months_ahead=1, now=NOW)

    training_dates = list(
        Event.objects.filter(brigade=brigade, is_training=True)
        .order_by("training_date")
        .values_list("training_date", flat=True)
    )
    assert training_dates == [
        datetime.date(2025, 1, 20),
        datetime.date(2025, 1, 28),
        datetime.date(2025, 2, 3),
        datetime.date(2025, 2, 10),
        datetime.date(2025, 2, 17),
    ]
    assert datetime.date(2025, 1, 27) not in training_dates
    assert (result.created, result.skipped, result.adjusted) == (5, 0, 1)

    shifted = Event.objects.get(brigade=brigade, training_date=datetime.date(2025, 1, 28))
    assert shifted.title == "Training Night (Moved from Monday)"
    assert shifted.description == (
        "Training moved due to public holiday on 2025-01-27 (Auckland Anniversary Day)"
    )
    assert shifted.start_time == datetime.datetime(2025, 1, 28, 19, 0, tzinfo=AUCKLAND)
    assert shifted.end_time - shifted.start_time == datetime.timedelta(hours=2)

    resolved = next(t for t in result.trainings if t.date == datetime.date(2025, 1, 28))
    assert resolved.holiday_shifted is True
    assert resolved.nominal_date == datetime.date(2025, 1, 27)


@pytest.mark.django_db
def test_materialize_horizon_is_idempotent(brigade, training_scheduler_service):
    first = training_scheduler_service.materialize_horizon(brigade, months_ahead=2, now=NOW)
    rows_after_first = set(
        Event.objects.filter(brigade=brigade).values_list("training_date", "start_time")
    )

    second = training_scheduler_service.materialize_horizon(brigade, months_ahead=2, now=NOW)

    assert set(
        Event.objects.filter(brigade=brigade).values_list("training_date", "start_time")
    ) == rows_after_first
    assert second.created == 0
    assert second.skipped == first.created


@pytest.mark.django_db
def test_materialize_horizon_dry_run_creates_nothing(brigade, training_scheduler_service):
    _training_event(brigade, datetime.date(2025, 1, 20))

    result = training_scheduler_service.materialize_horizon(
        brigade, months_ahead=1, now=NOW, dry_run=True
    )

    assert Event.objects.filter(brigade=brigade).count() == 1
    assert result.created == 4
    assert result.skipped == 1


@pytest.mark.django_db
def test_materialize_horizon_defaults_to_setting(brigade, training_scheduler_service, settings):
    settings.TRAINING_GENERATE_MONTHS_AHEAD = 1

    result = training_scheduler_service.materialize_horizon(brigade, now=NOW)

    assert result.trainings[-1].date == datetime.date(2025, 2, 17)


@pytest.mark.django_db
def test_materialize_horizon_without_holiday_service_keeps_nominal_dates(brigade):
    result = TrainingSchedulerService(holiday_service=None).materialize_horizon(
        brigade, months_ahead=1, now=NOW
    )

    assert datetime.date(2025, 1, 27) in [training.date for training in result.trainings]
    assert result.adjusted == 0


@pytest.mark.django_db
def test_materialize_horizon_fails_open_when_holiday_lookup_fails(brigade):
    service = TrainingSchedulerService(holiday_service=FakeHolidayOracle(fail=True))

    result = service.materialize_horizon(brigade, months_ahead=1, now=NOW)

    assert result.created == 5
    assert Event.objects.filter(brigade=brigade, training_date=datetime.date(2025, 1, 27)).exists()


@pytest.mark.django_db
def test_materialize_horizon_applies_training_exceptions(brigade, training_scheduler_service):
    event = _training_event(brigade, datetime.date(2025, 2, 3))
    baker.make(EventException, event=event, exception_date=datetime.date(2025, 2, 10))
    baker.make(
        EventException,
        event=event,
        exception_date=datetime.date(2025, 2, 17),
        is_cancelled=False,
        replacement_date=datetime.date(2025, 2, 19),
        notes="Station open day",
    )

    result = training_scheduler_service.materialize_horizon(brigade, months_ahead=1, now=NOW)

    dates = [training.date for training in result.trainings]
    assert datetime.date(2025, 2, 10) not in dates
    assert datetime.date(2025, 2, 17) not in dates
    assert datetime.date(2025, 2, 19) in dates

    moved = Event.objects.get(brigade=brigade, training_date=datetime.date(2025, 2, 19))
    assert moved.description == "Station open day"
    assert moved.title == "Training Night (Moved from Monday)"


@pytest.mark.django_db
def test_training_exceptions_include_moves_into_range(brigade, training_scheduler_service):
    event = _training_event(brigade, datetime.date(2025, 3, 3))
    baker.make(
        EventException,
        event=event,
        exception_date=datetime.date(2025, 3, 3),
        is_cancelled=False,
        replacement_date=datetime.date(2025, 3, 12),
    )
    baker.make(EventException, event=event, exception_date=datetime.date(2025, 4, 7))

    exceptions = training_scheduler_service.training_exceptions(
        brigade, datetime.date(2025, 3, 10), datetime.date(2025, 3, 16)
    )

    assert exceptions == {
        datetime.date(2025, 3, 3): MovedOccurrence(replacement_date=datetime.date(2025, 3, 12))
    }


@pytest.mark.django_db
def test_training_exceptions_ignore_other_brigades_and_non_trainings(
    brigade, training_scheduler_service
):
    from brigades.factories import BrigadeFactory

    other_brigade = BrigadeFactory().create_brigade()
    other_event = _training_event(other_brigade, datetime.date(2025, 3, 3))
    baker.make(EventException, event=other_event, exception_date=datetime.date(2025, 3, 10))
    meeting = baker.make(
        Event,
        brigade=brigade,
        start_time=datetime.datetime(2025, 3, 3, 19, tzinfo=AUCKLAND),
        event_type=EventType.MEETING,
        recurrence_rule="FREQ=WEEKLY;BYDAY=MO",
    )
    baker.make(EventException, event=meeting, exception_date=datetime.date(2025, 3, 10))

    assert training_scheduler_service.training_exceptions(brigade) == {}


@pytest.mark.django_db
def test_resolve_training_date_precedence(brigade, training_scheduler_service):
    slot = training_scheduler_service.build_training_slot(brigade)
    holiday = datetime.date(2025, 1, 27)

    assert (
        training_scheduler_service.resolve_training_date(
            holiday, slot, {holiday: CancelledOccurrence()}
        )
        is None
    )

    moved = training_scheduler_service.resolve_training_date(
        holiday, slot, {holiday: MovedOccurrence(replacement_date=datetime.date(2025, 1, 29))}
    )
    assert moved.date == datetime.date(2025, 1, 29)
    assert moved.is_moved is True
    assert moved.holiday_shifted is False

    shifted = training_scheduler_service.resolve_training_date(holiday, slot, {})
    assert shifted.date == datetime.date(2025, 1, 28)
    assert shifted.move_reason == "Auckland Anniversary Day"

    regular = training_scheduler_service.resolve_training_date(
        datetime.date(2025, 2, 3), slot, {}
    )
    assert regular.date == datetime.date(2025, 2, 3)
    assert regular.is_rescheduled is False
