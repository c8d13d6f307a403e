import datetime
import zoneinfo

import pytest
from model_bakery import baker

from leave.constants import LeaveStatus
from leave.exceptions import LeaveServiceNotInjectedError
from leave.models import LeaveRequest
from leave.services.leave_window_service import LeaveWindowService
from scheduling.constants import EventType
from scheduling.models import Event, EventException
from scheduling.services.training_scheduler_service import TrainingSchedulerService
from scheduling.tests.fakes import AUCKLAND_ANNIVERSARY_2025, FakeHolidayOracle


AUCKLAND = zoneinfo.ZoneInfo("Pacific/Auckland")

# Monday 2025-01-20, 09:00 in Auckland; training starts at 19:00
MORNING = datetime.datetime(2025, 1, 20, 9, 0, tzinfo=AUCKLAND)
EVENING = datetime.datetime(2025, 1, 20, 20, 0, tzinfo=AUCKLAND)


@pytest.fixture
def leave_window_service():
    return LeaveWindowService(
        training_scheduler_service=TrainingSchedulerService(
            holiday_service=FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025)
        )
    )


@pytest.fixture
def training_event(brigade):
    start = datetime.datetime(2025, 1, 6, 19, 0, tzinfo=AUCKLAND)
    return baker.make(
        Event,
        brigade=brigade,
        title="Training Night",
        start_time=start,
        end_time=start + datetime.timedelta(hours=2),
        event_type=EventType.TRAINING,
    )


def _dates(trainings):
    return [training.date for training in trainings]


def test_requires_training_scheduler_service():
    with pytest.raises(LeaveServiceNotInjectedError):
        LeaveWindowService(training_scheduler_service=None)


@pytest.mark.django_db
class TestUpcoming:
    def test_includes_tonight_before_training_starts(self, member, leave_window_service):
        trainings = leave_window_service.upcoming(member, limit=3, now=MORNING)

        assert _dates(trainings) == [
            datetime.date(2025, 1, 20),
            datetime.date(2025, 1, 28),
            datetime.date(2025, 2, 3),
        ]
        shifted = trainings[1]
        assert shifted.is_rescheduled is True
        assert shifted.original_date == datetime.date(2025, 1, 27)
        assert shifted.move_reason == "Auckland Anniversary Day"
        assert shifted.day_name == "Tuesday"
        assert shifted.time == datetime.time(19, 0)

    def test_skips_tonight_once_training_started(self, member, leave_window_service):
        trainings = leave_window_service.upcoming(member, limit=3, now=EVENING)

        assert _dates(trainings) == [
            datetime.date(2025, 1, 28),
            datetime.date(2025, 2, 3),
            datetime.date(2025, 2, 10),
        ]
        assert all(training.date > EVENING.date() for training in trainings)

    def test_skips_dates_member_already_holds(self, member, leave_window_service):
        baker.make(
            LeaveRequest,
            member=member,
            training_date=datetime.date(2025, 1, 28),
            status=LeaveStatus.PENDING,
        )
        baker.make(
            LeaveRequest,
            member=member,
            training_date=datetime.date(2025, 2, 3),
            status=LeaveStatus.APPROVED,
        )
        baker.make(
            LeaveRequest,
            member=member,
            training_date=datetime.date(2025, 1, 20),
            status=LeaveStatus.DENIED,
        )

        trainings = leave_window_service.upcoming(member, limit=3, now=MORNING)

        assert _dates(trainings) == [
            datetime.date(2025, 1, 20),
            datetime.date(2025, 2, 10),
            datetime.date(2025, 2, 17),
        ]

    def test_other_members_requests_do_not_count(self, brigade, member, leave_window_service):
        from brigades.factories import MemberFactory

        baker.make(
            LeaveRequest,
            member=MemberFactory().create_member(brigade),
            training_date=datetime.date(2025, 1, 20),
        )

        trainings = leave_window_service.upcoming(member, limit=1, now=MORNING)

        assert _dates(trainings) == [datetime.date(2025, 1, 20)]

    def test_skips_cancelled_and_past_moved_trainings(
        self, member, training_event, leave_window_service
    ):
        baker.make(EventException, event=training_event, exception_date=datetime.date(2025, 2, 3))
        # Moved to the day before "now": already happened
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 2, 10),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 1, 19),
        )
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 2, 17),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 2, 19),
            notes="Joint exercise",
        )

        trainings = leave_window_service.upcoming(member, limit=4, now=MORNING)

        assert _dates(trainings) == [
            datetime.date(2025, 1, 20),
            datetime.date(2025, 1, 28),
            datetime.date(2025, 2, 19),
            datetime.date(2025, 2, 24),
        ]
        assert trainings[2].move_reason == "Joint exercise"
        assert trainings[2].original_date == datetime.date(2025, 2, 17)

    def test_walk_is_capped(self, member, leave_window_service, settings):
        settings.LEAVE_UPCOMING_MAX_WEEKS = 2

        trainings = leave_window_service.upcoming(member, limit=5, now=MORNING)

        assert _dates(trainings) == [datetime.date(2025, 1, 20), datetime.date(2025, 1, 28)]

    def test_non_positive_limit_returns_nothing(self, member, leave_window_service):
        assert leave_window_service.upcoming(member, limit=0, now=MORNING) == []

    def test_never_returns_past_dates(self, member, leave_window_service):
        for hour in (0, 9, 18, 19, 23):
            now = datetime.datetime(2025, 1, 20, hour, 0, tzinfo=AUCKLAND)

            trainings = leave_window_service.upcoming(member, limit=3, now=now)

            assert len(trainings) == 3
            for training in trainings:
                start = datetime.datetime.combine(training.date, training.time, tzinfo=AUCKLAND)
                assert start > now


@pytest.mark.django_db
class TestRangeCount:
    def test_counts_nominal_training_nights(self, brigade, leave_window_service):
        summary = leave_window_service.range_count(
            brigade, datetime.date(2025, 1, 1), datetime.date(2025, 1, 31)
        )

        # Public holidays are not applied when counting a range
        assert summary.count == 4
        assert _dates(summary.dates) == [
            datetime.date(2025, 1, 6),
            datetime.date(2025, 1, 13),
            datetime.date(2025, 1, 20),
            datetime.date(2025, 1, 27),
        ]

    def test_range_is_inclusive(self, brigade, leave_window_service):
        summary = leave_window_service.range_count(
            brigade, datetime.date(2025, 1, 6), datetime.date(2025, 1, 6)
        )

        assert summary.count == 1

    def test_applies_cancellations_and_moves(self, brigade, training_event, leave_window_service):
        baker.make(EventException, event=training_event, exception_date=datetime.date(2025, 1, 13))
        # Moved out of the range
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 1, 20),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 2, 5),
        )
        # Moved into the range from outside it
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 2, 3),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 1, 30),
            notes="Brought forward",
        )

        summary = leave_window_service.range_count(
            brigade, datetime.date(2025, 1, 1), datetime.date(2025, 1, 31)
        )

        assert _dates(summary.dates) == [
            datetime.date(2025, 1, 6),
            datetime.date(2025, 1, 27),
            datetime.date(2025, 1, 30),
        ]
        moved_in = summary.dates[-1]
        assert moved_in.is_rescheduled is True
        assert moved_in.original_date == datetime.date(2025, 2, 3)
        assert moved_in.move_reason == "Brought forward"

    def test_count_never_decreases_as_range_widens(
        self, brigade, training_event, leave_window_service
    ):
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 1, 20),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 1, 23),
        )
        baker.make(
            EventException,
            event=training_event,
            exception_date=datetime.date(2025, 2, 10),
            is_cancelled=False,
            replacement_date=datetime.date(2025, 2, 1),
        )
        start = datetime.date(2025, 1, 1)

        counts = [
            leave_window_service.range_count(
                brigade, start, start + datetime.timedelta(days=offset)
            ).count
            for offset in range(70)
        ]

        assert counts == sorted(counts)

    def test_inverted_range_is_empty(self, brigade, leave_window_service):
        summary = leave_window_service.range_count(
            brigade, datetime.date(2025, 1, 31), datetime.date(2025, 1, 1)
        )

        assert summary.count == 0
        assert summary.dates == []
