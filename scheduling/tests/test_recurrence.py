import datetime
import zoneinfo

import pytest

from scheduling.holiday_shift import HolidayShiftPolicy
from scheduling.recurrence import RecurrenceExpander, RecurrenceRule, WeeklyStepper
from scheduling.services.dataclasses import (
    CancelledOccurrence,
    MovedOccurrence,
    RecurringEventDefinition,
)
from scheduling.tests.fakes import AUCKLAND_ANNIVERSARY_2025, FakeHolidayOracle


AUCKLAND = zoneinfo.ZoneInfo("Pacific/Auckland")


def _dt(year, month, day, hour=19, minute=0):
    return datetime.datetime(year, month, day, hour, minute, tzinfo=AUCKLAND)


def _monday_training(**kwargs):
    kwargs.setdefault("recurrence_rule", "FREQ=WEEKLY;BYDAY=MO")
    return RecurringEventDefinition(
        start=_dt(2025, 1, 6), end=_dt(2025, 1, 6, 21), title="Training Night", **kwargs
    )


class TestRecurrenceRuleParse:
    def test_parses_weekly_rule_with_prefix_and_unknown_keys(self):
        rule = RecurrenceRule.parse("RRULE:FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,WE;WKST=MO")

        assert rule is not None
        assert rule.frequency == "WEEKLY"
        assert rule.interval == 2
        assert rule.by_weekday == frozenset({1, 3})

    def test_until_accepts_date_and_datetime_forms(self):
        assert RecurrenceRule.parse("FREQ=DAILY;UNTIL=20250630").until == datetime.date(2025, 6, 30)
        assert RecurrenceRule.parse("FREQ=DAILY;UNTIL=2025-06-30").until == datetime.date(
            2025, 6, 30
        )
        assert RecurrenceRule.parse("FREQ=DAILY;UNTIL=20250630T235959Z").until == datetime.date(
            2025, 6, 30
        )

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "   ",
            None,
            "BYDAY=MO",
            "FREQ=HOURLY",
            "FREQ=WEEKLY;INTERVAL=0",
            "FREQ=WEEKLY;INTERVAL=two",
            "FREQ=MONTHLY;BYMONTHDAY=32",
            "FREQ=DAILY;COUNT=-1",
            "FREQ=DAILY;UNTIL=tomorrow",
        ],
    )
    def test_unsupported_rules_parse_to_none(self, value):
        assert RecurrenceRule.parse(value) is None

    def test_to_rrule_string(self):
        rule = RecurrenceRule.parse("FREQ=WEEKLY;BYDAY=WE,MO;COUNT=4;UNTIL=2025-03-01")

        assert rule.to_rrule_string() == "FREQ=WEEKLY;BYDAY=MO,WE;COUNT=4;UNTIL=20250301"


class TestWeeklyStepper:
    def test_moves_to_next_weekday_in_same_week(self):
        assert WeeklyStepper.next(_dt(2025, 1, 6), {1, 3}) == _dt(2025, 1, 8)

    def test_wraps_to_first_weekday_of_next_week(self):
        assert WeeklyStepper.next(_dt(2025, 1, 8), {1, 3}) == _dt(2025, 1, 13)

    def test_interval_skips_weeks_when_wrapping(self):
        assert WeeklyStepper.next(_dt(2025, 1, 8), {1, 3}, interval_weeks=2) == _dt(2025, 1, 20)

    def test_empty_set_steps_whole_weeks(self):
        assert WeeklyStepper.next(_dt(2025, 1, 6), set(), interval_weeks=3) == _dt(2025, 1, 27)

    def test_sunday_is_first_day_of_week(self):
        # Saturday -> Sunday stays in sequence when Sunday is code 0
        assert WeeklyStepper.next(_dt(2025, 1, 11), {0, 6}) == _dt(2025, 1, 12)


class TestRecurrenceExpander:
    @pytest.mark.parametrize("weeks", [1, 4, 8, 52])
    def test_weekly_monday_window_returns_one_occurrence_per_week(self, weeks):
        window_from = datetime.date(2025, 1, 6)
        window_to = window_from + datetime.timedelta(weeks=weeks, days=-1)

        occurrences = RecurrenceExpander().expand(_monday_training(), {}, window_from, window_to)

        assert len(occurrences) == weeks
        assert all(occurrence.start.weekday() == 0 for occurrence in occurrences)
        for previous, current in zip(occurrences, occurrences[1:], strict=False):
            assert current.start.date() - previous.start.date() == datetime.timedelta(days=7)

    def test_occurrences_keep_local_wall_time_across_dst(self):
        # New Zealand daylight saving ends on 2025-04-06
        occurrences = RecurrenceExpander().expand(
            _monday_training(), {}, datetime.date(2025, 3, 31), datetime.date(2025, 4, 13)
        )

        assert [occurrence.start.hour for occurrence in occurrences] == [19, 19]
        assert occurrences[0].end - occurrences[0].start == datetime.timedelta(hours=2)

    def test_cancellation_removes_only_that_occurrence(self):
        exceptions = {datetime.date(2025, 1, 20): CancelledOccurrence()}

        occurrences = RecurrenceExpander().expand(
            _monday_training(), exceptions, datetime.date(2025, 1, 6), datetime.date(2025, 2, 2)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 1, 6),
            datetime.date(2025, 1, 13),
            datetime.date(2025, 1, 27),
        ]

    def test_move_replaces_the_nominal_slot_with_one_occurrence(self):
        exceptions = {
            datetime.date(2025, 1, 13): MovedOccurrence(
                replacement_date=datetime.date(2025, 1, 15), notes="Hall booked"
            )
        }

        occurrences = RecurrenceExpander().expand(
            _monday_training(), exceptions, datetime.date(2025, 1, 6), datetime.date(2025, 1, 26)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 1, 6),
            datetime.date(2025, 1, 15),
            datetime.date(2025, 1, 20),
        ]
        moved = occurrences[1]
        assert moved.is_moved is True
        assert moved.start == _dt(2025, 1, 15)
        assert moved.move_reason == "Hall booked"
        # The exception date is recoverable from the moved occurrence
        assert moved.original_date == datetime.date(2025, 1, 13)
        assert moved.original_date in exceptions

    def test_occurrences_before_window_are_not_returned(self):
        occurrences = RecurrenceExpander().expand(
            _monday_training(), {}, datetime.date(2025, 2, 1), datetime.date(2025, 2, 16)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 2, 3),
            datetime.date(2025, 2, 10),
        ]

    def test_count_includes_steps_before_window(self):
        definition = _monday_training(recurrence_rule="FREQ=WEEKLY;BYDAY=MO;COUNT=3")

        occurrences = RecurrenceExpander().expand(
            definition, {}, datetime.date(2025, 1, 13), datetime.date(2025, 3, 31)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 1, 13),
            datetime.date(2025, 1, 20),
        ]

    def test_until_is_inclusive(self):
        definition = _monday_training(recurrence_rule="FREQ=WEEKLY;BYDAY=MO;UNTIL=20250120")

        occurrences = RecurrenceExpander().expand(
            definition, {}, datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)
        )

        assert occurrences[-1].date == datetime.date(2025, 1, 20)
        assert len(occurrences) == 3

    def test_monthly_by_month_day_clamps_to_month_end(self):
        definition = RecurringEventDefinition(
            start=_dt(2025, 1, 31), recurrence_rule="FREQ=MONTHLY;BYMONTHDAY=31;COUNT=4"
        )

        occurrences = RecurrenceExpander().expand(
            definition, {}, datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 1, 31),
            datetime.date(2025, 2, 28),
            datetime.date(2025, 3, 31),
            datetime.date(2025, 4, 30),
        ]

    def test_negative_month_day_counts_from_month_end(self):
        definition = RecurringEventDefinition(
            start=_dt(2025, 1, 31), recurrence_rule="FREQ=MONTHLY;BYMONTHDAY=-1;COUNT=2"
        )

        occurrences = RecurrenceExpander().expand(
            definition, {}, datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)
        )

        assert [occurrence.date for occurrence in occurrences] == [
            datetime.date(2025, 1, 31),
            datetime.date(2025, 2, 28),
        ]

    def test_yearly_and_daily_intervals(self):
        yearly = RecurringEventDefinition(
            start=_dt(2024, 2, 29, 10), recurrence_rule="FREQ=YEARLY;COUNT=2"
        )
        daily = RecurringEventDefinition(
            start=_dt(2025, 1, 1, 10), recurrence_rule="FREQ=DAILY;INTERVAL=3"
        )
        expander = RecurrenceExpander()

        assert [
            occurrence.date
            for occurrence in expander.expand(
                yearly, {}, datetime.date(2024, 1, 1), datetime.date(2026, 1, 1)
            )
        ] == [datetime.date(2024, 2, 29), datetime.date(2025, 2, 28)]
        assert [
            occurrence.date
            for occurrence in expander.expand(
                daily, {}, datetime.date(2025, 1, 1), datetime.date(2025, 1, 9)
            )
        ] == [datetime.date(2025, 1, 1), datetime.date(2025, 1, 4), datetime.date(2025, 1, 7)]

    def test_never_ending_rule_stops_at_iteration_ceiling(self):
        definition = RecurringEventDefinition(start=_dt(2025, 1, 1), recurrence_rule="FREQ=DAILY")

        occurrences = RecurrenceExpander(max_iterations=5).expand(
            definition, {}, datetime.date(2025, 1, 1), datetime.date(9999, 12, 31)
        )

        assert len(occurrences) == 5

    def test_iteration_ceiling_defaults_to_setting(self, settings):
        settings.SCHEDULING_MAX_EXPANSION_ITERATIONS = 7

        assert RecurrenceExpander().max_iterations == 7

    def test_unsupported_rule_expands_to_nothing(self):
        definition = _monday_training(recurrence_rule="FREQ=SECONDLY")

        assert (
            RecurrenceExpander().expand(
                definition, {}, datetime.date(2025, 1, 1), datetime.date(2025, 12, 31)
            )
            == []
        )

    def test_single_event_is_returned_only_inside_window(self):
        definition = RecurringEventDefinition(start=_dt(2025, 1, 6), recurrence_rule=None)
        expander = RecurrenceExpander()

        inside = expander.expand(definition, {}, datetime.date(2025, 1, 6), datetime.date(2025, 1, 6))
        outside = expander.expand(
            definition, {}, datetime.date(2025, 1, 7), datetime.date(2025, 1, 31)
        )

        assert [occurrence.start for occurrence in inside] == [_dt(2025, 1, 6)]
        assert outside == []

    def test_holiday_policy_applies_only_to_definitions_that_ask_for_it(self):
        policy = HolidayShiftPolicy(FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025))
        expander = RecurrenceExpander(occurrence_policy=policy)
        window = (datetime.date(2025, 1, 26), datetime.date(2025, 2, 1))

        adjusted = expander.expand(_monday_training(adjust_for_holidays=True), {}, *window)
        untouched = expander.expand(_monday_training(adjust_for_holidays=False), {}, *window)

        assert [occurrence.date for occurrence in adjusted] == [datetime.date(2025, 1, 28)]
        assert adjusted[0].holiday_shifted is True
        assert [occurrence.date for occurrence in untouched] == [datetime.date(2025, 1, 27)]

    def test_exception_takes_precedence_over_holiday_shift(self):
        oracle = FakeHolidayOracle(AUCKLAND_ANNIVERSARY_2025)
        expander = RecurrenceExpander(occurrence_policy=HolidayShiftPolicy(oracle))
        exceptions = {
            datetime.date(2025, 1, 27): MovedOccurrence(replacement_date=datetime.date(2025, 1, 30))
        }

        occurrences = expander.expand(
            _monday_training(adjust_for_holidays=True),
            exceptions,
            datetime.date(2025, 1, 26),
            datetime.date(2025, 2, 1),
        )

        assert [occurrence.date for occurrence in occurrences] == [datetime.date(2025, 1, 30)]
        assert occurrences[0].holiday_shifted is False
        assert oracle.lookups == []
