"""Recurrence expansion for brigade events.

Supports a small practical subset of RRULE: FREQ (DAILY, WEEKLY, MONTHLY,
YEARLY), INTERVAL, BYDAY, BYMONTHDAY, COUNT and UNTIL. Rules outside that
subset parse to ``None`` and expand to no occurrences.

The first occurrence is always the definition's start. COUNT counts every
cursor step, including ones outside the requested window or suppressed by an
exception.
"""

import calendar
import datetime
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Protocol, Self

from django.conf import settings

from dateutil.relativedelta import relativedelta

from scheduling.constants import (
    DEFAULT_MAX_EXPANSION_ITERATIONS,
    WEEKDAY_CODES,
    RecurrenceFrequency,
)
from scheduling.date_utils import sunday_based_weekday
from scheduling.services.dataclasses import (
    CancelledOccurrence,
    ExceptionMap,
    MovedOccurrence,
    Occurrence,
    RecurringEventDefinition,
)


logger = logging.getLogger(__name__)

RRULE_PREFIX = re.compile(r"^RRULE:", re.IGNORECASE)
UNTIL_FORMATS = ("%Y%m%d", "%Y-%m-%d")


def _parse_until(value: str) -> datetime.date | None:
    value = value.strip()
    # Date-times such as 20250630T235959Z keep only their date part
    date_part = value.split("T", 1)[0]
    for date_format in UNTIL_FORMATS:
        try:
            return datetime.datetime.strptime(date_part, date_format).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def _parse_int(value: str) -> int | None:
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number


@dataclass(frozen=True)
class RecurrenceRule:
    frequency: str
    interval: int = 1
    by_weekday: frozenset[int] = frozenset()
    by_month_day: int | None = None
    count: int | None = None
    until: datetime.date | None = None

    @classmethod
    def parse(cls, rule: str | None) -> Self | None:
        """
        Parses a ``KEY=VALUE;KEY=VALUE`` rule string. Returns ``None`` for an
        empty rule, a missing or unsupported FREQ, or a malformed value.
        Unknown keys are ignored.
        """
        if not rule or not rule.strip():
            return None

        parts: dict[str, str] = {}
        for part in RRULE_PREFIX.sub("", rule.strip()).split(";"):
            if "=" not in part:
                continue
            key, value = part.split("=", 1)
            parts[key.strip().upper()] = value.strip()

        frequency = parts.get("FREQ", "").upper()
        if frequency not in RecurrenceFrequency.values:
            return None

        interval = 1
        if "INTERVAL" in parts:
            interval = _parse_int(parts["INTERVAL"])
            if interval is None or interval < 1:
                return None

        by_weekday: frozenset[int] = frozenset()
        if "BYDAY" in parts:
            by_weekday = frozenset(
                WEEKDAY_CODES[code.strip().upper()]
                for code in parts["BYDAY"].split(",")
                if code.strip().upper() in WEEKDAY_CODES
            )

        by_month_day = None
        if "BYMONTHDAY" in parts:
            by_month_day = _parse_int(parts["BYMONTHDAY"])
            if by_month_day is None or by_month_day == 0 or abs(by_month_day) > 31:
                return None

        count = None
        if "COUNT" in parts:
            count = _parse_int(parts["COUNT"])
            if count is None or count < 0:
                return None

        until = None
        if "UNTIL" in parts:
            until = _parse_until(parts["UNTIL"])
            if until is None:
                return None

        return cls(
            frequency=frequency,
            interval=interval,
            by_weekday=by_weekday,
            by_month_day=by_month_day,
            count=count,
            until=until,
        )

    def to_rrule_string(self) -> str:
        """
        Serializes the rule back to the ``KEY=VALUE`` grammar.
        """
        codes = {index: code for code, index in WEEKDAY_CODES.items()}
        parts = [f"FREQ={self.frequency}"]
        if self.interval != 1:
            parts.append(f"INTERVAL={self.interval}")
        if self.by_weekday:
            parts.append("BYDAY=" + ",".join(codes[day] for day in sorted(self.by_weekday)))
        if self.by_month_day is not None:
            parts.append(f"BYMONTHDAY={self.by_month_day}")
        if self.count is not None:
            parts.append(f"COUNT={self.count}")
        if self.until is not None:
            parts.append(f"UNTIL={self.until.strftime('%Y%m%d')}")
        return ";".join(parts)


class WeeklyStepper:
    """
    Advances a weekly cursor through a set of weekday codes (Sunday = 0).
    """

    @staticmethod
    def next(
        current: datetime.datetime, weekday_set: Iterable[int], interval_weeks: int = 1
    ) -> datetime.datetime:
        weekdays = sorted(set(weekday_set))
        if not weekdays:
            return current + datetime.timedelta(weeks=interval_weeks)

        current_weekday = sunday_based_weekday(current.date())
        for weekday in weekdays:
            if weekday > current_weekday:
                return current + datetime.timedelta(days=weekday - current_weekday)

        days = 7 - current_weekday + weekdays[0] + (interval_weeks - 1) * 7
        return current + datetime.timedelta(days=days)


class OccurrencePolicy(Protocol):
    def apply(self, occurrence: Occurrence) -> Occurrence: ...


def _month_day(year: int, month: int, by_month_day: int) -> int:
    last_day = calendar.monthrange(year, month)[1]
    if by_month_day < 0:
        return max(1, last_day + by_month_day + 1)
    return min(by_month_day, last_day)


class RecurrenceExpander:
    """
    Expands a definition into concrete occurrences inside a date window.

    Exceptions are applied to the nominal cursor date. An optional occurrence
    policy (the holiday shift) is applied to occurrences of definitions that
    ask for it, and only when no exception matched.
    """

    def __init__(
        self,
        max_iterations: int | None = None,
        occurrence_policy: OccurrencePolicy | None = None,
    ):
        if max_iterations is None:
            max_iterations = getattr(
                settings, "SCHEDULING_MAX_EXPANSION_ITERATIONS", DEFAULT_MAX_EXPANSION_ITERATIONS
            )
        self.max_iterations = max_iterations
        self.occurrence_policy = occurrence_policy

    def expand(
        self,
        definition: RecurringEventDefinition,
        exceptions: ExceptionMap | None,
        window_from: datetime.date,
        window_to: datetime.date,
    ) -> list[Occurrence]:
        exceptions = exceptions or {}

        if not definition.recurrence_rule:
            if window_from <= definition.start.date() <= window_to:
                return [self._apply_policy(definition, self._occurrence(definition, definition.start))]
            return []

        rule = RecurrenceRule.parse(definition.recurrence_rule)
        if rule is None:
            logger.debug(
                "Ignoring unsupported recurrence rule %r for event %s",
                definition.recurrence_rule,
                definition.event_id,
            )
            return []

        occurrences = []
        for cursor in self.iter_cursor(definition.start, rule, window_to):
            cursor_date = cursor.date()
            if cursor_date < window_from:
                continue

            override = exceptions.get(cursor_date)
            if isinstance(override, CancelledOccurrence):
                continue
            if isinstance(override, MovedOccurrence):
                occurrences.append(self._moved_occurrence(definition, cursor, override))
                continue
            occurrences.append(self._apply_policy(definition, self._occurrence(definition, cursor)))

        return sorted(occurrences, key=lambda occurrence: occurrence.start)

    def iter_cursor(
        self, start: datetime.datetime, rule: RecurrenceRule, window_to: datetime.date
    ):
        """
        Yields the nominal occurrence datetimes of `rule` from `start` up to
        `window_to`, UNTIL or COUNT, whichever comes first. Stops silently after
        `max_iterations` steps.
        """
        cursor = start
        step = 0
        while step < self.max_iterations:
            cursor_date = cursor.date()
            if cursor_date > window_to:
                return
            if rule.until is not None and cursor_date > rule.until:
                return
            if rule.count is not None and step >= rule.count:
                return

            yield cursor

            step += 1
            cursor = self._advance(start, cursor, rule, step)

    def _advance(
        self,
        start: datetime.datetime,
        cursor: datetime.datetime,
        rule: RecurrenceRule,
        step: int,
    ) -> datetime.datetime:
        if rule.frequency == RecurrenceFrequency.DAILY:
            return cursor + datetime.timedelta(days=rule.interval)

        if rule.frequency == RecurrenceFrequency.WEEKLY:
            return WeeklyStepper.next(cursor, rule.by_weekday, rule.interval)

        if rule.frequency == RecurrenceFrequency.MONTHLY:
            # Anchored to the start so a clamped day (31st -> 30th) doesn't drift
            advanced = start + relativedelta(months=step * rule.interval)
            if rule.by_month_day is not None:
                advanced = advanced.replace(
                    day=_month_day(advanced.year, advanced.month, rule.by_month_day)
                )
            return advanced

        return start + relativedelta(years=step * rule.interval)

    def _occurrence(
        self, definition: RecurringEventDefinition, start: datetime.datetime
    ) -> Occurrence:
        duration = definition.duration
        return Occurrence(
            start=start,
            end=start + duration if duration is not None else None,
            nominal_date=start.date(),
            title=definition.title,
            location=definition.location,
            event_id=definition.event_id,
            is_training=definition.is_training,
            all_day=definition.all_day,
        )

    def _moved_occurrence(
        self,
        definition: RecurringEventDefinition,
        cursor: datetime.datetime,
        override: MovedOccurrence,
    ) -> Occurrence:
        replacement = override.replacement_date
        start = cursor.replace(year=replacement.year, month=replacement.month, day=replacement.day)
        return replace(
            self._occurrence(definition, start),
            nominal_date=cursor.date(),
            is_moved=True,
            original_date=cursor.date(),
            move_reason=override.notes or None,
        )

    def _apply_policy(
        self, definition: RecurringEventDefinition, occurrence: Occurrence
    ) -> Occurrence:
        if self.occurrence_policy is None or not definition.adjust_for_holidays:
            return occurrence
        return self.occurrence_policy.apply(occurrence)
