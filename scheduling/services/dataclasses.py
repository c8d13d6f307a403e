import datetime
from dataclasses import dataclass
from dataclasses import field as dataclass_field

from scheduling.date_utils import day_name


@dataclass(frozen=True)
class CancelledOccurrence:
    """The nominal occurrence is suppressed."""

    notes: str = ""


@dataclass(frozen=True)
class MovedOccurrence:
    """The nominal occurrence happens on `replacement_date` instead."""

    replacement_date: datetime.date
    notes: str = ""


OccurrenceOverride = CancelledOccurrence | MovedOccurrence

# Overrides keyed by the nominal date they apply to.
ExceptionMap = dict[datetime.date, OccurrenceOverride]


@dataclass(frozen=True)
class RecurringEventDefinition:
    start: datetime.datetime
    end: datetime.datetime | None = None
    recurrence_rule: str | None = None
    title: str = ""
    description: str = ""
    location: str = ""
    event_id: int | None = None
    is_training: bool = False
    all_day: bool = False
    adjust_for_holidays: bool = False

    @property
    def duration(self) -> datetime.timedelta | None:
        if self.end is None:
            return None
        return self.end - self.start


@dataclass(frozen=True)
class Occurrence:
    start: datetime.datetime
    nominal_date: datetime.date
    end: datetime.datetime | None = None
    is_moved: bool = False
    original_date: datetime.date | None = None
    holiday_shifted: bool = False
    holiday_name: str | None = None
    title: str = ""
    location: str = ""
    event_id: int | None = None
    is_training: bool = False
    all_day: bool = False
    move_reason: str | None = None

    @property
    def date(self) -> datetime.date:
        return self.start.date()


@dataclass(frozen=True)
class HolidayShift:
    date: datetime.date
    holiday_name: str | None = None


@dataclass(frozen=True)
class TrainingSlot:
    """A brigade's canonical weekly training night."""

    weekday: int
    time: datetime.time
    duration: datetime.timedelta
    tz: datetime.tzinfo
    region: str | None = None
    location: str = ""


@dataclass(frozen=True)
class ResolvedTraining:
    """
    The effective date of one nominal training night once exceptions and the
    holiday shift are applied.
    """

    nominal_date: datetime.date
    date: datetime.date
    is_moved: bool = False
    holiday_shifted: bool = False
    holiday_name: str | None = None
    notes: str = ""

    @property
    def is_rescheduled(self) -> bool:
        return self.is_moved or self.holiday_shifted

    @property
    def original_date(self) -> datetime.date | None:
        return self.nominal_date if self.is_rescheduled else None

    @property
    def move_reason(self) -> str | None:
        if self.holiday_shifted:
            return self.holiday_name
        if self.is_moved:
            return self.notes or None
        return None


@dataclass(frozen=True)
class TrainingDate:
    date: datetime.date
    time: datetime.time
    is_rescheduled: bool = False
    original_date: datetime.date | None = None
    move_reason: str | None = None

    @property
    def day_name(self) -> str:
        return day_name(self.date)

    @classmethod
    def from_resolved(cls, resolved: ResolvedTraining, time: datetime.time) -> "TrainingDate":
        return cls(
            date=resolved.date,
            time=time,
            is_rescheduled=resolved.is_rescheduled,
            original_date=resolved.original_date,
            move_reason=resolved.move_reason,
        )


@dataclass
class MaterializationResult:
    created: int = 0
    skipped: int = 0
    adjusted: int = 0
    trainings: list[ResolvedTraining] = dataclass_field(default_factory=list)


@dataclass(frozen=True)
class TrainingRangeSummary:
    count: int
    dates: list[TrainingDate]
