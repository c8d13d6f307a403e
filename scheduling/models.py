from django.core.exceptions import ValidationError
from django.db import models

from brigades.models import Brigade, BrigadeModel
from common.models import BaseModel
from scheduling.constants import EventType
from scheduling.date_utils import localize
from scheduling.managers import EventExceptionManager, EventManager
from scheduling.recurrence import RecurrenceRule
from scheduling.services.dataclasses import (
    CancelledOccurrence,
    MovedOccurrence,
    OccurrenceOverride,
    RecurringEventDefinition,
)


class Event(BrigadeModel):
    """
    A brigade calendar entry. With a recurrence rule it is a recurring
    definition, otherwise a single occurrence. Training rows are one per
    brigade per local date.
    """

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    all_day = models.BooleanField(default=False)
    recurrence_rule = models.CharField(
        max_length=255,
        blank=True,
        help_text="KEY=VALUE rule, e.g. 'FREQ=WEEKLY;BYDAY=MO'. Empty for a single event.",
    )
    event_type = models.CharField(max_length=20, choices=EventType.choices, default=EventType.OTHER)
    is_training = models.BooleanField(default=False)
    is_visible = models.BooleanField(default=True)
    adjust_for_holidays = models.BooleanField(
        default=False,
        help_text="Move occurrences falling on a public holiday to the following day.",
    )
    created_by = models.ForeignKey(
        "brigades.Member",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_events",
    )
    training_date = models.DateField(
        null=True,
        blank=True,
        editable=False,
        help_text="Local date of a training night, derived from the start time.",
    )

    objects: EventManager = EventManager()

    class Meta:
        ordering = ("start_time",)
        constraints = (
            models.UniqueConstraint(
                fields=("brigade", "training_date"),
                condition=models.Q(is_training=True),
                name="unique_training_per_brigade_date",
            ),
        )

    def __str__(self):
        return f"{self.title} ({self.start_time:%Y-%m-%d %H:%M})"

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence_rule)

    @property
    def parsed_rule(self) -> RecurrenceRule | None:
        return RecurrenceRule.parse(self.recurrence_rule)

    def clean(self):
        if self.recurrence_rule and self.parsed_rule is None:
            raise ValidationError({"recurrence_rule": "Recurrence rule is not supported."})
        if self.end_time and self.start_time and self.end_time < self.start_time:
            raise ValidationError({"end_time": "End time must be after start time."})

    def save(self, *args, **kwargs):
        if self.event_type == EventType.TRAINING:
            self.is_training = True
        if self.is_training and self.start_time:
            self.training_date = localize(self.start_time, self._brigade_tz()).date()
        else:
            self.training_date = None
        super().save(*args, **kwargs)

    def to_definition(self) -> RecurringEventDefinition:
        tz = self._brigade_tz()
        return RecurringEventDefinition(
            start=localize(self.start_time, tz),
            end=localize(self.end_time, tz) if self.end_time else None,
            recurrence_rule=self.recurrence_rule or None,
            title=self.title,
            description=self.description,
            location=self.location,
            event_id=self.pk,
            is_training=self.is_training,
            all_day=self.all_day,
            adjust_for_holidays=self.adjust_for_holidays,
        )

    def _brigade_tz(self):
        brigade: Brigade = self.brigade
        return brigade.tzinfo


class EventException(BaseModel):
    """
    Cancels or moves one nominal occurrence of an event.
    """

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="exceptions")
    exception_date = models.DateField(help_text="The nominal occurrence date being overridden")
    is_cancelled = models.BooleanField(default=True)
    replacement_date = models.DateField(
        null=True, blank=True, help_text="When set, the occurrence moves to this date"
    )
    notes = models.CharField(max_length=255, blank=True)

    objects: EventExceptionManager = EventExceptionManager()

    class Meta:
        ordering = ("exception_date",)
        constraints = (
            models.UniqueConstraint(
                fields=("event", "exception_date"), name="unique_exception_per_event_date"
            ),
        )

    def __str__(self):
        status = "moved" if self.replacement_date else "cancelled"
        return f"Exception for {self.event_id} on {self.exception_date} ({status})"

    def clean(self):
        if not self.is_cancelled and not self.replacement_date:
            raise ValidationError("An exception must either cancel or move the occurrence.")
        if self.replacement_date and self.replacement_date == self.exception_date:
            raise ValidationError(
                {"replacement_date": "Replacement date must differ from the exception date."}
            )

    def to_override(self) -> OccurrenceOverride | None:
        if self.replacement_date:
            return MovedOccurrence(replacement_date=self.replacement_date, notes=self.notes)
        if self.is_cancelled:
            return CancelledOccurrence(notes=self.notes)
        return None
