from django.db.models import TextChoices


class EventType(TextChoices):
    TRAINING = "training", "Training"
    MEETING = "meeting", "Meeting"
    SOCIAL = "social", "Social"
    FIREWISE = "firewise", "Firewise"
    OTHER = "other", "Other"


class RecurrenceFrequency(TextChoices):
    DAILY = "DAILY", "Daily"
    WEEKLY = "WEEKLY", "Weekly"
    MONTHLY = "MONTHLY", "Monthly"
    YEARLY = "YEARLY", "Yearly"


class RecurrenceWeekday(TextChoices):
    SUNDAY = "SU", "Sunday"
    MONDAY = "MO", "Monday"
    TUESDAY = "TU", "Tuesday"
    WEDNESDAY = "WE", "Wednesday"
    THURSDAY = "TH", "Thursday"
    FRIDAY = "FR", "Friday"
    SATURDAY = "SA", "Saturday"


# Weekday codes index the week Sunday first, SU=0 ... SA=6.
WEEKDAY_CODES: dict[str, int] = {
    code: index for index, code in enumerate(RecurrenceWeekday.values)
}

# Expansion of a single definition stops after this many cursor steps.
DEFAULT_MAX_EXPANSION_ITERATIONS = 1000

DEFAULT_TRAINING_MONTHS_AHEAD = 12

TRAINING_TITLE = "Training Night"
