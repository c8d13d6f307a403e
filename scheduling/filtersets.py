from django_filters import rest_framework as filters

from scheduling.constants import EventType
from scheduling.models import Event


class EventFilterSet(filters.FilterSet):
    """
    FilterSet for Event model.
    """

    title = filters.CharFilter(
        field_name="title",
        lookup_expr="icontains",
        label="Filter by partial title match",
    )
    event_type = filters.ChoiceFilter(
        field_name="event_type",
        choices=EventType.choices,
        label="Filter by event type",
    )
    is_training = filters.BooleanFilter(field_name="is_training", label="Training nights only")
    start_time_range = filters.DateTimeFromToRangeFilter(
        field_name="start_time",
        label="Start time range",
    )

    class Meta:
        model = Event
        fields = ("title", "event_type", "is_training", "start_time_range")
