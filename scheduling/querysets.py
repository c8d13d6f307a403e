import datetime

from django.db.models import Q
from django.db.models.query import QuerySet

from brigades.querysets import BaseBrigadeModelQuerySet


class EventQuerySet(BaseBrigadeModelQuerySet):
    def visible(self):
        return self.filter(is_visible=True)

    def trainings(self):
        return self.filter(is_training=True)

    def recurring(self):
        return self.exclude(recurrence_rule="")


class EventExceptionQuerySet(QuerySet):
    def filter_by_brigade(self, brigade_id: int):
        return self.filter(event__brigade_id=brigade_id)

    def for_trainings(self, brigade_id: int):
        return self.filter_by_brigade(brigade_id).filter(event__is_training=True)

    def touching_range(
        self, start_date: datetime.date | None = None, end_date: datetime.date | None = None
    ):
        """
        Exceptions whose nominal date or replacement date falls inside the
        inclusive range. Open ends are unbounded.
        """
        if start_date is None and end_date is None:
            return self.all()

        nominal = Q()
        replacement = Q(replacement_date__isnull=False)
        if start_date is not None:
            nominal &= Q(exception_date__gte=start_date)
            replacement &= Q(replacement_date__gte=start_date)
        if end_date is not None:
            nominal &= Q(exception_date__lte=end_date)
            replacement &= Q(replacement_date__lte=end_date)
        return self.filter(nominal | replacement)
