from django.db.models import Manager

from brigades.managers import BaseBrigadeModelManager
from scheduling.querysets import EventExceptionQuerySet, EventQuerySet


class EventManager(BaseBrigadeModelManager):
    queryset_class = EventQuerySet

    def visible(self):
        return self.get_queryset().visible()

    def trainings(self):
        return self.get_queryset().trainings()


class EventExceptionManager(Manager):
    def get_queryset(self):
        return EventExceptionQuerySet(self.model, using=self._db)

    def for_trainings(self, brigade_id: int):
        return self.get_queryset().for_trainings(brigade_id)
