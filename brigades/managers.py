from django.db.models import Manager

from brigades.querysets import BaseBrigadeModelQuerySet, MemberQuerySet
from common.exceptions import BrigadeRequiredError


class BaseBrigadeModelManager(Manager):
    """
    Base manager for models that belong to a brigade.
    """

    queryset_class = BaseBrigadeModelQuerySet

    def get_queryset(self):
        return self.queryset_class(self.model, using=self._db)

    def filter_by_brigade(self, brigade_id: int):
        """
        Filters the queryset by the specified brigade ID.
        :param brigade_id: ID of the brigade to filter by.
        :return: Filtered queryset.
        """
        return self.get_queryset().filter_by_brigade(brigade_id)

    def create(self, **kwargs):
        """
        Override the create method to ensure every instance is scoped to a brigade.
        """
        if "brigade_id" not in kwargs and "brigade" not in kwargs:
            raise BrigadeRequiredError()
        return super().create(**kwargs)


class MemberManager(BaseBrigadeModelManager):
    queryset_class = MemberQuerySet

    def active(self):
        return self.get_queryset().active()

    def officers(self):
        return self.get_queryset().officers()
