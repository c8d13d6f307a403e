from django.db.models.query import QuerySet


class BaseBrigadeModelQuerySet(QuerySet):
    """
    Base QuerySet for models owned by a brigade.
    """

    def filter_by_brigade(self, brigade_id: int):
        return self.filter(brigade_id=brigade_id)


class MemberQuerySet(BaseBrigadeModelQuerySet):
    def active(self):
        return self.filter(status="active")

    def officers(self):
        from brigades.constants import OFFICER_ROLES

        return self.filter(role__in=OFFICER_ROLES)
