from django.db.models import Q
from django.db.models.query import QuerySet

from public_holidays.constants import NATIONAL_REGION


class PublicHolidayQuerySet(QuerySet):
    def for_year(self, year: int):
        return self.filter(year=year)

    def for_region(self, region: str):
        """
        National holidays plus the anniversary day of the given region.
        """
        return self.filter(Q(region=NATIONAL_REGION) | Q(region=region))
