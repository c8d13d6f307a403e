from django.db import models

from common.models import BaseModel
from public_holidays.constants import NATIONAL_REGION, HolidaySource
from public_holidays.querysets import PublicHolidayQuerySet


class PublicHoliday(BaseModel):
    """
    A cached public holiday. `region` is either "national" or a region slug
    for anniversary days.
    """

    date = models.DateField()
    name = models.CharField(max_length=100)
    region = models.CharField(max_length=50, default=NATIONAL_REGION)
    year = models.PositiveSmallIntegerField(db_index=True)
    source = models.CharField(max_length=20, choices=HolidaySource.choices, default=HolidaySource.API)

    objects = PublicHolidayQuerySet.as_manager()

    class Meta:
        ordering = ("date",)
        constraints = (
            models.UniqueConstraint(fields=("date", "region"), name="unique_holiday_per_region"),
        )

    def __str__(self):
        return f"{self.name} ({self.date.isoformat()}, {self.region})"
