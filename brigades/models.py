import datetime

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from brigades.constants import (
    OFFICER_ROLES,
    HolidayRegion,
    MemberRank,
    MemberRole,
    MemberStatus,
    TrainingWeekday,
)
from brigades.managers import BaseBrigadeModelManager, MemberManager
from common.models import BaseModel
from scheduling.date_utils import get_timezone
from scheduling.services.dataclasses import TrainingSlot


class Brigade(BaseModel):
    """
    A volunteer fire brigade. Owns the weekly training night configuration.
    """

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=50, unique=True)
    timezone = models.CharField(max_length=50, default="Pacific/Auckland")
    training_weekday = models.PositiveSmallIntegerField(
        choices=TrainingWeekday.choices,
        default=TrainingWeekday.MONDAY,
        help_text="Day of week training nights are held on (0 = Sunday).",
    )
    training_time = models.TimeField(default=datetime.time(19, 0))
    training_duration_hours = models.PositiveSmallIntegerField(
        default=2, validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    training_location = models.CharField(max_length=200, blank=True)
    holiday_region = models.CharField(
        max_length=50, choices=HolidayRegion.choices, default=HolidayRegion.AUCKLAND
    )

    def __str__(self):
        return self.name

    @property
    def tzinfo(self) -> datetime.tzinfo:
        return get_timezone(self.timezone)

    @property
    def training_config(self) -> TrainingSlot:
        return TrainingSlot(
            weekday=self.training_weekday,
            time=self.training_time,
            duration=datetime.timedelta(hours=self.training_duration_hours),
            tz=self.tzinfo,
            region=self.holiday_region,
            location=self.training_location,
        )


class BrigadeModel(BaseModel):
    """
    Abstract base for models owned by a single brigade.
    """

    brigade = models.ForeignKey(
        Brigade, on_delete=models.CASCADE, related_name="%(class)ss"
    )

    objects: BaseBrigadeModelManager = BaseBrigadeModelManager()

    class Meta:
        abstract = True


class Member(BrigadeModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="member",
    )
    email = models.EmailField(max_length=255)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True)
    role = models.CharField(max_length=20, choices=MemberRole.choices, default=MemberRole.FIREFIGHTER)
    rank = models.CharField(max_length=20, choices=MemberRank.choices, blank=True)
    rank_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20, choices=MemberStatus.choices, default=MemberStatus.ACTIVE
    )

    objects: MemberManager = MemberManager()

    class Meta:
        constraints = (
            models.UniqueConstraint(
                fields=("brigade", "email"), name="unique_member_email_per_brigade"
            ),
        )

    def __str__(self):
        return self.name

    @property
    def is_officer(self) -> bool:
        return self.role in OFFICER_ROLES

    @property
    def is_chief(self) -> bool:
        return self.rank == MemberRank.CFO or self.role in (MemberRole.ADMIN, MemberRole.SUPERADMIN)
