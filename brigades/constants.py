from django.db import models


class MemberRole(models.TextChoices):
    FIREFIGHTER = "firefighter", "Firefighter"
    OFFICER = "officer", "Officer"
    ADMIN = "admin", "Admin"
    SUPERADMIN = "superadmin", "Superadmin"


class MemberRank(models.TextChoices):
    CFO = "CFO", "Chief Fire Officer"
    DCFO = "DCFO", "Deputy Chief Fire Officer"
    SSO = "SSO", "Senior Station Officer"
    SO = "SO", "Station Officer"
    SFF = "SFF", "Senior Firefighter"
    QFF = "QFF", "Qualified Firefighter"
    FF = "FF", "Firefighter"
    RCFF = "RCFF", "Recruit Firefighter"


class MemberStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"


class HolidayRegion(models.TextChoices):
    AUCKLAND = "auckland", "Auckland"
    WELLINGTON = "wellington", "Wellington"
    CANTERBURY = "canterbury", "Canterbury"
    OTAGO = "otago", "Otago"
    SOUTHLAND = "southland", "Southland"
    TARANAKI = "taranaki", "Taranaki"
    HAWKES_BAY = "hawkes-bay", "Hawke's Bay"
    MARLBOROUGH = "marlborough", "Marlborough"
    NELSON = "nelson", "Nelson"
    WESTLAND = "westland", "Westland"
    CHATHAM_ISLANDS = "chatham-islands", "Chatham Islands"


# Weekday numbering used for brigade training nights, Sunday first.
class TrainingWeekday(models.IntegerChoices):
    SUNDAY = 0, "Sunday"
    MONDAY = 1, "Monday"
    TUESDAY = 2, "Tuesday"
    WEDNESDAY = 3, "Wednesday"
    THURSDAY = 4, "Thursday"
    FRIDAY = 5, "Friday"
    SATURDAY = 6, "Saturday"


OFFICER_ROLES = (MemberRole.OFFICER, MemberRole.ADMIN, MemberRole.SUPERADMIN)
